import numpy as np

from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.engines.transposition.grid import GridTranspositionEngine


@EngineRegistry.register
class ColumnarEngine(GridTranspositionEngine):
    """
    Columnar Transposition cipher engine.

    The plaintext is written into a grid row by row, then the columns
    are read out in an order determined by a keyword.

    Example with keyword "ZEBRA" (ranks: Z=4, E=2, B=1, R=3, A=0):

    Key:    Z E B R A
    Order:  4 2 1 3 0
            ─────────
            W E A R E
            D I S C O
            V E R E D

    Read columns in rank order: EOD, ASR, EIE, RCE, WDV

    Letters of an incomplete last row are left where they are.
    """

    name = "Columnar Transposition Cipher"
    cipher_type = CipherType.COLUMNAR
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher where plaintext is written into a grid "
        "by rows, then read out by columns in an order determined by "
        "a keyword. The keyword's alphabetical order determines column sequence."
    )

    @staticmethod
    def get_index(rows: np.ndarray, col: int, key_length: int, num_rows: int) -> np.ndarray:
        return col * num_rows + rows

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Columnar transposition with key '{key}'. "
            f"The ciphertext was cut into columns, which were put back "
            f"in key order and read row by row."
        )
