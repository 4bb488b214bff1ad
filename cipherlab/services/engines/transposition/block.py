import numpy as np

from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.engines.transposition.grid import GridTranspositionEngine


@EngineRegistry.register
class BlockEngine(GridTranspositionEngine):
    """
    Block transposition cipher engine.

    The text is cut into blocks of key length and the letters of every block
    are permuted the same way. Equivalent to a columnar transposition whose
    ciphertext is read back row by row.
    """

    name = "Block Transposition Cipher"
    cipher_type = CipherType.BLOCK
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher that applies one fixed permutation to each "
        "block of letters; the keyword's alphabetical order gives the permutation."
    )

    @staticmethod
    def get_index(rows: np.ndarray, col: int, key_length: int, num_rows: int) -> np.ndarray:
        return rows * key_length + col

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Block transposition with key '{key}'. Every block of letters was "
            f"rearranged by the same column order."
        )
