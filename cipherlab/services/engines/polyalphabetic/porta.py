from typing import ClassVar

from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.polyalphabetic.tableau import ShiftStreamEngine, Tableau
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class PortaEngine(ShiftStreamEngine):
    """
    Porta cipher engine.

    Pairs of key letters share one row of a reciprocal square, so the search
    only tries every second shift.
    """

    name = "Porta Cipher"
    cipher_type = CipherType.PORTA
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A reciprocal keyword cipher where each pair of key letters selects one "
        "of half as many alphabets as there are letters."
    )

    shift_step: ClassVar[int] = 2

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.porta(size)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Porta cipher with keyword '{key}' (length {len(key)}). "
            f"Letters of the first half of the alphabet were exchanged with letters "
            f"of the second half, the pairing sliding with each keyword letter."
        )
