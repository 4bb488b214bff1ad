from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.polyalphabetic.tableau import ShiftStreamEngine, Tableau
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class BellasoEngine(ShiftStreamEngine):
    """
    Bellaso cipher engine.

    Uses Bellaso's reciprocal square, where each row exchanges the two halves
    of the alphabet. Needs an alphabet of even length.
    """

    name = "Bellaso Cipher"
    cipher_type = CipherType.BELLASO
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A reciprocal keyword cipher from 1553 whose square swaps the two halves "
        "of the alphabet, the second half sliding with each key letter."
    )

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.bellaso(size)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Bellaso cipher with keyword '{key}' (length {len(key)}). "
            f"Each keyword letter selects a row of the reciprocal square, "
            f"so the same row both encrypts and decrypts."
        )
