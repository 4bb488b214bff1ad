from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.polyalphabetic.tableau import ShiftStreamEngine, Tableau
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class BeaufortEngine(ShiftStreamEngine):
    """
    Beaufort cipher engine.

    Similar to Vigenère but uses subtraction: C = (K - P) mod m.
    The Beaufort cipher is reciprocal, encryption and decryption are the same
    operation.
    """

    name = "Beaufort Cipher"
    cipher_type = CipherType.BEAUFORT
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A reciprocal polyalphabetic cipher where C = K - P. Unlike Vigenère, "
        "encryption and decryption use the same operation."
    )

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.beaufort(size)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Beaufort cipher with keyword '{key}' (length {len(key)}). "
            f"Each letter was recovered as P = K - C, the same formula that encrypted it."
        )
