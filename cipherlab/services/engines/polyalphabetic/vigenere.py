from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.polyalphabetic.tableau import ShiftStreamEngine, Tableau
from cipherlab.services.engines.registry import EngineRegistry


@EngineRegistry.register
class VigenereEngine(ShiftStreamEngine):
    """
    Vigenère cipher engine.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. Each letter of the keyword represents a
    different Caesar shift applied in sequence.

    Breaking involves trying every key length and improving the key one
    column at a time until the quadgram score stops rising.
    """

    name = "Vigenère Cipher"
    cipher_type = CipherType.VIGENERE
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.vigenere(size)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Vigenère cipher with keyword '{key}' (length {len(key)}). "
            f"Each letter was shifted back by the value of the keyword letter "
            f"above it, the keyword repeating across the message."
        )
