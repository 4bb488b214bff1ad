from typing import ClassVar

from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.polyalphabetic.tableau import ShiftStreamEngine, Tableau
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.optimization.shift_stream import EffectiveShift, autokey_shift


@EngineRegistry.register
class AutokeyEngine(ShiftStreamEngine):
    """
    Autokey cipher engine.

    The Autokey cipher is a variant of Vigenère where the key is extended
    using the plaintext itself. After the initial keyword, subsequent key
    characters come from the plaintext being encrypted.

    This makes the effective key as long as the message, eliminating
    the periodic weakness of standard Vigenère.
    """

    name = "Autokey Cipher"
    cipher_type = CipherType.AUTOKEY
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where the key is extended using the plaintext. "
        "After the initial primer/keyword, the plaintext letters become the key. "
        "Stronger than Vigenère due to non-repeating key."
    )

    effective_shift: ClassVar[EffectiveShift] = staticmethod(autokey_shift)

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.vigenere(size)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Autokey cipher with primer '{key}'. "
            f"After the first {len(key)} letters, each letter was decrypted with "
            f"the plaintext letter {len(key)} positions earlier as its key."
        )
