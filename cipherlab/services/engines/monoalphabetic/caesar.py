import random
from typing import Any

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, RawKey
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.optimization.exhaustive import caesar_solve


@EngineRegistry.register
class CaesarEngine(CipherEngine[int]):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. With only one key per letter of the alphabet, it is
    broken by trying all shifts and scoring each result.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    def parse_key(self, key: RawKey, language: LanguageModel) -> int:
        """Parse key to integer shift value."""
        if isinstance(key, dict):
            key = key.get("shift", key.get("key", 0))
        try:
            return int(key) % language.length
        except (TypeError, ValueError):
            raise InvalidKeyError(self.name, key, "shift must be an integer") from None

    def format_key(self, key: int, language: LanguageModel) -> str:
        return str(key)

    def encrypt_codes(self, codes: np.ndarray, key: int, language: LanguageModel) -> np.ndarray:
        return (codes + key) % language.length

    def decrypt_codes(self, codes: np.ndarray, key: int, language: LanguageModel) -> np.ndarray:
        return (codes - key) % language.length

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> int:
        return caesar_solve(codes, language)

    def random_key(self, language: LanguageModel) -> int:
        """Generate a random shift, excluding 0."""
        return random.randint(1, language.length - 1)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Caesar cipher with shift of {key}. "
            f"Each letter was shifted back {key} positions in the alphabet. "
            f"For example, the first ciphertext letter '{ciphertext[0] if ciphertext else 'N/A'}' "
            f"becomes '{plaintext[0] if plaintext else 'N/A'}'."
        )
