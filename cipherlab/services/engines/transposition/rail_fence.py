import random
from typing import Any

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, RawKey
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.optimization.exhaustive import permutation_solve


def zigzag_rows(length: int, rails: int) -> np.ndarray:
    """Rail of every position when ``length`` letters zigzag over ``rails`` rows."""
    cycle = 2 * (rails - 1)
    phase = np.arange(length) % cycle
    return np.where(phase < rails, phase, cycle - phase)


def encrypt_indexes(rails: int, length: int) -> np.ndarray:
    """Plaintext index of every ciphertext position: rails read top to bottom."""
    return np.argsort(zigzag_rows(length, rails), kind="stable")


def decrypt_indexes(rails: int, length: int) -> np.ndarray:
    """Ciphertext index of every plaintext position."""
    return np.argsort(encrypt_indexes(rails, length), kind="stable")


@EngineRegistry.register
class RailFenceEngine(CipherEngine[int]):
    """
    Rail Fence cipher engine.

    The Rail Fence cipher writes the plaintext in a zigzag pattern across
    a number of "rails" (rows), then reads off each rail in order to
    produce the ciphertext.

    Example with 3 rails:
    Plaintext: WEAREDISCOVEREDFLEEATONCE

    W . . . E . . . C . . . R . . . L . . . T . . . E
    . E . R . D . S . O . E . E . F . E . A . O . C .
    . . A . . . I . . . V . . . D . . . E . . . N . .

    Read off rows: WECRLTE + ERDSOEEFEAOC + AIVDEN

    The number of rails is the whole key, so every rail count is tried.
    """

    name = "Rail Fence Cipher"
    cipher_type = CipherType.RAIL_FENCE
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher that writes plaintext in a zigzag pattern "
        "across multiple 'rails' (rows), then reads each rail in sequence. "
        "The number of rails is the key."
    )

    def parse_key(self, key: RawKey, language: LanguageModel) -> int:
        if isinstance(key, dict):
            key = key.get("rails", key.get("key", 0))
        try:
            rails = int(key)
        except (TypeError, ValueError):
            raise InvalidKeyError(self.name, key, "rails must be an integer") from None
        if rails < 2:
            raise InvalidKeyError(self.name, key, "at least 2 rails are needed")
        return rails

    def format_key(self, key: int, language: LanguageModel) -> str:
        return str(key)

    def encrypt_codes(self, codes: np.ndarray, key: int, language: LanguageModel) -> np.ndarray:
        return codes[encrypt_indexes(key, codes.size)]

    def decrypt_codes(self, codes: np.ndarray, key: int, language: LanguageModel) -> np.ndarray:
        return codes[decrypt_indexes(key, codes.size)]

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> int:
        max_rails = min(self._option(options, "railfence_max_rails"), codes.size)
        rails = permutation_solve(codes, language, decrypt_indexes, range(2, max_rails + 1))
        return rails if rails is not None else 2

    def random_key(self, language: LanguageModel) -> int:
        return random.randint(2, 10)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Rail Fence cipher with {key} rails. "
            f"The ciphertext was split into {key} rails, which were read back "
            f"in a zigzag pattern."
        )
