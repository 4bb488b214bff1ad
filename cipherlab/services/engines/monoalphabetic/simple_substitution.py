import random
from typing import Any

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError, InvalidOptionError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, RawKey, keyword_codes
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.math_utils import fill_alphabet_from_start, invert
from cipherlab.services.optimization.hill_climbing import SubstitutionHillClimber


@EngineRegistry.register
class SimpleSubstitutionEngine(CipherEngine[list[int]]):
    """
    Simple substitution cipher engine.

    Each letter maps to a fixed letter of a mixed alphabet. The key space is
    far too large for brute force, so the key is recovered with random
    restart hill climbing on quadgram scores.
    """

    name = "Simple Substitution"
    cipher_type = CipherType.SIMPLE_SUBSTITUTION
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A monoalphabetic cipher where each letter is replaced by the letter at "
        "the same position of a mixed alphabet."
    )

    def parse_key(self, key: RawKey, language: LanguageModel) -> list[int]:
        """
        Parse a key to a cipher alphabet, ``alphabet[plain] = cipher``.

        A keyword is expanded by appending the unused letters in order, so a
        full mixed alphabet passes through unchanged.
        """
        codes = keyword_codes(key, language, self.name)
        if len(codes) > language.length:
            raise InvalidKeyError(self.name, key, "key is longer than the alphabet")
        if len(codes) == language.length and len(set(codes)) != len(codes):
            raise InvalidKeyError(self.name, key, "full alphabet key repeats a letter")
        return fill_alphabet_from_start(codes, language.length)

    def format_key(self, key: list[int], language: LanguageModel) -> str:
        return language.codes_to_string(key)

    def encrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        return np.asarray(key, dtype=np.int64)[codes]

    def decrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        return np.asarray(invert(key), dtype=np.int64)[codes]

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> list[int]:
        seed = options.get("seed")
        if seed is not None and not isinstance(seed, (int, float, str)):
            raise InvalidOptionError("seed", seed, "int")
        climber = SubstitutionHillClimber(
            ciphertext=codes,
            language=language,
            max_restarts=self._option(options, "substitution_max_restarts"),
            tolerance=self._option(options, "substitution_tolerance"),
            max_repetitions=self._option(options, "substitution_max_repetitions"),
            rng=random.Random(seed) if seed is not None else None,
        )
        return climber.optimize().key

    def random_key(self, language: LanguageModel) -> list[int]:
        alphabet = list(range(language.length))
        random.shuffle(alphabet)
        return alphabet

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Simple substitution with cipher alphabet {key}. "
            f"The n-th plaintext letter of the alphabet is written as the n-th letter of the key."
        )
