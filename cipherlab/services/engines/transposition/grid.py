"""
Grid transpositions keyed by a column order.

The text is written into rows of ``key_length`` letters. Letters past the
last complete row are not transposed and keep their positions.
"""

import random
from abc import abstractmethod
from typing import Any

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.services.engines.base import CipherEngine, RawKey, keyword_codes
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.math_utils import keyword_to_ranks
from cipherlab.services.optimization.transposition import transposition_solve


class GridTranspositionEngine(CipherEngine[list[int]]):
    """
    Base for transpositions whose key is a column order.

    ``key[col]`` is the ciphertext column holding plaintext column ``col``.
    Subclasses define where a column sits in the ciphertext.
    """

    @staticmethod
    @abstractmethod
    def get_index(rows: np.ndarray, col: int, key_length: int, num_rows: int) -> np.ndarray:
        """Ciphertext indexes of column ``col`` at the given ``rows``."""

    @classmethod
    def decrypt_indexes(cls, length: int, key: list[int]) -> np.ndarray:
        """
        Ciphertext index of every plaintext position.

        Args:
            length: Number of letters
            key: Column order

        Returns:
            Array ``idx`` with ``plaintext = ciphertext[idx]``
        """
        key_length = len(key)
        num_rows = length // key_length
        indexes = np.arange(length)
        rows = np.arange(num_rows)
        for col in range(key_length):
            indexes[rows * key_length + col] = cls.get_index(rows, key[col], key_length, num_rows)
        return indexes

    def parse_key(self, key: RawKey, language: LanguageModel) -> list[int]:
        """
        Parse a keyword or an explicit column order.

        A keyword such as ``"ZEBRA"`` is ranked alphabetically, ties left to
        right. An explicit order is written ``"2,0,1"`` or given as
        ``{"order": [2, 0, 1]}`` and must be a permutation.
        """
        order: Any = None
        if isinstance(key, dict) and "order" in key:
            order = key["order"]
        elif isinstance(key, int) or (isinstance(key, str) and key.strip()[:1].isdigit()):
            order = str(key).replace(" ", "").split(",")

        if order is None:
            return keyword_to_ranks(keyword_codes(key, language, self.name))

        try:
            ranks = [int(value) for value in order]
        except (TypeError, ValueError):
            raise InvalidKeyError(self.name, key, "column order must be integers") from None
        if sorted(ranks) != list(range(len(ranks))):
            raise InvalidKeyError(self.name, key, "column order must be a permutation of 0..n-1")
        return ranks

    def format_key(self, key: list[int], language: LanguageModel) -> str:
        if len(key) <= language.length:
            return language.codes_to_string(key)
        return ",".join(str(rank) for rank in key)

    def encrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        result = np.empty_like(codes)
        result[self.decrypt_indexes(codes.size, key)] = codes
        return result

    def decrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        return codes[self.decrypt_indexes(codes.size, key)]

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> list[int]:
        key = transposition_solve(
            codes,
            language,
            self.decrypt_indexes,
            self.get_index,
            min_key_length=self._option(options, "transposition_min_key_length"),
            max_key_length=self._option(options, "transposition_max_key_length"),
        )
        return key or [0]

    def random_key(self, language: LanguageModel) -> list[int]:
        key = list(range(random.randint(3, 8)))
        random.shuffle(key)
        return key
