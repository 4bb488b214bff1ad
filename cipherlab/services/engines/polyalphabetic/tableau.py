"""
Tableaus of the Vigenère family and the engine they share.

A tableau has one row per key letter; ``encrypt_rows[k][p]`` is the cipher
letter for plain letter ``p`` under key letter ``k``. Decryption rows are the
inverse permutation of every row.
"""

import random
from typing import Any, ClassVar

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.services.engines.base import CipherEngine, RawKey, keyword_codes
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.math_utils import invert
from cipherlab.services.optimization.shift_stream import (
    EffectiveShift,
    ShiftStreamSolver,
    periodic_shift,
)


class Tableau:
    """Square lookup table mapping (key letter, letter) to a letter."""

    def __init__(self, encrypt_rows: list[list[int]]):
        self.encrypt_rows = encrypt_rows
        self.decrypt_rows = [invert(row) for row in encrypt_rows]

    @property
    def size(self) -> int:
        return len(self.encrypt_rows)

    def encrypt(self, key_cp: int, cp: int) -> int:
        return self.encrypt_rows[key_cp][cp]

    def decrypt(self, key_cp: int, cp: int) -> int:
        return self.decrypt_rows[key_cp][cp]

    @classmethod
    def vigenere(cls, size: int) -> "Tableau":
        """Row ``k`` shifts by ``k``: C = P + K."""
        return cls([[(p + k) % size for p in range(size)] for k in range(size)])

    @classmethod
    def beaufort(cls, size: int) -> "Tableau":
        """Reciprocal square: C = K - P, so every row is its own inverse."""
        return cls([[(k - p) % size for p in range(size)] for k in range(size)])

    @classmethod
    def bellaso(cls, size: int) -> "Tableau":
        """
        Bellaso's reciprocal square generalised to any even alphabet.

        Row ``r`` of the first half swaps the two halves of the alphabet,
        sliding the second half by ``r``; the rows of the second half are
        the first half rows read backwards.
        """
        half = _half(size)
        rows = [[0] * size for _ in range(size)]
        for r in range(half):
            for j in range(half):
                rows[r][j] = half + (j - r) % half
                rows[r][half + j] = (j + r) % half
        for r in range(half):
            for col in range(size):
                rows[r + half][size - 1 - col] = rows[r][col]
        return cls(rows)

    @classmethod
    def porta(cls, size: int) -> "Tableau":
        """
        Porta's reciprocal square.

        Only ``size / 2`` rows are distinct; key letters ``2r`` and ``2r + 1``
        both select row ``r``.
        """
        half = _half(size)
        distinct = []
        for r in range(half):
            row = [0] * size
            for j in range(half):
                row[j] = half + (j + r) % half
                row[half + j] = (j - r) % half
            distinct.append(row)
        return cls([distinct[k // 2] for k in range(size)])


def _half(size: int) -> int:
    if size % 2:
        raise ValueError(f"Reciprocal tableau needs an even alphabet length, got {size}")
    return size // 2


class ShiftStreamEngine(CipherEngine[list[int]]):
    """
    Keyword cipher driven by a tableau.

    Subclasses pick the square, the shift strategy and the shift step; the
    key is one key letter per column and is recovered by the shared
    coordinate ascent solver.
    """

    effective_shift: ClassVar[EffectiveShift] = staticmethod(periodic_shift)
    shift_step: ClassVar[int] = 1

    def __init__(self) -> None:
        self._tableaus: dict[int, Tableau] = {}

    def build_tableau(self, size: int) -> Tableau:
        return Tableau.vigenere(size)

    def tableau(self, language: LanguageModel) -> Tableau:
        size = language.length
        if size not in self._tableaus:
            try:
                self._tableaus[size] = self.build_tableau(size)
            except ValueError as e:
                raise InvalidKeyError(self.name, "", str(e)) from None
        return self._tableaus[size]

    def parse_key(self, key: RawKey, language: LanguageModel) -> list[int]:
        self.tableau(language)
        return keyword_codes(key, language, self.name)

    def format_key(self, key: list[int], language: LanguageModel) -> str:
        return language.codes_to_string(key)

    def encrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        tableau = self.tableau(language)
        plaintext = [int(cp) for cp in codes]
        result = [
            tableau.encrypt(self.effective_shift(key, idx, len(key), plaintext), cp)
            for idx, cp in enumerate(plaintext)
        ]
        return np.asarray(result, dtype=np.int64)

    def decrypt_codes(self, codes: np.ndarray, key: list[int], language: LanguageModel) -> np.ndarray:
        tableau = self.tableau(language)
        plaintext: list[int] = [0] * codes.size
        for idx, cp in enumerate(codes):
            plaintext[idx] = tableau.decrypt(self.effective_shift(key, idx, len(key), plaintext), int(cp))
        return np.asarray(plaintext, dtype=np.int64)

    def solver(self, language: LanguageModel, options: dict[str, Any]) -> ShiftStreamSolver:
        tableau = self.tableau(language)
        return ShiftStreamSolver(
            language=language,
            decrypt_one=lambda cp, shift: tableau.decrypt(shift, cp),
            effective_shift=self.effective_shift,
            shift_step=self.shift_step,
            max_key_length=self._option(options, "shift_max_key_length"),
            tolerance=self._option(options, "shift_tolerance"),
        )

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> list[int]:
        key = self.solver(language, options).solve(codes)
        return key or [0]

    def random_key(self, language: LanguageModel) -> list[int]:
        self.tableau(language)
        length = random.randint(4, 10)
        return [random.randrange(language.length) for _ in range(length)]
