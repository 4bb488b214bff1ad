"""
Coordinate ascent key search shared by the Vigenère family.

The solver knows nothing about a particular tableau. Each cipher injects
two functions:

- ``decrypt_one(cipher_cp, shift)`` reads one letter through its square
- ``effective_shift(key, position, key_length, plaintext)`` picks the shift
  used at a position, either repeating the key or extending it with the
  recovered plaintext
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np

from cipherlab.services.language.model import QUADGRAMS, LanguageModel

logger = logging.getLogger(__name__)

DecryptOne = Callable[[int, int], int]
EffectiveShift = Callable[[Sequence[int], int, int, Sequence[int]], int]


def periodic_shift(key: Sequence[int], position: int, key_length: int, plaintext: Sequence[int]) -> int:
    """The key repeats every ``key_length`` letters."""
    return key[position % key_length]


def autokey_shift(key: Sequence[int], position: int, key_length: int, plaintext: Sequence[int]) -> int:
    """The keyword is used once, then the recovered plaintext continues the key."""
    if position < key_length:
        return key[position]
    return plaintext[position - key_length]


@dataclass
class KeyLengthTrial:
    """Best key found for one key length."""

    key_length: int
    key: list[int]
    score: float
    sweep_scores: list[float] = field(default_factory=list)


class ShiftStreamSolver:
    """
    Recover the key of a shift-stream cipher without knowing its length.

    For every key length from 1 to ``max_key_length`` a zero key is improved
    one column at a time: each shift of the column is tried, only that
    column is decrypted again, and the whole plaintext is scored with
    quadgrams. A shift is kept only when it beats the running score. Column
    sweeps repeat until a sweep gains less than ``tolerance``. The best key
    over all lengths wins, ties going to the shortest.
    """

    def __init__(
        self,
        language: LanguageModel,
        decrypt_one: DecryptOne,
        effective_shift: EffectiveShift = periodic_shift,
        shift_step: int = 1,
        max_key_length: int = 30,
        tolerance: float = 0.1,
    ):
        self.language = language
        self.decrypt_one = decrypt_one
        self.effective_shift = effective_shift
        self.shift_step = shift_step
        self.max_key_length = max_key_length
        self.tolerance = tolerance

    def _decrypt_column(
        self,
        ciphertext: list[int],
        plaintext: list[int],
        key: list[int],
        col: int,
    ) -> None:
        key_length = len(key)
        for idx in range(col, len(ciphertext), key_length):
            plaintext[idx] = self.decrypt_one(
                ciphertext[idx],
                self.effective_shift(key, idx, key_length, plaintext),
            )

    def climb(self, ciphertext: Sequence[int] | np.ndarray, key_length: int) -> KeyLengthTrial:
        """
        Coordinate ascent for a single key length.

        Args:
            ciphertext: Code points
            key_length: Number of key columns

        Returns:
            KeyLengthTrial with the key, its score and the running score
            after every sweep
        """
        cipher = [int(cp) for cp in ciphertext]
        plaintext = [0] * len(cipher)
        key = [0] * key_length
        shifts = range(0, self.language.length, self.shift_step)

        for idx in range(len(cipher)):
            plaintext[idx] = self.decrypt_one(
                cipher[idx],
                self.effective_shift(key, idx, key_length, plaintext),
            )

        sweep_scores: list[float] = []
        current = float("-inf")
        while True:
            previous = current

            for col in range(key_length):
                best_shift = key[col]

                for shift in shifts:
                    key[col] = shift
                    self._decrypt_column(cipher, plaintext, key, col)

                    score = self.language.score(plaintext, QUADGRAMS)
                    if score > current:
                        current = score
                        best_shift = shift

                key[col] = best_shift
                self._decrypt_column(cipher, plaintext, key, col)

            sweep_scores.append(current)
            if abs(previous - current) < self.tolerance:
                break

        return KeyLengthTrial(key_length=key_length, key=key, score=current, sweep_scores=sweep_scores)

    def solve(self, ciphertext: Sequence[int] | np.ndarray) -> list[int]:
        """
        Find the best key over every candidate key length.

        Returns:
            Key as one shift per column, empty for empty ciphertext
        """
        length = len(ciphertext)
        best: KeyLengthTrial | None = None

        for key_length in range(1, min(self.max_key_length, length) + 1):
            trial = self.climb(ciphertext, key_length)
            logger.debug(
                "Key length %d scored %.2f after %d sweeps",
                key_length,
                trial.score,
                len(trial.sweep_scores),
            )
            if best is None or trial.score > best.score:
                best = trial

        return best.key if best else []
