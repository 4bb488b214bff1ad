"""Exhaustive key search for ciphers with small key spaces."""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import numpy as np

from cipherlab.core.exceptions import NoModularInverseError
from cipherlab.services.language.model import QUADGRAMS, LanguageModel
from cipherlab.services.math_utils import coprimes, mod_inverse

logger = logging.getLogger(__name__)


def caesar_solve(ciphertext: Sequence[int] | np.ndarray, language: LanguageModel) -> int:
    """
    Try every shift and keep the one whose decryption scores best.

    Ties keep the lowest shift.
    """
    codes = np.asarray(ciphertext, dtype=np.int64)
    modulus = language.length

    best_score = float("-inf")
    best_shift = 0
    for shift in range(modulus):
        score = language.score((codes - shift) % modulus, QUADGRAMS)
        if score > best_score:
            best_score = score
            best_shift = shift

    logger.debug("Caesar shift %d scored %.2f", best_shift, best_score)
    return best_shift


def affine_solve(
    ciphertext: Sequence[int] | np.ndarray,
    language: LanguageModel,
) -> tuple[int, int]:
    """
    Try every invertible multiplier and every offset.

    The multiplier is the outer loop, the offset the inner one; ties keep
    the first pair found.

    Returns:
        The ``(a, b)`` pair of ``E(x) = a * x + b``
    """
    codes = np.asarray(ciphertext, dtype=np.int64)
    modulus = language.length

    best_score = float("-inf")
    best_key = (1, 0)
    for a in coprimes(modulus):
        a_inv = mod_inverse(a, modulus)
        for b in range(modulus):
            score = language.score((a_inv * (codes - b)) % modulus, QUADGRAMS)
            if score > best_score:
                best_score = score
                best_key = (a, b)

    logger.debug("Affine key %s scored %.2f", best_key, best_score)
    return best_key


def affine_solve_known_pair(
    plain0: int,
    plain1: int,
    cipher0: int,
    cipher1: int,
    modulus: int,
) -> tuple[int, int]:
    """
    Recover an affine key from two known plaintext/ciphertext letters.

    Solves ``cipher = a * plain + b`` for both pairs modulo ``modulus``.

    Raises:
        NoModularInverseError: ``plain0 - plain1`` is not invertible
    """
    diff = (plain0 - plain1) % modulus
    diff_inv = mod_inverse(diff, modulus)
    if diff_inv is None:
        raise NoModularInverseError(diff, modulus)

    a = diff_inv * (cipher0 - cipher1) % modulus
    b = diff_inv * (plain0 * cipher1 - plain1 * cipher0) % modulus
    return a, b


def permutation_solve(
    ciphertext: Sequence[int] | np.ndarray,
    language: LanguageModel,
    decrypt_indexes: Callable[[Any, int], np.ndarray],
    keys: Iterable[Any],
) -> Any:
    """
    Try every key of a transposition with a small key space.

    Args:
        ciphertext: Code points
        language: Scoring model
        decrypt_indexes: Maps ``(key, length)`` to the ciphertext index of
            every plaintext position
        keys: Candidate keys, tried in order

    Returns:
        The first best scoring key, or None when ``keys`` is empty
    """
    codes = np.asarray(ciphertext, dtype=np.int64)

    best_score = float("-inf")
    best_key = None
    for key in keys:
        score = language.score_iter(
            (codes[idx] for idx in decrypt_indexes(key, codes.size)),
            QUADGRAMS,
        )
        if score > best_score:
            best_score = score
            best_key = key

    return best_key
