import math
from collections.abc import Sequence


def mod_inverse(value: int, modulus: int) -> int | None:
    """Calculate modular multiplicative inverse using extended Euclidean algorithm."""
    value %= modulus
    if math.gcd(value, modulus) != 1:
        return None

    def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
        if a == 0:
            return b, 0, 1
        gcd, x1, y1 = extended_gcd(b % a, a)
        return gcd, y1 - (b // a) * x1, x1

    _, x, _ = extended_gcd(value, modulus)
    return x % modulus


def coprimes(modulus: int) -> list[int]:
    """Values in ``1..modulus`` that have an inverse modulo ``modulus``."""
    return [a for a in range(1, modulus) if math.gcd(a, modulus) == 1]


def invert(permutation: Sequence[int]) -> list[int]:
    """Return the inverse of a permutation of ``0..len(permutation)``."""
    inverse = [0] * len(permutation)
    for idx, value in enumerate(permutation):
        inverse[value] = idx
    return inverse


def fill_alphabet_from_start(keyword: Sequence[int], length: int) -> list[int]:
    """
    Build a mixed alphabet from a keyword.

    Keyword code points are kept in order of first appearance, then every
    remaining code point is appended in natural order.

    Args:
        keyword: Keyword as code points
        length: Alphabet length

    Returns:
        A permutation of ``0..length``
    """
    seen: set[int] = set()
    alphabet = []
    for cp in list(keyword) + list(range(length)):
        if cp not in seen:
            seen.add(cp)
            alphabet.append(cp)
    return alphabet


def keyword_to_ranks(keyword: Sequence[int]) -> list[int]:
    """
    Convert a transposition keyword to column ranks.

    Each column's rank is the alphabetical position of its keyword letter,
    ties broken left to right, so ``"CAB"`` gives ``[2, 0, 1]``.
    """
    reading_order = [idx for idx, _ in sorted(enumerate(keyword), key=lambda pair: pair[1])]
    return invert(reading_order)
