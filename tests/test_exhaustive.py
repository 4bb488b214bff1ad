"""Tests for exhaustive key search."""

import pytest

from cipherlab.core.exceptions import NoModularInverseError
from cipherlab.services.engines.transposition.rail_fence import decrypt_indexes, encrypt_indexes
from cipherlab.services.math_utils import coprimes, mod_inverse
from cipherlab.services.optimization.exhaustive import (
    affine_solve,
    affine_solve_known_pair,
    caesar_solve,
    permutation_solve,
)


class TestModularArithmetic:
    def test_mod_inverse(self):
        assert mod_inverse(11, 26) == 19
        assert mod_inverse(1, 26) == 1
        assert mod_inverse(13, 26) is None

    def test_coprimes(self):
        assert coprimes(26) == [1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25]


class TestCaesarSolve:
    """Test suite for the Caesar brute force."""

    def test_recovers_shift_seven(self, english, plaintext):
        codes = english.to_codes(plaintext)

        assert caesar_solve((codes + 7) % 26, english) == 7

    def test_unshifted_text(self, english, short_plaintext):
        assert caesar_solve(english.to_codes(short_plaintext), english) == 0


class TestAffineSolve:
    """Test suite for the affine brute force and known plaintext attack."""

    def test_brute_force(self, english, short_plaintext):
        codes = english.to_codes(short_plaintext)

        assert affine_solve((5 * codes + 8) % 26, english) == (5, 8)

    def test_known_pair(self):
        # A=0 -> 8, B=1 -> 13
        assert affine_solve_known_pair(0, 1, 8, 13, 26) == (5, 8)
        # E=4 -> 5*4+8 = 28 = 2, T=19 -> 5*19+8 = 103 = 25
        assert affine_solve_known_pair(4, 19, 2, 25, 26) == (5, 8)

    def test_known_pair_without_inverse(self):
        with pytest.raises(NoModularInverseError):
            affine_solve_known_pair(0, 2, 8, 18, 26)


class TestPermutationSolve:
    """Test suite for exhaustive transposition search."""

    def test_finds_rail_count(self, english, short_plaintext):
        codes = english.to_codes(short_plaintext)
        ciphertext = codes[encrypt_indexes(4, codes.size)]

        assert permutation_solve(ciphertext, english, decrypt_indexes, range(2, 12)) == 4

    def test_no_keys(self, english):
        assert permutation_solve([0, 1, 2], english, decrypt_indexes, []) is None
