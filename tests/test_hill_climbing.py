"""Tests for the substitution hill climber."""

import random

import numpy as np
import pytest

from cipherlab.services.math_utils import invert
from cipherlab.services.optimization.hill_climbing import SubstitutionHillClimber


class TestSubstitutionHillClimber:
    """Test suite for random restart hill climbing."""

    @pytest.fixture
    def key(self):
        alphabet = list(range(26))
        random.Random(11).shuffle(alphabet)
        return alphabet

    def test_converges_near_true_score(self, english, plaintext, key):
        codes = english.to_codes(plaintext)
        ciphertext = np.asarray(key)[codes]
        true_score = english.score(codes)

        climber = SubstitutionHillClimber(
            ciphertext,
            english,
            max_restarts=200,
            rng=random.Random(5),
        )
        result = climber.optimize()

        assert result.restarts < 200
        assert result.score >= true_score - 0.02 * abs(true_score)
        # Letters that appear often enough are always mapped right
        inverse = invert(result.key)
        for cp in "ETAOINSH":
            plain = english.get_cp(cp)
            assert inverse[key[plain]] == plain

    def test_returns_final_local_optimum(self, english, plaintext, key):
        codes = english.to_codes(plaintext)
        ciphertext = np.asarray(key)[codes]

        climber = SubstitutionHillClimber(ciphertext, english, max_restarts=200, rng=random.Random(7))
        result = climber.optimize()

        assert result.restarts < 200
        inverse = np.asarray(invert(result.key))
        assert english.score(inverse[ciphertext]) == pytest.approx(result.score)
        # Stopping on repetitions means the last optimum matched the best one
        assert abs(result.score - result.best_score) < climber.tolerance

    def test_climb_never_lowers_score(self, english, short_plaintext):
        codes = english.to_codes(short_plaintext)
        climber = SubstitutionHillClimber(codes, english, rng=random.Random(1))
        inverse = np.array(random.Random(2).sample(range(26), 26))
        start = english.score(inverse[codes])

        assert climber.climb(inverse) >= start
        assert sorted(inverse.tolist()) == list(range(26))

    def test_restart_cap(self, english, short_plaintext):
        codes = english.to_codes(short_plaintext)
        climber = SubstitutionHillClimber(codes, english, max_restarts=2, rng=random.Random(3))

        result = climber.optimize()

        assert result.restarts <= 2
        assert sorted(result.key) == list(range(26))
