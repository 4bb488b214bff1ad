import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from cipherlab.services.language.model import QUADGRAMS, LanguageModel
from cipherlab.services.math_utils import invert

logger = logging.getLogger(__name__)


@dataclass
class HillClimbResult:
    """Outcome of a substitution key search."""

    key: list[int]
    score: float
    best_score: float
    restarts: int


class SubstitutionHillClimber:
    """
    Random restart hill climbing over substitution alphabets.

    Each restart shuffles a candidate inverse alphabet (cipher letter to
    plain letter) and sweeps every pair swap, keeping a swap only when the
    quadgram score strictly improves. Sweeps repeat until one changes
    nothing. The search stops after ``max_restarts`` or once
    ``max_repetitions`` restarts end within ``tolerance`` of the best score.
    The key returned is the local optimum of the final restart.
    """

    def __init__(
        self,
        ciphertext: Sequence[int] | np.ndarray,
        language: LanguageModel,
        max_restarts: int = 1000,
        tolerance: float = 0.1,
        max_repetitions: int = 3,
        rng: random.Random | None = None,
    ):
        self.ciphertext = np.asarray(ciphertext, dtype=np.int64)
        self.language = language
        self.max_restarts = max_restarts
        self.tolerance = tolerance
        self.max_repetitions = max_repetitions
        self.rng = rng or random

    def _score(self, inverse: np.ndarray) -> float:
        return self.language.score(inverse[self.ciphertext], QUADGRAMS)

    def climb(self, inverse: np.ndarray) -> float:
        """Improve ``inverse`` in place to a local optimum and return its score."""
        size = inverse.size
        score = self._score(inverse)

        improved = True
        while improved:
            improved = False
            for i in range(size):
                for j in range(i + 1, size):
                    inverse[i], inverse[j] = inverse[j], inverse[i]
                    candidate = self._score(inverse)
                    if candidate > score:
                        score = candidate
                        improved = True
                    else:
                        inverse[i], inverse[j] = inverse[j], inverse[i]

        return score

    def optimize(self) -> HillClimbResult:
        """
        Search for the substitution key.

        Returns:
            HillClimbResult whose ``key`` maps plain code points to
            cipher code points
        """
        size = self.language.length
        best_score = float("-inf")
        inverse = np.arange(size)
        score = float("-inf")
        repetitions = 0
        restarts = 0

        while restarts < self.max_restarts and repetitions < self.max_repetitions:
            restarts += 1
            start = list(range(size))
            self.rng.shuffle(start)
            inverse = np.array(start, dtype=np.int64)

            score = self.climb(inverse)
            logger.debug("Restart %d reached %.2f (best %.2f)", restarts, score, best_score)

            if abs(score - best_score) < self.tolerance:
                repetitions += 1
            elif score > best_score:
                best_score = score
                repetitions = 0

        logger.info(
            "Substitution search finished after %d restarts with score %.2f",
            restarts,
            best_score,
        )
        return HillClimbResult(
            key=invert(inverse.tolist()),
            score=score,
            best_score=best_score,
            restarts=restarts,
        )
