from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

from cipherlab.core.exceptions import InsufficientInputError
from cipherlab.models.schemas import FrequencyData, PeriodicIoc, StatisticsProfile

if TYPE_CHECKING:
    from cipherlab.services.language.model import LanguageModel

# Shortest text the full profile is computed for.
MIN_ANALYSIS_LEN = 4


def _as_codes(sequence: Sequence[int] | np.ndarray) -> np.ndarray:
    return np.asarray(sequence, dtype=np.int64)


def index_of_coincidence(sequence: Sequence[int] | np.ndarray, alphabet_len: int) -> float:
    """
    Calculate Index of Coincidence.

    IOC is the probability that two letters drawn without replacement are
    equal: ``sum(f * (f - 1)) / (n * (n - 1))``.
    - English text: ~0.0667
    - Random text: ~0.0385 (1/26)

    Raises:
        InsufficientInputError: Fewer than two letters
    """
    codes = _as_codes(sequence)
    n = codes.size
    if n < 2:
        raise InsufficientInputError("Index of coincidence", n, 2)

    counts = np.bincount(codes, minlength=alphabet_len).astype(np.float64)
    return float((counts * (counts - 1)).sum() / (n * (n - 1)))


class StatisticalAnalyzer:
    """
    Statistics over code point sequences of a language's active alphabet.

    Computes the diagnostics used to recognise cipher families and key
    periods:
    - Letter frequencies
    - Index of Coincidence (IOC), plain and periodic
    - Entropy
    - Chi-squared against the trained unigram distribution
    """

    def __init__(self, language: "LanguageModel"):
        self.language = language

    def index_of_coincidence(self, sequence: Sequence[int] | np.ndarray) -> float:
        return index_of_coincidence(sequence, self.language.length)

    def periodic_index_of_coincidence(
        self,
        sequence: Sequence[int] | np.ndarray,
        period: int,
    ) -> float:
        """
        Average IOC of the ``period`` interleaved subsequences.

        Text enciphered with a periodic key of length ``period`` scores close
        to the language's expected IOC, other periods score lower.

        Args:
            sequence: Code points
            period: Number of interleaved columns

        Returns:
            Mean column IOC

        Raises:
            InsufficientInputError: Fewer than two letters per column
        """
        if period < 1:
            raise ValueError(f"Period must be positive, got {period}")

        codes = _as_codes(sequence)
        if codes.size < 2 * period:
            raise InsufficientInputError("Periodic index of coincidence", codes.size, 2 * period)

        total = sum(self.index_of_coincidence(codes[col::period]) for col in range(period))
        return total / period

    def chi_squared(self, sequence: Sequence[int] | np.ndarray) -> float:
        """
        Calculate chi-squared statistic against the trained unigram distribution.

        Lower values indicate a closer match to the language.
        """
        codes = _as_codes(sequence)
        n = codes.size
        if n == 0:
            raise InsufficientInputError("Chi-squared", 0, 1)

        observed = np.bincount(codes, minlength=self.language.length).astype(np.float64)
        probabilities = self.language.unigram_probabilities[self.language.scoring_table]
        expected = n * probabilities
        return float(((observed - expected) ** 2 / expected).sum())

    def chi_squared_p_value(self, sequence: Sequence[int] | np.ndarray) -> float:
        """Probability of a chi-squared statistic at least this large for text of the language."""
        statistic = self.chi_squared(sequence)
        return float(stats.chi2.sf(statistic, df=self.language.length - 1))

    def entropy(self, sequence: Sequence[int] | np.ndarray) -> float:
        """
        Calculate Shannon entropy in bits per letter.

        - Lower entropy suggests more structure (like natural language)
        - Higher entropy suggests more randomness
        """
        codes = _as_codes(sequence)
        if codes.size == 0:
            return 0.0

        counts = np.bincount(codes)
        p = counts[counts > 0] / codes.size
        return float(-(p * np.log2(p)).sum())

    def letter_frequencies(self, sequence: Sequence[int] | np.ndarray) -> list[FrequencyData]:
        """Count and proportion of every letter, most frequent first."""
        codes = _as_codes(sequence)
        counts = np.bincount(codes, minlength=self.language.length)
        total = codes.size

        result = [
            FrequencyData(
                character=self.language.alphabet.cp_to_upper(cp),
                count=int(count),
                frequency=count / total if total > 0 else 0.0,
            )
            for cp, count in enumerate(counts)
        ]
        result.sort(key=lambda x: x.frequency, reverse=True)
        return result

    def analyze(self, text: str, max_period: int = 30) -> StatisticsProfile:
        """
        Perform complete statistical analysis on text.

        Args:
            text: Raw text; non-letters are ignored
            max_period: Largest period for the periodic IOC table

        Returns:
            StatisticsProfile with all computed statistics

        Raises:
            InsufficientInputError: Fewer than four letters
        """
        codes = self.language.to_codes(text)
        n = codes.size
        if n < MIN_ANALYSIS_LEN:
            raise InsufficientInputError("Analysis", n, MIN_ANALYSIS_LEN)

        periodic = [
            PeriodicIoc(period=period, ioc=self.periodic_index_of_coincidence(codes, period))
            for period in range(1, min(max_period, n // 2) + 1)
        ]

        chi_sq = self.chi_squared(codes)
        return StatisticsProfile(
            language=self.language.name,
            alphabet_len=self.language.length,
            length=n,
            unique_chars=int(np.unique(codes).size),
            character_frequencies=self.letter_frequencies(codes),
            index_of_coincidence=self.index_of_coincidence(codes),
            expected_ioc=self.language.expected_ioc,
            random_ioc=1 / self.language.length,
            periodic_ioc=periodic,
            entropy=self.entropy(codes),
            chi_squared=chi_sq,
            chi_squared_p_value=float(stats.chi2.sf(chi_sq, df=self.language.length - 1)),
            best_period=max(periodic, key=lambda x: x.ioc).period if periodic else None,
        )

