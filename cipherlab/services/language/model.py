import copy
import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

import numpy as np

from cipherlab.core.exceptions import (
    AlphabetLengthUnmatchedError,
    DuplicateAlphabetLengthError,
    InsufficientCorpusError,
)
from cipherlab.services.analysis.statistics import index_of_coincidence
from cipherlab.services.language.alphabet import BITS_PER_LETTER, MAX_ALPHABET_LEN, AlphabetVariant

logger = logging.getLogger(__name__)

NGRAM_ORDERS = (1, 2, 3, 4)
QUADGRAMS = 4
MIN_CORPUS_LEN = 4


def table_size(order: int) -> int:
    return MAX_ALPHABET_LEN**order


def pack_windows(indexes: np.ndarray, order: int) -> np.ndarray:
    """
    Pack every rolling window of ``order`` indexes into one integer.

    Each index takes five bits, oldest letter in the highest bits, matching
    ``idx = idx << 5 | cp`` applied letter by letter.
    """
    count = indexes.size - order + 1
    if count <= 0:
        return np.zeros(0, dtype=np.int64)
    packed = np.zeros(count, dtype=np.int64)
    for offset in range(order):
        packed = (packed << BITS_PER_LETTER) | indexes[offset : offset + count]
    return packed


class LanguageModel:
    """
    Corpus trained n-gram model used as the fitness oracle by every solver.

    Holds four flat tables of Laplace smoothed natural log probabilities,
    sized ``32 ** k`` for ``k = 1..4``, plus the alphabet variants of the
    language. One variant is active; :meth:`select_variant` returns a new
    handle sharing the tables instead of switching state in place.
    """

    def __init__(
        self,
        name: str,
        alphabet_len: int,
        alphabets: Sequence[AlphabetVariant],
        tables: Sequence[np.ndarray],
        substitutions: dict[str, str] | None = None,
    ):
        lengths = [alphabet.length for alphabet in alphabets]
        for length in lengths:
            if lengths.count(length) > 1:
                raise DuplicateAlphabetLengthError(length)

        if len(tables) != len(NGRAM_ORDERS):
            raise ValueError(f"Expected {len(NGRAM_ORDERS)} n-gram tables, got {len(tables)}")
        for order, table in zip(NGRAM_ORDERS, tables):
            if np.shape(table) != (table_size(order),):
                raise ValueError(
                    f"Order {order} table has shape {np.shape(table)}, expected ({table_size(order)},)"
                )

        self.name = name
        self.alphabet_len = alphabet_len
        self.alphabets = list(alphabets)
        self.substitutions = dict(substitutions or {})
        self._tables = tuple(np.asarray(table, dtype=np.float64) for table in tables)
        self._activate(self._variant_index(alphabet_len))

    # ========================================================================
    # Training
    # ========================================================================

    @classmethod
    def train(
        cls,
        name: str,
        alphabet_len: int,
        alphabets: Sequence[AlphabetVariant],
        corpus: str,
        substitutions: dict[str, str] | None = None,
    ) -> "LanguageModel":
        """
        Build a model from a plaintext corpus.

        Counts every rolling window of one to four letters over the corpus
        converted with the ``alphabet_len`` variant, smooths with add-one,
        and stores natural logs. Every variant then receives its expected
        index of coincidence measured on the same corpus.

        Args:
            name: Language name
            alphabet_len: Length of the variant the tables are trained with
            alphabets: All alphabet variants of the language
            corpus: Raw corpus text
            substitutions: Ligature expansions applied before conversion

        Returns:
            Trained model with the ``alphabet_len`` variant active

        Raises:
            AlphabetLengthUnmatchedError: No variant has ``alphabet_len`` letters
            InsufficientCorpusError: Fewer than four usable letters
        """
        empty = [np.zeros(table_size(order)) for order in NGRAM_ORDERS]
        model = cls(name, alphabet_len, alphabets, empty, substitutions)

        codes = model.to_codes(corpus)
        if codes.size < MIN_CORPUS_LEN:
            raise InsufficientCorpusError(int(codes.size), MIN_CORPUS_LEN)

        indexes = model._scoring[codes]
        tables = []
        for order in NGRAM_ORDERS:
            windows = pack_windows(indexes, order)
            counts = np.bincount(windows, minlength=table_size(order))
            total = windows.size + alphabet_len**order
            tables.append(np.log((counts + 1.0) / total))
        model._tables = tuple(tables)

        substituted = model.substitute(corpus)
        variants = []
        for variant in model.alphabets:
            variant_codes = variant.to_codes(substituted)
            expected = index_of_coincidence(variant_codes, variant.length)
            variants.append(replace(variant, expected_ioc=expected))
            logger.info(
                "Alphabet of length %d has expected IOC %.5f", variant.length, expected
            )
        model.alphabets = variants
        model._activate(model._variant_index(alphabet_len))

        logger.info("Trained language '%s' on %d letters", name, codes.size)
        return model

    # ========================================================================
    # Alphabet variants
    # ========================================================================

    def _variant_index(self, length: int) -> int:
        for idx, variant in enumerate(self.alphabets):
            if variant.length == length:
                return idx
        raise AlphabetLengthUnmatchedError(length, [a.length for a in self.alphabets])

    def _activate(self, idx: int) -> None:
        self._active = idx
        self._scoring = self.alphabets[idx].scoring_indexes()

    def select_variant(self, length: int) -> "LanguageModel":
        """
        Return a handle on the same tables with the variant of ``length`` active.

        Raises:
            AlphabetLengthUnmatchedError: No variant has ``length`` letters
        """
        idx = self._variant_index(length)
        handle = copy.copy(self)
        handle._activate(idx)
        return handle

    @property
    def alphabet(self) -> AlphabetVariant:
        """The active alphabet variant."""
        return self.alphabets[self._active]

    @property
    def length(self) -> int:
        """Number of letters in the active alphabet."""
        return self.alphabet.length

    @property
    def expected_ioc(self) -> float:
        return self.alphabet.expected_ioc

    @property
    def scoring_table(self) -> np.ndarray:
        return self._scoring

    # ========================================================================
    # Tables
    # ========================================================================

    @property
    def tables(self) -> tuple[np.ndarray, ...]:
        return self._tables

    def ngram_table(self, order: int) -> np.ndarray:
        """Log probability table for n-grams of ``order`` letters."""
        if order not in NGRAM_ORDERS:
            raise ValueError(f"Order must be one of {NGRAM_ORDERS}, got {order}")
        return self._tables[order - 1]

    @property
    def unigram_probabilities(self) -> np.ndarray:
        """Non-log unigram probabilities indexed by scoring index."""
        return np.exp(self._tables[0])

    # ========================================================================
    # Scoring
    # ========================================================================

    def score(self, sequence: Sequence[int] | np.ndarray, order: int = QUADGRAMS) -> float:
        """
        Sum the log probabilities of every rolling window of ``order`` letters.

        A sequence shorter than ``order`` is scored as one window of its own
        length. An empty sequence scores 0.0.

        Args:
            sequence: Code points of the active alphabet
            order: Window size, 1 to 4

        Returns:
            Log probability of the sequence, higher is more plausible
        """
        table = self.ngram_table(order)
        codes = np.asarray(sequence, dtype=np.int64)
        if codes.size == 0:
            return 0.0
        if codes.size < order:
            order = codes.size
            table = self._tables[order - 1]
        return float(table[pack_windows(self._scoring[codes], order)].sum())

    def score_iter(self, iterable: Iterable[int], order: int = QUADGRAMS) -> float:
        """Streaming form of :meth:`score`; never materializes the sequence."""
        table = self.ngram_table(order)
        scoring = self.alphabet.scoring_table
        mask = (1 << (BITS_PER_LETTER * order)) - 1

        idx = 0
        count = 0
        total = 0.0
        for cp in iterable:
            idx = ((idx << BITS_PER_LETTER) | scoring[cp]) & mask
            count += 1
            if count >= order:
                total += table[idx]

        if 0 < count < order:
            return float(self._tables[count - 1][idx])
        return float(total)

    # ========================================================================
    # Character conversion
    # ========================================================================

    def substitute(self, text: str) -> str:
        """Expand ligatures and other multi-letter characters."""
        if not self.substitutions:
            return text
        return "".join(self.substitutions.get(char, char) for char in text)

    def to_codes(self, text: str) -> np.ndarray:
        """Convert text to code points of the active alphabet, dropping non-letters."""
        return self.alphabet.to_codes(self.substitute(text))

    def codes_to_string(self, codes: Iterable[int]) -> str:
        upper = self.alphabet.upper
        return "".join(upper[cp] for cp in codes)

    def is_letter(self, char: str) -> bool:
        return self.alphabet.is_letter(char)

    def get_cp(self, char: str) -> int:
        return self.alphabet.get_cp(char)

    def update_cp(self, old_char: str, cp: int) -> str:
        """Letter for ``cp`` in the case of ``old_char``."""
        if self.alphabet.is_upper(old_char):
            return self.alphabet.cp_to_upper(cp)
        return self.alphabet.cp_to_lower(cp)

    def __repr__(self) -> str:
        return f"LanguageModel(name={self.name!r}, alphabet_len={self.length})"
