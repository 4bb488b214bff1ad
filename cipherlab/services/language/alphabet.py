from dataclasses import dataclass, field

import numpy as np

from cipherlab.core.exceptions import (
    AlphabetLengthMismatchError,
    InvalidSubstitutionTargetError,
    MaxAlphabetLengthExceededError,
    RepeatedCharacterError,
    ScoringIndexOutOfRangeError,
    ScoringTableLengthMismatchError,
    SubstitutionsNotPairedError,
    SubstitutionsNotUniqueError,
)

# Code points are packed five bits at a time into n-gram indexes.
BITS_PER_LETTER = 5
MAX_ALPHABET_LEN = 1 << BITS_PER_LETTER


def _is_unique(chars: str) -> bool:
    return len(set(chars)) == len(chars)


@dataclass
class AlphabetVariant:
    """
    One interchangeable alphabet of a language.

    Position in ``upper``/``lower`` is the code point of a letter. Each
    substitution is a two character string, alias then target, so ``"JI"``
    reads J as I. ``scoring_table`` maps every code point into the index
    space the n-gram tables were trained in.
    """

    upper: str
    lower: str
    upper_substitutions: list[str] = field(default_factory=list)
    lower_substitutions: list[str] = field(default_factory=list)
    scoring_table: list[int] = field(default_factory=list)
    expected_ioc: float = 0.0

    _char_to_cp: dict[str, int] = field(init=False, repr=False, compare=False)
    _upper_chars: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.scoring_table:
            self.scoring_table = list(range(len(self.upper)))
        self.validate()

    def validate(self) -> None:
        """
        Check the variant invariants and rebuild the character lookup.

        Raises:
            AlphabetError: The first violated invariant
        """
        upper_len = len(self.upper)
        lower_len = len(self.lower)

        if upper_len != lower_len:
            raise AlphabetLengthMismatchError(upper_len, lower_len)
        if upper_len != len(self.scoring_table):
            raise ScoringTableLengthMismatchError(upper_len, len(self.scoring_table))
        if upper_len > MAX_ALPHABET_LEN:
            raise MaxAlphabetLengthExceededError(upper_len, MAX_ALPHABET_LEN)
        if not _is_unique(self.upper):
            raise RepeatedCharacterError(self.upper)
        if not _is_unique(self.lower):
            raise RepeatedCharacterError(self.lower)

        if any(len(sub) != 2 for sub in self.lower_substitutions) or any(
            len(sub) != 2 for sub in self.upper_substitutions
        ):
            raise SubstitutionsNotPairedError(self.upper_substitutions + self.lower_substitutions)

        if not _is_unique("".join(self.upper_substitutions)):
            raise SubstitutionsNotUniqueError(self.upper_substitutions)
        if not _is_unique("".join(self.lower_substitutions)):
            raise SubstitutionsNotUniqueError(self.lower_substitutions)

        if any(sub[1] not in self.lower for sub in self.lower_substitutions):
            raise InvalidSubstitutionTargetError(self.lower_substitutions)
        if any(sub[1] not in self.upper for sub in self.upper_substitutions):
            raise InvalidSubstitutionTargetError(self.upper_substitutions)

        for index in self.scoring_table:
            if not 0 <= index < MAX_ALPHABET_LEN:
                raise ScoringIndexOutOfRangeError(index, MAX_ALPHABET_LEN)

        lookup: dict[str, int] = {}
        for cp, (up, low) in enumerate(zip(self.upper, self.lower)):
            lookup[up] = cp
            lookup[low] = cp
        for substitutions in (self.lower_substitutions, self.upper_substitutions):
            for alias, target in substitutions:
                lookup[alias] = lookup[target]

        self._char_to_cp = lookup
        self._upper_chars = frozenset(self.upper) | frozenset(
            alias for alias, _ in self.upper_substitutions
        )

    @property
    def length(self) -> int:
        return len(self.upper)

    def is_letter(self, char: str) -> bool:
        return char in self._char_to_cp

    def is_upper(self, char: str) -> bool:
        return char in self._upper_chars

    def is_lower(self, char: str) -> bool:
        return self.is_letter(char) and not self.is_upper(char)

    def get_cp(self, char: str) -> int:
        """Code point of a letter or alias. Raises KeyError for non-letters."""
        return self._char_to_cp[char]

    def cp_to_upper(self, cp: int) -> str:
        return self.upper[cp]

    def cp_to_lower(self, cp: int) -> str:
        return self.lower[cp]

    def to_codes(self, text: str) -> np.ndarray:
        """Drop every non-letter and map the rest to code points."""
        lookup = self._char_to_cp
        return np.fromiter(
            (lookup[char] for char in text if char in lookup),
            dtype=np.int64,
        )

    def scoring_indexes(self) -> np.ndarray:
        return np.asarray(self.scoring_table, dtype=np.int64)
