from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidOptionError(ValidationError):
    """Raised when a per-request search option has the wrong type."""

    def __init__(self, name: str, value: Any, expected: str):
        super().__init__(
            f"Option '{name}' must be {expected}, got {value!r}",
            {"name": name, "value": str(value), "expected": expected},
        )


# ============================================================================
# Language model errors
# ============================================================================


class LanguageError(CryptanalysisError):
    """Base exception for language model configuration, training and loading."""

    pass


class LanguageNotFoundError(LanguageError):
    """Raised when a language is neither cached, stored nor bundled."""

    def __init__(self, name: str):
        super().__init__(f"Language '{name}' not found", {"name": name})


class LanguageFileNotFoundError(LanguageError):
    """Raised when a trained language file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Language file '{path}' does not exist", {"path": path})


class LanguageReadError(LanguageError):
    """Raised when a trained language file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not read language file '{path}': {reason}",
            {"path": path, "reason": reason},
        )


class LanguageDeserializationError(LanguageError):
    """Raised when a trained language file is corrupt or incompatible."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not deserialize language file '{path}': {reason}",
            {"path": path, "reason": reason},
        )


class InsufficientCorpusError(LanguageError):
    """Raised when a training corpus yields too few usable letters."""

    def __init__(self, length: int, minimum: int):
        super().__init__(
            f"Corpus contains {length} usable letters, at least {minimum} required",
            {"length": length, "minimum": minimum},
        )


class AlphabetLengthUnmatchedError(LanguageError):
    """Raised when no alphabet variant has the requested length."""

    def __init__(self, length: int, available: list[int]):
        super().__init__(
            f"No alphabet of length {length}, available lengths: {available}",
            {"length": length, "available": available},
        )


class AlphabetError(LanguageError):
    """Base exception for malformed alphabet variants."""

    pass


class AlphabetLengthMismatchError(AlphabetError):
    def __init__(self, upper_len: int, lower_len: int):
        super().__init__(
            f"Upper alphabet has {upper_len} letters but lower alphabet has {lower_len}",
            {"upper_len": upper_len, "lower_len": lower_len},
        )


class ScoringTableLengthMismatchError(AlphabetError):
    def __init__(self, alphabet_len: int, table_len: int):
        super().__init__(
            f"Alphabet has {alphabet_len} letters but scoring table has {table_len} entries",
            {"alphabet_len": alphabet_len, "table_len": table_len},
        )


class ScoringIndexOutOfRangeError(AlphabetError):
    def __init__(self, index: int, max_len: int):
        super().__init__(
            f"Scoring table entry {index} is outside 0..{max_len - 1}",
            {"index": index, "max_len": max_len},
        )


class MaxAlphabetLengthExceededError(AlphabetError):
    def __init__(self, alphabet_len: int, max_len: int):
        super().__init__(
            f"Alphabet length {alphabet_len} exceeds maximum of {max_len}",
            {"alphabet_len": alphabet_len, "max_len": max_len},
        )


class RepeatedCharacterError(AlphabetError):
    def __init__(self, alphabet: str):
        super().__init__(
            f"Alphabet '{alphabet}' contains a repeated letter",
            {"alphabet": alphabet},
        )


class SubstitutionsNotPairedError(AlphabetError):
    def __init__(self, substitutions: list[str]):
        super().__init__(
            "Every substitution must be exactly two characters (alias then target)",
            {"substitutions": substitutions},
        )


class SubstitutionsNotUniqueError(AlphabetError):
    def __init__(self, substitutions: list[str]):
        super().__init__(
            "Substitution characters must be unique",
            {"substitutions": substitutions},
        )


class DuplicateAlphabetLengthError(AlphabetError):
    def __init__(self, length: int):
        super().__init__(
            f"More than one alphabet of length {length}",
            {"length": length},
        )


class InvalidSubstitutionTargetError(AlphabetError):
    def __init__(self, substitutions: list[str]):
        super().__init__(
            "Substitution target is not a letter of the alphabet",
            {"substitutions": substitutions},
        )


# ============================================================================
# Engine errors
# ============================================================================


class EngineError(CryptanalysisError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class InvalidKeyError(EngineError, ValueError):
    """Raised when a key cannot be parsed or is not valid for a cipher."""

    def __init__(self, engine_name: str, key: Any, reason: str):
        super().__init__(
            f"Invalid key for {engine_name}: {reason}",
            {"engine_name": engine_name, "key": str(key), "reason": reason},
        )


# ============================================================================
# Analysis errors
# ============================================================================


class AnalysisError(CryptanalysisError):
    """Raised when statistical analysis fails."""

    pass


class InsufficientInputError(AnalysisError):
    """Raised when a statistic is requested on too short a sequence."""

    def __init__(self, statistic: str, length: int, minimum: int):
        super().__init__(
            f"{statistic} requires at least {minimum} letters, got {length}",
            {"statistic": statistic, "length": length, "minimum": minimum},
        )


class NoModularInverseError(AnalysisError):
    """Raised when a value has no inverse modulo the alphabet length."""

    def __init__(self, value: int, modulus: int):
        super().__init__(
            f"{value} has no inverse modulo {modulus}",
            {"value": value, "modulus": modulus},
        )
