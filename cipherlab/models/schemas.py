from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cipherlab.models.language import LanguageConfig


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    MONOALPHABETIC = "monoalphabetic"
    POLYALPHABETIC = "polyalphabetic"
    TRANSPOSITION = "transposition"


class CipherType(str, Enum):
    """Specific cipher types."""

    CAESAR = "caesar"
    AFFINE = "affine"
    SIMPLE_SUBSTITUTION = "simple_substitution"
    VIGENERE = "vigenere"
    BEAUFORT = "beaufort"
    BELLASO = "bellaso"
    PORTA = "porta"
    AUTOKEY = "autokey"
    COLUMNAR = "columnar"
    BLOCK = "block"
    RAIL_FENCE = "rail_fence"


# ============================================================================
# Statistics Schemas
# ============================================================================


class FrequencyData(BaseModel):
    """Character frequency data."""

    character: str
    count: int
    frequency: float = Field(ge=0.0, le=1.0)


class PeriodicIoc(BaseModel):
    """Mean index of coincidence of the columns for one period."""

    period: int = Field(ge=1)
    ioc: float


class StatisticsProfile(BaseModel):
    """Complete statistical analysis profile."""

    model_config = ConfigDict(from_attributes=True)

    language: str
    alphabet_len: int

    # Basic metrics
    length: int
    unique_chars: int

    # Frequency analysis
    character_frequencies: list[FrequencyData]

    # Statistical measures
    index_of_coincidence: float
    expected_ioc: float
    random_ioc: float
    periodic_ioc: list[PeriodicIoc] = []
    best_period: int | None = None
    entropy: float
    chi_squared: float
    chi_squared_p_value: float


# ============================================================================
# Request Schemas
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request schema for /analyze endpoint."""

    text: str = Field(min_length=1, max_length=100_000)
    language: str | None = None
    alphabet_len: int | None = Field(default=None, ge=1, le=32)
    max_period: int | None = Field(default=None, ge=1, le=100)


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | int | dict[str, Any] | None = None
    language: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | int | dict[str, Any] | None = None
    language: str | None = None


class TrainLanguageRequest(BaseModel):
    """Request schema for training a language model."""

    config: LanguageConfig
    corpus: str = Field(min_length=1)


# ============================================================================
# Response Schemas
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response schema for /analyze endpoint."""

    model_config = ConfigDict(from_attributes=True)

    statistics: StatisticsProfile
    explanations: list[str]


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    cipher_type: CipherType
    key_used: str
    score: float
    solved: bool
    explanation: str


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherType
    key_used: str


class AlphabetSummary(BaseModel):
    length: int
    upper: str
    expected_ioc: float


class LanguageSummary(BaseModel):
    """A trained language available to the service."""

    name: str
    alphabet_len: int
    alphabets: list[AlphabetSummary]


class LanguageListResponse(BaseModel):
    languages: list[LanguageSummary]
    default: str


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
