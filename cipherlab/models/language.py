import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from cipherlab.services.language.alphabet import AlphabetVariant


class AlphabetConfig(BaseModel):
    """Serializable description of one alphabet variant."""

    upper: str
    lower: str
    upper_substitutions: list[str] = Field(default_factory=list)
    lower_substitutions: list[str] = Field(default_factory=list)
    scoring_table: list[int] = Field(default_factory=list)
    expected_ioc: float = 0.0

    def to_variant(self) -> AlphabetVariant:
        """Build and validate the alphabet variant."""
        return AlphabetVariant(
            upper=self.upper,
            lower=self.lower,
            upper_substitutions=list(self.upper_substitutions),
            lower_substitutions=list(self.lower_substitutions),
            scoring_table=list(self.scoring_table),
            expected_ioc=self.expected_ioc,
        )

    @classmethod
    def from_variant(cls, variant: AlphabetVariant) -> "AlphabetConfig":
        return cls(
            upper=variant.upper,
            lower=variant.lower,
            upper_substitutions=variant.upper_substitutions,
            lower_substitutions=variant.lower_substitutions,
            scoring_table=variant.scoring_table,
            expected_ioc=variant.expected_ioc,
        )


class LanguageConfig(BaseModel):
    """Everything needed to train a language model except the corpus."""

    name: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_\-]+$")
    alphabet_len: int = Field(ge=1)
    alphabets: list[AlphabetConfig] = Field(min_length=1)
    substitutions: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_toml(cls, path: str | Path) -> "LanguageConfig":
        """Load a language configuration from a TOML file."""
        with open(path, "rb") as f:
            return cls.model_validate(tomllib.load(f))


class LanguageFileMeta(LanguageConfig):
    """Metadata stored next to the n-gram tables of a trained language."""

    format_version: int = 1
