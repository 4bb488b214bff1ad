from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Cipherlab"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Language models
    language_dir: Path = Path("./languages")
    default_language: str = "english"

    # Analysis settings
    max_ciphertext_length: int = 100_000
    max_ioc_period: int = 30
    random_seed: int | None = None

    # Substitution hill-climbing
    substitution_max_restarts: int = 1000
    substitution_tolerance: float = 0.1
    substitution_max_repetitions: int = 3

    # Shift-stream coordinate ascent
    shift_max_key_length: int = 30
    shift_tolerance: float = 0.1

    # Transposition search
    transposition_min_key_length: int = 3
    transposition_max_key_length: int = 15
    railfence_max_rails: int = 50

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
