"""Application settings via Pydantic Settings."""

from functools import lru_cache
import json
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "Comercios Rankings API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias=AliasChoices("CORS_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        """
        Accept either:
        - JSON array string: '["https://a.com","http://localhost:3000"]'
        - Comma-separated string: "https://a.com,http://localhost:3000"
        - Already-parsed list[str]
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError:
                    # Fall back to comma split if env var isn't valid JSON.
                    parsed = s.split(",")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return [str(parsed).strip()]
            return [part.strip() for part in s.split(",") if part.strip()]
        return [str(v).strip()] if str(v).strip() else []

    # Record store (JSON file with the full business collection)
    data_file: Path = Field(
        default=Path("dados_comercios.json"),
        validation_alias=AliasChoices("DATA_FILE", "DADOS_COMERCIOS"),
    )

    # Ranking cache / recompute
    cache_ttl_seconds: float = Field(
        default=60.0,
        gt=0,
        description="How long a computed ranking is served from cache",
    )
    recompute_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=300,
        description="Upper bound for one load + aggregate run; waiters fail after it",
    )

    # Synthetic data generator
    generator_batch_size: int = Field(
        default=10_000,
        ge=1,
        le=1_000_000,
        description="Records appended per call to /gerar-dados",
    )
    bootstrap_records: int = Field(
        default=10_000,
        ge=0,
        description="Records written on startup when the data file does not exist",
    )
    bootstrap_on_startup: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
