"""Application configuration with validation."""

from enum import Enum
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("json", "text")


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """The configuration is not acceptable for the current environment."""


class Settings(BaseSettings):
    """
    Notekeeper settings.

    Read from environment variables (case-insensitive) or a local ``.env``
    file, e.g. ``DATA_DIR=/var/lib/notekeeper``.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="development or production"
    )

    # Comma separated; "*" is refused by get_cors_origins().
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Browser origins allowed to call the API"
    )

    # Records live in <data_dir>/documents/<id>.json and <data_dir>/folders/<id>.json
    data_dir: Path = Field(
        default=Path("./data"),
        description="Root directory for stored records"
    )

    host: str = Field(default="0.0.0.0", description="Bind address for python -m notekeeper")
    port: int = Field(default=5000, description="Bind port for python -m notekeeper")

    # Per client IP, /api routes only. 0 disables throttling.
    rate_limit_per_minute: int = Field(
        default=120,
        description="Sustained API requests allowed per client per minute"
    )

    log_level: str = Field(default="INFO", description="One of " + ", ".join(_LOG_LEVELS))
    log_format: str = Field(default="json", description="'json' (structured) or 'text'")

    @property
    def documents_dir(self) -> Path:
        return self.data_dir / "documents"

    @property
    def folders_dir(self) -> Path:
        return self.data_dir / "folders"

    def get_cors_origins(self) -> List[str]:
        """Configured origins as a list. Raises ValueError on a wildcard."""
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) is not allowed; list the origins in CORS_ALLOWED_ORIGINS"
            )
        return origins

    def localhost_origins(self) -> List[str]:
        return [o for o in self.get_cors_origins() if "localhost" in o or "127.0.0.1" in o]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level {v!r}. Must be one of: {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError(f"Invalid log format {v!r}. Must be 'json' or 'text'")
        return fmt

    def validate_production_config(self) -> None:
        """Refuse to start in production with a development-only setup.

        Development configs pass; main.py logs the same findings as warnings.

        Raises:
            ConfigurationError: production with localhost CORS origins.
        """
        if self.environment != Environment.PRODUCTION:
            return

        problems = []
        local = self.localhost_origins()
        if local:
            problems.append(f"CORS allows localhost origins {local}")

        if problems:
            raise ConfigurationError(
                "Production configuration rejected:\n  - " + "\n  - ".join(problems)
            )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
