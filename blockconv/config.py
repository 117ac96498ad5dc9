"""Configuration management with Pydantic settings and per-run copy options."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blockconv.errors import ConfigurationError

ConversionName = Literal["upper_case", "lower_case", "trim_spaces"]

# Application order of the converter chain, independent of flag order.
CONVERSION_ORDER: tuple[ConversionName, ...] = ("trim_spaces", "upper_case", "lower_case")

DEFAULT_BLOCK_SIZE = 1024


class Settings(BaseSettings):
    """Process-wide blockconv settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKCONV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_block_size: int = Field(
        default=DEFAULT_BLOCK_SIZE,
        ge=1,
        description="Read block size used when --block-size is not given",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for diagnostics written to stderr",
    )

    max_stalled_writes: int = Field(
        default=16,
        ge=1,
        description="Consecutive zero-byte writes tolerated before the sink is declared stuck",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class CopyOptions(BaseModel):
    """Validated parameters of a single copy run."""

    model_config = ConfigDict(frozen=True)

    source_path: Path | None = None
    target_path: Path | None = None
    offset: int = Field(default=0, ge=0)
    limit: int | None = Field(default=None, ge=0)
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, ge=1)
    conversions: tuple[ConversionName, ...] = ()

    @field_validator("conversions", mode="before")
    @classmethod
    def _split_conversions(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [entry.strip() for entry in value.strip().split(",")]
            value = [entry for entry in value if entry]
        if isinstance(value, (list, tuple)):
            for entry in value:
                if entry not in CONVERSION_ORDER:
                    raise ValueError(f"unknown conversion type: {entry}")
        return value

    @field_validator("conversions")
    @classmethod
    def _canonical_order(cls, value: tuple[ConversionName, ...]) -> tuple[ConversionName, ...]:
        selected = set(value)
        if {"upper_case", "lower_case"} <= selected:
            raise ValueError("upper_case and lower_case cannot be selected at the same time")
        return tuple(name for name in CONVERSION_ORDER if name in selected)

    @model_validator(mode="after")
    def _distinct_paths(self) -> "CopyOptions":
        if (
            self.source_path is not None
            and self.target_path is not None
            and Path(self.source_path).expanduser() == Path(self.target_path).expanduser()
        ):
            raise ValueError("input and output must be different files")
        return self

    @classmethod
    def build(cls, **values: Any) -> "CopyOptions":
        """Construct options, reporting validation problems as ``ConfigurationError``."""

        try:
            return cls(**values)
        except pydantic.ValidationError as exc:
            details = "; ".join(_describe_error(error) for error in exc.errors())
            raise ConfigurationError(f"Invalid options: {details}") from exc


def _describe_error(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "__root__")
    message = str(error.get("msg", "invalid value"))
    message = message.removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
