"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from tubelink.domain.entities.locale import Locale
from tubelink.domain.entities.streams import QualityTier

from .defaults import DEFAULT_USER_AGENT

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
QualityName = Literal["lowest", "low", "middle", "high", "highest"]


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/extraction/resolve/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="tubelink", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP transport (YAML section: http.*)
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="Default User-Agent for outgoing requests.",
    )

    # Extraction library locale (YAML section: extraction.*)
    extraction_language: str = Field(
        default="en",
        validation_alias=AliasChoices(
            "extraction_language",
            AliasPath("extraction", "language"),
        ),
        description="Language code passed to the extraction library.",
    )
    extraction_country: str = Field(
        default="US",
        validation_alias=AliasChoices(
            "extraction_country",
            AliasPath("extraction", "country"),
        ),
        description="Country code passed to the extraction library.",
    )

    # Resolution (YAML section: resolve.*)
    default_quality: QualityName = Field(
        default="highest",
        validation_alias=AliasChoices(
            "default_quality",
            AliasPath("resolve", "default_quality"),
        ),
        description="Quality tier used when the caller does not request one.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("extraction_language")
    @classmethod
    def _validate_language(cls, v: str) -> str:
        v = v.strip().lower()
        if not v.isalpha():
            raise ValueError("extraction_language must be a language code like 'en'")
        return v

    @field_validator("extraction_country")
    @classmethod
    def _validate_country(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("default_quality", mode="before")
    @classmethod
    def _normalize_quality(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def locale(self) -> Locale:
        return Locale(
            language=self.extraction_language, country=self.extraction_country
        )

    @property
    def quality(self) -> QualityTier:
        return QualityTier.parse(self.default_quality)

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {"user_agent": self.http_user_agent},
            "extraction": {
                "language": self.extraction_language,
                "country": self.extraction_country,
            },
            "resolve": {"default_quality": self.default_quality},
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read TUBELINK_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - TUBELINK_HTTP_USER_AGENT
    - TUBELINK_EXTRACTION_LANGUAGE
    - TUBELINK_DEFAULT_QUALITY
    - TUBELINK_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="TUBELINK_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_user_agent: Optional[str] = None
    extraction_language: Optional[str] = None
    extraction_country: Optional[str] = None
    default_quality: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
