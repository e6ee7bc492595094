"""Typed configuration models for faultline runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "faultline" / "faultline.yaml"


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "faultline"
    environment: str = "dev"


class DecoderSettings(BaseModel):
    """JSON request decoder settings under ``http.decoder``."""

    skip_check_content_type: bool = False
    disallow_unknown_fields: bool = False
    use_decimal: bool = False
    max_body_bytes: int = Field(default=1_048_576, gt=0)


class ClientSettings(BaseModel):
    """Outbound HTTP client settings under ``http.client``."""

    base_url: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    follow_redirects: bool = False


class HttpSettings(BaseModel):
    """HTTP interop subtree."""

    decoder: DecoderSettings = Field(default_factory=DecoderSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


class FaultlineSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply faultline precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls.config_path,
                yaml_file_encoding="utf-8",
            ),
        )
