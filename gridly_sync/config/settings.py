from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .gridly import GridlyConfig

logger = logging.getLogger(__name__)


class RuntimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    request_timeout_sec: int = Field(default=60, validation_alias="REQUEST_TIMEOUT_SEC")
    debug_payloads: bool = Field(default=False, validation_alias="DEBUG_PAYLOADS")
    log_truncate_length: int = Field(default=1000, validation_alias="LOG_TRUNCATE_LENGTH")

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> str:
        log_level = str(value or "INFO").upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            msg = f"Invalid log level: {value}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return log_level

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Any) -> str | None:
        if value in (None, ""):
            return None
        return str(value).strip() or None

    @field_validator("request_timeout_sec", mode="before")
    @classmethod
    def _validate_timeout(cls, value: Any) -> int:
        try:
            timeout = int(str(value or 60))
        except ValueError as exc:
            msg = "Timeout must be a valid integer"
            raise ValueError(msg) from exc
        if timeout <= 0:
            msg = "Timeout must be positive"
            raise ValueError(msg)
        if timeout > 3600:
            msg = "Timeout too large (max 3600 seconds)"
            raise ValueError(msg)
        return timeout

    @field_validator("log_truncate_length", mode="before")
    @classmethod
    def _validate_truncate_length(cls, value: Any) -> int:
        try:
            parsed = int(str(value if value not in (None, "") else 1000))
        except ValueError as exc:
            msg = "Log truncate length must be a valid integer"
            raise ValueError(msg) from exc
        if parsed <= 0:
            msg = "Log truncate length must be positive"
            raise ValueError(msg)
        return parsed


@dataclass(frozen=True)
class AppConfig:
    gridly: GridlyConfig
    runtime: RuntimeConfig


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional ``.env`` file.

    Nested sections are populated by matching the ``validation_alias`` of each
    field against the flat environment.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    gridly: GridlyConfig = Field(default_factory=GridlyConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @model_validator(mode="before")
    @classmethod
    def _build_nested_from_env(cls, data: Any) -> Any:
        """Build nested config dicts from flat environment variables.

        Constructor arguments take precedence over the environment.
        """
        if not isinstance(data, dict):
            return data

        result = dict(data)
        merged_source = {**dict(os.environ), **data}

        for field_name, field_info in cls.model_fields.items():
            annotation = field_info.annotation
            if not isinstance(annotation, type) or not issubclass(annotation, BaseModel):
                continue

            nested_data: dict[str, Any] = {}
            for nested_field_name, nested_field in annotation.model_fields.items():
                env_value = cls._resolve_env_value(merged_source, nested_field)
                if env_value is not None:
                    nested_data[nested_field_name] = env_value

            if nested_data:
                if field_name in result and isinstance(result[field_name], dict):
                    result[field_name] = {**nested_data, **result[field_name]}
                elif field_name not in result:
                    result[field_name] = nested_data

        return result

    @staticmethod
    def _resolve_env_value(data: dict[str, Any], field: Any) -> Any | None:
        """Resolve environment variable value for a field using its aliases."""
        aliases: list[str] = []
        alias = field.validation_alias
        if isinstance(alias, AliasChoices):
            aliases.extend(choice for choice in alias.choices if isinstance(choice, str))
        elif isinstance(alias, str):
            aliases.append(alias)
        if field.alias:
            aliases.append(field.alias)

        for name in aliases:
            if name in data:
                return data[name]
        return None

    def as_app_config(self) -> AppConfig:
        return AppConfig(gridly=self.gridly, runtime=self.runtime)


def load_config(**overrides: Any) -> AppConfig:
    """Load configuration from the environment (and ``.env`` when present).

    Keyword overrides take precedence over environment values, e.g.
    ``load_config(gridly={"export_view_id": "..."})``.

    Raises:
        RuntimeError: If configuration validation fails.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        raise RuntimeError(msg) from exc

    if not settings.gridly.is_configured:
        logger.warning(
            "gridly_credentials_missing",
            extra={"has_api_key": bool(settings.gridly.export_api_key)},
        )
    return settings.as_app_config()
