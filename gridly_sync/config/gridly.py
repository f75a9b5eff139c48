from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from gridly_sync.domain.culture import DEFAULT_CULTURE_MAPPING

from ._validators import _parse_csv_list, _parse_json_object

logger = logging.getLogger(__name__)

MAX_RECORDS_PER_REQUEST = 1000


class MetadataColumn(BaseModel):
    """Gridly column that receives one metadata key."""

    model_config = ConfigDict(frozen=True)

    name: str
    data_type: Literal["string", "number"] = "string"


class GridlyConfig(BaseModel):
    """Gridly view, column layout and export behaviour."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_url: str = Field(default="https://api.gridly.com", validation_alias="GRIDLY_API_URL")
    export_api_key: str = Field(default="", validation_alias="GRIDLY_EXPORT_API_KEY")
    export_view_id: str = Field(default="", validation_alias="GRIDLY_EXPORT_VIEW_ID")

    source_language_column_id_prefix: str = Field(
        default="src_", validation_alias="GRIDLY_SOURCE_COLUMN_PREFIX"
    )
    target_language_column_id_prefix: str = Field(
        default="tg_", validation_alias="GRIDLY_TARGET_COLUMN_PREFIX"
    )
    namespace_column_id: str = Field(default="path", validation_alias="GRIDLY_NAMESPACE_COLUMN_ID")
    use_combined_namespace_id: bool = Field(
        default=True, validation_alias="GRIDLY_USE_COMBINED_NAMESPACE_ID"
    )
    also_export_namespace_column: bool = Field(
        default=True, validation_alias="GRIDLY_ALSO_EXPORT_NAMESPACE_COLUMN"
    )

    export_context: bool = Field(default=True, validation_alias="GRIDLY_EXPORT_CONTEXT")
    context_column_id: str = Field(default="context", validation_alias="GRIDLY_CONTEXT_COLUMN_ID")
    export_metadata: bool = Field(default=False, validation_alias="GRIDLY_EXPORT_METADATA")
    metadata_mapping: dict[str, MetadataColumn] = Field(
        default_factory=dict, validation_alias="GRIDLY_METADATA_MAPPING"
    )

    export_max_records_per_request: int = Field(
        default=MAX_RECORDS_PER_REQUEST,
        validation_alias="GRIDLY_EXPORT_MAX_RECORDS_PER_REQUEST",
    )
    delete_batch_size: int = Field(
        default=MAX_RECORDS_PER_REQUEST, validation_alias="GRIDLY_DELETE_BATCH_SIZE"
    )
    sync_records: bool = Field(
        default=False,
        validation_alias="GRIDLY_SYNC_RECORDS",
        description="Delete stale remote records after a native-culture export",
    )

    target_cultures: tuple[str, ...] = Field(default=(), validation_alias="GRIDLY_TARGET_CULTURES")
    culture_mapping: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CULTURE_MAPPING),
        validation_alias="GRIDLY_CULTURE_MAPPING",
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def _validate_api_url(cls, value: Any) -> str:
        url = str(value or "").strip()
        if not url:
            return "https://api.gridly.com"
        if not url.startswith(("http://", "https://")):
            msg = "Gridly API URL must start with http:// or https://"
            raise ValueError(msg)
        return url.rstrip("/")

    @field_validator("export_api_key", "export_view_id", mode="before")
    @classmethod
    def _validate_credential(cls, value: Any, info: ValidationInfo) -> str:
        if value in (None, ""):
            return ""
        raw = str(value).strip()
        if len(raw) > 500:
            msg = f"Gridly {info.field_name.replace('_', ' ')} appears to be too long"
            raise ValueError(msg)
        if any(ch.isspace() for ch in raw):
            msg = f"Gridly {info.field_name.replace('_', ' ')} contains whitespace"
            raise ValueError(msg)
        return raw

    @field_validator("export_max_records_per_request", "delete_batch_size", mode="before")
    @classmethod
    def _validate_page_size(cls, value: Any, info: ValidationInfo) -> int:
        try:
            parsed = int(str(value if value not in (None, "") else MAX_RECORDS_PER_REQUEST))
        except ValueError as exc:
            msg = f"{info.field_name.replace('_', ' ').capitalize()} must be a valid integer"
            raise ValueError(msg) from exc
        if parsed < 1 or parsed > MAX_RECORDS_PER_REQUEST:
            msg = (
                f"{info.field_name.replace('_', ' ').capitalize()} must be between 1 "
                f"and {MAX_RECORDS_PER_REQUEST}"
            )
            raise ValueError(msg)
        return parsed

    @field_validator("target_cultures", mode="before")
    @classmethod
    def _validate_target_cultures(cls, value: Any) -> tuple[str, ...]:
        return _parse_csv_list(value)

    @field_validator("culture_mapping", mode="before")
    @classmethod
    def _validate_culture_mapping(cls, value: Any) -> dict[str, str]:
        if value in (None, ""):
            return dict(DEFAULT_CULTURE_MAPPING)
        parsed = _parse_json_object(value, name="Gridly culture mapping")
        return {str(k): str(v) for k, v in parsed.items()}

    @field_validator("metadata_mapping", mode="before")
    @classmethod
    def _validate_metadata_mapping(cls, value: Any) -> dict[str, Any]:
        parsed = _parse_json_object(value, name="Gridly metadata mapping")
        mapping: dict[str, Any] = {}
        for key, column in parsed.items():
            # A bare string is shorthand for a string-typed column
            mapping[str(key)] = {"name": column} if isinstance(column, str) else column
        return mapping

    @property
    def is_configured(self) -> bool:
        return bool(self.export_api_key and self.export_view_id)
