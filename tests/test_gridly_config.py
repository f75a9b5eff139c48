"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from gridly_sync.config import (
    MAX_RECORDS_PER_REQUEST,
    GridlyConfig,
    MetadataColumn,
    _ensure_api_key,
    _parse_csv_list,
    load_config,
)

pytestmark = pytest.mark.usefixtures("clean_gridly_env")


def test_defaults(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        cfg = load_config()

    gridly = cfg.gridly
    assert gridly.api_url == "https://api.gridly.com"
    assert gridly.source_language_column_id_prefix == "src_"
    assert gridly.target_language_column_id_prefix == "tg_"
    assert gridly.namespace_column_id == "path"
    assert gridly.use_combined_namespace_id is True
    assert gridly.also_export_namespace_column is True
    assert gridly.export_context is True
    assert gridly.export_metadata is False
    assert gridly.export_max_records_per_request == MAX_RECORDS_PER_REQUEST
    assert gridly.delete_batch_size == MAX_RECORDS_PER_REQUEST
    assert gridly.sync_records is False
    assert gridly.culture_mapping["en-US"] == "enUS"
    assert gridly.is_configured is False
    assert cfg.runtime.log_level == "INFO"
    assert any(r.getMessage() == "gridly_credentials_missing" for r in caplog.records)


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRIDLY_API_URL", "https://gridly.example.com/")
    monkeypatch.setenv("GRIDLY_EXPORT_API_KEY", "abc123")
    monkeypatch.setenv("GRIDLY_EXPORT_VIEW_ID", "view-9")
    monkeypatch.setenv("GRIDLY_SYNC_RECORDS", "true")
    monkeypatch.setenv("GRIDLY_EXPORT_MAX_RECORDS_PER_REQUEST", "250")
    monkeypatch.setenv("GRIDLY_TARGET_CULTURES", "fr-FR, ja-JP,fr-FR")
    monkeypatch.setenv("GRIDLY_CULTURE_MAPPING", '{"en-US": "enUS", "pt-PT": "ptPT"}')
    monkeypatch.setenv(
        "GRIDLY_METADATA_MAPPING",
        '{"max_length": {"name": "maxLen", "data_type": "number"}, "speaker": "speaker"}',
    )
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = load_config()

    gridly = cfg.gridly
    assert gridly.api_url == "https://gridly.example.com"
    assert gridly.is_configured is True
    assert gridly.sync_records is True
    assert gridly.export_max_records_per_request == 250
    assert gridly.target_cultures == ("fr-FR", "ja-JP")
    assert gridly.culture_mapping == {"en-US": "enUS", "pt-PT": "ptPT"}
    assert gridly.metadata_mapping == {
        "max_length": MetadataColumn(name="maxLen", data_type="number"),
        "speaker": MetadataColumn(name="speaker", data_type="string"),
    }
    assert cfg.runtime.log_level == "DEBUG"


def test_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRIDLY_EXPORT_VIEW_ID", "from-env")
    cfg = load_config(gridly={"export_view_id": "from-override"})
    assert cfg.gridly.export_view_id == "from-override"


@pytest.mark.parametrize("value", ["0", "1001", "many"])
def test_page_size_out_of_range(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("GRIDLY_EXPORT_MAX_RECORDS_PER_REQUEST", value)
    with pytest.raises(RuntimeError, match="Configuration validation failed"):
        load_config()


def test_invalid_metadata_mapping(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRIDLY_METADATA_MAPPING", "[1, 2]")
    with pytest.raises(RuntimeError):
        load_config()


def test_invalid_api_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRIDLY_API_URL", "ftp://gridly")
    with pytest.raises(RuntimeError):
        load_config()


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError):
        load_config()


def test_config_is_frozen() -> None:
    cfg = GridlyConfig()
    with pytest.raises(ValidationError):
        cfg.export_view_id = "other"  # type: ignore[misc]


def test_ensure_api_key() -> None:
    assert _ensure_api_key("  key  ", name="Gridly export") == "key"
    with pytest.raises(ValueError, match="Gridly export API key is required"):
        _ensure_api_key("", name="Gridly export")
    with pytest.raises(ValueError, match="invalid characters"):
        _ensure_api_key("a b", name="Gridly export")


def test_parse_csv_list() -> None:
    assert _parse_csv_list(None) == ()
    assert _parse_csv_list("a, b,,a") == ("a", "b")
    assert _parse_csv_list(["x", "y"]) == ("x", "y")
