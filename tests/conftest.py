"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Gridly sync tests.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

from gridly_sync.adapters.gridly.client import GridlyHTTPStatusError
from gridly_sync.config import AppConfig, GridlyConfig, RuntimeConfig
from gridly_sync.domain.records import LocalizationEntry


class FakeGridlyClient:
    """In-memory stand-in for ``GridlyClient`` that records every call."""

    def __init__(
        self,
        csv_text: str = "Record ID,Path\n",
        *,
        fail_upload_at: int | None = None,
        fail_delete_batches: tuple[int, ...] = (),
        fail_export: bool = False,
    ) -> None:
        self.csv_text = csv_text
        self.fail_upload_at = fail_upload_at
        self.fail_delete_batches = fail_delete_batches
        self.fail_export = fail_export
        self.uploads: list[list[dict[str, Any]]] = []
        self.deletes: list[list[str]] = []
        self.export_calls = 0
        self.opened: list[tuple[str, str, float]] = []

    async def __aenter__(self) -> FakeGridlyClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def add_records(self, view_id: str, rows: list[dict[str, Any]]) -> list[Any]:
        index = len(self.uploads)
        self.uploads.append(rows)
        if self.fail_upload_at == index:
            raise GridlyHTTPStatusError(500, "upload failed", "add_records")
        return list(rows)

    async def export_view_csv(self, view_id: str) -> str:
        self.export_calls += 1
        if self.fail_export:
            raise GridlyHTTPStatusError(403, "forbidden", "export_view_csv")
        return self.csv_text

    async def delete_records(self, view_id: str, ids: list[str]) -> None:
        index = len(self.deletes)
        self.deletes.append(list(ids))
        if index in self.fail_delete_batches:
            raise GridlyHTTPStatusError(500, "delete failed", "delete_records")

    def factory(self, api_url: str, api_key: str, timeout: float) -> FakeGridlyClient:
        self.opened.append((api_url, api_key, timeout))
        return self


def make_entry(
    key: str,
    namespace: str = "UI",
    text: str | None = None,
    *,
    culture: str = "en-US",
    translations: dict[str, str] | None = None,
    context: str | None = None,
    metadata: dict[str, str] | None = None,
) -> LocalizationEntry:
    return LocalizationEntry(
        key=key,
        namespace=namespace,
        native_culture=culture,
        native_text=text if text is not None else f"{key} text",
        translations=translations or {},
        context=context,
        metadata=metadata or {},
    )


@pytest.fixture
def gridly_config() -> GridlyConfig:
    return GridlyConfig(
        export_api_key="gridly-test-key",
        export_view_id="view-123",
        export_context=False,
    )


@pytest.fixture
def app_config(gridly_config: GridlyConfig) -> AppConfig:
    return AppConfig(gridly=gridly_config, runtime=RuntimeConfig())


@pytest.fixture
def fake_client() -> FakeGridlyClient:
    return FakeGridlyClient()


@pytest.fixture
def clean_gridly_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Drop GRIDLY_* variables and run from a directory without ``.env``."""
    for name in list(os.environ):
        if name.startswith("GRIDLY_") or name in ("LOG_LEVEL", "LOG_FILE", "DEBUG_PAYLOADS"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
