"""Sync error types and helpers for collecting them into results."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridly_sync.adapters.gridly.models import DeleteResult, ExportResult, SyncResult


class GridlySyncError(Exception):
    """Base exception for pipeline errors that are not transport failures."""


class MissingColumnError(GridlySyncError):
    """The CSV export lacks a column needed to identify records."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Failed to identify {' or '.join(missing)} columns in CSV")
        self.missing = missing


def record_error(result: ExportResult | SyncResult | DeleteResult, message: str) -> None:
    """Mark ``result`` as failed and keep ``message`` (first one wins as ``error``)."""
    result.success = False
    if message not in result.errors:
        result.errors.append(message)
    if hasattr(result, "error") and result.error is None:
        result.error = message
