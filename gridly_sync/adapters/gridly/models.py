"""Pydantic models for Gridly payloads and sync results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

CellValue = str | bool | int | float


class GridlyCell(BaseModel):
    """One column value of a record row."""

    column_id: str = Field(alias="columnId")
    value: CellValue

    model_config = {"populate_by_name": True, "frozen": True}


class GridlyRecordRow(BaseModel):
    """Row object accepted by the records endpoint."""

    id: str
    path: str | None = None
    cells: list[GridlyCell] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DeleteRecordsRequest(BaseModel):
    """Request body for deleting records from a view."""

    ids: list[str]


class DeleteResult(BaseModel):
    """Aggregate outcome of one batched delete pass."""

    success: bool = True
    entries_requested: int = 0
    entries_deleted: int = 0
    batches_total: int = 0
    batches_completed: int = 0
    errors: list[str] = Field(default_factory=list)


class SyncResult(BaseModel):
    """Outcome of fetching the remote view and pruning stale records."""

    success: bool = True
    error: str | None = None
    remote_records: int = 0
    local_records: int = 0
    stale_ids: list[str] = Field(default_factory=list)
    deletion: DeleteResult | None = None
    errors: list[str] = Field(default_factory=list)


class ExportResult(BaseModel):
    """Outcome of one export run, including the follow-up sync when it ran."""

    success: bool = True
    error: str | None = None
    entries_updated: int = 0
    chunks_total: int = 0
    chunks_sent: int = 0
    sync: SyncResult | None = None
    errors: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
