"""Conversion of localization entries and data-table rows into Gridly record rows."""

from __future__ import annotations

import enum
import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from gridly_sync.adapters.gridly.models import GridlyCell, GridlyRecordRow
from gridly_sync.adapters.gridly.sync.constants import (
    CONTEXT_LINE_MARKER,
    CONTEXT_LINE_REPLACEMENT,
    TABLE_PATH_FIELD,
)
from gridly_sync.domain.records import composite_record_id

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from gridly_sync.config import GridlyConfig, MetadataColumn
    from gridly_sync.domain.culture import CultureMapper
    from gridly_sync.domain.records import LocalizationEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _atoi(value: str) -> int:
    """Parse the leading integer of ``value`` the way C ``atoi`` does (0 when absent)."""
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of at most ``size`` items, preserving order."""
    if size < 1:
        msg = "Chunk size must be positive"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


@dataclass(frozen=True)
class ExportOptions:
    """Flags and column layout used when turning entries into rows."""

    include_target_translations: bool = False
    use_combined_key: bool = True
    export_namespace: bool = True
    namespace_column_id: str = "path"
    source_prefix: str = "src_"
    target_prefix: str = "tg_"
    export_context: bool = False
    context_column_id: str = "context"
    export_metadata: bool = False
    metadata_mapping: Mapping[str, MetadataColumn] = field(default_factory=dict)
    target_cultures: tuple[str, ...] = ()
    page_size: int = 1000

    @classmethod
    def from_config(
        cls, cfg: GridlyConfig, *, include_target_translations: bool = False
    ) -> ExportOptions:
        return cls(
            include_target_translations=include_target_translations,
            use_combined_key=cfg.use_combined_namespace_id,
            export_namespace=(
                not cfg.use_combined_namespace_id or cfg.also_export_namespace_column
            ),
            namespace_column_id=cfg.namespace_column_id,
            source_prefix=cfg.source_language_column_id_prefix,
            target_prefix=cfg.target_language_column_id_prefix,
            export_context=cfg.export_context,
            context_column_id=cfg.context_column_id,
            export_metadata=cfg.export_metadata,
            metadata_mapping=dict(cfg.metadata_mapping),
            target_cultures=cfg.target_cultures,
            page_size=cfg.export_max_records_per_request,
        )

    @property
    def uses_path_field(self) -> bool:
        return self.namespace_column_id == "path"


@dataclass(frozen=True)
class ExportChunk:
    """One upload request worth of entries and their serialized rows."""

    index: int
    entries: list[LocalizationEntry]
    rows: list[dict[str, Any]]

    def __len__(self) -> int:
        return len(self.rows)

    def to_json(self) -> str:
        return json.dumps(self.rows, ensure_ascii=False)


class RecordSerializer:
    """Builds Gridly record rows from localization entries."""

    def __init__(self, cultures: CultureMapper, options: ExportOptions) -> None:
        self.cultures = cultures
        self.options = options

    def serialize_entry(self, entry: LocalizationEntry) -> GridlyRecordRow:
        opts = self.options
        row = GridlyRecordRow(
            id=composite_record_id(entry.namespace, entry.key, use_combined=opts.use_combined_key)
        )
        cells: list[GridlyCell] = []

        if opts.export_namespace:
            if opts.uses_path_field:
                row.path = entry.namespace
            elif opts.namespace_column_id:
                cells.append(GridlyCell(column_id=opts.namespace_column_id, value=entry.namespace))

        native_code = self.cultures.to_gridly(entry.native_culture)
        if native_code is not None:
            cells.append(
                GridlyCell(column_id=opts.source_prefix + native_code, value=entry.native_text)
            )

        if opts.export_context and entry.context:
            cells.append(
                GridlyCell(
                    column_id=opts.context_column_id,
                    value=entry.context.replace(CONTEXT_LINE_MARKER, CONTEXT_LINE_REPLACEMENT),
                )
            )

        if opts.export_metadata:
            cells.extend(self._metadata_cells(entry))

        if opts.include_target_translations:
            cells.extend(self._target_cells(entry))

        row.cells = cells
        return row

    def _metadata_cells(self, entry: LocalizationEntry) -> list[GridlyCell]:
        cells: list[GridlyCell] = []
        for key, raw in entry.metadata.items():
            column = self.options.metadata_mapping.get(key)
            if column is None:
                continue
            value: str | int = _atoi(raw) if column.data_type == "number" else raw
            cells.append(GridlyCell(column_id=column.name, value=value))
        return cells

    def _target_cells(self, entry: LocalizationEntry) -> list[GridlyCell]:
        cells: list[GridlyCell] = []
        cultures = self.options.target_cultures or tuple(entry.translations)
        for culture in cultures:
            if culture == entry.native_culture:
                continue
            text = entry.localized_text(culture)
            if text is None:
                continue
            code = self.cultures.to_gridly(culture)
            if code is None:
                logger.debug("gridly_culture_unmapped", extra={"culture": culture})
                continue
            cells.append(GridlyCell(column_id=self.options.target_prefix + code, value=text))
        return cells

    def serialize(self, entries: Sequence[LocalizationEntry]) -> list[dict[str, Any]]:
        return [self.serialize_entry(entry).to_payload() for entry in entries]

    def build_chunks(self, entries: Sequence[LocalizationEntry]) -> list[ExportChunk]:
        """Split ``entries`` into upload chunks of at most ``page_size`` rows."""
        return [
            ExportChunk(index=index, entries=chunk, rows=self.serialize(chunk))
            for index, chunk in enumerate(chunked(entries, self.options.page_size))
        ]


def _table_cell_value(value: Any) -> Any:
    if isinstance(value, bool | int | float):
        return value
    if isinstance(value, enum.Enum):
        return value.name
    if value is None:
        return ""
    return str(value)


def serialize_table_rows(
    rows: Sequence[Mapping[str, Any]], start: int = 0, max_size: int | None = None
) -> list[dict[str, Any]]:
    """Convert data-table rows (``id`` plus typed fields) into record rows.

    A ``_path`` field becomes the row path; every other field becomes a cell.
    """
    if start >= len(rows):
        return []
    end = len(rows) if max_size is None else min(start + max_size, len(rows))

    payload: list[dict[str, Any]] = []
    for row in rows[start:end]:
        cells = [
            GridlyCell(column_id=name, value=_table_cell_value(value))
            for name, value in row.items()
            if name not in ("id", TABLE_PATH_FIELD)
        ]
        record = GridlyRecordRow(
            id=str(row["id"]), path=str(row.get(TABLE_PATH_FIELD) or ""), cells=cells
        )
        payload.append(record.to_payload())
    return payload
