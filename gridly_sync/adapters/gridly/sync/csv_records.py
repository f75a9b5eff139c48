"""Quote-aware tokenizer for Gridly CSV exports and remote record extraction.

The export is RFC 4180-like: comma delimited, fields optionally wrapped in
double quotes, a doubled quote inside a quoted field is a literal quote, and
records end at CR or LF. Quoted fields may span lines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridly_sync.adapters.gridly.sync.constants import PATH_COLUMN, RECORD_ID_COLUMN
from gridly_sync.adapters.gridly.sync.errors import MissingColumnError
from gridly_sync.domain.records import RemoteRow

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ","
LINE_BREAKS = ("\r", "\n")


class CsvTokenizer:
    """Character-level state machine that yields one list of fields per record."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[list[str]]:
        return self.rows()

    def rows(self) -> Iterator[list[str]]:
        text = self.text
        length = len(text)
        fields: list[str] = []
        current: list[str] = []
        in_quotes = False
        i = 0

        while i < length:
            char = text[i]
            if in_quotes:
                if char == QUOTE:
                    if i + 1 < length and text[i + 1] == QUOTE:
                        current.append(QUOTE)
                        i += 1
                    else:
                        in_quotes = False
                else:
                    current.append(char)
            elif char == QUOTE:
                in_quotes = True
            elif char == DELIMITER:
                fields.append("".join(current))
                current = []
            elif char in LINE_BREAKS:
                if fields or current:
                    fields.append("".join(current))
                    current = []
                    yield fields
                    fields = []
            else:
                current.append(char)
            i += 1

        # Last record without a trailing line break
        if fields or current:
            fields.append("".join(current))
            yield fields

    def header(self) -> list[str]:
        """Return the first record only, without scanning the rest of the text."""
        return next(self.rows(), [])


def trim_quotes(value: str) -> str:
    """Strip one leading and one trailing double quote when present."""
    if value.startswith(QUOTE):
        value = value[1:]
    if value.endswith(QUOTE):
        value = value[:-1]
    return value


def locate_columns(header: list[str]) -> tuple[int, int]:
    """Find the zero-based (record id, path) column indices in a header row.

    Raises:
        MissingColumnError: If either column is absent.
    """
    record_id_index = -1
    path_index = -1
    for index, name in enumerate(header):
        column = trim_quotes(name).casefold()
        if column == RECORD_ID_COLUMN.casefold():
            record_id_index = index
        elif column == PATH_COLUMN.casefold():
            path_index = index

    missing = [
        name
        for name, index in ((RECORD_ID_COLUMN, record_id_index), (PATH_COLUMN, path_index))
        if index == -1
    ]
    if missing:
        raise MissingColumnError(missing)
    return record_id_index, path_index


def parse_remote_records(csv_text: str) -> list[RemoteRow]:
    """Extract one :class:`RemoteRow` per data row of a view export.

    Ids are returned as exported, namespace prefix included.

    Raises:
        MissingColumnError: If the header lacks the record id or path column.
    """
    tokenizer = CsvTokenizer(csv_text)
    record_id_index, path_index = locate_columns(tokenizer.header())
    min_fields = max(record_id_index, path_index) + 1

    records: list[RemoteRow] = []
    skipped_short = 0
    for fields in tokenizer:
        if len(fields) < min_fields:
            skipped_short += 1
            continue
        ref = RemoteRow(
            id=trim_quotes(fields[record_id_index]), path=trim_quotes(fields[path_index])
        )
        if ref.id == RECORD_ID_COLUMN:
            continue
        records.append(ref)

    logger.debug(
        "gridly_csv_parsed",
        extra={"remote_records": len(records), "skipped_short_rows": skipped_short},
    )
    return records
