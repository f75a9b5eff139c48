"""File-backed sources of localization entries and data-table rows."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gridly_sync.domain.records import LocalizationEntry

logger = logging.getLogger(__name__)


class TextSourceError(Exception):
    """The entry file is missing or malformed."""


def _read_json_list(path: Path, key: str) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise TextSourceError(f"Entry file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise TextSourceError(f"Entry file is not valid JSON: {path}: {exc}") from exc

    # Either a bare list or an object wrapping it
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise TextSourceError(f"Entry file must contain a list or a '{key}' list: {path}")
    return data


class JsonEntrySource:
    """Reads gathered localization entries from a JSON document.

    Each item needs ``key`` and ``native_culture``; ``namespace``,
    ``native_text``, ``translations``, ``context`` and ``metadata`` are optional.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load_entries(self) -> list[LocalizationEntry]:
        entries: list[LocalizationEntry] = []
        for index, item in enumerate(_read_json_list(self.path, "entries")):
            try:
                entries.append(LocalizationEntry.from_dict(item))
            except (KeyError, TypeError, AttributeError) as exc:
                raise TextSourceError(f"Invalid entry #{index} in {self.path}: {exc!r}") from exc
        logger.info("text_source_loaded", extra={"path": str(self.path), "entries": len(entries)})
        return entries

    def load_rows(self) -> list[dict[str, Any]]:
        """Read data-table rows; each must carry an ``id``."""
        rows = _read_json_list(self.path, "rows")
        for index, row in enumerate(rows):
            if not isinstance(row, dict) or "id" not in row:
                raise TextSourceError(f"Row #{index} in {self.path} has no 'id'")
        return rows
