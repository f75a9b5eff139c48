#!/usr/bin/env python3
"""Export localization entries to Gridly and prune stale records.

Usage:
    python -m gridly_sync.cli.sync export --entries entries.json [--dry-run]
    python -m gridly_sync.cli.sync export-all --entries entries.json [--dry-run]
    python -m gridly_sync.cli.sync sync --entries entries.json
    python -m gridly_sync.cli.sync export-table --entries rows.json [--dry-run]

Credentials and column layout come from GRIDLY_* environment variables or ``.env``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import math
import sys
from typing import TYPE_CHECKING

from gridly_sync.adapters.gridly import GridlySyncService
from gridly_sync.adapters.text_source import JsonEntrySource
from gridly_sync.config import _ensure_api_key, load_config
from gridly_sync.core.logging_utils import setup_json_logging
from gridly_sync.domain.records import local_refs_for

if TYPE_CHECKING:
    from gridly_sync.adapters.gridly.models import ExportResult, SyncResult
    from gridly_sync.adapters.gridly.sync.serializer import ExportChunk

logger = logging.getLogger("gridly_sync.cli")

COMMANDS = ("export", "export-all", "sync", "export-table")


def _print_plan(chunks: list[ExportChunk]) -> None:
    print("\n=== Gridly Export Plan (DRY RUN) ===\n")
    print(f"Chunks: {len(chunks)}")
    for chunk in chunks[:10]:
        first = chunk.rows[0]["id"] if chunk.rows else "-"
        print(f"  - chunk {chunk.index}: {len(chunk)} rows (first id: {first})")
    if len(chunks) > 10:
        print(f"  ... and {len(chunks) - 10} more")
    print("\nRun without --dry-run to upload.")


def _print_summary(result: ExportResult | SyncResult) -> None:
    print("\n=== Gridly Sync Summary ===")
    entries_updated = getattr(result, "entries_updated", None)
    if entries_updated is not None:
        print(f"Entries updated: {entries_updated}")
        print(f"Chunks sent: {result.chunks_sent}/{result.chunks_total}")
        sync = result.sync
    else:
        sync = result
    if sync is not None:
        print(f"Remote records: {sync.remote_records}")
        print(f"Stale records: {len(sync.stale_ids)}")
        if sync.deletion is not None:
            print(f"Records deleted: {sync.deletion.entries_deleted}")

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for err in result.errors[:10]:
            print(f"  - {err}")


async def run(command: str, entries_path: str, dry_run: bool = False) -> int:
    """Run one CLI command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        cfg = load_config()
        setup_json_logging(cfg.runtime.log_level, log_file=cfg.runtime.log_file)

        source = JsonEntrySource(entries_path)
        service = GridlySyncService(cfg)

        if command == "export-table":
            rows = source.load_rows()
            if dry_run:
                size = cfg.gridly.export_max_records_per_request
                print(f"Would upload {len(rows)} rows in {math.ceil(len(rows) / size)} chunks")
                return 0
            _ensure_api_key(cfg.gridly.export_api_key, name="Gridly export")
            result = await service.export_table(rows)
        else:
            entries = source.load_entries()
            if dry_run and command != "sync":
                _print_plan(
                    service.plan_export(
                        entries, include_target_translations=command == "export-all"
                    )
                )
                return 0

            _ensure_api_key(cfg.gridly.export_api_key, name="Gridly export")
            logger.info(
                "gridly_cli_started",
                extra={"command": command, "entries": len(entries), "dry_run": dry_run},
            )
            if command == "export":
                result = await service.export_native(entries)
            elif command == "export-all":
                result = await service.export_all(entries)
            else:
                result = await service.sync_records(local_refs_for(entries))

        _print_summary(result)
        return 0 if result.success else 1

    except Exception as e:
        logger.exception("gridly_cli_failed", extra={"command": command})
        print(f"\nERROR: {e}")
        return 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Sync localization records with a Gridly view")
    parser.add_argument("command", choices=COMMANDS, help="Pipeline to run")
    parser.add_argument(
        "--entries",
        required=True,
        help="JSON file with localization entries (or data-table rows for export-table)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the upload plan without calling Gridly",
    )
    args = parser.parse_args(argv)

    exit_code = asyncio.run(run(args.command, args.entries, dry_run=args.dry_run))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
