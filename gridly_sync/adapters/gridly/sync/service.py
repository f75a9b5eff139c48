"""Public Gridly sync service composed of the serializer, pump, parser and deleter."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from gridly_sync.adapters.gridly.client import GridlyClient, GridlyClientError
from gridly_sync.adapters.gridly.models import ExportResult, SyncResult
from gridly_sync.adapters.gridly.sync.batch_delete import BatchDeleteCoordinator
from gridly_sync.adapters.gridly.sync.csv_records import parse_remote_records
from gridly_sync.adapters.gridly.sync.errors import GridlySyncError, record_error
from gridly_sync.adapters.gridly.sync.reconcile import Reconciler
from gridly_sync.adapters.gridly.sync.serializer import (
    ExportChunk,
    ExportOptions,
    RecordSerializer,
    serialize_table_rows,
)
from gridly_sync.adapters.gridly.sync.upload_queue import PipelineState, UploadQueuePump
from gridly_sync.config import AppConfig, RuntimeConfig
from gridly_sync.core.logging_utils import generate_correlation_id, truncate_log_content
from gridly_sync.domain.culture import CultureMapper
from gridly_sync.domain.records import local_refs_for

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from gridly_sync.adapters.gridly.sync.protocols import (
        GridlyClientFactory,
        GridlyClientProtocol,
    )
    from gridly_sync.config import GridlyConfig
    from gridly_sync.domain.records import LocalizationEntry, LocalRecordRef

logger = logging.getLogger(__name__)


class GridlySyncService:
    """Export localization entries to a Gridly view and prune stale records.

    This is a thin orchestrator: row building, upload sequencing, CSV parsing,
    reconciliation and batched deletes live in their own collaborators.
    """

    def __init__(
        self,
        config: AppConfig | GridlyConfig,
        client_factory: GridlyClientFactory | None = None,
        *,
        cultures: CultureMapper | None = None,
        on_complete: Callable[[ExportResult | SyncResult], None] | None = None,
    ) -> None:
        if isinstance(config, AppConfig):
            self.gridly = config.gridly
            self.runtime = config.runtime
        else:
            self.gridly = config
            self.runtime = RuntimeConfig()
        self._client_factory = client_factory or GridlyClient
        self.cultures = cultures or CultureMapper(self.gridly.culture_mapping)
        self.on_complete = on_complete

        self._state = PipelineState.IDLE
        self._pump: UploadQueuePump | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    def has_requests_pending(self) -> bool:
        return self._pump is not None and self._pump.has_requests_pending()

    def _open_client(self) -> Any:
        return self._client_factory(
            self.gridly.api_url, self.gridly.export_api_key, float(self.runtime.request_timeout_sec)
        )

    def _check_configured(self, result: ExportResult | SyncResult) -> bool:
        if self.gridly.is_configured:
            return True
        record_error(result, "Gridly export API key or view ID is not configured")
        logger.error("gridly_not_configured")
        return False

    def _finish(self, result: Any, correlation_id: str) -> Any:
        self._state = PipelineState.IDLE if result.success else PipelineState.FAILED
        if self.on_complete is not None:
            self.on_complete(result)
        logger.info(
            "gridly_pipeline_finished",
            extra={
                "correlation_id": correlation_id,
                "success": result.success,
                "state": self._state.value,
            },
        )
        return result

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_native(self, entries: Sequence[LocalizationEntry]) -> ExportResult:
        """Upload source-culture text; prune stale records when ``sync_records`` is on."""
        return await self._export(
            entries, include_target_translations=False, reconcile=self.gridly.sync_records
        )

    async def export_all(self, entries: Sequence[LocalizationEntry]) -> ExportResult:
        """Upload source text with every translation, then always prune stale records."""
        return await self._export(entries, include_target_translations=True, reconcile=True)

    def plan_export(
        self, entries: Sequence[LocalizationEntry], *, include_target_translations: bool = False
    ) -> list[ExportChunk]:
        options = ExportOptions.from_config(
            self.gridly, include_target_translations=include_target_translations
        )
        return RecordSerializer(self.cultures, options).build_chunks(entries)

    async def _export(
        self,
        entries: Sequence[LocalizationEntry],
        *,
        include_target_translations: bool,
        reconcile: bool,
    ) -> ExportResult:
        start_time = time.time()
        correlation_id = generate_correlation_id()
        result = ExportResult()

        if not self._check_configured(result):
            return self._finish(result, correlation_id)

        chunks = self.plan_export(entries, include_target_translations=include_target_translations)
        result.chunks_total = len(chunks)
        logger.info(
            "gridly_export_started",
            extra={
                "correlation_id": correlation_id,
                "entries": len(entries),
                "chunks": len(chunks),
                "include_targets": include_target_translations,
                "reconcile": reconcile,
            },
        )
        if not chunks:
            logger.warning("gridly_export_no_entries", extra={"correlation_id": correlation_id})
            return self._finish(result, correlation_id)

        try:
            async with self._open_client() as client:
                upload = await self._upload(client, chunks, correlation_id)
                self._merge_upload(result, upload)
                if upload.success and reconcile:
                    result.sync = await self._reconcile(
                        client, local_refs_for(entries), correlation_id
                    )
                    for message in result.sync.errors:
                        record_error(result, message)
        except GridlyClientError as exc:
            record_error(result, f"Gridly client error: {exc}")
            logger.exception("gridly_export_failed", extra={"correlation_id": correlation_id})

        result.duration_seconds = time.time() - start_time
        logger.info(
            "gridly_export_complete",
            extra={
                "correlation_id": correlation_id,
                "entries_updated": result.entries_updated,
                "chunks_sent": result.chunks_sent,
                "stale_records": len(result.sync.stale_ids) if result.sync else 0,
                "total_duration": result.duration_seconds,
            },
        )
        return self._finish(result, correlation_id)

    async def export_table(self, rows: Sequence[Mapping[str, Any]]) -> ExportResult:
        """Upload data-table rows as records. No reconciliation follows."""
        start_time = time.time()
        correlation_id = generate_correlation_id()
        result = ExportResult()

        if not self._check_configured(result):
            return self._finish(result, correlation_id)

        page_size = self.gridly.export_max_records_per_request
        chunks = [
            ExportChunk(
                index=index,
                entries=[],
                rows=serialize_table_rows(rows, start=start, max_size=page_size),
            )
            for index, start in enumerate(range(0, len(rows), page_size))
        ]
        result.chunks_total = len(chunks)
        logger.info(
            "gridly_table_export_started",
            extra={"correlation_id": correlation_id, "rows": len(rows), "chunks": len(chunks)},
        )
        if not chunks:
            logger.warning("gridly_export_no_entries", extra={"correlation_id": correlation_id})
            return self._finish(result, correlation_id)

        try:
            async with self._open_client() as client:
                self._merge_upload(result, await self._upload(client, chunks, correlation_id))
        except GridlyClientError as exc:
            record_error(result, f"Gridly client error: {exc}")
            logger.exception(
                "gridly_table_export_failed", extra={"correlation_id": correlation_id}
            )

        result.duration_seconds = time.time() - start_time
        return self._finish(result, correlation_id)

    async def _upload(
        self, client: GridlyClientProtocol, chunks: list[ExportChunk], correlation_id: str
    ) -> ExportResult:
        if self.runtime.debug_payloads:
            for chunk in chunks:
                logger.debug(
                    "gridly_upload_payload",
                    extra={
                        "correlation_id": correlation_id,
                        "chunk_index": chunk.index,
                        "payload": truncate_log_content(
                            chunk.to_json(), self.runtime.log_truncate_length
                        ),
                    },
                )

        pump = UploadQueuePump(client, self.gridly.export_view_id, correlation_id=correlation_id)
        pump.enqueue(chunks)
        self._pump = pump
        self._state = PipelineState.UPLOADING
        try:
            upload = await pump.drain()
        finally:
            self._pump = None
        self._state = PipelineState.DONE if upload.success else PipelineState.FAILED
        return upload

    @staticmethod
    def _merge_upload(result: ExportResult, upload: ExportResult) -> None:
        result.entries_updated = upload.entries_updated
        result.chunks_sent = upload.chunks_sent
        for message in upload.errors:
            record_error(result, message)

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    async def sync_records(self, local_refs: Sequence[LocalRecordRef]) -> SyncResult:
        """Fetch the view, find records no longer exported and delete them."""
        correlation_id = generate_correlation_id()
        result = SyncResult(local_records=len(local_refs))

        if not self._check_configured(result):
            return self._finish(result, correlation_id)

        try:
            async with self._open_client() as client:
                result = await self._reconcile(client, local_refs, correlation_id)
        except GridlyClientError as exc:
            record_error(result, f"Gridly client error: {exc}")
            logger.exception("gridly_sync_failed", extra={"correlation_id": correlation_id})
        return self._finish(result, correlation_id)

    async def _reconcile(
        self,
        client: GridlyClientProtocol,
        local_refs: Sequence[LocalRecordRef],
        correlation_id: str,
    ) -> SyncResult:
        result = SyncResult(local_records=len(local_refs))
        view_id = self.gridly.export_view_id

        self._state = PipelineState.FETCHING_CSV
        try:
            csv_text = await client.export_view_csv(view_id)
        except GridlyClientError as exc:
            record_error(result, f"Failed to fetch records: {exc}")
            logger.error(
                "gridly_fetch_records_failed",
                extra={"correlation_id": correlation_id, "error": str(exc)},
            )
            return result

        self._state = PipelineState.PARSING
        try:
            remote_records = [row.to_ref() for row in parse_remote_records(csv_text)]
        except GridlySyncError as exc:
            record_error(result, str(exc))
            logger.error(
                "gridly_csv_parse_failed",
                extra={"correlation_id": correlation_id, "error": str(exc)},
            )
            return result
        result.remote_records = len(remote_records)

        self._state = PipelineState.RECONCILING
        result.stale_ids = Reconciler(local_refs).deletion_ids(remote_records)
        logger.info(
            "gridly_reconcile_complete",
            extra={
                "correlation_id": correlation_id,
                "remote_records": result.remote_records,
                "local_records": result.local_records,
                "stale_records": len(result.stale_ids),
            },
        )

        self._state = PipelineState.DELETING
        coordinator = BatchDeleteCoordinator(
            client,
            view_id,
            batch_size=self.gridly.delete_batch_size,
            correlation_id=correlation_id,
        )
        result.deletion = await coordinator.run(result.stale_ids)
        for message in result.deletion.errors:
            record_error(result, message)
        return result
