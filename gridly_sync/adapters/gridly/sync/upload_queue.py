"""Sequential upload of prepared record chunks."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING

from gridly_sync.adapters.gridly.client import GridlyClientError
from gridly_sync.adapters.gridly.models import ExportResult
from gridly_sync.adapters.gridly.sync.errors import record_error

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from gridly_sync.adapters.gridly.sync.protocols import GridlyClientProtocol
    from gridly_sync.adapters.gridly.sync.serializer import ExportChunk

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"
    FETCHING_CSV = "fetching_csv"
    PARSING = "parsing"
    RECONCILING = "reconciling"
    DELETING = "deleting"


class UploadQueuePump:
    """FIFO of chunk uploads with at most one request in flight.

    The next chunk is sent only after the previous one succeeded. The first
    failure stops the pump; remaining chunks stay unsent.
    """

    def __init__(
        self,
        client: GridlyClientProtocol,
        view_id: str,
        *,
        correlation_id: str | None = None,
        on_chunk_done: Callable[[ExportChunk, int], None] | None = None,
    ) -> None:
        self.client = client
        self.view_id = view_id
        self.correlation_id = correlation_id
        self.on_chunk_done = on_chunk_done
        self._queue: deque[ExportChunk] = deque()
        self._in_flight: ExportChunk | None = None

    def enqueue(self, chunks: Iterable[ExportChunk]) -> None:
        self._queue.extend(chunks)

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def in_flight(self) -> ExportChunk | None:
        return self._in_flight

    def has_requests_pending(self) -> bool:
        return bool(self._queue) or self._in_flight is not None

    async def drain(self) -> ExportResult:
        """Send queued chunks in order until the queue is empty or one fails."""
        result = ExportResult(chunks_total=len(self._queue))

        while self._queue:
            chunk = self._queue.popleft()
            self._in_flight = chunk
            try:
                echoed = await self.client.add_records(self.view_id, chunk.rows)
            except GridlyClientError as exc:
                record_error(result, str(exc))
                logger.error(
                    "gridly_upload_chunk_failed",
                    extra={
                        "correlation_id": self.correlation_id,
                        "chunk_index": chunk.index,
                        "remaining": len(self._queue),
                        "error": str(exc),
                    },
                )
                self._queue.clear()
                return result
            finally:
                self._in_flight = None

            result.chunks_sent += 1
            result.entries_updated += len(echoed)
            logger.info(
                "gridly_upload_chunk_succeeded",
                extra={
                    "correlation_id": self.correlation_id,
                    "chunk_index": chunk.index,
                    "rows": len(chunk),
                    "entries_updated": result.entries_updated,
                },
            )
            if self.on_chunk_done is not None:
                self.on_chunk_done(chunk, len(echoed))

        return result
