"""Batched record deletion with completion tracking."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import TYPE_CHECKING

from gridly_sync.adapters.gridly.client import GridlyClientError
from gridly_sync.adapters.gridly.models import DeleteResult
from gridly_sync.adapters.gridly.sync.constants import DELETE_BATCH_SIZE
from gridly_sync.adapters.gridly.sync.errors import record_error
from gridly_sync.adapters.gridly.sync.serializer import chunked

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from gridly_sync.adapters.gridly.sync.protocols import GridlyClientProtocol

logger = logging.getLogger(__name__)


class BatchDeleteCoordinator:
    """Split an id list into batches, send them all at once and summarize once.

    Batches run concurrently as tasks on one event loop. Completion counters are
    only updated from that loop, so the ``completed == total`` check cannot
    interleave with another increment.
    """

    def __init__(
        self,
        client: GridlyClientProtocol,
        view_id: str,
        *,
        batch_size: int = DELETE_BATCH_SIZE,
        correlation_id: str | None = None,
        on_complete: Callable[[DeleteResult], None] | None = None,
    ) -> None:
        if batch_size < 1:
            msg = "Delete batch size must be positive"
            raise ValueError(msg)
        self.client = client
        self.view_id = view_id
        self.batch_size = batch_size
        self.correlation_id = correlation_id
        self.on_complete = on_complete
        self.total_batches = 0
        self.completed_batches = 0
        self._result = DeleteResult()

    def plan(self, ids: Sequence[str]) -> list[list[str]]:
        return list(chunked(ids, self.batch_size))

    def _reset(self, total_ids: int) -> None:
        self.total_batches = math.ceil(total_ids / self.batch_size)
        self.completed_batches = 0
        self._result = DeleteResult(
            entries_requested=total_ids, batches_total=self.total_batches
        )

    async def run(self, ids: Sequence[str]) -> DeleteResult:
        """Delete ``ids`` and return the aggregate outcome after every batch answered."""
        if not ids:
            logger.warning(
                "gridly_no_records_to_delete", extra={"correlation_id": self.correlation_id}
            )
            return DeleteResult()

        self._reset(len(ids))
        batches = self.plan(ids)
        logger.info(
            "gridly_delete_started",
            extra={
                "correlation_id": self.correlation_id,
                "entries_requested": len(ids),
                "batches_total": self.total_batches,
            },
        )

        await asyncio.gather(
            *(self._dispatch(index, batch) for index, batch in enumerate(batches))
        )
        return self._result

    async def _dispatch(self, index: int, batch: list[str]) -> None:
        try:
            await self.client.delete_records(self.view_id, batch)
        except GridlyClientError as exc:
            self._on_batch_done(index, len(batch), error=str(exc))
        else:
            self._on_batch_done(index, len(batch), error=None)

    def _on_batch_done(self, index: int, size: int, *, error: str | None) -> None:
        self.completed_batches += 1
        self._result.batches_completed = self.completed_batches

        if error is None:
            self._result.entries_deleted += size
            logger.info(
                "gridly_delete_batch_succeeded",
                extra={"correlation_id": self.correlation_id, "batch": index, "size": size},
            )
        else:
            message = f"Failed to delete records (batch {index + 1}/{self.total_batches}): {error}"
            record_error(self._result, message)
            logger.error(
                "gridly_delete_batch_failed",
                extra={"correlation_id": self.correlation_id, "batch": index, "error": error},
            )

        if self.completed_batches == self.total_batches:
            self._finish()

    def _finish(self) -> None:
        logger.info(
            "gridly_delete_finished",
            extra={
                "correlation_id": self.correlation_id,
                "entries_deleted": self._result.entries_deleted,
                "batches_completed": self.completed_batches,
                "success": self._result.success,
            },
        )
        if self.on_complete is not None:
            self.on_complete(self._result)
