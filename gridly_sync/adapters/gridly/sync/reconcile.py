"""Diff of remote records against the records just exported."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gridly_sync.domain.records import LocalRecordRef, RemoteRecordRef

logger = logging.getLogger(__name__)


class Reconciler:
    """Find remote records that disappeared from a path the export touched.

    A remote record is stale when at least one local record shares its path but
    none shares both path and id. Paths absent from the local set are left
    alone, so partial exports never remove records they did not cover. Remote
    refs carry ids with the namespace prefix already removed.

    A key whose namespace moved between runs is only pruned under its old path
    while that old path is still exported.
    """

    def __init__(self, local_records: Iterable[LocalRecordRef]) -> None:
        self._ids_by_path: dict[str, set[str]] = defaultdict(set)
        count = 0
        for ref in local_records:
            self._ids_by_path[ref.path].add(ref.id)
            count += 1
        self.local_count = count

    def is_stale(self, remote: RemoteRecordRef) -> bool:
        ids = self._ids_by_path.get(remote.path)
        if ids is None:
            return False
        return remote.id not in ids

    def stale_records(self, remote_records: Iterable[RemoteRecordRef]) -> list[RemoteRecordRef]:
        return [ref for ref in remote_records if self.is_stale(ref)]

    def deletion_ids(self, remote_records: Iterable[RemoteRecordRef]) -> list[str]:
        """Return delete identifiers for stale remote records, in remote order."""
        ids: list[str] = []
        for ref in self.stale_records(remote_records):
            logger.debug(
                "gridly_record_marked_stale",
                extra={"record_id": ref.id, "record_path": ref.path},
            )
            ids.append(ref.deletion_id())
        return ids


def compute_deletions(
    remote_records: Iterable[RemoteRecordRef], local_records: Iterable[LocalRecordRef]
) -> list[str]:
    return Reconciler(local_records).deletion_ids(remote_records)
