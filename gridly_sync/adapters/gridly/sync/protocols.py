"""Protocol definitions (ports) for Gridly sync.

The pipeline only depends on these shapes, so tests and alternative transports
can stand in for the HTTP client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager


class GridlyClientProtocol(Protocol):
    async def add_records(self, view_id: str, rows: list[dict[str, Any]]) -> list[Any]: ...

    async def export_view_csv(self, view_id: str) -> str: ...

    async def delete_records(self, view_id: str, ids: list[str]) -> None: ...


class GridlyClientFactory(Protocol):
    def __call__(
        self, api_url: str, api_key: str, timeout: float
    ) -> AbstractAsyncContextManager[GridlyClientProtocol]: ...
