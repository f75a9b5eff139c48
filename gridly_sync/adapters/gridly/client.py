"""Gridly API client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from gridly_sync.adapters.gridly.models import DeleteRecordsRequest

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.gridly.com"


class GridlyClientError(Exception):
    """Base exception for Gridly client errors."""


class GridlyTransportError(GridlyClientError):
    """The request failed before a usable response arrived (connect, timeout, redirects, decoding)."""


class GridlyHTTPStatusError(GridlyClientError):
    """The service answered with an unexpected status code."""

    def __init__(self, status_code: int, body: str, operation: str = "request") -> None:
        super().__init__(f"Error: {status_code}, reason: {body}")
        self.status_code = status_code
        self.body = body
        self.operation = operation


class GridlyClient:
    """Async HTTP client for the Gridly views API.

    Requests are sent once; retrying is left to whoever re-runs the pipeline.
    """

    # Default per-endpoint timeouts (seconds)
    DEFAULT_TIMEOUTS: dict[str, float] = {
        "add_records": 60.0,
        "export_view_csv": 120.0,
        "delete_records": 60.0,
    }

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 60.0,
        *,
        endpoint_timeouts: dict[str, float] | None = None,
    ) -> None:
        """Initialize Gridly client.

        Args:
            api_url: Base URL of the Gridly API (e.g., https://api.gridly.com)
            api_key: API key with write access to the target view
            timeout: Default request timeout in seconds
            endpoint_timeouts: Custom per-endpoint timeouts (overrides defaults)
        """
        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.endpoint_timeouts = {**self.DEFAULT_TIMEOUTS}
        if endpoint_timeouts:
            self.endpoint_timeouts.update(endpoint_timeouts)
        self._client: httpx.AsyncClient | None = None

    def get_timeout(self, endpoint: str) -> float:
        return self.endpoint_timeouts.get(endpoint, self.timeout)

    async def __aenter__(self) -> Self:
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            headers={
                "Authorization": f"ApiKey {self.api_key}",
                "Accept": "application/json",
            },
            timeout=self.timeout,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise GridlyClientError("Client not initialized. Use async context manager.")
        return self._client

    async def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        expected_status: tuple[int, ...],
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self.client.request(
                method, url, timeout=self.get_timeout(operation), **kwargs
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error(
                "gridly_transport_error",
                extra={"operation": operation, "url": url, "error": str(exc)},
            )
            raise GridlyTransportError(f"Request to Gridly failed: {exc}") from exc

        if response.status_code not in expected_status:
            logger.error(
                "gridly_unexpected_status",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise GridlyHTTPStatusError(response.status_code, response.text, operation)
        return response

    async def add_records(self, view_id: str, rows: list[dict[str, Any]]) -> list[Any]:
        """Create or update records in a view.

        Args:
            view_id: Target view ID
            rows: Row payloads (``id``, optional ``path``, ``cells``)

        Returns:
            The records echoed back by the service
        """
        response = await self._send(
            "POST",
            f"/v1/views/{view_id}/records",
            operation="add_records",
            expected_status=(200, 201),
            json=rows,
            headers={"Content-Type": "application/json"},
        )
        try:
            data = response.json()
        except ValueError:
            logger.warning("gridly_add_records_unparsable_body", extra={"view_id": view_id})
            return []
        return data if isinstance(data, list) else []

    async def export_view_csv(self, view_id: str) -> str:
        """Download the full view as CSV text.

        Args:
            view_id: View ID to export

        Returns:
            CSV body as text
        """
        response = await self._send(
            "GET",
            f"/v1/views/{view_id}/export",
            operation="export_view_csv",
            expected_status=(200,),
            headers={"Accept": "text/csv"},
        )
        logger.debug(
            "gridly_view_exported", extra={"view_id": view_id, "bytes": len(response.content)}
        )
        return response.text

    async def delete_records(self, view_id: str, ids: list[str]) -> None:
        """Delete records by id.

        Args:
            view_id: View ID
            ids: Record ids in the form the view uses (``path,id`` / ``,id`` / ``id``)
        """
        request = DeleteRecordsRequest(ids=ids)
        await self._send(
            "DELETE",
            f"/v1/views/{view_id}/records",
            operation="delete_records",
            expected_status=(204,),
            json=request.model_dump(),
            headers={"Content-Type": "application/json"},
        )
        logger.debug("gridly_records_deleted", extra={"view_id": view_id, "count": len(ids)})
