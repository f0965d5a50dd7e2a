"""
Base resource class for Signaturit SDK.

Resources are thin: each method names a path, a method and the shape of its
query/body, and hands the rest to the client's request dispatcher.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..models.responses import CountResponse
from ..params import ObjectNode, normalize

if TYPE_CHECKING:
    from ..client import AsyncSignaturitClient, FileInput

DEFAULT_LIMIT = 100


class AsyncBaseResource:
    """Base class for async API resources.

    Attributes:
        _client: The async client instance
    """

    def __init__(self, client: "AsyncSignaturitClient") -> None:
        self._client = client

    async def _get(self, path: str, params: Any = None) -> Any:
        """Make a GET request and decode the JSON response.

        Args:
            path: API endpoint path, relative to the versioned prefix
            params: Query parameters (flat)

        Returns:
            Decoded JSON
        """
        return await self._client._request_json("GET", path, query=params)

    async def _get_text(self, path: str, params: Any = None) -> str:
        """Make a GET request and return the raw response body."""
        return await self._client._request("GET", path, query=params)

    async def _post(
        self,
        path: str,
        data: Any = None,
        files: Optional[Union["FileInput", Iterable["FileInput"]]] = None,
    ) -> Any:
        """Make a POST request.

        Sent as JSON, or as multipart/form-data when ``files`` is non-empty.

        Args:
            path: API endpoint path
            data: Request body
            files: Attachment paths

        Returns:
            Decoded JSON
        """
        return await self._client._request_json("POST", path, body=data, files=files)

    async def _patch(self, path: str, data: Any = None) -> Any:
        """Make a PATCH request with a JSON body."""
        return await self._client._request_json("PATCH", path, body=data)

    async def _count(self, path: str, conditions: Any = None) -> int:
        raw = await self._get_text(path, params=conditions)
        payload = self._client._decode_json(path, raw)
        return CountResponse.parse_payload(payload, raw).count

    @staticmethod
    def _paged(
        conditions: Any,
        limit: int,
        offset: int,
    ) -> ObjectNode:
        """Conditions with ``limit``/``offset`` merged on top."""
        return normalize(conditions, extra={"limit": limit, "offset": offset})
