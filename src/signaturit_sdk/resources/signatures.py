"""
Signatures resource for Signaturit SDK.

Example:
    ```python
    async with AsyncSignaturitClient(access_token="...") as client:
        signature = await client.signatures.create(
            files=["/tmp/contract.pdf"],
            recipients=[{"name": "Jane", "email": "jane@example.com"}],
            params={"subject": "NDA", "data": {"deal": "42"}},
        )
        await client.signatures.send_reminder(signature["id"])
    ```
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..params import normalize
from .base import DEFAULT_LIMIT, AsyncBaseResource

if TYPE_CHECKING:
    from ..client import FileInput


class SignaturesResource(AsyncBaseResource):
    """Resource for signature requests."""

    async def count(self, conditions: Any = None) -> int:
        """
        Count signature requests.

        Args:
            conditions: Optional filters, sent as query parameters

        Returns:
            Number of matching signature requests
        """
        return await self._count("signatures/count.json", conditions)

    async def list(
        self,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        conditions: Any = None,
    ) -> Any:
        """
        List signature requests.

        Args:
            limit: Maximum number of results
            offset: Pagination offset
            conditions: Optional filters; ``limit``/``offset`` take precedence

        Returns:
            Decoded JSON list of signature requests
        """
        return await self._get("signatures.json", params=self._paged(conditions, limit, offset))

    async def get(self, signature_id: str) -> Any:
        """Get a signature request by ID."""
        return await self._get(f"signatures/{signature_id}.json")

    async def download_audit_trail(self, signature_id: str, document_id: str) -> str:
        """Download a document's audit trail as raw response text (not bytes)."""
        return await self._get_text(
            f"signatures/{signature_id}/documents/{document_id}/download/audit_trail"
        )

    async def download_signed_document(self, signature_id: str, document_id: str) -> str:
        """
        Download a signed document as raw response text.

        The body is decoded as text using the response charset. Binary PDF
        content does not survive that decoding, so the original bytes cannot
        be recovered from the returned string.
        """
        return await self._get_text(
            f"signatures/{signature_id}/documents/{document_id}/download/signed"
        )

    async def create(
        self,
        files: Optional[Union["FileInput", Iterable["FileInput"]]],
        recipients: Any,
        params: Any = None,
    ) -> Any:
        """
        Create a signature request.

        Args:
            files: Paths of the documents to sign; a single path is accepted
            recipients: Signers, e.g. ``[{"name": ..., "email": ...}]``
            params: Extra request parameters (subject, body, data, ...);
                ``recipients`` overrides a member of the same name

        Returns:
            Decoded JSON of the created signature request
        """
        body = normalize(params, extra={"recipients": recipients})
        return await self._post("signatures.json", data=body, files=files)

    async def cancel(self, signature_id: str) -> Any:
        """Cancel a signature request."""
        return await self._patch(f"signatures/{signature_id}/cancel.json")

    async def send_reminder(self, signature_id: str) -> Any:
        """Send a reminder to pending signers."""
        return await self._post(f"signatures/{signature_id}/reminder.json")
