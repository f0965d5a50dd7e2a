"""Certified emails resource for Signaturit SDK."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..params import normalize
from .base import DEFAULT_LIMIT, AsyncBaseResource

if TYPE_CHECKING:
    from ..client import FileInput


class EmailsResource(AsyncBaseResource):
    """Resource for certified emails."""

    async def count(self, conditions: Any = None) -> int:
        """Count certified emails matching ``conditions``."""
        return await self._count("emails/count.json", conditions)

    async def list(
        self,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        conditions: Any = None,
    ) -> Any:
        """
        List certified emails.

        Args:
            limit: Maximum number of results
            offset: Pagination offset
            conditions: Optional filters; ``limit``/``offset`` take precedence

        Returns:
            Decoded JSON list of emails
        """
        return await self._get("emails.json", params=self._paged(conditions, limit, offset))

    async def get(self, email_id: str) -> Any:
        return await self._get(f"emails/{email_id}.json")

    async def create(
        self,
        files: Optional[Union["FileInput", Iterable["FileInput"]]],
        recipients: Any,
        subject: str,
        body: str,
        params: Any = None,
    ) -> Any:
        """
        Send a certified email.

        Args:
            files: Paths of the attachments
            recipients: Recipients, e.g. ``[{"email": ...}]``
            subject: Email subject
            body: Email body
            params: Extra request parameters; ``subject``, ``body`` and
                ``recipients`` override members of the same name

        Returns:
            Decoded JSON of the created email
        """
        data = normalize(
            params,
            extra={"subject": subject, "body": body, "recipients": recipients},
        )
        return await self._post("emails.json", data=data, files=files)

    async def download_audit_trail(self, email_id: str, certificate_id: str) -> str:
        """Download a certificate's audit trail as raw response text."""
        return await self._get_text(
            f"emails/{email_id}/certificates/{certificate_id}/download/audit_trail"
        )
