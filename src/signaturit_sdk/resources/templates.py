"""Templates resource for Signaturit SDK."""
from __future__ import annotations

from typing import Any

from .base import DEFAULT_LIMIT, AsyncBaseResource


class TemplatesResource(AsyncBaseResource):
    """Resource for signature templates."""

    async def list(self, limit: int = DEFAULT_LIMIT, offset: int = 0) -> Any:
        """List templates, paginated with ``limit``/``offset``."""
        return await self._get("templates.json", params=self._paged(None, limit, offset))
