"""Brandings resource for Signaturit SDK."""
from __future__ import annotations

from typing import Any

from .base import AsyncBaseResource


class BrandingsResource(AsyncBaseResource):
    """Resource for account brandings."""

    async def get(self, branding_id: str) -> Any:
        return await self._get(f"brandings/{branding_id}.json")

    async def list(self) -> Any:
        return await self._get("brandings.json")

    async def create(self, params: Any = None) -> Any:
        """
        Create a branding.

        Args:
            params: Branding settings (colors, texts, ...)

        Returns:
            Decoded JSON of the created branding
        """
        return await self._post("brandings.json", data=params)

    async def update(self, branding_id: str, params: Any = None) -> Any:
        """Update a branding with a JSON PATCH body."""
        return await self._patch(f"brandings/{branding_id}.json", data=params)
