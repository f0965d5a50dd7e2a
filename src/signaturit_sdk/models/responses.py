"""Response models for Signaturit SDK.

Most endpoints hand back the decoded JSON untouched; only responses the SDK
itself needs to read are modelled here.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DeserializationError


class SignaturitModel(BaseModel):
    """Base model for API payloads; unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def parse_payload(cls, payload: Any, raw: Optional[str] = None):
        """Validate decoded JSON, raising DeserializationError on a shape mismatch."""
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise DeserializationError(
                f"Unexpected {cls.__name__} payload: {e.error_count()} validation error(s)",
                body=raw,
            ) from e


class CountResponse(SignaturitModel):
    """Body of the ``*/count.json`` endpoints."""

    count: int
