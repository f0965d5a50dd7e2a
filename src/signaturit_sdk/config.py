"""Client configuration from the environment."""
from __future__ import annotations

import os
from typing import Optional

DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


def get_access_token() -> Optional[str]:
    """Access token from SIGNATURIT_ACCESS_TOKEN, if set."""
    token = os.getenv("SIGNATURIT_ACCESS_TOKEN", "").strip()
    return token or None


def use_production() -> bool:
    """Whether SIGNATURIT_PRODUCTION selects the production API.

    Default: sandbox
    """
    return os.getenv("SIGNATURIT_PRODUCTION", "").strip().lower() in _TRUTHY


def get_timeout() -> float:
    """Request timeout in seconds from SIGNATURIT_TIMEOUT."""
    configured = os.getenv("SIGNATURIT_TIMEOUT", "").strip()
    if not configured:
        return DEFAULT_TIMEOUT
    try:
        return float(configured)
    except ValueError:
        raise ValueError(f"SIGNATURIT_TIMEOUT must be a number, got {configured!r}") from None
