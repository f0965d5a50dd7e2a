"""Models for the Signaturit SDK."""
from .errors import (
    DeserializationError,
    ErrorCode,
    SerializationError,
    SignaturitError,
    TransportError,
)
from .responses import CountResponse, SignaturitModel

__all__ = [
    # Errors
    "ErrorCode",
    "SignaturitError",
    "SerializationError",
    "TransportError",
    "DeserializationError",
    # Responses
    "SignaturitModel",
    "CountResponse",
]
