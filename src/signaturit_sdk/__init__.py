"""
Signaturit Python SDK

Async client for the Signaturit e-signature and certified email API.
"""

from .client import AsyncSignaturitClient, RequestEnvelope
from .models.errors import (
    DeserializationError,
    ErrorCode,
    SerializationError,
    SignaturitError,
    TransportError,
)
from .multipart import FileAttachment, encode_multipart, flatten
from .params import ListNode, ObjectNode, ParamsBuilder, Scalar, normalize

__version__ = "1.0.0"

__all__ = [
    # Client
    "AsyncSignaturitClient",
    "RequestEnvelope",
    # Errors
    "SignaturitError",
    "ErrorCode",
    "SerializationError",
    "TransportError",
    "DeserializationError",
    # Parameters
    "Scalar",
    "ListNode",
    "ObjectNode",
    "ParamsBuilder",
    "normalize",
    # Multipart
    "FileAttachment",
    "flatten",
    "encode_multipart",
]
