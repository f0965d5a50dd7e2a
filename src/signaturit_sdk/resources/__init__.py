"""
Resources for the Signaturit SDK.

One class per remote resource; each method maps to a single endpoint.
"""
from .base import AsyncBaseResource
from .brandings import BrandingsResource
from .emails import EmailsResource
from .signatures import SignaturesResource
from .templates import TemplatesResource

__all__ = [
    "AsyncBaseResource",
    "SignaturesResource",
    "EmailsResource",
    "BrandingsResource",
    "TemplatesResource",
]
