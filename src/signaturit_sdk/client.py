"""
Signaturit Python SDK client.

Example usage:
    ```python
    from signaturit_sdk import AsyncSignaturitClient

    async with AsyncSignaturitClient(access_token="your-token") as client:
        signature = await client.signatures.create(
            files=["/tmp/contract.pdf"],
            recipients=[{"name": "Jane", "email": "jane@example.com"}],
            params={"subject": "Please sign"},
        )

        total = await client.emails.count()
    ```
"""
from __future__ import annotations

import json
import logging
import os
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

import httpx

from . import config
from .models.errors import DeserializationError, ErrorCode, SerializationError, TransportError
from .multipart import FileAttachment, encode_multipart
from .params import ObjectNode, Scalar, normalize
from .resources.brandings import BrandingsResource
from .resources.emails import EmailsResource
from .resources.signatures import SignaturesResource
from .resources.templates import TemplatesResource

logger = logging.getLogger(__name__)

PROD_BASE_URL = "https://api.signaturit.com"
SANDBOX_BASE_URL = "https://api.sandbox.signaturit.com"
API_PREFIX = "v3"
USER_AGENT = "signaturit-python-sdk/1.0.0"

SUPPORTED_METHODS = ("GET", "POST", "PATCH")

FileInput = Union[str, os.PathLike, FileAttachment]


@dataclass(frozen=True)
class RequestEnvelope:
    """Everything needed to send one request, built once per call."""

    method: str
    path: str
    query: Optional[ObjectNode] = None
    body: Optional[ObjectNode] = None
    files: tuple[FileAttachment, ...] = ()

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: Any = None,
        body: Any = None,
        files: Optional[Union[FileInput, Iterable[FileInput]]] = None,
    ) -> "RequestEnvelope":
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        # a single path is one attachment, not a sequence of characters
        if isinstance(files, (str, os.PathLike, FileAttachment)):
            files = [files]
        return cls(
            method=method,
            path=path.lstrip("/"),
            query=None if query is None else normalize(query),
            body=None if body is None else normalize(body),
            files=tuple(
                f if isinstance(f, FileAttachment) else FileAttachment.from_path(f)
                for f in (files or ())
            ),
        )

    def query_params(self) -> Optional[dict[str, str]]:
        """Flat query parameters; nested members are rejected."""
        if self.query is None:
            return None
        params = {}
        for name, node in self.query.items():
            if not isinstance(node, Scalar):
                raise SerializationError(
                    f"Query parameter '{name}' must be a scalar value",
                    path=name,
                )
            params[name] = node.text
        return params

    def json_body(self) -> Any:
        return self.body.to_python() if self.body is not None else {}


class AsyncSignaturitClient:
    """
    Signaturit API client.

    Provides access to all Signaturit API resources:
    - signatures: Create, list, cancel and download signature requests
    - emails: Certified emails and their audit trails
    - brandings: Account branding
    - templates: Signature templates

    Args:
        access_token: Your API access token
        production: Use the production API instead of the sandbox (default: False)
        timeout: Request timeout in seconds (default: 30)
    """

    DEFAULT_TIMEOUT = config.DEFAULT_TIMEOUT

    def __init__(
        self,
        access_token: Optional[str] = None,
        production: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not access_token:
            raise ValueError("Access token is required")

        self._access_token = access_token
        self._production = production
        self._base_url = PROD_BASE_URL if production else SANDBOX_BASE_URL
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

        self.signatures = SignaturesResource(self)
        self.emails = EmailsResource(self)
        self.brandings = BrandingsResource(self)
        self.templates = TemplatesResource(self)

    @classmethod
    def from_env(cls) -> "AsyncSignaturitClient":
        """Create a client from SIGNATURIT_* environment variables."""
        return cls(
            access_token=config.get_access_token(),
            production=config.use_production(),
            timeout=config.get_timeout(),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{API_PREFIX}/{path.lstrip('/')}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "User-Agent": USER_AGENT,
                },
                timeout=self._timeout,
            )
        return self._client

    def _encode(self, envelope: RequestEnvelope, stack: ExitStack) -> dict[str, Any]:
        """Pick the body encoding for ``envelope`` and return httpx request kwargs."""
        kwargs: dict[str, Any] = {}
        params = envelope.query_params()
        if params is not None:
            kwargs["params"] = params

        if envelope.method == "GET":
            return kwargs

        if envelope.method == "PATCH" and envelope.files:
            raise SerializationError("File attachments are not supported on PATCH requests")

        if envelope.method == "POST" and envelope.files:
            payload = encode_multipart(envelope.body, envelope.files)
            kwargs["data"] = payload.data
            kwargs["files"] = payload.open_files(stack)
        else:
            kwargs["json"] = envelope.json_body()
        return kwargs

    async def _request(
        self,
        method: str,
        path: str,
        query: Any = None,
        body: Any = None,
        files: Optional[Union[FileInput, Iterable[FileInput]]] = None,
    ) -> str:
        """Send a single request and return the raw response text.

        Raises:
            SerializationError: If the parameters cannot be encoded
            TransportError: On network failure, timeout or a non-2xx status
        """
        envelope = RequestEnvelope.build(method, path, query, body, files)
        url = self.url_for(envelope.path)
        client = await self._get_client()

        with ExitStack() as stack:
            kwargs = self._encode(envelope, stack)
            logger.debug(
                "%s %s (%s)",
                envelope.method,
                url,
                "multipart" if "files" in kwargs else "json" if "json" in kwargs else "query",
            )
            try:
                response = await client.request(envelope.method, url, **kwargs)
            except httpx.TimeoutException as e:
                logger.warning("%s %s timed out: %s", envelope.method, url, e)
                raise TransportError(
                    f"Request timed out: {envelope.method} {url}",
                    code=ErrorCode.TIMEOUT.value,
                ) from e
            except httpx.RequestError as e:
                logger.warning("%s %s failed: %s", envelope.method, url, e)
                raise TransportError(
                    f"Request failed: {envelope.method} {url}: {e}",
                    code=ErrorCode.CONNECTION_ERROR.value,
                ) from e

        logger.debug("%s %s -> %s", envelope.method, url, response.status_code)
        if not response.is_success:
            logger.warning("%s %s returned %s", envelope.method, url, response.status_code)
            raise TransportError.from_response(response.status_code, response.text)
        return response.text

    async def _request_json(
        self,
        method: str,
        path: str,
        query: Any = None,
        body: Any = None,
        files: Optional[Union[FileInput, Iterable[FileInput]]] = None,
    ) -> Any:
        """Send a request and decode the JSON response."""
        text = await self._request(method, path, query=query, body=body, files=files)
        return self._decode_json(path, text)

    @staticmethod
    def _decode_json(path: str, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(
                f"Response from {path} is not valid JSON: {e.msg}",
                body=text,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncSignaturitClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
