"""
Pytest configuration and fixtures for Signaturit SDK tests.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
import pytest

from signaturit_sdk import AsyncSignaturitClient

SANDBOX = "https://api.sandbox.signaturit.com/v3"


@dataclass
class _MockEntry:
    method: str
    url: str
    response: Optional[httpx.Response] = None
    exception: Optional[Exception] = None


class _LocalHTTPXMock:
    """Queue of canned responses plus a log of the requests that consumed them."""

    def __init__(self) -> None:
        self._entries: list[_MockEntry] = []
        self.requests: list[httpx.Request] = []

    def add_response(
        self,
        *,
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json: Any = None,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        response_headers = dict(headers or {})
        if json is not None:
            content = json_dumps_bytes(json)
            response_headers.setdefault("content-type", "application/json")
        elif content is None:
            content = (text or "").encode("utf-8")

        request = httpx.Request(method.upper(), url)
        response = httpx.Response(
            status_code=status_code,
            headers=response_headers,
            content=content,
            request=request,
        )
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, response=response)
        )

    def add_exception(
        self,
        exception: Exception,
        *,
        url: str,
        method: str = "GET",
    ) -> None:
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, exception=exception)
        )

    def get_request(self) -> httpx.Request:
        assert self.requests, "No request was sent"
        return self.requests[-1]

    def _pop_match(self, method: str, url: str) -> _MockEntry:
        normalized_method = method.upper()
        normalized_url = _normalize_url(url)
        for idx, entry in enumerate(self._entries):
            if entry.method == normalized_method and _normalize_url(entry.url) == normalized_url:
                return self._entries.pop(idx)
        raise AssertionError(
            f"No mocked response for {normalized_method} {url}. "
            f"Available: {[f'{e.method} {e.url}' for e in self._entries]}"
        )


def json_dumps_bytes(payload: Any) -> bytes:
    return json.dumps(payload, default=str).encode("utf-8")


def _normalize_url(url: str) -> str:
    parts = urlsplit(url)
    normalized_query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, normalized_query, parts.fragment))


def multipart_parts(request: httpx.Request) -> list[tuple[str, dict[str, str], bytes]]:
    """Split a multipart request body into ``(field name, part headers, payload)``."""
    content_type = request.headers["content-type"]
    assert content_type.startswith("multipart/form-data")
    boundary = content_type.split("boundary=", 1)[1].encode("ascii")

    parts = []
    for chunk in request.content.split(b"--" + boundary)[1:]:
        if chunk.startswith(b"--"):
            break
        head, _, payload = chunk[2:].partition(b"\r\n\r\n")
        headers = {}
        for line in head.decode("utf-8").split("\r\n"):
            name, _, value = line.partition(":")
            headers[name.strip().lower()] = value.strip()
        field = re.search(r'name="([^"]*)"', headers["content-disposition"]).group(1)
        parts.append((field, headers, payload[:-2]))
    return parts


def multipart_fields(request: httpx.Request) -> list[tuple[str, str]]:
    """Non-file multipart fields as ``(name, value)`` in wire order."""
    return [
        (name, payload.decode("utf-8"))
        for name, headers, payload in multipart_parts(request)
        if "filename=" not in headers["content-disposition"]
    ]


@pytest.fixture
def httpx_mock(monkeypatch):
    """`httpx_mock` fixture that also records every request sent."""
    mock = _LocalHTTPXMock()

    async def _async_request(self, method, url, **kwargs):
        request = self.build_request(method, url, **kwargs)
        # attachments are closed once the call returns
        request.read()
        mock.requests.append(request)
        match = mock._pop_match(method, str(request.url))
        if match.exception is not None:
            raise match.exception
        assert match.response is not None
        return match.response

    monkeypatch.setattr(httpx.AsyncClient, "request", _async_request)
    return mock


MOCK_RESPONSES = {
    "signature": {
        "id": "sig_123",
        "created_at": "2025-01-20T00:00:00+0000",
        "documents": [
            {
                "id": "doc_456",
                "email": "jane@example.com",
                "file": {"name": "contract.pdf", "pages": 2},
                "status": "ready",
            }
        ],
    },
    "email": {
        "id": "email_789",
        "certificates": [{"id": "cert_1", "email": "jane@example.com", "status": "sent"}],
    },
    "branding": {
        "id": "brand_1",
        "layout_color": "#FFBF00",
        "text_color": "#2A3342",
    },
    "template": {"id": "tpl_1", "name": "NDA"},
}


@pytest.fixture
def access_token() -> str:
    """Test access token."""
    return "test-access-token"


@pytest.fixture
async def client(access_token: str) -> AsyncSignaturitClient:
    """Sandbox client."""
    client = AsyncSignaturitClient(access_token=access_token)
    yield client
    await client.close()


@pytest.fixture
def mock_responses() -> dict:
    """Return mock response data."""
    return MOCK_RESPONSES


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "contract.pdf"
    path.write_bytes(b"%PDF-1.4 test document")
    return path


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "annex.docx"
    path.write_bytes(b"PK\x03\x04 word document")
    return path
