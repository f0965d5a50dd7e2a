"""
Multipart/form-data encoding for Signaturit requests.

The API's form parser expects nested parameters spelled out with bracket
notation, so a parameter tree is flattened into ordered ``(key, value)``
fields before it is sent:

    {"name": "John", "address": {"city": "NYC"}}  ->  name=John, address[city]=NYC
    {"tags": [{"name": "a"}, {"name": "b"}]}      ->  tags[0][name]=a, tags[1][name]=b

File attachments are appended after the parameter fields as
``files[<basename>]``.
"""
from __future__ import annotations

import os
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Optional, Union

from .models.errors import SerializationError
from .params import ListNode, Node, ObjectNode, Scalar

PDF_MIME_TYPE = "application/pdf"
DEFAULT_MIME_TYPE = "application/msword"


def guess_mime_type(path: Union[str, os.PathLike]) -> str:
    """Classify an attachment by extension.

    Only a lowercase ``pdf`` extension maps to ``application/pdf``; any other
    file is sent as ``application/msword``.
    """
    extension = Path(path).suffix[1:]
    return PDF_MIME_TYPE if extension == "pdf" else DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class FileAttachment:
    """A local file sent alongside the form fields."""

    source_path: str
    field_base_name: str
    mime_type: str

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "FileAttachment":
        source = os.fspath(path)
        return cls(
            source_path=source,
            field_base_name=Path(source).name,
            mime_type=guess_mime_type(source),
        )

    @property
    def field_key(self) -> str:
        return f"files[{self.field_base_name}]"


@dataclass(frozen=True)
class MultipartField:
    """One form field: either a string value or a file attachment."""

    key: str
    value: Optional[str] = None
    attachment: Optional[FileAttachment] = None

    @property
    def is_file(self) -> bool:
        return self.attachment is not None


def _join_key(key: str, name: Union[str, int]) -> str:
    return str(name) if key == "" else f"{key}[{name}]"


def flatten(node: Node, key: str = "") -> list[tuple[str, str]]:
    """Flatten a parameter tree into ordered bracket-notation form fields.

    Args:
        node: Tree to flatten; normally the top-level ObjectNode
        key: Key of ``node`` itself, empty at the root

    Returns:
        ``(key, value)`` pairs in traversal order

    Raises:
        SerializationError: If a list or scalar has no member name to hang off
    """
    fields: list[tuple[str, str]] = []
    _flatten_into(fields, node, key)
    return fields


def _flatten_into(fields: list[tuple[str, str]], node: Node, key: str) -> None:
    if isinstance(node, ObjectNode):
        for name, child in node.items():
            _flatten_into(fields, child, _join_key(key, name))
    elif isinstance(node, ListNode):
        if key == "":
            raise SerializationError("A list cannot be encoded without a member name")
        for index, item in enumerate(node):
            _flatten_into(fields, item, f"{key}[{index}]")
    elif isinstance(node, Scalar):
        if key == "":
            raise SerializationError("A scalar cannot be encoded without a member name")
        fields.append((key, node.text))
    else:
        raise SerializationError(f"Unknown parameter node {type(node).__name__}")


@dataclass(frozen=True)
class MultipartPayload:
    """Ordered multipart fields for a single request."""

    fields: tuple[MultipartField, ...]

    @property
    def data(self) -> dict[str, str]:
        """String fields in order, as accepted by httpx's ``data=``."""
        return {f.key: f.value for f in self.fields if not f.is_file}

    def open_files(self, stack: ExitStack) -> list[tuple[str, tuple[str, IO[bytes], str]]]:
        """Open every attachment on ``stack`` and return httpx's ``files=`` list."""
        opened = []
        for f in self.fields:
            if f.attachment is None:
                continue
            try:
                handle = stack.enter_context(open(f.attachment.source_path, "rb"))
            except OSError as e:
                raise SerializationError(
                    f"Cannot read attachment {f.attachment.source_path}: {e.strerror}",
                    path=f.key,
                ) from e
            opened.append(
                (f.key, (f.attachment.field_base_name, handle, f.attachment.mime_type))
            )
        return opened


def encode_multipart(
    body: Optional[ObjectNode],
    files: Iterable[FileAttachment] = (),
) -> MultipartPayload:
    """Encode a body tree plus attachments as multipart fields.

    Body fields come first in traversal order, then one field per
    attachment in the order supplied.

    Raises:
        SerializationError: If two fields end up with the same key
    """
    fields = [MultipartField(key=k, value=v) for k, v in flatten(body or ObjectNode())]
    fields.extend(MultipartField(key=a.field_key, attachment=a) for a in files)

    seen: set[str] = set()
    for f in fields:
        if f.key in seen:
            raise SerializationError(f"Duplicate form field '{f.key}'", path=f.key)
        seen.add(f.key)

    return MultipartPayload(tuple(fields))
