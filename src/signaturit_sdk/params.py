"""
Parameter trees for Signaturit requests.

Caller input (dicts, pydantic models, dataclasses, plain objects) is
normalized into an immutable tree of ``Scalar``, ``ListNode`` and
``ObjectNode`` values before it is encoded as a query string, a JSON body
or a multipart form.

Example:
    ```python
    from signaturit_sdk.params import ParamsBuilder, normalize

    tree = normalize({"name": "John"}, extra={"recipients": [{"email": "a@b.c"}]})

    tree = (
        ParamsBuilder()
        .set("subject", "Contract")
        .set("data", {"widget_id": "w1"})
        .build()
    )
    ```
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Union

from pydantic import BaseModel

from .models.errors import SerializationError

Primitive = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Scalar:
    """A leaf value."""

    value: Primitive

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, (str, int, float, bool)):
            raise SerializationError(
                f"Scalar values must be str, int, float, bool or None, got {type(self.value).__name__}"
            )

    @property
    def text(self) -> str:
        """String form used for query strings and form fields."""
        if self.value is None:
            return ""
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def to_python(self) -> Primitive:
        return self.value


@dataclass(frozen=True)
class ListNode:
    """An ordered sequence; each item's position is part of its encoded key."""

    items: tuple["Node", ...] = ()

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class ObjectNode:
    """Named members in insertion order."""

    members: tuple[tuple[str, "Node"], ...] = ()

    def __post_init__(self) -> None:
        names = [name for name, _ in self.members]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise SerializationError(f"Duplicate member names: {', '.join(duplicates)}")

    @classmethod
    def of(cls, members: Mapping[str, "Node"]) -> "ObjectNode":
        return cls(tuple(members.items()))

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.members)

    def get(self, name: str) -> Optional["Node"]:
        for key, node in self.members:
            if key == name:
                return node
        return None

    def items(self) -> Iterator[tuple[str, "Node"]]:
        return iter(self.members)

    def keys(self) -> list[str]:
        return [key for key, _ in self.members]

    def merge(self, other: "ObjectNode") -> "ObjectNode":
        """Return a new node with ``other``'s members added on top.

        Shallow: a colliding member is replaced wholesale and keeps its
        original position; new members are appended.
        """
        merged = dict(self.members)
        merged.update(other.members)
        return ObjectNode.of(merged)

    def to_python(self) -> dict[str, Any]:
        return {key: node.to_python() for key, node in self.members}


Node = Union[Scalar, ListNode, ObjectNode]


def _child_path(path: str, name: Any) -> str:
    return str(name) if not path else f"{path}[{name}]"


def _object_fields(value: Any) -> Optional[Mapping[str, Any]]:
    """Return the public fields of a structured object, or None if it has none."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__") and not callable(value):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return None


def _to_node(value: Any, path: str, active: set[int]) -> Node:
    if isinstance(value, (Scalar, ListNode, ObjectNode)):
        return value
    if isinstance(value, Enum):
        return _to_node(value.value, path, active)
    if value is None or isinstance(value, (str, bool, int, float)):
        return Scalar(value)
    if isinstance(value, Decimal):
        return Scalar(str(value))
    if isinstance(value, (datetime, date)):
        return Scalar(value.isoformat())

    if isinstance(value, (Mapping, list, tuple)):
        container = value
    else:
        container = _object_fields(value)
        if container is None:
            raise SerializationError(
                f"Unsupported parameter type {type(value).__name__} at '{path or '<root>'}'",
                path=path or None,
            )

    marker = id(value)
    if marker in active:
        raise SerializationError(
            f"Circular reference at '{path or '<root>'}'",
            path=path or None,
        )
    active.add(marker)
    try:
        if isinstance(container, Mapping):
            return ObjectNode(tuple(
                (str(k), _to_node(v, _child_path(path, k), active))
                for k, v in container.items()
            ))
        return ListNode(tuple(
            _to_node(item, _child_path(path, i), active)
            for i, item in enumerate(container)
        ))
    finally:
        active.discard(marker)


def to_node(value: Any) -> Node:
    """Convert any supported value into a parameter node."""
    return _to_node(value, "", set())


def normalize(value: Any = None, extra: Optional[Mapping[str, Any]] = None) -> ObjectNode:
    """Build the top-level parameter object for a request.

    Args:
        value: Caller parameters. ``None`` yields an empty object.
        extra: Members merged on top of ``value``; they win on collision.

    Returns:
        A fresh ObjectNode

    Raises:
        SerializationError: If the input is not object-shaped, contains an
            unsupported type or refers to itself.
    """
    root = ObjectNode() if value is None else to_node(value)
    if not isinstance(root, ObjectNode):
        raise SerializationError(
            f"Parameters must be object-shaped, got {type(value).__name__}"
        )
    if extra:
        root = root.merge(_to_node(dict(extra), "", set()))
    return root


class ParamsBuilder:
    """Fluent builder for top-level request parameters."""

    def __init__(self, initial: Any = None) -> None:
        self._members: dict[str, Node] = dict(normalize(initial).members)

    def set(self, name: str, value: Any) -> "ParamsBuilder":
        self._members[name] = _to_node(value, name, set())
        return self

    def extend(self, values: Mapping[str, Any]) -> "ParamsBuilder":
        for name, value in values.items():
            self.set(str(name), value)
        return self

    def build(self) -> ObjectNode:
        return ObjectNode.of(self._members)
