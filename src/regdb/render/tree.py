"""Semantic tree: the only input the YAML serializer accepts.

Builders describe their output as explicit Scalar / Sequence / Record
nodes so the serializer never has to guess whether a collection is a
list or a mapping.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

ScalarValue = Union[bool, int, float, str, None]

_SCALAR_TYPES = (bool, int, float, str, type(None))


@dataclass(frozen=True)
class Scalar:
    """A leaf value: bool, null, number, or string."""

    value: ScalarValue


@dataclass(frozen=True)
class Sequence:
    """An ordered list of nodes."""

    items: tuple[Node, ...] = ()

    @classmethod
    def of(cls, values: Iterable[Any]) -> Sequence:
        """Build a sequence, wrapping plain scalars in Scalar nodes."""
        return cls(tuple(as_node(v) for v in values))

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class Record:
    """A mapping of string keys to nodes, in insertion order."""

    fields: dict[str, Node] = field(default_factory=dict)

    def set(self, key: str, value: Any) -> Record:
        """Set ``key`` to a node or plain scalar; returns self for chaining."""
        self.fields[key] = as_node(value)
        return self

    def set_optional(self, key: str, value: Any) -> Record:
        """Set ``key`` only when ``value`` is not None."""
        if value is not None:
            self.set(key, value)
        return self

    def get(self, key: str) -> Node | None:
        return self.fields.get(key)

    def items(self) -> Iterable[tuple[str, Node]]:
        return self.fields.items()

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)


Node = Union[Scalar, Sequence, Record]

NODE_TYPES = (Scalar, Sequence, Record)


def as_node(value: Any) -> Node:
    """Return ``value`` as a node.

    Nodes are returned unchanged and plain scalars are wrapped.

    Raises:
        TypeError: For any other value. Collections must be built
            explicitly, or converted with from_native().
    """
    if isinstance(value, NODE_TYPES):
        return value
    if isinstance(value, _SCALAR_TYPES):
        return Scalar(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a tree node; use from_native()")


def from_native(value: Any) -> Node:
    """Convert a decoded JSON value into a tree.

    Used for fields copied verbatim from the source document, where JSON
    already distinguishes objects from arrays.
    """
    if isinstance(value, NODE_TYPES):
        return value
    if isinstance(value, dict):
        record = Record()
        for key, item in value.items():
            record.fields[str(key)] = from_native(item)
        return record
    if isinstance(value, (list, tuple)):
        return Sequence(tuple(from_native(item) for item in value))
    return as_node(value)
