"""Semantic tree model and YAML serializer."""

from __future__ import annotations

from regdb.render.tree import Node, Record, Scalar, Sequence, as_node, from_native
from regdb.render.yaml import (
    ESPHOME_STYLE,
    HOMEASSISTANT_STYLE,
    YamlStyle,
    format_scalar,
    serialize,
)

__all__ = [
    "ESPHOME_STYLE",
    "HOMEASSISTANT_STYLE",
    "Node",
    "Record",
    "Scalar",
    "Sequence",
    "YamlStyle",
    "as_node",
    "format_scalar",
    "from_native",
    "serialize",
]
