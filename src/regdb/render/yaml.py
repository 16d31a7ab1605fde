"""YAML serializer for semantic trees.

Renders Scalar / Sequence / Record nodes as block-style YAML. Layout and
quoting are fixed by a YamlStyle so the Home Assistant and ESPHome outputs
share one implementation:

- Records render ``key: value`` for scalars and ``key:`` followed by an
  indented block for collections.
- A record inside a sequence that has a scalar ``name`` puts ``name`` on
  the ``- `` line and the remaining fields beneath it.
- With ``inline_scalar_lists``, a list holding only scalars renders as
  ``[a, b]``.
- Strings are single-quoted when empty, when they contain whitespace or a
  YAML indicator character, when they spell a YAML 1.1 boolean or null, or
  (with ``quote_numeric_strings``) when they read as a number. Strings with
  control characters are double-quoted with escapes. ``!secret`` references
  are never quoted.
- Keys follow the scalar rules, except that numeric keys are always quoted
  and ``!secret`` gets no exemption.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from regdb.render.tree import Node, Record, Scalar, ScalarValue, Sequence

SECRET_PREFIX = "!secret"

_STRUCTURAL_RE = re.compile(r"[:{}\[\],&*#?|\-<>=!%@\\]")
_WHITESPACE_RE = re.compile(r"\s")
_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")

# Plain scalars YAML 1.1 loaders read as booleans or null (compared lowercased)
_RESERVED_WORDS = frozenset({"true", "false", "yes", "no", "on", "off", "y", "n", "null", "~"})

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\x00": "\\0",
}


@dataclass(frozen=True)
class YamlStyle:
    """Layout and quoting options for serialize().

    Attributes:
        inline_scalar_lists: Render lists of scalars as ``[a, b]``.
        quote_numeric_strings: Quote strings that would load as numbers.
        indent: Spaces per nesting level.
    """

    inline_scalar_lists: bool = False
    quote_numeric_strings: bool = False
    indent: int = 2


HOMEASSISTANT_STYLE = YamlStyle()
ESPHOME_STYLE = YamlStyle(inline_scalar_lists=True, quote_numeric_strings=True)


def serialize(node: Node, style: YamlStyle = HOMEASSISTANT_STYLE) -> str:
    """Render a semantic tree as YAML text.

    Args:
        node: Root of the tree.
        style: Layout and quoting options.

    Returns:
        YAML text ending with a newline.

    Raises:
        TypeError: If the tree holds something other than nodes, or a
            record key is not a string.
    """
    return "\n".join(_Renderer(style).document(node)) + "\n"


def format_scalar(value: ScalarValue, style: YamlStyle = HOMEASSISTANT_STYLE) -> str:
    """Render a single scalar the way serialize() would."""
    return _Renderer(style).scalar(value)


class _Renderer:
    def __init__(self, style: YamlStyle) -> None:
        self.style = style

    def document(self, node: Node) -> list[str]:
        if isinstance(node, Record):
            return self.record(node, 0)
        if isinstance(node, Sequence):
            return self.sequence(node, 0)
        if isinstance(node, Scalar):
            return [self.scalar(node.value)]
        raise TypeError(f"Expected a tree node, got {type(node).__name__}")

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def record(self, record: Record, depth: int) -> list[str]:
        lines: list[str] = []
        pad = self._pad(depth)

        for key, node in record.items():
            if not isinstance(key, str):
                raise TypeError(f"Record keys must be strings, got {key!r}")
            key = self.key(key)

            if isinstance(node, Scalar):
                lines.append(f"{pad}{key}: {self.scalar(node.value)}")
            elif isinstance(node, Sequence):
                inline = self._inline(node)
                if inline is not None:
                    lines.append(f"{pad}{key}: {inline}")
                else:
                    lines.append(f"{pad}{key}:")
                    lines.extend(self.sequence(node, depth + 1))
            elif isinstance(node, Record):
                if not node:
                    lines.append(f"{pad}{key}: {{}}")
                else:
                    lines.append(f"{pad}{key}:")
                    lines.extend(self.record(node, depth + 1))
            else:
                raise TypeError(f"Expected a tree node under {key}, got {type(node).__name__}")

        return lines

    def sequence(self, sequence: Sequence, depth: int) -> list[str]:
        lines: list[str] = []
        pad = self._pad(depth)

        for item in sequence:
            if isinstance(item, Scalar):
                lines.append(f"{pad}- {self.scalar(item.value)}")
            elif isinstance(item, Record):
                name = item.get("name")
                if isinstance(name, Scalar):
                    lines.append(f"{pad}- name: {self.scalar(name.value)}")
                    rest = Record({k: v for k, v in item.items() if k != "name"})
                    lines.extend(self.record(rest, depth + 1))
                elif not item:
                    lines.append(f"{pad}- {{}}")
                else:
                    lines.append(f"{pad}-")
                    lines.extend(self.record(item, depth + 1))
            elif isinstance(item, Sequence):
                inline = self._inline(item)
                if inline is not None:
                    lines.append(f"{pad}- {inline}")
                else:
                    lines.append(f"{pad}-")
                    lines.extend(self.sequence(item, depth + 1))
            else:
                raise TypeError(f"Expected a tree node in sequence, got {type(item).__name__}")

        return lines

    def _inline(self, sequence: Sequence) -> str | None:
        """Return the flow rendering of ``sequence``, or None for block layout."""
        if not sequence:
            return "[]"
        if self.style.inline_scalar_lists and all(isinstance(i, Scalar) for i in sequence):
            return "[" + ", ".join(self.scalar(i.value) for i in sequence) + "]"  # type: ignore[union-attr]
        return None

    def _pad(self, depth: int) -> str:
        return " " * (self.style.indent * depth)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def scalar(self, value: ScalarValue) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, str):
            return self.string(value)
        raise TypeError(f"Unsupported scalar type: {type(value).__name__}")

    def string(self, value: str) -> str:
        if value.startswith(SECRET_PREFIX) and not _CONTROL_RE.search(value):
            return value
        return self._quote(value, self.style.quote_numeric_strings)

    def key(self, value: str) -> str:
        # A bare numeric key would load back as a number in either style
        return self._quote(value, quote_numeric=True)

    def _quote(self, value: str, quote_numeric: bool) -> str:
        if _CONTROL_RE.search(value):
            return _double_quoted(value)
        if self._needs_quotes(value, quote_numeric):
            return "'" + value.replace("'", "''") + "'"
        return value

    def _needs_quotes(self, value: str, quote_numeric: bool) -> bool:
        if value == "" or value.lower() in _RESERVED_WORDS:
            return True
        if _STRUCTURAL_RE.search(value) or _WHITESPACE_RE.search(value):
            return True
        return quote_numeric and bool(_NUMERIC_RE.match(value))


def _double_quoted(value: str) -> str:
    escaped = []
    for char in value:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif _CONTROL_RE.match(char):
            escaped.append(f"\\x{ord(char):02x}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def _format_float(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    text = repr(value)
    # YAML 1.1 loaders only read exponent floats that have a dot
    if "e" in text and "." not in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text
