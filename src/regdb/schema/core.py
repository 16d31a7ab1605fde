"""Core register document validation.

Provides the envelope JSON Schema and the top-level validate() /
validate_json() entry points. Diagnostic and ValidationResult live in
``regdb.schema.diagnostics`` and are re-exported here.

The document envelope (make, modbus.models/connection/registers) is
checked with the jsonschema library; everything below the envelope is
checked by the rule functions in ``regdb.schema.rules``. Diagnostics are
collected per call and returned as data. Nothing here raises for a
parseable document, and the input is never mutated.
"""

from __future__ import annotations

import json
from typing import Any

import jsonschema  # type: ignore[import-untyped,unused-ignore]

from regdb.schema import rules
from regdb.schema.diagnostics import (
    DEFAULT_SOURCE,
    Diagnostic,
    DiagnosticCollector,
    ValidationResult,
)

__all__ = [
    "DEFAULT_SOURCE",
    "ENVELOPE_SCHEMA",
    "Diagnostic",
    "DiagnosticCollector",
    "ValidationResult",
    "check_envelope",
    "validate",
    "validate_json",
]

# =============================================================================
# ENVELOPE SCHEMA
# =============================================================================

# Coarse shape only. Field-level rules live in regdb.schema.rules so that
# each problem is reported once, with a register-specific message.
ENVELOPE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "make": {"type": "string"},
        "modbus": {
            "type": "object",
            "properties": {
                "models": {"type": "array"},
                "connection": {"type": "object"},
                "registers": {"type": "object"},
                "unlock_registers": {"type": "object"},
            },
            "required": ["models", "connection", "registers"],
        },
    },
    "required": ["make", "modbus"],
}

_envelope_validator = jsonschema.Draft202012Validator(ENVELOPE_SCHEMA)


# =============================================================================
# TOP-LEVEL API
# =============================================================================


def validate(document: Any, *, source: str = DEFAULT_SOURCE) -> ValidationResult:
    """Validate a decoded register document.

    Checks run in a fixed order and independently of each other; a failed
    check only skips the checks that need the missing part of the document.

    Args:
        document: Decoded JSON value (expected to be a dict).
        source: Identifier used in every diagnostic.

    Returns:
        ValidationResult with errors and warnings.
    """
    if not isinstance(document, dict):
        return _fatal(
            source,
            f"Expected a JSON object at the top level, got {type(document).__name__}",
        )

    diagnostics = DiagnosticCollector(source)

    # Step 1: envelope
    check_envelope(document, diagnostics)

    modbus = document.get("modbus")
    if isinstance(modbus, dict):
        # Step 2: connection
        if isinstance(modbus.get("connection"), dict):
            rules.check_connection(modbus["connection"], diagnostics)

        # Step 3: models
        if isinstance(modbus.get("models"), list):
            rules.check_models(modbus["models"], diagnostics)

        # Steps 4-6: register categories and entries
        if isinstance(modbus.get("registers"), dict):
            rules.check_registers(modbus["registers"], diagnostics)

        if isinstance(modbus.get("unlock_registers"), dict):
            rules.check_unlock_registers(modbus["unlock_registers"], diagnostics)

    # Step 7: document-wide common interface coverage
    rules.check_common_interfaces(document, diagnostics)

    return diagnostics.result()


def validate_json(content: str, *, source: str = DEFAULT_SOURCE) -> ValidationResult:
    """Parse a JSON string and validate it as a register document.

    Malformed JSON yields a single fatal error and no further checks.

    Args:
        content: JSON text.
        source: Identifier used in every diagnostic.

    Returns:
        ValidationResult with errors and warnings.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        return _fatal(source, f"Invalid JSON: {exc}")

    return validate(data, source=source)


def check_envelope(document: dict[str, Any], diagnostics: DiagnosticCollector) -> None:
    """Report missing or wrongly typed top-level fields via the envelope schema."""
    for error in sorted(
        _envelope_validator.iter_errors(document),
        key=lambda e: _format_json_path(e.absolute_path),
    ):
        diagnostics.error(_format_json_path(error.absolute_path), error.message)


# =============================================================================
# HELPERS
# =============================================================================


def _fatal(source: str, message: str) -> ValidationResult:
    return ValidationResult(
        source=source,
        errors=(Diagnostic(source=source, message=message),),
    )


def _format_json_path(path: Any) -> str:
    """Format a jsonschema deque path as a JSONPath-style string.

    Examples:
        deque([]) -> ""
        deque(["modbus", "connection"]) -> "modbus.connection"
    """
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)
