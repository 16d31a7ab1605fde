"""Register document validation and typed models.

Usage::

    from regdb.schema import RegisterDocument, validate_json

    result = validate_json(text, source="samsung/samsung.json")
    for diagnostic in result.errors + result.warnings:
        print(diagnostic)
    if result.buildable:
        document = RegisterDocument.from_raw(json.loads(text))
"""

from __future__ import annotations

from regdb.schema.core import validate, validate_json
from regdb.schema.diagnostics import Diagnostic, ValidationResult
from regdb.schema.models import (
    ConnectionSpec,
    RegisterDocument,
    RegisterEntry,
    RegisterSet,
    UnlockSequence,
    UnlockSpec,
    UnlockValue,
)

__all__ = [
    "ConnectionSpec",
    "Diagnostic",
    "RegisterDocument",
    "RegisterEntry",
    "RegisterSet",
    "UnlockSequence",
    "UnlockSpec",
    "UnlockValue",
    "ValidationResult",
    "validate",
    "validate_json",
]
