"""Validation findings and their per-document collection.

Diagnostic and ValidationResult are the data returned by validation;
DiagnosticCollector is handed to each rule in ``regdb.schema.rules``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE = "<document>"


class Diagnostic(BaseModel):
    """A single validation finding with document and location context.

    Attributes:
        source: Identifier of the document (usually its relative path).
        path: JSONPath-style location (e.g., "modbus.registers.sensors[0]").
        message: Human-readable description.
        severity: "error" blocks building, "warning" does not.
    """

    model_config = ConfigDict(frozen=True)

    source: str = DEFAULT_SOURCE
    path: str = ""
    message: str
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.path:
            return f"{self.source}: {self.path}: {self.message}"
        return f"{self.source}: {self.message}"


class ValidationResult(BaseModel):
    """Result of validating one register document.

    Attributes:
        source: Identifier of the validated document.
        errors: Error diagnostics, in check order.
        warnings: Warning diagnostics, in check order.
    """

    model_config = ConfigDict(frozen=True)

    source: str = DEFAULT_SOURCE
    errors: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    warnings: tuple[Diagnostic, ...] = Field(default_factory=tuple)

    @property
    def buildable(self) -> bool:
        """Whether the document can be handed to the target builders."""
        return not self.errors


class DiagnosticCollector:
    """Accumulates diagnostics for a single validate() call."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._errors: list[Diagnostic] = []
        self._warnings: list[Diagnostic] = []

    def error(self, path: str, message: str) -> None:
        self._errors.append(Diagnostic(source=self.source, path=path, message=message))

    def warning(self, path: str, message: str) -> None:
        self._warnings.append(
            Diagnostic(source=self.source, path=path, message=message, severity="warning")
        )

    def result(self) -> ValidationResult:
        return ValidationResult(
            source=self.source,
            errors=tuple(self._errors),
            warnings=tuple(self._warnings),
        )
