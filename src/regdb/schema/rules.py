"""Field-level validation rules for register documents.

Each check receives a part of the raw document and a DiagnosticCollector
and reports what it finds. Checks never raise and never modify the
document. Called from ``regdb.schema.core.validate()`` after the envelope
schema check.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from regdb.schema.common import (
    ADDRESSLESS_CATEGORIES,
    COMMON_INTERFACES,
    ESSENTIAL_INTERFACES,
    MAX_ADDRESS,
    MIN_ADDRESS,
    REGISTER_CATEGORIES,
    STANDARD_BAUDRATES,
    RegisterCategory,
)
from regdb.schema.diagnostics import DiagnosticCollector
from regdb.schema.models import UnlockSequence


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_integer(value: Any) -> bool:
    # bool is an int subclass but never a valid register value
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": _is_string,
    "integer": _is_integer,
    "number": _is_number,
}

_REQUIRED_CONNECTION_FIELDS = {
    "baudrate": "integer",
    "method": "string",
}

_OPTIONAL_CONNECTION_FIELDS = {
    "bytesize": "integer",
    "parity": "string",
    "stopbits": "number",
    "delay": "number",
    "message_wait_milliseconds": "number",
    "timeout": "number",
}

# Optional entry fields the builders read with a concrete type. Fields not
# listed here are passed through to the output verbatim.
_OPTIONAL_ENTRY_FIELDS = {
    "unit": "string",
    "write_type": "string",
    "common_interface": "string",
    "precision": "integer",
    "scan_interval": "number",
    "max_temp": "number",
    "min_temp": "number",
}


# =============================================================================
# CONNECTION / MODELS
# =============================================================================


def check_connection(connection: dict[str, Any], diagnostics: DiagnosticCollector) -> None:
    """Check required connection fields and the baud rate allow-list."""
    for field, kind in _REQUIRED_CONNECTION_FIELDS.items():
        value = connection.get(field)
        if value is None:
            diagnostics.error("modbus.connection", f"Missing required connection.{field}")
        elif not _TYPE_CHECKS[kind](value):
            diagnostics.error(
                f"modbus.connection.{field}",
                f"Field connection.{field} must be {kind}, got {value!r}",
            )

    _check_optional_types(
        connection,
        _OPTIONAL_CONNECTION_FIELDS,
        "modbus.connection",
        "connection",
        diagnostics,
    )

    baudrate = connection.get("baudrate")
    if _is_integer(baudrate) and baudrate not in STANDARD_BAUDRATES:
        diagnostics.warning("modbus.connection.baudrate", f"Unusual baudrate: {baudrate}")


def check_models(models: list[Any], diagnostics: DiagnosticCollector) -> None:
    """Check that the model list is non-empty and holds only strings."""
    if not models:
        diagnostics.error("modbus.models", "Models array is empty")
        return

    for i, model in enumerate(models):
        if not isinstance(model, str):
            diagnostics.error(f"modbus.models[{i}]", f"Model name must be string, got {model!r}")


# =============================================================================
# REGISTERS
# =============================================================================


def check_registers(registers: dict[str, Any], diagnostics: DiagnosticCollector) -> None:
    """Check every register category and the entries of recognized ones."""
    for category, items in registers.items():
        path = f"modbus.registers.{category}"

        if category not in REGISTER_CATEGORIES:
            diagnostics.warning(path, f"Unknown register type '{category}'")
            continue

        if not isinstance(items, list):
            diagnostics.error(path, f"Register type '{category}' must be an array")
            continue

        for i, item in enumerate(items):
            _check_entry(category, i, item, diagnostics)


def _check_entry(
    category: str,
    index: int,
    item: Any,
    diagnostics: DiagnosticCollector,
) -> None:
    """Check a single register entry."""
    path = f"modbus.registers.{category}[{index}]"
    ref = f"{category}[{index}]"

    if not isinstance(item, dict):
        diagnostics.error(path, f"Register {ref} must be an object")
        return

    name = item.get("name")
    if name is None:
        diagnostics.error(path, f"Missing 'name' for {ref}")
    elif not isinstance(name, str):
        diagnostics.error(f"{path}.name", f"Field 'name' of {ref} must be string, got {name!r}")
    label = name if isinstance(name, str) else ref

    address = item.get("address")
    if address is None:
        if category not in ADDRESSLESS_CATEGORIES:
            diagnostics.error(path, f"Missing 'address' for {ref}")
    elif not _is_integer(address) or not MIN_ADDRESS <= address <= MAX_ADDRESS:
        diagnostics.error(f"{path}.address", f"Invalid address for {label}: {address!r}")

    # Non-positive scales are reported but allowed through (inverting multipliers).
    scale = item.get("scale")
    if scale is not None and (not _is_number(scale) or scale <= 0):
        diagnostics.warning(f"{path}.scale", f"Invalid scale for {label}: {scale!r}")

    _check_optional_types(item, _OPTIONAL_ENTRY_FIELDS, path, label, diagnostics)

    if category == RegisterCategory.CLIMATES.value:
        if item.get("target_temp_register") is None:
            diagnostics.warning(path, f"Climate {label} missing target_temp_register")
        if item.get("max_temp") is None or item.get("min_temp") is None:
            diagnostics.warning(path, f"Climate {label} missing temp limits (max_temp/min_temp)")


def _check_optional_types(
    data: dict[str, Any],
    fields: dict[str, str],
    path: str,
    label: str,
    diagnostics: DiagnosticCollector,
) -> None:
    for field, kind in fields.items():
        value = data.get(field)
        if value is not None and not _TYPE_CHECKS[kind](value):
            diagnostics.error(
                f"{path}.{field}",
                f"Field '{field}' of {label} must be {kind}, got {value!r}",
            )


# =============================================================================
# UNLOCK REGISTERS
# =============================================================================


def check_unlock_registers(unlock: dict[str, Any], diagnostics: DiagnosticCollector) -> None:
    """Check unlock sequences; malformed ones are skipped at build time."""
    description = unlock.get("description")
    if description is not None and not isinstance(description, str):
        diagnostics.error(
            "modbus.unlock_registers.description",
            f"Unlock description must be string, got {description!r}",
        )

    for key, sequence in unlock.items():
        if key == "description":
            continue

        path = f"modbus.unlock_registers.{key}"
        try:
            UnlockSequence.model_validate(sequence)
        except PydanticValidationError as exc:
            for e in exc.errors():
                loc = "".join(
                    f"[{part}]" if isinstance(part, int) else f".{part}" for part in e["loc"]
                )
                diagnostics.warning(f"{path}{loc}", f"Unlock sequence '{key}' skipped: {e['msg']}")


# =============================================================================
# COMMON INTERFACES
# =============================================================================


def check_common_interfaces(document: dict[str, Any], diagnostics: DiagnosticCollector) -> None:
    """Check common interface tags across all entries of the document."""
    modbus = document.get("modbus")
    registers = modbus.get("registers") if isinstance(modbus, dict) else None

    found: set[str] = set()
    if isinstance(registers, dict):
        for category, items in registers.items():
            if not isinstance(items, list):
                continue
            for i, item in enumerate(items):
                if not isinstance(item, dict):
                    continue
                tag = item.get("common_interface")
                if not isinstance(tag, str):
                    continue
                found.add(tag)
                # Unknown categories already carry their own warning.
                if category in REGISTER_CATEGORIES and tag not in COMMON_INTERFACES:
                    diagnostics.warning(
                        f"modbus.registers.{category}[{i}].common_interface",
                        f"Unknown common interface '{tag}'",
                    )

    for interface in ESSENTIAL_INTERFACES:
        if interface not in found:
            diagnostics.warning(
                "modbus.registers",
                f"Missing common interface mapping for '{interface}'",
            )
