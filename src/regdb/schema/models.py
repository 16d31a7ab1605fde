"""Typed models for register documents.

A document that passed validation is decoded once into these models;
target builders consume them instead of re-checking the raw JSON.

Unknown keys are kept (``extra="allow"``) so that decoding never drops
data, including register categories the builders do not know about.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from regdb.exceptions import DocumentDecodeError

# =============================================================================
# CONNECTION
# =============================================================================


class ConnectionSpec(BaseModel):
    """Serial line parameters of the device."""

    model_config = ConfigDict(extra="allow", frozen=True)

    baudrate: int
    method: str
    bytesize: int | None = None
    parity: str | None = None
    stopbits: int | float | None = None
    delay: int | float | None = None
    message_wait_milliseconds: int | float | None = None
    timeout: int | float | None = None


# =============================================================================
# REGISTERS
# =============================================================================


class RegisterEntry(BaseModel):
    """One addressable data point (sensor, switch, or climate control).

    Fields typed ``Any`` are passed through to the output verbatim.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    address: int | None = None
    unit: str | None = None
    scale: Any = None
    precision: int | None = None
    scan_interval: int | float | None = None
    write_type: str | None = None
    common_interface: str | None = None

    # Switches
    command_on: Any = None
    command_off: Any = None
    verify: Any = None

    # Climates
    target_temp_register: Any = None
    max_temp: int | float | None = None
    min_temp: int | float | None = None
    hvac_onoff_register: Any = None
    hvac_mode_register: Any = None


class RegisterSet(BaseModel):
    """Register entries grouped by category.

    A category is ``None`` when the document does not define it, which is
    different from an empty list.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    sensors: list[RegisterEntry] | None = None
    switches: list[RegisterEntry] | None = None
    climates: list[RegisterEntry] | None = None
    input_registers: list[RegisterEntry] | None = None
    holding_registers: list[RegisterEntry] | None = None
    coils: list[RegisterEntry] | None = None
    discrete_inputs: list[RegisterEntry] | None = None

    @property
    def unknown_categories(self) -> dict[str, Any]:
        """Categories preserved from the source but not recognized."""
        return dict(self.model_extra or {})


# =============================================================================
# UNLOCK REGISTERS
# =============================================================================


class UnlockValue(BaseModel):
    """One value written as part of an unlock sequence."""

    hex: str
    decimal: int
    description: str = ""


class UnlockSequence(BaseModel):
    """Values to write to one register to unlock the device."""

    address: int
    values: list[UnlockValue] = Field(..., description="Values in write order")


class UnlockSpec(BaseModel):
    """Unlock sequences keyed by name, plus an optional description."""

    model_config = ConfigDict(extra="allow", frozen=True)

    description: str | None = None

    def sequences(self) -> dict[str, UnlockSequence]:
        """Return the well-formed sequences in document order.

        Malformed sequences are skipped; the validator reports them as
        warnings.
        """
        result: dict[str, UnlockSequence] = {}
        for key, raw in (self.model_extra or {}).items():
            try:
                result[key] = UnlockSequence.model_validate(raw)
            except PydanticValidationError:
                continue
        return result


# =============================================================================
# DOCUMENT
# =============================================================================


class RegisterDocument(BaseModel):
    """A manufacturer's register description."""

    model_config = ConfigDict(frozen=True)

    make: str
    models: list[str] = Field(default_factory=list)
    connection: ConnectionSpec | None = None
    registers: RegisterSet = Field(default_factory=RegisterSet)
    unlock_registers: UnlockSpec | None = None

    @classmethod
    def from_raw(cls, data: dict[str, Any], *, source: str | None = None) -> RegisterDocument:
        """Decode a raw JSON document (``{"make": ..., "modbus": {...}}``).

        Args:
            data: Decoded JSON document, normally one validate() accepted.
            source: Identifier for error reporting.

        Returns:
            The typed document.

        Raises:
            DocumentDecodeError: If the document does not fit the models.
        """
        modbus = data.get("modbus")
        if not isinstance(modbus, dict):
            modbus = {}

        fields: dict[str, Any] = {"make": data.get("make")}
        for key in ("models", "connection", "registers", "unlock_registers"):
            if modbus.get(key) is not None:
                fields[key] = modbus[key]

        try:
            return cls.model_validate(fields)
        except PydanticValidationError as exc:
            raise DocumentDecodeError(
                f"Document does not match the register schema ({exc.error_count()} errors)",
                source=source,
                details=[
                    {"loc": ".".join(str(part) for part in e["loc"]), "msg": e["msg"]}
                    for e in exc.errors()
                ],
            ) from exc
