"""Shared vocabulary for register document schemas.

Register categories, the common interface vocabulary, and the
connection constants used by both the validator and the typed models.
"""

from __future__ import annotations

from enum import Enum

# =============================================================================
# ENUMS
# =============================================================================


class RegisterCategory(str, Enum):
    """Register categories a document may define under ``modbus.registers``."""

    SENSORS = "sensors"
    SWITCHES = "switches"
    CLIMATES = "climates"
    INPUT_REGISTERS = "input_registers"
    HOLDING_REGISTERS = "holding_registers"
    COILS = "coils"
    DISCRETE_INPUTS = "discrete_inputs"


# =============================================================================
# CONSTANTS
# =============================================================================

REGISTER_CATEGORIES = frozenset(c.value for c in RegisterCategory)

# Categories whose entries may omit 'address'.
ADDRESSLESS_CATEGORIES = frozenset({RegisterCategory.CLIMATES.value})

MIN_ADDRESS = 0
MAX_ADDRESS = 65535

STANDARD_BAUDRATES = frozenset({1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200})

# Tags marking a register as equivalent across manufacturers.
COMMON_INTERFACES = (
    "outdoor_temperature",
    "water_inlet_temp",
    "water_outlet_temp",
    "water_outlet_target",
    "flow_temp_control",
    "discharge_temp",
    "suction_temp",
    "operating_mode",
    "error_code",
    "compressor_status",
    "water_flow_rate",
)

# Every document is expected to map these.
ESSENTIAL_INTERFACES = (
    "outdoor_temperature",
    "water_outlet_temp",
    "operating_mode",
)

__all__ = [
    "ADDRESSLESS_CATEGORIES",
    "COMMON_INTERFACES",
    "ESSENTIAL_INTERFACES",
    "MAX_ADDRESS",
    "MIN_ADDRESS",
    "REGISTER_CATEGORIES",
    "STANDARD_BAUDRATES",
    "RegisterCategory",
]
