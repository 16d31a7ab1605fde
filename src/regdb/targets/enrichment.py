"""Device class and icon inference from register names and units.

Both lookups are ordered tables evaluated top to bottom, so the same
(name, unit) always produces the same result.
"""

from __future__ import annotations

DEFAULT_DEVICE_CLASS = "measurement"
DEFAULT_ICON = "mdi:information"

DEVICE_CLASSES: dict[str, str] = {
    "°C": "temperature",
    "°F": "temperature",
    "A": "current",
    "V": "voltage",
    "W": "power",
    "kW": "power",
    "Hz": "frequency",
    "%": "power_factor",
    "l/min": "water",
    "rpm": "speed",
    "kgfcm2": "pressure",
}

# (name substrings, exact units, icon); first match wins.
ICON_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...], str], ...] = (
    (("temp",), ("°C",), "mdi:thermometer"),
    (("pressure",), (), "mdi:gauge"),
    (("fan",), (), "mdi:fan"),
    (("flow",), ("l/min",), "mdi:water-flow"),
    (("pump",), (), "mdi:pump"),
    (("valve",), (), "mdi:pipe-valve"),
    (("heat",), (), "mdi:radiator"),
    (("compressor",), (), "mdi:air-conditioner"),
    (("error",), (), "mdi:alert-circle"),
    ((), ("A",), "mdi:current-ac"),
    ((), ("V",), "mdi:flash"),
    ((), ("Hz",), "mdi:sine-wave"),
)


def classify(unit: str) -> str:
    """Return the measurement class for a unit (exact match)."""
    return DEVICE_CLASSES.get(unit, DEFAULT_DEVICE_CLASS)


def icon_for(name: str, unit: str = "") -> str:
    """Return the Material Design icon for a register."""
    lowered = name.lower()
    for substrings, units, icon in ICON_RULES:
        if unit in units or any(s in lowered for s in substrings):
            return icon
    return DEFAULT_ICON
