"""Shared test fixtures for regdb.

Provides register documents and source trees used across unit tests.
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from regdb.settings import Settings

# =============================================================================
# DOCUMENTS
# =============================================================================

MINIMAL_DOCUMENT: dict[str, Any] = {
    "make": "Acme",
    "modbus": {
        "models": ["X1"],
        "connection": {"baudrate": 9600, "method": "rtu"},
        "registers": {
            "sensors": [
                {
                    "name": "Outdoor_Temp",
                    "address": 13,
                    "unit": "°C",
                    "common_interface": "outdoor_temperature",
                }
            ]
        },
    },
}

FULL_DOCUMENT: dict[str, Any] = {
    "make": "Samsung",
    "modbus": {
        "models": ["AE050RXYDEG", "AE080RXYDEG"],
        "connection": {
            "baudrate": 9600,
            "method": "rtu",
            "bytesize": 8,
            "parity": "E",
            "stopbits": 1,
            "timeout": 3,
        },
        "registers": {
            "switches": [
                {
                    "name": "EHS_Water_Pump",
                    "address": 52,
                    "write_type": "holding",
                    "command_on": 1,
                    "command_off": 0,
                    "verify": {"address": 52},
                }
            ],
            "sensors": [
                {
                    "name": "EHS_Outdoor_Temp",
                    "address": 5,
                    "unit": "°C",
                    "scale": 0.1,
                    "precision": 1,
                    "scan_interval": 10,
                    "common_interface": "outdoor_temperature",
                },
                {
                    "name": "EHS_Water_Outlet_Temp",
                    "address": 66,
                    "unit": "°C",
                    "scale": 0.1,
                    "common_interface": "water_outlet_temp",
                },
                {
                    "name": "EHS_Operating_Mode",
                    "address": 53,
                    "common_interface": "operating_mode",
                },
            ],
            "climates": [
                {
                    "name": "EHS_Water_Law",
                    "address": 58,
                    "target_temp_register": 58,
                    "max_temp": 55,
                    "min_temp": 25,
                    "scale": 0.1,
                    "hvac_mode_register": {"address": 53, "values": {"heat": 4}},
                }
            ],
        },
        "unlock_registers": {
            "description": "Enable writes to the indoor unit",
            "unlock_sequence": {
                "address": 6000,
                "values": [
                    {"hex": "0x8204", "decimal": 33284, "description": "Room temperature"},
                    {"hex": "0x4204", "decimal": 16900, "description": "Water outlet"},
                ],
            },
        },
    },
}


@pytest.fixture
def minimal_document() -> dict[str, Any]:
    """A document that validates with no errors and two warnings."""
    return copy.deepcopy(MINIMAL_DOCUMENT)


@pytest.fixture
def full_document() -> dict[str, Any]:
    """A document using every register category the builders read."""
    return copy.deepcopy(FULL_DOCUMENT)


# =============================================================================
# SOURCE TREES
# =============================================================================


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A register source directory with two manufacturers."""
    source = tmp_path / "registers"
    (source / "acme").mkdir(parents=True)
    (source / "samsung").mkdir(parents=True)
    (source / "acme" / "acme.json").write_text(json.dumps(MINIMAL_DOCUMENT), encoding="utf-8")
    (source / "samsung" / "samsung.json").write_text(
        json.dumps(FULL_DOCUMENT), encoding="utf-8"
    )
    return source


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Provide settings pointing at temporary directories."""
    return Settings(
        source_dir=tmp_path / "registers",
        builds_dir=tmp_path / "builds",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings(test_settings: Settings, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Mock get_settings() to return test settings."""
    import regdb.cli.main

    monkeypatch.setattr(regdb.cli.main, "get_settings", lambda: test_settings)
    return test_settings


# =============================================================================
# YAML
# =============================================================================


class _SecretLoader(yaml.SafeLoader):
    """SafeLoader that reads ``!secret name`` as ``{"secret": name}``."""


_SecretLoader.add_constructor(
    "!secret",
    lambda loader, node: {"secret": loader.construct_scalar(node)},
)


def load_yaml(text: str) -> Any:
    """Parse generated YAML, including ESPHome ``!secret`` references."""
    return yaml.load(text, Loader=_SecretLoader)  # noqa: S506


@pytest.fixture
def parse_yaml():
    """Parser for generated YAML text."""
    return load_yaml
