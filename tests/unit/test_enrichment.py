"""Unit tests for device class and icon inference."""

from __future__ import annotations

import pytest

from regdb.targets.enrichment import DEFAULT_DEVICE_CLASS, DEFAULT_ICON, classify, icon_for


class TestClassify:
    """Test unit -> device class lookup."""

    @pytest.mark.parametrize(
        "unit,expected",
        [
            ("°C", "temperature"),
            ("°F", "temperature"),
            ("A", "current"),
            ("V", "voltage"),
            ("kW", "power"),
            ("Hz", "frequency"),
            ("l/min", "water"),
            ("rpm", "speed"),
            ("kgfcm2", "pressure"),
        ],
    )
    def test_known_units(self, unit: str, expected: str) -> None:
        assert classify(unit) == expected

    def test_unknown_unit_falls_back(self) -> None:
        assert classify("bar") == DEFAULT_DEVICE_CLASS

    def test_match_is_exact(self) -> None:
        assert classify("c") == DEFAULT_DEVICE_CLASS


class TestIconFor:
    """Test name/unit -> icon lookup."""

    @pytest.mark.parametrize(
        "name,unit,expected",
        [
            ("EHS_Outdoor_Temp", "", "mdi:thermometer"),
            ("Supply", "°C", "mdi:thermometer"),
            ("Refrigerant_Pressure", "", "mdi:gauge"),
            ("Fan_Speed", "rpm", "mdi:fan"),
            ("Water_Flow", "", "mdi:water-flow"),
            ("Circulation", "l/min", "mdi:water-flow"),
            ("EHS_Water_Pump", "", "mdi:pump"),
            ("Three_Way_Valve", "", "mdi:pipe-valve"),
            ("Backup_Heater", "", "mdi:radiator"),
            ("Compressor_Status", "", "mdi:air-conditioner"),
            ("Error_Code", "", "mdi:alert-circle"),
            ("Input_Current", "A", "mdi:current-ac"),
            ("Line", "V", "mdi:flash"),
            ("Inverter", "Hz", "mdi:sine-wave"),
        ],
    )
    def test_rules(self, name: str, unit: str, expected: str) -> None:
        assert icon_for(name, unit) == expected

    def test_name_match_is_case_insensitive(self) -> None:
        assert icon_for("OUTDOOR_TEMP") == "mdi:thermometer"

    def test_first_rule_wins(self) -> None:
        # "temp" precedes "pump" in the rule order
        assert icon_for("Pump_Temp") == "mdi:thermometer"
        # unit °C matches the first rule before the name reaches "heat"
        assert icon_for("Heat_Exchanger", "°C") == "mdi:thermometer"

    def test_fallback(self) -> None:
        assert icon_for("EHS_Operating_Mode") == DEFAULT_ICON

    def test_deterministic(self) -> None:
        results = {icon_for("Water_Outlet_Temp", "°C") for _ in range(10)}
        assert results == {"mdi:thermometer"}
