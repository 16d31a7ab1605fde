"""ESPHome device configuration builder.

Produces a complete ESP32 node configuration: fixed infrastructure
sections (wifi, logger, api, ota, web_server) with ``!secret`` references,
a UART + modbus_controller pair derived from the connection block, and
``switch`` / ``sensor`` / ``climate`` platforms for the registers.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime

from regdb.render.tree import Record, Sequence, from_native
from regdb.schema.models import RegisterDocument, RegisterEntry
from regdb.targets.enrichment import classify, icon_for

logger = logging.getLogger(__name__)

HEADER_TITLE = "ESPHome configuration for heat pump modbus interface"

BOARD_PLATFORM = "ESP32"
BOARD = "esp32dev"
TX_PIN = "GPIO17"
RX_PIN = "GPIO16"
UART_ID = "mod_bus"
MODBUS_ID = "modbus1"
CONTROLLER_ID = "heatpump"
CONTROLLER_ADDRESS = 2
UPDATE_INTERVAL_SECONDS = 30
# modbus_controller stores skip_updates as a 16-bit counter
MAX_SKIP_UPDATES = 65535

DEFAULT_BAUDRATE = 9600
DEFAULT_STOPBITS = 1
DEFAULT_PARITY = "NONE"
PARITY_NAMES = {"E": "EVEN", "O": "ODD", "N": "NONE"}

DEFAULT_REGISTER_TYPE = "holding"
DEFAULT_VALUE_TYPE = "U_WORD"
DEFAULT_MIN_TEMPERATURE = 10
DEFAULT_MAX_TEMPERATURE = 30
TEMPERATURE_STEP = 0.5

# Vendor prefixes dropped from display names
NAME_PREFIXES = ("EHS_",)


def build_esphome(document: RegisterDocument) -> Record:
    """Build the ESPHome configuration for a document.

    Args:
        document: Decoded register document.

    Returns:
        The root record of the configuration.
    """
    config = Record()

    config.set(
        "esphome",
        Record()
        .set("name", f"{_slug(document.make)}-modbus")
        .set("platform", BOARD_PLATFORM)
        .set("board", BOARD),
    )
    config.set(
        "wifi",
        Record()
        .set("ssid", "!secret wifi_ssid")
        .set("password", "!secret wifi_password")
        .set(
            "ap",
            Record().set("ssid", "HeatPump-Fallback").set("password", "!secret ap_password"),
        ),
    )
    # UART logging is disabled; the UART belongs to the modbus line
    config.set("logger", Record().set("level", "DEBUG").set("baud_rate", 0))
    config.set(
        "api",
        Record().set("encryption", Record().set("key", "!secret api_encryption_key")),
    )
    config.set(
        "ota",
        Record().set("platform", "esphome").set("password", "!secret ota_password"),
    )
    config.set("web_server", Record().set("port", 80))

    config.set("uart", _uart(document))
    config.set("modbus", Record().set("id", MODBUS_ID).set("uart_id", UART_ID))
    config.set(
        "modbus_controller",
        Record()
        .set("id", CONTROLLER_ID)
        .set("address", CONTROLLER_ADDRESS)
        .set("modbus_id", MODBUS_ID)
        .set("setup_priority", -10)
        .set("update_interval", f"{UPDATE_INTERVAL_SECONDS}s"),
    )

    registers = document.registers
    if registers.switches is not None:
        config.set("switch", Sequence(tuple(_switch(e) for e in registers.switches)))
    if registers.sensors is not None:
        config.set("sensor", Sequence(tuple(_sensor(e) for e in registers.sensors)))
    if registers.climates is not None:
        config.set("climate", Sequence(tuple(_climate(e) for e in registers.climates)))

    logger.debug("Built ESPHome configuration for %s", document.make)
    return config


def render_header(generated_at: datetime) -> str:
    """Return the comment block written above the generated YAML."""
    return (
        f"# {HEADER_TITLE}\n"
        "# Generated from modbus register definitions\n"
        f"# Date: {generated_at:%Y-%m-%d %H:%M:%S}\n"
        "\n"
    )


def humanize_name(name: str) -> str:
    """Turn a register name into a display name.

    ``EHS_OUTDOOR_TEMP`` -> ``Outdoor Temp``
    """
    for prefix in NAME_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    name = name.replace("_", " ").lower()
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), name)


def skip_updates(scan_interval: float) -> int:
    """Number of controller updates between reads of a register.

    Clamped to 1..MAX_SKIP_UPDATES; a non-positive interval reads on
    every update.
    """
    if scan_interval <= 0:
        return 1
    ratio = UPDATE_INTERVAL_SECONDS / scan_interval
    if not math.isfinite(ratio) or ratio >= MAX_SKIP_UPDATES:
        return MAX_SKIP_UPDATES
    return max(1, math.floor(ratio))


def _uart(document: RegisterDocument) -> Record:
    connection = document.connection
    baudrate = connection.baudrate if connection is not None else None
    stopbits = connection.stopbits if connection is not None else None
    parity = connection.parity if connection is not None else None

    return (
        Record()
        .set("id", UART_ID)
        .set("tx_pin", TX_PIN)
        .set("rx_pin", RX_PIN)
        .set("baud_rate", baudrate if baudrate is not None else DEFAULT_BAUDRATE)
        .set("stop_bits", stopbits if stopbits is not None else DEFAULT_STOPBITS)
        .set("parity", PARITY_NAMES.get(parity or "", DEFAULT_PARITY))
    )


def _entity_id(entry: RegisterEntry) -> str:
    return entry.name.lower()


def _switch(entry: RegisterEntry) -> Record:
    return (
        Record()
        .set("platform", "modbus_controller")
        .set("modbus_controller_id", CONTROLLER_ID)
        .set("name", humanize_name(entry.name))
        .set("id", _entity_id(entry))
        .set("register_type", entry.write_type or DEFAULT_REGISTER_TYPE)
        .set_optional("address", entry.address)
        .set("bitmask", 1)
        .set("icon", icon_for(entry.name))
    )


def _sensor(entry: RegisterEntry) -> Record:
    sensor = (
        Record()
        .set("platform", "modbus_controller")
        .set("modbus_controller_id", CONTROLLER_ID)
        .set("name", humanize_name(entry.name))
        .set("id", _entity_id(entry))
        .set("register_type", DEFAULT_REGISTER_TYPE)
        .set_optional("address", entry.address)
        .set("value_type", DEFAULT_VALUE_TYPE)
    )

    if entry.unit is not None:
        sensor.set("unit_of_measurement", entry.unit)
        sensor.set("device_class", classify(entry.unit))
        sensor.set("state_class", "measurement")

    if entry.scale is not None:
        sensor.set("filters", Sequence((Record().set("multiply", from_native(entry.scale)),)))

    sensor.set_optional("accuracy_decimals", entry.precision)
    sensor.set("icon", icon_for(entry.name, entry.unit or ""))

    if entry.scan_interval is not None:
        sensor.set("skip_updates", skip_updates(entry.scan_interval))

    return sensor


def _climate(entry: RegisterEntry) -> Record:
    entity_id = _entity_id(entry)
    climate = (
        Record()
        .set("platform", "thermostat")
        .set("name", humanize_name(entry.name))
        .set("id", entity_id)
        .set("sensor", f"{entity_id}_temp")
        .set(
            "min_temperature",
            entry.min_temp if entry.min_temp is not None else DEFAULT_MIN_TEMPERATURE,
        )
        .set(
            "max_temperature",
            entry.max_temp if entry.max_temp is not None else DEFAULT_MAX_TEMPERATURE,
        )
        .set("temperature_step", TEMPERATURE_STEP)
    )

    # Heating is driven through a companion switch named <id>_heat
    if entry.hvac_mode_register is not None:
        heat_switch = f"{entity_id}_heat"
        climate.set("heat_action", Sequence((Record().set("switch.turn_on", heat_switch),)))
        climate.set("idle_action", Sequence((Record().set("switch.turn_off", heat_switch),)))

    return climate


def _slug(make: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", make.lower()).strip("-")
    return slug or "heatpump"
