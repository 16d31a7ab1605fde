"""Home Assistant modbus integration builder.

Produces the hub configuration (a one-item list, the shape expected by
``modbus: !include <file>``) and, for documents with unlock registers,
a list of ``modbus.write_register`` commands documenting the unlock
sequence.
"""

from __future__ import annotations

import logging
from typing import Any

from regdb.render.tree import Record, Sequence, from_native
from regdb.schema.models import RegisterDocument, RegisterEntry

logger = logging.getLogger(__name__)

SLAVE_ID = 2
SERIAL_PORT = "/dev/ttyUSB0"
DEFAULT_WRITE_TYPE = "holding"
UNLOCK_SERVICE = "modbus.write_register"

# Applied as a whole without a connection block, field by field otherwise.
DEFAULT_CONNECTION: dict[str, Any] = {
    "baudrate": 9600,
    "bytesize": 8,
    "method": "rtu",
    "parity": "E",
    "stopbits": 1,
    "delay": 0,
    "message_wait_milliseconds": 30,
    "timeout": 5,
}

_SENSOR_OPTIONAL_FIELDS = (
    ("unit", "unit_of_measurement"),
    ("scale", "scale"),
    ("scan_interval", "scan_interval"),
    ("precision", "precision"),
)

_CLIMATE_OPTIONAL_FIELDS = (
    "scale",
    "max_temp",
    "min_temp",
    "scan_interval",
    "precision",
    "target_temp_register",
    "hvac_onoff_register",
    "hvac_mode_register",
)


def build_homeassistant(document: RegisterDocument) -> Sequence:
    """Build the Home Assistant modbus hub configuration.

    Args:
        document: Decoded register document.

    Returns:
        A sequence holding the single hub record.
    """
    hub = Record()
    hub.set("name", document.make)
    hub.set("type", "serial")
    hub.set("port", SERIAL_PORT)

    source = document.connection.model_dump() if document.connection is not None else {}
    for field, default in DEFAULT_CONNECTION.items():
        value = source.get(field)
        hub.set(field, from_native(value if value is not None else default))

    registers = document.registers
    if registers.switches is not None:
        hub.set("switches", Sequence(tuple(_switch(e) for e in registers.switches)))
    if registers.sensors is not None:
        hub.set("sensors", Sequence(tuple(_sensor(e) for e in registers.sensors)))
    if registers.climates is not None:
        hub.set("climates", Sequence(tuple(_climate(e) for e in registers.climates)))

    logger.debug(
        "Built Home Assistant hub for %s (%d switches, %d sensors, %d climates)",
        document.make,
        len(registers.switches or ()),
        len(registers.sensors or ()),
        len(registers.climates or ()),
    )
    return Sequence((hub,))


def build_unlock_automation(document: RegisterDocument) -> Record | None:
    """Build the unlock command list, or None without unlock registers.

    Each well-formed unlock sequence becomes one ``modbus.write_register``
    command addressed to the hub named after the manufacturer. Values are
    rendered as ``"<hex> #<decimal> <description>"``.
    """
    unlock = document.unlock_registers
    if unlock is None:
        return None

    result = Record()
    result.set_optional("description", unlock.description)

    commands = []
    for sequence in unlock.sequences().values():
        data = Record()
        data.set("hub", document.make)
        data.set("address", sequence.address)
        data.set(
            "values",
            Sequence.of(f"{v.hex} #{v.decimal} {v.description}" for v in sequence.values),
        )
        commands.append(Record().set("service", UNLOCK_SERVICE).set("data", data))

    result.set("commands", Sequence(tuple(commands)))
    return result


def _switch(entry: RegisterEntry) -> Record:
    switch = Record()
    switch.set("name", entry.name)
    switch.set("slave", SLAVE_ID)
    switch.set_optional("address", entry.address)
    switch.set("write_type", entry.write_type or DEFAULT_WRITE_TYPE)
    for field in ("command_on", "command_off", "verify"):
        value = getattr(entry, field)
        if value is not None:
            switch.set(field, from_native(value))
    switch.set("unique_id", entry.name)
    return switch


def _sensor(entry: RegisterEntry) -> Record:
    sensor = Record()
    sensor.set("name", entry.name)
    sensor.set("slave", SLAVE_ID)
    sensor.set_optional("address", entry.address)
    for field, key in _SENSOR_OPTIONAL_FIELDS:
        value = getattr(entry, field)
        if value is not None:
            sensor.set(key, from_native(value))
    sensor.set("unique_id", entry.name)
    return sensor


def _climate(entry: RegisterEntry) -> Record:
    climate = Record()
    climate.set("name", entry.name)
    climate.set("slave", SLAVE_ID)
    climate.set_optional("address", entry.address)
    for field in _CLIMATE_OPTIONAL_FIELDS:
        value = getattr(entry, field)
        if value is not None:
            climate.set(field, from_native(value))
    climate.set("unique_id", entry.name)
    return climate
