"""regdb: compile Modbus register descriptions into Home Assistant and ESPHome YAML."""

__version__ = "0.1.0"
