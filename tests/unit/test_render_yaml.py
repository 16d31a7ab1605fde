"""Unit tests for the YAML serializer.

Tests layout and quoting rules for both output styles, and that the
output loads back with a standard YAML parser.
"""

from __future__ import annotations

import pytest

from regdb.render.tree import Record, Sequence, from_native
from regdb.render.yaml import ESPHOME_STYLE, HOMEASSISTANT_STYLE, format_scalar, serialize


class TestScalars:
    """Test scalar formatting and quoting."""

    def test_plain_string_bare(self) -> None:
        assert format_scalar("hello") == "hello"

    def test_string_with_space_quoted(self) -> None:
        assert format_scalar("hello world") == "'hello world'"

    def test_empty_string_quoted(self) -> None:
        assert format_scalar("") == "''"

    @pytest.mark.parametrize(
        "value",
        ["a:b", "{x}", "[x]", "a,b", "&anchor", "*alias", "#tag", "why?", "a|b", "acme-modbus",
         "<x>", "a=b", "!x", "50%", "@x", "C:\\dir"],
    )
    def test_structural_characters_quoted(self, value: str) -> None:
        assert format_scalar(value).startswith("'")

    def test_single_quote_escaped(self) -> None:
        assert format_scalar("it's here") == "'it''s here'"

    def test_secret_never_quoted(self) -> None:
        assert format_scalar("!secret wifi_ssid", ESPHOME_STYLE) == "!secret wifi_ssid"
        assert format_scalar("!secret wifi_ssid", HOMEASSISTANT_STYLE) == "!secret wifi_ssid"

    def test_numeric_string_quoting_depends_on_style(self) -> None:
        assert format_scalar("123", HOMEASSISTANT_STYLE) == "123"
        assert format_scalar("123", ESPHOME_STYLE) == "'123'"
        assert format_scalar("1.5", ESPHOME_STYLE) == "'1.5'"

    def test_non_string_scalars(self) -> None:
        assert format_scalar(True) == "true"
        assert format_scalar(False) == "false"
        assert format_scalar(None) == "null"
        assert format_scalar(13) == "13"
        assert format_scalar(0.1) == "0.1"
        assert format_scalar(-10) == "-10"

    def test_special_floats(self) -> None:
        assert format_scalar(float("inf")) == ".inf"
        assert format_scalar(float("-inf")) == "-.inf"
        assert format_scalar(float("nan")) == ".nan"
        assert format_scalar(1e-05) == "1.0e-05"


class TestLayout:
    """Test block layout of records and sequences."""

    def test_record(self) -> None:
        node = Record().set("name", "Acme").set("port", "/dev/ttyUSB0").set("timeout", 5)

        assert serialize(node) == "name: Acme\nport: /dev/ttyUSB0\ntimeout: 5\n"

    def test_nested_record(self) -> None:
        node = Record().set("esphome", Record().set("board", "esp32dev"))

        assert serialize(node) == "esphome:\n  board: esp32dev\n"

    def test_named_record_in_sequence(self) -> None:
        node = Record().set(
            "sensors",
            Sequence((Record().set("name", "Outdoor_Temp").set("address", 13),)),
        )

        assert serialize(node) == (
            "sensors:\n"
            "  - name: Outdoor_Temp\n"
            "    address: 13\n"
        )

    def test_nameless_record_in_sequence(self) -> None:
        node = Sequence((Record().set("service", "modbus.write_register").set("address", 1),))

        assert serialize(node) == (
            "-\n"
            "  service: modbus.write_register\n"
            "  address: 1\n"
        )

    def test_scalar_list_block_in_homeassistant_style(self) -> None:
        node = Record().set("values", Sequence.of([1, 2]))

        assert serialize(node, HOMEASSISTANT_STYLE) == "values:\n  - 1\n  - 2\n"

    def test_scalar_list_inline_in_esphome_style(self) -> None:
        node = Record().set("values", Sequence.of([1, "a b"]))

        assert serialize(node, ESPHOME_STYLE) == "values: [1, 'a b']\n"

    def test_empty_collections(self) -> None:
        node = Record().set("items", Sequence()).set("data", Record())

        assert serialize(node) == "items: []\ndata: {}\n"

    def test_non_string_key_rejected(self) -> None:
        record = Record()
        record.fields[1] = from_native("x")  # type: ignore[index]

        with pytest.raises(TypeError):
            serialize(record)

    def test_non_node_rejected(self) -> None:
        record = Record()
        record.fields["bad"] = ["raw", "list"]  # type: ignore[assignment]

        with pytest.raises(TypeError):
            serialize(record)


class TestParseBack:
    """Generated YAML loads back to the same data."""

    def test_round_trip(self, parse_yaml) -> None:
        data = {
            "name": "hello world",
            "port": "/dev/ttyUSB0",
            "parity": "E",
            "scale": 0.1,
            "flag": True,
            "nothing": None,
            "values": ["0x8204 #33284 Room temperature", "it's"],
            "nested": {"address": 53, "values": {"heat": 4}},
            "empty": [],
        }

        for style in (HOMEASSISTANT_STYLE, ESPHOME_STYLE):
            assert parse_yaml(serialize(from_native(data), style)) == data

    def test_numeric_string_stays_string_in_esphome_style(self, parse_yaml) -> None:
        text = serialize(Record().set("id", "123"), ESPHOME_STYLE)

        assert parse_yaml(text) == {"id": "123"}

    def test_secret_loads_as_tag(self, parse_yaml) -> None:
        text = serialize(Record().set("ssid", "!secret wifi_ssid"), ESPHOME_STYLE)

        assert text == "ssid: !secret wifi_ssid\n"
        assert parse_yaml(text) == {"ssid": {"secret": "wifi_ssid"}}


class TestReservedWords:
    """Strings a YAML 1.1 loader would read as booleans or null."""

    @pytest.mark.parametrize("value", ["On", "off", "YES", "no", "true", "False", "null", "~", "y"])
    def test_reserved_word_quoted(self, value: str) -> None:
        assert format_scalar(value) == f"'{value}'"
        assert format_scalar(value, ESPHOME_STYLE) == f"'{value}'"

    def test_reserved_word_round_trip(self, parse_yaml) -> None:
        node = Record().set("name", "On").set("state", "off").set("empty", "~")

        assert parse_yaml(serialize(node)) == {"name": "On", "state": "off", "empty": "~"}

    def test_ordinary_words_bare(self) -> None:
        assert format_scalar("online") == "online"
        assert format_scalar("NONE") == "NONE"


class TestKeys:
    """Record keys follow the scalar quoting rules."""

    def test_plain_key_bare(self) -> None:
        assert serialize(Record().set("switch.turn_on", "x")) == "switch.turn_on: x\n"

    def test_reserved_key_quoted(self, parse_yaml) -> None:
        node = from_native({"values": {"off": 0, "on": 1, "heat": 4}})

        text = serialize(node)
        assert "  'off': 0\n" in text
        assert "  heat: 4\n" in text
        assert parse_yaml(text) == {"values": {"off": 0, "on": 1, "heat": 4}}

    def test_structural_key_quoted(self, parse_yaml) -> None:
        node = from_native({"verify": {"mode: auto": 1, "a #b": 2}})

        assert parse_yaml(serialize(node)) == {"verify": {"mode: auto": 1, "a #b": 2}}

    @pytest.mark.parametrize("style", [HOMEASSISTANT_STYLE, ESPHOME_STYLE])
    def test_numeric_key_stays_string(self, parse_yaml, style) -> None:
        node = from_native({"values": {"4": "heat"}})

        assert parse_yaml(serialize(node, style)) == {"values": {"4": "heat"}}

    def test_secret_key_quoted(self) -> None:
        assert serialize(Record().set("!secret x", 1)) == "'!secret x': 1\n"


class TestControlCharacters:
    """Strings with control characters keep them through a round trip."""

    def test_newline_double_quoted(self) -> None:
        assert format_scalar("a\nb") == '"a\\nb"'

    def test_escapes(self) -> None:
        assert format_scalar('tab\there "q" \\') == '"tab\\there \\"q\\" \\\\"'
        assert format_scalar("bell\x07") == '"bell\\x07"'

    def test_round_trip(self, parse_yaml) -> None:
        data = {"description": "line one\nline two", "raw": "a\tb\r\x01", "key\nx": 1}

        for style in (HOMEASSISTANT_STYLE, ESPHOME_STYLE):
            assert parse_yaml(serialize(from_native(data), style)) == data
