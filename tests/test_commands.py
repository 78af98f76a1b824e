"""Tests for command encoding."""

import pytest

from caros_obd.protocol.commands import (
    DTC_COMMANDS,
    ELM327_INIT_COMMANDS,
    TERMINATOR,
    VIN_COMMAND,
    encode_command,
    live_commands,
    normalize_command,
)
from caros_obd.models.dtc import DTCType
from caros_obd.models.pid import LiveParameter


class TestEncodeCommand:
    """Wire encoding of logical commands."""

    def test_appends_single_terminator(self):
        assert encode_command("010C") == "010C\r"

    def test_uppercases_and_trims(self):
        assert encode_command("  10c ") == "10C\r"

    def test_existing_terminator_is_not_doubled(self):
        assert encode_command("010C\r") == "010C\r"
        assert encode_command("010C\r\n") == "010C\r"

    def test_encoding_is_idempotent(self):
        once = encode_command("0902")
        assert encode_command(once) == once
        assert once.count(TERMINATOR) == 1

    def test_at_commands(self):
        assert encode_command("atz") == "ATZ\r"

    @pytest.mark.parametrize("command", ["", "   ", "\r"])
    def test_empty_command_raises(self, command):
        with pytest.raises(ValueError):
            encode_command(command)


class TestCommandSet:
    """Fixed command tables."""

    def test_normalize_drops_terminator(self):
        assert normalize_command("03\r") == "03"

    def test_dtc_commands_in_scan_order(self):
        assert DTC_COMMANDS == [
            ("03", DTCType.STORED),
            ("07", DTCType.PENDING),
            ("0A", DTCType.PERMANENT),
        ]

    def test_vin_command(self):
        assert VIN_COMMAND == "0902"

    def test_init_turns_headers_off(self):
        assert ELM327_INIT_COMMANDS[0] == "ATZ"
        assert "ATH0" in ELM327_INIT_COMMANDS

    def test_live_commands(self):
        commands = dict(live_commands())
        assert len(commands) == 8
        assert commands[LiveParameter.ENGINE_RPM] == "010C"
        assert commands[LiveParameter.MASS_AIR_FLOW] == "0110"
        assert list(commands)[0] == LiveParameter.ENGINE_RPM
