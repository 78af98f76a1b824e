"""OBD2 command set and wire encoding for ELM327 adapters."""

from typing import List, Tuple

from ..models.dtc import DTCType
from ..models.pid import LIVE_PIDS, LiveParameter

TERMINATOR = "\r"

# Mode 03/07/0A trouble code reads, in scan order
DTC_COMMANDS: List[Tuple[str, DTCType]] = [
    ("03", DTCType.STORED),
    ("07", DTCType.PENDING),
    ("0A", DTCType.PERMANENT),
]

VIN_COMMAND = "0902"

# Adapter setup: reset, echo off, linefeeds off, spaces off, headers off, auto protocol
ELM327_INIT_COMMANDS = ["ATZ", "ATE0", "ATL0", "ATS0", "ATH0", "ATSP0"]


def normalize_command(command: str) -> str:
    """Trim and uppercase a logical command, dropping any terminator."""
    cleaned = command.strip().upper()
    if not cleaned:
        raise ValueError("Empty OBD command")
    return cleaned


def encode_command(command: str) -> str:
    """
    Encode a logical command into the form the adapter expects.

    Args:
        command: Mode + PID hex string, e.g. '010c'

    Returns:
        Uppercase command ending in exactly one carriage return
    """
    return normalize_command(command) + TERMINATOR


def live_commands() -> List[Tuple[LiveParameter, str]]:
    """Live-data commands in scan order."""
    return [(parameter, info.command_code) for parameter, info in LIVE_PIDS.items()]
