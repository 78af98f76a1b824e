"""OBD2 wire protocol helpers."""

from .commands import (
    DTC_COMMANDS,
    ELM327_INIT_COMMANDS,
    VIN_COMMAND,
    encode_command,
    live_commands,
    normalize_command,
)

__all__ = [
    "DTC_COMMANDS",
    "ELM327_INIT_COMMANDS",
    "VIN_COMMAND",
    "encode_command",
    "live_commands",
    "normalize_command",
]
