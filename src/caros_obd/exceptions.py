"""Exception hierarchy for the OBD client."""


class OBDError(Exception):
    """Base class for all OBD client errors."""


class TransportError(OBDError):
    """The adapter link failed, was unavailable or returned garbage."""


class NotConnectedError(TransportError):
    """A command was issued with no connected adapter."""

    def __init__(self, message: str = "No device connected"):
        super().__init__(message)


class CommandTimeoutError(TransportError):
    """The adapter did not answer a command within the allowed time."""

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command {command} timed out after {timeout:.1f}s")


class ConfigError(OBDError):
    """Configuration file could not be read or validated."""
