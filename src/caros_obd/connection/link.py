"""Blocking serial link to an ELM327 adapter."""

import logging
import time
from typing import Optional

import serial

from ..exceptions import TransportError
from ..protocol.commands import ELM327_INIT_COMMANDS, encode_command

logger = logging.getLogger(__name__)

PROMPT = b">"


class SerialLink:
    """
    Serial port carrying ELM327 traffic.

    Works for USB adapters and for Bluetooth adapters bound to a serial
    device (e.g. /dev/rfcomm0 or a Windows outgoing COM port). All calls
    block; the transport runs them in a worker thread.
    """

    def __init__(self, port: str, baudrate: int = 38400, timeout: float = 1.0):
        """
        Args:
            port: Serial device name
            baudrate: Baud rate for the serial connection
            timeout: Read timeout in seconds for a single read
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: Optional[serial.Serial] = None

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open the serial port."""
        try:
            self._serial = serial.Serial(port=self.port, baudrate=self.baudrate, timeout=self.timeout)
        except serial.SerialException as e:
            raise TransportError(f"Could not open {self.port}: {e}") from e
        logger.debug(f"Opened {self.port} at {self.baudrate} baud")

    def initialize(self) -> str:
        """Reset the adapter and configure it for compact responses."""
        last = ""
        for command in ELM327_INIT_COMMANDS:
            last = self.send(encode_command(command))
            if command == "ATZ":
                time.sleep(0.5)
        return last

    def send(self, wire: str) -> str:
        """
        Write an encoded command and read the reply up to the prompt.

        Args:
            wire: Command already terminated with a carriage return

        Returns:
            Response text without the prompt
        """
        if not self.is_open:
            raise TransportError(f"Serial port {self.port} is not open")

        try:
            self._serial.reset_input_buffer()
            self._serial.write(wire.encode("ascii"))
            self._serial.flush()
            raw = self._read_until_prompt()
        except serial.SerialException as e:
            raise TransportError(f"Serial I/O error on {self.port}: {e}") from e

        text = raw.decode("ascii", errors="ignore").replace(">", "")
        logger.debug(f"{wire.strip()} -> {text.strip()!r}")
        return text

    def _read_until_prompt(self) -> bytes:
        buffer = bytearray()
        while True:
            chunk = self._serial.read(self._serial.in_waiting or 1)
            if not chunk:
                # Read timeout with no prompt
                break
            buffer.extend(chunk)
            if PROMPT in chunk:
                break
        return bytes(buffer)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is not None:
            try:
                self._serial.close()
            finally:
                self._serial = None
            logger.debug(f"Closed {self.port}")
