"""Async transport to a serial-over-Bluetooth ELM327 adapter."""

import asyncio
import logging
from typing import Optional, List, Callable

from ..exceptions import CommandTimeoutError, NotConnectedError, TransportError
from ..models.device import OBDDevice, OBDResponse
from ..protocol.commands import encode_command, normalize_command
from .adapter import AdapterDetector
from .link import SerialLink

logger = logging.getLogger(__name__)

ConnectionListener = Callable[[Optional[OBDDevice]], None]


class BluetoothTransport:
    """
    Owns the single adapter connection and serializes commands over it.

    The adapter is a half-duplex request/response channel without
    correlation IDs, so exactly one command may be in flight at a time.
    """

    def __init__(
        self,
        link_factory: Optional[Callable[[OBDDevice], SerialLink]] = None,
        detector=AdapterDetector,
        baudrate: int = 38400,
        read_timeout: float = 1.0,
        command_timeout: float = 5.0,
    ):
        """
        Args:
            link_factory: Builds a link for a device (defaults to a SerialLink on the device address)
            detector: Port discovery used by scan()
            baudrate: Baud rate for the default serial link
            read_timeout: Per-read timeout for the default serial link
            command_timeout: Upper bound in seconds on one command round trip
        """
        self._baudrate = baudrate
        self._read_timeout = read_timeout
        self._link_factory = link_factory or self._serial_link
        self._detector = detector
        self._command_timeout = command_timeout

        self._link: Optional[SerialLink] = None
        self._device: Optional[OBDDevice] = None
        self._listeners: List[ConnectionListener] = []
        self._lock = asyncio.Lock()

    def _serial_link(self, device: OBDDevice) -> SerialLink:
        return SerialLink(device.address, baudrate=self._baudrate, timeout=self._read_timeout)

    @property
    def command_timeout(self) -> float:
        return self._command_timeout

    async def is_enabled(self) -> bool:
        """Check whether the host exposes any serial ports."""
        try:
            return await asyncio.to_thread(self._detector.has_ports)
        except Exception as e:
            logger.error(f"Bluetooth check error: {e}")
            return False

    async def enable(self) -> bool:
        """Serial hosts have no radio switch; report whether ports are available."""
        return await self.is_enabled()

    async def scan(self) -> List[OBDDevice]:
        """List candidate adapters."""
        try:
            return await asyncio.to_thread(self._detector.detect_all)
        except Exception as e:
            logger.error(f"Device scan error: {e}")
            return []

    async def connect(self, device: OBDDevice) -> bool:
        """
        Connect to an adapter, replacing any existing connection.

        Args:
            device: Device to connect to

        Returns:
            True if the adapter was opened and initialized
        """
        async with self._lock:
            replaced = self._device is not None
            if replaced:
                await self._close_link()

            link = self._link_factory(device)
            try:
                await asyncio.to_thread(link.open)
                await asyncio.wait_for(asyncio.to_thread(link.initialize), timeout=self._command_timeout * 3)
                connected = True
            except Exception as e:
                logger.error(f"Device connection error for {device}: {e}")
                connected = False
                try:
                    await asyncio.to_thread(link.close)
                except Exception as close_error:
                    logger.warning(f"Error closing failed link: {close_error}")

            if not connected:
                if replaced:
                    self._notify_listeners()
                return False

            self._link = link
            self._device = device.model_copy(update={"connected": True})

        logger.info(f"Connected to {self._device}")
        self._notify_listeners()
        return True

    async def disconnect(self) -> None:
        """Disconnect from the adapter."""
        async with self._lock:
            if self._device is None:
                return
            await self._close_link()

        logger.info("Disconnected from OBD2 adapter")
        self._notify_listeners()

    async def _close_link(self) -> None:
        """Drop the link and device. Caller holds the lock."""
        link, self._link = self._link, None
        self._device = None
        if link is not None:
            try:
                await asyncio.to_thread(link.close)
            except Exception as e:
                logger.warning(f"Error closing connection: {e}")

    async def write(self, command: str) -> OBDResponse:
        """
        Send one command and wait for its response.

        Args:
            command: Logical command, e.g. '010C'

        Returns:
            OBDResponse with the trimmed response text

        Raises:
            NotConnectedError: No adapter is connected
            CommandTimeoutError: The adapter did not answer in time
            TransportError: The link failed
        """
        normalized = normalize_command(command)
        wire = encode_command(command)

        await self._lock.acquire()
        handed_off = False
        try:
            link = self._link
            if link is None or self._device is None:
                raise NotConnectedError()

            pending = asyncio.ensure_future(asyncio.to_thread(link.send, wire))
            try:
                raw = await asyncio.wait_for(asyncio.shield(pending), timeout=self._command_timeout)
            except (asyncio.TimeoutError, asyncio.CancelledError) as e:
                # The worker thread still owns the port; the lock is released when it returns
                self._release_after(pending, normalized)
                handed_off = True
                if isinstance(e, asyncio.CancelledError):
                    raise
                raise CommandTimeoutError(normalized, self._command_timeout) from None
            except TransportError:
                raise
            except Exception as e:
                raise TransportError(f"Command {normalized} failed: {e}") from e
        finally:
            if not handed_off:
                self._lock.release()

        return OBDResponse(command=normalized, response=(raw or "").strip())

    def _release_after(self, pending: "asyncio.Future[str]", command: str) -> None:
        """Hold the command lock until an abandoned round trip finishes."""

        def release(future: "asyncio.Future[str]") -> None:
            if not future.cancelled():
                error = future.exception()
                if error is not None:
                    logger.debug(f"Abandoned {command} ended with error: {error}")
                else:
                    logger.debug(f"Discarded late reply to {command}: {future.result()!r}")
            self._lock.release()

        pending.add_done_callback(release)

    def is_connected(self) -> bool:
        return self._device is not None and self._device.connected

    def get_connected_device(self) -> Optional[OBDDevice]:
        return self._device

    def add_listener(self, listener: ConnectionListener) -> None:
        """Register a callback for connect/disconnect."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ConnectionListener) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        self._listeners = [l for l in self._listeners if l != listener]

    def _notify_listeners(self) -> None:
        device = self._device
        for listener in list(self._listeners):
            try:
                listener(device)
            except Exception as e:
                logger.warning(f"Connection listener error: {e}")
