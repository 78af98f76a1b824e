"""Diagnostics orchestrator: the API the application layer talks to."""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional, List

from .collectors.dtc import DTCCollector
from .collectors.live import LiveDataCollector
from .collectors.vin import VehicleInfoCollector
from .config import OBDConfig
from .connection.transport import BluetoothTransport
from .exceptions import NotConnectedError
from .models.device import OBDDevice
from .models.dtc import DiagnosticTroubleCode
from .models.pid import LiveDataPoint
from .models.session import VehicleDiagnostics, VehicleIdentity

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    """Progress of a full diagnostics run."""
    NOT_CONNECTED = "not_connected"
    READING_DTCS = "reading_dtcs"
    READING_LIVE_DATA = "reading_live_data"
    READING_VEHICLE_INFO = "reading_vehicle_info"
    COMPLETE = "complete"
    FAILED = "failed"


class OBDService:
    """Sequences DTC, live-data and vehicle-info reads over one transport."""

    def __init__(self, transport: Optional[BluetoothTransport] = None, config: Optional[OBDConfig] = None):
        """
        Args:
            transport: Transport to use (built from config if None)
            config: Client configuration
        """
        self._config = config or OBDConfig()
        self._transport = transport or BluetoothTransport(
            baudrate=self._config.baudrate,
            read_timeout=self._config.read_timeout,
            command_timeout=self._config.command_timeout,
        )
        self._dtc_collector = DTCCollector(self._transport)
        self._live_collector = LiveDataCollector(self._transport)
        self._vehicle_collector = VehicleInfoCollector(self._transport, self._config)
        self._state = ScanState.NOT_CONNECTED

    @property
    def transport(self) -> BluetoothTransport:
        return self._transport

    @property
    def config(self) -> OBDConfig:
        return self._config

    @property
    def state(self) -> ScanState:
        """State of the most recent full diagnostics run."""
        return self._state

    async def initialize(self) -> bool:
        """Make sure the transport is usable."""
        try:
            if not await self._transport.is_enabled():
                return await self._transport.enable()
            return True
        except Exception as e:
            logger.error(f"OBD initialization error: {e}")
            return False

    async def scan_for_devices(self) -> List[OBDDevice]:
        return await self._transport.scan()

    async def connect_to_device(self, device: OBDDevice) -> bool:
        return await self._transport.connect(device)

    async def disconnect(self) -> None:
        await self._transport.disconnect()
        self._state = ScanState.NOT_CONNECTED

    def is_connected(self) -> bool:
        return self._transport.is_connected()

    def get_connected_device(self) -> Optional[OBDDevice]:
        return self._transport.get_connected_device()

    async def run_full_diagnostics(self) -> VehicleDiagnostics:
        """
        Read trouble codes, live data and vehicle identity in sequence.

        Individual command failures only leave gaps in the snapshot; the
        run itself fails only when no adapter is connected.

        Returns:
            VehicleDiagnostics snapshot

        Raises:
            NotConnectedError: If no adapter is connected (no command is issued)
        """
        if not self.is_connected():
            self._state = ScanState.FAILED
            raise NotConnectedError()

        self._state = ScanState.READING_DTCS
        dtc_result = await self._dtc_collector.collect()

        self._state = ScanState.READING_LIVE_DATA
        live_result = await self._live_collector.collect()

        self._state = ScanState.READING_VEHICLE_INFO
        identity, vin_result = await self._vehicle_collector.read()

        diagnostics = VehicleDiagnostics(
            dtcs=dtc_result.codes,
            live_data=live_result.points,
            vehicle_info=identity,
            last_scan=datetime.now(),
            command_results=dtc_result.results + live_result.results + [vin_result],
        )
        self._state = ScanState.COMPLETE

        logger.info(
            f"Diagnostics complete: {len(diagnostics.dtcs)} DTC(s), "
            f"{len(diagnostics.live_data)} reading(s), {len(diagnostics.skipped)} skipped command(s)"
        )
        return diagnostics

    async def read_diagnostic_trouble_codes(self) -> List[DiagnosticTroubleCode]:
        result = await self._dtc_collector.collect()
        return result.codes

    async def read_live_data(self) -> List[LiveDataPoint]:
        result = await self._live_collector.collect()
        return result.points

    async def read_vehicle_info(self) -> VehicleIdentity:
        return await self._vehicle_collector.collect()
