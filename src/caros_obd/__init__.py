"""CarOS OBD-II client for ELM327 adapters."""

from .config import OBDConfig
from .connection.transport import BluetoothTransport
from .exceptions import OBDError, TransportError, NotConnectedError, CommandTimeoutError, ConfigError
from .models import (
    OBDDevice,
    OBDResponse,
    DiagnosticTroubleCode,
    LiveDataPoint,
    LiveParameter,
    VehicleDiagnostics,
    VehicleIdentity,
)
from .service import OBDService, ScanState

__version__ = "0.1.0"

__all__ = [
    "OBDConfig",
    "BluetoothTransport",
    "OBDService",
    "ScanState",
    "OBDError",
    "TransportError",
    "NotConnectedError",
    "CommandTimeoutError",
    "ConfigError",
    "OBDDevice",
    "OBDResponse",
    "DiagnosticTroubleCode",
    "LiveDataPoint",
    "LiveParameter",
    "VehicleDiagnostics",
    "VehicleIdentity",
]
