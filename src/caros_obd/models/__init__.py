"""Data models for the OBD client."""

from .device import OBDDevice, OBDResponse
from .dtc import DiagnosticTroubleCode, DTCCategory, DTCSeverity, DTCType
from .pid import LiveDataPoint, LiveParameter, PIDInfo, PIDUnit, LIVE_PIDS
from .session import (
    CommandResult,
    CommandStatus,
    DTCReadResult,
    LiveDataResult,
    VehicleDiagnostics,
    VehicleIdentity,
)

__all__ = [
    "OBDDevice",
    "OBDResponse",
    "DiagnosticTroubleCode",
    "DTCCategory",
    "DTCSeverity",
    "DTCType",
    "LiveDataPoint",
    "LiveParameter",
    "PIDInfo",
    "PIDUnit",
    "LIVE_PIDS",
    "CommandResult",
    "CommandStatus",
    "DTCReadResult",
    "LiveDataResult",
    "VehicleDiagnostics",
    "VehicleIdentity",
]
