"""Data models for command outcomes and diagnostics snapshots."""

from enum import Enum
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from .dtc import DiagnosticTroubleCode, DTCSeverity
from .pid import LiveDataPoint, LiveParameter


class CommandStatus(str, Enum):
    """Outcome of a single command attempt."""
    SUCCESS = "success"
    SKIPPED = "skipped"  # No data or nothing decodable
    FAILED = "failed"    # Transport error


class CommandResult(BaseModel):
    """One command attempt within a scan phase."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Command that was issued")
    status: CommandStatus = Field(..., description="Outcome of the attempt")
    parameter: Optional[LiveParameter] = Field(default=None, description="Live parameter, if any")
    value: Optional[Union[int, float, str]] = Field(default=None, description="Decoded value on success")
    reason: Optional[str] = Field(default=None, description="Why the command was skipped")
    error: Optional[str] = Field(default=None, description="Failure cause")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.status == CommandStatus.SUCCESS


class DTCReadResult(BaseModel):
    """Result of the DTC phase."""

    model_config = ConfigDict(frozen=True)

    codes: List[DiagnosticTroubleCode] = Field(default_factory=list)
    results: List[CommandResult] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def has_critical(self) -> bool:
        """Check if any critical codes are present."""
        return any(dtc.severity == DTCSeverity.CRITICAL for dtc in self.codes)

    @property
    def failed_commands(self) -> List[str]:
        return [r.command for r in self.results if r.status == CommandStatus.FAILED]


class LiveDataResult(BaseModel):
    """Result of the live data phase."""

    model_config = ConfigDict(frozen=True)

    points: List[LiveDataPoint] = Field(default_factory=list)
    results: List[CommandResult] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def skipped(self) -> List[CommandResult]:
        """Attempts that produced no reading, with their reason or error."""
        return [r for r in self.results if not r.ok]

    def get(self, parameter: LiveParameter) -> Optional[LiveDataPoint]:
        """Get a reading by parameter."""
        for point in self.points:
            if point.name == parameter:
                return point
        return None


class VehicleIdentity(BaseModel):
    """Vehicle identity attached to a snapshot.

    Only the VIN is read from the vehicle. Make, model and year come from
    configuration until a decode exists for them.
    """

    model_config = ConfigDict(frozen=True)

    vin: str = Field(..., description="Vehicle Identification Number")
    make: str = Field(..., description="Vehicle make (configured)")
    model: str = Field(..., description="Vehicle model (configured)")
    year: int = Field(..., description="Model year (configured)")
    is_placeholder_vin: bool = Field(default=False, description="VIN came from configuration, not the vehicle")


class VehicleDiagnostics(BaseModel):
    """Snapshot of one full diagnostics run."""

    model_config = ConfigDict(frozen=True)

    dtcs: List[DiagnosticTroubleCode] = Field(default_factory=list)
    live_data: List[LiveDataPoint] = Field(default_factory=list)
    vehicle_info: VehicleIdentity
    last_scan: datetime = Field(default_factory=datetime.now)

    command_results: List[CommandResult] = Field(default_factory=list, description="Every command attempt of the run")

    @property
    def skipped(self) -> List[CommandResult]:
        """Commands that contributed nothing."""
        return [r for r in self.command_results if not r.ok]

    @property
    def is_complete(self) -> bool:
        """True when every command produced data."""
        return not self.skipped
