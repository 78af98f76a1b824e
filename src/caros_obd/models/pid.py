"""Data models for Parameter IDs (PIDs) and live readings."""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum


class PIDUnit(str, Enum):
    """Units of the supported live parameters."""
    RPM = "RPM"
    KPH = "km/h"
    PERCENT = "%"
    CELSIUS = "°C"
    GPS = "g/s"  # grams per second


class LiveParameter(str, Enum):
    """The fixed set of live-data parameters read during a scan."""
    ENGINE_RPM = "Engine RPM"
    VEHICLE_SPEED = "Vehicle Speed"
    ENGINE_LOAD = "Engine Load"
    COOLANT_TEMPERATURE = "Coolant Temperature"
    FUEL_LEVEL = "Fuel Level"
    THROTTLE_POSITION = "Throttle Position"
    INTAKE_AIR_TEMPERATURE = "Intake Air Temperature"
    MASS_AIR_FLOW = "Mass Air Flow"


class PIDInfo(BaseModel):
    """Information about a PID definition."""

    model_config = ConfigDict(frozen=True)

    parameter: LiveParameter = Field(..., description="Logical parameter")
    command_code: str = Field(..., description="Mode + PID hex command")
    unit: PIDUnit = Field(..., description="Unit of measurement")

    min_value: Optional[float] = Field(default=None, description="Minimum possible value")
    max_value: Optional[float] = Field(default=None, description="Maximum possible value")

    @property
    def range_label(self) -> str:
        """Valid value range for display, or '-' when unbounded."""
        if self.min_value is None or self.max_value is None:
            return "-"
        return f"{self.min_value:g} to {self.max_value:g}"


class LiveDataPoint(BaseModel):
    """One decoded sensor reading."""

    model_config = ConfigDict(frozen=True)

    name: LiveParameter = Field(..., description="Parameter name")
    value: Union[int, float] = Field(..., description="Decoded value")
    unit: str = Field(..., description="Unit of measurement")
    timestamp: datetime = Field(default_factory=datetime.now, description="When value was read")

    @property
    def formatted_value(self) -> str:
        """Get formatted value with unit."""
        if isinstance(self.value, float):
            return f"{self.value:.2f} {self.unit}".strip()
        return f"{self.value} {self.unit}".strip()


# Live PIDs in scan order
LIVE_PIDS = {
    LiveParameter.ENGINE_RPM: PIDInfo(
        parameter=LiveParameter.ENGINE_RPM,
        command_code="010C",
        unit=PIDUnit.RPM,
        min_value=0,
        max_value=16384,
    ),
    LiveParameter.VEHICLE_SPEED: PIDInfo(
        parameter=LiveParameter.VEHICLE_SPEED,
        command_code="010D",
        unit=PIDUnit.KPH,
        min_value=0,
        max_value=255,
    ),
    LiveParameter.ENGINE_LOAD: PIDInfo(
        parameter=LiveParameter.ENGINE_LOAD,
        command_code="0104",
        unit=PIDUnit.PERCENT,
        min_value=0,
        max_value=100,
    ),
    LiveParameter.COOLANT_TEMPERATURE: PIDInfo(
        parameter=LiveParameter.COOLANT_TEMPERATURE,
        command_code="0105",
        unit=PIDUnit.CELSIUS,
        min_value=-40,
        max_value=215,
    ),
    LiveParameter.FUEL_LEVEL: PIDInfo(
        parameter=LiveParameter.FUEL_LEVEL,
        command_code="012F",
        unit=PIDUnit.PERCENT,
        min_value=0,
        max_value=100,
    ),
    LiveParameter.THROTTLE_POSITION: PIDInfo(
        parameter=LiveParameter.THROTTLE_POSITION,
        command_code="0111",
        unit=PIDUnit.PERCENT,
        min_value=0,
        max_value=100,
    ),
    LiveParameter.INTAKE_AIR_TEMPERATURE: PIDInfo(
        parameter=LiveParameter.INTAKE_AIR_TEMPERATURE,
        command_code="010F",
        unit=PIDUnit.CELSIUS,
        min_value=-40,
        max_value=215,
    ),
    LiveParameter.MASS_AIR_FLOW: PIDInfo(
        parameter=LiveParameter.MASS_AIR_FLOW,
        command_code="0110",
        unit=PIDUnit.GPS,
    ),
}
