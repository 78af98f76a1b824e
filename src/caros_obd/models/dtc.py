"""Data models for Diagnostic Trouble Codes (DTCs)."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DTCCategory(str, Enum):
    """DTC category derived from the code prefix."""
    POWERTRAIN = "Powertrain"
    POWERTRAIN_MANUFACTURER = "Powertrain (Manufacturer Specific)"
    POWERTRAIN_RESERVED = "Powertrain (Reserved)"
    CHASSIS = "Chassis"
    BODY = "Body"
    NETWORK = "Network"
    UNKNOWN = "Unknown"


class DTCSeverity(str, Enum):
    """Severity level of DTC."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DTCType(str, Enum):
    """Type of DTC storage."""
    STORED = "stored"        # Confirmed (Mode 03)
    PENDING = "pending"      # Detected but not confirmed (Mode 07)
    PERMANENT = "permanent"  # Cannot be cleared without repair (Mode 0A)


class DiagnosticTroubleCode(BaseModel):
    """A single fault record."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=5, max_length=5, description="DTC code (e.g., P0302)")
    description: str = Field(..., description="Human-readable description")
    severity: DTCSeverity = Field(default=DTCSeverity.LOW, description="Severity level")
    category: DTCCategory = Field(default=DTCCategory.UNKNOWN, description="Code category")
    dtc_type: DTCType = Field(default=DTCType.STORED, description="Which read first reported the code")

    @property
    def prefix(self) -> str:
        """Letter and first digit, e.g. 'P0'."""
        return self.code[:2]

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"
