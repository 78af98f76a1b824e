"""Data models for adapters and raw command round trips."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OBDDevice(BaseModel):
    """Identity of a paired OBD2 adapter."""

    id: str = Field(..., description="Opaque device identifier")
    name: str = Field(default="Unknown Device", description="Display name")
    address: str = Field(default="", description="Physical address or serial port")
    connected: bool = Field(default=False, description="Whether the adapter is connected")

    def __str__(self) -> str:
        return f"{self.name} ({self.address or self.id})"


class OBDResponse(BaseModel):
    """Result of one command round trip."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Normalized command sent, without terminator")
    response: str = Field(default="", description="Raw response text")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the response was captured")
