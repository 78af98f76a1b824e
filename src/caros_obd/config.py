"""Runtime configuration for the OBD client."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".caros-obd" / "config.json"
ENV_PREFIX = "CAROS_OBD_"


class OBDConfig(BaseModel):
    """Connection settings and the configured vehicle identity."""

    port: Optional[str] = Field(default=None, description="Serial port of the adapter (auto-detect if None)")
    baudrate: int = Field(default=38400, gt=0, description="Baud rate for serial connection")
    read_timeout: float = Field(default=1.0, gt=0, description="Per-read serial timeout in seconds")
    command_timeout: float = Field(default=5.0, gt=0, description="Upper bound on one command round trip")

    # Vehicle identity placeholders; only the VIN is read from the vehicle
    placeholder_vin: str = Field(default="DEMO123456789", description="VIN used when the vehicle returns none")
    vehicle_make: str = Field(default="Mazda")
    vehicle_model: str = Field(default="CX-30")
    vehicle_year: int = Field(default=2024)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "OBDConfig":
        """
        Load configuration from a JSON file and the environment.

        Args:
            path: Config file (defaults to ~/.caros-obd/config.json if it exists)

        Returns:
            OBDConfig

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        data = {}
        config_file = path or DEFAULT_CONFIG_FILE

        if path is not None or config_file.exists():
            try:
                with open(config_file, "r") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Could not read config {config_file}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config {config_file} must contain a JSON object")
            logger.debug(f"Loaded config from {config_file}")

        data.update(cls._from_env())

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _from_env() -> dict:
        """Overrides from CAROS_OBD_* environment variables."""
        overrides = {}
        for field in ("port", "baudrate", "command_timeout"):
            value = os.getenv(f"{ENV_PREFIX}{field.upper()}")
            if value not in (None, ""):
                overrides[field] = value
        return overrides
