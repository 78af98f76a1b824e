"""Vehicle identity collector."""

from typing import Optional, Tuple
import logging

from .base import BaseCollector
from ..config import OBDConfig
from ..decoders.vin import VINDecoder, parse_vin
from ..models.session import CommandResult, CommandStatus, VehicleIdentity
from ..protocol.commands import VIN_COMMAND

logger = logging.getLogger(__name__)


class VehicleInfoCollector(BaseCollector):
    """Reads the VIN and combines it with the configured make, model and year."""

    def __init__(self, transport, config: Optional[OBDConfig] = None, decoder: Optional[VINDecoder] = None):
        super().__init__(transport)
        self._config = config or OBDConfig()
        self._decoder = decoder or VINDecoder()

    async def collect(self) -> VehicleIdentity:
        """Collect the vehicle identity, falling back to the placeholder VIN."""
        identity, _ = await self.read()
        return identity

    async def read(self) -> Tuple[VehicleIdentity, CommandResult]:
        """
        Issue the VIN command.

        Returns:
            Tuple of (identity, outcome)
        """
        vin: Optional[str] = None

        try:
            response = await self._transport.write(VIN_COMMAND)
        except Exception as e:
            logger.error(f"Vehicle info read error: {e}")
            result = CommandResult(command=VIN_COMMAND, status=CommandStatus.FAILED, error=str(e))
        else:
            vin = parse_vin(response.response)
            if vin:
                self._log_validation(vin)
                result = CommandResult(command=VIN_COMMAND, status=CommandStatus.SUCCESS, value=vin)
            else:
                logger.warning("No VIN response from vehicle")
                result = CommandResult(command=VIN_COMMAND, status=CommandStatus.SKIPPED, reason="no VIN in response")

        return self._identity(vin), result

    def _identity(self, vin: Optional[str]) -> VehicleIdentity:
        return VehicleIdentity(
            vin=vin or self._config.placeholder_vin,
            make=self._config.vehicle_make,
            model=self._config.vehicle_model,
            year=self._config.vehicle_year,
            is_placeholder_vin=not vin,
        )

    def _log_validation(self, vin: str) -> None:
        report = self._decoder.validate_vin(vin)
        for problem in report["errors"] + report["warnings"]:
            logger.warning(f"VIN {vin}: {problem}")
