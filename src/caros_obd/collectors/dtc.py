"""DTC (Diagnostic Trouble Code) collector."""

from typing import List, Optional, Tuple
import logging

from .base import BaseCollector
from ..decoders.dtc import DTCDecoder, deduplicate
from ..decoders.pid import is_no_data
from ..models.dtc import DiagnosticTroubleCode, DTCType
from ..models.session import CommandResult, CommandStatus, DTCReadResult
from ..protocol.commands import DTC_COMMANDS

logger = logging.getLogger(__name__)


class DTCCollector(BaseCollector):
    """Reads stored, pending and permanent trouble codes."""

    def __init__(self, transport, decoder: Optional[DTCDecoder] = None):
        super().__init__(transport)
        self._decoder = decoder or DTCDecoder()

    async def collect(self) -> DTCReadResult:
        """
        Issue every DTC read in turn and merge the codes.

        A failed read is recorded and contributes nothing; the remaining
        reads still run. Codes are deduplicated, first occurrence wins.
        """
        codes: List[DiagnosticTroubleCode] = []
        results: List[CommandResult] = []

        for command, dtc_type in DTC_COMMANDS:
            found, result = await self.read(command, dtc_type)
            codes.extend(found)
            results.append(result)

        return DTCReadResult(codes=deduplicate(codes), results=results)

    async def read(self, command: str, dtc_type: DTCType) -> Tuple[List[DiagnosticTroubleCode], CommandResult]:
        """
        Issue a single DTC read.

        Args:
            command: Mode command ('03', '07' or '0A')
            dtc_type: Storage type the mode reports

        Returns:
            Tuple of (codes, outcome)
        """
        try:
            response = await self._transport.write(command)
        except Exception as e:
            logger.error(f"DTC command {command} failed: {e}")
            return [], CommandResult(command=command, status=CommandStatus.FAILED, error=str(e))

        if is_no_data(response.response):
            logger.debug(f"No {dtc_type.value} DTCs returned")
            return [], CommandResult(command=command, status=CommandStatus.SKIPPED, reason="no data")

        codes = self._decoder.parse_response(response.response, dtc_type)
        return codes, CommandResult(
            command=command,
            status=CommandStatus.SUCCESS,
            value=",".join(dtc.code for dtc in codes),
        )

    async def read_stored(self) -> List[DiagnosticTroubleCode]:
        """Read stored DTCs (Mode 03)."""
        codes, _ = await self.read("03", DTCType.STORED)
        return codes

    async def read_pending(self) -> List[DiagnosticTroubleCode]:
        """Read pending DTCs (Mode 07)."""
        codes, _ = await self.read("07", DTCType.PENDING)
        return codes

    async def read_permanent(self) -> List[DiagnosticTroubleCode]:
        """Read permanent DTCs (Mode 0A)."""
        codes, _ = await self.read("0A", DTCType.PERMANENT)
        return codes
