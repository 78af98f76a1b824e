"""Live data collector: one request per known PID."""

import logging
from typing import List, Optional, Tuple

from .base import BaseCollector
from ..decoders.pid import ResponseDecoder, is_no_data
from ..models.pid import LiveDataPoint, LiveParameter, LIVE_PIDS
from ..models.session import CommandResult, CommandStatus, LiveDataResult

logger = logging.getLogger(__name__)


class LiveDataCollector(BaseCollector):
    """Reads the live-data parameter set, one command at a time."""

    def __init__(
        self,
        transport,
        parameters: Optional[List[LiveParameter]] = None,
        decoder: Optional[ResponseDecoder] = None,
    ):
        """
        Initialize live data collector.

        Args:
            transport: Transport to issue commands over
            parameters: Parameters to read (None = all known, in table order)
            decoder: Response decoder
        """
        super().__init__(transport)
        self._parameters = parameters or list(LIVE_PIDS.keys())
        self._decoder = decoder or ResponseDecoder()

    @property
    def parameters(self) -> List[LiveParameter]:
        return list(self._parameters)

    async def collect(self) -> LiveDataResult:
        """Read every parameter; readings that fail or carry no data are left out."""
        points: List[LiveDataPoint] = []
        results: List[CommandResult] = []

        for parameter in self._parameters:
            point, result = await self.read(parameter)
            if point is not None:
                points.append(point)
            results.append(result)

        return LiveDataResult(points=points, results=results)

    async def read(self, parameter: LiveParameter) -> Tuple[Optional[LiveDataPoint], CommandResult]:
        """
        Read a single parameter.

        Args:
            parameter: Parameter to read

        Returns:
            Tuple of (point or None, outcome)
        """
        command = LIVE_PIDS[parameter].command_code

        try:
            response = await self._transport.write(command)
        except Exception as e:
            logger.error(f"Live data command {command} failed: {e}")
            return None, CommandResult(
                command=command, parameter=parameter, status=CommandStatus.FAILED, error=str(e)
            )

        if is_no_data(response.response):
            return None, self._skipped(command, parameter, "no data")

        if not self._decoder.can_decode(parameter):
            return None, self._skipped(command, parameter, "no decode rule")

        value = self._decoder.decode(response.response, parameter)
        if value is None:
            logger.warning(f"Unparseable {parameter.value} response: {response.response!r}")
            return None, self._skipped(command, parameter, "unparseable response")

        point = LiveDataPoint(
            name=parameter,
            value=value,
            unit=self._decoder.unit_for(parameter),
            timestamp=response.timestamp,
        )
        return point, CommandResult(
            command=command, parameter=parameter, status=CommandStatus.SUCCESS, value=value
        )

    @staticmethod
    def _skipped(command: str, parameter: LiveParameter, reason: str) -> CommandResult:
        logger.debug(f"Skipping {parameter.value}: {reason}")
        return CommandResult(command=command, parameter=parameter, status=CommandStatus.SKIPPED, reason=reason)
