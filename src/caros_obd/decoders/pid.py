"""Response decoder for live-data PIDs."""

import logging
import math
import re
from typing import Optional, Union, Callable, Dict

from ..models.pid import LIVE_PIDS, LiveParameter

logger = logging.getLogger(__name__)

NO_DATA = "NO DATA"

# ELM327 artifacts that may surround a payload
_PROMPT = ">"
_SEARCHING = "SEARCHING..."
_WHITESPACE = re.compile(r"\s+")
_HEX_BYTE = re.compile(r"[0-9A-Fa-f]{2}")

# Fixed-width frame: 4-character mode/PID echo, then data. One-byte PIDs read
# the byte at [6:8), so a compact ATH0 reply such as 410D3C yields no value.
_RPM_HIGH = 4
_DATA_BYTE = 6

Number = Union[int, float]


def clean_response(raw: str) -> str:
    """Strip whitespace, the adapter prompt and the protocol search banner."""
    cleaned = _WHITESPACE.sub("", raw or "")
    cleaned = cleaned.replace(_SEARCHING, "")
    return cleaned.replace(_PROMPT, "")


def is_no_data(raw: Optional[str]) -> bool:
    """Check for an empty response or the NO DATA sentinel, ignoring the prompt and search banner."""
    if not raw:
        return True
    text = raw.replace(_PROMPT, "").replace(_SEARCHING, "").strip()
    return not text or text == NO_DATA


def round_half_up(value: float, digits: int = 0) -> Number:
    """Round the way adapters and dashboards do (0.5 always rounds up)."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def _byte_at(cleaned: str, start: int) -> int:
    """Read one hex byte at a character offset."""
    field = cleaned[start:start + 2]
    if not _HEX_BYTE.fullmatch(field):
        raise ValueError(f"No hex byte at offset {start}: {cleaned!r}")
    return int(field, 16)


def _decode_rpm(cleaned: str) -> Number:
    a = _byte_at(cleaned, _RPM_HIGH)
    b = _byte_at(cleaned, _DATA_BYTE)
    return round_half_up((a * 256 + b) / 4)


def _decode_speed(cleaned: str) -> Number:
    return _byte_at(cleaned, _DATA_BYTE)


def _decode_percent(cleaned: str) -> Number:
    return round_half_up(_byte_at(cleaned, _DATA_BYTE) / 2.55, 2)


def _decode_temperature(cleaned: str) -> Number:
    return _byte_at(cleaned, _DATA_BYTE) - 40


class ResponseDecoder:
    """Decodes raw ASCII-hex adapter responses into parameter values."""

    # Mass Air Flow has no decode rule and is reported as unsupported
    _DECODERS: Dict[LiveParameter, Callable[[str], Number]] = {
        LiveParameter.ENGINE_RPM: _decode_rpm,
        LiveParameter.VEHICLE_SPEED: _decode_speed,
        LiveParameter.ENGINE_LOAD: _decode_percent,
        LiveParameter.FUEL_LEVEL: _decode_percent,
        LiveParameter.THROTTLE_POSITION: _decode_percent,
        LiveParameter.COOLANT_TEMPERATURE: _decode_temperature,
        LiveParameter.INTAKE_AIR_TEMPERATURE: _decode_temperature,
    }

    def can_decode(self, parameter: LiveParameter) -> bool:
        """Check whether a decode rule exists for a parameter."""
        return parameter in self._DECODERS

    def decode(self, raw: str, parameter: LiveParameter) -> Optional[Number]:
        """
        Decode a raw response for a parameter.

        Args:
            raw: Response text as received from the adapter
            parameter: Parameter the response belongs to

        Returns:
            Decoded value, or None for NO DATA, unparseable data or
            parameters without a decode rule
        """
        if is_no_data(raw):
            return None

        decoder = self._DECODERS.get(parameter)
        if decoder is None:
            logger.debug(f"No decode rule for {parameter.value}")
            return None

        cleaned = clean_response(raw)
        try:
            return decoder(cleaned)
        except ValueError as e:
            logger.debug(f"Could not decode {parameter.value} from {raw!r}: {e}")
            return None

    @staticmethod
    def unit_for(parameter: LiveParameter) -> str:
        """Unit string for a parameter."""
        info = LIVE_PIDS.get(parameter)
        return info.unit.value if info else ""
