"""VIN decoding from Mode 09 responses."""

import logging
import re
from typing import Optional, Dict, Any

from .pid import clean_response, is_no_data

logger = logging.getLogger(__name__)

# Characters of the response header that precede the VIN payload
VIN_HEADER_LENGTH = 2

_HEX_PAYLOAD = re.compile(r"(?:[0-9A-Fa-f]{2})+")


def parse_vin(raw: str) -> Optional[str]:
    """
    Extract the VIN from a raw 0902 response.

    The first two characters are the response header. When the remaining
    payload is hex-encoded ASCII it is decoded; otherwise it is returned
    as-is.

    Args:
        raw: Raw response text

    Returns:
        VIN string or None if the response carries none
    """
    if is_no_data(raw):
        return None

    payload = clean_response(raw)[VIN_HEADER_LENGTH:]
    if not payload:
        return None

    if _HEX_PAYLOAD.fullmatch(payload):
        text = bytes.fromhex(payload).decode("ascii", errors="ignore")
        printable = "".join(c for c in text if c.isalnum())
        if printable:
            return printable.upper()

    return payload


VIN_LENGTH = 17
_FORBIDDEN = {"I", "O", "Q"}
_CHECK_DIGIT_INDEX = 8

# North American check digit transliteration and position weights
_TRANSLITERATION = dict(zip("ABCDEFGH", range(1, 9)))
_TRANSLITERATION.update(zip("JKLMN", range(1, 6)))
_TRANSLITERATION.update({"P": 7, "R": 9})
_TRANSLITERATION.update(zip("STUVWXYZ", range(2, 10)))
_WEIGHTS = (8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2)


class VINDecoder:
    """Validates Vehicle Identification Numbers read from the vehicle."""

    def validate_vin(self, vin: str) -> Dict[str, Any]:
        """
        Check a VIN for structural problems.

        Errors make the VIN invalid; a failed check digit is only a warning
        since it is mandatory for North American vehicles alone.

        Args:
            vin: VIN string

        Returns:
            Dictionary with vin, is_valid, errors, warnings and length
        """
        vin = vin.upper().strip()
        errors = []
        warnings = []

        if len(vin) != VIN_LENGTH:
            errors.append(f"VIN must be {VIN_LENGTH} characters (got {len(vin)})")

        forbidden = sorted(set(vin) & _FORBIDDEN)
        if forbidden:
            errors.append(f"VIN contains invalid characters: {forbidden}")

        if not vin.isalnum():
            errors.append("VIN must contain only letters and numbers")

        if len(vin) == VIN_LENGTH and vin[_CHECK_DIGIT_INDEX] != self.check_digit(vin):
            warnings.append("Check digit mismatch, VIN may be misread")

        return {
            "vin": vin,
            "is_valid": not errors,
            "errors": errors,
            "warnings": warnings,
            "length": len(vin),
        }

    @staticmethod
    def check_digit(vin: str) -> str:
        """Expected position 9 check digit ('0'-'9' or 'X')."""
        total = sum(
            (int(char) if char.isdigit() else _TRANSLITERATION.get(char, 0)) * weight
            for char, weight in zip(vin, _WEIGHTS)
        )
        remainder = total % 11
        return "X" if remainder == 10 else str(remainder)
