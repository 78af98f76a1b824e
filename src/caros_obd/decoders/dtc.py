"""DTC catalog and decoder for diagnostic trouble code responses."""

import logging
import re
from typing import Optional, Dict, List

from ..models.dtc import DiagnosticTroubleCode, DTCCategory, DTCSeverity, DTCType
from .pid import clean_response, is_no_data

logger = logging.getLogger(__name__)

UNKNOWN_DESCRIPTION = "Unknown Diagnostic Trouble Code"

# Leading nibble of a raw fragment -> letter + first digit
PREFIX_MAP = {
    "0": "P0",
    "1": "P1",
    "2": "P2",
    "3": "P3",
    "4": "C0",
    "5": "B0",
    "6": "U0",
}

CATEGORY_PREFIXES = {
    "P0": DTCCategory.POWERTRAIN,
    "P1": DTCCategory.POWERTRAIN,
    "P2": DTCCategory.POWERTRAIN_MANUFACTURER,
    "P3": DTCCategory.POWERTRAIN_RESERVED,
    "C0": DTCCategory.CHASSIS,
    "C1": DTCCategory.CHASSIS,
    "B0": DTCCategory.BODY,
    "B1": DTCCategory.BODY,
    "U0": DTCCategory.NETWORK,
    "U1": DTCCategory.NETWORK,
}

SEVERITY_CODES = {
    DTCSeverity.CRITICAL: {"P0300", "P0301", "P0302", "P0303", "P0304"},
    DTCSeverity.HIGH: {"P0171", "P0172", "P0420", "P0430"},
    DTCSeverity.MEDIUM: {"P0440", "P0455"},
}

DTC_DESCRIPTIONS: Dict[str, str] = {
    # Misfires
    "P0300": "Random/Multiple Cylinder Misfire Detected",
    "P0301": "Cylinder 1 Misfire Detected",
    "P0302": "Cylinder 2 Misfire Detected",
    "P0303": "Cylinder 3 Misfire Detected",
    "P0304": "Cylinder 4 Misfire Detected",

    # Fuel System
    "P0171": "System Too Lean (Bank 1)",
    "P0172": "System Too Rich (Bank 1)",

    # Catalyst
    "P0420": "Catalyst System Efficiency Below Threshold",
    "P0430": "Catalyst System Efficiency Below Threshold (Bank 2)",

    # EVAP System
    "P0440": "Evaporative Emission Control System Malfunction",
    "P0455": "Evaporative Emission Control System Leak Detected (Large Leak)",
}

_FRAGMENT = re.compile(r"[0-9A-Fa-f]{4}")
_EMPTY_FRAGMENT = "0000"
_FRAGMENT_LENGTH = 4


def format_code(raw: str) -> str:
    """
    Turn a 4-hex-digit fragment into a DTC code.

    Args:
        raw: Fragment such as '0302'

    Returns:
        Code such as 'P0302'

    Raises:
        ValueError: If the fragment is not 4 hex digits or its leading
            nibble has no prefix mapping
    """
    if not _FRAGMENT.fullmatch(raw or ""):
        raise ValueError(f"Invalid DTC fragment: {raw!r}")

    prefix = PREFIX_MAP.get(raw[0])
    if prefix is None:
        raise ValueError(f"No DTC prefix for leading digit {raw[0]!r} in {raw!r}")

    return prefix + raw[1:].upper()


def describe(code: str, descriptions: Optional[Dict[str, str]] = None) -> str:
    """Human-readable description, never raises."""
    table = DTC_DESCRIPTIONS if descriptions is None else descriptions
    return table.get((code or "").upper(), UNKNOWN_DESCRIPTION)


def severity(code: str) -> DTCSeverity:
    """Severity from the explicit code lists, defaulting to low."""
    code = (code or "").upper()
    for level, codes in SEVERITY_CODES.items():
        if code in codes:
            return level
    return DTCSeverity.LOW


def category(code: str) -> DTCCategory:
    """Category from the code prefix."""
    return CATEGORY_PREFIXES.get((code or "")[:2].upper(), DTCCategory.UNKNOWN)


class DTCDecoder:
    """Builds trouble code records from codes and raw responses."""

    def __init__(self, descriptions: Optional[Dict[str, str]] = None):
        """
        Initialize decoder with an optional extra description table.

        Args:
            descriptions: Code -> description entries that extend the built-in catalog
        """
        self._descriptions = dict(DTC_DESCRIPTIONS)
        if descriptions:
            self._descriptions.update({k.upper(): v for k, v in descriptions.items()})

    def decode(self, code: str, dtc_type: DTCType = DTCType.STORED) -> DiagnosticTroubleCode:
        """
        Build a record for a formatted code.

        Args:
            code: DTC code string (e.g., 'P0302')
            dtc_type: Which read reported the code

        Returns:
            DiagnosticTroubleCode
        """
        code = code.upper().strip()
        return DiagnosticTroubleCode(
            code=code,
            description=describe(code, self._descriptions),
            severity=severity(code),
            category=category(code),
            dtc_type=dtc_type,
        )

    def parse_response(self, raw: str, dtc_type: DTCType = DTCType.STORED) -> List[DiagnosticTroubleCode]:
        """
        Parse a Mode 03/07/0A response into trouble codes.

        The cleaned response is read in 4-hex-digit fragments. Empty
        fragments (0000) and fragments that cannot be formatted are skipped.

        Args:
            raw: Raw response text
            dtc_type: Which read produced the response

        Returns:
            List of codes in response order
        """
        if is_no_data(raw):
            return []

        cleaned = clean_response(raw)
        codes = []

        for i in range(0, len(cleaned), _FRAGMENT_LENGTH):
            fragment = cleaned[i:i + _FRAGMENT_LENGTH]
            if len(fragment) < _FRAGMENT_LENGTH or fragment == _EMPTY_FRAGMENT:
                continue
            try:
                code = format_code(fragment)
            except ValueError as e:
                logger.debug(f"Skipping DTC fragment: {e}")
                continue
            codes.append(self.decode(code, dtc_type))

        return codes

    def search(self, query: str) -> List[DiagnosticTroubleCode]:
        """
        Search known codes by code or description.

        Args:
            query: Search string

        Returns:
            List of matching records
        """
        query = query.lower()
        return [
            self.decode(code)
            for code, description in self._descriptions.items()
            if query in code.lower() or query in description.lower()
        ]


def deduplicate(codes: List[DiagnosticTroubleCode]) -> List[DiagnosticTroubleCode]:
    """Drop repeated codes, keeping the first occurrence."""
    seen = set()
    unique = []
    for dtc in codes:
        if dtc.code in seen:
            continue
        seen.add(dtc.code)
        unique.append(dtc)
    return unique
