"""Decoders for interpreting OBD2 responses."""

from .dtc import DTCDecoder, describe, severity, category, format_code, deduplicate
from .pid import ResponseDecoder, clean_response, is_no_data
from .vin import VINDecoder, parse_vin

__all__ = [
    "DTCDecoder",
    "describe",
    "severity",
    "category",
    "format_code",
    "deduplicate",
    "ResponseDecoder",
    "clean_response",
    "is_no_data",
    "VINDecoder",
    "parse_vin",
]
