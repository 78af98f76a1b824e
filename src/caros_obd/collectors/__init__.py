"""Data collectors for OBD2 information."""

from .base import BaseCollector
from .dtc import DTCCollector
from .live import LiveDataCollector
from .vin import VehicleInfoCollector

__all__ = ["BaseCollector", "DTCCollector", "LiveDataCollector", "VehicleInfoCollector"]
