"""Connection management for OBD2 adapters."""

from .adapter import AdapterDetector, AdapterType
from .link import SerialLink
from .transport import BluetoothTransport

__all__ = ["AdapterDetector", "AdapterType", "SerialLink", "BluetoothTransport"]
