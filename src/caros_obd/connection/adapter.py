"""OBD2 adapter discovery over serial ports."""

import logging
from typing import Optional, List
from enum import Enum

import serial.tools.list_ports

from ..models.device import OBDDevice

logger = logging.getLogger(__name__)


class AdapterType(str, Enum):
    """Type of OBD2 adapter."""
    BLUETOOTH_ELM327 = "Bluetooth ELM327"
    USB_ELM327 = "USB ELM327"
    UNKNOWN = "Unknown"


class AdapterDetector:
    """Finds serial ports that may lead to an ELM327 adapter."""

    # Keywords that indicate an ELM327 adapter
    ELM327_KEYWORDS = [
        "elm327", "elm 327", "obd", "obdii", "obd2", "obd-ii", "vlink", "vgate",
    ]

    # Bluetooth serial port patterns
    BLUETOOTH_PATTERNS = [
        "bluetooth", "rfcomm", "bthenum", "bth",
    ]

    @classmethod
    def list_ports(cls):
        """Raw serial port listing."""
        return serial.tools.list_ports.comports()

    @classmethod
    def has_ports(cls) -> bool:
        """Check whether the host exposes any serial ports."""
        return len(cls.list_ports()) > 0

    @classmethod
    def detect_all(cls) -> List[OBDDevice]:
        """Detect all ports that look like an OBD2 adapter, Bluetooth first."""
        devices = []
        for port in cls.list_ports():
            adapter_type = cls.classify(port)
            if adapter_type != AdapterType.UNKNOWN:
                devices.append((adapter_type, cls._to_device(port)))

        devices.sort(key=lambda item: item[0] != AdapterType.BLUETOOTH_ELM327)
        logger.debug(f"Detected {len(devices)} candidate adapter port(s)")
        return [device for _, device in devices]

    @classmethod
    def classify(cls, port) -> AdapterType:
        """Determine the adapter type behind a serial port."""
        all_info = f"{port.device} {port.description or ''} {port.hwid or ''} {port.manufacturer or ''}".lower()

        is_bluetooth = any(pattern in all_info for pattern in cls.BLUETOOTH_PATTERNS)
        has_elm327_keyword = any(kw in all_info for kw in cls.ELM327_KEYWORDS)

        if is_bluetooth:
            return AdapterType.BLUETOOTH_ELM327
        if has_elm327_keyword:
            return AdapterType.USB_ELM327
        return AdapterType.UNKNOWN

    @classmethod
    def get_port_by_name(cls, port_name: str) -> Optional[OBDDevice]:
        """Get a device for a specific port name, if the port exists."""
        for port in cls.list_ports():
            if port.device == port_name:
                return cls._to_device(port)
        return None

    @staticmethod
    def _to_device(port) -> OBDDevice:
        name = port.description if port.description and port.description != "n/a" else port.device
        return OBDDevice(
            id=port.hwid if port.hwid and port.hwid != "n/a" else port.device,
            name=name,
            address=port.device,
        )

    @staticmethod
    def device_for_port(port_name: str) -> OBDDevice:
        """Device for a port that was given explicitly (it need not be listed)."""
        return AdapterDetector.get_port_by_name(port_name) or OBDDevice(
            id=port_name,
            name=port_name,
            address=port_name,
        )
