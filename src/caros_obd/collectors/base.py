"""Base collector class for OBD data collection."""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..connection.transport import BluetoothTransport


class BaseCollector(ABC):
    """Abstract base class for all data collectors."""

    def __init__(self, transport: "BluetoothTransport"):
        """
        Initialize collector with a transport.

        Args:
            transport: The transport commands are issued over
        """
        self._transport = transport

    @property
    def transport(self) -> "BluetoothTransport":
        return self._transport

    @property
    def is_connected(self) -> bool:
        """Check if an adapter is connected."""
        return self._transport.is_connected()

    @abstractmethod
    async def collect(self) -> Any:
        """
        Collect data from the vehicle.

        Returns:
            Collected data (type depends on collector implementation)
        """
