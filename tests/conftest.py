"""Pytest fixtures for CarOS OBD tests."""

import threading
import time

import pytest

from caros_obd.config import OBDConfig
from caros_obd.connection.transport import BluetoothTransport
from caros_obd.models.device import OBDDevice
from caros_obd.service import OBDService


class FakeLink:
    """In-memory stand-in for SerialLink that answers from a response table."""

    def __init__(self, responses=None, failures=None, delay=0.0, delays=None, fail_open=False):
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.delay = delay
        self.delays = dict(delays or {})
        self.fail_open = fail_open
        self.sent = []
        self.opened = False
        self.closed = False
        self.active = 0
        self.peak = 0
        self._guard = threading.Lock()

    def open(self):
        if self.fail_open:
            raise OSError("port busy")
        self.opened = True

    def initialize(self):
        return "OK"

    def send(self, wire):
        command = wire.strip()
        with self._guard:
            self.sent.append(wire)
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            delay = self.delays.get(command, self.delay)
            if delay:
                time.sleep(delay)
            if command in self.failures:
                raise self.failures[command]
            return self.responses.get(command, "NO DATA")
        finally:
            with self._guard:
                self.active -= 1

    def close(self):
        self.closed = True


@pytest.fixture
def sample_device():
    return OBDDevice(id="00:1D:A5:68:98:8B", name="OBDII", address="/dev/rfcomm0")


@pytest.fixture
def sample_vin():
    """Sample VIN for testing."""
    return "1HGBH41JXMN109186"


@pytest.fixture
def vehicle_responses(sample_vin):
    """Responses of a running engine with two stored codes."""
    return {
        "03": "03020171",
        "07": "0302",
        "0A": "NO DATA",
        "010C": "410C0FA0",
        "010D": "410D003C",
        "0104": "41040080",
        "0105": "4105007C",
        "012F": "412F00FF",
        "0111": "41110000",
        "010F": "410F0028",
        "0110": "411001F4",
        "0902": "49" + sample_vin.encode("ascii").hex().upper(),
    }


@pytest.fixture
def fake_link(vehicle_responses):
    return FakeLink(responses=vehicle_responses)


@pytest.fixture
def transport(fake_link):
    return BluetoothTransport(link_factory=lambda device: fake_link, command_timeout=1.0)


@pytest.fixture
def config():
    return OBDConfig()


@pytest.fixture
def service(transport, config):
    return OBDService(transport=transport, config=config)
