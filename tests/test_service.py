"""Tests for the diagnostics orchestrator."""

from unittest.mock import MagicMock

import pytest

from caros_obd.config import OBDConfig
from caros_obd.connection.transport import BluetoothTransport
from caros_obd.exceptions import NotConnectedError
from caros_obd.models.dtc import DTCType
from caros_obd.models.pid import LiveParameter
from caros_obd.models.session import CommandStatus
from caros_obd.service import OBDService, ScanState

from conftest import FakeLink


def _service(link, config=None):
    transport = BluetoothTransport(link_factory=lambda device: link, command_timeout=1.0)
    return OBDService(transport=transport, config=config)


class TestFullDiagnostics:
    """End-to-end scan sequencing."""

    @pytest.mark.asyncio
    async def test_not_connected_issues_no_commands(self, service, fake_link):
        with pytest.raises(NotConnectedError):
            await service.run_full_diagnostics()

        assert fake_link.sent == []
        assert service.state == ScanState.FAILED

    @pytest.mark.asyncio
    async def test_full_run(self, service, fake_link, sample_device, sample_vin):
        await service.connect_to_device(sample_device)
        diagnostics = await service.run_full_diagnostics()

        assert service.state == ScanState.COMPLETE
        assert [dtc.code for dtc in diagnostics.dtcs] == ["P0302", "P0171"]
        assert diagnostics.dtcs[0].dtc_type == DTCType.STORED

        values = {point.name: point.value for point in diagnostics.live_data}
        assert values == {
            LiveParameter.ENGINE_RPM: 1000,
            LiveParameter.VEHICLE_SPEED: 60,
            LiveParameter.ENGINE_LOAD: 50.2,
            LiveParameter.COOLANT_TEMPERATURE: 84,
            LiveParameter.FUEL_LEVEL: 100.0,
            LiveParameter.THROTTLE_POSITION: 0.0,
            LiveParameter.INTAKE_AIR_TEMPERATURE: 0,
        }

        assert diagnostics.vehicle_info.vin == sample_vin
        assert not diagnostics.vehicle_info.is_placeholder_vin
        assert diagnostics.vehicle_info.make == "Mazda"

    @pytest.mark.asyncio
    async def test_command_order(self, service, fake_link, sample_device):
        await service.connect_to_device(sample_device)
        await service.run_full_diagnostics()

        sent = [wire.strip() for wire in fake_link.sent]
        assert sent == [
            "03", "07", "0A",
            "010C", "010D", "0104", "0105", "012F", "0111", "010F", "0110",
            "0902",
        ]

    @pytest.mark.asyncio
    async def test_skipped_commands_recorded(self, service, sample_device):
        await service.connect_to_device(sample_device)
        diagnostics = await service.run_full_diagnostics()

        skipped = {result.command: result.reason for result in diagnostics.skipped}
        assert skipped == {"0A": "no data", "0110": "no decode rule"}
        assert not diagnostics.is_complete
        assert len(diagnostics.command_results) == 12

    @pytest.mark.asyncio
    async def test_failed_command_leaves_gap(self, sample_device, vehicle_responses):
        link = FakeLink(responses=vehicle_responses, failures={"010D": OSError("frame error")})
        service = _service(link)
        await service.connect_to_device(sample_device)

        diagnostics = await service.run_full_diagnostics()

        names = [point.name for point in diagnostics.live_data]
        assert LiveParameter.VEHICLE_SPEED not in names
        assert LiveParameter.ENGINE_LOAD in names

        failed = [r for r in diagnostics.command_results if r.status == CommandStatus.FAILED]
        assert [r.command for r in failed] == ["010D"]
        assert "frame error" in failed[0].error
        assert service.state == ScanState.COMPLETE

    @pytest.mark.asyncio
    async def test_vin_fallback(self, sample_device, vehicle_responses):
        responses = dict(vehicle_responses, **{"0902": "NO DATA"})
        service = _service(FakeLink(responses=responses))
        await service.connect_to_device(sample_device)

        diagnostics = await service.run_full_diagnostics()

        assert diagnostics.vehicle_info.vin == "DEMO123456789"
        assert diagnostics.vehicle_info.is_placeholder_vin

    @pytest.mark.asyncio
    async def test_configured_identity(self, sample_device, vehicle_responses):
        config = OBDConfig(vehicle_make="Toyota", vehicle_model="Corolla", vehicle_year=2019)
        service = _service(FakeLink(responses=vehicle_responses), config)
        await service.connect_to_device(sample_device)

        info = await service.read_vehicle_info()

        assert (info.make, info.model, info.year) == ("Toyota", "Corolla", 2019)

    @pytest.mark.asyncio
    async def test_duplicate_codes_across_reads(self, sample_device):
        link = FakeLink(responses={"03": "0302", "07": "03020171", "0A": "0302"})
        service = _service(link)
        await service.connect_to_device(sample_device)

        codes = await service.read_diagnostic_trouble_codes()

        assert [dtc.code for dtc in codes] == ["P0302", "P0171"]
        assert codes[1].dtc_type == DTCType.PENDING

    @pytest.mark.asyncio
    async def test_no_codes(self, sample_device):
        service = _service(FakeLink())
        await service.connect_to_device(sample_device)

        diagnostics = await service.run_full_diagnostics()

        assert diagnostics.dtcs == []
        assert diagnostics.live_data == []
        assert diagnostics.vehicle_info.is_placeholder_vin


class TestServiceLifecycle:

    @pytest.mark.asyncio
    async def test_disconnect_resets_state(self, service, sample_device):
        await service.connect_to_device(sample_device)
        await service.run_full_diagnostics()
        await service.disconnect()

        assert service.state == ScanState.NOT_CONNECTED
        assert not service.is_connected()
        assert service.get_connected_device() is None

    @pytest.mark.asyncio
    async def test_read_live_data(self, service, sample_device):
        await service.connect_to_device(sample_device)
        points = await service.read_live_data()

        assert points[0].name == LiveParameter.ENGINE_RPM
        assert points[0].formatted_value == "1000 RPM"

    def test_default_transport_uses_config(self):
        service = OBDService(config=OBDConfig(command_timeout=2.5))
        assert service.transport.command_timeout == 2.5
        assert service.state == ScanState.NOT_CONNECTED

    @pytest.mark.asyncio
    async def test_initialize(self):
        detector = MagicMock()
        detector.has_ports.return_value = True
        service = OBDService(transport=BluetoothTransport(detector=detector))

        assert await service.initialize()

    @pytest.mark.asyncio
    async def test_initialize_without_ports(self):
        detector = MagicMock()
        detector.has_ports.return_value = False
        service = OBDService(transport=BluetoothTransport(detector=detector))

        assert not await service.initialize()
