"""Tests for the per-phase collectors."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from caros_obd.collectors.dtc import DTCCollector
from caros_obd.collectors.live import LiveDataCollector
from caros_obd.collectors.vin import VehicleInfoCollector
from caros_obd.exceptions import CommandTimeoutError, NotConnectedError
from caros_obd.models.device import OBDResponse
from caros_obd.models.dtc import DTCType
from caros_obd.models.pid import LiveParameter
from caros_obd.models.session import CommandStatus


def _transport(responses=None, error=None):
    transport = MagicMock()
    transport.is_connected.return_value = True

    async def write(command):
        if error is not None:
            raise error
        return OBDResponse(command=command, response=(responses or {}).get(command, "NO DATA"))

    transport.write = AsyncMock(side_effect=write)
    return transport


class TestDTCCollector:

    @pytest.mark.asyncio
    async def test_read_stored(self):
        collector = DTCCollector(_transport({"03": "03020420"}))
        codes = await collector.read_stored()
        assert [dtc.code for dtc in codes] == ["P0302", "P0420"]

    @pytest.mark.asyncio
    async def test_read_pending_and_permanent(self):
        collector = DTCCollector(_transport({"07": "0171", "0A": "0455"}))

        pending = await collector.read_pending()
        permanent = await collector.read_permanent()

        assert pending[0].dtc_type == DTCType.PENDING
        assert permanent[0].dtc_type == DTCType.PERMANENT

    @pytest.mark.asyncio
    async def test_collect_records_outcomes(self):
        collector = DTCCollector(_transport({"03": "0300"}))
        result = await collector.collect()

        assert result.has_critical
        assert [r.status for r in result.results] == [
            CommandStatus.SUCCESS,
            CommandStatus.SKIPPED,
            CommandStatus.SKIPPED,
        ]
        assert result.results[0].value == "P0300"

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_reads(self):
        transport = _transport(error=CommandTimeoutError("03", 5.0))
        result = await DTCCollector(transport).collect()

        assert result.codes == []
        assert result.failed_commands == ["03", "07", "0A"]
        assert transport.write.await_count == 3


class TestLiveDataCollector:

    @pytest.mark.asyncio
    async def test_selected_parameters(self):
        transport = _transport({"010C": "410C0FA0", "0105": "4105005A"})
        collector = LiveDataCollector(
            transport, parameters=[LiveParameter.ENGINE_RPM, LiveParameter.COOLANT_TEMPERATURE]
        )

        result = await collector.collect()

        assert result.get(LiveParameter.ENGINE_RPM).value == 1000
        assert result.get(LiveParameter.COOLANT_TEMPERATURE).value == 50
        assert result.get(LiveParameter.VEHICLE_SPEED) is None
        assert result.skipped == []

    @pytest.mark.asyncio
    async def test_unparseable_response_skipped(self):
        collector = LiveDataCollector(_transport({"010D": "7F0112"}), parameters=[LiveParameter.VEHICLE_SPEED])

        point, result = await collector.read(LiveParameter.VEHICLE_SPEED)

        assert point is None
        assert result.status == CommandStatus.SKIPPED
        assert result.reason == "unparseable response"

    @pytest.mark.asyncio
    async def test_short_response_skipped(self):
        collector = LiveDataCollector(_transport({"010C": "410C1A"}))

        point, result = await collector.read(LiveParameter.ENGINE_RPM)

        assert point is None
        assert result.status == CommandStatus.SKIPPED
        assert result.reason == "unparseable response"

    @pytest.mark.asyncio
    async def test_mass_air_flow_skipped(self):
        collector = LiveDataCollector(_transport({"0110": "411001F4"}))

        point, result = await collector.read(LiveParameter.MASS_AIR_FLOW)

        assert point is None
        assert result.reason == "no decode rule"

    @pytest.mark.asyncio
    async def test_transport_error_recorded(self):
        collector = LiveDataCollector(_transport(error=NotConnectedError()))

        point, result = await collector.read(LiveParameter.FUEL_LEVEL)

        assert point is None
        assert result.status == CommandStatus.FAILED
        assert result.parameter == LiveParameter.FUEL_LEVEL


class TestVehicleInfoCollector:

    @pytest.mark.asyncio
    async def test_vin_from_vehicle(self, sample_vin):
        collector = VehicleInfoCollector(_transport({"0902": "49" + sample_vin}))

        identity, result = await collector.read()

        assert identity.vin == sample_vin
        assert result.value == sample_vin

    @pytest.mark.asyncio
    async def test_error_falls_back_to_placeholder(self):
        collector = VehicleInfoCollector(_transport(error=CommandTimeoutError("0902", 5.0)))

        identity = await collector.collect()

        assert identity.vin == "DEMO123456789"
        assert identity.is_placeholder_vin
        assert (identity.make, identity.model, identity.year) == ("Mazda", "CX-30", 2024)


class TestAdapterQuirks:
    """Responses shaped by adapter settings rather than the vehicle."""

    @pytest.mark.asyncio
    async def test_headerless_single_byte_reply_skipped(self):
        collector = LiveDataCollector(_transport({"010D": "410D3C"}))

        point, result = await collector.read(LiveParameter.VEHICLE_SPEED)

        assert point is None
        assert result.reason == "unparseable response"

    @pytest.mark.asyncio
    async def test_search_banner_before_no_data_in_live_read(self):
        collector = LiveDataCollector(_transport({"0104": "SEARCHING...\rNO DATA"}))

        point, result = await collector.read(LiveParameter.ENGINE_LOAD)

        assert point is None
        assert result.reason == "no data"

    @pytest.mark.asyncio
    async def test_search_banner_before_no_data_in_dtc_read(self):
        collector = DTCCollector(_transport({"03": "SEARCHING...\rNO DATA"}))

        codes, result = await collector.read("03", DTCType.STORED)

        assert codes == []
        assert result.status == CommandStatus.SKIPPED
        assert result.reason == "no data"
