"""CarOS OBD command line interface."""

import asyncio
import json
import re
from pathlib import Path
from typing import Optional

import typer
from .config import OBDConfig
from .connection.adapter import AdapterDetector
from .collectors.dtc import DTCCollector
from .collectors.live import LiveDataCollector
from .decoders.dtc import DTCDecoder, format_code
from .display.console import console as display_console, setup_logging
from .display.tables import TableDisplay
from .exceptions import ConfigError, NotConnectedError
from .models.device import OBDDevice
from .service import OBDService


app = typer.Typer(
    name="caros-obd",
    help="CarOS OBD-II client - read trouble codes, live data and VIN over an ELM327 adapter",
    no_args_is_help=True,
)

_table_display = TableDisplay(display_console.rich_console)
_state = {"config_path": None}

_CODE = re.compile(r"[PCBU][0-9A-F]{4}")
_FRAGMENT = re.compile(r"[0-9A-F]{4}")


def load_config() -> OBDConfig:
    """Load configuration or exit with an error."""
    try:
        return OBDConfig.load(_state["config_path"])
    except ConfigError as e:
        display_console.error(str(e))
        raise typer.Exit(1)


def build_service(config: OBDConfig) -> OBDService:
    """Create the service used by a command."""
    return OBDService(config=config)


def resolve_device(port: Optional[str], config: OBDConfig) -> OBDDevice:
    """Pick the adapter from --port, the config file or auto-detection."""
    port = port or config.port
    if port:
        return AdapterDetector.device_for_port(port)

    devices = AdapterDetector.detect_all()
    if not devices:
        display_console.error("No OBD2 adapters found.")
        display_console.info("Bind your Bluetooth adapter to a serial port and pass it with --port")
        raise typer.Exit(1)

    display_console.info(f"Using {devices[0]}")
    return devices[0]


async def _connect(service: OBDService, device: OBDDevice) -> None:
    display_console.info(f"Connecting to {device}...")
    if not await service.connect_to_device(device):
        display_console.error(f"Could not connect to {device}")
        raise typer.Exit(1)
    display_console.print_connection_status(True, str(device))


@app.callback()
def main(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to JSON config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """CarOS OBD-II client."""
    setup_logging(verbose)
    _state["config_path"] = config


@app.command()
def scan():
    """List serial ports that may lead to an OBD2 adapter."""
    display_console.header("Scanning for OBD2 Adapters")

    service = build_service(load_config())
    devices = asyncio.run(service.scan_for_devices())

    if not devices:
        display_console.warning("No OBD2 adapters found")
        display_console.info("Make sure your adapter is paired and bound to a serial port")
        return

    _table_display.show(_table_display.devices_table(devices))
    display_console.info(f"Found {len(devices)} adapter(s)")


@app.command()
def diagnose(
    port: Optional[str] = typer.Option(None, "--port", "-p", help="Serial port (auto-detect if not specified)"),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
):
    """Run a full diagnostics scan."""
    config = load_config()
    service = build_service(config)
    device = resolve_device(port, config)

    async def run():
        await _connect(service, device)
        try:
            return await service.run_full_diagnostics()
        finally:
            await service.disconnect()

    try:
        diagnostics = asyncio.run(run())
    except NotConnectedError as e:
        display_console.error(f"{e}. Connect an adapter and try again.")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(diagnostics.model_dump(mode="json"), indent=2))
        return

    display_console.header("Vehicle Diagnostics", f"Scanned {diagnostics.last_scan:%Y-%m-%d %H:%M:%S}")
    _table_display.show(_table_display.vehicle_info_table(diagnostics.vehicle_info))

    if diagnostics.dtcs:
        _table_display.show(_table_display.dtc_table(diagnostics.dtcs))
    else:
        display_console.success("No trouble codes stored")

    _table_display.show(_table_display.live_data_table(diagnostics.live_data))

    if diagnostics.skipped:
        display_console.info("Some readings are missing; this is normal for PIDs the vehicle does not support.")
        _table_display.show(_table_display.skipped_table(diagnostics.skipped))


@app.command()
def dtc(
    port: Optional[str] = typer.Option(None, "--port", "-p", help="Serial port (auto-detect if not specified)"),
):
    """Read stored, pending and permanent trouble codes."""
    config = load_config()
    service = build_service(config)
    device = resolve_device(port, config)

    async def run():
        await _connect(service, device)
        try:
            return await DTCCollector(service.transport).collect()
        finally:
            await service.disconnect()

    result = asyncio.run(run())

    display_console.header("Diagnostic Trouble Codes")
    if result.codes:
        _table_display.show(_table_display.dtc_table(result.codes))
    else:
        display_console.success("No trouble codes stored")

    for command in result.failed_commands:
        display_console.warning(f"DTC read {command} failed")


@app.command()
def live(
    port: Optional[str] = typer.Option(None, "--port", "-p", help="Serial port (auto-detect if not specified)"),
):
    """Read one round of live sensor data."""
    config = load_config()
    service = build_service(config)
    device = resolve_device(port, config)

    async def run():
        await _connect(service, device)
        try:
            return await LiveDataCollector(service.transport).collect()
        finally:
            await service.disconnect()

    result = asyncio.run(run())

    _table_display.show(_table_display.live_data_table(result.points))
    if result.skipped:
        _table_display.show(_table_display.skipped_table(result.skipped))


@app.command()
def lookup(
    query: str = typer.Argument(..., help="DTC code (P0302), raw 4-digit fragment (0302) or search text"),
):
    """Look up a trouble code, or search the catalog by code or description."""
    decoder = DTCDecoder()
    code = query.strip().upper()

    if _FRAGMENT.fullmatch(code):
        try:
            records = [decoder.decode(format_code(code))]
        except ValueError as e:
            display_console.error(str(e))
            raise typer.Exit(1)
    elif _CODE.fullmatch(code):
        records = [decoder.decode(code)]
    else:
        records = decoder.search(query.strip())
        if not records:
            display_console.error(f"No trouble codes match '{query}'")
            raise typer.Exit(1)

    _table_display.show(_table_display.dtc_table(records, title="DTC Lookup"))


@app.command()
def version():
    """Show version information."""
    from . import __version__
    display_console.print(f"CarOS OBD v{__version__}")


if __name__ == "__main__":
    app()
