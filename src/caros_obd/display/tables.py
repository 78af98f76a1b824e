"""Table display utilities for diagnostics output."""

from typing import List, Optional
from rich.table import Table
from rich.console import Console

from ..models.device import OBDDevice
from ..models.dtc import DiagnosticTroubleCode, DTCSeverity
from ..models.pid import LIVE_PIDS, LiveDataPoint
from ..models.session import CommandResult, VehicleIdentity

SEVERITY_STYLES = {
    DTCSeverity.CRITICAL: "red bold",
    DTCSeverity.HIGH: "red",
    DTCSeverity.MEDIUM: "yellow",
    DTCSeverity.LOW: "cyan",
}


def _titled(title: str) -> Table:
    return Table(title=title, show_header=True, header_style="bold cyan", title_justify="left")


class TableDisplay:
    """Builds the Rich tables printed by the CLI commands."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def dtc_table(self, dtcs: List[DiagnosticTroubleCode], title: str = "Diagnostic Trouble Codes") -> Table:
        """Create a table of DTCs."""
        table = _titled(title)

        table.add_column("Code", style="yellow bold", width=8)
        table.add_column("Type", style="dim", width=10)
        table.add_column("Severity", width=10)
        table.add_column("Category", style="dim")
        table.add_column("Description", style="white")

        for dtc in dtcs:
            severity_style = SEVERITY_STYLES.get(dtc.severity, "white")
            table.add_row(
                dtc.code,
                dtc.dtc_type.value,
                f"[{severity_style}]{dtc.severity.value}[/{severity_style}]",
                dtc.category.value,
                dtc.description,
            )

        return table

    def live_data_table(self, points: List[LiveDataPoint], title: str = "Live Data") -> Table:
        """Create a table of live readings."""
        table = _titled(title)

        table.add_column("Parameter", style="cyan bold", width=25)
        table.add_column("Value", justify="right", width=12)
        table.add_column("Unit", style="dim", width=8)
        table.add_column("Range", style="dim")

        for point in points:
            value_str = f"{point.value:.2f}" if isinstance(point.value, float) else str(point.value)
            table.add_row(point.name.value, value_str, point.unit, LIVE_PIDS[point.name].range_label)

        return table

    def skipped_table(self, results: List[CommandResult], title: str = "Missing Readings") -> Table:
        """Create a table of commands that produced nothing."""
        table = _titled(title)

        table.add_column("Command", style="cyan", width=8)
        table.add_column("Parameter", width=25)
        table.add_column("Status", width=8)
        table.add_column("Detail", style="dim")

        for result in results:
            status_style = "red" if result.status.value == "failed" else "yellow"
            table.add_row(
                result.command,
                result.parameter.value if result.parameter else "-",
                f"[{status_style}]{result.status.value}[/{status_style}]",
                result.error or result.reason or "-",
            )

        return table

    def vehicle_info_table(self, info: VehicleIdentity) -> Table:
        """Create a table of vehicle information."""
        table = _titled("Vehicle Information")

        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        vin = f"{info.vin} [dim](placeholder)[/dim]" if info.is_placeholder_vin else info.vin
        table.add_row("VIN", vin)
        table.add_row("Make", info.make)
        table.add_row("Model", info.model)
        table.add_row("Year", str(info.year))

        return table

    def devices_table(self, devices: List[OBDDevice]) -> Table:
        """Create a table of detected adapters."""
        table = _titled("Detected OBD2 Adapters")

        table.add_column("Port", style="cyan bold")
        table.add_column("Name", width=35)
        table.add_column("ID", style="dim")

        for device in devices:
            table.add_row(device.address or "-", device.name, device.id)

        return table

    def show(self, table: Table) -> None:
        """Display a table to the console."""
        self._console.print(table)
        self._console.print()
