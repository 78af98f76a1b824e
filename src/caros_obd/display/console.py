"""Themed Rich console and logging setup for the CLI."""

import logging
from typing import Optional
from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.theme import Theme

OBD_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red bold",
    "muted": "dim",
    "status.connected": "green bold",
    "status.disconnected": "red",
    "header": "bold blue",
})


class Console:
    """Status lines, headers and connection state for CLI commands."""

    def __init__(self, rich_console: Optional[RichConsole] = None):
        self._console = rich_console or RichConsole(theme=OBD_THEME)

    @property
    def rich_console(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        self._console.print(*args, **kwargs)

    def _tagged(self, style: str, tag: str, message: str) -> None:
        self._console.print(f"[{style}][{tag}][/{style}] {message}")

    def info(self, message: str) -> None:
        self._tagged("info", "INFO", message)

    def success(self, message: str) -> None:
        self._tagged("success", "OK", message)

    def warning(self, message: str) -> None:
        self._tagged("warning", "WARN", message)

    def error(self, message: str) -> None:
        self._tagged("error", "ERROR", message)

    def header(self, title: str, subtitle: Optional[str] = None) -> None:
        """Print a section title with an optional dimmed subtitle."""
        lines = [f"[header]{title}[/header]"]
        if subtitle:
            lines.append(f"[muted]{subtitle}[/muted]")
        self._console.print()
        self._console.print("\n".join(lines))
        self._console.print()

    def print_connection_status(self, connected: bool, device: str = "") -> None:
        """Show whether an adapter link is up, and which one."""
        style, label = ("status.connected", "CONNECTED") if connected else ("status.disconnected", "DISCONNECTED")
        self._console.print(f"Adapter: [{style}]{label}[/{style}]")
        if device:
            self._console.print(f"  [muted]{device}[/muted]")


def setup_logging(verbose: bool = False) -> None:
    """Route log records through Rich; debug traffic only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


console = Console()
