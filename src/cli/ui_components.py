"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- La salida de datos (stdout) queda limpia para JSON/YAML; avisos, errores
  y logs van a stderr con Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.config import AppSettings

err_console = Console(stderr=True)


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Instala un `RichHandler` en stderr (WARNING, o DEBUG con --verbose)."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    # httpx/httpcore son muy verbosos en DEBUG.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def print_error(message: str, console: Console | None = None) -> None:
    (console or err_console).print(message, style="red", markup=False, highlight=False, soft_wrap=True)


def build_settings_table(settings: AppSettings) -> Table:
    table = Table(title="whatis configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("PuppetDB", settings.puppetdb_url)
    table.add_row("Cobbler", settings.cobbler_url)
    table.add_row("Racktables", settings.racktables_url)
    table.add_row("Domains", ", ".join(settings.domains) or "-")
    table.add_row("HTTP timeout", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Racktables timeout", f"{settings.rack_timeout_seconds:g}s")
    table.add_row("Verify TLS", "yes" if settings.verify_tls else "no")
    return table
