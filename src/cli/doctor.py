"""Doctor command for backend diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import build_settings_table
from core.config import AppSettings

app = typer.Typer(add_completion=False, help="Configuration and backend connectivity checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str, timeout_seconds: float | None = None) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, timeout_seconds=timeout_seconds) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return True, f"HTTP {response.status_code}"


async def _check_all(settings: AppSettings) -> list[tuple[str, bool, str]]:
    checks = [
        ("PuppetDB", f"{settings.puppetdb_url.rstrip('/')}/status/v1/services", None),
        ("Cobbler", settings.cobbler_url, None),
        ("Racktables", settings.racktables_url, settings.rack_timeout_seconds),
    ]
    results: list[tuple[str, bool, str]] = []
    for name, url, timeout in checks:
        ok, detail = await _check_http(settings, url, timeout)
        results.append((name, ok, detail))
    return results


@app.command()
def run() -> None:
    """Show the effective configuration and probe every backend."""

    settings = AppSettings()
    _console.print(build_settings_table(settings))

    table = Table(title="Backends")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Connectivity (best-effort)
    for name, ok, detail in asyncio.run(_check_all(settings)):
        table.add_row(name, "OK" if ok else "FAIL", detail)

    _console.print(table)


def main() -> None:
    app()
