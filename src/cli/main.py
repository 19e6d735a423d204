"""`whatis` command line entry point.

Looks up a hostname or IP address in PuppetDB, falling back to Cobbler and
Racktables, and prints the consolidated facts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import click
import typer
from typer.core import TyperCommand

from adapters.backends import open_sources
from adapters.fact_exporter import render_json, render_plain, render_yaml
from cli.ui_components import configure_logging, print_error
from core import __version__
from core.config import AppSettings, load_settings
from core.domain.errors import InputError, WhatisError
from core.services.display import facts_to_display
from core.services.lookup_pipeline import LookupOptions, LookupResult, lookup_host

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Show what PuppetDB, Cobbler and Racktables know about a host.",
)

USAGE_HINT = "Please pass a hostname, see --help"


class WhatisCommand(TyperCommand):
    """Opciones desconocidas o mal formadas salen con código 1, no 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"whatis {__version__}")
        raise typer.Exit()


def _validate(hosts: list[str] | None, as_json: bool, as_yaml: bool) -> str:
    if not hosts or len(hosts) != 1:
        raise InputError(USAGE_HINT)
    if as_json and as_yaml:
        raise InputError("--json and --yaml are mutually exclusive, see --help")
    return hosts[0]


async def _lookup(argument: str, settings: AppSettings) -> LookupResult:
    options = LookupOptions(domains=settings.domains, vnc_base_port=settings.vnc_base_port)
    async with open_sources(settings) as sources:
        return await lookup_host(argument, sources=sources, options=options)


def _log_summary(result: LookupResult) -> None:
    logger.debug("%s: answered by %s", result.host, result.source)
    logger.debug("%s: candidates %s", result.host, ", ".join(result.candidates) or "-")
    if result.hypervisor is not None:
        logger.debug("%s: guest of %s", result.host, result.hypervisor.hypervisor)
    if result.warnings:
        logger.debug("%s: %d source warning(s), facts may be partial", result.host, len(result.warnings))


def render(result: LookupResult, settings: AppSettings, *, show_all: bool, as_json: bool, as_yaml: bool) -> str:
    if as_json:
        return render_json(result.facts)
    if as_yaml:
        return render_yaml(result.facts)
    names = facts_to_display(result.facts, settings.default_facts, show_all=show_all)
    return render_plain(result.facts, names)


@app.command(cls=WhatisCommand)
def whatis(
    hosts: Optional[List[str]] = typer.Argument(None, metavar="HOST", help="Hostname or IP address."),
    show_all: bool = typer.Option(False, "-a", "--all", help="Display all facts."),
    as_json: bool = typer.Option(False, "-j", "--json", help="JSON output."),
    as_yaml: bool = typer.Option(False, "-y", "--yaml", help="YAML output."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log source queries to stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Look up a host by name or IP address."""

    configure_logging(verbose)

    try:
        argument = _validate(hosts, as_json, as_yaml)
        settings = load_settings()
        result = asyncio.run(_lookup(argument, settings))
    except WhatisError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc

    _log_summary(result)
    output = render(result, settings, show_all=show_all, as_json=as_json, as_yaml=as_yaml)
    if output:
        typer.echo(output)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
