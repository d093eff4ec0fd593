"""CLI command: shadowshim shim -- encapsulate a component stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shadowshim.cli.options import build_config, config_options
from shadowshim.errors import ShimError
from shadowshim.events import EventBus, EventLog, RuleEncapsulated, RuleSkipped
from shadowshim.parser import ParseError
from shadowshim.stylesheet import shim_css


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@config_options
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the result here instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Report each rewritten rule on stderr.")
def shim(
    cssfile: str,
    content_class: str | None,
    host_class: str | None,
    component_id: str | None,
    legacy: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Encapsulate CSSFILE and print the scoped stylesheet.

    Exits with code 1 if the stylesheet cannot be parsed or a rule cannot be
    rewritten.
    """
    config = build_config(content_class, host_class, component_id, legacy)
    css_path = Path(cssfile)

    bus = EventBus()
    log = EventLog()
    bus.on_all(log)
    if verbose:
        bus.subscribe(
            RuleEncapsulated,
            lambda e: click.echo(
                f"  line {e.line}: {e.original} -> {e.rewritten}", err=True
            ),
        )

    try:
        result = shim_css(css_path.read_text(encoding="utf-8"), config, bus=bus)
    except ParseError as exc:
        location = f" (line {exc.line}, column {exc.column})" if exc.line else ""
        click.echo(f"Parse error{location}: {exc}", err=True)
        sys.exit(1)
    except ShimError as exc:
        click.echo(f"Encapsulation error: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result, encoding="utf-8")
    else:
        click.echo(result, nl=False)

    if verbose:
        encapsulated = len(log.of_type(RuleEncapsulated))
        skipped = len(log.of_type(RuleSkipped))
        click.echo(
            f"Summary: {encapsulated} rule(s) encapsulated, {skipped} skipped "
            f"[content={config.content_class} host={config.host_class}]",
            err=True,
        )
