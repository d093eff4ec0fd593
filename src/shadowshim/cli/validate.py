"""CLI command: shadowshim validate -- lint a component stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shadowshim.cli.options import build_config, config_options
from shadowshim.model.diagnostic import Severity
from shadowshim.parser import ParseError
from shadowshim.validation import validate as run_validate


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@config_options
@click.option("--strict", is_flag=True, help="Treat warnings as errors.")
@click.option("-q", "--quiet", is_flag=True, help="Only print errors and the summary.")
def validate(
    cssfile: str,
    content_class: str | None,
    host_class: str | None,
    component_id: str | None,
    legacy: bool,
    strict: bool,
    quiet: bool,
) -> None:
    """Check every selector of CSSFILE before it is encapsulated.

    Exits with code 1 when an error is found (or a warning, with --strict).
    """
    config = build_config(content_class, host_class, component_id, legacy)
    css_path = Path(cssfile)

    try:
        diagnostics = run_validate(css_path.read_text(encoding="utf-8"), config)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if not diagnostics:
        click.echo(f"OK: {css_path.name} has no selector problems")
        return

    counts = {severity: 0 for severity in Severity}
    for diag in diagnostics:
        counts[diag.severity] += 1
        if quiet and not diag.is_error:
            continue
        click.echo(str(diag))
        if diag.fix:
            click.echo(f"  fix: {diag.fix}")

    click.echo(
        f"\n{css_path.name}: {counts[Severity.ERROR]} error(s), "
        f"{counts[Severity.WARNING]} warning(s), {counts[Severity.INFO]} info"
    )

    failed = counts[Severity.ERROR] or (strict and counts[Severity.WARNING])
    sys.exit(1 if failed else 0)
