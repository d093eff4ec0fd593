"""CLI command: shadowshim inspect -- show how one selector list is rewritten."""

from __future__ import annotations

import sys

import click

from shadowshim.cli.options import build_config, config_options
from shadowshim.errors import ShimError
from shadowshim.model.selector import Container, Node, Pseudo, Selector
from shadowshim.parser import ParseError, parse_selector_list
from shadowshim.transforms.base import HOST_CONTEXT
from shadowshim.transforms.host_context import HostContextTransform, ordered_bell
from shadowshim.transforms.shimmer import ShimTransform


def _describe(node: Node, depth: int) -> list[str]:
    indent = "  " * depth
    if isinstance(node, Selector):
        lines = [f"{indent}selector {str(node).strip()!r}"]
    else:
        lines = [f"{indent}{node.type:<10} {str(node)!r}"]
    if isinstance(node, Container):
        for child in node.nodes:
            lines.extend(_describe(child, depth + 1))
    return lines


def _host_context_arguments(selector: Selector) -> int:
    return sum(
        1
        for node in selector.nodes
        if isinstance(node, Pseudo) and node.name == HOST_CONTEXT and node.nodes
    )


@click.command()
@click.argument("selector")
@config_options
def inspect(
    selector: str,
    content_class: str | None,
    host_class: str | None,
    component_id: str | None,
    legacy: bool,
) -> None:
    """Parse SELECTOR and display each rewriting step.

    Shows the parsed nodes, the selectors produced by the :host-context()
    rewrite, and the final encapsulated selectors.
    """
    config = build_config(content_class, host_class, component_id, legacy)

    try:
        selectors = parse_selector_list(selector)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Selectors: {len(selectors)}")
    for item in selectors.nodes:
        click.echo("\n".join(_describe(item, 1)))
        arguments = _host_context_arguments(item) if isinstance(item, Selector) else 0
        if arguments:
            click.echo(
                f"  :host-context() arguments: {arguments} "
                f"-> {2 * ordered_bell(arguments)} selector(s)"
            )
    click.echo()

    try:
        HostContextTransform().apply(selectors, config)
        click.echo(f"Rewritten: {len(selectors)}")
        for item in selectors.nodes:
            click.echo(f"  {str(item).strip()}")
        click.echo()

        ShimTransform().apply(selectors, config)
    except ShimError as exc:
        click.echo(f"Encapsulation error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Encapsulated [content={config.content_class} host={config.host_class}]:")
    for item in selectors.nodes:
        click.echo(f"  {str(item).strip()}")
