"""Options shared by the commands that need an encapsulation config."""

from __future__ import annotations

import dataclasses
from typing import Callable

import click

from shadowshim.config import EncapsulationConfig


def config_options(fn: Callable) -> Callable:
    """Add ``--content``, ``--host``, ``--component`` and ``--legacy`` to a command."""
    fn = click.option(
        "--legacy", is_flag=True, help="Leave everything after :host unscoped."
    )(fn)
    fn = click.option(
        "--component",
        "component_id",
        default=None,
        help="Component id; derives _ngcontent-ID and _nghost-ID markers.",
    )(fn)
    fn = click.option(
        "--host", "host_class", default=None, help="Host marker attribute (default: host)."
    )(fn)
    fn = click.option(
        "--content",
        "content_class",
        default=None,
        help="Content marker attribute (default: content).",
    )(fn)
    return fn


def build_config(
    content_class: str | None,
    host_class: str | None,
    component_id: str | None,
    legacy: bool,
) -> EncapsulationConfig:
    """Map CLI options onto a config; explicit marker names win over ``--component``."""
    try:
        if component_id is not None:
            config = EncapsulationConfig.for_component(component_id, legacy=legacy)
        else:
            config = EncapsulationConfig(legacy=legacy)
        overrides = {}
        if content_class is not None:
            overrides["content_class"] = content_class
        if host_class is not None:
            overrides["host_class"] = host_class
        return dataclasses.replace(config, **overrides) if overrides else config
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
