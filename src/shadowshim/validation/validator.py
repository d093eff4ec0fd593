"""Stylesheet validator: runs all lint rules and reports diagnostics."""

from __future__ import annotations

from typing import Callable

from shadowshim.config import EncapsulationConfig
from shadowshim.model.diagnostic import Diagnostic
from shadowshim.model.selector import SelectorList
from shadowshim.parser import parse_selector_list
from shadowshim.stylesheet.processor import iter_style_rules
from shadowshim.validation.rules import ALL_RULES


class ValidationError(Exception):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )


RuleFunc = Callable[[SelectorList, EncapsulationConfig], list[Diagnostic]]


def validate(
    css_text: str,
    config: EncapsulationConfig | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run all lint rules against every style rule of *css_text*.

    Returns the full list of diagnostics (errors, warnings, info). Selectors
    that do not parse raise :class:`~shadowshim.parser.ParseError`.
    """
    config = config or EncapsulationConfig()
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for prelude, line, column in iter_style_rules(css_text):
        selectors = parse_selector_list(prelude, line=line, column=column)
        for rule in rules:
            diagnostics.extend(rule(selectors, config))
    return diagnostics


def validate_or_raise(
    css_text: str,
    config: EncapsulationConfig | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    diagnostics = validate(css_text, config, extra_rules=extra_rules)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
