"""Lint rules for component stylesheets.

Each rule is a function taking one rule's parsed :class:`SelectorList` and the
encapsulation config, and returning a list of Diagnostic objects describing
any issues found.
"""

from __future__ import annotations

from shadowshim.config import EncapsulationConfig
from shadowshim.model.diagnostic import Diagnostic, Severity
from shadowshim.model.selector import (
    Attribute,
    Combinator,
    Pseudo,
    Selector,
    SelectorList,
    is_pseudo_element,
    is_pseudo_named,
)
from shadowshim.transforms.base import DEEP, HOST, HOST_CONTEXT


def _selectors(selectors: SelectorList) -> list[Selector]:
    return [s for s in selectors.nodes if isinstance(s, Selector)]


def _text(selector: Selector) -> str:
    return str(selector).strip()


# ---------------------------------------------------------------------------
# Structural rules (ERROR severity)
# ---------------------------------------------------------------------------


def check_pseudo_element_position(
    selectors: SelectorList, config: EncapsulationConfig
) -> list[Diagnostic]:
    """A pseudo-element must be the last node of its compound."""
    diagnostics: list[Diagnostic] = []
    # Includes selectors nested in pseudo arguments, e.g. :host(::before.x).
    all_selectors = [n for n in selectors.walk() if isinstance(n, Selector)]
    for selector in all_selectors:
        for compound in selector.compounds():
            for i, node in enumerate(compound[:-1]):
                if is_pseudo_element(node):
                    trailing = "".join(str(n) for n in compound[i + 1:])
                    diagnostics.append(
                        Diagnostic(
                            rule="check_pseudo_element_position",
                            severity=Severity.ERROR,
                            message=f"Pseudo-element '{node}' is followed by '{trailing}'.",
                            selector=_text(selector),
                            line=selectors.line,
                            fix=f"Move '{node}' to the end of its compound selector.",
                        )
                    )
    return diagnostics


# ---------------------------------------------------------------------------
# Encapsulation rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_host_context_single_compound(
    selectors: SelectorList, config: EncapsulationConfig
) -> list[Diagnostic]:
    """All :host-context() occurrences of a selector belong in one compound."""
    diagnostics: list[Diagnostic] = []
    for selector in _selectors(selectors):
        holding = [
            compound
            for compound in selector.compounds()
            if any(is_pseudo_named(node, HOST_CONTEXT) for node in compound)
        ]
        if len(holding) > 1:
            diagnostics.append(
                Diagnostic(
                    rule="check_host_context_single_compound",
                    severity=Severity.WARNING,
                    message=(
                        f":host-context() appears in {len(holding)} compound selectors; "
                        "the rewritten selectors are unspecified."
                    ),
                    selector=_text(selector),
                    line=selectors.line,
                    fix="Chain the :host-context() pseudo-classes in a single compound.",
                )
            )
    return diagnostics


def check_host_after_deep(
    selectors: SelectorList, config: EncapsulationConfig
) -> list[Diagnostic]:
    """:host after ::ng-deep is left as written and never matches the host marker."""
    diagnostics: list[Diagnostic] = []
    for selector in _selectors(selectors):
        seen_deep = False
        for node in selector.nodes:
            if is_pseudo_named(node, DEEP):
                seen_deep = True
            elif seen_deep and (is_pseudo_named(node, HOST) or is_pseudo_named(node, HOST_CONTEXT)):
                diagnostics.append(
                    Diagnostic(
                        rule="check_host_after_deep",
                        severity=Severity.WARNING,
                        message=f"'{node}' follows ::ng-deep and will not be encapsulated.",
                        selector=_text(selector),
                        line=selectors.line,
                        fix="Place :host before ::ng-deep.",
                    )
                )
                break
    return diagnostics


def check_already_scoped(
    selectors: SelectorList, config: EncapsulationConfig
) -> list[Diagnostic]:
    """Selectors must not already carry the encapsulation markers."""
    markers = {config.content_class, config.host_class}
    diagnostics: list[Diagnostic] = []
    for selector in _selectors(selectors):
        found = sorted({
            node.attribute
            for node in selector.walk()
            if isinstance(node, Attribute) and node.attribute in markers
        })
        if found:
            diagnostics.append(
                Diagnostic(
                    rule="check_already_scoped",
                    severity=Severity.WARNING,
                    message=(
                        "Selector already contains encapsulation marker(s) "
                        + ", ".join(f"[{name}]" for name in found)
                        + "; encapsulating it again adds a second set."
                    ),
                    selector=_text(selector),
                    line=selectors.line,
                    fix="Encapsulate the original, unscoped stylesheet instead.",
                )
            )
    return diagnostics


def check_combinator_in_host_argument(
    selectors: SelectorList, config: EncapsulationConfig
) -> list[Diagnostic]:
    """:host() and :host-context() take a single compound selector."""
    diagnostics: list[Diagnostic] = []
    for selector in _selectors(selectors):
        for node in selector.walk():
            if not isinstance(node, Pseudo) or node.name not in (HOST, HOST_CONTEXT):
                continue
            argument = node.first
            if isinstance(argument, Selector) and any(
                isinstance(n, Combinator) for n in argument.nodes
            ):
                diagnostics.append(
                    Diagnostic(
                        rule="check_combinator_in_host_argument",
                        severity=Severity.ERROR,
                        message=f"'{node}' takes a compound selector, not '{str(argument).strip()}'.",
                        selector=_text(selector),
                        line=selectors.line,
                        fix="Move the ancestor part out of the pseudo-class argument.",
                    )
                )
    return diagnostics


ALL_RULES = [
    check_pseudo_element_position,
    check_combinator_in_host_argument,
    check_host_context_single_compound,
    check_host_after_deep,
    check_already_scoped,
]
