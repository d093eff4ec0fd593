"""Host-context transform: rewrites ``:host-context()`` into ``:host`` selectors.

``:host-context(.x)`` matches the host when ``.x`` matches the host itself or
any of its ancestors. Each occurrence is replaced by a bare ``:host`` and the
selector is expanded into every equivalent arrangement of the context
arguments, each wrapped in ``:UNSCOPED`` so the shimmer leaves it unscoped:

    :host-context(.x) .y   ->   :UNSCOPED(.x) :host .y, :host.x .y

With several arguments every relative placement is produced: an argument may
sit on its own ancestor compound, before or after the others, or share a
compound with another argument. The number of arrangements for ``n``
arguments is the ordered Bell (Fubini) number, and each arrangement yields two
selectors.
"""

from __future__ import annotations

from math import comb
from typing import cast

from shadowshim.config import EncapsulationConfig
from shadowshim.model.selector import Combinator, Node, Pseudo, Selector, SelectorList
from shadowshim.transforms.base import GLOBAL_CONTEXT, HOST, HOST_CONTEXT, UNSCOPED
from shadowshim.transforms.insertion import insert_all


class HostContextTransform:
    """Eliminate ``:host-context()`` and the global-context escape pseudo."""

    def apply(self, selectors: SelectorList, config: EncapsulationConfig) -> SelectorList:
        rewrite_host_context(selectors)
        return selectors


def rewrite_host_context(selectors: SelectorList) -> None:
    """Rewrite every selector in *selectors* in place."""
    for selector in list(selectors.nodes):
        if not isinstance(selector, Selector):
            continue
        replacements = rewrite_selector(selector)
        if replacements != [selector]:
            selector.replace_with(*replacements)


def rewrite_selector(selector: Selector) -> list[Selector]:
    """Return the selectors that replace *selector*.

    The global-context pseudo is renamed to ``:UNSCOPED`` in place. A selector
    without ``:host-context()`` comes back unchanged as ``[selector]``.
    """
    host_context_nodes: list[Pseudo] = []
    current_compound_index = 0
    # Index of the compound holding :host-context(). All occurrences are
    # assumed to share one compound; anything else is undefined.
    host_context_index: int | None = None

    for index, node in enumerate(list(selector.nodes)):
        if isinstance(node, Combinator):
            current_compound_index = index + 1
        if not isinstance(node, Pseudo):
            continue
        if node.name == GLOBAL_CONTEXT:
            node.value = UNSCOPED
        elif node.name == HOST_CONTEXT:
            host_context_nodes.append(node)
            if host_context_index is None:
                host_context_index = current_compound_index
            node.replace_with(Pseudo(HOST, source_index=node.source_index))

    if host_context_index is None:
        return [selector]

    arguments = [
        node.first
        for node in host_context_nodes
        if isinstance(node.first, Selector) and node.first.nodes
    ]
    replacements = expand_selector(
        selector, host_context_arrangements(arguments), host_context_index
    )
    for i, replacement in enumerate(replacements):
        replacement.spaces_after = selector.spaces_after
        replacement.spaces_before = (
            selector.spaces_before if i == 0 else selector.spaces_before or " "
        )
    return replacements


def host_context_arrangements(arguments: list[Selector]) -> list[list[Selector]]:
    """Return every placement of *arguments* relative to one another.

    Each arrangement is a list of compound selectors, outermost ancestor
    first, to be joined by descendant combinators. For ``.x``, ``.y`` this
    returns ``[.x, .y]``, ``[.y.x]`` and ``[.y, .x]``.
    """
    if not arguments:
        return []
    remaining = list(arguments)
    arrangements: list[list[Selector]] = [[_bare_compound(remaining.pop())]]
    for argument in reversed(remaining):
        expanded: list[list[Selector]] = []
        for compounds in arrangements:
            for i in range(len(compounds)):
                # As a new compound before compound i.
                expanded.append(_clone_all([*compounds[:i], argument, *compounds[i:]]))
                # On the same element as compound i.
                merged = _clone_all(compounds)
                insert_all(cast(Node, merged[i].first), argument)
                expanded.append(merged)
            # As a new innermost compound.
            expanded.append(_clone_all([*compounds, argument]))
        arrangements = expanded
    return arrangements


def expand_selector(
    selector: Selector, arrangements: list[list[Selector]], host_context_index: int
) -> list[Selector]:
    """Materialize two selectors per arrangement.

    For arrangement ``[.x, .y]`` and selector ``:host .z`` these are the
    descendant form ``.x .y :host .z`` and the merged form ``.x :host.y .z``
    (context compounds wrapped in ``:UNSCOPED``).
    """
    if not arrangements:
        return [selector]
    replacements: list[Selector] = []
    for compounds in arrangements:
        context = _context_nodes(compounds)
        before = selector.nodes[:host_context_index]
        after = selector.nodes[host_context_index:]
        replacements.append(
            Selector.from_nodes([*before, *context, Combinator(" "), *after])
        )

        merged = selector.clone()
        innermost = cast(Pseudo, context.pop())
        insert_all(merged.nodes[host_context_index], cast(Selector, innermost.first))
        merged.insert_at(host_context_index, *context)
        replacements.append(merged)
    return replacements


def unscoped(selector: Selector) -> Pseudo:
    """Wrap *selector* in an ``:UNSCOPED`` pseudo."""
    return Pseudo(UNSCOPED, [selector])


def ordered_bell(n: int) -> int:
    """Number of weak orderings of *n* items (1, 1, 3, 13, 75, ...)."""
    counts = [1]
    for m in range(1, n + 1):
        counts.append(sum(comb(m, k) * counts[m - k] for k in range(1, m + 1)))
    return counts[n]


def _context_nodes(compounds: list[Selector]) -> list[Node]:
    nodes: list[Node] = []
    for compound in compounds:
        nodes.append(unscoped(compound))
        nodes.append(Combinator(" "))
    nodes.pop()
    return nodes


def _bare_compound(selector: Selector) -> Selector:
    clone = cast(Selector, selector.clone())
    clone.spaces_before = clone.spaces_after = ""
    return clone


def _clone_all(compounds: list[Selector]) -> list[Selector]:
    return [_bare_compound(compound) for compound in compounds]
