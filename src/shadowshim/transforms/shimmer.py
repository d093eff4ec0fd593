"""Selector shimmer: adds the content/host markers that scope a selector.

Runs after :mod:`shadowshim.transforms.host_context`, so the only special
pseudos left are ``:host``, ``:UNSCOPED``, ``::ng-deep`` and ``:root``.
Compounds before a ``:host`` are global; the ``:host`` compound gets the host
marker; compounds after it (or every compound, in a selector without
``:host``) get the content marker on their last node before any
pseudo-element.
"""

from __future__ import annotations

from shadowshim.config import EncapsulationConfig
from shadowshim.model.selector import (
    Attribute,
    Combinator,
    Node,
    Pseudo,
    Selector,
    SelectorList,
    is_pseudo_element,
    is_pseudo_named,
)
from shadowshim.transforms.base import DEEP, HOST, ROOT, UNSCOPED
from shadowshim.transforms.insertion import insert, insert_all


class ShimTransform:
    """Scope every selector of a rule with the configured markers."""

    def apply(self, selectors: SelectorList, config: EncapsulationConfig) -> SelectorList:
        for selector in list(selectors.nodes):
            if isinstance(selector, Selector):
                shim_selector(
                    selector,
                    config.content_class,
                    config.host_class,
                    legacy=config.legacy,
                )
        return selectors


def contains_host(selector: Selector) -> bool:
    """True if *selector* has a top-level ``:host`` pseudo."""
    return any(is_pseudo_named(node, HOST) for node in selector.nodes)


def shim_selector(
    selector: Selector,
    content_class: str,
    host_class: str,
    legacy: bool = False,
    contains_host_pseudo: bool | None = None,
) -> None:
    """Rewrite *selector* in place.

    Args:
        selector: One complex selector, already free of ``:host-context``.
        content_class: Attribute name of the content marker.
        host_class: Attribute name of the host marker.
        legacy: Stop scoping at the first combinator after ``:host``.
        contains_host_pseudo: Override the top-level ``:host`` check.
    """
    if contains_host_pseudo is None:
        contains_host_pseudo = contains_host(selector)

    seen_deep = False
    seen_host = False
    # Compounds before a :host are global.
    needs_content_class = not contains_host_pseudo

    node = selector.first
    while node is not None:
        # Nodes spliced in while handling this one are not visited.
        following = node.next()

        if isinstance(node, Combinator):
            seen_deep = seen_deep or (legacy and seen_host)
            needs_content_class = not seen_deep and contains_host_pseudo == seen_host
            node = following
            continue

        if isinstance(node, Pseudo):
            if is_pseudo_named(node, HOST):
                seen_host = True
                needs_content_class = False
                argument = node.first
                if isinstance(argument, Selector):
                    insert_all(node, argument)
                # ::ng-deep :host leaves the :host as written.
                if not seen_deep:
                    insert(node, Attribute(host_class))
                    node.remove()
            elif is_pseudo_named(node, UNSCOPED):
                needs_content_class = False
                argument = node.first
                if isinstance(argument, Selector) and argument.nodes:
                    node.replace_with(*argument.nodes)
                else:
                    node.remove()
            elif is_pseudo_named(node, DEEP):
                seen_deep = True
                needs_content_class = False
                _touch_up_combinators(node)
                following = node.next()
                node.remove()
            elif is_pseudo_named(node, ROOT):
                needs_content_class = False

        if needs_content_class and _is_compound_tail(node):
            insert(node, Attribute(content_class))
            needs_content_class = False

        node = following


def _is_compound_tail(node: Node) -> bool:
    """True if *node* is the last place a marker can go in its compound."""
    following = node.next()
    return (
        following is None
        or isinstance(following, Combinator)
        or is_pseudo_element(following)
        or (node.prev() is None and is_pseudo_element(node))
    )


def _touch_up_combinators(deep: Pseudo) -> None:
    """Drop one descendant combinator next to *deep*, preferring the leading one."""
    previous = deep.prev()
    if isinstance(previous, Combinator) and previous.is_descendant:
        previous.remove()
        return
    following = deep.next()
    if isinstance(following, Combinator) and following.is_descendant:
        following.remove()
