"""Safe insertion of simple selectors into compound selectors.

Every mutation of a compound goes through this module so the compound
invariants hold after each step:

- at most one type (or universal) selector, and it comes first;
- at most one pseudo-element, and nothing follows it;
- no combinator or comment inside a compound.
"""

from __future__ import annotations

from typing import cast

from shadowshim.errors import InvariantViolation, ShimError
from shadowshim.model.selector import (
    Combinator,
    Comment,
    Container,
    Node,
    Selector,
    SelectorList,
    Tag,
    Universal,
    is_pseudo_element,
)

# Upper bound on parent hops when looking for the root of a selector tree.
MAX_ERROR_HOPS = 100


def _find_root(node: Node | None) -> SelectorList | None:
    hops = 0
    current = node
    while not isinstance(current, SelectorList):
        if current is None or hops > MAX_ERROR_HOPS:
            return None
        hops += 1
        current = current.parent
    return current


def error_for(node: Node, message: str, *, anchor: Node | None = None) -> ShimError:
    """Build the error to raise for *node*.

    Walks up from *node* (then from *anchor*, for nodes not yet inserted) to
    the :class:`SelectorList` root. Returns an :class:`InvariantViolation`
    attributed to the root's selector text, or a plain :class:`ShimError` when
    no root is reachable within :data:`MAX_ERROR_HOPS` hops.
    """
    root = _find_root(node)
    located = node
    if root is None and anchor is not None:
        root = _find_root(anchor)
        located = anchor
    if root is None:
        return ShimError(message)
    return InvariantViolation(
        message,
        node=str(node),
        selector=root.source or str(root),
        index=located.source_index,
        line=root.line,
        column=root.column,
    )


def _compound_text(anchor: Node) -> str:
    """Return the text of the compound selector containing *anchor*."""
    if anchor.parent is None:
        return str(anchor)
    nodes = anchor.parent.nodes
    start = end = anchor.parent.index(anchor)
    while start > 0 and not isinstance(nodes[start - 1], Combinator):
        start -= 1
    while end + 1 < len(nodes) and not isinstance(nodes[end + 1], Combinator):
        end += 1
    return "".join(str(node) for node in nodes[start : end + 1])


def insert(anchor: Node, node: Node) -> None:
    """Insert *node* into the compound containing *anchor*.

    The node goes as far into the compound as possible: right before the
    compound's pseudo-element or the next combinator, or at the end.
    """
    if isinstance(node, (Combinator, Comment)):
        raise error_for(node, f"Cannot insert a {node.type}.", anchor=anchor)
    if isinstance(node, (Tag, Universal)):
        insert_tag(anchor, node)
        return

    container = anchor.parent
    if container is None:
        raise error_for(anchor, f'Cannot insert "{node}" next to a detached node.')

    boundary: Node | None = anchor
    while (
        boundary is not None
        and not isinstance(boundary, Combinator)
        and not is_pseudo_element(boundary)
    ):
        boundary = boundary.next()

    if boundary is None:
        container.append(node)
        return
    if is_pseudo_element(boundary) and is_pseudo_element(node):
        raise error_for(
            node,
            f'Can\'t insert "{node}" because "{_compound_text(anchor)}" '
            "already contains a pseudo-element.",
            anchor=anchor,
        )
    container.insert_before(boundary, node)


def insert_tag(anchor: Node, tag: Tag | Universal) -> None:
    """Insert a type selector at the start of the compound containing *anchor*.

    A universal selector already in the compound is replaced. A second type
    selector is an error. A universal selector added to a compound that
    already has a type or universal selector is dropped.
    """
    container = anchor.parent
    if container is None:
        raise error_for(anchor, f'Cannot insert "{tag}" next to a detached node.')

    current: Node | None = anchor
    while current is not None:
        if isinstance(current, Combinator):
            container.insert_after(current, tag)
            return
        if isinstance(current, Tag):
            if isinstance(tag, Universal):
                return
            raise error_for(
                tag,
                f'Can\'t insert "{tag}" because "{_compound_text(anchor)}" '
                "already contains a tag.",
                anchor=anchor,
            )
        if isinstance(current, Universal):
            if not isinstance(tag, Universal):
                current.replace_with(tag)
            return
        current = current.prev()
    container.prepend(tag)


def insert_all(anchor: Node, selector: Selector) -> None:
    """Insert every node of the compound *selector* next to *anchor*.

    Nodes keep their relative order. The first node is placed with
    :func:`insert`; the rest follow it directly. *selector* itself is left
    untouched: clones are inserted.
    """
    container = anchor.parent
    if container is selector or not selector.nodes:
        return

    nodes = [node.clone() for node in selector.nodes]
    previous = nodes[0]
    insert(anchor, previous)
    first_is_tag = isinstance(previous, (Tag, Universal))
    if previous.parent is None:
        # A redundant universal selector was dropped.
        previous = anchor

    for i, node in enumerate(nodes[1:], start=1):
        if isinstance(node, (Combinator, Comment)):
            raise error_for(
                selector.nodes[i],
                f'Can\'t insert "{str(selector).strip()}" because it contains a {node.type}.',
                anchor=anchor,
            )
        if is_pseudo_element(node) and is_pseudo_element(previous.next()):
            # previous was placed in front of the compound's boundary, so its
            # next sibling is a combinator, a pseudo-element or nothing.
            raise error_for(
                selector.nodes[i],
                f'Can\'t insert "{str(selector).strip()}" because '
                f'"{_compound_text(previous)}" already contains a pseudo-element.',
                anchor=anchor,
            )
        if i == 1 and first_is_tag:
            # A tag lands at the compound start; find the real insertion point.
            insert(previous, node)
        else:
            cast(Container, previous.parent).insert_after(previous, node)
        previous = node
