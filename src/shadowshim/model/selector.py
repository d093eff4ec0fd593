"""Selector AST: simple selectors, combinators, pseudos and their containers.

A rule's selector text parses into one :class:`SelectorList` holding
:class:`Selector` children. Each selector is a flat sequence of simple
selectors separated by :class:`Combinator` nodes; a maximal run without a
combinator is a *compound* selector. :class:`Pseudo` nodes may carry a list of
argument selectors (``:host(.x)``) or raw argument text (``:nth-child(2n)``).

Every node keeps a ``parent`` back-reference. The parent link never owns the
node; it is used to find siblings and to walk up to the root when reporting
errors. ``str(node)`` reproduces the source text of unmodified nodes.
"""

from __future__ import annotations

import copy
from typing import Iterable, Iterator

# Pseudo-elements that predate the double-colon syntax.
LEGACY_PSEUDO_ELEMENTS = frozenset({":before", ":after", ":first-letter", ":first-line"})


class Node:
    """Base class for every node in a selector tree."""

    type = "node"

    def __init__(self, value: str = "", *, source_index: int | None = None) -> None:
        self.value = value
        self.source_index = source_index
        self.parent: Container | None = None

    def next(self) -> Node | None:
        """Return the following sibling, or None at the end of the container."""
        if self.parent is None:
            return None
        return self.parent.at(self.parent.index(self) + 1)

    def prev(self) -> Node | None:
        """Return the preceding sibling, or None at the start of the container."""
        if self.parent is None:
            return None
        index = self.parent.index(self)
        return self.parent.at(index - 1) if index > 0 else None

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)

    def replace_with(self, *nodes: Node) -> None:
        """Replace this node with *nodes*, in order, at its current position."""
        parent = self.parent
        if parent is None:
            raise ValueError(f"Cannot replace detached node {self!r}")
        index = parent.index(self)
        parent.remove_child(self)
        parent.insert_at(index, *nodes)

    def clone(self) -> Node:
        """Return a detached deep copy of this node."""
        clone = copy.copy(self)
        clone.parent = None
        return clone

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {str(self)!r}>"


class Tag(Node):
    """An element type selector, e.g. ``div`` or ``svg|rect``."""

    type = "tag"


class Universal(Node):
    """The universal selector ``*`` (optionally namespaced)."""

    type = "universal"

    def __init__(self, value: str = "*", *, source_index: int | None = None) -> None:
        super().__init__(value, source_index=source_index)


class Nesting(Node):
    """The nesting selector ``&``: the element matched by the enclosing rule."""

    type = "nesting"

    def __init__(self, value: str = "&", *, source_index: int | None = None) -> None:
        super().__init__(value, source_index=source_index)


class ClassName(Node):
    type = "class"

    def __str__(self) -> str:
        return f".{self.value}"


class Id(Node):
    type = "id"

    def __str__(self) -> str:
        return f"#{self.value}"


class Attribute(Node):
    """An attribute selector.

    ``attribute`` is the attribute name; ``value`` is the full bracketed
    source text, e.g. ``[type="text" i]``.
    """

    type = "attribute"

    def __init__(
        self, attribute: str, raw: str | None = None, *, source_index: int | None = None
    ) -> None:
        super().__init__(raw if raw is not None else f"[{attribute}]", source_index=source_index)
        self.attribute = attribute


class Comment(Node):
    type = "comment"

    def __str__(self) -> str:
        return f"/*{self.value}*/"


class Combinator(Node):
    """A combinator between two compound selectors.

    ``value`` is the bare operator: ``" "`` for descendant, or ``">"``,
    ``"+"``, ``"~"``. ``raw`` keeps the source text including whitespace.
    """

    type = "combinator"

    def __init__(
        self, value: str = " ", raw: str | None = None, *, source_index: int | None = None
    ) -> None:
        super().__init__(value, source_index=source_index)
        self.raw = raw

    @property
    def is_descendant(self) -> bool:
        return self.value == " "

    def __str__(self) -> str:
        if self.raw is not None:
            return self.raw
        return " " if self.is_descendant else f" {self.value} "


class Container(Node):
    """A node that owns an ordered list of child nodes."""

    def __init__(
        self,
        value: str = "",
        nodes: Iterable[Node] = (),
        *,
        source_index: int | None = None,
    ) -> None:
        super().__init__(value, source_index=source_index)
        self.nodes: list[Node] = []
        for node in nodes:
            self.append(node)

    # ---- access ----

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def first(self) -> Node | None:
        return self.nodes[0] if self.nodes else None

    @property
    def last(self) -> Node | None:
        return self.nodes[-1] if self.nodes else None

    def at(self, index: int) -> Node | None:
        if 0 <= index < len(self.nodes):
            return self.nodes[index]
        return None

    def index(self, node: Node) -> int:
        """Return the position of *node* (by identity) among the children."""
        for i, child in enumerate(self.nodes):
            if child is node:
                return i
        raise ValueError(f"{node!r} is not a child of {self!r}")

    def walk(self) -> Iterator[Node]:
        """Yield every descendant node, depth first."""
        for node in self.nodes:
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    # ---- mutation ----

    def insert_at(self, index: int, *nodes: Node) -> None:
        """Insert *nodes* starting at *index*, detaching them from any old parent."""
        for offset, node in enumerate(nodes):
            if node.parent is not None:
                node.remove()
            node.parent = self
            self.nodes.insert(index + offset, node)

    def append(self, node: Node) -> None:
        self.insert_at(len(self.nodes), node)

    def prepend(self, node: Node) -> None:
        self.insert_at(0, node)

    def insert_before(self, existing: Node, node: Node) -> None:
        self.insert_at(self.index(existing), node)

    def insert_after(self, existing: Node, node: Node) -> None:
        self.insert_at(self.index(existing) + 1, node)

    def remove_child(self, node: Node) -> None:
        del self.nodes[self.index(node)]
        node.parent = None

    def clone(self) -> Container:
        clone = copy.copy(self)
        clone.parent = None
        clone.nodes = []
        for child in self.nodes:
            clone.append(child.clone())
        return clone


class Pseudo(Container):
    """A pseudo-class or pseudo-element.

    Selector arguments (``:host(.x)``, ``:not(.a, .b)``) are child
    :class:`Selector` nodes. Arguments that are not selectors
    (``:nth-child(2n + 1)``) are kept verbatim in ``argument_text``, which also
    holds the padding of an empty argument list such as ``:host( )``.
    """

    type = "pseudo"

    def __init__(
        self,
        value: str,
        nodes: Iterable[Node] = (),
        *,
        argument_text: str | None = None,
        source_index: int | None = None,
    ) -> None:
        super().__init__(value, nodes, source_index=source_index)
        self.argument_text = argument_text

    @property
    def name(self) -> str:
        return self.value.lower()

    @property
    def is_pseudo_element(self) -> bool:
        return self.value.startswith("::") or self.name in LEGACY_PSEUDO_ELEMENTS

    @property
    def has_arguments(self) -> bool:
        return bool(self.nodes) or self.argument_text is not None

    def __str__(self) -> str:
        if not self.has_arguments:
            return self.value
        if self.nodes:
            inner = ",".join(str(node) for node in self.nodes)
        else:
            inner = self.argument_text or ""
        return f"{self.value}({inner})"


class Selector(Container):
    """One complex selector: compounds joined by combinators."""

    type = "selector"

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        *,
        spaces_before: str = "",
        spaces_after: str = "",
        source_index: int | None = None,
    ) -> None:
        super().__init__("", nodes, source_index=source_index)
        self.spaces_before = spaces_before
        self.spaces_after = spaces_after

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> Selector:
        """Build a new selector from clones of *nodes*."""
        return cls(node.clone() for node in nodes)

    def compounds(self) -> list[list[Node]]:
        """Split the selector into its compound selectors."""
        compounds: list[list[Node]] = [[]]
        for node in self.nodes:
            if isinstance(node, Combinator):
                compounds.append([])
            else:
                compounds[-1].append(node)
        return compounds

    def __str__(self) -> str:
        body = "".join(str(node) for node in self.nodes)
        return f"{self.spaces_before}{body}{self.spaces_after}"


class SelectorList(Container):
    """The root of one rule's selector tree.

    ``source`` is the text the list was parsed from; ``line`` and ``column``
    locate the owning rule in its stylesheet when known.
    """

    type = "root"

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        *,
        source: str = "",
        spaces_before: str = "",
        spaces_after: str = "",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__("", nodes, source_index=0)
        self.source = source
        self.spaces_before = spaces_before
        self.spaces_after = spaces_after
        self.line = line
        self.column = column

    def __str__(self) -> str:
        body = ",".join(str(node) for node in self.nodes)
        return f"{self.spaces_before}{body}{self.spaces_after}"


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_pseudo_element(node: Node | None) -> bool:
    return isinstance(node, Pseudo) and node.is_pseudo_element


def is_descendant_combinator(node: Node | None) -> bool:
    return isinstance(node, Combinator) and node.is_descendant


def is_pseudo_named(node: Node | None, name: str) -> bool:
    """Case-insensitive check for a pseudo called *name*, e.g. ``":host"``."""
    return isinstance(node, Pseudo) and node.name == name.lower()
