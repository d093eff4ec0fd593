"""shadowshim model layer -- public type re-exports."""

from shadowshim.model.diagnostic import Diagnostic, Severity
from shadowshim.model.selector import (
    Attribute,
    ClassName,
    Combinator,
    Comment,
    Container,
    Id,
    Nesting,
    Node,
    Pseudo,
    Selector,
    SelectorList,
    Tag,
    Universal,
    is_descendant_combinator,
    is_pseudo_element,
    is_pseudo_named,
)

__all__ = [
    # selector tree
    "Node",
    "Container",
    "Tag",
    "Universal",
    "ClassName",
    "Id",
    "Nesting",
    "Attribute",
    "Pseudo",
    "Combinator",
    "Comment",
    "Selector",
    "SelectorList",
    "is_descendant_combinator",
    "is_pseudo_element",
    "is_pseudo_named",
    # diagnostic
    "Severity",
    "Diagnostic",
]
