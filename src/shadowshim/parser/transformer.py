"""Lark Transformer that converts a selector parse tree into the selector AST."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from shadowshim.model.selector import (
    Attribute,
    ClassName,
    Combinator,
    Id,
    Nesting,
    Node,
    Pseudo,
    Selector,
    SelectorList,
    Tag,
    Universal,
)
from shadowshim.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Attribute name: everything up to the match operator or the closing bracket.
_ATTRIBUTE_NAME_RE = re.compile(r"\[\s*(?P<name>.+?)\s*(?:[~|^$*]?=|\])", re.DOTALL)


def _attribute_name(raw: str) -> str:
    match = _ATTRIBUTE_NAME_RE.match(raw)
    return match.group("name") if match else raw[1:-1].strip()


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into selector nodes.

    ``offset`` is added to every token position so ``source_index`` refers to
    the unstripped selector text.
    """

    def __init__(self, offset: int = 0) -> None:
        super().__init__()
        self.offset = offset

    def _index(self, token: Token) -> int:
        return (token.start_pos or 0) + self.offset

    # ---- simple selectors ----

    def tag(self, items: list[Token]) -> Tag:
        return Tag(str(items[0]), source_index=self._index(items[0]))

    def universal(self, items: list[Token]) -> Universal:
        return Universal(str(items[0]), source_index=self._index(items[0]))

    def nesting(self, items: list[Token]) -> Nesting:
        return Nesting(str(items[0]), source_index=self._index(items[0]))

    def class_name(self, items: list[Token]) -> ClassName:
        return ClassName(str(items[0])[1:], source_index=self._index(items[0]))

    def id_name(self, items: list[Token]) -> Id:
        return Id(str(items[0])[1:], source_index=self._index(items[0]))

    def attribute(self, items: list[Token]) -> Attribute:
        raw = str(items[0])
        return Attribute(_attribute_name(raw), raw, source_index=self._index(items[0]))

    def pseudo(self, items: list[Token]) -> Pseudo:
        return Pseudo(str(items[0]), source_index=self._index(items[0]))

    def pseudo_raw(self, items: list[Token]) -> Pseudo:
        name, _, rest = str(items[0]).partition("(")
        return Pseudo(name, argument_text=rest[:-1], source_index=self._index(items[0]))

    def pseudo_function(self, items: list[Any]) -> Pseudo:
        opening: Token = items[0]
        closing: Token = items[-1]
        name, _, padding = str(opening).partition("(")
        closing_padding = str(closing)[:-1]
        selectors: list[Selector] = items[1] if len(items) == 3 else []
        if not selectors:
            return Pseudo(
                name,
                argument_text=padding + closing_padding,
                source_index=self._index(opening),
            )
        selectors[0].spaces_before = padding + selectors[0].spaces_before
        selectors[-1].spaces_after = selectors[-1].spaces_after + closing_padding
        return Pseudo(name, selectors, source_index=self._index(opening))

    # ---- structural ----

    def compound(self, items: list[Node]) -> list[Node]:
        return list(items)

    def complex_selector(self, items: list[object]) -> Selector:
        nodes: list[Node] = []
        for item in items:
            if isinstance(item, Token):
                raw = str(item)
                nodes.append(Combinator(raw.strip() or " ", raw, source_index=self._index(item)))
            else:
                nodes.extend(item)  # type: ignore[arg-type]
        return Selector(nodes, source_index=nodes[0].source_index)

    def selector_list(self, items: list[object]) -> list[Selector]:
        # Comma tokens carry the whitespace around them; split it between the
        # neighbouring selectors.
        selectors: list[Selector] = []
        pending = ""
        for item in items:
            if isinstance(item, Token):
                before, _, after = str(item).partition(",")
                selectors[-1].spaces_after = before
                pending = after
            elif isinstance(item, Selector):
                item.spaces_before = pending
                pending = ""
                selectors.append(item)
        return selectors

    def start(self, items: list[list[Selector]]) -> list[Selector]:
        return items[0]


@lru_cache(maxsize=1)
def _selector_parser() -> Lark:
    # The compiled grammar is read-only; every parse() call gets fresh state.
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_selector_list(
    source: str, *, line: int | None = None, column: int | None = None
) -> SelectorList:
    """Parse a comma-separated selector list into a :class:`SelectorList`.

    ``line`` and ``column`` locate the selector in its stylesheet; they are
    stored on the root and used to translate parse error positions.
    """
    stripped = source.strip()
    leading = source[: len(source) - len(source.lstrip())]
    trailing = source[len(source.rstrip()):]
    if not stripped:
        raise ParseError("Empty selector", line=line, column=column)

    try:
        tree = _selector_parser().parse(stripped)
    except LarkError as e:
        err_line = getattr(e, "line", None)
        err_column = getattr(e, "column", None)
        if not isinstance(err_line, int) or err_line < 1:
            # Unexpected end of input has no position of its own.
            err_line, err_column = line, column
        elif line is not None:
            if err_line == 1 and column is not None and isinstance(err_column, int):
                err_column = column + len(leading) + err_column - 1
            err_line = line + err_line - 1
        raise ParseError(
            f"Invalid selector {stripped!r}: {e}", line=err_line, column=err_column
        ) from e

    selectors = SelectorTransformer(offset=len(leading)).transform(tree)
    return SelectorList(
        selectors,
        source=source,
        spaces_before=leading,
        spaces_after=trailing,
        line=line,
        column=column,
    )


def parse_selector(source: str) -> Selector:
    """Parse text holding exactly one complex selector."""
    selector_list = parse_selector_list(source)
    if len(selector_list) != 1:
        raise ParseError(f"Expected a single selector, got {len(selector_list)}: {source!r}")
    return cast(Selector, selector_list.first)
