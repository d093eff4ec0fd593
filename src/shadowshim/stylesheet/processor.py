"""Stylesheet pass: scope every style rule of a component stylesheet.

CSS is read with tinycss2. The prelude of each style rule is parsed into a
selector tree, run through the selector transforms and written back; every
other token is serialized unchanged. Comments are dropped while reading.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

import tinycss2
from tinycss2.ast import (
    AtRule,
    Declaration,
    Node as CSSNode,
    ParseError as CSSParseError,
    QualifiedRule,
)

from shadowshim.config import EncapsulationConfig
from shadowshim.errors import RuleError, ShimError
from shadowshim.events.bus import EventBus
from shadowshim.events.types import (
    RuleEncapsulated,
    RuleFailed,
    RuleSkipped,
    StylesheetCompleted,
    StylesheetStarted,
)
from shadowshim.parser import ParseError, parse_selector_list
from shadowshim.transforms import apply_transforms

logger = logging.getLogger(__name__)

# Style rules directly inside these hold keyframe offsets, not selectors.
KEYFRAMES_AT_RULES = frozenset({
    "keyframes",
    "-webkit-keyframes",
    "-moz-keyframes",
    "-o-keyframes",
})

# At-rules whose block is a list of rules to encapsulate.
GROUPING_AT_RULES = frozenset({
    "media",
    "supports",
    "document",
    "-moz-document",
    "layer",
    "container",
    "scope",
    "starting-style",
})


class StylesheetProcessor:
    """Encapsulate stylesheets with one configuration.

    Emits :mod:`shadowshim.events` on ``event_bus`` as it goes. The first
    rule that fails stops the pass: no partial output is returned.
    """

    def __init__(
        self,
        config: EncapsulationConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        custom_transforms: list | None = None,
    ) -> None:
        self.config = config or EncapsulationConfig()
        self.event_bus = event_bus or EventBus()
        self.custom_transforms = list(custom_transforms or [])
        self._encapsulated = 0
        self._skipped = 0

    def process(self, css_text: str) -> str:
        """Return *css_text* with every style rule scoped."""
        self._encapsulated = 0
        self._skipped = 0
        self.event_bus.emit(
            StylesheetStarted(
                content_class=self.config.content_class,
                host_class=self.config.host_class,
            )
        )
        nodes = tinycss2.parse_stylesheet(css_text, skip_comments=True)
        output = self._process_rules(nodes, parent_at_rule=None)
        logger.debug(
            "Stylesheet done: %d rule(s) encapsulated, %d skipped",
            self._encapsulated,
            self._skipped,
        )
        self.event_bus.emit(
            StylesheetCompleted(
                rules_encapsulated=self._encapsulated,
                rules_skipped=self._skipped,
            )
        )
        return output

    # ---- rule lists ----

    def _process_rules(self, nodes: Iterable[CSSNode], parent_at_rule: str | None) -> str:
        chunks: list[str] = []
        for node in nodes:
            if isinstance(node, CSSParseError):
                raise _css_parse_error(node)
            if isinstance(node, QualifiedRule):
                chunks.append(self._process_style_rule(node, parent_at_rule))
            elif isinstance(node, AtRule):
                chunks.append(self._process_at_rule(node))
            else:
                chunks.append(node.serialize())
        return "".join(chunks)

    def _process_block(self, content: list[CSSNode], parent_at_rule: str | None) -> str:
        """Rewrite the rules nested in a style rule's block; keep declarations as written."""
        chunks: list[str] = []
        for item in block_items(content):
            if isinstance(item, QualifiedRule):
                chunks.append(self._process_style_rule(item, parent_at_rule))
            elif isinstance(item, AtRule):
                chunks.append(self._process_at_rule(item, nested=True))
            else:
                chunks.append(tinycss2.serialize(item))
        return "".join(chunks)

    def _process_at_rule(self, rule: AtRule, nested: bool = False) -> str:
        name = rule.lower_at_keyword
        if rule.content is None or (
            name not in GROUPING_AT_RULES and name not in KEYFRAMES_AT_RULES
        ):
            return rule.serialize()
        if nested:
            # Inside a style rule the block mixes declarations and rules.
            body = self._process_block(rule.content, parent_at_rule=name)
        else:
            body = self._process_rules(
                tinycss2.parse_rule_list(rule.content), parent_at_rule=name
            )
        return (
            "@"
            + tinycss2.serialize_identifier(rule.at_keyword)
            + tinycss2.serialize(rule.prelude)
            + "{"
            + body
            + "}"
        )

    # ---- style rules ----

    def _process_style_rule(self, rule: QualifiedRule, parent_at_rule: str | None) -> str:
        prelude = tinycss2.serialize(rule.prelude)
        if parent_at_rule in KEYFRAMES_AT_RULES:
            self._skipped += 1
            logger.debug("Skipping %r inside @%s", prelude.strip(), parent_at_rule)
            self.event_bus.emit(
                RuleSkipped(
                    selector=prelude.strip(),
                    at_rule=parent_at_rule or "",
                    line=rule.source_line,
                )
            )
            return rule.serialize()

        try:
            for token in rule.prelude:
                if isinstance(token, CSSParseError):
                    raise _css_parse_error(token)
            rewritten = self.shim_prelude(
                prelude, line=rule.source_line, column=rule.source_column
            )
        except (ParseError, ShimError) as exc:
            logger.warning(
                "Cannot encapsulate %r at line %s: %s", prelude.strip(), rule.source_line, exc
            )
            self.event_bus.emit(
                RuleFailed(selector=prelude.strip(), error=str(exc), line=rule.source_line)
            )
            if isinstance(exc, ParseError):
                raise
            raise RuleError(
                f"Cannot encapsulate rule: {exc.message}",
                selector=prelude,
                line=rule.source_line,
                column=rule.source_column,
                cause=exc,
            ) from exc

        return rewritten + "{" + self._process_block(rule.content, parent_at_rule=None) + "}"

    def shim_prelude(
        self, prelude: str, *, line: int | None = None, column: int | None = None
    ) -> str:
        """Scope one rule prelude (a selector list) and return its new text."""
        selectors = parse_selector_list(prelude, line=line, column=column)
        selectors = apply_transforms(selectors, self.config, self.custom_transforms)
        rewritten = str(selectors)
        self._encapsulated += 1
        logger.debug("Encapsulated %r -> %r", prelude.strip(), rewritten.strip())
        self.event_bus.emit(
            RuleEncapsulated(
                original=prelude.strip(),
                rewritten=rewritten.strip(),
                replacements=len(selectors),
                line=line,
            )
        )
        return rewritten


def iter_style_rules(
    css_text: str,
) -> Iterator[tuple[str, int | None, int | None]]:
    """Yield ``(prelude, line, column)`` for every rule the pass would rewrite.

    Nested rules follow the rule that holds them. Rules inside keyframe-style
    at-rules are not yielded.
    """

    def walk(items: Iterable[object], parent_at_rule: str | None, nested: bool):
        for node in items:
            if isinstance(node, CSSParseError):
                raise _css_parse_error(node)
            if isinstance(node, QualifiedRule):
                if parent_at_rule in KEYFRAMES_AT_RULES:
                    continue
                yield tinycss2.serialize(node.prelude), node.source_line, node.source_column
                yield from walk(block_items(node.content), None, True)
            elif (
                isinstance(node, AtRule)
                and node.content is not None
                and node.lower_at_keyword in GROUPING_AT_RULES
            ):
                children = (
                    block_items(node.content)
                    if nested
                    else tinycss2.parse_rule_list(node.content)
                )
                yield from walk(children, node.lower_at_keyword, nested)

    yield from walk(tinycss2.parse_stylesheet(css_text, skip_comments=True), None, False)


def block_items(
    content: list[CSSNode],
) -> Iterator[QualifiedRule | AtRule | list[CSSNode]]:
    """Split a style rule's block into nested rules and runs of other tokens.

    Declarations, semicolons and whitespace come back as token lists to be
    serialized unchanged. A run of tokens ending in a ``{}`` block is a nested
    rule unless it parses as a declaration, as in
    :func:`tinycss2.parse_blocks_contents`.
    """
    pending: list[CSSNode] = []
    tokens = iter(content)
    for token in tokens:
        if token.type in ("whitespace", "comment") or token == ";":
            pending.append(token)
            continue
        span = [token]
        terminator = None
        if token.type != "{} block":
            for following in tokens:
                if following == ";":
                    terminator = following
                    break
                span.append(following)
                if following.type == "{} block":
                    break
        rule = _nested_rule(span)
        if rule is None:
            pending.extend(span)
        else:
            if pending:
                yield pending
                pending = []
            yield rule
        if terminator is not None:
            pending.append(terminator)
    if pending:
        yield pending


def _nested_rule(span: list[CSSNode]) -> QualifiedRule | AtRule | None:
    block = span[-1]
    if block.type != "{} block":
        return None
    first = span[0]
    if first.type == "at-keyword":
        return AtRule(
            first.source_line,
            first.source_column,
            first.value,
            first.lower_value,
            span[1:-1],
            block.content,
        )
    if isinstance(tinycss2.parse_one_declaration(span), Declaration):
        return None
    return QualifiedRule(first.source_line, first.source_column, span[:-1], block.content)


def _css_parse_error(node: CSSParseError) -> ParseError:
    return ParseError(
        f"Invalid stylesheet: {node.message}",
        line=node.source_line,
        column=node.source_column,
    )


def shim_css(
    css_text: str,
    config: EncapsulationConfig | None = None,
    *,
    bus: EventBus | None = None,
) -> str:
    """Encapsulate a component stylesheet.

    Raises:
        ParseError: The stylesheet or a rule's selector could not be parsed.
        RuleError: A rule could not be rewritten without breaking a compound
            selector invariant.
    """
    return StylesheetProcessor(config, event_bus=bus).process(css_text)


def shim_selector_text(selector_text: str, config: EncapsulationConfig | None = None) -> str:
    """Encapsulate a single selector list, e.g. ``":host .a, .b"``.

    Runs the built-in transforms directly; no events are emitted.
    """
    selectors = parse_selector_list(selector_text)
    return str(apply_transforms(selectors, config or EncapsulationConfig()))
