"""Event types emitted while encapsulating a stylesheet."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StylesheetStarted:
    content_class: str
    host_class: str


@dataclass(frozen=True)
class StylesheetCompleted:
    rules_encapsulated: int
    rules_skipped: int


@dataclass(frozen=True)
class RuleSkipped:
    """A rule left untouched because its parent at-rule holds keyframes."""

    selector: str
    at_rule: str
    line: int | None = None


@dataclass(frozen=True)
class RuleEncapsulated:
    original: str
    rewritten: str
    replacements: int  # selectors in the rewritten list
    line: int | None = None


@dataclass(frozen=True)
class RuleFailed:
    selector: str
    error: str
    line: int | None = None
