"""Diagnostic model: structured lint messages for component stylesheets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a stylesheet's selectors.

    Attributes:
        rule: Identifier for the lint rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        selector: The selector involved, if applicable.
        line: Line of the owning style rule, if known.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    selector: str | None = None
    line: int | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.line is not None:
            location = f" [line={self.line}]"
        if self.selector:
            location += f' [selector="{self.selector}"]'
        return f"{self.severity.value}{location}: {self.message}"
