"""Error hierarchy for selector encapsulation."""

from __future__ import annotations


class ShimError(Exception):
    """Base error for all shadowshim errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvariantViolation(ShimError):
    """An insertion would break a compound selector invariant.

    Raised for duplicate type selectors, duplicate pseudo-elements and
    attempts to splice a combinator or comment into a compound.

    Attributes:
        node: Text of the offending node.
        selector: Full text of the selector list the node belongs to.
        index: Offset of the offending node in *selector*, if known.
        line: Line of the rule in the stylesheet, if known.
        column: Column of the rule in the stylesheet, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        node: str = "",
        selector: str = "",
        index: int | None = None,
        line: int | None = None,
        column: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.node = node
        self.selector = selector
        self.index = index
        self.line = line
        self.column = column

    @property
    def word(self) -> str:
        return self.node

    def __str__(self) -> str:
        location = ""
        if self.line is not None:
            location = f"{self.line}:{self.column or 1}: "
        if self.selector:
            return f'{location}{self.message} (in "{self.selector.strip()}")'
        return f"{location}{self.message}"


class RuleError(ShimError):
    """A style rule could not be encapsulated.

    Wraps the underlying :class:`ShimError` with the rule's position so the
    failure is attributable even when the error site was detached from the
    rule's selector tree.
    """

    def __init__(
        self,
        message: str,
        *,
        selector: str = "",
        line: int | None = None,
        column: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.selector = selector
        self.line = line
        self.column = column

    def __str__(self) -> str:
        location = ""
        if self.line is not None:
            location = f"{self.line}:{self.column or 1}: "
        return f'{location}{self.message} (rule "{self.selector.strip()}")'
