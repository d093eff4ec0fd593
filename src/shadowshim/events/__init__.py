"""Event system: bus and event types for the stylesheet pass."""

from shadowshim.events.bus import EventBus, EventLog
from shadowshim.events.types import (
    RuleEncapsulated,
    RuleFailed,
    RuleSkipped,
    StylesheetCompleted,
    StylesheetStarted,
)

__all__ = [
    "EventBus",
    "EventLog",
    "RuleEncapsulated",
    "RuleFailed",
    "RuleSkipped",
    "StylesheetCompleted",
    "StylesheetStarted",
]
