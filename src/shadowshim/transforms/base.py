"""Base protocol for selector transforms, and the pseudo names they act on."""

from __future__ import annotations

from typing import Protocol

from shadowshim.config import EncapsulationConfig
from shadowshim.model.selector import SelectorList

HOST = ":host"
HOST_CONTEXT = ":host-context"
# Escapes all scoping; rewritten to UNSCOPED before shimming.
GLOBAL_CONTEXT = ":-acx-global-context"
# Synthetic wrapper for ancestor/global context. Matched on ``Pseudo.name``.
UNSCOPED = ":UNSCOPED"
DEEP = "::ng-deep"
ROOT = ":root"


class Transform(Protocol):
    """An in-place rewrite of one rule's selector list."""

    def apply(self, selectors: SelectorList, config: EncapsulationConfig) -> SelectorList: ...
