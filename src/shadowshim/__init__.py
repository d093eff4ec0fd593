"""shadowshim: emulated shadow-DOM style encapsulation for component CSS."""
from __future__ import annotations

__version__ = "0.1.0"

from shadowshim.config import EncapsulationConfig  # noqa: E402

# Errors
from shadowshim.errors import InvariantViolation, RuleError, ShimError  # noqa: E402
from shadowshim.parser import ParseError, parse_selector, parse_selector_list  # noqa: E402

# Stylesheet pass
from shadowshim.stylesheet import (  # noqa: E402
    ShadowCss,
    StylesheetProcessor,
    shim_css,
    shim_selector_text,
)

__all__ = [
    "__version__",
    "EncapsulationConfig",
    "InvariantViolation",
    "ParseError",
    "RuleError",
    "ShadowCss",
    "ShimError",
    "StylesheetProcessor",
    "parse_selector",
    "parse_selector_list",
    "shim_css",
    "shim_selector_text",
]
