from shadowshim.stylesheet.processor import (
    GROUPING_AT_RULES,
    KEYFRAMES_AT_RULES,
    StylesheetProcessor,
    iter_style_rules,
    shim_css,
    shim_selector_text,
)
from shadowshim.stylesheet.shadow_css import ShadowCss

__all__ = [
    "GROUPING_AT_RULES",
    "KEYFRAMES_AT_RULES",
    "ShadowCss",
    "StylesheetProcessor",
    "iter_style_rules",
    "shim_css",
    "shim_selector_text",
]
