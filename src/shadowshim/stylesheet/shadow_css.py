"""Compatibility facade for callers that shim CSS text with raw marker names."""

from __future__ import annotations

from shadowshim.config import EncapsulationConfig
from shadowshim.stylesheet.processor import shim_css


class ShadowCss:
    def shim_css_text(self, css_text: str, selector: str, host_selector: str = "") -> str:
        """Scope *css_text* to one component.

        *selector* is the attribute added to every element inside the host,
        *host_selector* the attribute added to the host itself. Without a
        host selector the default ``host`` marker is used.
        """
        config = EncapsulationConfig(
            content_class=selector,
            host_class=host_selector or EncapsulationConfig.host_class,
            legacy=False,
        )
        return shim_css(css_text, config)
