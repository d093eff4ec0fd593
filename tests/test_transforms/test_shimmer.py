"""Tests for the selector shimmer and the transform pipeline."""

import pytest

from shadowshim.config import EncapsulationConfig
from shadowshim.errors import InvariantViolation
from shadowshim.model.selector import SelectorList
from shadowshim.parser import parse_selector, parse_selector_list
from shadowshim.stylesheet import shim_selector_text
from shadowshim.transforms import BUILTIN_TRANSFORMS, apply_transforms
from shadowshim.transforms.shimmer import ShimTransform, contains_host, shim_selector

CONFIG = EncapsulationConfig(content_class="c", host_class="h")
LEGACY = EncapsulationConfig(content_class="c", host_class="h", legacy=True)


def _shim(text: str, config: EncapsulationConfig = CONFIG) -> str:
    return shim_selector_text(text, config)


# ---------------------------------------------------------------------------
# Content scoping
# ---------------------------------------------------------------------------


class TestContentMarker:
    @pytest.mark.parametrize(
        "text, expected",
        [
            (".foo", ".foo[c]"),
            (".foo .bar", ".foo[c] .bar[c]"),
            (".a > .b + .c", ".a[c] > .b[c] + .c[c]"),
            ("div.a#b", "div.a#b[c]"),
            (".a:hover", ".a:hover[c]"),
            (".a::before", ".a[c]::before"),
            ("::before", "[c]::before"),
            ("p:first-line", "p[c]:first-line"),
            ("*", "*[c]"),
            (".a, .b", ".a[c], .b[c]"),
            (":not(.a)", ":not(.a)[c]"),
            (".a:has(> .b)", ".a:has(> .b)[c]"),
            ("& .b", "&[c] .b[c]"),
            ("&:hover", "&:hover[c]"),
            ("> .a + .b", "> .a[c] + .b[c]"),
        ],
    )
    def test_every_compound_is_scoped(self, text, expected):
        assert _shim(text) == expected

    def test_marker_once_per_compound(self):
        assert _shim(".a.b.c:hover:focus").count("[c]") == 1

    def test_spacing_preserved(self):
        assert _shim("  .a  >  .b ,.c ") == "  .a[c]  >  .b[c] ,.c[c] "


# ---------------------------------------------------------------------------
# :host
# ---------------------------------------------------------------------------


class TestHost:
    def test_bare_host(self):
        assert _shim(":host") == "[h]"

    def test_host_argument_is_inlined(self):
        assert _shim(":host(.x)") == ".x[h]"

    def test_host_with_descendant(self):
        assert _shim(":host .a") == "[h] .a[c]"

    def test_host_with_tag_argument(self):
        # The tag goes first; the rest of the argument lands at the compound end.
        assert _shim(":host(button.primary):hover") == "button:hover.primary[h]"

    def test_host_tag_replaces_universal(self):
        assert _shim("*:host(div)") == "div[h]"

    def test_host_with_pseudo_element(self):
        assert _shim(":host::after") == "[h]::after"

    def test_compounds_before_host_are_global(self):
        assert _shim(".theme :host .a") == ".theme [h] .a[c]"

    def test_duplicate_tag_raises(self):
        with pytest.raises(InvariantViolation) as info:
            _shim("span:host(div)")
        assert "already contains a tag" in str(info.value)

    def test_combinator_in_argument_raises(self):
        with pytest.raises(InvariantViolation):
            _shim(":host(.a .b)")


# ---------------------------------------------------------------------------
# :host-context and global context
# ---------------------------------------------------------------------------


class TestHostContext:
    def test_single_context(self):
        assert _shim(":host-context(.dark) .a") == ".dark [h] .a[c], .dark[h] .a[c]"

    @pytest.mark.parametrize(
        "text, expected",
        [
            (":host-context(.x)", 2),
            (":host-context(.x):host-context(.y)", 6),
            (":host-context(.x):host-context(.y):host-context(.z)", 26),
        ],
    )
    def test_replacement_count(self, text, expected):
        assert len(_shim(text).split(", ")) == expected

    def test_context_compounds_are_unscoped(self):
        for selector in _shim(":host-context(.x):host-context(.y) .a").split(", "):
            assert "[c]" not in selector.split("[h]")[0]
            assert selector.endswith(".a[c]")

    def test_global_context(self):
        assert _shim(":-acx-global-context(.rtl) .a") == ".rtl .a[c]"

    def test_global_context_with_host(self):
        assert _shim(":-acx-global-context(.rtl) :host .a") == ".rtl [h] .a[c]"

    def test_global_context_without_argument(self):
        assert _shim(".a :-acx-global-context") == ".a[c] "


# ---------------------------------------------------------------------------
# ::ng-deep
# ---------------------------------------------------------------------------


class TestDeep:
    def test_midpoint(self):
        assert _shim(".a ::ng-deep .b") == ".a[c] .b"

    def test_leading(self):
        assert _shim("::ng-deep .b .c") == ".b .c"

    def test_after_host(self):
        assert _shim(":host ::ng-deep .b") == "[h] .b"

    def test_one_descendant_combinator_left(self):
        result = _shim(".a ::ng-deep .b")
        assert result.count(" ") == 1

    def test_host_after_deep_is_left_alone(self):
        assert _shim("::ng-deep :host .a") == ":host .a"


# ---------------------------------------------------------------------------
# :root and legacy mode
# ---------------------------------------------------------------------------


class TestRootAndLegacy:
    @pytest.mark.parametrize(
        "text, expected",
        [
            (":root", ":root"),
            (":root .a", ":root .a[c]"),
            (":root.dark .a", ":root.dark .a[c]"),
            (".a :root", ".a[c] :root"),
        ],
    )
    def test_root_never_scoped(self, text, expected):
        assert _shim(text) == expected

    def test_legacy_stops_after_host(self):
        assert _shim(":host .a .b", LEGACY) == "[h] .a .b"

    def test_legacy_without_host_scopes_everything(self):
        assert _shim(".a .b", LEGACY) == ".a[c] .b[c]"

    def test_legacy_host_compound_still_marked(self):
        assert _shim(".x :host(.y) > .z", LEGACY) == ".x .y[h] > .z"


# ---------------------------------------------------------------------------
# Direct API
# ---------------------------------------------------------------------------


class TestShimSelector:
    def test_contains_host(self):
        assert contains_host(parse_selector(".a :host"))
        assert not contains_host(parse_selector(".a :not(:host)"))

    def test_contains_host_override(self):
        sel = parse_selector(".a .b")
        shim_selector(sel, "c", "h", contains_host_pseudo=True)
        assert str(sel) == ".a .b"

    def test_shim_transform(self):
        selectors = parse_selector_list(":host, .a")
        result = ShimTransform().apply(selectors, CONFIG)
        assert str(result) == "[h], .a[c]"

    def test_builtin_transform_order(self):
        assert [type(t).__name__ for t in BUILTIN_TRANSFORMS] == [
            "HostContextTransform",
            "ShimTransform",
        ]

    def test_custom_transforms_run_last(self):
        seen = []

        class Recorder:
            def apply(self, selectors: SelectorList, config):
                seen.append(str(selectors))
                return selectors

        apply_transforms(parse_selector_list(":host"), CONFIG, [Recorder()])
        assert seen == ["[h]"]
