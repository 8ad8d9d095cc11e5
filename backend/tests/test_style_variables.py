"""
Tests for the style variable synthesizer.
"""
import pytest

from wireframer.snapshot import WebsiteSnapshot
from wireframer.style_variables import synthesize


@pytest.mark.unit
class TestTokens:
    """Token numbering follows collection order, 1-based."""

    def test_token_names_and_values(self, snapshot):
        tokens = synthesize(snapshot).as_dict()
        assert tokens["color-1"] == "rgb(255, 255, 255)"
        assert tokens["color-4"] == "rgb(245, 247, 250)"
        assert tokens["font-1"] == "Inter, sans-serif"
        assert tokens["font-2"] == "Georgia, serif"
        assert tokens["fontsize-3"] == "16px"
        assert tokens["padding-1"] == "64px 24px"
        assert tokens["gap-1"] == "24px"
        assert "color-5" not in tokens
        assert not any(name.startswith("margin") for name in tokens)

    def test_pool_sizes(self, snapshot):
        variables = synthesize(snapshot)
        assert len(variables.pool("color")) == 4
        assert len(variables.pool("font")) == 2
        assert len(variables.pool("fontsize")) == 3
        assert len(variables.pool("padding")) == 2
        assert len(variables.pool("gap")) == 1
        assert [t.index for t in variables.pool("color")] == [1, 2, 3, 4]

    def test_reference(self, snapshot):
        token = synthesize(snapshot).pool("color")[1]
        assert token.name == "color-2"
        assert token.reference == "var(--color-2)"

    def test_pure(self, snapshot):
        assert synthesize(snapshot) == synthesize(snapshot)
        assert synthesize(snapshot).to_css() == synthesize(snapshot).to_css()


@pytest.mark.unit
class TestHeadingRules:
    """Heading rules come from the first captured heading or fixed baselines."""

    def test_rules_from_page(self, snapshot):
        rules = {r.tag: r for r in synthesize(snapshot).heading_rules}
        assert rules["h1"].font_size == "56px"
        assert rules["h1"].font_weight == "800"
        assert rules["h1"].color == "rgb(0, 0, 0)"
        assert rules["h2"].font_size == "36px"
        assert rules["h2"].from_page

    def test_missing_level_falls_back(self, snapshot):
        rules = {r.tag: r for r in synthesize(snapshot).heading_rules}
        assert (rules["h3"].font_size, rules["h3"].font_weight) == ("24px", "600")
        assert not rules["h3"].from_page

    def test_all_baselines_on_bare_page(self):
        rules = {r.tag: r for r in synthesize(WebsiteSnapshot()).heading_rules}
        assert (rules["h1"].font_size, rules["h1"].font_weight) == ("48px", "700")
        assert (rules["h2"].font_size, rules["h2"].font_weight) == ("32px", "600")
        assert (rules["h3"].font_size, rules["h3"].font_weight) == ("24px", "600")


@pytest.mark.unit
class TestCss:
    def test_root_block(self, snapshot):
        css = synthesize(snapshot).to_css()
        assert ":root {" in css
        assert "  --color-1: rgb(255, 255, 255);" in css
        assert "  --font-2: Georgia, serif;" in css
        assert "  --gap-1: 24px;" in css

    def test_heading_css(self, snapshot):
        css = synthesize(snapshot).to_css()
        assert "h1 { font-size: 56px; font-weight: 800; font-family: Inter, sans-serif;" in css
        assert "h3 { font-size: 24px; font-weight: 600; }" in css

    def test_empty_snapshot_css(self):
        css = synthesize(WebsiteSnapshot()).to_css()
        assert ":root {\n}" in css
        assert "h1 { font-size: 48px; font-weight: 700; }" in css
