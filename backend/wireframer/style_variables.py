"""
Style variable synthesizer.

Turns the snapshot's capped, order-preserving collections into numbered CSS
custom properties (--color-1, --font-1, ...) and derives h1-h3 rules from
the first heading captured at each level.
"""

from pydantic import BaseModel, ConfigDict

from wireframer.snapshot import WebsiteSnapshot

CATEGORIES = ("color", "font", "fontsize", "padding", "gap")

# Used when the page has no heading at that level
HEADING_BASELINES = {
    "h1": ("48px", "700"),
    "h2": ("32px", "600"),
    "h3": ("24px", "600"),
}


class StyleToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    index: int
    value: str

    @property
    def name(self) -> str:
        return f"{self.category}-{self.index}"

    @property
    def reference(self) -> str:
        return f"var(--{self.name})"


class HeadingRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    font_size: str
    font_weight: str
    font_family: str = ""
    color: str = ""
    line_height: str = ""
    from_page: bool = True

    def to_css(self) -> str:
        decls = [f"font-size: {self.font_size}", f"font-weight: {self.font_weight}"]
        if self.font_family:
            decls.append(f"font-family: {self.font_family}")
        if self.line_height and self.line_height != "normal":
            decls.append(f"line-height: {self.line_height}")
        if self.color:
            decls.append(f"color: {self.color}")
        return f"{self.tag} {{ " + "; ".join(decls) + "; }"


class StyleVariableSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    tokens: tuple[StyleToken, ...] = ()
    heading_rules: tuple[HeadingRule, ...] = ()

    def pool(self, category: str) -> tuple[StyleToken, ...]:
        return tuple(t for t in self.tokens if t.category == category)

    def as_dict(self) -> dict[str, str]:
        return {t.name: t.value for t in self.tokens}

    def to_css(self) -> str:
        lines = ["/* Extracted style variables */", ":root {"]
        lines.extend(f"  --{t.name}: {t.value};" for t in self.tokens)
        lines.append("}")
        lines.extend(rule.to_css() for rule in self.heading_rules)
        return "\n".join(lines) + "\n"


def _heading_rule(snapshot: WebsiteSnapshot, tag: str) -> HeadingRule:
    profile = snapshot.hierarchy.level(tag)
    size, weight = HEADING_BASELINES[tag]
    if not profile.count or profile.style is None:
        return HeadingRule(tag=tag, font_size=size, font_weight=weight, from_page=False)
    style = profile.style
    return HeadingRule(
        tag=tag,
        font_size=style.font_size or size,
        font_weight=style.font_weight or weight,
        font_family=style.font_family,
        color=style.color,
        line_height=style.line_height,
    )


def synthesize(snapshot: WebsiteSnapshot) -> StyleVariableSet:
    sources = {
        "color": snapshot.color_palette,
        "font": snapshot.typography.fonts,
        "fontsize": snapshot.typography.sizes,
        "padding": snapshot.spacing.paddings,
        "gap": snapshot.spacing.gaps,
    }
    tokens = tuple(
        StyleToken(category=category, index=i, value=value)
        for category in CATEGORIES
        for i, value in enumerate(sources[category], 1)
    )
    rules = tuple(_heading_rule(snapshot, tag) for tag in HEADING_BASELINES)
    return StyleVariableSet(tokens=tokens, heading_rules=rules)
