"""
Fidelity enforcement: reconcile generated markup with the extracted values.

Two passes over the candidate HTML:
  1. generic placeholder colors, and font stacks made only of generic
     families, are rewritten to var(--color-N) / var(--font-N), cycling
     through the extracted pool
  2. the StyleVariableSet CSS is injected at the top of the first <style>
     block (the candidate's own rules stay below it), or a new block is
     created

Substitution runs before injection so the injected :root block, which holds
the real extracted values, is never rewritten.
"""

import re
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from wireframer.style_variables import StyleVariableSet

_RGB = re.compile(r"rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)", re.IGNORECASE)
_FONT_DECL = re.compile(r"(font-family\s*:\s*)([^;{}!]+?)(\s*(?=[;{}!]|$))", re.IGNORECASE)
# <style> block bodies and style="..." attribute values, in document order
_CSS_REGION = re.compile(
    r"""(<style\b[^>]*>)(.*?)(</style\s*>)|(\bstyle\s*=\s*)(["'])(.*?)\5""",
    re.IGNORECASE | re.DOTALL,
)
_STYLE_OPEN = re.compile(r"<style\b[^>]*>", re.IGNORECASE)
_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
_HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)


class GenericValueCatalogue(BaseModel):
    """Placeholder values a generator reaches for when it ignores the palette."""

    model_config = ConfigDict(frozen=True)

    version: str = "1"
    colors: tuple[str, ...] = (
        "#cccccc", "#ccc", "#dddddd", "#ddd", "#eeeeee", "#eee",
        "#e0e0e0", "#e5e5e5", "#f0f0f0", "#f5f5f5", "#f8f8f8",
        "#999999", "#999", "#888888", "#888", "#808080",
        "#777777", "#777", "#666666", "#666", "#555555", "#555",
        "#444444", "#444", "#333333", "#333",
        "#6c757d", "#f8f9fa", "#dee2e6", "#212529",
        "rgb(204, 204, 204)", "rgb(221, 221, 221)", "rgb(238, 238, 238)",
        "rgb(153, 153, 153)", "rgb(128, 128, 128)", "rgb(102, 102, 102)",
        "rgb(51, 51, 51)",
    )
    fonts: tuple[str, ...] = (
        "arial", "helvetica", "helvetica neue", "times new roman", "times",
        "verdana", "tahoma", "segoe ui", "system-ui", "-apple-system",
        "blinkmacsystemfont", "sans-serif",
    )

    def color_pattern(self) -> re.Pattern:
        alternatives = []
        for value in sorted(self.colors, key=len, reverse=True):
            match = _RGB.fullmatch(value.strip())
            if match:
                r, g, b = match.groups()
                alternatives.append(rf"rgb\(\s*{r}\s*,\s*{g}\s*,\s*{b}\s*\)")
            else:
                alternatives.append(rf"(?<![\w&]){re.escape(value)}(?![\w-])")
        return re.compile("|".join(alternatives), re.IGNORECASE)

    def is_generic_font_stack(self, value: str) -> bool:
        if "var(" in value:
            return False
        generic = {f.lower() for f in self.fonts}
        families = [f.strip().strip("'\"").lower() for f in value.split(",")]
        families = [f for f in families if f]
        return bool(families) and all(f in generic for f in families)


DEFAULT_CATALOGUE = GenericValueCatalogue()


@dataclass(frozen=True)
class Substitution:
    category: str
    original: str
    token_index: int
    pool_size: int


@dataclass
class ReconciledMarkup:
    html: str
    substitutions: list[Substitution] = field(default_factory=list)

    def count(self, category: str) -> int:
        return sum(1 for s in self.substitutions if s.category == category)


class _RoundRobin:
    def __init__(self, category: str, variables: StyleVariableSet, log: list):
        self.category = category
        self.pool = variables.pool(category)
        self.log = log
        self.next = 0

    def take(self, original: str) -> str:
        token = self.pool[self.next % len(self.pool)]
        self.next += 1
        self.log.append(Substitution(self.category, original, token.index, len(self.pool)))
        return token.reference


def _map_css(html: str, rewrite) -> str:
    """Apply `rewrite` to each CSS region of `html`; plain CSS input is one region."""
    if "<" not in html:
        return rewrite(html)

    def region(m: re.Match) -> str:
        if m.group(1) is not None:
            return m.group(1) + rewrite(m.group(2)) + m.group(3)
        return m.group(4) + m.group(5) + rewrite(m.group(6)) + m.group(5)

    return _CSS_REGION.sub(region, html)


def substitute_generic_values(
    html: str,
    variables: StyleVariableSet,
    catalogue: GenericValueCatalogue = DEFAULT_CATALOGUE,
) -> ReconciledMarkup:
    """Replace generic colors and font stacks with extracted style tokens."""
    log: list[Substitution] = []

    colors = _RoundRobin("color", variables, log)
    if colors.pool:
        html = catalogue.color_pattern().sub(lambda m: colors.take(m.group(0)), html)

    fonts = _RoundRobin("font", variables, log)
    if fonts.pool:
        def replace_font(m: re.Match) -> str:
            value = m.group(2)
            if not catalogue.is_generic_font_stack(value):
                return m.group(0)
            return m.group(1) + fonts.take(value.strip()) + m.group(3)

        html = _map_css(html, lambda css: _FONT_DECL.sub(replace_font, css))

    return ReconciledMarkup(html=html, substitutions=log)


def inject_style_variables(html: str, css: str) -> str:
    """
    Put `css` ahead of every other rule in the document.

    First <style> block -> prepended inside it. No style block -> new block
    before </head>. No head marker -> a minimal <head> after <html>, or a
    bare <style> at the very start of a fragment.
    """
    block = f"<style>\n{css}</style>\n"

    match = _STYLE_OPEN.search(html)
    if match:
        return html[: match.end()] + "\n" + css + html[match.end():]

    match = _HEAD_CLOSE.search(html)
    if match:
        return html[: match.start()] + block + html[match.start():]

    match = _HTML_OPEN.search(html)
    if match:
        return html[: match.end()] + f"\n<head>\n{block}</head>" + html[match.end():]

    return block + html


def reconcile(
    html: str,
    variables: StyleVariableSet,
    catalogue: GenericValueCatalogue = DEFAULT_CATALOGUE,
) -> ReconciledMarkup:
    result = substitute_generic_values(html, variables, catalogue)
    result.html = inject_style_variables(result.html, variables.to_css())
    print(
        f"  [fidelity] Injected {len(variables.tokens)} variables, "
        f"replaced {result.count('color')} colors and {result.count('font')} font stacks"
    )
    return result
