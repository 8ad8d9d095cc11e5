"""
Generation invoker: one Claude call per request, no retries, no streaming.
"""

import asyncio
import re

import anthropic

from wireframer.config import get_settings
from wireframer.errors import GenerationError, StageResult

# Fallback palette offered to the generator when the site yields no colors
DESIGN_SYSTEM_COLORS = {
    "background": "#FFFFFF",
    "text": "#005a9e",
    "primary": "#0078d4",
    "secondary": "#106ebe",
    "accent": "#005a9e",
}


def build_system_prompt(design_system: str = "microsoft", include_responsive: bool = True) -> str:
    c = DESIGN_SYSTEM_COLORS
    responsive = "- Responsive design (mobile-first)\n" if include_responsive else ""
    return f"""You are an EXPERT wireframe designer with EXCEPTIONAL ATTENTION TO DETAIL specializing in the {design_system} design system.

YOUR MISSION: Create a HIGHLY ACCURATE HTML wireframe that CLOSELY MATCHES the analyzed website.

CRITICAL ACCURACY REQUIREMENTS:

1. EXACT TEXT MATCHING (MOST IMPORTANT):
   - Use the EXACT navigation link texts provided in the analysis, in the same order
   - Use the EXACT button texts and heading texts from each section
   - Do NOT invent or change any text - copy it EXACTLY as provided

2. LAYOUT PATTERN MATCHING:
   - If analysis shows "flexbox" - use display: flex
   - If analysis shows "grid" - use display: grid
   - Match the layout pattern EXACTLY as detected

3. COLOR AND TYPOGRAPHY ACCURACY:
   - Use the ACTUAL color palette, font families, font sizes and spacing values extracted from the site
   - Do NOT use generic grays (#ccc, #333, ...) or generic fonts (Arial, Helvetica)

4. SECTION STRUCTURE:
   - Create the EXACT number of sections identified, in the SAME order
   - Place buttons, images and forms in the sections where they were detected

Design system colors (use ONLY if the site's colors were not detected):
- Background: {c["background"]}
- Text: {c["text"]}
- Primary: {c["primary"]}
- Secondary: {c["secondary"]}
- Accent: {c["accent"]}

Technical requirements:
- Complete HTML page with a single embedded <style> block in <head>
- Semantic HTML5 elements
{responsive}- Hover effects on buttons and links
- High contrast for accessibility

This is a WIREFRAME RECREATION, not an original design. Your goal is FIDELITY to the analyzed website, NOT creativity.

Return ONLY the complete HTML code without markdown formatting or explanations."""


def clean_html_response(html: str | None) -> str:
    """Strip markdown fences and stray wrapping quotes from model output."""
    if not html:
        return ""
    html = re.sub(r"```html\s*", "", html, flags=re.IGNORECASE)
    html = re.sub(r"```\s*", "", html)
    html = re.sub(r"^['\"`]+|['\"`]+$", "", html.strip())
    return html.strip()


def _text_of(message) -> str:
    parts = [
        block.text
        for block in (getattr(message, "content", None) or [])
        if getattr(block, "type", None) == "text" and getattr(block, "text", None)
    ]
    return "".join(parts)


class WireframeGenerator:
    """Sends the system instruction and task document to Claude."""

    def __init__(self, client=None, settings=None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key or None)
        return self._client

    async def generate(self, system: str, document: str) -> StageResult:
        s = self.settings
        print(f"  [generate] Requesting wireframe from {s.default_model}...")
        try:
            message = await asyncio.wait_for(
                self.client.messages.create(
                    model=s.default_model,
                    max_tokens=s.generation_max_tokens,
                    temperature=s.generation_temperature,
                    system=system,
                    messages=[{"role": "user", "content": document}],
                ),
                timeout=s.generation_timeout,
            )
        except asyncio.TimeoutError as e:
            return StageResult.fatal(
                GenerationError(f"Generation timed out after {s.generation_timeout}s", cause=e)
            )
        except anthropic.APIError as e:
            return StageResult.fatal(GenerationError(f"Generation service error: {e}", cause=e))

        html = clean_html_response(_text_of(message))
        print(f"  [generate] Received {len(html)} chars")
        return StageResult.ok(html)
