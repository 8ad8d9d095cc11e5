"""
Pipeline orchestrator: one sequential run per request.

Pipeline:
  [A] render + sample + normalize  (session closed before moving on)
  [B] compile prompt document + synthesize style variables
  [C] single generation call
  [D] fidelity reconciliation
  [E] accessibility fix (optional, non-fatal)
  [F] image placeholders (always)
  [G] assemble response
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial

from wireframer.accessibility import AccessibilityValidator
from wireframer.config import get_settings
from wireframer.errors import InputError, RenderingError, StageResult, StageStatus, WireframeError
from wireframer.fidelity import DEFAULT_CATALOGUE, GenericValueCatalogue, reconcile
from wireframer.generator import WireframeGenerator, build_system_prompt
from wireframer.image_utils import fix_image_placeholders
from wireframer.prompt_compiler import compile_prompt, preview
from wireframer.renderer import PlaywrightRenderer
from wireframer.sampler import sample_page
from wireframer.snapshot import WebsiteSnapshot, normalize
from wireframer.style_variables import synthesize

GENERATED_BY = "URL-Analysis-AI"

FALLBACK_COLORS = {
    "background": "#ffffff",
    "text": "#000000",
    "primary": "#0066cc",
    "secondary": "#666666",
}


@dataclass(frozen=True)
class WireframeRequest:
    url: str
    design_system: str = "microsoft"
    include_responsive: bool = True
    include_accessibility: bool = True


def normalize_url(url: str | None) -> str:
    url = (url or "").strip()
    if not url:
        raise InputError("URL is required")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def summarize_colors(snapshot: WebsiteSnapshot) -> dict:
    """Background/text from the body style, primary/secondary from the rest of the palette."""
    body = snapshot.hierarchy.body
    colors = dict(FALLBACK_COLORS)
    if body and body.background_color and body.background_color != "rgba(0, 0, 0, 0)":
        colors["background"] = body.background_color
    if body and body.color:
        colors["text"] = body.color
    accents = [c for c in snapshot.color_palette if c not in (colors["background"], colors["text"])]
    if accents:
        colors["primary"] = accents[0]
    if len(accents) > 1:
        colors["secondary"] = accents[1]
    return colors


def assemble_response(
    request: WireframeRequest,
    snapshot: WebsiteSnapshot,
    document: str,
    html: str,
    accessibility: dict,
    preview_chars: int = 500,
) -> dict:
    structure = snapshot.structure
    return {
        "success": True,
        "html": html,
        "analysis": {
            "title": snapshot.title,
            "url": snapshot.source_url,
            "sections": structure.total,
            "components": structure.buttons.count + structure.forms.count + structure.images.count,
            "colors": summarize_colors(snapshot),
            "colorPalette": list(snapshot.color_palette),
            "typography": snapshot.typography.model_dump(),
            "spacing": snapshot.spacing.model_dump(),
            "hierarchy": snapshot.hierarchy.model_dump(),
            "detailedSections": len(snapshot.sections),
            "navigationLinks": len(snapshot.navigation_links),
            "wireframePrompt": preview(document, preview_chars),
        },
        "sourceUrl": request.url,
        "generatedBy": GENERATED_BY,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "accessibility": accessibility,
    }


class WireframePipeline:
    def __init__(
        self,
        renderer=None,
        generator=None,
        accessibility=None,
        image_fixer=None,
        catalogue: GenericValueCatalogue = DEFAULT_CATALOGUE,
        settings=None,
    ):
        self.settings = settings or get_settings()
        self.renderer = renderer or PlaywrightRenderer(self.settings)
        self.generator = generator or WireframeGenerator(settings=self.settings)
        self.accessibility = accessibility or AccessibilityValidator()
        self.image_fixer = image_fixer or partial(
            fix_image_placeholders, color=self.settings.placeholder_color
        )
        self.catalogue = catalogue

    async def _render_stage(self, url: str) -> StageResult:
        try:
            session = await self.renderer.open(url)
        except RenderingError as e:
            return StageResult.fatal(e)
        try:
            raw = await sample_page(session)
        except WireframeError as e:
            return StageResult.fatal(e)
        finally:
            await session.close()
        return StageResult.ok(normalize(raw))

    async def extract(self, url: str) -> WebsiteSnapshot:
        """Render `url` and return its snapshot. The session never outlives this call."""
        return (await self._render_stage(url)).unwrap()

    def _accessibility_stage(self, html: str) -> StageResult:
        try:
            report = self.accessibility.validate_and_fix(html)
        except Exception as e:
            return StageResult.recoverable(e, fallback=html)
        return StageResult.ok(report)

    async def run(self, request: WireframeRequest) -> dict:
        start = time.time()

        def _log(msg):
            print(f"  [{time.time() - start:.1f}s] {msg}")

        url = normalize_url(request.url)
        request = WireframeRequest(
            url=url,
            design_system=request.design_system,
            include_responsive=request.include_responsive,
            include_accessibility=request.include_accessibility,
        )
        _log(f"=== WIREFRAME START: {url} ===")

        # [A] Extract
        snapshot = await self.extract(url)
        _log(
            f"Snapshot: {len(snapshot.color_palette)} colors, {len(snapshot.sections)} sections, "
            f"{len(snapshot.navigation_links)} nav links"
        )

        # [B] Compile
        document = compile_prompt(snapshot)
        variables = synthesize(snapshot)

        # [C] Generate
        system = build_system_prompt(request.design_system, request.include_responsive)
        candidate = (await self.generator.generate(system, document)).unwrap() or ""
        _log(f"Generated {len(candidate)} chars")

        # [D] Reconcile
        html = reconcile(candidate, variables, self.catalogue).html

        # [E] Accessibility
        if request.include_accessibility:
            outcome = self._accessibility_stage(html)
            if outcome.status is StageStatus.RECOVERABLE:
                _log(f"Accessibility validation failed: {outcome.error}")
                accessibility = {"status": "failed", "error": str(outcome.error)}
            else:
                report = outcome.value
                if report.is_valid:
                    html = report.fixed_html or html
                accessibility = {
                    "status": "validated",
                    "validationResults": report.summary(),
                    "appliedFixes": report.applied_fixes,
                }
        else:
            accessibility = {"status": "skipped"}

        # [F] Images
        html = self.image_fixer(html)

        _log(f"=== WIREFRAME DONE ({len(html)} chars) ===")
        return assemble_response(
            request, snapshot, document, html, accessibility, self.settings.prompt_preview_chars
        )
