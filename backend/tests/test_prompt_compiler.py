"""
Tests for the prompt compiler.
"""
import pytest

from wireframer.prompt_compiler import compile_prompt, preview
from wireframer.sampler import parse_payload
from wireframer.snapshot import WebsiteSnapshot, normalize

BLOCK_ORDER = [
    "TYPOGRAPHY SYSTEM",
    "VISUAL HIERARCHY",
    "SPACING SYSTEM",
    "LAYOUT PATTERNS DETECTED",
    "ACTUAL COLOR PALETTE",
    "NAVIGATION STRUCTURE",
    "DETAILED SECTIONS",
    "COMPONENT SUMMARY",
    "FOOTER:",
    "ACCURACY REQUIREMENTS",
]


@pytest.mark.unit
class TestCompilePrompt:
    """Test rendering of the generation task document."""

    def test_byte_identical_for_same_snapshot(self, snapshot, sample_payload):
        again = normalize(parse_payload(sample_payload))
        assert compile_prompt(snapshot) == compile_prompt(again)

    def test_blocks_in_fixed_order(self, snapshot):
        document = compile_prompt(snapshot)
        positions = [document.index(marker) for marker in BLOCK_ORDER]
        assert positions == sorted(positions)

    def test_header_names_site(self, snapshot):
        document = compile_prompt(snapshot)
        assert document.startswith("ACCURATE WIREFRAME RECREATION REQUEST")
        assert 'Website: "Acme Cloud" (https://acme.test/)' in document

    def test_enumerable_facts_verbatim(self, snapshot):
        document = compile_prompt(snapshot)
        for color in snapshot.color_palette:
            assert color in document
        for font in snapshot.typography.fonts:
            assert font in document
        for value in snapshot.spacing.paddings + snapshot.spacing.margins + snapshot.spacing.gaps:
            assert value in document
        for section in snapshot.sections:
            assert f'"{section.heading}"' in document
            for text in section.button_texts:
                assert f'"{text}"' in document
            for sample in section.paragraph_samples:
                assert sample in document

    def test_navigation_in_exact_order(self, snapshot):
        document = compile_prompt(snapshot)
        assert '1. "Products" (/products)' in document
        assert '2. "Pricing" (/pricing)' in document
        assert '3. "Docs" (/docs)' in document
        assert document.index('"Products"') < document.index('"Docs"')

    def test_navigation_block_omitted_without_nav(self, sample_payload):
        sample_payload["navigation_links"] = []
        document = compile_prompt(normalize(parse_payload(sample_payload)))
        assert "NAVIGATION STRUCTURE" not in document
        assert "navigation link texts" not in document

    def test_section_details(self, snapshot):
        document = compile_prompt(snapshot)
        assert "SECTION 1:" in document
        assert "  Layout: flexbox" in document
        assert "  Layout: grid" in document
        assert '  Buttons (1): "Start free"' in document
        assert "  Background: rgb(245, 247, 250)" in document

    def test_hierarchy_lines(self, snapshot):
        document = compile_prompt(snapshot)
        assert "- H1 (1 on page): font-size 56px, weight 800" in document
        assert "- H2 (3 on page)" in document
        assert "- H3" not in document

    def test_component_summary_and_footer(self, snapshot):
        document = compile_prompt(snapshot)
        assert "3 buttons" in document
        assert "FOOTER: Footer" in document
        assert "© 2024 Acme" in document

    def test_sparse_snapshot_still_renders(self):
        document = compile_prompt(WebsiteSnapshot())
        assert "LAYOUT PATTERNS DETECTED" in document
        assert "ACCURACY REQUIREMENTS" in document
        for marker in ("TYPOGRAPHY SYSTEM", "ACTUAL COLOR PALETTE", "DETAILED SECTIONS", "FOOTER:"):
            assert marker not in document

    def test_full_palette_listed(self, sample_payload):
        sample_payload["colors"] = [f"rgb({i}, 10, 10)" for i in range(12)]
        document = compile_prompt(normalize(parse_payload(sample_payload)))
        assert "- Color 12: rgb(11, 10, 10)" in document


@pytest.mark.unit
class TestPreview:
    def test_short_document_untouched(self):
        assert preview("short", 500) == "short"

    def test_long_document_truncated(self, snapshot):
        document = compile_prompt(snapshot)
        assert len(document) > 500
        assert preview(document, 500) == document[:500] + "..."
