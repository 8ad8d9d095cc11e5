"""
Test configuration and fixtures.

Nothing here launches a browser or calls the generation service: the
renderer and generator are replaced by fakes that record how they were used.
"""
import pytest

from wireframer.config import Settings
from wireframer.errors import GenerationError, RenderingError, StageResult
from wireframer.sampler import parse_payload
from wireframer.snapshot import normalize


def _style(**overrides):
    style = {
        "display": "block",
        "padding": "0px",
        "margin": "0px",
        "gap": "normal",
        "background_color": "rgba(0, 0, 0, 0)",
        "color": "rgb(33, 33, 33)",
        "font_size": "16px",
        "font_weight": "400",
        "font_family": "Inter, sans-serif",
        "line_height": "24px",
    }
    style.update(overrides)
    return style


def _section(index, heading, display="block", buttons=(), **extra):
    section = {
        "index": index,
        "heading": heading,
        "heading_tag": "h2",
        "display": display,
        "style": _style(display=display, background_color="rgb(245, 247, 250)", padding="64px 24px"),
        "button_count": len(buttons),
        "button_texts": list(buttons),
        "image_count": 0,
        "image_alts": [],
        "link_count": 0,
        "link_texts": [],
        "form_element_count": 0,
        "paragraph_count": 1,
        "paragraph_samples": [f"{heading} body copy."],
        "list_count": 0,
        "bounding_box": {"x": 0, "y": 100 * index, "width": 1200, "height": 480},
        "class_name": "section",
        "element_id": f"s{index}",
    }
    section.update(extra)
    return section


def _region(count, samples=()):
    return {"count": count, "samples": list(samples)}


@pytest.fixture
def sample_payload():
    """What SAMPLER_SCRIPT returns for a small marketing page."""
    return {
        "title": "Acme Cloud",
        "url": "https://acme.test/",
        "colors": [
            "rgb(255, 255, 255)",
            "rgb(33, 33, 33)",
            "rgb(0, 102, 204)",
            "rgb(245, 247, 250)",
            "rgb(0, 102, 204)",
        ],
        "typography": {
            "fonts": ["Inter, sans-serif", "Georgia, serif"],
            "sizes": ["48px", "32px", "16px"],
            "weights": ["700", "600", "400"],
        },
        "spacing": {
            "paddings": ["64px 24px", "0px", "16px"],
            "margins": ["0px 0px 16px", "0px"],
            "gaps": ["24px", "normal"],
        },
        "hierarchy": {
            "h1": {"count": 1, "style": _style(font_size="56px", font_weight="800", color="rgb(0, 0, 0)")},
            "h2": {"count": 3, "style": _style(font_size="36px", font_weight="700")},
            "h3": {"count": 0, "style": None},
            "body": _style(background_color="rgb(255, 255, 255)"),
        },
        "sections": [
            _section(1, "Build faster", display="flex", buttons=["Start free"]),
            _section(2, "Features", display="grid", buttons=["Learn more"]),
            _section(3, "Pricing", buttons=["Buy now"]),
        ],
        "navigation_links": [
            {"text": "Products", "href": "/products", "bounding_box": {"x": 10, "y": 5, "width": 60, "height": 20}},
            {"text": "Pricing", "href": "/pricing", "bounding_box": {"x": 90, "y": 5, "width": 50, "height": 20}},
            {"text": "Docs", "href": "/docs", "bounding_box": {"x": 160, "y": 5, "width": 40, "height": 20}},
        ],
        "regions": {
            "header": _region(1, ["Products Pricing Docs"]),
            "main": _region(1),
            "sidebar": _region(0),
            "footer": _region(1, ["© 2024 Acme"]),
            "navigation": _region(1),
            "buttons": _region(3, ["Start free", "Learn more", "Buy now"]),
            "forms": _region(0),
            "images": _region(0),
            "links": _region(5),
        },
        "content": {
            "headings": _region(4),
            "paragraphs": _region(3),
        },
        "displays": {"body": "block", "header": "flex", "main": "block"},
    }


@pytest.fixture
def snapshot(sample_payload):
    return normalize(parse_payload(sample_payload))


@pytest.fixture
def settings():
    return Settings(anthropic_api_key="test-key", environment="production", _env_file=None)


class FakeSession:
    def __init__(self, payload, evaluate_error=None):
        self.payload = payload
        self.evaluate_error = evaluate_error
        self.close_calls = 0

    async def evaluate(self, script, arg=None):
        if self.evaluate_error:
            raise self.evaluate_error
        return self.payload

    async def close(self):
        self.close_calls += 1


class FakeRenderer:
    def __init__(self, payload, evaluate_error=None, open_error=None):
        self.session = FakeSession(payload, evaluate_error)
        self.open_error = open_error
        self.opened = []

    async def open(self, url):
        self.opened.append(url)
        if self.open_error:
            raise self.open_error
        return self.session


class FakeGenerator:
    def __init__(self, html="<html><head></head><body></body></html>", error=None):
        self.html = html
        self.error = error
        self.calls = []

    async def generate(self, system, document):
        self.calls.append((system, document))
        if self.error:
            return StageResult.fatal(self.error)
        return StageResult.ok(self.html)


@pytest.fixture
def fake_renderer(sample_payload):
    return FakeRenderer(sample_payload)


@pytest.fixture
def fake_generator():
    return FakeGenerator(
        html=(
            "<!DOCTYPE html><html><head><style>body { color: #ccc; font-family: Arial, sans-serif; }"
            "</style></head><body><nav><a href='/products'>Products</a></nav>"
            "<main><section><h2>Features</h2><img src='feature.png' width='120' height='80'></section>"
            "</main></body></html>"
        )
    )


@pytest.fixture
def rendering_error():
    return RenderingError("Navigation timeout of 30000 ms exceeded")


@pytest.fixture
def generation_error():
    return GenerationError("Generation service error: connection reset")


@pytest.fixture
def make_renderer(sample_payload):
    def factory(payload=None, **kwargs):
        return FakeRenderer(sample_payload if payload is None else payload, **kwargs)
    return factory


@pytest.fixture
def make_generator():
    return FakeGenerator
