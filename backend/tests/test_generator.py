"""
Tests for the generation invoker. The Anthropic client is replaced by a fake.
"""
import asyncio
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from wireframer.errors import GenerationError, StageStatus
from wireframer.generator import WireframeGenerator, build_system_prompt, clean_html_response


class FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        content = [] if self.text is None else [SimpleNamespace(type="text", text=self.text)]
        return SimpleNamespace(content=content)


def _client(**kwargs):
    return SimpleNamespace(messages=FakeMessages(**kwargs))


@pytest.mark.unit
class TestSystemPrompt:
    def test_names_design_system(self):
        assert "the fluent design system" in build_system_prompt("fluent")

    def test_responsive_toggle(self):
        assert "Responsive design" in build_system_prompt()
        assert "Responsive design" not in build_system_prompt(include_responsive=False)

    def test_deterministic(self):
        assert build_system_prompt("microsoft") == build_system_prompt("microsoft")


@pytest.mark.unit
class TestCleanHtmlResponse:
    def test_strips_fences(self):
        assert clean_html_response("```html\n<html></html>\n```") == "<html></html>"

    def test_strips_wrapping_quotes(self):
        assert clean_html_response('"<div>x</div>"') == "<div>x</div>"

    def test_empty(self):
        assert clean_html_response(None) == ""
        assert clean_html_response("") == ""


@pytest.mark.unit
class TestGenerate:
    """One call per request; transport failures become fatal results."""

    def test_single_call_with_settings(self, settings):
        client = _client(text="```html\n<html><body>ok</body></html>\n```")
        result = asyncio.run(WireframeGenerator(client=client, settings=settings).generate("sys", "doc"))
        assert result.status is StageStatus.OK
        assert result.value == "<html><body>ok</body></html>"
        assert len(client.messages.calls) == 1
        call = client.messages.calls[0]
        assert call["model"] == settings.default_model
        assert call["max_tokens"] == settings.generation_max_tokens
        assert call["system"] == "sys"
        assert call["messages"] == [{"role": "user", "content": "doc"}]

    def test_empty_response_is_ok(self, settings):
        client = _client(text=None)
        result = asyncio.run(WireframeGenerator(client=client, settings=settings).generate("sys", "doc"))
        assert result.status is StageStatus.OK
        assert result.value == ""

    def test_api_error_is_fatal(self, settings):
        error = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))
        client = _client(error=error)
        result = asyncio.run(WireframeGenerator(client=client, settings=settings).generate("sys", "doc"))
        assert result.is_fatal
        assert isinstance(result.error, GenerationError)
        assert result.error.cause is error

    def test_timeout_is_fatal(self, settings):
        client = _client(error=asyncio.TimeoutError())
        result = asyncio.run(WireframeGenerator(client=client, settings=settings).generate("sys", "doc"))
        assert result.is_fatal
        assert "timed out" in result.error.message
        with pytest.raises(GenerationError):
            result.unwrap()
