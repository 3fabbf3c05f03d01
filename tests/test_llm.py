"""
Unit tests for the provider request gateway.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock
import httpx
import anthropic
import openai
import pytest
from prompt_strength.services import llm
from prompt_strength.services.llm import (
    PROVIDERS,
    ProviderRequestError,
    build_user_prompt,
    default_system_prompt,
    send_analysis_request,
)

def _request(url="https://example.test"):
    return httpx.Request("POST", url)

def _chat_completion(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])

@pytest.fixture
def openai_client(monkeypatch):
    client_cls = MagicMock()
    monkeypatch.setattr(llm, "OpenAI", client_cls)
    return client_cls

@pytest.fixture
def anthropic_client(monkeypatch):
    client_cls = MagicMock()
    monkeypatch.setattr(llm, "Anthropic", client_cls)
    return client_cls

class TestPrompts:
    """Test analysis prompt construction."""

    def test_user_prompt_embeds_prompt_and_model(self):
        text = build_user_prompt("Write a poem", "Claude")
        assert "Analyze this prompt intended for Claude:" in text
        assert "<prompt>\nWrite a poem\n</prompt>" in text
        assert '**[Title]**: "[Complete prompt text all on one line]"' in text

    def test_default_system_prompt(self):
        assert default_system_prompt("GPT-4").endswith("improve them for GPT-4.")
        assert default_system_prompt(None).endswith("improve them for AI assistants.")

class TestOpenAICompatible:
    """Test providers reached through the openai SDK."""

    def test_mistral_uses_base_url_and_default_model(self, openai_client):
        openai_client.return_value.chat.completions.create.return_value = _chat_completion("analysis text")

        out = send_analysis_request("key", "Write a poem", "Mistral", None, "mistral")

        assert out == "analysis text"
        assert openai_client.call_args.kwargs["base_url"] == PROVIDERS["mistral"].endpoint
        create_kwargs = openai_client.return_value.chat.completions.create.call_args.kwargs
        assert create_kwargs["model"] == "mistral-small-latest"
        assert create_kwargs["messages"][0]["role"] == "system"

    def test_analysis_model_override(self, openai_client):
        openai_client.return_value.chat.completions.create.return_value = _chat_completion("ok")
        send_analysis_request("key", "p", "GPT-4", "sys", "openai", "gpt-4o")
        create_kwargs = openai_client.return_value.chat.completions.create.call_args.kwargs
        assert create_kwargs["model"] == "gpt-4o"
        assert create_kwargs["messages"][0]["content"] == "sys"

    def test_empty_content(self, openai_client):
        openai_client.return_value.chat.completions.create.return_value = _chat_completion(None)
        assert send_analysis_request("key", "p", None, None, "deepseek") == ""

    def test_status_error_keeps_status(self, openai_client):
        response = httpx.Response(401, text="invalid api key", request=_request())
        openai_client.return_value.chat.completions.create.side_effect = openai.APIStatusError(
            "unauthorized", response=response, body=None
        )
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("bad", "p", None, None, "xai")
        assert exc.value.status_code == 401
        assert exc.value.details == "invalid api key"
        assert exc.value.provider == "xai"

    def test_connection_error_is_bad_gateway(self, openai_client):
        openai_client.return_value.chat.completions.create.side_effect = openai.APIConnectionError(request=_request())
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("key", "p", None, None, "meta")
        assert exc.value.status_code == 502

class TestAnthropic:
    """Test the Anthropic messages sender."""

    def test_default_provider(self, anthropic_client):
        anthropic_client.return_value.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(text="claude says hi")]
        )
        out = send_analysis_request("key", "Write a poem", "Claude", "system text", None)
        assert out == "claude says hi"
        create_kwargs = anthropic_client.return_value.messages.create.call_args.kwargs
        assert create_kwargs["system"] == "system text"
        assert create_kwargs["model"] == PROVIDERS["anthropic"].default_model
        assert create_kwargs["max_tokens"] == 1500

    def test_rate_limited(self, anthropic_client):
        response = httpx.Response(429, text="slow down", request=_request())
        anthropic_client.return_value.messages.create.side_effect = anthropic.APIStatusError(
            "rate limited", response=response, body=None
        )
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("key", "p", None, None, "anthropic")
        assert exc.value.status_code == 429

class TestGoogle:
    """Test the Gemini REST sender."""

    def test_model_in_url_and_key_in_params(self, monkeypatch):
        calls = {}

        def fake_post(url, params=None, json=None, timeout=None):
            calls.update(url=url, params=params, json=json)
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": "gemini reply"}]}}]},
                request=_request(url),
            )

        monkeypatch.setattr(llm.httpx, "post", fake_post)
        out = send_analysis_request("gkey", "p", "Gemini", "sys", "google")

        assert out == "gemini reply"
        assert calls["url"].endswith("gemini-2.5-flash:generateContent")
        assert calls["params"] == {"key": "gkey"}
        assert calls["json"]["systemInstruction"]["parts"][0]["text"] == "sys"

    def test_unexpected_shape_is_empty(self, monkeypatch):
        monkeypatch.setattr(llm.httpx, "post", lambda url, **kw: httpx.Response(200, json={}, request=_request(url)))
        assert send_analysis_request("k", "p", None, None, "google") == ""

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(
            llm.httpx, "post",
            lambda url, **kw: httpx.Response(403, text="forbidden", request=_request(url)),
        )
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("k", "p", None, None, "google")
        assert exc.value.status_code == 403
        assert exc.value.details == "forbidden"

    def test_network_error(self, monkeypatch):
        def boom(url, **kw):
            raise httpx.ConnectError("unreachable", request=_request(url))

        monkeypatch.setattr(llm.httpx, "post", boom)
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("k", "p", None, None, "google")
        assert exc.value.status_code == 502

class TestProviderTable:
    """Test provider dispatch."""

    def test_unknown_provider(self):
        with pytest.raises(ProviderRequestError) as exc:
            send_analysis_request("k", "p", None, None, "acme")
        assert exc.value.status_code == 400
        assert "Unsupported provider: acme" in exc.value.details

    def test_every_provider_has_a_sender(self):
        for spec in PROVIDERS.values():
            assert spec.kind in llm._SENDERS
