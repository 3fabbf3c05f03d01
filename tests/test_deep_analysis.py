"""
Unit tests for the deep analysis service.
"""

import pytest
from prompt_strength.services.deep_analysis import DeepAnalysisService
from prompt_strength.services.llm import ProviderRequestError, default_system_prompt

REPLY = "Strengths\n- Clear request with a concrete goal\n"

class FakeSender:
    def __init__(self, reply=REPLY, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def __call__(self, api_key, prompt, model_name, system_prompt, provider_id, analysis_model_id):
        self.calls.append({
            "api_key": api_key, "prompt": prompt, "model_name": model_name,
            "system_prompt": system_prompt, "provider_id": provider_id,
            "analysis_model_id": analysis_model_id,
        })
        if self.error:
            raise self.error
        return self.reply

class FakeCache:
    def __init__(self):
        self.store = {}

    def get_cached_analysis(self, key_parts):
        return self.store.get(key_parts)

    def cache_analysis(self, key_parts, raw_text):
        self.store[key_parts] = raw_text
        return True

class TestResolution:
    """Test provider/model/system prompt resolution."""

    def test_no_model_defaults_to_anthropic(self):
        sender = FakeSender()
        result = DeepAnalysisService(sender=sender).analyze("key", "Write a poem")
        call = sender.calls[0]
        assert call["provider_id"] == "anthropic"
        assert call["model_name"] is None
        assert call["analysis_model_id"] is None
        assert call["system_prompt"] == default_system_prompt(None)
        assert result.strengths == ["Clear request with a concrete goal"]
        assert result.analysis == REPLY

    def test_model_profile_used(self, default_models):
        gpt4 = next(m for m in default_models if m.id == "gpt4")
        sender = FakeSender()
        DeepAnalysisService(sender=sender).analyze("key", "Write a poem", model=gpt4)
        call = sender.calls[0]
        assert call["provider_id"] == "openai"
        assert call["model_name"] == "GPT-4"
        assert call["system_prompt"] == default_system_prompt("GPT-4")

    def test_profile_prompt_and_model(self, claude):
        profile = claude.model_copy(update={"analysis_model_id": "claude-x", "deep_analysis_prompt": "Be blunt."})
        sender = FakeSender()
        DeepAnalysisService(sender=sender).analyze("key", "p", model=profile)
        assert sender.calls[0]["analysis_model_id"] == "claude-x"
        assert sender.calls[0]["system_prompt"] == "Be blunt."

    def test_explicit_arguments_win(self, claude):
        sender = FakeSender()
        DeepAnalysisService(sender=sender).analyze(
            "key", "p", model=claude, provider_id="mistral", analysis_model_id="mistral-large", system_prompt="custom",
        )
        call = sender.calls[0]
        assert (call["provider_id"], call["analysis_model_id"], call["system_prompt"]) == (
            "mistral", "mistral-large", "custom",
        )

class TestCaching:
    """Test reuse of raw replies."""

    def test_second_call_hits_cache(self):
        sender, cache = FakeSender(), FakeCache()
        service = DeepAnalysisService(cache=cache, sender=sender)
        first = service.analyze("key", "Write a poem")
        second = service.analyze("key", "Write a poem")
        assert len(sender.calls) == 1
        assert first == second

    def test_other_api_key_misses(self):
        sender, cache = FakeSender(), FakeCache()
        service = DeepAnalysisService(cache=cache, sender=sender)
        service.analyze("key", "Write a poem")
        service.analyze("other-key", "Write a poem")
        assert [c["api_key"] for c in sender.calls] == ["key", "other-key"]

    def test_prompt_boundaries_kept(self):
        sender, cache = FakeSender(), FakeCache()
        service = DeepAnalysisService(cache=cache, sender=sender)
        service.analyze("key", "P2", system_prompt="SYS:P1")
        service.analyze("key", "P1:P2", system_prompt="SYS")
        assert len(sender.calls) == 2

    def test_different_prompt_misses(self):
        sender, cache = FakeSender(), FakeCache()
        service = DeepAnalysisService(cache=cache, sender=sender)
        service.analyze("key", "one")
        service.analyze("key", "two")
        assert len(sender.calls) == 2

    def test_empty_reply_not_cached(self):
        cache = FakeCache()
        result = DeepAnalysisService(cache=cache, sender=FakeSender(reply="")).analyze("key", "p")
        assert result.analysis == ""
        assert cache.store == {}

    def test_errors_propagate_and_are_not_cached(self):
        cache = FakeCache()
        service = DeepAnalysisService(cache=cache, sender=FakeSender(error=ProviderRequestError(401, "bad key", "anthropic")))
        with pytest.raises(ProviderRequestError):
            service.analyze("key", "p")
        assert cache.store == {}
