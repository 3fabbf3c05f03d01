"""
DEEP ANALYSIS SERVICE - LLM-backed critique of a prompt

Glue between the provider gateway and the response parser:
1. Resolve provider, analysis model, display name and system prompt from the
   request and the target model profile
2. Reuse a cached reply when one exists, otherwise call the provider
3. Parse the reply into a DeepAnalysisResult

Provider failures propagate as ProviderRequestError; they are never cached.
"""

from typing import Callable, Optional
from prompt_strength.schemas import DeepAnalysisResult, ModelConfig
from prompt_strength.services.analysis_parser import parse_analysis_response
from prompt_strength.services.cache_service import CacheService, cache_service
from prompt_strength.services.llm import default_system_prompt, send_analysis_request
from prompt_strength.utils import Constants, get_logger

logger = get_logger(__name__)

class DeepAnalysisService:
    """Service class for deep analysis requests."""

    def __init__(self, cache: Optional[CacheService] = None, sender: Callable[..., str] = send_analysis_request):
        self.cache = cache
        self.sender = sender

    def analyze(
        self,
        api_key: str,
        prompt: str,
        model: Optional[ModelConfig] = None,
        provider_id: Optional[str] = None,
        analysis_model_id: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> DeepAnalysisResult:
        """
        Run a deep analysis for one prompt.

        Explicit arguments win over the model profile; without either the
        request goes to Anthropic with the generic system prompt.
        """
        provider = provider_id or (model.provider_id if model else None) or Constants.DEFAULT_PROVIDER_ID
        analysis_model = analysis_model_id or (model.analysis_model_id if model else None)
        model_name = model.name if model else None
        system = system_prompt or (model.deep_analysis_prompt if model else None) or default_system_prompt(model_name)

        # Replies are only reused for the same caller key; the whole key is hashed by the cache
        key_parts = (api_key, provider, analysis_model or "", model_name or "", system, prompt)
        raw = self.cache.get_cached_analysis(key_parts) if self.cache else None
        if raw is None:
            raw = self.sender(api_key, prompt, model_name, system, provider, analysis_model)
            if self.cache and raw:
                self.cache.cache_analysis(key_parts, raw)
        else:
            logger.debug("Deep analysis cache hit")

        return parse_analysis_response(raw)

# Default service used by the API
deep_analysis_service = DeepAnalysisService(cache=cache_service)
