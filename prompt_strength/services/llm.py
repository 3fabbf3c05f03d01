"""
LLM SERVICE - Provider request gateway for deep analysis

This service sends a prompt to a third-party LLM for critique and returns the
raw reply text. It handles:
1. A provider table keyed by provider id (API family, endpoint, default model)
2. One sender per API family: OpenAI-compatible chat completions (openai SDK),
   Anthropic messages (anthropic SDK) and Google Gemini (REST via httpx)
3. The shared analysis prompt asking for strengths, improvements, a rewrite
   and example prompts in a parseable layout

Failures are raised as ProviderRequestError carrying the upstream status code;
nothing here retries or parses the reply.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import httpx
import anthropic
import openai
from anthropic import Anthropic
from openai import OpenAI
from prompt_strength.config import ANALYSIS_MAX_TOKENS, ANALYSIS_TIMEOUT
from prompt_strength.utils import get_logger

logger = get_logger(__name__)

OPENAI_COMPATIBLE = "openai_compatible"
ANTHROPIC = "anthropic"
GOOGLE = "google"


class ProviderRequestError(Exception):
    """An analysis request failed upstream (bad provider, auth, rate limit, network)."""

    def __init__(self, status_code: int, details: str, provider: Optional[str] = None):
        self.status_code = status_code
        self.details = details
        self.provider = provider
        super().__init__(f"{provider or 'provider'} API error: {status_code}")


@dataclass(frozen=True)
class ProviderSpec:
    provider_id: str
    kind: str
    endpoint: str
    default_model: str


PROVIDERS: Dict[str, ProviderSpec] = {
    "anthropic": ProviderSpec("anthropic", ANTHROPIC, "https://api.anthropic.com", "claude-haiku-4-5-20251001"),
    "openai": ProviderSpec("openai", OPENAI_COMPATIBLE, "https://api.openai.com/v1", "gpt-4.1-mini"),
    "google": ProviderSpec("google", GOOGLE, "https://generativelanguage.googleapis.com/v1beta/models/", "gemini-2.5-flash"),
    "mistral": ProviderSpec("mistral", OPENAI_COMPATIBLE, "https://api.mistral.ai/v1", "mistral-small-latest"),
    "deepseek": ProviderSpec("deepseek", OPENAI_COMPATIBLE, "https://api.deepseek.com", "deepseek-chat"),
    "xai": ProviderSpec("xai", OPENAI_COMPATIBLE, "https://api.x.ai/v1", "grok-3-mini"),
    # Meta Llama is served through Together AI
    "meta": ProviderSpec("meta", OPENAI_COMPATIBLE, "https://api.together.xyz/v1", "meta-llama/Llama-4-Maverick-17B-128E-Instruct"),
}


def default_system_prompt(model_name: Optional[str]) -> str:
    return (
        "You are an expert prompt engineer. Analyze prompts and provide actionable "
        f"feedback to improve them for {model_name or 'AI assistants'}."
    )


def build_user_prompt(prompt: str, model_name: str) -> str:
    """Analysis request shared by every provider; the reply layout matches analysis_parser."""
    return f"""Analyze this prompt intended for {model_name}:

<prompt>
{prompt}
</prompt>

<evaluation-criteria>
Our prompt judge evaluates prompts based on these criteria. Your improved prompts MUST score well by including these patterns:

1. **Context Inclusion (20%)** - Include phrases like: "I'm working on", "I'm building", "my project", "my application", "the situation is", "currently", "we have"

2. **Task Clarity (20%)** - Use clear action verbs: "Create", "Write", "Generate", "Explain", "Analyze", "Implement", "Build", "Design", "Help me"

3. **Persona Specification (15%)** - Assign a role: "Act as", "You are a", "As a [role]", "senior", "expert in", "experienced"

4. **Prompt Length (15%)** - Aim for 100-500 characters with substance

5. **Format Specification (10%)** - Specify output: "as a list", "step by step", "in JSON", "bullet points", "in markdown", "structured as"

6. **Constraints (10%)** - Set boundaries: "must", "should", "avoid", "don't", "limit to", "make sure", "ensure", "only"

7. **Examples (10%)** - Include examples: "for example", "such as", "like this", "e.g."
</evaluation-criteria>

<placeholder-rules>
Use [PLACEHOLDER] markers ONLY for content the user needs to customize:
- [YOUR TOPIC] - the subject they're working on
- [YOUR TECHNOLOGY/LANGUAGE] - specific tech stack
- [YOUR REQUIREMENTS] - specific requirements or goals
- [YOUR CONSTRAINTS] - specific limitations
- [NUMBER] - specific quantities

DO NOT put brackets around:
- Action verbs (write, create, explain)
- Structural phrases (act as, step by step)
- Common patterns the judge looks for
</placeholder-rules>

Provide a structured analysis with:

1. **Strengths** (2-3 bullet points of what the prompt already does well)

2. **Areas to Improve** (2-3 bullet points - reference which evaluation criteria above are missing)

3. **Improved Version** (rewrite their SPECIFIC prompt, keeping their topic/intent but adding the missing criteria patterns. This should score highly on our judge.)

4. **Example Prompts** (provide exactly 2 complete template prompts related to their topic)

CRITICAL FORMAT FOR EXAMPLES - follow this EXACTLY:
- Each example must be a complete, standalone prompt (not a list of features)
- Write the full prompt text on a single line after the title
- Do NOT use sub-bullets or numbered lists inside examples
- Format: **[Title]**: "[Complete prompt text all on one line]"

Example of CORRECT format:
- **[API Integration]**: "Act as a senior backend developer. I'm building a Node.js application and need to implement a REST API endpoint for user authentication. Please create the code step by step, including input validation, error handling, and JWT token generation. The response should be in JSON format."

Example of WRONG format (do not do this):
- **[API Integration]**: "Create an API including:
  - Authentication
  - Validation"

Keep your response concise and actionable."""


def _send_openai_compatible(spec: ProviderSpec, api_key: str, system_prompt: str, user_prompt: str, model: str) -> str:
    client = OpenAI(api_key=api_key, base_url=spec.endpoint, timeout=ANALYSIS_TIMEOUT, max_retries=0)
    try:
        out = client.chat.completions.create(
            model=model,
            max_tokens=ANALYSIS_MAX_TOKENS,
            messages=[{"role": "system", "content": system_prompt},
                      {"role": "user", "content": user_prompt}],
        )
    except openai.APIStatusError as e:
        raise ProviderRequestError(e.status_code, e.response.text, spec.provider_id) from e
    except openai.APIConnectionError as e:
        raise ProviderRequestError(502, str(e), spec.provider_id) from e

    if not out.choices:
        return ""
    return out.choices[0].message.content or ""


def _send_anthropic(spec: ProviderSpec, api_key: str, system_prompt: str, user_prompt: str, model: str) -> str:
    client = Anthropic(api_key=api_key, timeout=ANALYSIS_TIMEOUT, max_retries=0)
    try:
        out = client.messages.create(
            model=model,
            max_tokens=ANALYSIS_MAX_TOKENS,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
    except anthropic.APIStatusError as e:
        raise ProviderRequestError(e.status_code, e.response.text, spec.provider_id) from e
    except anthropic.APIConnectionError as e:
        raise ProviderRequestError(502, str(e), spec.provider_id) from e

    if not out.content:
        return ""
    return getattr(out.content[0], "text", "") or ""


def _send_google(spec: ProviderSpec, api_key: str, system_prompt: str, user_prompt: str, model: str) -> str:
    # The model id is part of the URL for Gemini, and the key travels as a query param
    url = f"{spec.endpoint}{model}:generateContent"
    body = {
        "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
        "generationConfig": {"maxOutputTokens": ANALYSIS_MAX_TOKENS, "temperature": 0.7},
    }
    try:
        response = httpx.post(url, params={"key": api_key}, json=body, timeout=ANALYSIS_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise ProviderRequestError(e.response.status_code, e.response.text, spec.provider_id) from e
    except httpx.HTTPError as e:
        raise ProviderRequestError(502, str(e), spec.provider_id) from e
    except ValueError as e:
        raise ProviderRequestError(502, f"invalid JSON from provider: {e}", spec.provider_id) from e

    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


_SENDERS: Dict[str, Callable[[ProviderSpec, str, str, str, str], str]] = {
    OPENAI_COMPATIBLE: _send_openai_compatible,
    ANTHROPIC: _send_anthropic,
    GOOGLE: _send_google,
}


def send_analysis_request(
    api_key: str,
    prompt: str,
    model_name: Optional[str],
    system_prompt: Optional[str],
    provider_id: Optional[str],
    analysis_model_id: Optional[str] = None,
) -> str:
    """
    Ask a provider's LLM to critique a prompt and return its raw reply.

    Input: caller's API key, prompt text, target model display name, optional
           system prompt, provider id (defaults to anthropic), optional
           provider-specific model id
    Output: raw reply text ("" if the provider returned no content)

    Raises ProviderRequestError on unknown providers or upstream failures.
    """
    provider = provider_id or "anthropic"
    spec = PROVIDERS.get(provider)
    if spec is None:
        raise ProviderRequestError(400, f"Unsupported provider: {provider}", provider)

    system = system_prompt or default_system_prompt(model_name)
    user = build_user_prompt(prompt, model_name or "an AI assistant")
    model = analysis_model_id or spec.default_model

    logger.info(f"[deep_analysis] provider={provider} model={model}")
    try:
        return _SENDERS[spec.kind](spec, api_key, system, user, model)
    except ProviderRequestError as e:
        logger.warning(f"[deep_analysis] {provider} request failed with {e.status_code}")
        raise
