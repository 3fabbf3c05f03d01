"""
ANALYZE ROUTE - LLM-backed deep analysis

Forwards a prompt to the LLM provider of the caller's choice (using the
caller's own API key) and returns the critique parsed into strengths,
improvements, a rewritten prompt and example prompts.

Provider failures come back with the provider's status code and details so
the client can show what went wrong (bad key, rate limit, ...).
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from prompt_strength.db import get_db
from prompt_strength.schemas import AnalyzeIn, DeepAnalysisResult
from prompt_strength.services.config_service import ConfigService
from prompt_strength.services.deep_analysis import deep_analysis_service
from prompt_strength.services.llm import ProviderRequestError
from prompt_strength.utils import handle_db_errors

router = APIRouter()

@router.post("", response_model=DeepAnalysisResult, response_model_exclude_none=True)
@handle_db_errors
def analyze(payload: AnalyzeIn, db: Session = Depends(get_db)):
    """
    Run a deep analysis of a prompt.

    Input: api_key, prompt, optional model_id / provider_id / analysis_model_id / system_prompt
    Output: DeepAnalysisResult (rewritten_prompt and example_prompts omitted when not found)
    """
    if not payload.api_key:
        raise HTTPException(status_code=400, detail="API key is required")
    if not payload.prompt or not payload.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    model = ConfigService.get_model(db, payload.model_id) if payload.model_id else None

    try:
        return deep_analysis_service.analyze(
            api_key=payload.api_key,
            prompt=payload.prompt,
            model=model,
            provider_id=payload.provider_id,
            analysis_model_id=payload.analysis_model_id,
            system_prompt=payload.system_prompt,
        )
    except ProviderRequestError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": str(e), "details": e.details},
        )
