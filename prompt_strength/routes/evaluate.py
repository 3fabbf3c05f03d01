"""
EVALUATE ROUTE - Heuristic prompt scoring

This is the main endpoint: send a prompt (and optionally the target model id)
and get back the overall 0-100 score, strength level, per-lever results,
ranked suggestions and model-specific tips.

Scoring is rule-based and instant, so clients can call it as the user types
(debouncing on their side).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from prompt_strength.config import DEFAULT_MODEL_ID
from prompt_strength.db import get_db
from prompt_strength.schemas import EvaluateIn, EvaluationResult
from prompt_strength.services.config_service import ConfigService
from prompt_strength.utils import handle_db_errors

router = APIRouter()

@router.post("", response_model=EvaluationResult)
@handle_db_errors
def evaluate(payload: EvaluateIn, db: Session = Depends(get_db)):
    """
    Score a prompt against the current rubric.

    Input: prompt text, optional model_id (defaults to DEFAULT_MODEL_ID)
    Output: EvaluationResult

    Unknown model ids are scored with default lever weights and no tips.
    """
    engine = ConfigService.build_engine(db)
    return engine.evaluate(payload.prompt, payload.model_id or DEFAULT_MODEL_ID)
