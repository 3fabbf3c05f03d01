"""
MODELS ROUTE - Target model profile administration

Model profiles carry per-lever weight overrides, best-practice tips and the
provider used for deep analysis.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from prompt_strength.db import get_db
from prompt_strength.schemas import LeverWeightsIn, ModelConfig, ModelUpdate, ToggleIn
from prompt_strength.services.config_service import ConfigService
from prompt_strength.utils import handle_db_errors

router = APIRouter()

@router.get("", response_model=List[ModelConfig])
@handle_db_errors
def list_models(db: Session = Depends(get_db)):
    return ConfigService.get_models(db)

@router.get("/{model_id}", response_model=ModelConfig)
@handle_db_errors
def get_model(model_id: str, db: Session = Depends(get_db)):
    model = ConfigService.get_model(db, model_id)
    if not model:
        raise HTTPException(status_code=404, detail="Model not found")
    return model

@router.put("/{model_id}", response_model=ModelConfig)
@handle_db_errors
def update_model(model_id: str, payload: ModelUpdate, db: Session = Depends(get_db)):
    model = ConfigService.update_model(db, model_id, payload.model_dump(exclude_unset=True))
    if not model:
        raise HTTPException(status_code=404, detail="Model not found")
    return model

@router.post("/{model_id}/toggle", response_model=ModelConfig)
@handle_db_errors
def toggle_model(model_id: str, payload: ToggleIn, db: Session = Depends(get_db)):
    model = ConfigService.toggle_model(db, model_id, payload.enabled)
    if not model:
        raise HTTPException(status_code=404, detail="Model not found")
    return model

@router.put("/{model_id}/lever-weights", response_model=ModelConfig)
@handle_db_errors
def update_lever_weights(model_id: str, payload: LeverWeightsIn, db: Session = Depends(get_db)):
    """Replace the model's lever weight overrides (levers left out fall back to defaults)."""
    model = ConfigService.update_model_lever_weights(db, model_id, payload.lever_weights)
    if not model:
        raise HTTPException(status_code=404, detail="Model not found")
    return model
