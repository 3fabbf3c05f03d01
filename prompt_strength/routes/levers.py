"""
LEVERS ROUTE - Rubric lever administration

List, edit, enable/disable and reorder the levers used for scoring.
Changes take effect on the next evaluation, which snapshots the rubric anew.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from prompt_strength.db import get_db
from prompt_strength.schemas import Lever, LeverUpdate, ReorderIn, ToggleIn
from prompt_strength.services.config_service import ConfigService
from prompt_strength.utils import handle_db_errors

router = APIRouter()

@router.get("", response_model=List[Lever])
@handle_db_errors
def list_levers(db: Session = Depends(get_db)):
    return ConfigService.get_levers(db)

# Declared before /{lever_id} routes so "reorder" is never taken for an id
@router.post("/reorder", response_model=List[Lever])
@handle_db_errors
def reorder_levers(payload: ReorderIn, db: Session = Depends(get_db)):
    """Listed levers get priorities 1..n in order; the rest follow unchanged."""
    return ConfigService.reorder_levers(db, payload.ordered_ids)

@router.put("/{lever_id}", response_model=Lever)
@handle_db_errors
def update_lever(lever_id: str, payload: LeverUpdate, db: Session = Depends(get_db)):
    lever = ConfigService.update_lever(db, lever_id, payload.model_dump(exclude_unset=True))
    if not lever:
        raise HTTPException(status_code=404, detail="Lever not found")
    return lever

@router.post("/{lever_id}/toggle", response_model=Lever)
@handle_db_errors
def toggle_lever(lever_id: str, payload: ToggleIn, db: Session = Depends(get_db)):
    lever = ConfigService.toggle_lever(db, lever_id, payload.enabled)
    if not lever:
        raise HTTPException(status_code=404, detail="Lever not found")
    return lever
