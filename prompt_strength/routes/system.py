"""
SYSTEM ROUTE - Rubric export and import

Export returns the full rubric (levers + model profiles) as one document;
import accepts the same shape. Imported levers replace the current set,
imported models are upserted by id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from prompt_strength.db import get_db
from prompt_strength.schemas import ConfigBundle
from prompt_strength.services.config_service import ConfigService
from prompt_strength.utils import handle_db_errors

router = APIRouter()

@router.get("/export", response_model=ConfigBundle)
@handle_db_errors
def export_config(db: Session = Depends(get_db)):
    return ConfigService.export_config(db)

@router.post("/import")
@handle_db_errors
def import_config(payload: ConfigBundle, db: Session = Depends(get_db)):
    ConfigService.import_config(db, levers=payload.levers, model_configs=payload.models)
    return {"success": True, "message": "Configuration imported successfully"}
