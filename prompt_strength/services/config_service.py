"""
CONFIG SERVICE - Rubric store backed by the database

This service is the configuration provider for the evaluation engine:
1. Reads levers (in rubric order) and model profiles as immutable snapshots
2. Applies admin edits: update, toggle, reorder, lever weight overrides
3. Exports/imports the whole rubric
4. Seeds the default rubric into an empty database

Lookups of unknown ids return None; routes turn that into 404.
"""

from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from prompt_strength import models
from prompt_strength.schemas import Lever, ModelConfig
from prompt_strength.services.defaults import DEFAULT_LEVERS, DEFAULT_MODELS
from prompt_strength.services.engine import EvaluationEngine
from prompt_strength.utils import safe_db_commit, get_logger

logger = get_logger(__name__)

_LEVER_FIELDS = ("name", "description", "weight", "enabled", "priority", "thresholds", "patterns", "feedback")
_MODEL_FIELDS = ("name", "provider", "provider_id", "description", "enabled", "lever_weights",
                 "best_practices", "preferred_structure", "analysis_model_id", "deep_analysis_prompt")


def _lever_from_record(row: models.LeverRecord) -> Lever:
    data = {field: getattr(row, field) for field in _LEVER_FIELDS}
    return Lever.model_validate({"id": row.id, **data})


def _model_from_record(row: models.ModelConfigRecord) -> ModelConfig:
    data = {field: getattr(row, field) for field in _MODEL_FIELDS}
    return ModelConfig.model_validate({"id": row.id, **data})


def _apply(row, snapshot, fields) -> None:
    dumped = snapshot.model_dump()
    for field in fields:
        setattr(row, field, dumped[field])


class ConfigService:
    """Service class for rubric configuration."""

    # --- Levers -------------------------------------------------------------

    @staticmethod
    def get_levers(db: Session) -> List[Lever]:
        rows = db.query(models.LeverRecord).order_by(models.LeverRecord.position).all()
        return [_lever_from_record(row) for row in rows]

    @staticmethod
    def get_lever(db: Session, lever_id: str) -> Optional[Lever]:
        row = db.get(models.LeverRecord, lever_id)
        return _lever_from_record(row) if row else None

    @staticmethod
    def update_lever(db: Session, lever_id: str, updates: Dict[str, Any]) -> Optional[Lever]:
        """
        Merge updates into a lever and persist the result.

        The merged lever is validated as a whole before anything is written.
        """
        row = db.get(models.LeverRecord, lever_id)
        if not row:
            return None

        current = _lever_from_record(row).model_dump()
        merged = Lever.model_validate({**current, **updates, "id": lever_id})
        _apply(row, merged, _LEVER_FIELDS)
        safe_db_commit(db, row)
        logger.info(f"Lever updated: {lever_id}")
        return merged

    @staticmethod
    def toggle_lever(db: Session, lever_id: str, enabled: bool) -> Optional[Lever]:
        return ConfigService.update_lever(db, lever_id, {"enabled": enabled})

    @staticmethod
    def reorder_levers(db: Session, ordered_ids: Iterable[str]) -> List[Lever]:
        """
        Put the listed levers first, in the given order, with priorities 1..n.

        Unknown ids are ignored; levers not listed keep their priority and
        follow in their previous order.
        """
        rows = db.query(models.LeverRecord).order_by(models.LeverRecord.position).all()
        by_id = {row.id: row for row in rows}

        reordered = []
        for lever_id in ordered_ids:
            row = by_id.pop(lever_id, None)
            if row is not None:
                row.priority = len(reordered) + 1
                reordered.append(row)
        reordered.extend(row for row in rows if row.id in by_id)

        for position, row in enumerate(reordered):
            row.position = position
        safe_db_commit(db)
        logger.info(f"Levers reordered: {[row.id for row in reordered]}")
        return [_lever_from_record(row) for row in reordered]

    @staticmethod
    def replace_levers(db: Session, levers: Iterable[Lever]) -> List[Lever]:
        """Swap the whole lever set for a new one (bulk replace)."""
        levers = list(levers)
        existing = {row.id: row for row in db.query(models.LeverRecord).all()}
        incoming = {lever.id for lever in levers}

        for position, lever in enumerate(levers):
            row = existing.get(lever.id) or models.LeverRecord(id=lever.id)
            existing[lever.id] = row
            row.position = position
            _apply(row, lever, _LEVER_FIELDS)
            db.add(row)
        for lever_id, row in existing.items():
            if lever_id not in incoming:
                db.delete(row)
        safe_db_commit(db)
        return levers

    # --- Models -------------------------------------------------------------

    @staticmethod
    def get_models(db: Session) -> List[ModelConfig]:
        rows = db.query(models.ModelConfigRecord).order_by(models.ModelConfigRecord.position).all()
        return [_model_from_record(row) for row in rows]

    @staticmethod
    def get_model(db: Session, model_id: str) -> Optional[ModelConfig]:
        row = db.get(models.ModelConfigRecord, model_id)
        return _model_from_record(row) if row else None

    @staticmethod
    def update_model(db: Session, model_id: str, updates: Dict[str, Any]) -> Optional[ModelConfig]:
        row = db.get(models.ModelConfigRecord, model_id)
        if not row:
            return None

        current = _model_from_record(row).model_dump()
        merged = ModelConfig.model_validate({**current, **updates, "id": model_id})
        _apply(row, merged, _MODEL_FIELDS)
        safe_db_commit(db, row)
        logger.info(f"Model updated: {model_id}")
        return merged

    @staticmethod
    def toggle_model(db: Session, model_id: str, enabled: bool) -> Optional[ModelConfig]:
        return ConfigService.update_model(db, model_id, {"enabled": enabled})

    @staticmethod
    def update_model_lever_weights(db: Session, model_id: str, lever_weights: Dict[str, float]) -> Optional[ModelConfig]:
        return ConfigService.update_model(db, model_id, {"lever_weights": lever_weights})

    @staticmethod
    def upsert_model(db: Session, model: ModelConfig) -> ModelConfig:
        row = db.get(models.ModelConfigRecord, model.id)
        if row is None:
            position = db.query(models.ModelConfigRecord).count()
            row = models.ModelConfigRecord(id=model.id, position=position)
        _apply(row, model, _MODEL_FIELDS)
        safe_db_commit(db, row)
        return model

    # --- System -------------------------------------------------------------

    @staticmethod
    def export_config(db: Session) -> Dict[str, list]:
        return {
            "levers": ConfigService.get_levers(db),
            "models": ConfigService.get_models(db),
        }

    @staticmethod
    def import_config(
        db: Session,
        levers: Optional[List[Lever]] = None,
        model_configs: Optional[List[ModelConfig]] = None,
    ) -> None:
        """Replace levers wholesale (when given) and upsert each given model."""
        if levers is not None:
            ConfigService.replace_levers(db, levers)
        for model in model_configs or []:
            ConfigService.upsert_model(db, model)
        logger.info(
            f"Config imported: levers={'replaced' if levers is not None else 'kept'} "
            f"models={len(model_configs or [])}"
        )

    @staticmethod
    def seed_defaults(db: Session) -> None:
        """Load the default rubric into empty tables; existing data is left alone."""
        if db.query(models.LeverRecord).count() == 0:
            ConfigService.replace_levers(db, [Lever.model_validate(data) for data in DEFAULT_LEVERS])
            logger.info("Seeded default levers")
        if db.query(models.ModelConfigRecord).count() == 0:
            for data in DEFAULT_MODELS:
                ConfigService.upsert_model(db, ModelConfig.model_validate(data))
            logger.info("Seeded default models")

    @staticmethod
    def build_engine(db: Session) -> EvaluationEngine:
        """Snapshot the current rubric into a fresh evaluation engine."""
        return EvaluationEngine(ConfigService.get_levers(db), ConfigService.get_models(db))
