from sqlalchemy import Column, Integer, Text, DateTime, String, Float, Boolean, JSON
from sqlalchemy.sql import func
from prompt_strength.db import Base


class LeverRecord(Base):
    __tablename__ = "levers"
    id = Column(String(64), primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)  # rubric order
    name = Column(String(128), nullable=False)
    description = Column(Text, nullable=False, default="")
    weight = Column(Float, nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=0)
    thresholds = Column(JSON, nullable=False, default=dict)
    patterns = Column(JSON, nullable=False, default=list)
    feedback = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ModelConfigRecord(Base):
    __tablename__ = "model_configs"
    id = Column(String(64), primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(128), nullable=False)
    provider = Column(String(64), nullable=False, default="")
    provider_id = Column(String(32), nullable=False)
    description = Column(Text, nullable=False, default="")
    enabled = Column(Boolean, nullable=False, default=True)
    lever_weights = Column(JSON, nullable=False, default=dict)
    best_practices = Column(JSON, nullable=False, default=list)
    preferred_structure = Column(JSON, nullable=False, default=list)
    analysis_model_id = Column(String(128))
    deep_analysis_prompt = Column(Text)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
