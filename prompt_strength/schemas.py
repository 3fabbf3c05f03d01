"""
PYDANTIC SCHEMAS - Rubric types, results and API contracts

This file defines the data structures used by the evaluation engine and the API:
1. Rubric configuration (Lever, ModelConfig) - immutable once loaded
2. Evaluation outputs (HeuristicResult, Suggestion, EvaluationResult)
3. Deep analysis outputs (DeepAnalysisResult, ExamplePrompt)
4. Request bodies for the evaluate, analyze and admin endpoints
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Annotated, Dict, List, Literal, Optional
from prompt_strength.utils import Constants, validate_prompt_text

StrengthLevel = Literal["weak", "fair", "good", "strong", "excellent"]

# Per-lever override weight; 0 drops the lever from the weighted mean
OverrideWeight = Annotated[float, Field(ge=0)]
LeverWeights = Dict[str, OverrideWeight]

# --- Rubric configuration ---------------------------------------------------

class OptimalRange(BaseModel):
    """Character-length band that earns a perfect length score."""
    model_config = ConfigDict(frozen=True)

    min: float = Field(..., gt=0)
    max: float = Field(..., gt=0)

    @model_validator(mode="after")
    def check_order(self):
        if self.min > self.max:
            raise ValueError("optimal.min must not exceed optimal.max")
        return self

class Thresholds(BaseModel):
    """Length bounds; only read by length-style levers."""
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = Field(None, gt=0)
    max: Optional[float] = Field(None, gt=0)
    optimal: Optional[OptimalRange] = None

    @model_validator(mode="after")
    def check_order(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must not exceed max")
        return self

class LeverFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    missing: str
    weak: str
    good: str

class Lever(BaseModel):
    """
    A single weighted scoring rule in the rubric.

    Levers are treated as read-only snapshots. Edits produce a new Lever
    (see ConfigService.update_lever) rather than mutating fields in place.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=64)
    name: str
    description: str = ""
    weight: float = Field(..., gt=0)
    enabled: bool = True
    thresholds: Thresholds = Field(default_factory=Thresholds)
    patterns: List[str] = Field(default_factory=list)
    feedback: LeverFeedback
    priority: int = 0

class ModelConfig(BaseModel):
    """A target-model profile: weight overrides, tips and deep analysis routing."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str = Field(..., min_length=1, max_length=Constants.MAX_MODEL_ID_LENGTH)
    name: str
    provider: str = ""
    provider_id: str = Constants.DEFAULT_PROVIDER_ID
    description: str = ""
    enabled: bool = True
    lever_weights: LeverWeights = Field(default_factory=dict)
    best_practices: List[str] = Field(default_factory=list)
    preferred_structure: List[str] = Field(default_factory=list)
    analysis_model_id: Optional[str] = None
    deep_analysis_prompt: Optional[str] = None

# --- Evaluation results -----------------------------------------------------

class HeuristicResult(BaseModel):
    lever_id: str
    score: float  # 0-100, unrounded
    matched: bool
    feedback: str
    suggestions: List[str] = Field(default_factory=list)

class Suggestion(BaseModel):
    text: str
    priority: int
    lever_id: str

class EvaluationResult(BaseModel):
    """
    Output of a full evaluation.

    overall_score is the rounded weighted mean (0-100), heuristic_results holds
    one entry per enabled lever in rubric order.
    """
    model_config = ConfigDict(protected_namespaces=())

    overall_score: int
    strength_level: StrengthLevel
    heuristic_results: List[HeuristicResult]
    suggestions: List[Suggestion]
    model_tips: List[str]

class ExamplePrompt(BaseModel):
    title: str
    prompt: str

class DeepAnalysisResult(BaseModel):
    """
    Structured view of an LLM critique.

    analysis always carries the raw text so callers can fall back to it when
    nothing could be extracted.
    """
    analysis: str
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    rewritten_prompt: Optional[str] = None
    example_prompts: Optional[List[ExamplePrompt]] = None

# --- API requests -----------------------------------------------------------

class EvaluateIn(BaseModel):
    """Input schema for the evaluate endpoint."""
    model_config = ConfigDict(protected_namespaces=())

    prompt: str = Field(..., description="Prompt text to score")
    model_id: Optional[str] = Field(None, max_length=Constants.MAX_MODEL_ID_LENGTH, description="Target model profile")

    @field_validator("prompt")
    @classmethod
    def check_prompt(cls, v):
        return validate_prompt_text(v)

class AnalyzeIn(BaseModel):
    """
    Input schema for the deep analysis endpoint.

    The caller supplies their own provider API key; it is forwarded to the
    provider and never stored.
    """
    model_config = ConfigDict(protected_namespaces=())

    api_key: Optional[str] = Field(None, max_length=Constants.MAX_API_KEY_LENGTH)
    prompt: Optional[str] = Field(None, max_length=Constants.MAX_PROMPT_LENGTH)
    model_id: Optional[str] = Field(None, max_length=Constants.MAX_MODEL_ID_LENGTH)
    provider_id: Optional[str] = Field(None, max_length=32, description="Overrides the model's provider")
    analysis_model_id: Optional[str] = Field(None, max_length=128)
    system_prompt: Optional[str] = Field(None, max_length=Constants.MAX_PROMPT_LENGTH)

class LeverUpdate(BaseModel):
    """Partial lever update; unset fields are left untouched."""
    name: Optional[str] = None
    description: Optional[str] = None
    weight: Optional[float] = Field(None, gt=0)
    enabled: Optional[bool] = None
    thresholds: Optional[Thresholds] = None
    patterns: Optional[List[str]] = None
    feedback: Optional[LeverFeedback] = None
    priority: Optional[int] = None

class ModelUpdate(BaseModel):
    """Partial model profile update; unset fields are left untouched."""
    model_config = ConfigDict(protected_namespaces=())

    name: Optional[str] = None
    provider: Optional[str] = None
    provider_id: Optional[str] = None
    description: Optional[str] = None
    enabled: Optional[bool] = None
    lever_weights: Optional[LeverWeights] = None
    best_practices: Optional[List[str]] = None
    preferred_structure: Optional[List[str]] = None
    analysis_model_id: Optional[str] = None
    deep_analysis_prompt: Optional[str] = None

class ToggleIn(BaseModel):
    enabled: bool

class ReorderIn(BaseModel):
    ordered_ids: List[str]

class LeverWeightsIn(BaseModel):
    lever_weights: LeverWeights

class ConfigBundle(BaseModel):
    """Full rubric export/import payload."""
    levers: Optional[List[Lever]] = None
    models: Optional[List[ModelConfig]] = None
