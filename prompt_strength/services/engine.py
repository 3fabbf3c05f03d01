"""
EVALUATION ENGINE - Rubric snapshot plus evaluate/aggregate pipeline

The engine evaluates a prompt against an explicit RubricContext: the ordered
levers and the model profiles keyed by id. The context is never mutated;
update_levers/update_models swap in a new snapshot wholesale, so an
evaluation already running keeps reading the snapshot it started with.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple
from prompt_strength.schemas import EvaluationResult, Lever, ModelConfig
from prompt_strength.services.scoring import aggregate, evaluate_levers


@dataclass(frozen=True)
class RubricContext:
    """Immutable rubric snapshot used for one or more evaluations."""
    levers: Tuple[Lever, ...] = ()
    models: Dict[str, ModelConfig] = field(default_factory=dict)

    @classmethod
    def build(cls, levers: Iterable[Lever], models: Iterable[ModelConfig]) -> "RubricContext":
        return cls(levers=tuple(levers), models={m.id: m for m in models})

    def get_model(self, model_id: Optional[str]) -> Optional[ModelConfig]:
        if not model_id:
            return None
        return self.models.get(model_id)


def evaluate_prompt(prompt: str, context: RubricContext, model_id: Optional[str] = None) -> EvaluationResult:
    """
    Run the full evaluation pipeline against a rubric snapshot.

    An unknown model_id is not an error: default lever weights are used and
    no model tips are produced.
    """
    model = context.get_model(model_id)
    results = evaluate_levers(prompt, context.levers)
    summary = aggregate(results, context.levers, model)
    return EvaluationResult(heuristic_results=results, **summary)


class EvaluationEngine:
    """Holds the current rubric snapshot and evaluates prompts against it."""

    def __init__(self, levers: Iterable[Lever], models: Iterable[ModelConfig]):
        self._context = RubricContext.build(levers, models)

    @property
    def context(self) -> RubricContext:
        return self._context

    def evaluate(self, prompt: str, model_id: Optional[str] = None) -> EvaluationResult:
        return evaluate_prompt(prompt, self._context, model_id)

    def update_levers(self, levers: Iterable[Lever]) -> None:
        self._context = RubricContext(levers=tuple(levers), models=self._context.models)

    def update_models(self, models: Iterable[ModelConfig]) -> None:
        self._context = RubricContext(levers=self._context.levers, models={m.id: m for m in models})
