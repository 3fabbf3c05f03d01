"""
SCORING SERVICE - Rule-based prompt evaluation

This service provides fast, deterministic scoring of prompts against the lever rubric.
It has two halves:
1. Heuristic evaluation - each enabled lever scores the prompt 0-100
   (length bands for prompt-length, substring patterns for everything else)
2. Aggregation - weighted overall score, strength label, ranked suggestions
   and model-specific best-practice tips

Everything here is a pure function of its inputs: no I/O, no shared state.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from prompt_strength.schemas import HeuristicResult, Lever, ModelConfig, Suggestion
from prompt_strength.utils import Constants, round_half_up

LENGTH_LEVERS = frozenset({"prompt-length"})
PATTERN_LEVERS = frozenset({
    "context-inclusion",
    "persona-specification",
    "task-clarity",
    "examples-presence",
    "format-specification",
    "constraints-defined",
})

TOO_LONG_FEEDBACK = "Prompt is quite long - consider being more concise."
VERBOSE_FEEDBACK = "Good length, though a bit verbose."
UNKNOWN_LEVER_FEEDBACK = "Unknown lever"

NEUTRAL_SCORE = 50.0

def evaluate_length(prompt: str, lever: Lever) -> Tuple[float, bool, str]:
    """
    Score prompt length in characters against the lever's threshold bands.

    Returns (score, matched, feedback). Scores are left unrounded.
    """
    length = len(prompt)
    thresholds = lever.thresholds
    min_len = thresholds.min if thresholds.min is not None else Constants.DEFAULT_MIN_LENGTH
    max_len = thresholds.max if thresholds.max is not None else Constants.DEFAULT_MAX_LENGTH
    optimal = thresholds.optimal

    if length < min_len:
        return min(40.0, max(0.0, (length / min_len) * 40)), False, lever.feedback.missing

    if length > max_len:
        return max(50.0, 100 - ((length - max_len) / max_len) * 50), True, TOO_LONG_FEEDBACK

    if optimal is not None:
        if optimal.min <= length <= optimal.max:
            return 100.0, True, lever.feedback.good
        if length < optimal.min:
            return 60 + ((length - min_len) / (optimal.min - min_len)) * 40, True, lever.feedback.weak
        return 80.0, True, VERBOSE_FEEDBACK

    return 70.0, True, lever.feedback.good

def count_pattern_matches(lower_prompt: str, patterns: Iterable[str]) -> int:
    """Number of distinct patterns occurring anywhere in the (lowercased) prompt."""
    distinct = dict.fromkeys(p.lower() for p in patterns)
    return sum(1 for p in distinct if p in lower_prompt)

def evaluate_patterns(lower_prompt: str, lever: Lever) -> Tuple[float, bool, str]:
    """Four fixed tiers: 0 matches -> 0, 1 -> 60, 2 -> 80, 3+ -> 100."""
    match_count = count_pattern_matches(lower_prompt, lever.patterns)

    if match_count == 0:
        return 0.0, False, lever.feedback.missing
    if match_count == 1:
        return 60.0, True, lever.feedback.weak
    if match_count >= 3:
        return 100.0, True, lever.feedback.good
    return 80.0, True, lever.feedback.good

def evaluate_lever(prompt: str, lever: Lever, lower_prompt: Optional[str] = None) -> HeuristicResult:
    """
    Evaluate one lever against a prompt.

    Levers whose id has no strategy degrade to a neutral score of 50
    (unmatched, no suggestions) instead of failing the evaluation.
    """
    if lower_prompt is None:
        lower_prompt = prompt.lower()

    if lever.id in LENGTH_LEVERS:
        score, matched, feedback = evaluate_length(prompt, lever)
    elif lever.id in PATTERN_LEVERS:
        score, matched, feedback = evaluate_patterns(lower_prompt, lever)
    else:
        return HeuristicResult(
            lever_id=lever.id,
            score=NEUTRAL_SCORE,
            matched=False,
            feedback=UNKNOWN_LEVER_FEEDBACK,
            suggestions=[],
        )

    suggestions = []
    if not matched:
        suggestions.append(lever.feedback.missing)
    elif score < Constants.SUGGESTION_SCORE_CUTOFF:
        suggestions.append(lever.feedback.weak)

    return HeuristicResult(
        lever_id=lever.id,
        score=score,
        matched=matched,
        feedback=feedback,
        suggestions=suggestions,
    )

def evaluate_levers(prompt: str, levers: Sequence[Lever]) -> List[HeuristicResult]:
    """
    Evaluate every enabled lever, in rubric order.

    Input: prompt text (callers filter out blank prompts), ordered levers
    Output: one HeuristicResult per enabled lever
    """
    lower_prompt = prompt.lower()
    return [evaluate_lever(prompt, lever, lower_prompt) for lever in levers if lever.enabled]

# --- Aggregation ------------------------------------------------------------

def resolve_weight(lever: Lever, model: Optional[ModelConfig]) -> float:
    """Model override weight if the profile defines one, else the lever default."""
    if model is not None and lever.id in model.lever_weights:
        return model.lever_weights[lever.id]
    return lever.weight

def calculate_overall_score(
    results: Sequence[HeuristicResult],
    levers: Sequence[Lever],
    model: Optional[ModelConfig] = None,
) -> int:
    """
    Weighted mean of lever scores, rounded half-up to an integer.

    Results for levers missing from the rubric are skipped; a zero total
    weight yields 0.
    """
    lever_map = {lever.id: lever for lever in levers}
    total_weight = 0.0
    weighted_sum = 0.0

    for result in results:
        lever = lever_map.get(result.lever_id)
        if lever is None:
            continue
        weight = resolve_weight(lever, model)
        total_weight += weight
        weighted_sum += result.score * weight

    if total_weight <= 0:
        return 0
    return round_half_up(weighted_sum / total_weight)

def get_strength_level(score: int) -> str:
    if score < 30:
        return "weak"
    if score < 50:
        return "fair"
    if score < 70:
        return "good"
    if score < 85:
        return "strong"
    return "excellent"

def rank_suggestions(results: Sequence[HeuristicResult], levers: Sequence[Lever]) -> List[Suggestion]:
    """
    Collect suggestions from low-scoring levers, ordered by lever priority.

    The sort is stable, so suggestions with equal priority keep rubric order.
    """
    lever_map = {lever.id: lever for lever in levers}
    collected = []

    for result in results:
        lever = lever_map.get(result.lever_id)
        if lever is None or result.score >= Constants.SUGGESTION_SCORE_CUTOFF:
            continue
        for text in result.suggestions:
            collected.append(Suggestion(text=text, priority=lever.priority, lever_id=lever.id))

    collected.sort(key=lambda s: s.priority)
    return collected[:Constants.MAX_SUGGESTIONS]

def _tip_keys(lever_id: str) -> Tuple[str, str]:
    # "context-inclusion" -> ("context inclusion", "context"); only the first hyphen is replaced
    return lever_id.replace("-", " ", 1), lever_id.split("-")[0]

def select_model_tips(results: Sequence[HeuristicResult], model: ModelConfig) -> List[str]:
    """
    Pick best-practice tips related to the weakest levers.

    For each lever scoring under 60 the first tip mentioning it is used.
    When nothing matches, the model's first tip is returned so there is
    always at least one tip.
    """
    tips: List[str] = []

    for result in results:
        if result.score >= Constants.TIP_SCORE_CUTOFF:
            continue
        spaced, head = _tip_keys(result.lever_id)
        for tip in model.best_practices:
            tip_lower = tip.lower()
            if spaced in tip_lower or head in tip_lower:
                if tip not in tips:
                    tips.append(tip)
                break

    if not tips and model.best_practices:
        tips.append(model.best_practices[0])

    return tips[:Constants.MAX_MODEL_TIPS]

def aggregate(
    results: Sequence[HeuristicResult],
    levers: Sequence[Lever],
    model: Optional[ModelConfig] = None,
) -> Dict[str, object]:
    """
    Combine per-lever results into the summary fields of an EvaluationResult.

    Output: dict with overall_score, strength_level, suggestions, model_tips
    """
    overall_score = calculate_overall_score(results, levers, model)
    return {
        "overall_score": overall_score,
        "strength_level": get_strength_level(overall_score),
        "suggestions": rank_suggestions(results, levers),
        "model_tips": select_model_tips(results, model) if model is not None else [],
    }
