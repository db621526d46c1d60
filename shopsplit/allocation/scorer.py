"""Fitness scoring for candidate group assignments.

Ordering the weights must preserve:
- more groups at or above target always wins (flat per-group bonus)
- among satisfied groups, smaller overage is better (capped reduction)
- a shortfall is penalized far harder than the same overage

Example usage:
    >>> from shopsplit.allocation.scorer import score, select_best
    >>> best_name, best_bins, best_score = select_best(candidates)
"""

from dataclasses import dataclass
from typing import Sequence

from shopsplit.allocation.bins import Bin
from shopsplit.core.config import AllocatorConfig


@dataclass(frozen=True)
class ScoreWeights:
    """Scorer constants.

    Attributes:
        satisfied_bonus: Base award for a group at or above target
        satisfied_count_bonus: Extra flat award per satisfied group
        overage_slope: Points lost per currency unit over target
        overage_cap: Maximum points lost to overage
        shortfall_slope: Points lost per currency unit under target
    """

    satisfied_bonus: float = AllocatorConfig.SATISFIED_BONUS
    satisfied_count_bonus: float = AllocatorConfig.SATISFIED_COUNT_BONUS
    overage_slope: float = AllocatorConfig.OVERAGE_SLOPE
    overage_cap: float = AllocatorConfig.OVERAGE_CAP
    shortfall_slope: float = AllocatorConfig.SHORTFALL_SLOPE


DEFAULT_WEIGHTS = ScoreWeights()


def bin_score(bin_: Bin, weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """Score contribution of a single bin."""
    if bin_.is_satisfied:
        penalty = min(bin_.overage * weights.overage_slope, weights.overage_cap)
        return weights.satisfied_bonus - penalty + weights.satisfied_count_bonus
    return -bin_.shortfall * weights.shortfall_slope


def score(bins: Sequence[Bin], weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """Score an assignment; higher is better."""
    return sum(bin_score(b, weights) for b in bins)


def select_best(
    candidates: Sequence[tuple[str, tuple[Bin, ...]]],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> tuple[str, tuple[Bin, ...], float]:
    """Pick the highest-scoring candidate; the first one wins ties.

    Args:
        candidates: (strategy name, assignment) pairs in evaluation order

    Returns:
        Tuple of (name, assignment, score)
    """
    best_name, best_bins = candidates[0]
    best_score = score(best_bins, weights)

    for name, bins in candidates[1:]:
        candidate_score = score(bins, weights)
        if candidate_score > best_score:
            best_name, best_bins, best_score = name, bins, candidate_score

    return best_name, best_bins, best_score
