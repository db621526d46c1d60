"""Group allocation entry point.

Splits a list of purchased items into groups of roughly given sub-totals:

1. expand items into units and group specs into empty bins
2. run every construction strategy on the same inputs
3. keep the best-scoring candidate (first one on ties)
4. polish it with the local-search refiner

The allocator is a pure function of its inputs: nothing is persisted and
no input is modified. Filtering held items and validating specs is the
caller's job (see ``shopsplit.shopping.shopping_list.split_list``).

Example usage:
    >>> from shopsplit.allocation import allocate
    >>> from shopsplit.models.shopping import GroupSpec
    >>> groups = allocate(items, [GroupSpec(target_amount=25, count=2)])
    >>> [g.total for g in groups]
"""

import logging
from dataclasses import dataclass, field

from shopsplit.allocation.bins import Bin, init_bins
from shopsplit.allocation.refiner import run_refiner
from shopsplit.allocation.scorer import DEFAULT_WEIGHTS, ScoreWeights, score, select_best
from shopsplit.allocation.strategies import STRATEGIES
from shopsplit.allocation.units import unitize
from shopsplit.models.shopping import GroupSpec, ShoppingGroup, ShoppingItem

_LOGGER = logging.getLogger(__name__)


@dataclass
class AllocationReport:
    """Allocation result with the numbers behind the choice."""

    groups: list[ShoppingGroup]
    strategy: str
    candidate_scores: dict[str, float] = field(default_factory=dict)
    selected_score: float = 0.0
    refined_score: float = 0.0
    iterations: int = 0
    moves: int = 0
    converged: bool = True


def to_groups(bins: tuple[Bin, ...] | list[Bin]) -> list[ShoppingGroup]:
    """Convert bins into display groups, ordered by group number."""
    groups = []
    for bin_ in sorted(bins, key=lambda b: b.number):
        groups.append(
            ShoppingGroup(
                id=bin_.id,
                number=bin_.number,
                target_amount=bin_.target,
                total=round(bin_.total, 2),
                items=[unit.to_item(group_id=bin_.id) for unit in bin_.units],
            )
        )
    return groups


def run_allocation(
    items: list[ShoppingItem],
    specs: list[GroupSpec],
    *,
    max_iterations: int | None = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> AllocationReport:
    """Allocate items into groups and report how the result was chosen.

    Args:
        items: Items to split (held items already removed)
        specs: Group tiers, each with target amount and count
        max_iterations: Refiner iteration cap (defaults to config)
        weights: Scorer weights

    Returns:
        AllocationReport with the final groups
    """
    bins = init_bins(specs)
    units = unitize(items)

    # Larger targets and larger units first
    ordered_bins = sorted(bins, key=lambda b: -b.target)
    ordered_units = sorted(units, key=lambda u: -u.value)

    candidates = [(name, strategy(ordered_bins, ordered_units)) for name, strategy in STRATEGIES]
    candidate_scores = {name: score(result, weights) for name, result in candidates}
    strategy, selected, selected_score = select_best(candidates, weights)

    _LOGGER.debug("Allocation candidates: %s", candidate_scores)

    refined = run_refiner(selected, max_iterations=max_iterations, weights=weights)
    refined_score = score(refined.bins, weights)

    _LOGGER.info(
        "Allocated %d units into %d groups: strategy=%s score=%.2f refined=%.2f moves=%d",
        len(units),
        len(bins),
        strategy,
        selected_score,
        refined_score,
        refined.moves,
    )

    return AllocationReport(
        groups=to_groups(refined.bins),
        strategy=strategy,
        candidate_scores=candidate_scores,
        selected_score=selected_score,
        refined_score=refined_score,
        iterations=refined.iterations,
        moves=refined.moves,
        converged=refined.converged,
    )


def allocate(
    items: list[ShoppingItem],
    specs: list[GroupSpec],
    *,
    max_iterations: int | None = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[ShoppingGroup]:
    """Split items into groups that each come close to their target.

    Args:
        items: Items to split (held items already removed)
        specs: Group tiers, each with target amount and count

    Returns:
        Exactly ``sum(spec.count)`` groups, ordered by group number
    """
    return run_allocation(items, specs, max_iterations=max_iterations, weights=weights).groups
