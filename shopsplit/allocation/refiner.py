"""Local-search refinement of a group assignment.

Each iteration tries three kinds of moves, in order, and performs the
first improving one it finds before starting over:

1. swap one movable unit between two groups
2. relocate one movable unit from one group to another
3. relocate the unit from an over-target group that lifts an under-target
   group closest to its target while both end up at or above target

A move improves the assignment when it strictly lowers the combined
distance-to-target of the two groups involved without lowering their
score. Combined distance strictly decreases with every move, so the search
always reaches a fixed point; ``max_iterations`` bounds the work on large
lists. Units kept whole for a discount are never moved.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from shopsplit.allocation.bins import Bin
from shopsplit.allocation.scorer import DEFAULT_WEIGHTS, ScoreWeights, bin_score
from shopsplit.core.config import AllocatorConfig

_LOGGER = logging.getLogger(__name__)

Assignment = tuple[Bin, ...]


@dataclass(frozen=True)
class RefineResult:
    """Outcome of a refinement run."""

    bins: Assignment
    iterations: int
    moves: int
    converged: bool


def _pair_distance(a: Bin, b: Bin) -> float:
    return round(a.distance + b.distance, 2)


def _keeps_score(old: tuple[Bin, Bin], new: tuple[Bin, Bin], weights: ScoreWeights) -> bool:
    before = bin_score(old[0], weights) + bin_score(old[1], weights)
    after = bin_score(new[0], weights) + bin_score(new[1], weights)
    return round(after, 6) >= round(before, 6)


def _updated(bins: Assignment, changes: dict[int, Bin]) -> Assignment:
    return tuple(changes.get(i, b) for i, b in enumerate(bins))


def _swap_pass(bins: Assignment, weights: ScoreWeights) -> Assignment | None:
    """First improving pairwise swap, or None."""
    for i in range(len(bins)):
        for j in range(i + 1, len(bins)):
            a, b = bins[i], bins[j]
            before = _pair_distance(a, b)

            for index_a, unit_a in a.movable_units():
                for index_b, unit_b in b.movable_units():
                    if unit_a.value == unit_b.value:
                        continue
                    new_a = a.replace_unit(index_a, unit_b)
                    new_b = b.replace_unit(index_b, unit_a)
                    if _pair_distance(new_a, new_b) < before and _keeps_score(
                        (a, b), (new_a, new_b), weights
                    ):
                        return _updated(bins, {i: new_a, j: new_b})
    return None


def _move_pass(bins: Assignment, weights: ScoreWeights) -> Assignment | None:
    """First improving single-unit relocation, or None."""
    for i, source in enumerate(bins):
        for j, target in enumerate(bins):
            if i == j:
                continue
            before = _pair_distance(source, target)

            for index, unit in source.movable_units():
                new_source = source.remove(index)
                new_target = target.add(unit)
                if _pair_distance(new_source, new_target) < before and _keeps_score(
                    (source, target), (new_source, new_target), weights
                ):
                    return _updated(bins, {i: new_source, j: new_target})
    return None


def _rebalance_pass(bins: Assignment, weights: ScoreWeights) -> Assignment | None:
    """Closest over-to-under relocation for the first pair that has one, or None.

    Among the donor's units that lift the receiver to its target while the
    donor stays at or above its own, the one leaving the receiver with the
    smallest overage wins.
    """
    under = [i for i, b in enumerate(bins) if b.total < b.target]
    over = [i for i, b in enumerate(bins) if b.total > b.target]

    for u in under:
        for o in over:
            receiver, donor = bins[u], bins[o]
            before = _pair_distance(receiver, donor)
            best: tuple[Bin, Bin] | None = None
            best_overage = 0.0

            for index, unit in donor.movable_units():
                new_receiver = receiver.add(unit)
                new_donor = donor.remove(index)
                if new_receiver.total < receiver.target or new_donor.total < donor.target:
                    continue
                if _pair_distance(new_receiver, new_donor) >= before:
                    continue
                overage = new_receiver.overage
                if (best is None or overage < best_overage) and _keeps_score(
                    (receiver, donor), (new_receiver, new_donor), weights
                ):
                    best = (new_receiver, new_donor)
                    best_overage = overage

            if best is not None:
                return _updated(bins, {u: best[0], o: best[1]})
    return None


PHASES: tuple[tuple[str, Callable[[Assignment, ScoreWeights], Assignment | None]], ...] = (
    ("swap", _swap_pass),
    ("move", _move_pass),
    ("rebalance", _rebalance_pass),
)


def run_refiner(
    bins: Sequence[Bin],
    max_iterations: int | None = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> RefineResult:
    """Refine an assignment until no move improves it or the cap is hit.

    Args:
        bins: Assignment to improve (left untouched)
        max_iterations: Iteration cap (defaults to config)
        weights: Scorer weights used to guard moves

    Returns:
        RefineResult with the refined assignment and run statistics
    """
    if max_iterations is None:
        max_iterations = AllocatorConfig.MAX_ITERATIONS

    current: Assignment = tuple(bins)
    moves = 0

    for iteration in range(1, max_iterations + 1):
        for name, phase in PHASES:
            result = phase(current, weights)
            if result is not None:
                _LOGGER.debug("Refiner iteration %d: %s", iteration, name)
                current = result
                moves += 1
                break
        else:
            return RefineResult(bins=current, iterations=iteration, moves=moves, converged=True)

    _LOGGER.info("Refiner stopped at iteration cap (%d) after %d moves", max_iterations, moves)
    return RefineResult(bins=current, iterations=max_iterations, moves=moves, converged=False)


def refine(
    bins: Sequence[Bin],
    max_iterations: int | None = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> Assignment:
    """Refine an assignment and return only the resulting bins."""
    return run_refiner(bins, max_iterations, weights).bins
