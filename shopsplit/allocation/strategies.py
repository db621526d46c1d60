"""Construction heuristics for group allocation.

Each strategy takes the same bins and units and returns a complete
assignment: every unit ends up in exactly one bin. Inputs are never
mutated; the strategies build a fresh tuple of bins.

Strategies:
- greedy_fill: fill bins one at a time, closest-to-target pick first
- balanced_round_robin: same pick rule, one unit per bin per round
- target_first: fill up to (never past) target, then rebalance
"""

import logging
from typing import Callable, Sequence

from shopsplit.allocation.bins import Bin, distance_after
from shopsplit.allocation.units import AllocationUnit
from shopsplit.core.config import AllocatorConfig

_LOGGER = logging.getLogger(__name__)

Strategy = Callable[[Sequence[Bin], Sequence[AllocationUnit]], tuple[Bin, ...]]


def _pick_score(bin_: Bin, unit: AllocationUnit, penalty: float) -> float:
    """Score a candidate unit for a bin; higher is better.

    Closeness to target counts; going over target costs a small extra
    penalty so that equally close picks at or under target win.
    """
    new_total = round(bin_.total + unit.value, 2)
    over = penalty if new_total > bin_.target else 0.0
    return -distance_after(bin_, unit.value) - over


def _best_pick(bin_: Bin, units: Sequence[AllocationUnit], penalty: float) -> int:
    best_index = 0
    best_score = float("-inf")
    for index, unit in enumerate(units):
        score = _pick_score(bin_, unit, penalty)
        if score > best_score:
            best_score = score
            best_index = index
    return best_index


def _place_leftovers(
    bins: list[Bin],
    units: list[AllocationUnit],
    *,
    furthest: bool = False,
) -> None:
    """Drop remaining units, one at a time, into the closest (or furthest) bin."""
    while units:
        unit = units.pop(0)
        if furthest:
            index = max(range(len(bins)), key=lambda i: (bins[i].distance, -i))
        else:
            index = min(range(len(bins)), key=lambda i: (bins[i].distance, i))
        bins[index] = bins[index].add(unit)


def greedy_fill(
    bins: Sequence[Bin],
    units: Sequence[AllocationUnit],
    penalty: float | None = None,
) -> tuple[Bin, ...]:
    """Fill bins in order until each reaches its target.

    Args:
        bins: Empty bins in visiting order
        units: Units to place
        penalty: Over-target pick penalty (defaults to config)

    Returns:
        Complete assignment
    """
    if not bins:
        return ()
    if penalty is None:
        penalty = AllocatorConfig.OVER_TARGET_PENALTY

    filled = list(bins)
    remaining = list(units)

    for index in range(len(filled)):
        while not filled[index].is_satisfied and remaining:
            pick = _best_pick(filled[index], remaining, penalty)
            filled[index] = filled[index].add(remaining.pop(pick))

    _place_leftovers(filled, remaining)
    return tuple(filled)


def balanced_round_robin(
    bins: Sequence[Bin],
    units: Sequence[AllocationUnit],
    penalty: float | None = None,
) -> tuple[Bin, ...]:
    """Place one unit per bin per round, cycling until no units remain."""
    if not bins:
        return ()
    if penalty is None:
        penalty = AllocatorConfig.OVER_TARGET_PENALTY

    filled = list(bins)
    remaining = list(units)
    turn = 0

    while remaining:
        index = turn % len(filled)
        pick = _best_pick(filled[index], remaining, penalty)
        filled[index] = filled[index].add(remaining.pop(pick))
        turn += 1

    return tuple(filled)


def _rebalance_over_to_under(bins: list[Bin]) -> int:
    """Move single units from over-target bins into under-target bins.

    A move is only made if the donor stays at or above its target and the
    receiver reaches its target.

    Returns:
        Number of units moved
    """
    under = [i for i, b in enumerate(bins) if b.total < b.target]
    over = [i for i, b in enumerate(bins) if b.total > b.target]
    moved = 0

    for u in under:
        for o in over:
            if bins[u].is_satisfied:
                break
            for index, unit in bins[o].movable_units():
                new_under = round(bins[u].total + unit.value, 2)
                new_over = round(bins[o].total - unit.value, 2)
                if new_under >= bins[u].target and new_over >= bins[o].target:
                    bins[o] = bins[o].remove(index)
                    bins[u] = bins[u].add(unit)
                    moved += 1
                    break

    return moved


def target_first(
    bins: Sequence[Bin],
    units: Sequence[AllocationUnit],
) -> tuple[Bin, ...]:
    """Fill each bin up to its target without passing it, then rebalance.

    Units that fit nowhere under target go to whichever bin is furthest
    from its target at that moment. The over-to-under rebalance runs once
    all units are placed, since the first pass alone never overfills.
    """
    if not bins:
        return ()

    filled = list(bins)
    remaining = list(units)

    for index in range(len(filled)):
        while not filled[index].is_satisfied and remaining:
            current = filled[index]
            best_index = -1
            best_gap = float("inf")
            for i, unit in enumerate(remaining):
                new_total = round(current.total + unit.value, 2)
                if new_total > current.target:
                    continue
                gap = round(current.target - new_total, 2)
                if gap < best_gap:
                    best_gap = gap
                    best_index = i
            if best_index == -1:
                break
            filled[index] = current.add(remaining.pop(best_index))

    _place_leftovers(filled, remaining, furthest=True)

    moved = _rebalance_over_to_under(filled)
    if moved:
        _LOGGER.debug("target_first rebalanced %d unit(s)", moved)

    return tuple(filled)


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("greedy_fill", greedy_fill),
    ("balanced_round_robin", balanced_round_robin),
    ("target_first", target_first),
)
