"""Group allocation engine."""

from shopsplit.allocation.allocator import (
    AllocationReport,
    allocate,
    run_allocation,
    to_groups,
)
from shopsplit.allocation.bins import Bin, init_bins
from shopsplit.allocation.refiner import RefineResult, refine, run_refiner
from shopsplit.allocation.scorer import ScoreWeights, score, select_best
from shopsplit.allocation.strategies import (
    STRATEGIES,
    balanced_round_robin,
    greedy_fill,
    target_first,
)
from shopsplit.allocation.units import AllocationUnit, SliceKey, unitize

__all__ = [
    "AllocationReport",
    "AllocationUnit",
    "Bin",
    "RefineResult",
    "STRATEGIES",
    "ScoreWeights",
    "SliceKey",
    "allocate",
    "balanced_round_robin",
    "greedy_fill",
    "init_bins",
    "refine",
    "run_allocation",
    "run_refiner",
    "score",
    "select_best",
    "target_first",
    "to_groups",
    "unitize",
]
