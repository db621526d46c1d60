"""Tests for local-search refinement."""

from shopsplit.allocation.bins import Bin
from shopsplit.allocation.refiner import _rebalance_pass, refine, run_refiner
from shopsplit.allocation.scorer import DEFAULT_WEIGHTS, score
from shopsplit.allocation.units import AllocationUnit, SliceKey


def _bin(number: int, *values: float, target: float = 10, indivisible: bool = False) -> Bin:
    bin_ = Bin(id=f"group-{number}", number=number, target=target)
    for i, value in enumerate(values):
        key = SliceKey(f"g{number}-u{i}", None if indivisible else 1)
        bin_ = bin_.add(AllocationUnit(key=key, value=value, indivisible=indivisible))
    return bin_


def test_swap_brings_both_groups_to_target():
    bins = (_bin(1, 8, 4), _bin(2, 6, 2))

    result = run_refiner(bins)

    assert [b.total for b in result.bins] == [10, 10]
    assert result.moves == 1
    assert result.converged


def test_single_move_when_no_swap_helps():
    bins = (_bin(1, 5, 5, 5), _bin(2, 5))

    result = refine(bins)

    assert [b.total for b in result] == [10, 10]


def test_indivisible_units_are_never_moved():
    bins = (_bin(1, 50, indivisible=True), _bin(2))

    result = run_refiner(bins)

    assert result.bins == bins
    assert result.moves == 0


def test_move_that_loses_a_satisfied_group_is_rejected():
    # moving the 9 or the 3 would cut total distance but leave no group at target
    bins = (_bin(1, 3, 9), _bin(2, 5))

    result = refine(bins)

    assert result == bins


def test_refined_score_never_drops():
    cases = [
        (_bin(1, 8, 4), _bin(2, 6, 2)),
        (_bin(1, 3, 9), _bin(2, 5)),
        (_bin(1, 7, 5), _bin(2, 4, 4)),
        (_bin(1, 9.99, 0.5, 0.5, 2.25), _bin(2, 1.75, target=20), _bin(3, 4.5, 6.5, 3, target=5)),
    ]
    for bins in cases:
        assert score(refine(bins)) >= score(bins)


def test_refining_twice_changes_nothing():
    bins = (_bin(1, 9.99, 0.5, 0.5, 2.25), _bin(2, 1.75, target=20), _bin(3, 4.5, 6.5, 3, target=5))

    once = refine(bins)
    twice = run_refiner(once)

    assert twice.bins == once
    assert twice.moves == 0
    assert twice.converged


def test_iteration_cap():
    bins = (_bin(1, 8, 4), _bin(2, 6, 2))

    result = run_refiner(bins, max_iterations=0)

    assert result.bins == bins
    assert result.iterations == 0
    assert not result.converged


def test_totals_stay_consistent():
    bins = (_bin(1, 9.99, 0.5, 0.5, 2.25), _bin(2, 1.75, target=20), _bin(3, 4.5, 6.5, 3, target=5))

    result = refine(bins)

    for bin_ in result:
        assert bin_.total == round(sum(u.value for u in bin_.units), 2)
    assert sorted(u.key for b in result for u in b.units) == sorted(u.key for b in bins for u in b.units)


def test_rebalance_picks_the_unit_closest_to_target():
    bins = (_bin(1, 8), _bin(2, 7, 3, 10))

    result = _rebalance_pass(bins, DEFAULT_WEIGHTS)

    assert [b.total for b in result] == [11, 17]
    assert sorted(u.value for u in result[0].units) == [3, 8]


def test_rebalance_keeps_donor_at_target():
    # moving either unit would drop the donor below its target
    bins = (_bin(1, 8), _bin(2, 5, 6))

    assert _rebalance_pass(bins, DEFAULT_WEIGHTS) is None
