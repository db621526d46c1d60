"""Tests for the construction strategies."""

import pytest

from shopsplit.allocation.bins import Bin, init_bins
from shopsplit.allocation.strategies import (
    STRATEGIES,
    balanced_round_robin,
    greedy_fill,
    target_first,
)
from shopsplit.allocation.units import AllocationUnit, SliceKey
from shopsplit.models.shopping import GroupSpec


def _units(*values: float, indivisible: bool = False) -> list[AllocationUnit]:
    return [
        AllocationUnit(key=SliceKey(f"u{i}", None if indivisible else 1), value=v, indivisible=indivisible)
        for i, v in enumerate(values)
    ]


def _bins(target: float, count: int) -> list[Bin]:
    return init_bins([GroupSpec(target_amount=target, count=count)])


def _totals(bins) -> list[float]:
    return [b.total for b in bins]


@pytest.mark.parametrize("name,strategy", STRATEGIES)
def test_every_unit_is_placed_exactly_once(name, strategy):
    units = _units(9.5, 7, 6.25, 4, 4, 3.1, 2, 1.15, 0.5)
    bins = _bins(12, 3)

    result = strategy(bins, units)

    placed = [u.key for b in result for u in b.units]
    assert sorted(placed) == sorted(u.key for u in units)
    assert round(sum(_totals(result)), 2) == round(sum(u.value for u in units), 2)
    # inputs are untouched
    assert all(b.total == 0 and b.units == () for b in bins)


@pytest.mark.parametrize("name,strategy", STRATEGIES)
def test_exact_fit(name, strategy):
    result = strategy(_bins(10, 3), _units(10, 10, 10))

    assert _totals(result) == [10, 10, 10]
    assert all(len(b.units) == 1 for b in result)


@pytest.mark.parametrize("name,strategy", STRATEGIES)
def test_no_bins_yields_empty_assignment(name, strategy):
    assert strategy([], _units(5)) == ()


def test_greedy_prefers_staying_under_target_on_ties():
    # 12 and 8 are both 2 away from 10; going over costs extra
    result = greedy_fill(_bins(10, 1), _units(12, 8))

    assert result[0].units[0].value == 8


def test_greedy_fills_bins_one_at_a_time():
    result = greedy_fill(_bins(10, 2), _units(5, 5, 5, 5))

    assert _totals(result) == [10, 10]


def test_greedy_leftovers_go_to_closest_bin():
    result = greedy_fill(_bins(10, 2), _units(10, 10, 10))

    # both bins sit exactly at target, the first one takes the extra unit
    assert _totals(result) == [20, 10]


def test_round_robin_places_one_unit_per_bin_per_round():
    result = balanced_round_robin(_bins(10, 2), _units(5, 5, 5, 5, 5, 5))

    assert _totals(result) == [15, 15]
    assert [u.key.item_id for u in result[0].units] == ["u0", "u2", "u4"]


def test_target_first_never_overfills_in_first_pass():
    result = target_first(_bins(10, 2), _units(7, 5, 4, 3))

    assert _totals(result) == [10, 9]


def test_target_first_leftovers_go_to_furthest_bin():
    result = target_first(_bins(10, 2), _units(8, 8, 8))

    assert _totals(result) == [16, 8]


def test_target_first_rebalances_over_into_under():
    over = Bin(id="group-1", number=1, target=10).add(_units(10)[0]).add(
        AllocationUnit(key=SliceKey("small", 1), value=3)
    )
    under = Bin(id="group-2", number=2, target=10).add(AllocationUnit(key=SliceKey("mid", 1), value=8))

    result = target_first([over, under], [])

    assert _totals(result) == [10, 11]
    assert [u.key.item_id for u in result[1].units] == ["mid", "small"]


def test_target_first_never_moves_indivisible_units():
    over = (
        Bin(id="group-1", number=1, target=10)
        .add(_units(10)[0])
        .add(AllocationUnit(key=SliceKey("deal"), value=3, indivisible=True))
    )
    under = Bin(id="group-2", number=2, target=10).add(AllocationUnit(key=SliceKey("mid", 1), value=8))

    result = target_first([over, under], [])

    assert _totals(result) == [13, 8]


@pytest.mark.parametrize("name,strategy", STRATEGIES)
def test_indivisible_unit_larger_than_target(name, strategy):
    result = strategy(_bins(10, 2), _units(50, indivisible=True))

    assert sorted(_totals(result)) == [0, 50]
