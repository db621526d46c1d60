"""Tests for bin initialization and immutable bin updates."""

from shopsplit.allocation.bins import Bin, distance_after, init_bins
from shopsplit.allocation.units import AllocationUnit, SliceKey
from shopsplit.models.shopping import GroupSpec


def _unit(name: str, value: float, indivisible: bool = False) -> AllocationUnit:
    return AllocationUnit(key=SliceKey(name, None if indivisible else 1), value=value, indivisible=indivisible)


def test_init_bins_numbers_groups_across_specs():
    bins = init_bins([GroupSpec(target_amount=25, count=2), GroupSpec(target_amount=40, count=1)])

    assert [b.number for b in bins] == [1, 2, 3]
    assert [b.id for b in bins] == ["group-1", "group-2", "group-3"]
    assert [b.target for b in bins] == [25, 25, 40]
    assert all(b.total == 0 and b.units == () for b in bins)


def test_add_returns_new_bin_with_rounded_total():
    empty = Bin(id="group-1", number=1, target=1.0)

    filled = empty.add(_unit("a", 0.1)).add(_unit("b", 0.2))

    assert empty.total == 0
    assert empty.units == ()
    assert filled.total == 0.3
    assert len(filled.units) == 2


def test_remove_and_replace_unit():
    bin_ = Bin(id="group-1", number=1, target=10).add(_unit("a", 4)).add(_unit("b", 3))

    removed = bin_.remove(0)
    assert removed.total == 3
    assert [u.key.item_id for u in removed.units] == ["b"]

    replaced = bin_.replace_unit(1, _unit("c", 6))
    assert replaced.total == 10
    assert [u.key.item_id for u in replaced.units] == ["a", "c"]
    assert bin_.total == 7


def test_distance_and_satisfaction():
    under = Bin(id="group-1", number=1, target=10, total=7.5)
    over = Bin(id="group-2", number=2, target=10, total=12.25)

    assert under.distance == 2.5
    assert under.shortfall == 2.5
    assert not under.is_satisfied
    assert over.distance == 2.25
    assert over.overage == 2.25
    assert over.is_satisfied
    assert distance_after(under, 2.5) == 0


def test_movable_units_skip_indivisible():
    bin_ = Bin(id="group-1", number=1, target=10).add(_unit("a", 4, indivisible=True)).add(_unit("b", 3))

    assert [(i, u.key.item_id) for i, u in bin_.movable_units()] == [(1, "b")]
