"""Tests for assignment scoring."""

from shopsplit.allocation.bins import Bin
from shopsplit.allocation.scorer import ScoreWeights, bin_score, score, select_best


def _bin(total: float, target: float = 10, number: int = 1) -> Bin:
    return Bin(id=f"group-{number}", number=number, target=target, total=total)


def test_exact_target_gets_full_bonus():
    assert bin_score(_bin(10)) == 11000


def test_overage_reduces_bonus():
    assert bin_score(_bin(12)) == 10980


def test_overage_reduction_is_capped():
    assert bin_score(_bin(100)) == 10500


def test_shortfall_is_penalized():
    assert bin_score(_bin(7)) == -300


def test_more_satisfied_groups_always_win():
    many_satisfied = (_bin(60, number=1), _bin(10, number=2))
    fewer_satisfied = (_bin(10, number=1), _bin(9.5, number=2))

    assert score(many_satisfied) > score(fewer_satisfied)


def test_smaller_overage_wins_among_satisfied():
    assert score((_bin(10.5),)) > score((_bin(11),))


def test_shortfall_costs_more_than_overage():
    assert bin_score(_bin(11)) > bin_score(_bin(9.99))


def test_custom_weights():
    weights = ScoreWeights(shortfall_slope=1.0)
    assert bin_score(_bin(7), weights) == -3


def test_select_best_keeps_first_on_ties():
    candidates = [("a", (_bin(10),)), ("b", (_bin(10),)), ("c", (_bin(5),))]

    name, bins, best = select_best(candidates)

    assert name == "a"
    assert best == 11000


def test_select_best_picks_highest():
    candidates = [("a", (_bin(5),)), ("b", (_bin(11),))]

    name, _, best = select_best(candidates)

    assert name == "b"
    assert best == 10990
