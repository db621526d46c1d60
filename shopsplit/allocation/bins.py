"""Immutable allocation bins.

A ``Bin`` never changes in place: adding, removing or replacing a unit
returns a new bin with its total re-rounded to cents. Strategies and the
refiner work on tuples of bins and swap single entries, so every candidate
assignment is an independent value.
"""

from dataclasses import dataclass, replace

from shopsplit.allocation.units import AllocationUnit
from shopsplit.models.shopping import GroupSpec


@dataclass(frozen=True)
class Bin:
    """A group under construction."""

    id: str
    number: int
    target: float
    units: tuple[AllocationUnit, ...] = ()
    total: float = 0.0

    @property
    def distance(self) -> float:
        """Absolute distance to target, in cents precision."""
        return round(abs(self.total - self.target), 2)

    @property
    def is_satisfied(self) -> bool:
        return self.total >= self.target

    @property
    def shortfall(self) -> float:
        return round(max(0.0, self.target - self.total), 2)

    @property
    def overage(self) -> float:
        return round(max(0.0, self.total - self.target), 2)

    def movable_units(self) -> list[tuple[int, AllocationUnit]]:
        """Indexed units that may be moved or swapped."""
        return [(i, unit) for i, unit in enumerate(self.units) if unit.movable]

    def add(self, unit: AllocationUnit) -> "Bin":
        return replace(
            self,
            units=self.units + (unit,),
            total=round(self.total + unit.value, 2),
        )

    def remove(self, index: int) -> "Bin":
        unit = self.units[index]
        return replace(
            self,
            units=self.units[:index] + self.units[index + 1:],
            total=round(self.total - unit.value, 2),
        )

    def replace_unit(self, index: int, unit: AllocationUnit) -> "Bin":
        old = self.units[index]
        units = list(self.units)
        units[index] = unit
        return replace(
            self,
            units=tuple(units),
            total=round(self.total - old.value + unit.value, 2),
        )


def init_bins(specs: list[GroupSpec]) -> list[Bin]:
    """Expand group specs into empty bins.

    Bins are numbered sequentially across all specs, in spec order.

    Args:
        specs: Target amount and count per tier

    Returns:
        One empty bin per requested group
    """
    bins: list[Bin] = []
    number = 0
    for spec in specs:
        for _ in range(spec.count):
            number += 1
            bins.append(Bin(id=f"group-{number}", number=number, target=spec.target_amount))
    return bins


def distance_after(bin_: Bin, delta: float) -> float:
    """Distance to target if ``delta`` were added to the bin's total."""
    return round(abs(round(bin_.total + delta, 2) - bin_.target), 2)
