"""Expansion of list items into allocation units.

A unit is the smallest thing the allocator places into a group:

- an item with an active discount stays whole and becomes one indivisible
  unit valued at its discounted total;
- any other item becomes ``quantity`` single-unit slices, each keyed by a
  structured ``SliceKey`` pointing back at the source item.

Slice values are distributed in cents so that the slices of an item always
add up to the item's total exactly.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from shopsplit.models.shopping import ShoppingItem, is_discount_active


class SliceKey(NamedTuple):
    """Identity of a unit: source item id plus 1-based slice index.

    ``slice_index`` is None for an indivisible (whole-item) unit.
    """

    item_id: str
    slice_index: int | None = None

    def display_id(self) -> str:
        if self.slice_index is None:
            return self.item_id
        return f"{self.item_id}-{self.slice_index}"


@dataclass(frozen=True)
class AllocationUnit:
    """A placeable piece of a shopping item."""

    key: SliceKey
    value: float
    indivisible: bool = False
    item: ShoppingItem | None = field(default=None, compare=False, repr=False)
    original_quantity: int = field(default=1, compare=False)

    @property
    def movable(self) -> bool:
        """Units kept whole for a discount never take part in moves or swaps."""
        return not self.indivisible

    def to_item(self, group_id: str | None = None) -> ShoppingItem:
        """Express the unit as a shopping item entry for a group."""
        if self.item is None:
            return ShoppingItem(
                id=self.key.display_id(),
                name=self.key.item_id,
                price=self.value,
                quantity=1,
                total=self.value,
                group_id=group_id,
            )

        if self.indivisible:
            return self.item.model_copy(update={"group_id": group_id})

        return self.item.model_copy(
            update={
                "id": self.key.display_id(),
                "quantity": 1,
                "total": self.value,
                "group_id": group_id,
                "original_id": self.key.item_id,
                "original_quantity": self.original_quantity,
                "split_index": self.key.slice_index,
            }
        )


def _split_cents(total: float, parts: int) -> list[float]:
    """Split a money amount into ``parts`` values that sum to it exactly."""
    cents = round(total * 100)
    base, remainder = divmod(cents, parts)
    return [(base + (1 if i < remainder else 0)) / 100 for i in range(parts)]


def unitize(items: list[ShoppingItem]) -> list[AllocationUnit]:
    """Expand items into allocation units.

    Held items must be filtered out by the caller.

    Args:
        items: Items to allocate

    Returns:
        Units in item order (no ordering guarantee for callers)
    """
    units: list[AllocationUnit] = []

    for item in items:
        if is_discount_active(item):
            units.append(
                AllocationUnit(
                    key=SliceKey(item.id),
                    value=round(item.total, 2),
                    indivisible=True,
                    item=item,
                    original_quantity=item.quantity,
                )
            )
            continue

        for index, value in enumerate(_split_cents(item.total, item.quantity), start=1):
            units.append(
                AllocationUnit(
                    key=SliceKey(item.id, index),
                    value=value,
                    item=item,
                    original_quantity=item.quantity,
                )
            )

    return units
