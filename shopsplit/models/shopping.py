"""Pydantic models for shopping lists, items and split groups."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class Discount(BaseModel):
    """A multi-buy discount attached to an item.

    ``bulk_price``: "3 for €10" - ``value`` is the price of a full set.
    ``buy_x_get_y``: "3 for 2" - ``value`` is the number of units paid per set.
    """

    type: Literal["bulk_price", "buy_x_get_y"]
    quantity: int = Field(..., ge=1, description="Units required for one discount set")
    value: float = Field(..., ge=0)
    display: str = ""


class ShoppingItem(BaseModel):
    """A purchased line on a shopping list.

    Entries inside a ``ShoppingGroup`` may be single-unit slices of a list
    item; those carry ``original_id``, ``split_index`` (1-based) and
    ``original_quantity`` so the source line can be recomposed.

    When ``total`` is not given it is derived from price, quantity and
    discount.
    """

    id: str
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    total: float = 0.0
    discount: Discount | None = None
    discount_applied: bool = False
    on_hold: bool = False
    group_id: str | None = None
    original_id: str | None = None
    original_quantity: int | None = None
    split_index: int | None = None

    @model_validator(mode="after")
    def _derive_total(self) -> "ShoppingItem":
        if "total" not in self.model_fields_set:
            self.total = calculate_item_total(self)
        return self

    @property
    def source_id(self) -> str:
        """Id of the list item this entry was derived from."""
        return self.original_id or self.id


class ShoppingGroup(BaseModel):
    """A split group with a target sub-total."""

    id: str
    number: int
    target_amount: float
    total: float = 0.0
    items: list[ShoppingItem] = Field(default_factory=list)


class GroupSpec(BaseModel):
    """Request for ``count`` groups of about ``target_amount`` each."""

    target_amount: float = Field(..., gt=0)
    count: int = Field(1, ge=1)


class ShoppingList(BaseModel):
    """A shopping list with its items and, in split mode, its groups."""

    id: str
    name: str = Field(..., min_length=1)
    date: str
    items: list[ShoppingItem] = Field(default_factory=list)
    groups: list[ShoppingGroup] | None = None
    total: float = 0.0
    is_split_mode: bool = False


def can_apply_discount(item: ShoppingItem) -> bool:
    """Check if an item qualifies for its discount based on quantity."""
    return item.discount is not None and item.quantity >= item.discount.quantity


def is_discount_active(item: ShoppingItem) -> bool:
    """True if the item's discount is switched on and its threshold is met."""
    return item.discount_applied and can_apply_discount(item)


def calculate_item_total(item: ShoppingItem) -> float:
    """Calculate the total cost for an item considering its discount.

    Args:
        item: The item to price

    Returns:
        Total rounded to cents
    """
    if not is_discount_active(item):
        return round(item.price * item.quantity, 2)

    discount = item.discount
    complete_sets, remainder = divmod(item.quantity, discount.quantity)

    if discount.type == "bulk_price":
        total = complete_sets * discount.value + remainder * item.price
    else:
        # "3 for 2": pay for `value` units out of every set
        total = complete_sets * discount.value * item.price + remainder * item.price

    return round(total, 2)


def toggle_discount(item: ShoppingItem) -> ShoppingItem:
    """Return a copy of the item with its discount switched on or off.

    A discount can only be switched on when the quantity threshold is met;
    otherwise the copy ends up with the discount off.
    """
    if item.discount is None:
        return item

    applied = not item.discount_applied if can_apply_discount(item) else False
    updated = item.model_copy(update={"discount_applied": applied})
    return updated.model_copy(update={"total": calculate_item_total(updated)})
