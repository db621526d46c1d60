"""Shopping list operations.

This module holds the list-level logic around the allocator: adding and
editing items (with automatic discount handling), holding items back, and
splitting a list into groups.

Lists are treated as values: every operation returns an updated copy and
never touches the database. Persisting is up to the caller.

Key rules:
- A discount is applied automatically once its quantity threshold is met
- Held items do not count towards the list total and are never split
- Editing items on a split list drops the (now stale) groups

Example usage:
    >>> from shopsplit.shopping import new_list, add_item, split_list
    >>> shopping_list = new_list("Wocheneinkauf")
    >>> shopping_list, _ = add_item(shopping_list, "Milch", 1.19, quantity=4)
    >>> shopping_list = split_list(shopping_list, [GroupSpec(target_amount=25, count=2)])
"""

import logging
import uuid
from datetime import date

from shopsplit.allocation import allocate
from shopsplit.models.shopping import (
    Discount,
    GroupSpec,
    ShoppingItem,
    ShoppingList,
    calculate_item_total,
    can_apply_discount,
    toggle_discount,
)

_LOGGER = logging.getLogger(__name__)


class ItemNotFoundError(LookupError):
    """Raised when an item or group id is not on the list."""


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def calculate_list_total(items: list[ShoppingItem]) -> float:
    """Sum of item totals, excluding held items."""
    return round(sum(item.total for item in items if not item.on_hold), 2)


def _with_items(shopping_list: ShoppingList, items: list[ShoppingItem]) -> ShoppingList:
    """Copy of the list with new items, recomputed total and stale groups dropped."""
    update = {"items": items, "total": calculate_list_total(items)}
    if shopping_list.groups:
        update["groups"] = None
    return shopping_list.model_copy(update=update)


def _find_item(shopping_list: ShoppingList, item_id: str) -> int:
    for index, item in enumerate(shopping_list.items):
        if item.id == item_id:
            return index
    raise ItemNotFoundError(f"Item {item_id} not found")


def new_list(name: str, list_date: str | None = None) -> ShoppingList:
    """Create an empty shopping list."""
    return ShoppingList(
        id=_new_id(),
        name=name,
        date=list_date or date.today().isoformat(),
    )


def add_item(
    shopping_list: ShoppingList,
    name: str,
    price: float,
    quantity: int = 1,
    discount: Discount | None = None,
    on_hold: bool = False,
) -> tuple[ShoppingList, ShoppingItem]:
    """Add an item to the list.

    The discount is applied right away if the quantity already meets it.

    Returns:
        Tuple of (updated list, new item)
    """
    item = ShoppingItem(
        id=_new_id(),
        name=name.strip(),
        price=price,
        quantity=quantity,
        discount=discount,
        on_hold=on_hold,
    )
    if discount is not None and can_apply_discount(item):
        item.discount_applied = True
    item.total = calculate_item_total(item)

    return _with_items(shopping_list, [*shopping_list.items, item]), item


def update_item(
    shopping_list: ShoppingList,
    item_id: str,
    *,
    name: str | None = None,
    price: float | None = None,
    quantity: int | None = None,
    on_hold: bool | None = None,
) -> ShoppingList:
    """Edit an item.

    Changing the quantity re-evaluates the discount: it switches on when
    the threshold is reached and off when the quantity drops below it.

    Raises:
        ItemNotFoundError: If the item is not on the list
    """
    index = _find_item(shopping_list, item_id)
    item = shopping_list.items[index]

    update: dict = {}
    if name is not None:
        update["name"] = name.strip()
    if price is not None:
        update["price"] = price
    if on_hold is not None:
        update["on_hold"] = on_hold
    if quantity is not None:
        update["quantity"] = quantity

    updated = item.model_copy(update=update)
    if quantity is not None and updated.discount is not None:
        applied = can_apply_discount(updated)
        if applied != item.discount_applied:
            _LOGGER.info(
                "Discount %s for %s at quantity %d",
                "applied" if applied else "removed",
                updated.name,
                updated.quantity,
            )
        updated.discount_applied = applied
    updated.total = calculate_item_total(updated)

    items = list(shopping_list.items)
    items[index] = updated
    return _with_items(shopping_list, items)


def remove_item(shopping_list: ShoppingList, item_id: str) -> ShoppingList:
    """Remove an item from the list.

    Raises:
        ItemNotFoundError: If the item is not on the list
    """
    index = _find_item(shopping_list, item_id)
    items = shopping_list.items[:index] + shopping_list.items[index + 1:]
    return _with_items(shopping_list, items)


def toggle_item_discount(shopping_list: ShoppingList, item_id: str) -> ShoppingList:
    """Switch an item's discount on or off."""
    index = _find_item(shopping_list, item_id)
    items = list(shopping_list.items)
    items[index] = toggle_discount(items[index])
    return _with_items(shopping_list, items)


def toggle_item_hold(shopping_list: ShoppingList, item_id: str) -> ShoppingList:
    """Put an item on hold or release it."""
    index = _find_item(shopping_list, item_id)
    items = list(shopping_list.items)
    items[index] = items[index].model_copy(update={"on_hold": not items[index].on_hold})
    return _with_items(shopping_list, items)


def validate_group_specs(specs: list[GroupSpec]) -> None:
    """Check group specs before allocation.

    Raises:
        ValueError: If there are no specs or a spec has count < 1 or
            a non-positive target
    """
    if not specs:
        raise ValueError("At least one group spec is required")
    for spec in specs:
        if spec.count < 1:
            raise ValueError("Group count must be at least 1")
        if spec.target_amount <= 0:
            raise ValueError("Group target amount must be positive")


def split_list(shopping_list: ShoppingList, specs: list[GroupSpec]) -> ShoppingList:
    """Split the list's non-held items into groups.

    Args:
        shopping_list: List to split
        specs: Group tiers (target amount and count)

    Returns:
        Copy of the list in split mode with its groups set

    Raises:
        ValueError: If the specs are invalid or there is nothing to split
    """
    validate_group_specs(specs)

    if not shopping_list.items:
        raise ValueError("Add some items before splitting the list")

    items = [item for item in shopping_list.items if not item.on_hold]
    if not items:
        raise ValueError("All items are on hold, nothing to split")

    ordered_specs = sorted(specs, key=lambda s: s.target_amount, reverse=True)
    groups = allocate(items, ordered_specs)

    _LOGGER.info(
        "Split list %s: items=%d groups=%s",
        shopping_list.id,
        len(items),
        [(g.number, g.total, g.target_amount) for g in groups],
    )

    return shopping_list.model_copy(update={"groups": groups, "is_split_mode": True})


def clear_split(shopping_list: ShoppingList) -> ShoppingList:
    """Leave split mode and drop the groups."""
    return shopping_list.model_copy(update={"groups": None, "is_split_mode": False})


def update_group_target(shopping_list: ShoppingList, group_id: str, target_amount: float) -> ShoppingList:
    """Change the target amount of one existing group.

    Raises:
        ValueError: If the target is not positive
        ItemNotFoundError: If the list has no such group
    """
    if target_amount <= 0:
        raise ValueError("Group target amount must be positive")

    groups = list(shopping_list.groups or [])
    for index, group in enumerate(groups):
        if group.id == group_id:
            groups[index] = group.model_copy(update={"target_amount": target_amount})
            return shopping_list.model_copy(update={"groups": groups})

    raise ItemNotFoundError(f"Group {group_id} not found")
