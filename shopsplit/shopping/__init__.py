"""Shopping list operations module."""

from shopsplit.shopping.shopping_list import (
    ItemNotFoundError,
    add_item,
    calculate_list_total,
    clear_split,
    new_list,
    remove_item,
    split_list,
    toggle_item_discount,
    toggle_item_hold,
    update_group_target,
    update_item,
    validate_group_specs,
)

__all__ = [
    "ItemNotFoundError",
    "add_item",
    "calculate_list_total",
    "clear_split",
    "new_list",
    "remove_item",
    "split_list",
    "toggle_item_discount",
    "toggle_item_hold",
    "update_group_target",
    "update_item",
    "validate_group_specs",
]
