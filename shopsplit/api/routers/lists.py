"""Shopping list and item API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shopsplit.api.auth import verify_token
from shopsplit.api.schemas.shopping import AddItemRequest, CreateListRequest, UpdateItemRequest
from shopsplit.core.database import add_item_name, delete_list, get_all_lists, get_list, save_list
from shopsplit.core.user_config import delete_split_config
from shopsplit.models.shopping import ShoppingList
from shopsplit.shopping.shopping_list import (
    ItemNotFoundError,
    add_item,
    new_list,
    remove_item,
    toggle_item_discount,
    toggle_item_hold,
    update_item,
)

router = APIRouter(prefix="/api/lists", tags=["lists"])
_LOGGER = logging.getLogger(__name__)


def load_list_or_404(list_id: str) -> ShoppingList:
    """Load a list or raise 404."""
    shopping_list = get_list(list_id)
    if shopping_list is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping list {list_id} not found",
        )
    return shopping_list


def _item_not_found(e: ItemNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[ShoppingList])
def get_lists(_token: str = Depends(verify_token)) -> list[ShoppingList]:
    """Get all shopping lists, newest first."""
    return get_all_lists()


@router.post("", response_model=ShoppingList, status_code=status.HTTP_201_CREATED)
def create_list(
    request: CreateListRequest,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Create an empty shopping list."""
    shopping_list = save_list(new_list(request.name, request.date))
    _LOGGER.info("Created list %s (%s)", shopping_list.id, shopping_list.name)
    return shopping_list


@router.get("/{list_id}", response_model=ShoppingList)
def get_shopping_list(list_id: str, _token: str = Depends(verify_token)) -> ShoppingList:
    """Get a shopping list by ID."""
    return load_list_or_404(list_id)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_list(list_id: str, _token: str = Depends(verify_token)) -> None:
    """Delete a shopping list and its remembered split configuration."""
    if not delete_list(list_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping list {list_id} not found",
        )
    delete_split_config(list_id)


@router.post("/{list_id}/items", response_model=ShoppingList, status_code=status.HTTP_201_CREATED)
def create_item(
    list_id: str,
    request: AddItemRequest,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Add an item; a discount whose threshold is met is applied right away."""
    shopping_list = load_list_or_404(list_id)
    shopping_list, item = add_item(
        shopping_list,
        name=request.name,
        price=request.price,
        quantity=request.quantity,
        discount=request.discount,
        on_hold=request.on_hold,
    )
    add_item_name(item.name)
    return save_list(shopping_list)


@router.patch("/{list_id}/items/{item_id}", response_model=ShoppingList)
def edit_item(
    list_id: str,
    item_id: str,
    request: UpdateItemRequest,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Edit an item; changing the quantity re-evaluates its discount."""
    shopping_list = load_list_or_404(list_id)
    try:
        shopping_list = update_item(
            shopping_list,
            item_id,
            name=request.name,
            price=request.price,
            quantity=request.quantity,
            on_hold=request.on_hold,
        )
    except ItemNotFoundError as e:
        raise _item_not_found(e)
    if request.name:
        add_item_name(request.name)
    return save_list(shopping_list)


@router.delete("/{list_id}/items/{item_id}", response_model=ShoppingList)
def delete_item(list_id: str, item_id: str, _token: str = Depends(verify_token)) -> ShoppingList:
    """Remove an item from a list."""
    shopping_list = load_list_or_404(list_id)
    try:
        shopping_list = remove_item(shopping_list, item_id)
    except ItemNotFoundError as e:
        raise _item_not_found(e)
    return save_list(shopping_list)


@router.post("/{list_id}/items/{item_id}/toggle-discount", response_model=ShoppingList)
def toggle_discount_endpoint(
    list_id: str,
    item_id: str,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Switch an item's discount on or off."""
    shopping_list = load_list_or_404(list_id)
    try:
        shopping_list = toggle_item_discount(shopping_list, item_id)
    except ItemNotFoundError as e:
        raise _item_not_found(e)
    return save_list(shopping_list)


@router.post("/{list_id}/items/{item_id}/toggle-hold", response_model=ShoppingList)
def toggle_hold_endpoint(
    list_id: str,
    item_id: str,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Put an item on hold or release it."""
    shopping_list = load_list_or_404(list_id)
    try:
        shopping_list = toggle_item_hold(shopping_list, item_id)
    except ItemNotFoundError as e:
        raise _item_not_found(e)
    return save_list(shopping_list)
