"""Split (group allocation) API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shopsplit.allocation import run_allocation
from shopsplit.api.auth import verify_token
from shopsplit.api.routers.lists import load_list_or_404
from shopsplit.api.schemas.shopping import (
    AllocateRequest,
    AllocateResponse,
    SplitConfigRequest,
    SplitConfigResponse,
    SplitRequest,
    UpdateGroupTargetRequest,
)
from shopsplit.core.database import save_list
from shopsplit.core.user_config import get_split_config, set_split_config
from shopsplit.models.shopping import ShoppingList, calculate_item_total
from shopsplit.shopping.shopping_list import (
    ItemNotFoundError,
    clear_split,
    split_list,
    update_group_target,
)

router = APIRouter(prefix="/api", tags=["split"])
_LOGGER = logging.getLogger(__name__)


@router.post("/lists/{list_id}/split", response_model=ShoppingList)
def split_shopping_list(
    list_id: str,
    request: SplitRequest,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Split a list's non-held items into groups.

    Uses the posted specs, or the list's saved split configuration when
    none are given. Returns 400 if there is nothing to split.
    """
    shopping_list = load_list_or_404(list_id)
    specs = request.specs or get_split_config(list_id)

    _LOGGER.info(
        "Split request: list=%s specs=%s",
        list_id,
        [(s.target_amount, s.count) for s in specs],
    )

    try:
        shopping_list = split_list(shopping_list, specs)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if request.specs and request.remember:
        set_split_config(list_id, request.specs)

    return save_list(shopping_list)


@router.delete("/lists/{list_id}/split", response_model=ShoppingList)
def clear_split_endpoint(list_id: str, _token: str = Depends(verify_token)) -> ShoppingList:
    """Leave split mode and drop the groups."""
    shopping_list = load_list_or_404(list_id)
    return save_list(clear_split(shopping_list))


@router.patch("/lists/{list_id}/groups/{group_id}", response_model=ShoppingList)
def update_group_target_endpoint(
    list_id: str,
    group_id: str,
    request: UpdateGroupTargetRequest,
    _token: str = Depends(verify_token),
) -> ShoppingList:
    """Change the target amount of one group."""
    shopping_list = load_list_or_404(list_id)
    try:
        shopping_list = update_group_target(shopping_list, group_id, request.target_amount)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return save_list(shopping_list)


@router.get("/lists/{list_id}/split-config", response_model=SplitConfigResponse)
def get_split_config_endpoint(list_id: str, _token: str = Depends(verify_token)) -> SplitConfigResponse:
    """Get the remembered group tiers for a list."""
    load_list_or_404(list_id)
    return SplitConfigResponse(list_id=list_id, specs=get_split_config(list_id))


@router.put("/lists/{list_id}/split-config", response_model=SplitConfigResponse)
def put_split_config_endpoint(
    list_id: str,
    request: SplitConfigRequest,
    _token: str = Depends(verify_token),
) -> SplitConfigResponse:
    """Remember group tiers for a list."""
    load_list_or_404(list_id)
    try:
        set_split_config(list_id, request.specs)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SplitConfigResponse(list_id=list_id, specs=get_split_config(list_id))


@router.post("/allocate", response_model=AllocateResponse)
def allocate_items(
    request: AllocateRequest,
    _token: str = Depends(verify_token),
) -> AllocateResponse:
    """Split posted items into groups without storing anything.

    Item totals are recomputed from price, quantity and discount; held
    items are left out.
    """
    items = [
        item.model_copy(update={"total": calculate_item_total(item)})
        for item in request.items
        if not item.on_hold
    ]
    report = run_allocation(items, request.specs)

    return AllocateResponse(
        groups=report.groups,
        strategy=report.strategy,
        score=report.selected_score,
        refined_score=report.refined_score,
        iterations=report.iterations,
        converged=report.converged,
    )
