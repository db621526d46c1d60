"""Item name autocomplete endpoint."""

from fastapi import APIRouter, Depends, Query

from shopsplit.api.auth import verify_token
from shopsplit.api.schemas.shopping import ItemNamesResponse
from shopsplit.core.database import get_item_names

router = APIRouter(prefix="/api/item-names", tags=["item-names"])


@router.get("", response_model=ItemNamesResponse)
def list_item_names(
    prefix: str | None = Query(None, description="Case-insensitive name prefix"),
    _token: str = Depends(verify_token),
) -> ItemNamesResponse:
    """Get remembered item names for autocomplete."""
    return ItemNamesResponse(names=get_item_names(prefix))
