"""Pydantic schemas for shopping list and split endpoints."""

from pydantic import BaseModel, Field

from shopsplit.models.shopping import Discount, GroupSpec, ShoppingGroup, ShoppingItem


class CreateListRequest(BaseModel):
    """Request to create a new shopping list."""

    name: str = Field(..., min_length=1)
    date: str | None = Field(None, description="ISO date, defaults to today")


class AddItemRequest(BaseModel):
    """Request to add an item to a list."""

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    discount: Discount | None = None
    on_hold: bool = False


class UpdateItemRequest(BaseModel):
    """Request to edit an item; omitted fields stay unchanged."""

    name: str | None = Field(None, min_length=1)
    price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=1)
    on_hold: bool | None = None


class SplitRequest(BaseModel):
    """Request to split a list into groups.

    Without specs the list's saved split configuration is used.
    """

    specs: list[GroupSpec] | None = Field(None, min_length=1)
    remember: bool = Field(True, description="Save the specs as the list's split configuration")


class SplitConfigRequest(BaseModel):
    """Group tiers to remember for a list."""

    specs: list[GroupSpec] = Field(..., min_length=1)


class SplitConfigResponse(BaseModel):
    """Remembered group tiers for a list."""

    list_id: str
    specs: list[GroupSpec] = Field(default_factory=list)


class UpdateGroupTargetRequest(BaseModel):
    """Request to change one group's target amount."""

    target_amount: float = Field(..., gt=0)


class AllocateRequest(BaseModel):
    """Stateless allocation of posted items."""

    items: list[ShoppingItem] = Field(default_factory=list)
    specs: list[GroupSpec] = Field(..., min_length=1)


class AllocateResponse(BaseModel):
    """Groups produced by a stateless allocation."""

    groups: list[ShoppingGroup] = Field(default_factory=list)
    strategy: str
    score: float
    refined_score: float
    iterations: int
    converged: bool


class ItemNamesResponse(BaseModel):
    """Remembered item names for autocomplete."""

    names: list[str] = Field(default_factory=list)
