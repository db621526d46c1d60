"""Pydantic schemas for API requests and responses."""

from shopsplit.api.schemas.common import HealthResponse
from shopsplit.api.schemas.shopping import (
    AddItemRequest,
    AllocateRequest,
    AllocateResponse,
    CreateListRequest,
    ItemNamesResponse,
    SplitConfigRequest,
    SplitConfigResponse,
    SplitRequest,
    UpdateGroupTargetRequest,
    UpdateItemRequest,
)

__all__ = [
    "AddItemRequest",
    "AllocateRequest",
    "AllocateResponse",
    "CreateListRequest",
    "HealthResponse",
    "ItemNamesResponse",
    "SplitConfigRequest",
    "SplitConfigResponse",
    "SplitRequest",
    "UpdateGroupTargetRequest",
    "UpdateItemRequest",
]
