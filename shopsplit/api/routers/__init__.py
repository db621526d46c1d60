"""API routers."""

from shopsplit.api.routers.health import router as health_router
from shopsplit.api.routers.item_names import router as item_names_router
from shopsplit.api.routers.lists import router as lists_router
from shopsplit.api.routers.split import router as split_router

__all__ = ["health_router", "item_names_router", "lists_router", "split_router"]
