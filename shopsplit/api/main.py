"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopsplit.api.config import config
from shopsplit.core.config import ensure_directories
from shopsplit.core.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create data directories and initialize the database on startup."""
    ensure_directories()
    init_db()
    yield


from shopsplit.api.routers.health import router as health_router
from shopsplit.api.routers.item_names import router as item_names_router
from shopsplit.api.routers.lists import router as lists_router
from shopsplit.api.routers.split import router as split_router

# Create FastAPI app
app = FastAPI(
    title="shopsplit API",
    description="REST API for shopping lists split into groups of target sub-totals",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS; allow all origins in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(lists_router)
app.include_router(split_router)
app.include_router(item_names_router)
