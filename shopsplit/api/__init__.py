"""shopsplit REST API package.

This package provides a FastAPI-based REST API for managing shopping
lists and splitting them into groups.

Usage:
    python -m shopsplit.api
"""

from shopsplit.api.main import app

__all__ = ["app"]
