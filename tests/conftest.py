"""Pytest configuration and fixtures."""

import pytest

from shopsplit.models.shopping import Discount, ShoppingItem

TEST_TOKEN = "test-token"


def _make_item(
    item_id: str,
    price: float,
    quantity: int = 1,
    discount: Discount | None = None,
    applied: bool = False,
    on_hold: bool = False,
) -> ShoppingItem:
    return ShoppingItem(
        id=item_id,
        name=item_id,
        price=price,
        quantity=quantity,
        discount=discount,
        discount_applied=applied,
        on_hold=on_hold,
    )


@pytest.fixture
def make_item():
    """Factory for items with a correctly computed total."""
    return _make_item


@pytest.fixture
def bulk_discount():
    """Factory for "N for €X" discounts."""

    def factory(quantity: int, value: float) -> Discount:
        return Discount(type="bulk_price", quantity=quantity, value=value, display=f"({quantity} for €{value})")

    return factory


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the database and the user config at a temporary directory."""
    from shopsplit.core import database, user_config

    monkeypatch.setattr(database, "DB_PATH", tmp_path / "shopsplit.db")
    monkeypatch.setattr(user_config, "CONFIG_PATH", tmp_path / "config.json")
    database.init_db()
    return tmp_path


@pytest.fixture
def api_token(monkeypatch):
    """Configure the API token."""
    from shopsplit.api.config import config

    monkeypatch.setattr(config, "api_token", TEST_TOKEN)
    return TEST_TOKEN


@pytest.fixture
def client(data_dir, api_token):
    """FastAPI test client with a temporary database."""
    from fastapi.testclient import TestClient

    from shopsplit.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(api_token):
    return {"Authorization": f"Bearer {api_token}"}
