"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from pantryquant.inventory.pantry import Pantry, PantryItem
from pantryquant.main import app

# =============================================================================
# Pantry Fixtures
# =============================================================================


@pytest.fixture
def sample_items():
    """Sample pantry items across units and categories."""
    return [
        PantryItem(id="item-rice", name="Rice", quantity="1", unit="kg", category="Grains"),
        PantryItem(id="item-milk", name="Milk", quantity="200", unit="ml", category="Dairy"),
        PantryItem(id="item-eggs", name="Eggs", quantity="6", unit="pcs", category="Dairy"),
        PantryItem(id="item-onion", name="Onion", quantity="2", category="Vegetables"),
        PantryItem(
            id="item-cumin",
            name="Cumin",
            quantity="8",
            unit="g",
            category="Spices",
            expiry_date=date(2026, 12, 31),
        ),
        PantryItem(id="item-flour", name="Flour", quantity="500", unit="g", category="Baking"),
    ]


@pytest.fixture
def pantry(sample_items):
    """Pantry loaded with the sample items."""
    return Pantry(sample_items)


@pytest.fixture
def sample_items_payload():
    """Sample pantry items as API JSON."""
    return [
        {"id": "item-rice", "name": "Rice", "quantity": "1", "unit": "kg", "category": "Grains"},
        {"id": "item-milk", "name": "Milk", "quantity": "200", "unit": "ml", "category": "Dairy"},
        {"id": "item-onion", "name": "Onion", "quantity": "2", "category": "Vegetables"},
        {"id": "item-flour", "name": "Flour", "quantity": "500", "unit": "g", "category": "Baking"},
    ]


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client
