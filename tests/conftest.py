"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_repository
from app.db.repository import PortfolioRepository


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def repository():
    """Fresh in-memory repository with the sample market data."""
    repo = PortfolioRepository("sqlite://")
    repo.seed_sample_market_data()
    yield repo
    repo.close()


@pytest.fixture
def client(repository):
    """Test client wired to the per-test repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def property_payload():
    """Valid property creation payload (camelCase, as the dashboard sends it)."""
    return {
        "name": "Shibuya Residence",
        "address": "1-2-3 Jingumae",
        "region": "東京都渋谷区",
        "propertyType": "apartment",
        "purchasePrice": 28000000,
        "currentValue": 30000000,
        "monthlyRent": 120000,
        "monthlyExpenses": 15000,
        "buildingAge": 12,
        "area": 35.5,
        "isOccupied": True,
        "purchaseDate": "2022-04-01T00:00:00",
    }


@pytest.fixture
def two_properties(repository):
    """One occupied and one vacant property owned by user 1."""
    first = repository.create_property(
        1,
        {
            "name": "Shibuya Residence",
            "address": "1-2-3 Jingumae",
            "region": "東京都渋谷区",
            "property_type": "apartment",
            "purchase_price": 28000000,
            "current_value": 30000000,
            "monthly_rent": 120000,
            "monthly_expenses": 15000,
            "building_age": 12,
            "area": 35.5,
            "is_occupied": True,
            "purchase_date": datetime(2022, 4, 1),
        },
    )
    second = repository.create_property(
        1,
        {
            "name": "Yokohama House",
            "address": "4-5-6 Minatomirai",
            "region": "神奈川県横浜市",
            "property_type": "house",
            "purchase_price": 18000000,
            "current_value": 20000000,
            "monthly_rent": 90000,
            "monthly_expenses": 10000,
            "building_age": 25,
            "area": 80.0,
            "is_occupied": False,
            "purchase_date": datetime(2020, 9, 15),
        },
    )
    return first, second
