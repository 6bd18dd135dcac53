"""
Seed a repository with a two-property demo portfolio and print its analytics.

Uses DATABASE_URL from the environment; with the default in-memory URL the
data lives only for the duration of the script.
"""
import sys
import os
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.calculations.portfolio import calculate_portfolio_analytics
from app.db.repository import PortfolioRepository

DEMO_PROPERTIES = [
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
]


def main():
    settings = get_settings()
    repository = PortfolioRepository(settings.database_url)
    owner_id = settings.default_owner_id

    try:
        existing = {p.name for p in repository.list_properties(owner_id)}
        for data in DEMO_PROPERTIES:
            if data["name"] in existing:
                print(f"Property '{data['name']}' already exists")
                continue
            prop = repository.create_property(owner_id, data)
            print(f"Created property: {prop.name} (ID: {prop.id})")

        analytics = calculate_portfolio_analytics(repository.list_properties(owner_id))
        print(f"\nTotal value:        ¥{analytics.total_value:,.0f}")
        print(f"Net monthly income: ¥{analytics.net_monthly_income:,.0f}")
        print(f"Average yield:      {analytics.average_yield}%")
        print(f"Vacancy rate:       {analytics.vacancy_rate}%")
    finally:
        repository.close()


if __name__ == "__main__":
    main()
