"""
Portfolio repository.

Owns the store for properties, market data and activities. One instance is
created per application lifetime and passed to request handlers; nothing
here is module-level state.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Generator, List, Optional

from sqlalchemy.orm import Session

from app.db.database import create_db_engine, create_session_factory
from app.db.models import Base, PortfolioProperty, MarketData, Activity

logger = logging.getLogger(__name__)

SAMPLE_MARKET_DATA: List[Dict[str, Any]] = [
    {
        "region": "東京都渋谷区",
        "average_price_per_sqm": 680000,
        "vacancy_rate": 3.2,
        "property_count": 1245,
        "monthly_change_percent": 2.1,
    },
    {
        "region": "東京都新宿区",
        "average_price_per_sqm": 720000,
        "vacancy_rate": 4.1,
        "property_count": 987,
        "monthly_change_percent": 1.8,
    },
    {
        "region": "東京都港区",
        "average_price_per_sqm": 950000,
        "vacancy_rate": 2.8,
        "property_count": 756,
        "monthly_change_percent": 3.2,
    },
    {
        "region": "東京都世田谷区",
        "average_price_per_sqm": 520000,
        "vacancy_rate": 5.3,
        "property_count": 1432,
        "monthly_change_percent": 0.9,
    },
    {
        "region": "神奈川県横浜市",
        "average_price_per_sqm": 450000,
        "vacancy_rate": 3.7,
        "property_count": 2156,
        "monthly_change_percent": -0.3,
    },
]

SAMPLE_RECORD_DATE = datetime(2024, 6, 1)

UPDATABLE_PROPERTY_FIELDS = {
    "name",
    "address",
    "region",
    "property_type",
    "purchase_price",
    "current_value",
    "monthly_rent",
    "monthly_expenses",
    "building_age",
    "area",
    "is_occupied",
    "purchase_date",
}


class PortfolioRepository:
    """CRUD access to the dashboard's records."""

    def __init__(self, database_url: str = "sqlite://"):
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self._session_factory = create_session_factory(self.engine)
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Transactional session scope."""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self) -> None:
        """Release all pooled connections."""
        self.engine.dispose()

    # Properties

    def list_properties(self, user_id: int) -> List[PortfolioProperty]:
        with self.session() as db:
            return (
                db.query(PortfolioProperty)
                .filter(PortfolioProperty.user_id == user_id)
                .order_by(PortfolioProperty.id)
                .all()
            )

    def get_property(self, property_id: int) -> Optional[PortfolioProperty]:
        with self.session() as db:
            return db.get(PortfolioProperty, property_id)

    def create_property(self, user_id: int, data: Dict[str, Any]) -> PortfolioProperty:
        fields = {k: v for k, v in data.items() if k in UPDATABLE_PROPERTY_FIELDS}
        with self.session() as db:
            prop = PortfolioProperty(user_id=user_id, **fields)
            db.add(prop)
            db.flush()
            db.refresh(prop)
        logger.info(f"Created property {prop.id} ({prop.name}) for user {user_id}")
        return prop

    def update_property(
        self, property_id: int, data: Dict[str, Any]
    ) -> Optional[PortfolioProperty]:
        """Apply a partial update; returns None if the property is unknown."""
        with self.session() as db:
            prop = db.get(PortfolioProperty, property_id)
            if prop is None:
                return None
            for field, value in data.items():
                if field in UPDATABLE_PROPERTY_FIELDS:
                    setattr(prop, field, value)
            db.flush()
            db.refresh(prop)
        logger.info(f"Updated property {property_id}: {sorted(data)}")
        return prop

    def delete_property(self, property_id: int) -> bool:
        with self.session() as db:
            prop = db.get(PortfolioProperty, property_id)
            if prop is None:
                return False
            db.delete(prop)
        logger.info(f"Deleted property {property_id}")
        return True

    # Market data

    def list_market_data(self) -> List[MarketData]:
        with self.session() as db:
            return db.query(MarketData).order_by(MarketData.id).all()

    def list_market_data_by_region(self, region: str) -> List[MarketData]:
        with self.session() as db:
            return (
                db.query(MarketData)
                .filter(MarketData.region == region)
                .order_by(MarketData.id)
                .all()
            )

    def create_market_data(self, data: Dict[str, Any]) -> MarketData:
        with self.session() as db:
            record = MarketData(**data)
            db.add(record)
            db.flush()
            db.refresh(record)
        return record

    def seed_sample_market_data(self) -> int:
        """Load the fixed sample regions; returns the number of rows added."""
        for sample in SAMPLE_MARKET_DATA:
            self.create_market_data({**sample, "record_date": SAMPLE_RECORD_DATE})
        logger.info(f"Seeded {len(SAMPLE_MARKET_DATA)} sample market data rows")
        return len(SAMPLE_MARKET_DATA)

    # Activities

    def list_activities(self, user_id: int) -> List[Activity]:
        """Activities for one user, newest first."""
        with self.session() as db:
            return (
                db.query(Activity)
                .filter(Activity.user_id == user_id)
                .order_by(Activity.created_at.desc(), Activity.id.desc())
                .all()
            )

    def create_activity(self, user_id: int, data: Dict[str, Any]) -> Activity:
        with self.session() as db:
            activity = Activity(
                user_id=user_id,
                title=data["title"],
                description=data["description"],
                activity_type=data["activity_type"],
                amount=data.get("amount"),
                property_id=data.get("property_id"),
            )
            db.add(activity)
            db.flush()
            db.refresh(activity)
        return activity
