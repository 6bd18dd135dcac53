"""
SQLAlchemy ORM models for the investment dashboard.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    DateTime,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class PortfolioProperty(Base):
    """A property held in an owner's portfolio."""

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    region = Column(String(100), nullable=False, index=True)
    property_type = Column(String(50), nullable=False)  # apartment, house, commercial

    # Money (yen)
    purchase_price = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False)
    monthly_rent = Column(Float, nullable=False)
    monthly_expenses = Column(Float, nullable=False, default=0.0)

    # Building
    building_age = Column(Integer, nullable=False)
    area = Column(Float, nullable=False)  # square meters
    is_occupied = Column(Boolean, nullable=False, default=True)
    purchase_date = Column(DateTime, nullable=False)

    user_id = Column(Integer, nullable=False, index=True)


class MarketData(Base):
    """Regional market statistics (fixed sample data)."""

    __tablename__ = "market_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    region = Column(String(100), nullable=False, index=True)
    average_price_per_sqm = Column(Float, nullable=False)
    vacancy_rate = Column(Float, nullable=False)
    property_count = Column(Integer, nullable=False)
    monthly_change_percent = Column(Float, nullable=False)
    record_date = Column(DateTime, nullable=False)


class Activity(Base):
    """Portfolio activity feed entry."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    activity_type = Column(String(50), nullable=False)  # income, expense, tenant_change, maintenance
    amount = Column(Float, nullable=True)
    property_id = Column(Integer, nullable=True)
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
