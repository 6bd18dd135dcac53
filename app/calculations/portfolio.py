"""
Portfolio Analytics

Reduces an owner's properties into dashboard totals. Nothing is cached:
every call re-scans the full collection.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from app.calculations.parsing import finite_or_zero, parse_number, safe_divide


@dataclass(frozen=True)
class PortfolioAnalytics:
    """Aggregated snapshot of a property portfolio."""

    total_value: float
    gross_monthly_income: float
    gross_monthly_expenses: float
    net_monthly_income: float
    average_yield: float
    vacancy_rate: float
    property_count: int
    occupied_count: int
    vacant_count: int


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from negative infinity, like JavaScript's Math.round."""
    factor = 10 ** digits
    scaled = value * factor
    if not math.isfinite(scaled):
        return finite_or_zero(value)
    return math.floor(scaled + 0.5) / factor


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _total(records: List[Any], name: str) -> float:
    return finite_or_zero(sum(parse_number(_field(p, name)) for p in records))


def calculate_portfolio_analytics(properties: Iterable[Any]) -> PortfolioAnalytics:
    """
    Aggregate a collection of properties.

    Records may be ORM objects or dicts exposing ``current_value``,
    ``monthly_rent``, ``monthly_expenses`` and ``is_occupied``.
    """
    records = list(properties)

    total_value = _total(records, "current_value")
    gross_income = _total(records, "monthly_rent")
    gross_expenses = _total(records, "monthly_expenses")
    net_income = finite_or_zero(gross_income - gross_expenses)

    occupied_count = sum(1 for p in records if _field(p, "is_occupied"))
    vacant_count = len(records) - occupied_count

    average_yield = 0.0
    if total_value > 0:
        average_yield = finite_or_zero(safe_divide(net_income * 12, total_value) * 100)
    vacancy_rate = safe_divide(vacant_count, len(records)) * 100

    return PortfolioAnalytics(
        total_value=total_value,
        gross_monthly_income=gross_income,
        gross_monthly_expenses=gross_expenses,
        net_monthly_income=net_income,
        average_yield=round_half_up(average_yield),
        vacancy_rate=round_half_up(vacancy_rate),
        property_count=len(records),
        occupied_count=occupied_count,
        vacant_count=vacant_count,
    )


def calculate_property_yield(monthly_rent: Any, current_value: Any) -> float:
    """Gross yield of one property on its current value, one decimal."""
    value = parse_number(current_value)
    if value <= 0:
        return 0.0
    annual_rent = finite_or_zero(parse_number(monthly_rent) * 12)
    return round_half_up(finite_or_zero(safe_divide(annual_rent, value) * 100))


def summarize_by_region(properties: Iterable[Any]) -> List[Dict]:
    """Group property count and value by region, in first-seen order."""
    regions: Dict[str, Dict] = {}
    for p in properties:
        region = _field(p, "region") or ""
        if region not in regions:
            regions[region] = {"region": region, "count": 0, "value": 0.0}
        regions[region]["count"] += 1
        regions[region]["value"] = finite_or_zero(
            regions[region]["value"] + parse_number(_field(p, "current_value"))
        )
    return list(regions.values())
