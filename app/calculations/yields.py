"""
Yield Metrics

Gross yield, net yield, cash-on-cash yield and payment-to-income ratio.
Every metric is a percentage and falls back to 0 when its denominator is 0.

Net yield is income net of operating deductions over price. Debt service
is left out of it and only enters net income and cash-on-cash yield.
"""

from dataclasses import dataclass
from typing import Any

from app.calculations.parsing import finite_or_zero, non_negative, parse_number, safe_divide


@dataclass(frozen=True)
class YieldResult:
    """Yield metrics for a single investment."""

    gross_yield_percent: float
    net_yield_percent: float
    cash_on_cash_percent: float
    payment_to_income_ratio_percent: float
    annual_expenses: float
    net_income: float


def calculate_gross_yield(gross_annual_income: Any, price: Any) -> float:
    """Annual income over purchase price, in percent."""
    ratio = safe_divide(parse_number(gross_annual_income), non_negative(price))
    return finite_or_zero(ratio * 100)


def calculate_net_yield(gross_annual_income: Any, deductions: Any, price: Any) -> float:
    """Annual income less operating deductions over purchase price, in percent."""
    net_operating_income = finite_or_zero(
        parse_number(gross_annual_income) - parse_number(deductions)
    )
    return finite_or_zero(safe_divide(net_operating_income, non_negative(price)) * 100)


def calculate_cash_on_cash(net_income: Any, equity: Any) -> float:
    """Annual net income over equity invested, in percent."""
    ratio = safe_divide(parse_number(net_income), non_negative(equity))
    return finite_or_zero(ratio * 100)


def calculate_yields(
    price: Any,
    gross_annual_income: Any,
    deductions: Any,
    equity: Any,
    annual_payment: Any,
) -> YieldResult:
    """
    Calculate all yield metrics for an investment.

    Args:
        price: Purchase price
        gross_annual_income: Gross rental income per year
        deductions: Annual vacancy and operating deductions
        equity: Own capital (down payment)
        annual_payment: Annual debt service

    Returns:
        YieldResult with percentages and derived annual figures
    """
    price = non_negative(price)
    gross = parse_number(gross_annual_income)
    deductions = parse_number(deductions)
    equity = non_negative(equity)
    annual_payment = non_negative(annual_payment)

    annual_expenses = finite_or_zero(annual_payment + deductions)
    net_income = finite_or_zero(gross - annual_expenses)

    return YieldResult(
        gross_yield_percent=calculate_gross_yield(gross, price),
        net_yield_percent=calculate_net_yield(gross, deductions, price),
        cash_on_cash_percent=calculate_cash_on_cash(net_income, equity),
        payment_to_income_ratio_percent=(
            finite_or_zero(safe_divide(annual_payment, gross) * 100) if gross > 0 else 0.0
        ),
        annual_expenses=annual_expenses,
        net_income=net_income,
    )
