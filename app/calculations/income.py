"""
Income and Expense Aggregation

Turns gross rental income into net operating income by deducting vacancy
loss and percentage-based operating costs.
"""

from dataclasses import dataclass
from typing import Any

from app.calculations.parsing import finite_or_zero, non_negative


@dataclass(frozen=True)
class IncomeResult:
    """Gross income split into deductions and net operating income."""

    gross_annual_income: float
    deductions: float
    net_operating_income: float


def calculate_deductions(
    gross_annual_income: Any,
    vacancy_rate_percent: Any,
    expense_rate_percent: Any,
    fixed_annual_expenses: Any = 0.0,
) -> float:
    """
    Calculate annual deductions from gross income.

    Args:
        gross_annual_income: Gross scheduled rent per year
        vacancy_rate_percent: Expected vacancy loss in percent
        expense_rate_percent: Operating costs as percent of gross income
        fixed_annual_expenses: Absolute yearly costs on top of the rates

    Returns:
        Total annual deductions
    """
    gross = non_negative(gross_annual_income)
    rate_total = non_negative(vacancy_rate_percent) + non_negative(expense_rate_percent)
    return finite_or_zero(gross * rate_total / 100 + non_negative(fixed_annual_expenses))


def aggregate_income(
    gross_annual_income: Any,
    vacancy_rate_percent: Any,
    expense_rate_percent: Any,
    fixed_annual_expenses: Any = 0.0,
) -> IncomeResult:
    """
    Aggregate gross income and deductions into net operating income.

    Net operating income goes negative when deductions exceed income
    (e.g. vacancy + expense rates above 100%). That is a valid result.
    """
    gross = non_negative(gross_annual_income)
    deductions = calculate_deductions(
        gross, vacancy_rate_percent, expense_rate_percent, fixed_annual_expenses
    )
    return IncomeResult(
        gross_annual_income=gross,
        deductions=deductions,
        net_operating_income=finite_or_zero(gross - deductions),
    )
