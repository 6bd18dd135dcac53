"""
Investment Analysis

Runs the calculators in order for one set of raw form inputs:
loan amount -> amortization -> income aggregation -> yield metrics.
"""

from dataclasses import dataclass
from typing import Any

from app.calculations.amortization import (
    AmortizationResult,
    calculate_amortization,
    resolve_loan_amount,
)
from app.calculations.income import IncomeResult, aggregate_income
from app.calculations.parsing import finite_or_zero, non_negative
from app.calculations.yields import YieldResult, calculate_yields


@dataclass(frozen=True)
class InvestmentAnalysis:
    """All figures shown by the investment calculator."""

    loan_amount: float
    amortization: AmortizationResult
    income: IncomeResult
    yields: YieldResult
    monthly_cash_flow: float


def analyze_investment(
    purchase_price: Any = 0,
    monthly_rent: Any = 0,
    equity: Any = 0,
    interest_rate: Any = 0,
    loan_term_years: Any = 0,
    vacancy_rate: Any = 0,
    expense_rate: Any = 0,
    monthly_expenses: Any = 0,
) -> InvestmentAnalysis:
    """
    Analyze a single property investment.

    Every argument may be a number, a numeric string or blank; anything
    unparsable counts as 0.

    Args:
        purchase_price: Property price
        monthly_rent: Gross monthly rent
        equity: Own capital / down payment
        interest_rate: Annual loan rate in percent
        loan_term_years: Loan term in years
        vacancy_rate: Expected vacancy in percent of gross rent
        expense_rate: Operating costs in percent of gross rent
        monthly_expenses: Absolute monthly operating costs

    Returns:
        InvestmentAnalysis snapshot
    """
    price = non_negative(purchase_price)
    equity = non_negative(equity)

    loan_amount = resolve_loan_amount(price, equity)
    amortization = calculate_amortization(loan_amount, interest_rate, loan_term_years)

    income = aggregate_income(
        finite_or_zero(non_negative(monthly_rent) * 12),
        vacancy_rate,
        expense_rate,
        finite_or_zero(non_negative(monthly_expenses) * 12),
    )

    yields = calculate_yields(
        price=price,
        gross_annual_income=income.gross_annual_income,
        deductions=income.deductions,
        equity=equity,
        annual_payment=amortization.annual_payment,
    )

    return InvestmentAnalysis(
        loan_amount=loan_amount,
        amortization=amortization,
        income=income,
        yields=yields,
        monthly_cash_flow=yields.net_income / 12,
    )
