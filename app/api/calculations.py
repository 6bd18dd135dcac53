"""
Financial calculation API endpoints.

These endpoints accept raw form values (numbers, numeric strings or blanks)
and return calculated results. Nothing here rejects a numeric field:
unparsable values are treated as 0 by the calculators.
"""

from fastapi import APIRouter
from typing import Dict, List, Optional, Union
from datetime import date

from app.api.schemas import CamelModel
from app.calculations.amortization import (
    calculate_amortization,
    calculate_remaining_balance,
    generate_amortization_schedule,
    resolve_loan_amount,
)
from app.calculations.analysis import analyze_investment

router = APIRouter()

RawNumber = Optional[Union[float, str]]


def format_percent(value: float) -> str:
    """Two-decimal percentage string."""
    return f"{value:.2f}"


def format_yen(value: float) -> str:
    """Whole-yen amount with thousands separators."""
    return f"¥{value:,.0f}"


class InvestmentInput(CamelModel):
    """Raw fields from the investment calculator form."""

    purchase_price: RawNumber = None
    monthly_rent: RawNumber = None
    monthly_expenses: RawNumber = None
    vacancy_rate: RawNumber = None
    expense_rate: RawNumber = None
    equity: RawNumber = None
    interest_rate: RawNumber = None
    loan_term_years: RawNumber = None
    # Accepted but ignored: always derived from price and equity
    loan_amount: RawNumber = None


class InvestmentResponse(CamelModel):
    """Calculated investment figures."""

    loan_amount: float
    monthly_payment: float
    annual_payment: float
    total_payment: float
    total_interest: float
    gross_annual_income: float
    deductions: float
    net_operating_income: float
    annual_expenses: float
    net_income: float
    monthly_cash_flow: float
    gross_yield: float
    net_yield: float
    cash_on_cash: float
    payment_to_income_ratio: float
    formatted: Dict[str, str]


@router.post("/investment", response_model=InvestmentResponse)
async def calculate_investment(inputs: InvestmentInput):
    """Run the full investment analysis."""
    result = analyze_investment(
        purchase_price=inputs.purchase_price,
        monthly_rent=inputs.monthly_rent,
        equity=inputs.equity,
        interest_rate=inputs.interest_rate,
        loan_term_years=inputs.loan_term_years,
        vacancy_rate=inputs.vacancy_rate,
        expense_rate=inputs.expense_rate,
        monthly_expenses=inputs.monthly_expenses,
    )
    amortization = result.amortization
    yields = result.yields

    return InvestmentResponse(
        loan_amount=result.loan_amount,
        monthly_payment=amortization.monthly_payment,
        annual_payment=amortization.annual_payment,
        total_payment=amortization.total_payment,
        total_interest=amortization.total_interest,
        gross_annual_income=result.income.gross_annual_income,
        deductions=result.income.deductions,
        net_operating_income=result.income.net_operating_income,
        annual_expenses=yields.annual_expenses,
        net_income=yields.net_income,
        monthly_cash_flow=result.monthly_cash_flow,
        gross_yield=yields.gross_yield_percent,
        net_yield=yields.net_yield_percent,
        cash_on_cash=yields.cash_on_cash_percent,
        payment_to_income_ratio=yields.payment_to_income_ratio_percent,
        formatted={
            "grossYield": format_percent(yields.gross_yield_percent),
            "netYield": format_percent(yields.net_yield_percent),
            "cashOnCash": format_percent(yields.cash_on_cash_percent),
            "paymentToIncomeRatio": format_percent(yields.payment_to_income_ratio_percent),
            "loanAmount": format_yen(result.loan_amount),
            "monthlyPayment": format_yen(amortization.monthly_payment),
            "monthlyCashFlow": format_yen(result.monthly_cash_flow),
        },
    )


class LoanAmountInput(CamelModel):
    """Inputs for the derived loan amount."""

    purchase_price: RawNumber = None
    equity: RawNumber = None


@router.post("/loan-amount")
async def calculate_loan_amount(inputs: LoanAmountInput):
    """Derive the loan amount from price and own capital."""
    return {"loanAmount": resolve_loan_amount(inputs.purchase_price, inputs.equity)}


class AmortizationInput(CamelModel):
    """Input for amortization calculation."""

    principal: RawNumber = None
    annual_rate: RawNumber = None
    term_years: RawNumber = None
    start_date: Optional[date] = None
    payments_completed: int = 0
    include_schedule: bool = True


class AmortizationRow(CamelModel):
    """One month of an amortization schedule."""

    period: int
    date: str
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


class AmortizationResponse(CamelModel):
    """Loan summary with optional monthly schedule."""

    monthly_payment: float
    annual_payment: float
    total_payment: float
    total_interest: float
    remaining_balance: float
    schedule: List[AmortizationRow]


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization_schedule(inputs: AmortizationInput):
    """Summarize a loan and generate its amortization schedule."""
    summary = calculate_amortization(inputs.principal, inputs.annual_rate, inputs.term_years)

    schedule = []
    if inputs.include_schedule:
        schedule = generate_amortization_schedule(
            principal=inputs.principal,
            annual_rate_percent=inputs.annual_rate,
            term_years=inputs.term_years,
            start_date=inputs.start_date,
        )

    return AmortizationResponse(
        monthly_payment=summary.monthly_payment,
        annual_payment=summary.annual_payment,
        total_payment=summary.total_payment,
        total_interest=summary.total_interest,
        remaining_balance=calculate_remaining_balance(
            inputs.principal, inputs.annual_rate, inputs.term_years, inputs.payments_completed
        ),
        schedule=[AmortizationRow(**row) for row in schedule],
    )
