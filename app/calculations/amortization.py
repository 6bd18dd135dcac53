"""
Loan Amortization Calculations

Fixed-payment loan math: periodic payment, totals, remaining balance and
month-by-month schedules. Rates are annual percentages (2.5 means 2.5%),
terms are in years and may be fractional.
"""

from dataclasses import dataclass
from typing import Any, List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

from app.calculations.parsing import finite_or_zero, non_negative

# Schedules stop after 100 years of monthly rows
MAX_SCHEDULE_MONTHS = 1200


@dataclass(frozen=True)
class AmortizationResult:
    """Summary of a fixed-payment loan."""

    monthly_payment: float
    annual_payment: float
    total_payment: float
    total_interest: float
    periods: float


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def _payment(principal: float, monthly_rate: float, periods: float) -> float:
    if principal <= 0 or periods <= 0:
        return 0.0

    if monthly_rate == 0:
        return finite_or_zero(principal / periods)

    try:
        growth = (1 + monthly_rate) ** periods
    except OverflowError:
        # Payment converges to interest-only as the term grows
        return finite_or_zero(principal * monthly_rate)

    if growth == 1:
        return finite_or_zero(principal / periods)

    return finite_or_zero(principal * (monthly_rate * growth / (growth - 1)))


def calculate_payment(
    principal: Any, annual_rate_percent: Any, term_years: Any
) -> float:
    """
    Calculate the fixed monthly loan payment.

    Matches Excel's PMT() (sign flipped). A zero rate repays the principal
    in equal straight-line installments; a zero term finances nothing.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent (e.g., 2.5)
        term_years: Repayment term in years

    Returns:
        Monthly payment amount (non-negative)
    """
    principal = non_negative(principal)
    rate = _monthly_rate(non_negative(annual_rate_percent))
    periods = non_negative(term_years) * 12
    return _payment(principal, rate, periods)


def calculate_amortization(
    principal: Any, annual_rate_percent: Any, term_years: Any
) -> AmortizationResult:
    """Calculate monthly, annual and lifetime totals for a loan."""
    principal = non_negative(principal)
    periods = non_negative(term_years) * 12
    monthly_payment = calculate_payment(principal, annual_rate_percent, term_years)
    total_payment = finite_or_zero(monthly_payment * periods)

    return AmortizationResult(
        monthly_payment=monthly_payment,
        annual_payment=finite_or_zero(monthly_payment * 12),
        total_payment=total_payment,
        total_interest=max(0.0, total_payment - principal) if periods > 0 else 0.0,
        periods=periods,
    )


def calculate_remaining_balance(
    principal: Any,
    annual_rate_percent: Any,
    term_years: Any,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N payments."""
    principal = non_negative(principal)
    monthly_rate = _monthly_rate(non_negative(annual_rate_percent))
    periods = non_negative(term_years) * 12
    payments_completed = max(0, int(payments_completed))

    if periods <= 0:
        return 0.0

    payment = _payment(principal, monthly_rate, periods)

    if monthly_rate == 0:
        return max(0.0, finite_or_zero(principal - payment * payments_completed))

    try:
        growth = (1 + monthly_rate) ** payments_completed
    except OverflowError:
        return 0.0

    balance = principal * growth - payment * ((growth - 1) / monthly_rate)

    return max(0.0, finite_or_zero(balance))


def generate_amortization_schedule(
    principal: Any,
    annual_rate_percent: Any,
    term_years: Any,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a month-by-month amortization schedule.

    The term is rounded to whole months. The final row absorbs any residual
    balance so the loan always ends at zero. Rows stop after
    MAX_SCHEDULE_MONTHS or at the last representable date, whichever comes
    first; a truncated schedule ends with its balance still outstanding.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent
        term_years: Repayment term in years
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows
    """
    principal = non_negative(principal)
    monthly_rate = _monthly_rate(non_negative(annual_rate_percent))
    total_months = int(round(non_negative(term_years) * 12))

    if principal <= 0 or total_months <= 0:
        return []

    if start_date is None:
        start_date = date.today()

    payment = _payment(principal, monthly_rate, total_months)
    schedule = []
    balance = principal

    months_until_max_date = (date.max.year - start_date.year) * 12 + (12 - start_date.month) + 1
    row_count = min(total_months, MAX_SCHEDULE_MONTHS, months_until_max_date)

    for period in range(1, row_count + 1):
        period_date = start_date + relativedelta(months=period - 1)
        interest = balance * monthly_rate

        if period == total_months:
            principal_pmt = balance
        else:
            principal_pmt = min(max(0.0, payment - interest), balance)

        ending_balance = max(0.0, balance - principal_pmt)

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": balance,
                "payment": finite_or_zero(principal_pmt + interest),
                "interest": interest,
                "principal": principal_pmt,
                "ending_balance": ending_balance,
            }
        )

        balance = ending_balance
        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over a schedule."""
    return sum(row["interest"] for row in schedule)


def resolve_loan_amount(price: Any, equity: Any) -> float:
    """
    Derive the loan amount from price and own capital.

    Always recomputed from its inputs; a manually entered loan amount is
    never consulted.
    """
    return max(0.0, non_negative(price) - non_negative(equity))
