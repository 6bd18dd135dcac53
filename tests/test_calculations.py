"""
Tests for financial calculation engine.
"""

import math

import pytest
from datetime import date
from app.calculations.parsing import finite_or_zero, parse_number, non_negative, safe_divide
from app.calculations.amortization import (
    MAX_SCHEDULE_MONTHS,
    calculate_payment,
    calculate_amortization,
    calculate_remaining_balance,
    calculate_total_interest,
    generate_amortization_schedule,
    resolve_loan_amount,
)
from app.calculations.income import aggregate_income, calculate_deductions
from app.calculations.yields import calculate_yields
from app.calculations.analysis import analyze_investment
from app.calculations.portfolio import (
    calculate_portfolio_analytics,
    calculate_property_yield,
    round_half_up,
    summarize_by_region,
)


class TestParsing:
    """Test the parse-or-default rule."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("30000000", 30000000.0),
            (" 2.5 ", 2.5),
            ("1,200,000", 1200000.0),
            ("¥85,000", 85000.0),
            ("3.5%", 3.5),
            (42, 42.0),
            (-7.5, -7.5),
        ],
    )
    def test_parses_numeric_input(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize(
        "raw", [None, "", "   ", "abc", "12abc", "nan", "inf", float("nan"), True, [1]]
    )
    def test_invalid_input_defaults_to_zero(self, raw):
        assert parse_number(raw) == 0.0

    def test_custom_default(self):
        assert parse_number("", default=5.0) == 5.0

    def test_non_negative_clamps(self):
        assert non_negative("-100") == 0.0
        assert non_negative("100") == 100.0

    def test_safe_divide_zero_denominator(self):
        assert safe_divide(10, 0) == 0.0
        assert safe_divide(10, 4) == 2.5

    def test_safe_divide_overflow(self):
        assert safe_divide(1e308, 1e-10) == 0.0

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_finite_or_zero(self, value):
        assert finite_or_zero(value) == 0.0
        assert finite_or_zero(-12.5) == -12.5


class TestAmortization:
    """Test loan amortization calculations."""

    def test_calculate_payment_reference_scenario(self):
        """24M yen at 2.5% over 35 years."""
        payment = calculate_payment(24000000, 2.5, 35)
        assert abs(payment - 85700) / 85700 < 0.01

    def test_reference_scenario_totals(self):
        result = calculate_amortization(24000000, 2.5, 35)
        assert result.periods == 420
        assert result.annual_payment == pytest.approx(result.monthly_payment * 12)
        assert result.total_payment == pytest.approx(result.monthly_payment * 420)
        assert result.total_interest == pytest.approx(result.total_payment - 24000000)

    @pytest.mark.parametrize("principal, years", [(1200000, 10), (5000000, 2.5), (1, 1)])
    def test_zero_rate_is_straight_line(self, principal, years):
        payment = calculate_payment(principal, 0, years)
        assert payment == pytest.approx(principal / (years * 12))

    @pytest.mark.parametrize("rate", [0.1, 2.5, 8, 25])
    def test_total_payment_covers_principal(self, rate):
        result = calculate_amortization(10000000, rate, 20)
        assert result.total_payment >= 10000000
        assert result.total_interest > 0

    def test_zero_term_finances_nothing(self):
        result = calculate_amortization(10000000, 2.5, 0)
        assert result.monthly_payment == 0
        assert result.total_payment == 0
        assert result.total_interest == 0

    def test_zero_principal(self):
        assert calculate_payment(0, 2.5, 35) == 0

    def test_malformed_inputs_are_zero(self):
        result = calculate_amortization("abc", "", None)
        assert result.monthly_payment == 0
        assert result.total_payment == 0

    def test_negative_inputs_are_clamped(self):
        assert calculate_payment(-1000000, 2.5, 35) == 0
        assert calculate_payment(1200000, -5, 10) == pytest.approx(10000)

    def test_string_inputs(self):
        assert calculate_payment("24000000", "2.5", "35") == calculate_payment(24000000, 2.5, 35)

    def test_huge_term_does_not_overflow(self):
        payment = calculate_payment(1000000, 12, 1e9)
        assert payment == pytest.approx(1000000 * 0.01)

    def test_tiny_rate_does_not_divide_by_zero(self):
        payment = calculate_payment(1200000, 1e-18, 10)
        assert payment == pytest.approx(10000)

    def test_idempotent(self):
        assert calculate_amortization(24000000, 2.5, 35) == calculate_amortization(
            24000000, 2.5, 35
        )

    def test_remaining_balance(self):
        assert calculate_remaining_balance(1000000, 5, 30, 0) == pytest.approx(1000000)
        assert calculate_remaining_balance(1000000, 5, 30, 360) == pytest.approx(0, abs=0.01)
        halfway = calculate_remaining_balance(1000000, 5, 30, 180)
        assert 0 < halfway < 1000000

    def test_remaining_balance_zero_rate(self):
        assert calculate_remaining_balance(1200000, 0, 10, 60) == pytest.approx(600000)

    def test_huge_principal_stays_finite(self):
        result = calculate_amortization("1e308", "10", "100")
        for value in (
            result.monthly_payment,
            result.annual_payment,
            result.total_payment,
            result.total_interest,
        ):
            assert math.isfinite(value)
        assert result.monthly_payment > 0

    def test_remaining_balance_huge_inputs(self):
        assert math.isfinite(calculate_remaining_balance(1e308, 10, 100, 600))
        assert calculate_remaining_balance(1000000, 12, 1e9, 10**9) == 0


class TestAmortizationSchedule:
    """Test month-by-month schedules."""

    def test_schedule_length(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        assert len(schedule) == 60

    def test_schedule_dates_are_monthly(self):
        schedule = generate_amortization_schedule(100000, 6, 1, start_date=date(2025, 1, 31))
        assert schedule[0]["date"] == "2025-01-31"
        assert schedule[1]["date"] == "2025-02-28"
        assert schedule[-1]["date"] == "2025-12-31"

    def test_schedule_final_balance(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        assert schedule[-1]["ending_balance"] == 0
        assert sum(row["principal"] for row in schedule) == pytest.approx(100000)

    def test_schedule_interest_matches_summary(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        summary = calculate_amortization(100000, 6, 5)
        assert calculate_total_interest(schedule) == pytest.approx(summary.total_interest)

    def test_zero_rate_schedule(self):
        schedule = generate_amortization_schedule(120000, 0, 1, start_date=date(2025, 1, 1))
        assert all(row["interest"] == 0 for row in schedule)
        assert all(row["payment"] == pytest.approx(10000) for row in schedule)

    def test_empty_schedule_for_degenerate_loan(self):
        assert generate_amortization_schedule(0, 2.5, 35) == []
        assert generate_amortization_schedule(100000, 2.5, 0) == []

    def test_very_long_term_is_capped(self):
        schedule = generate_amortization_schedule(1000000, 12, 10000, start_date=date(2025, 1, 1))
        assert len(schedule) == MAX_SCHEDULE_MONTHS
        assert schedule[-1]["date"] == "2124-12-01"
        assert schedule[-1]["ending_balance"] > 0

    def test_schedule_stops_at_last_representable_date(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(9999, 6, 1))
        assert len(schedule) == 7
        assert schedule[-1]["date"] == "9999-12-01"

    def test_huge_principal_schedule_is_finite(self):
        schedule = generate_amortization_schedule("1e308", 10, 100, start_date=date(2025, 1, 1))
        assert 0 < len(schedule) <= MAX_SCHEDULE_MONTHS
        for row in schedule:
            assert math.isfinite(row["payment"])
            assert math.isfinite(row["ending_balance"])


class TestLoanAmountResolver:
    """Test the derived loan amount."""

    def test_price_minus_equity(self):
        assert resolve_loan_amount(30000000, 6000000) == 24000000

    def test_floored_at_zero(self):
        assert resolve_loan_amount(5000000, 8000000) == 0

    def test_blank_inputs(self):
        assert resolve_loan_amount("", "") == 0
        assert resolve_loan_amount("30000000", "") == 30000000


class TestIncomeAggregation:
    """Test deductions and net operating income."""

    def test_deductions(self):
        assert calculate_deductions(1440000, 5, 15) == pytest.approx(288000)

    def test_net_operating_income(self):
        result = aggregate_income(1440000, 5, 15)
        assert result.deductions == pytest.approx(288000)
        assert result.net_operating_income == pytest.approx(1152000)

    def test_fixed_expenses_added(self):
        result = aggregate_income(1440000, 5, 15, 180000)
        assert result.deductions == pytest.approx(468000)

    def test_rates_above_100_give_negative_income(self):
        result = aggregate_income(1000000, 60, 60)
        assert result.net_operating_income == pytest.approx(-200000)

    def test_zero_income(self):
        result = aggregate_income(0, 5, 15)
        assert result.deductions == 0
        assert result.net_operating_income == 0


class TestYieldMetrics:
    """Test yield calculations."""

    def test_yields(self):
        result = calculate_yields(
            price=30000000,
            gross_annual_income=1440000,
            deductions=180000,
            equity=6000000,
            annual_payment=1000000,
        )
        assert result.gross_yield_percent == pytest.approx(4.8)
        assert result.net_yield_percent == pytest.approx(4.2)
        assert result.annual_expenses == pytest.approx(1180000)
        assert result.net_income == pytest.approx(260000)
        assert result.cash_on_cash_percent == pytest.approx(260000 / 6000000 * 100)
        assert result.payment_to_income_ratio_percent == pytest.approx(1000000 / 1440000 * 100)

    def test_net_yield_excludes_debt_service(self):
        with_loan = calculate_yields(30000000, 1440000, 180000, 6000000, 2000000)
        without_loan = calculate_yields(30000000, 1440000, 180000, 6000000, 0)
        assert with_loan.net_yield_percent == without_loan.net_yield_percent
        assert with_loan.cash_on_cash_percent < without_loan.cash_on_cash_percent

    @pytest.mark.parametrize("income", [0, 1440000, 99999999])
    def test_zero_price_gives_zero_yields(self, income):
        result = calculate_yields(0, income, 100000, 6000000, 500000)
        assert result.gross_yield_percent == 0
        assert result.net_yield_percent == 0

    @pytest.mark.parametrize("payment", [0, 500000, 5000000])
    def test_zero_equity_gives_zero_cash_on_cash(self, payment):
        result = calculate_yields(30000000, 1440000, 100000, 0, payment)
        assert result.cash_on_cash_percent == 0

    def test_zero_income_gives_zero_payment_ratio(self):
        result = calculate_yields(30000000, 0, 0, 6000000, 1000000)
        assert result.payment_to_income_ratio_percent == 0

    def test_negative_net_income_cash_on_cash(self):
        result = calculate_yields(30000000, 1000000, 0, 5000000, 2000000)
        assert result.net_income == pytest.approx(-1000000)
        assert result.cash_on_cash_percent == pytest.approx(-20)

    def test_no_nan_or_inf(self):
        result = calculate_yields("x", None, "", "", "")
        for value in (
            result.gross_yield_percent,
            result.net_yield_percent,
            result.cash_on_cash_percent,
            result.payment_to_income_ratio_percent,
        ):
            assert math.isfinite(value)
            assert value == 0

    def test_tiny_price_does_not_overflow(self):
        result = calculate_yields("1e-300", "1e10", 0, 0, 0)
        assert result.gross_yield_percent == 0
        assert result.net_yield_percent == 0
        assert math.isfinite(result.net_income)

    def test_huge_income_stays_finite(self):
        result = calculate_yields(1, 1e308, 1e308, 1e-300, 1e308)
        for value in (
            result.gross_yield_percent,
            result.net_yield_percent,
            result.cash_on_cash_percent,
            result.payment_to_income_ratio_percent,
            result.annual_expenses,
            result.net_income,
        ):
            assert math.isfinite(value)


class TestInvestmentAnalysis:
    """Test the full calculator pipeline."""

    def test_reference_investment(self):
        result = analyze_investment(
            purchase_price="30000000",
            monthly_rent="120000",
            monthly_expenses="15000",
            equity="6000000",
            interest_rate="2.5",
            loan_term_years="35",
        )
        assert result.loan_amount == 24000000
        assert abs(result.amortization.monthly_payment - 85700) / 85700 < 0.01
        assert result.income.gross_annual_income == 1440000
        assert result.income.deductions == 180000
        assert result.yields.gross_yield_percent == pytest.approx(4.8)
        assert result.yields.net_yield_percent == pytest.approx(4.2)
        expected_cash_flow = 120000 - 15000 - result.amortization.monthly_payment
        assert result.monthly_cash_flow == pytest.approx(expected_cash_flow)

    def test_equity_exceeding_price_means_no_loan(self):
        result = analyze_investment(
            purchase_price=5000000, monthly_rent=50000, equity=8000000,
            interest_rate=2.5, loan_term_years=35,
        )
        assert result.loan_amount == 0
        assert result.amortization.monthly_payment == 0
        assert result.yields.payment_to_income_ratio_percent == 0

    def test_blank_form(self):
        result = analyze_investment("", "", "", "", "", "", "", "")
        assert result.loan_amount == 0
        assert result.monthly_cash_flow == 0
        assert result.yields.gross_yield_percent == 0

    def test_rates_applied(self):
        result = analyze_investment(
            purchase_price=30000000, monthly_rent=100000, vacancy_rate=5, expense_rate=10,
        )
        assert result.income.deductions == pytest.approx(180000)
        assert result.yields.net_yield_percent == pytest.approx(3.4)


class TestPortfolioAnalytics:
    """Test portfolio aggregation."""

    def _properties(self):
        return [
            {
                "region": "東京都渋谷区",
                "current_value": 30000000,
                "monthly_rent": 120000,
                "monthly_expenses": 15000,
                "is_occupied": True,
            },
            {
                "region": "神奈川県横浜市",
                "current_value": 20000000,
                "monthly_rent": 90000,
                "monthly_expenses": 10000,
                "is_occupied": False,
            },
        ]

    def test_two_property_portfolio(self):
        analytics = calculate_portfolio_analytics(self._properties())
        assert analytics.total_value == 50000000
        assert analytics.gross_monthly_income == 210000
        assert analytics.gross_monthly_expenses == 25000
        assert analytics.net_monthly_income == 185000
        assert analytics.average_yield == 4.4
        assert analytics.vacancy_rate == 50.0
        assert analytics.property_count == 2
        assert analytics.occupied_count == 1
        assert analytics.vacant_count == 1

    def test_empty_portfolio(self):
        analytics = calculate_portfolio_analytics([])
        assert analytics.total_value == 0
        assert analytics.average_yield == 0
        assert analytics.vacancy_rate == 0
        assert analytics.property_count == 0

    def test_zero_value_portfolio(self):
        analytics = calculate_portfolio_analytics(
            [{"current_value": 0, "monthly_rent": 100000, "monthly_expenses": 0, "is_occupied": True}]
        )
        assert analytics.average_yield == 0
        assert analytics.net_monthly_income == 100000

    def test_vacancy_rounding(self):
        records = [{"current_value": 1, "is_occupied": i == 0} for i in range(3)]
        analytics = calculate_portfolio_analytics(records)
        assert analytics.vacancy_rate == 66.7

    def test_round_half_up(self):
        assert round_half_up(0.25) == 0.3
        assert round_half_up(4.44) == 4.4
        assert round_half_up(0.0) == 0.0

    def test_property_yield(self):
        assert calculate_property_yield(120000, 30000000) == 4.8
        assert calculate_property_yield(90000, 20000000) == 5.4
        assert calculate_property_yield(90000, 0) == 0

    def test_summarize_by_region(self):
        records = self._properties() + [
            {"region": "東京都渋谷区", "current_value": 10000000}
        ]
        summary = summarize_by_region(records)
        assert summary == [
            {"region": "東京都渋谷区", "count": 2, "value": 40000000},
            {"region": "神奈川県横浜市", "count": 1, "value": 20000000},
        ]

    def test_huge_values_stay_finite(self):
        record = {
            "region": "東京都渋谷区",
            "current_value": 1e308,
            "monthly_rent": 1e308,
            "is_occupied": True,
        }
        records = [record, dict(record)]
        analytics = calculate_portfolio_analytics(records)
        assert analytics.total_value == 0
        assert math.isfinite(analytics.gross_monthly_income)
        assert math.isfinite(analytics.average_yield)
        assert summarize_by_region(records)[0]["value"] == 0
        assert calculate_property_yield(1e10, 1e-300) == 0
