"""
Financial Calculation Engine

Pure calculation modules for real estate investment analysis.
No calculator raises on bad input: unparsable values count as zero and
zero denominators produce zero.
"""

from app.calculations import (
    parsing,
    amortization,
    income,
    yields,
    analysis,
    portfolio,
)

__all__ = ["parsing", "amortization", "income", "yields", "analysis", "portfolio"]
