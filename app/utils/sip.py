"""
utils/sip.py -- Systematic Investment Plan projector.

calculate_sip(monthly_investment, annual_return, years, step_up_percentage=0)
  -> SIPResult

Rules (per month, in this order):
  invested += contribution
  fv        = (fv + contribution) * (1 + r)        r = annual_return / 12 / 100

Step-up raises the contribution by step_up_percentage once between years:
year 1 uses the base amount, year 2 base * (1 + s), and so on. No step-up
is applied after the final year.
"""
from __future__ import annotations

from typing import Iterator, NamedTuple

from app.logging import get_logger
from app.models import SIPResult, SIPYear
from app.utils.finance import monthly_rate, round_rupees

logger = get_logger(__name__)


class _SIPState(NamedTuple):
    year: int
    invested: float
    future_value: float
    contribution: float


def _accumulate(
    monthly_investment: float,
    rate: float,
    years: int,
    step_up_rate: float,
) -> Iterator[_SIPState]:
    invested = 0.0
    future_value = 0.0
    contribution = monthly_investment

    for year in range(1, years + 1):
        for _ in range(12):
            invested += contribution
            future_value = (future_value + contribution) * (1 + rate)

        yield _SIPState(year, invested, future_value, contribution)

        if step_up_rate > 0 and year < years:
            contribution *= 1 + step_up_rate


def calculate_sip(
    monthly_investment: float,
    annual_return: float,
    years: int,
    step_up_percentage: float = 0.0,
) -> SIPResult:
    """
    Project a monthly SIP over ``years`` years.

    wealth_gained is derived from the rounded totals so that
    future_value - invested_amount == wealth_gained holds exactly.
    """
    states = list(
        _accumulate(monthly_investment, monthly_rate(annual_return), years, step_up_percentage / 100)
    )

    yearly_data = tuple(
        SIPYear(
            year=s.year,
            invested=round_rupees(s.invested),
            wealth=round_rupees(s.future_value) - round_rupees(s.invested),
            total=round_rupees(s.future_value),
            monthly_investment=round_rupees(s.contribution),
        )
        for s in states
    )

    invested_amount = yearly_data[-1].invested if yearly_data else 0
    future_value = yearly_data[-1].total if yearly_data else 0

    logger.debug(
        "sip: monthly=%s return=%s years=%s step_up=%s -> fv=%s",
        monthly_investment, annual_return, years, step_up_percentage, future_value,
    )

    return SIPResult(
        invested_amount=invested_amount,
        future_value=future_value,
        wealth_gained=future_value - invested_amount,
        yearly_data=yearly_data,
    )
