"""
utils/swp.py -- Systematic Withdrawal Plan simulator.

calculate_swp(lumpsum_amount, monthly_withdrawal, annual_return, years, inflation_rate=0)
  -> SWPResult

Rules:
  - From year 2 on, month 1 raises the withdrawal by inflation_rate (when > 0).
  - Each month: if corpus >= withdrawal, withdraw then grow the remainder by
    one month's return. Otherwise the corpus is depleted: the first such
    month is recorded once and the corpus is pinned at 0 from then on.
  - The yearly series ends with the year in which the corpus was depleted.
  - lasting_period: "{y} years {m} months" when depleted,
    "{years}+ years (corpus sustains)" otherwise.
"""
from __future__ import annotations

from typing import Iterator

from app.logging import get_logger
from app.models import SWPResult, SWPYear
from app.utils.finance import monthly_rate, round_rupees

logger = get_logger(__name__)


def _withdraw(
    corpus: float,
    withdrawal: float,
    rate: float,
    years: int,
    inflation: float,
) -> Iterator[tuple[int, float, float, float, float, int]]:
    """
    Yield (year, corpus, withdrawn_this_year, withdrawal, cumulative, depletion_month)
    at each year end. depletion_month is 0 until the corpus runs out.
    """
    total = 0.0
    depletion_month = 0

    for year in range(1, years + 1):
        withdrawn = 0.0
        for month in range(1, 13):
            if month == 1 and year > 1 and inflation > 0:
                withdrawal *= 1 + inflation

            if corpus >= withdrawal:
                corpus -= withdrawal
                total += withdrawal
                withdrawn += withdrawal
                corpus *= 1 + rate
            else:
                if not depletion_month:
                    depletion_month = (year - 1) * 12 + month
                corpus = 0.0

        yield year, corpus, withdrawn, withdrawal, total, depletion_month

        if depletion_month and corpus == 0:
            return


def calculate_swp(
    lumpsum_amount: float,
    monthly_withdrawal: float,
    annual_return: float,
    years: int,
    inflation_rate: float = 0.0,
) -> SWPResult:
    """Simulate monthly withdrawals from ``lumpsum_amount`` over ``years`` years."""
    rows = list(
        _withdraw(
            lumpsum_amount,
            monthly_withdrawal,
            monthly_rate(annual_return),
            years,
            inflation_rate / 100,
        )
    )

    yearly_data = tuple(
        SWPYear(
            year=year,
            corpus=round_rupees(corpus),
            withdrawn=round_rupees(withdrawn),
            monthly_withdrawal=round_rupees(withdrawal),
            cumulative_withdrawn=round_rupees(cumulative),
        )
        for year, corpus, withdrawn, withdrawal, cumulative, _ in rows
    )

    if rows:
        _, final_corpus, _, _, total_withdrawn, depletion_month = rows[-1]
    else:
        final_corpus, total_withdrawn, depletion_month = lumpsum_amount, 0.0, 0

    corpus_depleted = depletion_month > 0
    if corpus_depleted:
        years_lasted, months_lasted = divmod(depletion_month, 12)
        lasting_period = f"{years_lasted} years {months_lasted} months"
    else:
        years_lasted, months_lasted = years, 0
        lasting_period = f"{years}+ years (corpus sustains)"

    logger.debug(
        "swp: corpus=%s withdrawal=%s return=%s years=%s inflation=%s -> %s",
        lumpsum_amount, monthly_withdrawal, annual_return, years, inflation_rate, lasting_period,
    )

    return SWPResult(
        yearly_data=yearly_data,
        total_withdrawn=round_rupees(total_withdrawn),
        final_corpus=round_rupees(final_corpus),
        corpus_depleted=corpus_depleted,
        depletion_month=depletion_month,
        years_lasted=years_lasted,
        months_lasted=months_lasted,
        lasting_period=lasting_period,
    )
