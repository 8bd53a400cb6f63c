"""
utils/rent_vs_buy.py -- Rent-vs-buy net worth comparison.

calculate_rent_vs_buy(...) -> RentVsBuyResult

Two scenarios run side by side, month by month, for ``years`` years:

  Buy:  loan = home_price - down_payment, repaid by EMI while
        year <= loan_tenure. Home value at the end of year y is
        home_price * (1 + appreciation)^y.
        Net worth = home value - outstanding loan balance.

  Rent: the down payment is invested on day one. Every month while the
        loan would still be running, max(0, EMI - rent) is added, then the
        corpus grows by one month's expected return. After the loan term
        nothing new is added; the corpus keeps compounding.
        Net worth = investment corpus.

Rent escalates by annual_rent_increase once per year (not after the final
year). The verdict is Rent only when the rent net worth strictly exceeds
the buy net worth.
"""
from __future__ import annotations

from typing import Iterator, NamedTuple

from app.logging import get_logger
from app.models import RentVsBuyResult, RentVsBuyYear, Verdict
from app.utils.finance import amortize_month, calculate_emi, monthly_rate, round_rupees

logger = get_logger(__name__)


class _YearEnd(NamedTuple):
    year: int
    rent_paid: float
    emi_paid: float
    total_rent: float
    total_emi: float
    corpus: float
    home_value: float
    loan_balance: float
    current_rent: float


def _simulate(
    monthly_rent: float,
    rent_increase: float,
    home_price: float,
    appreciation: float,
    loan_amount: float,
    loan_rate: float,
    loan_tenure: int,
    emi: float,
    return_rate: float,
    down_payment: float,
    years: int,
) -> Iterator[_YearEnd]:
    corpus = down_payment
    balance = loan_amount
    current_rent = monthly_rent
    total_rent = 0.0
    total_emi = 0.0

    for year in range(1, years + 1):
        loan_active = year <= loan_tenure
        home_value = home_price * (1 + appreciation) ** year
        year_rent = 0.0
        year_emi = 0.0

        for _ in range(12):
            total_rent += current_rent
            year_rent += current_rent

            savings = max(0.0, emi - current_rent) if loan_active else 0.0
            corpus = (corpus + savings) * (1 + return_rate)

            if loan_active:
                _, _, balance = amortize_month(balance, emi, loan_rate)
                total_emi += emi
                year_emi += emi

        if year < years:
            current_rent *= 1 + rent_increase

        yield _YearEnd(
            year, year_rent, year_emi, total_rent, total_emi,
            corpus, home_value, balance, current_rent,
        )


def calculate_rent_vs_buy(
    monthly_rent: float,
    annual_rent_increase: float,
    home_price: float,
    down_payment: float,
    interest_rate: float,
    loan_tenure: int,
    home_appreciation: float,
    expected_return: float,
    years: int,
) -> RentVsBuyResult:
    """Compare renting and investing against buying with a home loan."""
    loan_amount = home_price - down_payment
    emi = calculate_emi(loan_amount, interest_rate, loan_tenure)

    rows = list(
        _simulate(
            monthly_rent,
            annual_rent_increase / 100,
            home_price,
            home_appreciation / 100,
            loan_amount,
            monthly_rate(interest_rate),
            loan_tenure,
            emi,
            monthly_rate(expected_return),
            down_payment,
            years,
        )
    )

    yearly_data = tuple(
        RentVsBuyYear(
            year=r.year,
            rent_paid=round_rupees(r.rent_paid),
            emi_paid=round_rupees(r.emi_paid),
            cumulative_rent=round_rupees(r.total_rent),
            cumulative_emi=round_rupees(r.total_emi),
            investment_corpus=round_rupees(r.corpus),
            home_value=round_rupees(r.home_value),
            home_equity=round_rupees(r.home_value - r.loan_balance),
            rent_net_worth=round_rupees(r.corpus),
            buy_net_worth=round_rupees(r.home_value - r.loan_balance),
            current_rent=round_rupees(r.current_rent),
        )
        for r in rows
    )

    if rows:
        last = rows[-1]
        corpus, home_value, balance = last.corpus, last.home_value, last.loan_balance
        total_rent, total_emi = last.total_rent, last.total_emi
    else:
        corpus, home_value, balance = down_payment, home_price, loan_amount
        total_rent = total_emi = 0.0

    rent_net_worth = round_rupees(corpus)
    buy_net_worth = round_rupees(home_value - balance)
    verdict = Verdict.RENT if rent_net_worth > buy_net_worth else Verdict.BUY

    logger.debug(
        "rent vs buy: rent=%s price=%s down=%s years=%s -> rent_nw=%s buy_nw=%s verdict=%s",
        monthly_rent, home_price, down_payment, years, rent_net_worth, buy_net_worth, verdict.value,
    )

    return RentVsBuyResult(
        yearly_data=yearly_data,
        loan_amount=round_rupees(loan_amount),
        emi=round_rupees(emi),
        total_rent_paid=round_rupees(total_rent),
        total_emi_paid=round_rupees(total_emi),
        final_investment_corpus=rent_net_worth,
        final_home_value=round_rupees(home_value),
        final_home_equity=buy_net_worth,
        opportunity_cost=round_rupees(corpus - down_payment),
        rent_scenario_net_worth=rent_net_worth,
        buy_scenario_net_worth=buy_net_worth,
        verdict=verdict,
        difference=abs(rent_net_worth - buy_net_worth),
    )
