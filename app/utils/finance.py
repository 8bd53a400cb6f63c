"""
utils/finance.py -- Loan amortization engine.

monthly_rate(annual_rate)                        -> annual % to monthly decimal
calculate_emi(principal, annual_rate, years)     -> equated monthly installment
amortize_month(balance, emi, rate)               -> one month's interest/principal split
calculate_prepayment_impact(principal, annual_rate, years, prepayment, frequency)
                                                 -> PrepaymentImpact

Rules:
  r   = annual_rate / 12 / 100
  n   = years * 12
  EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)       (r == 0 -> P / n)
  Prepayment is applied after the month's EMI:
    onetime -> full amount at month 12 only
    annual  -> full amount every 12th month
    monthly -> amount / 12 every month
  The loop stops the first month the balance reaches 0; that month is the
  payoff month. Balances are never reported negative.

Money is carried as float and rounded half-up to whole rupees only when a
snapshot or summary figure is produced.
"""
from __future__ import annotations

import math
from typing import Iterator

from app.exceptions import InvalidInputError
from app.logging import get_logger
from app.models import LoanYear, PrepaymentFrequency, PrepaymentImpact

logger = get_logger(__name__)

# Residual balances below half a paisa are float noise, not debt
BALANCE_EPSILON = 0.005


def round_rupees(value: float) -> int:
    """Round half-up to a whole rupee (0.5 -> 1, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def format_tenure(months: int) -> str:
    """Render a month count as '{years} years {months} months'."""
    return f"{months // 12} years {months % 12} months"


def monthly_rate(annual_rate: float) -> float:
    return annual_rate / 12 / 100


def calculate_emi(principal: float, annual_rate: float, years: int) -> float:
    """
    Equated monthly installment for a fully amortizing loan.

    Zero interest degrades to straight-line repayment (principal / months)
    instead of dividing by zero. Zero principal or zero months gives 0.
    """
    months = years * 12
    if principal == 0 or months <= 0:
        return 0.0

    r = monthly_rate(annual_rate)
    if r == 0:
        return principal / months

    factor = (1 + r) ** months
    return principal * r * factor / (factor - 1)


def amortize_month(balance: float, emi: float, rate: float) -> tuple[float, float, float]:
    """
    Split one EMI into interest and principal.

    Returns (interest, principal_paid, new_balance); new_balance is clamped
    at 0 so an overshooting final installment never shows as negative debt.
    """
    interest = balance * rate
    principal_paid = emi - interest
    return interest, principal_paid, max(0.0, balance - principal_paid)


def parse_frequency(frequency: PrepaymentFrequency | str) -> PrepaymentFrequency:
    """Coerce a frequency string, failing fast on anything outside the enum."""
    try:
        return PrepaymentFrequency(frequency)
    except ValueError:
        allowed = ", ".join(f.value for f in PrepaymentFrequency)
        raise InvalidInputError(
            f"Unknown prepayment frequency {frequency!r}; expected one of: {allowed}"
        )


def _prepayment_for_month(
    month: int, prepayment: float, frequency: PrepaymentFrequency
) -> float:
    if frequency is PrepaymentFrequency.ONE_TIME:
        return prepayment if month == 12 else 0.0
    if frequency is PrepaymentFrequency.ANNUAL:
        return prepayment if month % 12 == 0 else 0.0
    return prepayment / 12


def _schedule(
    principal: float,
    emi: float,
    rate: float,
    months: int,
    prepayment: float,
    frequency: PrepaymentFrequency,
) -> Iterator[tuple[int, float, float]]:
    """
    Yield (month, interest, closing_balance) until payoff or the term ends.

    The month in which the balance first reaches 0 is the last one yielded.
    """
    balance = principal
    for month in range(1, months + 1):
        interest = balance * rate
        balance -= emi - interest
        balance -= _prepayment_for_month(month, prepayment, frequency)
        if balance < BALANCE_EPSILON:
            balance = 0.0
        yield month, interest, balance
        if balance <= 0:
            return


def calculate_prepayment_impact(
    principal: float,
    annual_rate: float,
    years: int,
    prepayment: float = 0.0,
    frequency: PrepaymentFrequency | str = PrepaymentFrequency.ANNUAL,
) -> PrepaymentImpact:
    """
    Compare a loan repaid on schedule with the same loan plus prepayments.

    Both scenarios run through the same month loop, so a zero prepayment
    reports exactly zero interest saved and a positive one can only save.

    yearly_data holds one LoanYear per year of the original term; once the
    prepaid loan is closed its balance stays at 0 for the remaining years.
    """
    freq = parse_frequency(frequency)
    rate = monthly_rate(annual_rate)
    months = years * 12
    emi = calculate_emi(principal, annual_rate, years)

    baseline = list(_schedule(principal, emi, rate, months, 0.0, freq))
    prepaid = list(_schedule(principal, emi, rate, months, prepayment, freq))

    original_interest = sum(interest for _, interest, _ in baseline)
    new_interest = sum(interest for _, interest, _ in prepaid)
    payoff_month = prepaid[-1][0] if prepaid and prepaid[-1][2] <= 0 else months
    months_saved = months - payoff_month

    baseline_balance = {month: balance for month, _, balance in baseline}
    prepaid_balance = {month: balance for month, _, balance in prepaid}
    yearly_data = tuple(
        LoanYear(
            year=year,
            without_prepayment=round_rupees(baseline_balance.get(year * 12, 0.0)),
            with_prepayment=round_rupees(prepaid_balance.get(year * 12, 0.0)),
        )
        for year in range(1, years + 1)
    )

    logger.debug(
        "prepayment impact: principal=%s rate=%s years=%s prepayment=%s/%s payoff_month=%s",
        principal, annual_rate, years, prepayment, freq.value, payoff_month,
    )

    return PrepaymentImpact(
        emi=round_rupees(emi),
        original_tenure=f"{years} years",
        original_total_interest=round_rupees(original_interest),
        new_tenure=format_tenure(payoff_month),
        new_total_interest=round_rupees(new_interest),
        tenure_reduced=format_tenure(months_saved),
        interest_saved=round_rupees(original_interest - new_interest),
        payoff_month=payoff_month,
        months_saved=months_saved,
        yearly_data=yearly_data,
    )
