"""
utils/affordability.py -- Rule-of-thumb affordability checks.

check_car_affordability(...) -> CarAffordability   (20/4/10 rule)
calculate_budget(...)        -> BudgetResult       (50/30/20 rule)

20/4/10: at least 20% down payment, loan of at most 4 years, and total
monthly car cost (EMI + fuel + insurance + maintenance) at most 10% of the
monthly salary.

50/30/20: needs <= 50% of income, wants 30%, savings >= 20%. A bonus, when
enabled, is spread evenly across the year.
"""
from __future__ import annotations

from app.logging import get_logger
from app.models import BudgetResult, BudgetSplit, CarAffordability
from app.utils.finance import calculate_emi, round_rupees

logger = get_logger(__name__)

MIN_DOWN_PAYMENT_PERCENT = 20
MAX_LOAN_YEARS = 4
MAX_EXPENSE_SHARE = 0.10

NEEDS_SHARE = 0.50
WANTS_SHARE = 0.30
SAVINGS_SHARE = 0.20


def check_car_affordability(
    monthly_salary: float,
    on_road_price: float,
    down_payment_percent: float,
    loan_tenure_years: int,
    interest_rate: float,
    fuel_cost: float = 0.0,
    insurance_cost: float = 0.0,
    maintenance_cost: float = 0.0,
) -> CarAffordability:
    down_payment_amount = round_rupees(on_road_price * down_payment_percent / 100)
    loan_amount = round_rupees(on_road_price - down_payment_amount)
    monthly_emi = round_rupees(calculate_emi(loan_amount, interest_rate, loan_tenure_years))

    running_cost = fuel_cost + insurance_cost + maintenance_cost
    # rounded once, after the unrounded running cost is added
    total_monthly_expense = round_rupees(monthly_emi + running_cost)
    percent_of_salary = total_monthly_expense / monthly_salary * 100

    down_ok = down_payment_percent >= MIN_DOWN_PAYMENT_PERCENT
    tenure_ok = loan_tenure_years <= MAX_LOAN_YEARS
    expense_ok = percent_of_salary <= MAX_EXPENSE_SHARE * 100

    logger.debug(
        "car affordability: price=%s salary=%s -> expense=%s (%.1f%%)",
        on_road_price, monthly_salary, total_monthly_expense, percent_of_salary,
    )

    return CarAffordability(
        down_payment_amount=down_payment_amount,
        loan_amount=loan_amount,
        monthly_emi=monthly_emi,
        total_running_cost=round_rupees(running_cost),
        total_monthly_expense=total_monthly_expense,
        percent_of_salary=round(percent_of_salary, 2),
        is_down_payment_compliant=down_ok,
        is_tenure_compliant=tenure_ok,
        is_expense_compliant=expense_ok,
        is_affordable=down_ok and tenure_ok and expense_ok,
        required_salary=0 if expense_ok else round_rupees(total_monthly_expense / MAX_EXPENSE_SHARE),
    )


def calculate_budget(
    monthly_salary: float,
    actual_needs: float,
    actual_wants: float,
    actual_savings: float,
    annual_bonus: float = 0.0,
    bonus_enabled: bool = False,
) -> BudgetResult:
    """
    Compare actual monthly spending with the 50/30/20 split.

    ``suggested`` is the split to move the sliders to; savings absorbs the
    rounding remainder so the three parts add up to the income.
    """
    income = monthly_salary + (annual_bonus / 12 if bonus_enabled else 0.0)

    ideal = BudgetSplit(
        needs=round_rupees(income * NEEDS_SHARE),
        wants=round_rupees(income * WANTS_SHARE),
        savings=round_rupees(income * SAVINGS_SHARE),
    )
    actual_percentages = BudgetSplit(
        needs=round(actual_needs / income * 100, 1),
        wants=round(actual_wants / income * 100, 1),
        savings=round(actual_savings / income * 100, 1),
    )
    suggested_needs = round_rupees(income * NEEDS_SHARE)
    suggested_wants = round_rupees(income * WANTS_SHARE)
    suggested = BudgetSplit(
        needs=suggested_needs,
        wants=suggested_wants,
        savings=round_rupees(income) - suggested_needs - suggested_wants,
    )

    needs_ok = actual_needs <= ideal.needs
    savings_ok = actual_savings >= ideal.savings
    total_spending = actual_needs + actual_wants + actual_savings

    return BudgetResult(
        effective_monthly_income=round_rupees(income),
        ideal=ideal,
        actual_percentages=actual_percentages,
        needs_compliant=needs_ok,
        savings_compliant=savings_ok,
        is_fully_compliant=needs_ok and savings_ok,
        total_actual_spending=round_rupees(total_spending),
        is_balanced=round_rupees(total_spending) == round_rupees(income),
        remaining_amount=round_rupees(income - total_spending),
        suggested=suggested,
    )
