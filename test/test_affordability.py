# Test type: unit
# Validation: 20/4/10 car rule, 50/30/20 budget rule
# Command: pytest test/test_affordability.py -v

import pytest

from app.utils.affordability import calculate_budget, check_car_affordability
from app.utils.finance import calculate_emi, round_rupees


# ---------------------------------------------------------------------------
# Car affordability -- 20/4/10
# ---------------------------------------------------------------------------

class TestCarAffordability:
    def test_amounts(self):
        result = check_car_affordability(100_000, 1_000_000, 20, 4, 9.5, 5_000, 2_000, 1_500)
        assert result.down_payment_amount == 200_000
        assert result.loan_amount == 800_000
        assert result.monthly_emi == round_rupees(calculate_emi(800_000, 9.5, 4))
        assert result.total_running_cost == 8_500
        assert result.total_monthly_expense == result.monthly_emi + 8_500

    def test_over_budget(self):
        result = check_car_affordability(100_000, 1_000_000, 20, 4, 9.5, 5_000, 2_000, 1_500)
        assert result.is_down_payment_compliant is True
        assert result.is_tenure_compliant is True
        assert result.is_expense_compliant is False
        assert result.is_affordable is False
        assert result.required_salary == result.total_monthly_expense * 10

    def test_affordable(self):
        result = check_car_affordability(500_000, 500_000, 50, 3, 9.0)
        assert result.is_affordable is True
        assert result.required_salary == 0
        assert result.percent_of_salary < 10

    def test_low_down_payment(self):
        result = check_car_affordability(1_000_000, 500_000, 10, 3, 9.0)
        assert result.is_down_payment_compliant is False
        assert result.is_affordable is False

    def test_long_tenure(self):
        result = check_car_affordability(1_000_000, 500_000, 20, 5, 9.0)
        assert result.is_tenure_compliant is False
        assert result.is_affordable is False

    def test_zero_interest_loan(self):
        """4,80,000 over 48 months at 0% -> 10,000 a month"""
        result = check_car_affordability(200_000, 600_000, 20, 4, 0)
        assert result.monthly_emi == 10_000
        assert result.percent_of_salary == pytest.approx(5.0)

    def test_expense_at_exactly_ten_percent(self):
        result = check_car_affordability(100_000, 600_000, 20, 4, 0)
        assert result.percent_of_salary == pytest.approx(10.0)
        assert result.is_expense_compliant is True

    def test_expense_rounded_after_summing(self):
        """10,000 EMI + 3 x 0.4 running cost -> 10,001.2 -> 10,001"""
        result = check_car_affordability(200_000, 600_000, 20, 4, 0, 0.4, 0.4, 0.4)
        assert result.total_running_cost == 1
        assert result.total_monthly_expense == 10_001

    def test_full_down_payment(self):
        result = check_car_affordability(100_000, 600_000, 100, 4, 9.5, fuel_cost=3_000)
        assert result.loan_amount == 0
        assert result.monthly_emi == 0
        assert result.total_monthly_expense == 3_000


# ---------------------------------------------------------------------------
# Budget -- 50/30/20
# ---------------------------------------------------------------------------

class TestBudget:
    def test_ideal_split(self):
        result = calculate_budget(50_000, 25_000, 15_000, 10_000)
        assert (result.ideal.needs, result.ideal.wants, result.ideal.savings) == (25_000, 15_000, 10_000)

    def test_compliant_and_balanced(self):
        result = calculate_budget(50_000, 25_000, 15_000, 10_000)
        assert result.actual_percentages.needs == 50.0
        assert result.actual_percentages.wants == 30.0
        assert result.actual_percentages.savings == 20.0
        assert result.is_fully_compliant is True
        assert result.is_balanced is True
        assert result.remaining_amount == 0

    def test_needs_overspend(self):
        result = calculate_budget(50_000, 30_000, 15_000, 5_000)
        assert result.needs_compliant is False
        assert result.savings_compliant is False
        assert result.is_fully_compliant is False

    def test_unbalanced_remaining(self):
        result = calculate_budget(50_000, 20_000, 10_000, 10_000)
        assert result.is_balanced is False
        assert result.total_actual_spending == 40_000
        assert result.remaining_amount == 10_000

    def test_overspent_remaining_is_negative(self):
        result = calculate_budget(50_000, 30_000, 20_000, 10_000)
        assert result.remaining_amount == -10_000

    def test_bonus_spread_over_year(self):
        result = calculate_budget(50_000, 25_000, 15_000, 10_000, annual_bonus=120_000, bonus_enabled=True)
        assert result.effective_monthly_income == 60_000
        assert result.ideal.needs == 30_000

    def test_bonus_ignored_when_disabled(self):
        result = calculate_budget(50_000, 25_000, 15_000, 10_000, annual_bonus=120_000)
        assert result.effective_monthly_income == 50_000

    def test_suggested_split_sums_to_income(self):
        result = calculate_budget(33_333, 10_000, 10_000, 10_000)
        s = result.suggested
        assert s.needs + s.wants + s.savings == 33_333
        assert s.needs == 16_667
        assert s.wants == 10_000
