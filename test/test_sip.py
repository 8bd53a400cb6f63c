# Test type: unit
# Validation: SIP accumulation order, step-up timing, yearly series shape
# Command: pytest test/test_sip.py -v

import pytest

from app.utils.sip import calculate_sip


class TestSipWithoutStepUp:
    def test_invested_amount_is_exact(self):
        result = calculate_sip(10_000, 12, 10)
        assert result.invested_amount == 1_200_000

    def test_future_value_grows(self):
        result = calculate_sip(10_000, 12, 10)
        assert result.future_value > 2_000_000

    def test_wealth_gained_identity(self):
        result = calculate_sip(10_000, 12, 10)
        assert result.wealth_gained == result.future_value - result.invested_amount

    def test_yearly_series_length(self):
        result = calculate_sip(10_000, 12, 10)
        assert len(result.yearly_data) == 10
        assert [y.year for y in result.yearly_data] == list(range(1, 11))

    def test_contribution_added_before_growth(self):
        """One month at 12% p.a.: (0 + 1000) * 1.01 = 1010."""
        fv = 0.0
        for _ in range(12):
            fv = (fv + 1_000) * 1.01
        result = calculate_sip(1_000, 12, 1)
        assert result.future_value == round(fv)
        assert result.yearly_data[0].total == result.future_value

    def test_zero_return(self):
        result = calculate_sip(5_000, 0, 3)
        assert result.future_value == 180_000
        assert result.wealth_gained == 0

    def test_zero_years(self):
        result = calculate_sip(10_000, 12, 0)
        assert result.invested_amount == 0
        assert result.future_value == 0
        assert result.wealth_gained == 0
        assert result.yearly_data == ()

    def test_yearly_invested_increases(self):
        result = calculate_sip(5_000, 15, 5)
        assert result.yearly_data[0].year == 1
        assert result.yearly_data[4].year == 5
        assert result.yearly_data[4].invested > result.yearly_data[0].invested

    def test_yearly_wealth_identity(self):
        for row in calculate_sip(7_500, 11, 8).yearly_data:
            assert row.wealth == row.total - row.invested


class TestSipStepUp:
    def test_step_up_invests_more(self):
        flat = calculate_sip(10_000, 12, 10)
        stepped = calculate_sip(10_000, 12, 10, 10)
        assert stepped.invested_amount > flat.invested_amount
        assert stepped.future_value > flat.future_value
        assert len(stepped.yearly_data) == 10

    @pytest.mark.parametrize("step_up", [1, 5, 10, 25])
    @pytest.mark.parametrize("years", [2, 5, 20])
    @pytest.mark.parametrize("annual_return", [0, 8, 12])
    def test_step_up_never_lowers_projection(self, step_up, years, annual_return):
        flat = calculate_sip(10_000, annual_return, years)
        stepped = calculate_sip(10_000, annual_return, years, step_up)
        assert stepped.future_value > flat.future_value
        assert stepped.wealth_gained >= flat.wealth_gained

    def test_single_year_step_up_matches_flat(self):
        assert calculate_sip(10_000, 12, 1, 10).future_value == calculate_sip(10_000, 12, 1).future_value

    def test_step_up_applied_between_years(self):
        result = calculate_sip(10_000, 12, 3, 10)
        contributions = [y.monthly_investment for y in result.yearly_data]
        assert contributions == [10_000, 11_000, 12_100]

    def test_step_up_invested_total(self):
        result = calculate_sip(10_000, 12, 3, 10)
        assert result.invested_amount == (10_000 + 11_000 + 12_100) * 12

    def test_no_step_up_after_final_year(self):
        """The last reported contribution is the one actually paid in the last year."""
        result = calculate_sip(10_000, 12, 2, 50)
        assert result.yearly_data[-1].monthly_investment == 15_000

    def test_idempotent(self):
        assert calculate_sip(10_000, 12, 10, 10) == calculate_sip(10_000, 12, 10, 10)
