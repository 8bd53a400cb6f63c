# Test type: unit
# Validation: SWP depletion detection, inflation indexation, lasting period text
# Command: pytest test/test_swp.py -v

import pytest

from app.utils.swp import calculate_swp


class TestSwpSustained:
    def test_not_depleted(self):
        result = calculate_swp(5_000_000, 30_000, 10, 20)
        assert result.corpus_depleted is False
        assert result.depletion_month == 0

    def test_total_withdrawn_exact(self):
        result = calculate_swp(5_000_000, 30_000, 10, 20)
        assert result.total_withdrawn == 30_000 * 12 * 20
        assert result.final_corpus > 0

    def test_lasting_period_text(self):
        result = calculate_swp(10_000_000, 10_000, 12, 20)
        assert result.lasting_period == "20+ years (corpus sustains)"
        assert result.years_lasted == 20
        assert result.months_lasted == 0

    def test_yearly_series(self):
        result = calculate_swp(3_000_000, 25_000, 10, 10)
        assert len(result.yearly_data) <= 10
        assert result.yearly_data[0].year == 1
        assert result.yearly_data[0].corpus < 3_000_000
        assert result.yearly_data[0].withdrawn == 300_000
        assert result.yearly_data[-1].cumulative_withdrawn == result.total_withdrawn


class TestSwpInflation:
    def test_inflation_withdraws_more(self):
        flat = calculate_swp(5_000_000, 30_000, 10, 20)
        indexed = calculate_swp(5_000_000, 30_000, 10, 20, 6)
        assert indexed.total_withdrawn > flat.total_withdrawn

    def test_withdrawal_raised_from_year_two(self):
        result = calculate_swp(50_000_000, 10_000, 8, 3, 10)
        assert [y.monthly_withdrawal for y in result.yearly_data] == [10_000, 11_000, 12_100]
        assert result.yearly_data[0].withdrawn == 120_000
        assert result.yearly_data[1].withdrawn == 132_000


class TestSwpDepletion:
    def test_high_withdrawal_depletes(self):
        result = calculate_swp(1_000_000, 50_000, 5, 30)
        assert result.corpus_depleted is True
        assert result.final_corpus == 0

    def test_depletion_month_recorded_once(self):
        """1L, 40K a month, 0% return: months 1-2 paid, month 3 falls short."""
        result = calculate_swp(100_000, 40_000, 0, 5)
        assert result.depletion_month == 3
        assert result.total_withdrawn == 80_000
        assert result.lasting_period == "0 years 3 months"

    def test_series_stops_after_depletion_year(self):
        result = calculate_swp(1_000_000, 50_000, 5, 30)
        assert len(result.yearly_data) == 2
        assert result.yearly_data[-1].corpus == 0

    def test_corpus_never_negative(self):
        result = calculate_swp(1_000_000, 20_000, 8, 20)
        assert all(y.corpus >= 0 for y in result.yearly_data)
        if result.corpus_depleted:
            assert result.final_corpus == 0
            assert "years" in result.lasting_period

    def test_lasting_period_from_depletion_month(self):
        result = calculate_swp(1_000_000, 50_000, 5, 30)
        years, months = divmod(result.depletion_month, 12)
        assert result.lasting_period == f"{years} years {months} months"

    def test_idempotent(self):
        assert calculate_swp(1_000_000, 50_000, 5, 30, 6) == calculate_swp(1_000_000, 50_000, 5, 30, 6)
