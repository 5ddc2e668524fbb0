"""
Tests for growth calculation.
"""

from decimal import Decimal

import pytest

from invoice_stats.reports.growth import GrowthCalculator
from invoice_stats.reports.period import PeriodKind


class TestGrowth:
    
    @pytest.fixture
    def monthly(self):
        return GrowthCalculator(PeriodKind.MONTHLY)
    
    def test_growth_from_zero(self, monthly):
        assert monthly.growth(10, 0) == 100
    
    def test_zero_to_zero(self, monthly):
        assert monthly.growth(0, 0) == 0
    
    def test_percentage_change(self, monthly):
        assert monthly.growth(150, 100) == 50.0
        assert monthly.growth(Decimal("50"), Decimal("200")) == -75.0
    
    def test_rounded_to_two_places(self, monthly):
        assert monthly.growth(1, 3) == -66.67
    
    def test_drop_to_zero(self, monthly):
        assert monthly.growth(0, 40) == -100.0
    
    @pytest.mark.parametrize("current, previous", [(10, 0), (0, 10), (500, 20), (0, 0)])
    def test_all_period_is_always_zero(self, current, previous):
        assert GrowthCalculator(PeriodKind.ALL).growth(current, previous) == 0
    
    def test_yearly_behaves_like_monthly(self):
        assert GrowthCalculator(PeriodKind.YEARLY).growth(3, 2) == 50.0
    
    def test_result_is_float(self, monthly):
        assert isinstance(monthly.growth(Decimal("1.5"), Decimal("1")), float)
