"""
Growth calculation between current and previous period values.
"""

from decimal import Decimal
from typing import Union

from invoice_stats.reports.period import PeriodKind

Number = Union[int, float, Decimal]


class GrowthCalculator:
    """
    Percentage change of a metric against the comparison window.
    
    All-time reports have no comparison window, so growth is always 0.
    """
    
    def __init__(self, kind: PeriodKind):
        self.kind = kind
    
    def growth(self, current: Number, previous: Number) -> float:
        """
        Calculate percentage growth.
        
        Args:
            current: Current period value
            previous: Previous period value
        
        Returns:
            Percentage change rounded to 2 places; 100 when growing from zero,
            0 when both are zero or the period is all-time
        """
        if self.kind is PeriodKind.ALL:
            return 0.0
        
        current = Decimal(str(current))
        previous = Decimal(str(previous))
        
        if previous == 0:
            return 100.0 if current > 0 else 0.0
        
        change = (current - previous) / previous * 100
        return float(round(change, 2))
