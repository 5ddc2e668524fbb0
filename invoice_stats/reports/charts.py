"""
Chart Series
Time-bucketed revenue series and invoice status distribution.
"""

import calendar
from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable

from invoice_stats.reports.classifier import DocumentStatus, ParsedRecord
from invoice_stats.reports.constants import MONTH_LABELS, PIE_COLORS, ZERO
from invoice_stats.reports.period import Period, PeriodKind
from invoice_stats.reports.utils import to_money_float


class ChartSeriesBuilder:
    """
    Builds dashboard chart data from the current period's invoices.
    
    Revenue series use paid invoices only; the status distribution uses
    every current-period invoice with its effective status.
    """
    
    def __init__(self, period: Period):
        self.period = period
    
    def revenue_series(self, invoices: Iterable[ParsedRecord]) -> list[dict[str, Any]]:
        """
        Build the revenue series for the period.
        
        - monthly: one entry per day of the reference month, zero-filled
        - yearly: Jan..Dec, zero-filled
        - all: one entry per year present in the data, ascending
        
        Args:
            invoices: Current-period invoices (with parsed dates)
        
        Returns:
            List of {"name", "revenue"} dicts in chronological order
        """
        paid = [
            record for record in invoices
            if record.is_paid and record.parsed_date is not None
        ]
        
        if self.period.kind is PeriodKind.MONTHLY:
            reference = self.period.reference_date
            days_in_month = calendar.monthrange(reference.year, reference.month)[1]
            buckets = {day: ZERO for day in range(1, days_in_month + 1)}
            for record in paid:
                buckets[record.parsed_date.day] += record.total
            return [
                {"name": str(day), "revenue": to_money_float(value)}
                for day, value in buckets.items()
            ]
        
        if self.period.kind is PeriodKind.YEARLY:
            months = [ZERO] * 12
            for record in paid:
                months[record.parsed_date.month - 1] += record.total
            return [
                {"name": label, "revenue": to_money_float(value)}
                for label, value in zip(MONTH_LABELS, months)
            ]
        
        years: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for record in paid:
            years[record.parsed_date.year] += record.total
        return [
            {"name": str(year), "revenue": to_money_float(years[year])}
            for year in sorted(years)
        ]
    
    @staticmethod
    def status_distribution(invoices: Iterable[ParsedRecord]) -> list[dict[str, Any]]:
        """
        Count current-period invoices by effective status.
        
        Args:
            invoices: Current-period invoices
        
        Returns:
            [{"name", "value", "color"}] for Paid, Pending and Overdue
        """
        counts = {"Paid": 0, "Pending": 0, "Overdue": 0}
        for record in invoices:
            if record.status is DocumentStatus.PAID:
                counts["Paid"] += 1
            elif record.status is DocumentStatus.OVERDUE:
                counts["Overdue"] += 1
            else:
                counts["Pending"] += 1
        
        return [
            {"name": name, "value": value, "color": PIE_COLORS[name]}
            for name, value in counts.items()
        ]
