"""
Period Resolution
Turns the requested period into current and comparison reference dates.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

MIN_YEAR = 1900
MAX_YEAR = 9999


class PeriodKind(str, Enum):
    """Comparison window selected by the caller."""
    
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALL = "all"


@dataclass(frozen=True)
class PeriodRequest:
    """
    Caller-supplied period parameters.
    
    `month` is 0-based (0 = January) to match the dashboard client.
    """
    
    period: PeriodKind = PeriodKind.MONTHLY
    year: Optional[int] = None
    month: Optional[int] = None
    
    def __post_init__(self):
        if self.month is not None and not 0 <= self.month <= 11:
            raise ValueError(f"month must be between 0 and 11, got {self.month}")
        if self.year is not None and not MIN_YEAR <= self.year <= MAX_YEAR:
            raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {self.year}")


@dataclass(frozen=True)
class Period:
    """Resolved comparison window for one report."""
    
    kind: PeriodKind
    reference_date: date
    previous_reference_date: date
    today: date
    
    def is_current(self, value: date) -> bool:
        """Whether a document date falls in the current window."""
        if self.kind is PeriodKind.ALL:
            return True
        if self.kind is PeriodKind.YEARLY:
            return value.year == self.reference_date.year
        return (value.year, value.month) == (
            self.reference_date.year,
            self.reference_date.month,
        )
    
    def is_previous(self, value: date) -> bool:
        """Whether a document date falls in the comparison window."""
        if self.kind is PeriodKind.ALL:
            return False
        if self.kind is PeriodKind.YEARLY:
            return value.year == self.previous_reference_date.year
        return (value.year, value.month) == (
            self.previous_reference_date.year,
            self.previous_reference_date.month,
        )


def _clamped(year: int, month: int, day: int) -> date:
    """Build a date, moving day past the end of the month back to its last day."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def shift_months(target_date: date, months: int) -> date:
    """
    Calculate the date that is N months before target_date.
    
    Handles month-end edge cases (e.g., Mar 31 - 1 month = Feb 28/29).
    
    Args:
        target_date: Reference date
        months: Number of months to go back
        
    Returns:
        Shifted date
    """
    new_month = target_date.month - months
    new_year = target_date.year
    
    while new_month < 1:
        new_month += 12
        new_year -= 1
    
    return _clamped(new_year, new_month, target_date.day)


def utc_today(now: Optional[datetime] = None) -> date:
    """Current UTC calendar date (midnight), optionally from a supplied instant."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def resolve_period(request: PeriodRequest, now: Optional[datetime] = None) -> Period:
    """
    Resolve reference dates for a report.
    
    The reference date is today (UTC) with the year and month replaced by
    any overrides; yearly reports always anchor on January. The previous
    reference date is one month earlier for monthly and all-time reports
    and one year earlier for yearly reports.
    
    Args:
        request: Period parameters
        now: Current instant (defaults to the system clock)
        
    Returns:
        Immutable Period
    """
    today = utc_today(now)
    
    year = request.year if request.year is not None else today.year
    month = request.month + 1 if request.month is not None else today.month
    if request.period is PeriodKind.YEARLY:
        month = 1
    
    reference_date = _clamped(year, month, today.day)
    
    if request.period is PeriodKind.YEARLY:
        previous = shift_months(reference_date, 12)
    else:
        previous = shift_months(reference_date, 1)
    
    return Period(
        kind=request.period,
        reference_date=reference_date,
        previous_reference_date=previous,
        today=today,
    )
