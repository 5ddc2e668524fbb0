"""
Date Normalization
Parses the heterogeneous date strings found in the record store.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_DAY_FIRST = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
_YEAR_FIRST = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")

# Textual-month forms accepted alongside ISO-8601
_TEXT_FORMATS = (
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
)


def _parse_native(text: str) -> Optional[date]:
    """ISO-8601 dates and datetimes, plus textual-month forms."""
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()
    
    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_day_first(text: str) -> Optional[date]:
    """DD-MM-YYYY or DD/MM/YYYY."""
    match = _DAY_FIRST.match(text)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_year_first(text: str) -> Optional[date]:
    """YYYY-MM-DD or YYYY/MM/DD."""
    match = _YEAR_FIRST.match(text)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


DATE_STRATEGIES: tuple[Callable[[str], Optional[date]], ...] = (
    _parse_native,
    _parse_day_first,
    _parse_year_first,
)


def normalize_date(value: Any) -> Optional[date]:
    """
    Parse a raw date cell into a UTC calendar date.
    
    Strategies are tried in order: native (ISO-8601 / textual month),
    DD-MM-YYYY, YYYY-MM-DD. Time of day is discarded so that day, month
    and year comparisons never drift across time zones.
    
    Args:
        value: Raw cell value
        
    Returns:
        Calendar date, or None if no strategy understands the value
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    
    text = str(value).strip()
    if not text:
        return None
    
    for strategy in DATE_STRATEGIES:
        parsed = strategy(text)
        if parsed is not None:
            return parsed
    
    logger.debug("Unparseable date %r", text)
    return None
