"""
Utility functions for safe data access in report calculations.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from invoice_stats.reports.constants import CENTS, ZERO

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def safe_get(data: Any, key: str, default: Any = None) -> Any:
    """
    Safely get value from dict, handling None values.
    
    Args:
        data: Dictionary to read; any non-dict value yields the default
        key: Key to retrieve
        default: Default value if key missing or value is None
        
    Returns:
        Value from dict, or default if missing/None
    """
    if not isinstance(data, dict):
        return default
    
    value = data.get(key, default)
    return default if value is None else value


def safe_str_lower(value: Any, default: str = "") -> str:
    """
    Safely convert value to a trimmed lowercase string.
    
    Args:
        value: Value to convert
        default: Default if value is None
        
    Returns:
        Lowercase string, or default
    """
    if value is None:
        return default
    
    return str(value).strip().lower()


def parse_money(value: Any) -> Decimal:
    """
    Parse a money cell into a Decimal.
    
    Strips everything except digits, dots and minus signs, so
    "AED 1,050.00" reads as 1050.00. Anything unparseable is zero.
    
    Args:
        value: Raw cell or payload value (string, number, None)
        
    Returns:
        Decimal value, or 0 if parsing fails
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, (int, float, Decimal)):
        parsed = Decimal(str(value))
    else:
        cleaned = _NON_NUMERIC.sub("", str(value))
        if not cleaned:
            return ZERO
        try:
            parsed = Decimal(cleaned)
        except InvalidOperation:
            logger.debug("Unparseable money value %r", value)
            return ZERO

    if not parsed.is_finite():
        return ZERO
    return parsed


def to_money_float(value: Decimal) -> float:
    """Round a Decimal to cents and convert for JSON output."""
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))
