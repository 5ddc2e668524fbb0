"""
Money Extraction
Resolves the subtotal and total of a document through an ordered fallback chain.

Strategies run in order and the first one producing a non-zero total wins:

1. Payload override total (subtotal back-computed from the 5% convention)
2. Payload line items (sum of unit price x quantity, plus 5%)
3. Raw total / subtotal columns

A subtotal still missing after that is derived from the total.
"""

import json
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Optional

from invoice_stats.integrations.sheets.records import DocumentRecord
from invoice_stats.reports.constants import CENTS, TAX_MULTIPLIER, ZERO
from invoice_stats.reports.utils import parse_money, safe_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoneyAmounts:
    """Resolved amounts for one document."""
    
    subtotal: Decimal
    total: Decimal


ZERO_AMOUNTS = MoneyAmounts(subtotal=ZERO, total=ZERO)


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def subtotal_from_total(total: Decimal) -> Decimal:
    """Back-compute a pre-tax subtotal from a tax-inclusive total."""
    return _to_cents(total / TAX_MULTIPLIER)


def total_from_subtotal(subtotal: Decimal) -> Decimal:
    """Apply the 5% tax convention to a subtotal."""
    return _to_cents(subtotal * TAX_MULTIPLIER)


def parse_payload(raw: Any) -> Optional[dict[str, Any]]:
    """
    Decode the JSON payload blob of a record.
    
    Args:
        raw: Payload cell contents
        
    Returns:
        Decoded object, or None if the blob is empty, corrupt or not an object
    """
    if not raw or not str(raw).strip():
        return None
    
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.debug("Malformed payload JSON: %s", e)
        return None
    
    if not isinstance(data, dict):
        return None
    return data


def from_override_total(
    record: DocumentRecord,
    payload: Optional[dict[str, Any]],
) -> Optional[MoneyAmounts]:
    """Explicit `overrideTotal` in the payload."""
    override = safe_get(payload, "overrideTotal")
    if override is None or not str(override).strip():
        return None
    
    total = parse_money(override)
    if total == 0:
        return None
    return MoneyAmounts(subtotal=subtotal_from_total(total), total=total)


def line_item_amount(item: Any) -> Decimal:
    """Unit price times quantity for one payload line item."""
    if not isinstance(item, dict):
        return ZERO
    
    price = item.get("unitPrice")
    if price is None or price == "":
        price = item.get("amount")
    
    quantity = parse_money(item.get("quantity"))
    if quantity == 0:
        quantity = Decimal("1")
    
    return parse_money(price) * quantity


def from_line_items(
    record: DocumentRecord,
    payload: Optional[dict[str, Any]],
) -> Optional[MoneyAmounts]:
    """Sum of payload line items, taxed at 5%."""
    items = safe_get(payload, "lineItems")
    if not isinstance(items, list):
        return None
    
    subtotal = sum((line_item_amount(item) for item in items), ZERO)
    if subtotal == 0:
        return None
    return MoneyAmounts(subtotal=subtotal, total=total_from_subtotal(subtotal))


def from_raw_columns(
    record: DocumentRecord,
    payload: Optional[dict[str, Any]],
) -> Optional[MoneyAmounts]:
    """Total and subtotal columns of the row itself."""
    total = parse_money(record.total_raw)
    if total == 0:
        return None
    return MoneyAmounts(subtotal=parse_money(record.subtotal_raw), total=total)


MoneyStrategy = Callable[[DocumentRecord, Optional[dict[str, Any]]], Optional[MoneyAmounts]]

MONEY_STRATEGIES: tuple[MoneyStrategy, ...] = (
    from_override_total,
    from_line_items,
    from_raw_columns,
)


def with_derived_subtotal(amounts: MoneyAmounts) -> MoneyAmounts:
    """Fill a zero subtotal from a positive total."""
    if amounts.subtotal == 0 and amounts.total > 0:
        return MoneyAmounts(subtotal=subtotal_from_total(amounts.total), total=amounts.total)
    return amounts


def extract_amounts(record: DocumentRecord) -> MoneyAmounts:
    """
    Resolve subtotal and total for a record.
    
    Args:
        record: Typed document record
        
    Returns:
        MoneyAmounts (zero amounts if every strategy fails)
    """
    payload = parse_payload(record.payload_raw)
    
    for strategy in MONEY_STRATEGIES:
        amounts = strategy(record, payload)
        if amounts is not None:
            return with_derived_subtotal(amounts)
    
    return ZERO_AMOUNTS
