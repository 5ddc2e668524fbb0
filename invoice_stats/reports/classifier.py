"""
Record Classification
Normalizes stored statuses and re-derives the status used for reporting.

The effective status is computed at read time and is never written back
to the store. A background job elsewhere may persist "Overdue" on its own
schedule, so the stored and effective statuses can disagree; the report
always shows the effective one.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from invoice_stats.integrations.sheets.records import DocumentKind, DocumentRecord
from invoice_stats.reports.constants import OVERDUE_AFTER_DAYS
from invoice_stats.reports.dates import normalize_date
from invoice_stats.reports.money import extract_amounts
from invoice_stats.reports.period import Period
from invoice_stats.reports.utils import safe_str_lower

logger = logging.getLogger(__name__)


class DocumentStatus(str, Enum):
    """Normalized document status."""
    
    PAID = "Paid"
    UNPAID = "Unpaid"
    OVERDUE = "Overdue"
    ACCEPTED = "Accepted"
    DRAFT = "Draft"


_INVOICE_STATUSES = {
    "": DocumentStatus.UNPAID,
    "unpaid": DocumentStatus.UNPAID,
    "pending": DocumentStatus.UNPAID,
    "paid": DocumentStatus.PAID,
    "overdue": DocumentStatus.OVERDUE,
    "draft": DocumentStatus.DRAFT,
}


@dataclass(frozen=True)
class ParsedRecord:
    """Per-request view of one document, ready for accumulation."""
    
    kind: DocumentKind
    parsed_date: Optional[date]
    total: Decimal
    subtotal: Decimal
    status: DocumentStatus
    is_accepted: bool = False
    validity_date: Optional[date] = None
    is_overdue: bool = False
    
    @property
    def is_invoice(self) -> bool:
        return self.kind is DocumentKind.INVOICE
    
    @property
    def is_paid(self) -> bool:
        return self.status is DocumentStatus.PAID


def normalize_invoice_status(raw: Optional[str]) -> DocumentStatus:
    """
    Map stored invoice status text to a DocumentStatus.
    
    Blank and unknown values read as Unpaid; "Pending" is a synonym.
    """
    key = safe_str_lower(raw)
    status = _INVOICE_STATUSES.get(key)
    if status is None:
        logger.debug("Unknown invoice status %r, treating as Unpaid", raw)
        return DocumentStatus.UNPAID
    return status


def effective_invoice_status(
    stored: DocumentStatus,
    invoice_date: Optional[date],
    today: date,
) -> DocumentStatus:
    """
    Promote an unsettled invoice to Overdue once it is older than 30 days.
    
    Args:
        stored: Normalized stored status
        invoice_date: Parsed document date
        today: Current UTC date the age is measured against
        
    Returns:
        Status to report
    """
    if stored in (DocumentStatus.PAID, DocumentStatus.OVERDUE) or invoice_date is None:
        return stored
    
    age = (today - invoice_date).days
    if age > OVERDUE_AFTER_DAYS:
        return DocumentStatus.OVERDUE
    return stored


def is_accepted_quotation(raw: Optional[str]) -> bool:
    return safe_str_lower(raw) == "accepted"


def is_quotation_overdue(
    is_accepted: bool,
    validity_date: Optional[date],
    today: date,
) -> bool:
    """A quotation is overdue when it is not accepted and its validity has lapsed."""
    if is_accepted or validity_date is None:
        return False
    return validity_date < today


def classify_record(record: DocumentRecord, period: Period) -> ParsedRecord:
    """
    Run date normalization, money extraction and classification for one record.
    
    Args:
        record: Typed document record
        period: Resolved reporting period
        
    Returns:
        ParsedRecord (parsed_date is None when the date is unparseable)
    """
    parsed_date = normalize_date(record.date_raw)
    amounts = extract_amounts(record)
    
    if record.is_invoice:
        status = effective_invoice_status(
            normalize_invoice_status(record.status_raw),
            parsed_date,
            period.today,
        )
        return ParsedRecord(
            kind=record.kind,
            parsed_date=parsed_date,
            total=amounts.total,
            subtotal=amounts.subtotal,
            status=status,
            is_overdue=status is DocumentStatus.OVERDUE,
        )
    
    accepted = is_accepted_quotation(record.status_raw)
    validity_date = normalize_date(record.validity_raw)
    return ParsedRecord(
        kind=record.kind,
        parsed_date=parsed_date,
        total=amounts.total,
        subtotal=amounts.subtotal,
        status=DocumentStatus.ACCEPTED if accepted else DocumentStatus.DRAFT,
        is_accepted=accepted,
        validity_date=validity_date,
        is_overdue=is_quotation_overdue(accepted, validity_date, period.today),
    )
