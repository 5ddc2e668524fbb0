"""
Statistics Accumulation
Folds parsed records into current/previous period buckets and all-time overdue totals.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from invoice_stats.integrations.sheets.records import DocumentKind
from invoice_stats.reports.classifier import ParsedRecord
from invoice_stats.reports.constants import ZERO
from invoice_stats.reports.period import Period


@dataclass
class StatsBucket:
    """Running totals for one period window."""
    
    revenue: Decimal = ZERO
    invoice_count: int = 0
    vat: Decimal = ZERO
    outstanding: Decimal = ZERO
    outstanding_count: int = 0
    paid_count: int = 0
    quotation_count: int = 0
    quotation_value: Decimal = ZERO
    accepted_quotation_count: int = 0
    accepted_quotation_value: Decimal = ZERO
    
    def add_invoice(self, record: ParsedRecord) -> None:
        self.invoice_count += 1
        if record.is_paid:
            self.revenue += record.total
            self.paid_count += 1
            self.vat += record.total - record.subtotal
        else:
            self.outstanding += record.total
            self.outstanding_count += 1
    
    def add_quotation(self, record: ParsedRecord) -> None:
        self.quotation_count += 1
        self.quotation_value += record.total
        if record.is_accepted:
            self.accepted_quotation_count += 1
            self.accepted_quotation_value += record.total


@dataclass
class OverdueTotals:
    """Count and value of overdue documents."""
    
    count: int = 0
    value: Decimal = ZERO
    
    def add(self, amount: Decimal) -> None:
        self.count += 1
        self.value += amount


@dataclass
class GlobalOverdueCounters:
    """All-time overdue totals, independent of the requested period."""
    
    invoices: OverdueTotals = field(default_factory=OverdueTotals)
    quotations: OverdueTotals = field(default_factory=OverdueTotals)


@dataclass
class Accumulator:
    """
    Single-pass fold over one request's records.
    
    Records without a parseable date are counted in `skipped` and
    otherwise ignored.
    """
    
    period: Period
    current: StatsBucket = field(default_factory=StatsBucket)
    previous: StatsBucket = field(default_factory=StatsBucket)
    overdue: GlobalOverdueCounters = field(default_factory=GlobalOverdueCounters)
    current_invoices: list[ParsedRecord] = field(default_factory=list)
    skipped: dict[DocumentKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in DocumentKind}
    )
    
    def add(self, record: ParsedRecord) -> None:
        """
        Fold one record into the buckets.
        
        Args:
            record: Parsed record
        """
        if record.parsed_date is None:
            self.skipped[record.kind] += 1
            return
        
        is_current = self.period.is_current(record.parsed_date)
        is_previous = self.period.is_previous(record.parsed_date)
        
        if record.is_invoice:
            if record.is_overdue:
                self.overdue.invoices.add(record.total)
            if is_current:
                self.current.add_invoice(record)
                self.current_invoices.append(record)
            if is_previous:
                self.previous.add_invoice(record)
            return
        
        if record.is_overdue:
            self.overdue.quotations.add(record.total)
        if is_current:
            self.current.add_quotation(record)
        if is_previous:
            self.previous.add_quotation(record)
    
    def add_all(self, records: Iterable[ParsedRecord]) -> "Accumulator":
        for record in records:
            self.add(record)
        return self
    
    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())
