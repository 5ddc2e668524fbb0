"""
Dashboard Stats Service
Orchestrates fetching, classification, accumulation and chart building.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from invoice_stats.integrations.sheets.records import DocumentKind, DocumentRecord
from invoice_stats.integrations.sheets.source import RecordSource, fetch_document_records
from invoice_stats.reports.accumulator import Accumulator, OverdueTotals, StatsBucket
from invoice_stats.reports.charts import ChartSeriesBuilder
from invoice_stats.reports.classifier import classify_record
from invoice_stats.reports.exceptions import ReportGenerationError
from invoice_stats.reports.growth import GrowthCalculator
from invoice_stats.reports.period import PeriodRequest, resolve_period
from invoice_stats.reports.utils import safe_str_lower, to_money_float

logger = logging.getLogger(__name__)


def filter_by_client(
    records: Iterable[DocumentRecord],
    client: Optional[str],
) -> list[DocumentRecord]:
    """Keep records whose client column matches, ignoring case and padding."""
    if not client or not client.strip():
        return list(records)
    wanted = safe_str_lower(client)
    return [record for record in records if safe_str_lower(record.client) == wanted]


def _overdue_summary(totals: OverdueTotals) -> dict[str, Any]:
    return {"count": totals.count, "value": to_money_float(totals.value)}


def _metrics(
    current: StatsBucket,
    previous: StatsBucket,
    growth: GrowthCalculator,
) -> dict[str, Any]:
    return {
        "revenue": {
            "value": to_money_float(current.revenue),
            "growth": growth.growth(current.revenue, previous.revenue),
        },
        "invoices": {
            "value": current.invoice_count,
            "growth": growth.growth(current.invoice_count, previous.invoice_count),
        },
        "vat": {
            "value": to_money_float(current.vat),
            "growth": growth.growth(current.vat, previous.vat),
        },
        "outstanding": {
            "value": to_money_float(current.outstanding),
            "count": current.outstanding_count,
            "growth": growth.growth(current.outstanding, previous.outstanding),
        },
        "paidInvoices": {
            "count": current.paid_count,
            "value": to_money_float(current.revenue),
            "growth": growth.growth(current.paid_count, previous.paid_count),
        },
        "quotations": {
            "count": current.quotation_count,
            "value": to_money_float(current.quotation_value),
            "growth": growth.growth(current.quotation_count, previous.quotation_count),
        },
        "acceptedQuotations": {
            "count": current.accepted_quotation_count,
            "value": to_money_float(current.accepted_quotation_value),
            "growth": growth.growth(
                current.accepted_quotation_count,
                previous.accepted_quotation_count,
            ),
        },
    }


def build_report(
    invoices: Iterable[DocumentRecord],
    quotations: Iterable[DocumentRecord],
    request: PeriodRequest,
    now: Optional[datetime] = None,
    client: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build the dashboard report from already-fetched records.
    
    Pure function of its inputs: the same records, request and `now`
    always produce the same report.
    
    Args:
        invoices: Invoice records
        quotations: Quotation records
        request: Requested period
        now: Current instant (defaults to the system clock)
        client: Optional client name filter
    
    Returns:
        Report dict in the dashboard response shape
    """
    period = resolve_period(request, now)
    
    records = filter_by_client(invoices, client) + filter_by_client(quotations, client)
    accumulator = Accumulator(period=period).add_all(
        classify_record(record, period) for record in records
    )
    
    if accumulator.skipped_total:
        logger.warning(
            "Excluded %d invoice(s) and %d quotation(s) with unparseable dates",
            accumulator.skipped[DocumentKind.INVOICE],
            accumulator.skipped[DocumentKind.QUOTATION],
        )
    
    growth = GrowthCalculator(period.kind)
    charts = ChartSeriesBuilder(period)
    
    report = _metrics(accumulator.current, accumulator.previous, growth)
    report["overdue"] = _overdue_summary(accumulator.overdue.invoices)
    report["overdueQuotations"] = _overdue_summary(accumulator.overdue.quotations)
    report["chartData"] = charts.revenue_series(accumulator.current_invoices)
    report["pieData"] = charts.status_distribution(accumulator.current_invoices)
    
    logger.info(
        "Report built: period=%s reference=%s revenue=%.2f outstanding=%.2f overdue=%d",
        period.kind.value,
        period.reference_date.isoformat(),
        accumulator.current.revenue,
        accumulator.current.outstanding,
        accumulator.overdue.invoices.count,
    )
    
    return report


class DashboardStatsService:
    """
    Service for producing dashboard statistics.
    
    Fetches both collections from a RecordSource in parallel and turns
    them into a single report. Any failure aborts the whole report.
    """
    
    def __init__(self, source: RecordSource, timeout: Optional[float] = None):
        """
        Args:
            source: Where invoice and quotation rows come from
            timeout: Seconds allowed for the upstream fetch
        """
        self.source = source
        self.timeout = timeout
    
    async def generate(
        self,
        request: PeriodRequest,
        now: Optional[datetime] = None,
        client: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Fetch records and build the report.
        
        Raises:
            RecordSourceError: If the upstream store fails (incl. not found / timeout)
            ReportGenerationError: If aggregation fails
        """
        invoices, quotations = await fetch_document_records(self.source, self.timeout)
        
        try:
            return build_report(invoices, quotations, request, now=now, client=client)
        except Exception as e:
            logger.error("Error building dashboard report: %s", e, exc_info=True)
            raise ReportGenerationError(f"Failed to build report: {e}") from e
