"""
Reports Router
API endpoint for dashboard statistics.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from invoice_stats.config import settings
from invoice_stats.core.errors import error_response
from invoice_stats.core.rate_limit import limiter
from invoice_stats.integrations.sheets.exceptions import RecordSourceError
from invoice_stats.integrations.sheets.source import RecordSource, SheetsRecordSource
from invoice_stats.reports.exceptions import ReportGenerationError
from invoice_stats.reports.period import MAX_YEAR, MIN_YEAR, PeriodKind, PeriodRequest
from invoice_stats.reports.schemas import DashboardStats, ErrorResponse
from invoice_stats.reports.service import DashboardStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reports"])


def get_record_source() -> RecordSource:
    """Record source backed by the configured spreadsheet."""
    return SheetsRecordSource.from_settings(settings)


def get_current_time() -> datetime:
    return datetime.now(timezone.utc)


def get_stats_service(
    source: RecordSource = Depends(get_record_source),
) -> DashboardStatsService:
    return DashboardStatsService(
        source=source,
        timeout=settings.records_fetch_timeout_seconds,
    )


@router.get(
    "/dashboard-stats",
    response_model=DashboardStats,
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
    summary="Get dashboard statistics",
    description="Revenue, VAT, outstanding, overdue and quotation statistics compared with the previous period.",
)
@limiter.limit(settings.stats_rate_limit)
async def get_dashboard_stats(
    request: Request,
    period: PeriodKind = Query(PeriodKind.MONTHLY, description="monthly, yearly or all"),
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR, description="Year override"),
    month: Optional[int] = Query(None, ge=0, le=11, description="Month override, 0-based"),
    client: Optional[str] = Query(None, description="Only include this client's documents"),
    service: DashboardStatsService = Depends(get_stats_service),
    now: datetime = Depends(get_current_time),
):
    """
    Calculate dashboard statistics for the requested period.
    
    Either the whole report is returned or an error envelope; partial
    statistics are never sent.
    """
    period_request = PeriodRequest(period=period, year=year, month=month)
    
    try:
        return await service.generate(period_request, now=now, client=client)
    except (RecordSourceError, ReportGenerationError) as e:
        return error_response(e)
