import json
from datetime import datetime, timezone
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from invoice_stats.core.rate_limit import limiter
from invoice_stats.integrations.sheets.records import DocumentKind, DocumentRecord
from invoice_stats.integrations.sheets.source import RecordSource
from invoice_stats.main import app
from invoice_stats.reports.router import get_current_time, get_record_source

# Fixed clock for every test: Monday 19 October 2026, midday UTC
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

HEADER = [
    "Created At", "Number", "Date", "Client", "Subject", "Currency",
    "Subtotal", "VAT", "Total", "Payload", "Created By", "Status",
    "", "", "", "Validity",
]


def make_row(
    date: str = "2026-10-05",
    total: Any = "",
    status: str = "Unpaid",
    payload: Optional[Any] = None,
    validity: str = "",
    client: str = "Acme Trading LLC",
    subtotal: Any = "",
    number: str = "INV-001",
) -> list[Any]:
    """Build a raw store row; dict payloads are JSON-encoded."""
    row: list[Any] = [""] * 16
    row[0] = "2026-10-01T09:00:00.000Z"
    row[1] = number
    row[2] = date
    row[3] = client
    row[6] = subtotal
    row[8] = total
    if payload is not None:
        row[9] = payload if isinstance(payload, str) else json.dumps(payload)
    row[11] = status
    row[15] = validity
    return row


def make_invoice(**kwargs) -> DocumentRecord:
    return DocumentRecord.from_row(DocumentKind.INVOICE, make_row(**kwargs))


def make_quotation(**kwargs) -> DocumentRecord:
    kwargs.setdefault("number", "QTN-001")
    return DocumentRecord.from_row(DocumentKind.QUOTATION, make_row(**kwargs))


class StaticRecordSource(RecordSource):
    """In-memory record source returning fixed rows."""
    
    def __init__(self, invoices=None, quotations=None, error: Optional[Exception] = None):
        self.rows = {
            DocumentKind.INVOICE: invoices or [],
            DocumentKind.QUOTATION: quotations or [],
        }
        self.error = error
        self.calls: list[DocumentKind] = []
    
    async def fetch_rows(self, kind: DocumentKind):
        self.calls.append(kind)
        if self.error is not None:
            raise self.error
        return self.rows[kind]


@pytest.fixture
def client():
    """TestClient with the clock pinned and rate limiting disabled."""
    limiter.enabled = False
    app.dependency_overrides[get_current_time] = lambda: NOW
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def use_source():
    """Install a StaticRecordSource as the app's record source."""
    def _install(source: RecordSource) -> RecordSource:
        app.dependency_overrides[get_record_source] = lambda: source
        return source
    return _install
