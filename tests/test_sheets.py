"""
Tests for the Sheets record store integration.
"""

import asyncio

import httpx
import pytest

from invoice_stats.config import Settings
from invoice_stats.integrations.sheets.client import SheetsClient
from invoice_stats.integrations.sheets.exceptions import (
    RecordSourceError,
    RecordSourceTimeoutError,
    SourceNotFoundError,
)
from invoice_stats.integrations.sheets.records import DocumentKind, DocumentRecord
from invoice_stats.integrations.sheets.source import (
    RecordSource,
    SheetsRecordSource,
    fetch_document_records,
)
from tests.conftest import HEADER, StaticRecordSource, make_row


def sheets_source(handler, sheet_id: str = "sheet-123", **client_kwargs) -> SheetsRecordSource:
    client = SheetsClient(
        spreadsheet_id=sheet_id,
        base_url="https://sheets.example.test/v4",
        transport=httpx.MockTransport(handler),
        **client_kwargs,
    )
    return SheetsRecordSource(client)


class TestDocumentRecord:
    
    def test_from_row_reads_named_columns(self):
        row = make_row(
            date="2026-10-05",
            total="105.00",
            subtotal="100.00",
            status="Paid",
            payload={"overrideTotal": "105"},
            validity="2026-11-05",
            client="Globex",
            number="QTN-7",
        )
        record = DocumentRecord.from_row(DocumentKind.QUOTATION, row)
        assert record.number == "QTN-7"
        assert record.date_raw == "2026-10-05"
        assert record.client == "Globex"
        assert record.total_raw == "105.00"
        assert record.subtotal_raw == "100.00"
        assert record.payload_raw == '{"overrideTotal": "105"}'
        assert record.status_raw == "Paid"
        assert record.validity_raw == "2026-11-05"
    
    def test_invoices_have_no_validity_date(self):
        record = DocumentRecord.from_row(DocumentKind.INVOICE, make_row(validity="2026-11-05"))
        assert record.validity_raw is None
        assert record.is_invoice
    
    def test_short_rows_read_as_empty_cells(self):
        record = DocumentRecord.from_row(DocumentKind.QUOTATION, ["ts", "QTN-1", "2026-10-01"])
        assert record.date_raw == "2026-10-01"
        assert record.status_raw == ""
        assert record.total_raw == ""
        assert record.validity_raw == ""
    
    def test_numeric_and_none_cells(self):
        record = DocumentRecord.from_row(
            DocumentKind.INVOICE,
            ["", "INV-9", None, "", "", "", 100, "", 105.5],
        )
        assert record.date_raw == ""
        assert record.subtotal_raw == "100"
        assert record.total_raw == "105.5"


class TestSheetsClient:
    
    def test_reads_values_and_drops_header(self):
        seen = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"values": [HEADER, make_row(total="10")]})
        
        source = sheets_source(handler, access_token="token-abc")
        rows = asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
        
        assert len(rows) == 1
        assert rows[0][8] == "10"
        assert seen[0].url.path == "/v4/spreadsheets/sheet-123/values/Invoices!A:P"
        assert seen[0].headers["Authorization"] == "Bearer token-abc"
    
    def test_api_key_is_sent_as_query_parameter(self):
        seen = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})
        
        source = sheets_source(handler, api_key="key-xyz")
        rows = asyncio.run(source.fetch_rows(DocumentKind.QUOTATION))
        
        assert rows == []
        assert seen[0].url.params["key"] == "key-xyz"
        assert seen[0].url.path.endswith("/values/Quotations!A:P")
        assert "Authorization" not in seen[0].headers
    
    def test_not_found(self):
        source = sheets_source(lambda request: httpx.Response(404, json={}))
        with pytest.raises(SourceNotFoundError):
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
    
    def test_missing_sheet_id_is_not_found(self):
        def handler(request):
            raise AssertionError("no request expected")
        
        source = sheets_source(handler, sheet_id="")
        with pytest.raises(SourceNotFoundError) as exc_info:
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
        assert exc_info.value.message == "Sheet ID not found"
    
    def test_server_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": {"message": "Backend Error"}})
        
        source = sheets_source(handler)
        with pytest.raises(RecordSourceError) as exc_info:
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
        assert exc_info.value.status_code == 500
        assert "Backend Error" in exc_info.value.message
        assert not isinstance(exc_info.value, SourceNotFoundError)
    
    def test_non_json_error_body(self):
        source = sheets_source(lambda request: httpx.Response(503, text="<html>down</html>"))
        with pytest.raises(RecordSourceError) as exc_info:
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
        assert exc_info.value.status_code == 503

    def test_non_json_success_body_is_a_source_error(self):
        """A login or proxy page served with 200 is an upstream failure."""
        source = sheets_source(lambda request: httpx.Response(200, text="<html>login</html>"))
        with pytest.raises(RecordSourceError) as exc_info:
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
        assert "not JSON" in exc_info.value.message
        assert not isinstance(exc_info.value, SourceNotFoundError)

    def test_unexpected_json_shape_is_a_source_error(self):
        source = sheets_source(lambda request: httpx.Response(200, json=["not", "an", "object"]))
        with pytest.raises(RecordSourceError):
            asyncio.run(source.fetch_rows(DocumentKind.QUOTATION))

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        
        source = sheets_source(handler)
        with pytest.raises(RecordSourceError):
            asyncio.run(source.fetch_rows(DocumentKind.INVOICE))
    
    def test_from_settings(self):
        settings = Settings(
            sheet_id="abc",
            invoices_range="Inv!A:P",
            quotations_range="Qtn!A:P",
            sheets_api_key="k",
        )
        source = SheetsRecordSource.from_settings(settings)
        assert source.client.spreadsheet_id == "abc"
        assert source.client.api_key == "k"
        assert source.ranges[DocumentKind.INVOICE] == "Inv!A:P"
        assert source.ranges[DocumentKind.QUOTATION] == "Qtn!A:P"


class TestFetchDocumentRecords:
    
    def test_fetches_both_collections(self):
        source = StaticRecordSource(
            invoices=[make_row(number="INV-1"), [], make_row(number="INV-2")],
            quotations=[make_row(number="QTN-1", validity="2026-12-01")],
        )
        invoices, quotations = asyncio.run(fetch_document_records(source, timeout=5))
        
        assert [record.number for record in invoices] == ["INV-1", "INV-2"]
        assert all(record.kind is DocumentKind.INVOICE for record in invoices)
        assert quotations[0].validity_raw == "2026-12-01"
        assert sorted(source.calls) == sorted([DocumentKind.INVOICE, DocumentKind.QUOTATION])
    
    def test_fetches_run_concurrently(self):
        class BarrierSource(RecordSource):
            """Each fetch waits until the other has started."""
            
            def __init__(self):
                self.started = 0
            
            async def fetch_rows(self, kind):
                self.started += 1
                while self.started < 2:
                    await asyncio.sleep(0)
                return []
        
        invoices, quotations = asyncio.run(fetch_document_records(BarrierSource(), timeout=2))
        assert invoices == [] and quotations == []
    
    def test_timeout(self):
        class SlowSource(RecordSource):
            async def fetch_rows(self, kind):
                await asyncio.sleep(5)
                return []
        
        with pytest.raises(RecordSourceTimeoutError) as exc_info:
            asyncio.run(fetch_document_records(SlowSource(), timeout=0.05))
        assert exc_info.value.status_code == 504
    
    def test_source_errors_propagate(self):
        source = StaticRecordSource(error=SourceNotFoundError("Sheet ID not found"))
        with pytest.raises(SourceNotFoundError):
            asyncio.run(fetch_document_records(source))
