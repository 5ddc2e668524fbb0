"""
Google Sheets Record Store Integration

Reads the Invoices and Quotations collections and exposes them as typed
DocumentRecord instances.
"""

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

__all__ = [
    "DocumentKind",
    "DocumentRecord",
    "RecordSource",
    "RecordSourceError",
    "RecordSourceTimeoutError",
    "SheetsRecordSource",
    "SourceNotFoundError",
    "fetch_document_records",
]
