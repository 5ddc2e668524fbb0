"""
Record Sources
Fetches the invoice and quotation collections concurrently.
"""

import asyncio
import logging
from typing import Any, Optional

from invoice_stats.config import Settings, settings as default_settings
from invoice_stats.integrations.sheets.client import SheetsClient
from invoice_stats.integrations.sheets.exceptions import RecordSourceTimeoutError
from invoice_stats.integrations.sheets.records import DocumentKind, DocumentRecord

logger = logging.getLogger(__name__)


class RecordSource:
    """Base class for anything that can supply raw document rows."""
    
    async def fetch_rows(self, kind: DocumentKind) -> list[list[Any]]:
        """
        Fetch the data rows of one collection (header excluded).
        
        Args:
            kind: Which collection to read
            
        Returns:
            Raw row-tuples
        """
        raise NotImplementedError


class SheetsRecordSource(RecordSource):
    """Reads the Invoices and Quotations sheets of one spreadsheet."""
    
    def __init__(
        self,
        client: SheetsClient,
        invoices_range: str = "Invoices!A:P",
        quotations_range: str = "Quotations!A:P",
    ):
        self.client = client
        self.ranges = {
            DocumentKind.INVOICE: invoices_range,
            DocumentKind.QUOTATION: quotations_range,
        }
    
    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SheetsRecordSource":
        settings = settings or default_settings
        return cls(
            client=SheetsClient.from_settings(settings),
            invoices_range=settings.invoices_range,
            quotations_range=settings.quotations_range,
        )
    
    async def fetch_rows(self, kind: DocumentKind) -> list[list[Any]]:
        values = await self.client.get_values(self.ranges[kind])
        # Row 0 is the header
        return values[1:]


async def fetch_document_records(
    source: RecordSource,
    timeout: Optional[float] = None,
) -> tuple[list[DocumentRecord], list[DocumentRecord]]:
    """
    Fetch both collections in parallel and convert them to typed records.
    
    Args:
        source: Where to read rows from
        timeout: Seconds to wait for both fetches (None = no limit)
        
    Returns:
        Tuple of (invoices, quotations)
        
    Raises:
        RecordSourceTimeoutError: If the fetches do not finish in time
        RecordSourceError: If either fetch fails
    """
    try:
        invoice_rows, quotation_rows = await asyncio.wait_for(
            asyncio.gather(
                source.fetch_rows(DocumentKind.INVOICE),
                source.fetch_rows(DocumentKind.QUOTATION),
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        logger.error("Record fetch timed out after %.1f seconds", timeout)
        raise RecordSourceTimeoutError(
            f"Record store did not respond within {timeout:g} seconds",
            status_code=504,
        ) from e
    
    invoices = [
        DocumentRecord.from_row(DocumentKind.INVOICE, row)
        for row in invoice_rows
        if row
    ]
    quotations = [
        DocumentRecord.from_row(DocumentKind.QUOTATION, row)
        for row in quotation_rows
        if row
    ]
    
    logger.debug(
        "Fetched %d invoice rows and %d quotation rows",
        len(invoices),
        len(quotations),
    )
    
    return invoices, quotations
