"""
Document Record Types
=====================

Single point where raw spreadsheet rows are read by column position.
Everything downstream works with named fields on DocumentRecord.

Column layout (shared by the Invoices and Quotations sheets):
- A (0)  created at
- B (1)  document number
- C (2)  document date
- D (3)  client company
- G (6)  subtotal
- I (8)  total
- J (9)  JSON payload
- L (11) status
- P (15) validity date (quotations only)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence


class DocumentKind(str, Enum):
    """Which collection a record came from."""
    
    INVOICE = "invoice"
    QUOTATION = "quotation"


CREATED_AT_COLUMN = 0
NUMBER_COLUMN = 1
DATE_COLUMN = 2
CLIENT_COLUMN = 3
SUBTOTAL_COLUMN = 6
TOTAL_COLUMN = 8
PAYLOAD_COLUMN = 9
STATUS_COLUMN = 11
VALIDITY_COLUMN = 15


def _cell(row: Sequence[Any], index: int) -> str:
    """Read a cell as text; the store trims trailing empty cells from short rows."""
    if index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class DocumentRecord:
    """One invoice or quotation row with named fields."""
    
    kind: DocumentKind
    created_at: str = ""
    number: str = ""
    date_raw: str = ""
    client: str = ""
    subtotal_raw: str = ""
    total_raw: str = ""
    payload_raw: str = ""
    status_raw: str = ""
    validity_raw: Optional[str] = None
    
    @property
    def is_invoice(self) -> bool:
        return self.kind is DocumentKind.INVOICE
    
    @classmethod
    def from_row(cls, kind: DocumentKind, row: Sequence[Any]) -> "DocumentRecord":
        """
        Build a record from a raw row-tuple.
        
        Args:
            kind: Collection the row belongs to
            row: Raw cells as returned by the store
            
        Returns:
            DocumentRecord with every relevant column populated
        """
        validity = None
        if kind is DocumentKind.QUOTATION:
            validity = _cell(row, VALIDITY_COLUMN)
        
        return cls(
            kind=kind,
            created_at=_cell(row, CREATED_AT_COLUMN),
            number=_cell(row, NUMBER_COLUMN),
            date_raw=_cell(row, DATE_COLUMN),
            client=_cell(row, CLIENT_COLUMN),
            subtotal_raw=_cell(row, SUBTOTAL_COLUMN),
            total_raw=_cell(row, TOTAL_COLUMN),
            payload_raw=_cell(row, PAYLOAD_COLUMN),
            status_raw=_cell(row, STATUS_COLUMN),
            validity_raw=validity,
        )
