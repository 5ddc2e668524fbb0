"""
Record Store Exceptions
Custom exceptions for reading invoice and quotation rows.
"""

from typing import Optional


class RecordSourceError(Exception):
    """Exception for record fetching errors."""
    
    def __init__(
        self, 
        message: str, 
        status_code: Optional[int] = None, 
        range_name: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.range_name = range_name
        super().__init__(self.message)


class SourceNotFoundError(RecordSourceError):
    """The spreadsheet or one of its ranges does not exist or is not configured."""


class RecordSourceTimeoutError(RecordSourceError):
    """The upstream fetch did not complete within the configured timeout."""
