"""
Report Exceptions
"""


class ReportGenerationError(Exception):
    """Raised when the aggregation pass fails; no partial report is produced."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
