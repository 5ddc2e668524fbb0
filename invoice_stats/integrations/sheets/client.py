"""
Google Sheets Values Client
Reads cell ranges from the Sheets v4 REST API.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from invoice_stats.config import Settings, settings as default_settings
from invoice_stats.integrations.sheets.exceptions import (
    RecordSourceError,
    SourceNotFoundError,
)

logger = logging.getLogger(__name__)


class SheetsClient:
    """
    Minimal read-only client for `spreadsheets.values.get`.
    
    Authenticates with either an API key or a bearer access token,
    whichever is configured.
    """
    
    def __init__(
        self,
        spreadsheet_id: str,
        base_url: str,
        api_key: str = "",
        access_token: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.
        
        Args:
            spreadsheet_id: Target spreadsheet
            base_url: Sheets API root, e.g. https://sheets.googleapis.com/v4
            api_key: Optional API key sent as the `key` query parameter
            access_token: Optional OAuth bearer token
            transport: Optional httpx transport (used to mock the API)
        """
        self.spreadsheet_id = spreadsheet_id
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.transport = transport
    
    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "SheetsClient":
        settings = settings or default_settings
        return cls(
            spreadsheet_id=settings.sheet_id,
            base_url=settings.sheets_api_base_url,
            api_key=settings.sheets_api_key,
            access_token=settings.sheets_access_token,
            transport=transport,
        )
    
    def _values_url(self, range_name: str) -> str:
        return (
            f"{self.base_url}/spreadsheets/{quote(self.spreadsheet_id, safe='')}"
            f"/values/{quote(range_name, safe='!:')}"
        )
    
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers
    
    async def get_values(self, range_name: str) -> list[list[Any]]:
        """
        Fetch every row of a range.
        
        Args:
            range_name: A1 range, e.g. "Invoices!A:P"
            
        Returns:
            Rows as lists of cell values (header row included)
            
        Raises:
            SourceNotFoundError: If the spreadsheet id is missing or the store returns 404
            RecordSourceError: For any other failed request
        """
        if not self.spreadsheet_id:
            raise SourceNotFoundError(
                "Sheet ID not found",
                status_code=404,
                range_name=range_name,
            )
        
        params = {"majorDimension": "ROWS"}
        if self.api_key:
            params["key"] = self.api_key
        
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(
                    self._values_url(range_name),
                    params=params,
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            logger.error("Sheets request failed for %s: %s", range_name, e)
            raise RecordSourceError(
                f"Failed to read {range_name}: {e}",
                range_name=range_name,
            ) from e
        
        if response.status_code == 404:
            raise SourceNotFoundError(
                f"Source not found: {range_name}",
                status_code=404,
                range_name=range_name,
            )
        
        if response.status_code != 200:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            error = error_data.get("error") if isinstance(error_data, dict) else None
            message = (
                error.get("message", "Request failed")
                if isinstance(error, dict)
                else "Request failed"
            )
            logger.error(
                "Sheets API error (%s) for %s: %s",
                response.status_code,
                range_name,
                message,
            )
            raise RecordSourceError(
                f"Failed to read {range_name}: {message}",
                status_code=response.status_code,
                range_name=range_name,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Sheets API returned a non-JSON body for %s", range_name)
            raise RecordSourceError(
                f"Failed to read {range_name}: response was not JSON",
                status_code=response.status_code,
                range_name=range_name,
            ) from e

        if not isinstance(payload, dict):
            raise RecordSourceError(
                f"Failed to read {range_name}: unexpected response shape",
                status_code=response.status_code,
                range_name=range_name,
            )
        return payload.get("values", [])
