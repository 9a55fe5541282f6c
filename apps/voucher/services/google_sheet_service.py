"""
Google Sheets Service

This module wraps the Google Sheets API calls used for vouchers: reading a
column, listing and adding tabs, writing the header row and appending rows.
Every API failure is re-raised as ``SheetsServiceError``.
"""

import logging
from typing import Any, List, Optional

from googleapiclient.errors import HttpError

from apps.voucher.exceptions import SheetsServiceError
from apps.voucher.services.google_auth import build_service

logger = logging.getLogger(__name__)

TAB_ROW_COUNT = 1000
TAB_COLUMN_COUNT = 14


class GoogleSheetsService:
    """Service for interacting with Google Sheets API."""

    def __init__(self, sheets_service=None):
        self._sheets_service = sheets_service

    @property
    def sheets_service(self):
        if self._sheets_service is None:
            try:
                self._sheets_service = build_service("sheets", "v4")
            except RuntimeError as e:
                raise SheetsServiceError(str(e))
        return self._sheets_service

    def _execute(self, request, action: str):
        try:
            return request.execute()
        except HttpError as e:
            logger.error(f"Google Sheets API error while {action}: {e.reason}")
            raise SheetsServiceError(f"Failed {action}: {e.reason}")
        except Exception as e:
            logger.error(f"Unexpected error while {action}: {str(e)}")
            raise SheetsServiceError(f"Unexpected error {action}: {str(e)}")

    def read_spreadsheet(self, spreadsheet_id: str, range_name: str) -> List[List[Any]]:
        """
        Read data from a Google Spreadsheet.

        Args:
            spreadsheet_id: The ID of the spreadsheet to read from.
            range_name: The A1 notation of the range to read.

        Returns:
            List of rows, where each row is a list of values.
        """
        request = (
            self.sheets_service.spreadsheets()
            .values()
            .get(spreadsheetId=spreadsheet_id, range=range_name)
        )
        result = self._execute(request, f"reading {range_name}")

        values = result.get("values", [])
        logger.info(f"Read {len(values)} rows from {range_name} in {spreadsheet_id}")
        return values

    def read_column(self, spreadsheet_id: str, tab: str, column: str) -> List[Any]:
        """Return the cells of one column, top to bottom, blanks as ``""``."""
        rows = self.read_spreadsheet(spreadsheet_id, f"{tab}!{column}:{column}")
        return [row[0] if row else "" for row in rows]

    def list_tab_titles(self, spreadsheet_id: str) -> List[str]:
        request = self.sheets_service.spreadsheets().get(spreadsheetId=spreadsheet_id)
        result = self._execute(request, f"listing tabs of {spreadsheet_id}")
        return [sheet["properties"]["title"] for sheet in result.get("sheets", [])]

    def add_tab(
        self,
        spreadsheet_id: str,
        title: str,
        row_count: int = TAB_ROW_COUNT,
        column_count: int = TAB_COLUMN_COUNT,
    ) -> None:
        body = {
            "requests": [
                {
                    "addSheet": {
                        "properties": {
                            "title": title,
                            "gridProperties": {
                                "rowCount": row_count,
                                "columnCount": column_count,
                            },
                        }
                    }
                }
            ]
        }
        request = self.sheets_service.spreadsheets().batchUpdate(
            spreadsheetId=spreadsheet_id, body=body
        )
        self._execute(request, f"adding tab {title}")
        logger.info(f"Added tab '{title}' to spreadsheet {spreadsheet_id}")

    def write_to_spreadsheet(
        self, spreadsheet_id: str, range_name: str, values: List[List[Any]]
    ) -> Optional[int]:
        """
        Write data to a Google Spreadsheet.

        Args:
            spreadsheet_id: The ID of the spreadsheet to write to.
            range_name: The A1 notation of the range to write.
            values: The data to write, as a list of rows.

        Returns:
            Number of cells updated.
        """
        request = (
            self.sheets_service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption="RAW",
                body={"values": values},
            )
        )
        result = self._execute(request, f"writing {range_name}")

        logger.info(
            f"Updated {result.get('updatedCells')} cells in spreadsheet {spreadsheet_id}"
        )
        return result.get("updatedCells")

    def append_rows(
        self, spreadsheet_id: str, range_name: str, values: List[List[Any]]
    ) -> Optional[str]:
        """
        Append rows after the last non-empty row of ``range_name``.

        Returns:
            The A1 range that was written, as reported by the API.
        """
        request = (
            self.sheets_service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption="RAW",
                body={"values": values},
            )
        )
        result = self._execute(request, f"appending to {range_name}")

        updated_range = result.get("updates", {}).get("updatedRange")
        logger.info(f"Appended {len(values)} row(s) to {updated_range or range_name}")
        return updated_range
