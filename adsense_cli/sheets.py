"""Spreadsheet output for report tables."""

from collections.abc import Sequence
from typing import Any

SPREADSHEET_URL = "https://docs.google.com/spreadsheets/d/{}/edit"


class SpreadsheetWriter:
    """Write a header row and data rows into a Google spreadsheet."""

    def __init__(self, service: Any) -> None:
        self._service = service

    def create(self, title: str) -> str:
        """Create an empty spreadsheet and return its ID."""
        spreadsheet = (
            self._service.spreadsheets()
            .create(body={"properties": {"title": title}}, fields="spreadsheetId")
            .execute()
        )
        return spreadsheet["spreadsheetId"]

    def write_table(
        self,
        spreadsheet_id: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        start_cell: str = "A1",
    ) -> int:
        """Write ``headers`` followed by ``rows`` starting at ``start_cell``.

        Returns:
            Number of cells updated, as reported by the API.
        """
        values = [list(headers)] + [list(row) for row in rows]
        result = (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=start_cell,
                valueInputOption="RAW",
                body={"values": values},
            )
            .execute()
        )
        return int(result.get("updatedCells", 0))


def spreadsheet_url(spreadsheet_id: str) -> str:
    return SPREADSHEET_URL.format(spreadsheet_id)
