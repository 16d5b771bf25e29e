"""
Number log source interface.
Defines the contract the registry builder relies on, so the spreadsheet
library stays a black box behind it.
"""

from typing import Iterator, NamedTuple, Protocol


class NumberLogRow(NamedTuple):
    """One data row of the number log."""
    row: int        # 1-based spreadsheet row
    doc_nr: str     # raw document number cell text
    title: str


class NumberLogSource(Protocol):
    """
    Protocol for anything that yields number log rows.

    Only the first worksheet is used. Cell values are returned as the
    formatted text a user would see, "" for empty cells.
    """

    def cell_text(self, ref: str) -> str:
        """
        Return the text of a single cell, e.g. "C1".
        """
        ...

    def iter_rows(self, start_row: int, docnr_col: str, title_col: str) -> Iterator[NumberLogRow]:
        """
        Yield data rows in spreadsheet order, starting at `start_row`.

        Args:
            start_row: first data row (1-based)
            docnr_col: column letter holding the document number
            title_col: column letter holding the title
        """
        ...

    def close(self) -> None:
        ...
