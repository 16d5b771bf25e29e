# services/prjbrain/adapters/xlsx/__init__.py
from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Iterator
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils import column_index_from_string
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from prjbrain.core.errors import ConfigError
from ..base import NumberLogRow, NumberLogSource

logger = logging.getLogger(__name__)


def cell_text(v: Any) -> str:
    """
    Render a raw openpyxl cell value the way the sheet displays it.
    Whole-number floats lose their ".0", dates drop a midnight time.
    Strings are returned as stored, surrounding whitespace included.
    """
    if v is None:
        return ""
    if isinstance(v, bool):
        return "TRUE" if v else "FALSE"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    if isinstance(v, datetime):
        if v.time() == time(0):
            return v.date().isoformat()
        return v.isoformat(sep=" ")
    if isinstance(v, date):
        return v.isoformat()
    return str(v)


# The number log is usually open in Excel on someone's desk, which locks it
# on Windows. Retry a few times before giving up.
@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(PermissionError),
    reraise=True,
)
def _load_workbook(path: str) -> Workbook:
    return load_workbook(path, data_only=True)


class XlsxNumberLog(NumberLogSource):
    """
    Number log backed by an .xlsx/.xlsm workbook. Only the first worksheet
    is read. Use as a context manager so the workbook is closed before the
    folder scan starts.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            self._wb = _load_workbook(path)
        except (OSError, InvalidFileException, BadZipFile, KeyError, ParseError, ValueError) as e:
            logger.error(f"✗ Cannot open number log {path}: {e}")
            raise ConfigError(f"Cannot open number log {path}: {e}") from e

        if not self._wb.worksheets:
            raise ConfigError(f"Number log {path} has no worksheets")
        self._ws = self._wb.worksheets[0]
        logger.info(f"✓ Opened number log {path} (sheet '{self._ws.title}')")

    def __enter__(self) -> "XlsxNumberLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def cell_text(self, ref: str) -> str:
        return cell_text(self._ws[ref].value)

    def iter_rows(self, start_row: int, docnr_col: str, title_col: str) -> Iterator[NumberLogRow]:
        docnr_idx = column_index_from_string(docnr_col) - 1
        title_idx = column_index_from_string(title_col) - 1
        max_col = max(docnr_idx, title_idx) + 1

        rows = self._ws.iter_rows(min_row=start_row, max_col=max_col, values_only=True)
        for offset, values in enumerate(rows):
            yield NumberLogRow(
                row=start_row + offset,
                doc_nr=cell_text(values[docnr_idx]),
                title=cell_text(values[title_idx]),
            )

    def close(self) -> None:
        self._wb.close()
