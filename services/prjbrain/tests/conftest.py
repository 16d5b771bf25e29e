"""
Shared fixtures: number log workbooks and project folder trees.
"""
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest
from openpyxl import Workbook

from prjbrain.settings import Settings


def write_number_log(
    path: Path,
    rows: Iterable[Tuple[str, str]],
    project_number: str = "P1234",
    project_title: str = "Test Project",
    start_row: int = 5,
) -> Path:
    """
    Write a number log the way the real template looks:
    C1 project number, C2 project title, data from `start_row` with
    title in column B and document number in column C.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Nummerliggare"
    ws["C1"] = project_number
    ws["C2"] = project_title
    ws["B4"] = "Title"
    ws["C4"] = "Document number"
    for offset, (docnr, title) in enumerate(rows):
        ws.cell(row=start_row + offset, column=2, value=title or None)
        ws.cell(row=start_row + offset, column=3, value=docnr or None)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def make_tree(root: Path, files: Iterable[str]) -> Path:
    """Create empty files (relative paths, '/' separated) under root."""
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"x")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    A small project folder with a number log and a mix of files:
    exact matches, a case mismatch, orphans, unrelated files and a .git dir.
    """
    root = tmp_path / "P1234 Widget"
    write_number_log(
        root / "Nummerliggare.xlsx",
        [
            ("P1234-1001", "Assembly drawing"),
            ("P1234-1002-AB", "Part drawing"),
            ("", ""),
            ("P1234-1003_AA", "Test report"),
            ("garbage", "Bad row"),
        ],
    )
    make_tree(root, [
        "drawings/P1234-1001-AA.pdf",
        "drawings/P1234-1001-AB.dwg",
        "drawings/old/P1234-1002_AB.pdf",
        "reports/p1234-1003_AA.docx",
        "reports/P1234-9999 notes.txt",
        "misc/readme.txt",
        ".git/P1234-1001-ZZ.pdf",
        "drawings/.git/objects/P1234-2000.pdf",
    ])
    return root


@pytest.fixture
def project_settings(project: Path) -> Settings:
    return Settings(
        root_dir=str(project),
        number_log=str(project / "Nummerliggare.xlsx"),
    )


class FakeNumberLog:
    """In-memory NumberLogSource for registry tests."""

    def __init__(self, rows=(), cells: Optional[Dict[str, str]] = None):
        self.rows = list(rows)
        self.cells = cells or {}
        self.closed = False

    def cell_text(self, ref: str) -> str:
        return self.cells.get(ref, "")

    def iter_rows(self, start_row, docnr_col, title_col):
        return iter(self.rows)

    def close(self) -> None:
        self.closed = True
