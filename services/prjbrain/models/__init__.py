from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from prjbrain.core.errors import ScanWarning


@dataclass(frozen=True)
class File:
    """
    One file on disk, attached to a Doc or listed as an orphan.

    `nr` and `rev` are only filled in for exact matches.
    """
    file_path: str
    rel_path: str

    nr: str = ""
    rev: str = ""
    comment: str = ""


@dataclass(frozen=True)
class Doc:
    """
    A document from the number log.

    A document can have many representations on disk in the form of
    different Files (revisions, formats, exports).
    """
    nr: str
    doc_nr: str
    title: str = ""
    rev: str = ""
    files: Tuple[File, ...] = ()
    row: Optional[int] = None  # number log row it came from


@dataclass(frozen=True)
class Catalog:
    """
    Snapshot of one scan: every Doc keyed by document number plus the
    orphan files. Replaced wholesale on rescan, never mutated.
    """
    project_number: str
    project_title: str
    root_dir: str

    docs: Mapping[str, Doc] = field(default_factory=lambda: MappingProxyType({}))
    orphan_files: Tuple[File, ...] = ()
    warnings: Tuple[ScanWarning, ...] = ()

    scanned_at: str = ""

    def get(self, nr: str) -> Optional[Doc]:
        return self.docs.get(nr)

    @property
    def file_count(self) -> int:
        return sum(len(d.files) for d in self.docs.values())
