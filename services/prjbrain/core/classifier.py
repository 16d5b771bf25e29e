# services/prjbrain/core/classifier.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from prjbrain.models import File

from .parser import DocNumberParser

EXACT = "exact"
CASE_MISMATCH = "case_mismatch"
ORPHAN = "orphan"
IGNORED = "ignored"

CASE_MISMATCH_COMMENT = "filename case does not match document number case"


@dataclass(frozen=True)
class Classification:
    kind: str
    nr: str = ""                  # matched catalog key (EXACT / CASE_MISMATCH)
    file: Optional[File] = None   # None for IGNORED


class FileClassifier:
    """
    Decides where a file belongs.

    Keys are tried longest first (ties in lexical order), so when both
    "P1-10" and "P1-1" are prefixes of a file name the file goes to "P1-10"
    regardless of registry order.
    """

    def __init__(self, keys: Iterable[str], project_number: str = "", parser: Optional[DocNumberParser] = None):
        self.keys: List[str] = sorted({k for k in keys if k}, key=lambda k: (-len(k), k))
        self._lower_keys: List[Tuple[str, str]] = [(k.lower(), k) for k in self.keys]
        self.project_number = project_number
        self.parser = parser or DocNumberParser()

    def _exact_key(self, name: str) -> Optional[str]:
        for k in self.keys:
            if name.startswith(k):
                return k
        return None

    def _case_insensitive_key(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for lk, k in self._lower_keys:
            if lowered.startswith(lk):
                return k
        return None

    def classify(self, file_path: str, root_dir: str) -> Classification:
        name = os.path.basename(file_path)
        rel_path = os.path.relpath(file_path, root_dir)

        k = self._exact_key(name)
        if k is not None:
            f = File(file_path=file_path, rel_path=rel_path, nr=k, rev=self.parser.parse_rev(name))
            return Classification(kind=EXACT, nr=k, file=f)

        # Windows users rename files freely; catch p1234-... vs P1234-...
        k = self._case_insensitive_key(name)
        if k is not None:
            f = File(file_path=file_path, rel_path=rel_path, comment=CASE_MISMATCH_COMMENT)
            return Classification(kind=CASE_MISMATCH, nr=k, file=f)

        # Right project, but missing from the number log
        if self.project_number and name.startswith(self.project_number):
            return Classification(kind=ORPHAN, file=File(file_path=file_path, rel_path=rel_path))

        return Classification(kind=IGNORED)
