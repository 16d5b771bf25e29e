# services/prjbrain/core/errors.py
"""
Error taxonomy for a scan.

Fatal errors (ConfigError, RootTraversalError) abort the scan before any
Catalog is produced. Recoverable ones (InvalidFormat, WalkAccessError,
duplicate document numbers) are turned into ScanWarning records that travel
with the Catalog.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# ScanWarning kinds
ROW_PARSE = "row_parse"
DUPLICATE_KEY = "duplicate_key"
WALK_ACCESS = "walk_access"


class PrjbrainError(Exception):
    """Base class for all scan errors."""


class ConfigError(PrjbrainError):
    """Unreadable/missing number log, malformed patterns or settings."""


class RootTraversalError(PrjbrainError):
    """The root directory itself cannot be listed."""


class InvalidFormat(PrjbrainError, ValueError):
    """A raw string does not contain a document number."""

    def __init__(self, raw: str):
        super().__init__(f"Document number is not formatted correctly: {raw!r}")
        self.raw = raw


class WalkAccessError(PrjbrainError):
    """One file or directory could not be read during traversal."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot access {path}{detail}")
        self.path = path
        self.cause = cause


class CatalogNotReady(PrjbrainError):
    """No catalog has been published yet."""


@dataclass(frozen=True)
class ScanWarning:
    kind: str
    message: str
    row: Optional[int] = None
    value: Optional[str] = None
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "row": self.row,
            "value": self.value,
            "path": self.path,
        }
