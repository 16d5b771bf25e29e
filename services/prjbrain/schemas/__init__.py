"""
Pydantic schemas for API responses.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class FileOut(BaseModel):
    """A file on disk."""
    file_path: str = Field(..., description="Absolute path")
    rel_path: str = Field(..., description="Path relative to the project root")
    nr: str = Field("", description="Document number (exact matches only)")
    rev: str = Field("", description="Revision parsed from the file name (exact matches only)")
    comment: str = ""


class DocSummary(BaseModel):
    """Overview row for one document."""
    nr: str
    doc_nr: str = Field(..., description="Raw number log text")
    title: str = ""
    rev: str = ""
    file_count: int = 0


class DocOut(DocSummary):
    """Document with its files."""
    row: Optional[int] = Field(None, description="Number log row")
    files: List[FileOut] = Field(default_factory=list)


class WarningOut(BaseModel):
    kind: str
    message: str
    row: Optional[int] = None
    value: Optional[str] = None
    path: Optional[str] = None


class CatalogOverview(BaseModel):
    project_number: str
    project_title: str
    root_dir: str
    scanned_at: str
    docs: List[DocSummary] = Field(default_factory=list)
    file_count: int = 0
    orphan_count: int = 0
    warning_count: int = 0
