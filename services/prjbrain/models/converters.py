from __future__ import annotations

from prjbrain.core.errors import ScanWarning
from prjbrain.schemas import CatalogOverview, DocOut, DocSummary, FileOut, WarningOut

from . import Catalog, Doc, File


def file_out(f: File) -> FileOut:
    return FileOut(
        file_path=f.file_path,
        rel_path=f.rel_path,
        nr=f.nr,
        rev=f.rev,
        comment=f.comment,
    )


def doc_summary(doc: Doc) -> DocSummary:
    return DocSummary(
        nr=doc.nr,
        doc_nr=doc.doc_nr,
        title=doc.title,
        rev=doc.rev,
        file_count=len(doc.files),
    )


def doc_out(doc: Doc) -> DocOut:
    return DocOut(
        nr=doc.nr,
        doc_nr=doc.doc_nr,
        title=doc.title,
        rev=doc.rev,
        file_count=len(doc.files),
        row=doc.row,
        files=[file_out(f) for f in doc.files],
    )


def warning_out(w: ScanWarning) -> WarningOut:
    return WarningOut(**w.to_dict())


def catalog_overview(catalog: Catalog) -> CatalogOverview:
    """
    Overview of a Catalog: project header plus one row per document,
    sorted by document number like the number log view.
    """
    return CatalogOverview(
        project_number=catalog.project_number,
        project_title=catalog.project_title,
        root_dir=catalog.root_dir,
        scanned_at=catalog.scanned_at,
        docs=[doc_summary(catalog.docs[nr]) for nr in sorted(catalog.docs)],
        file_count=catalog.file_count,
        orphan_count=len(catalog.orphan_files),
        warning_count=len(catalog.warnings),
    )
