# services/prjbrain/routers/catalog.py
from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from prjbrain.core.errors import CatalogNotReady, PrjbrainError
from prjbrain.core.scanner import CatalogStore
from prjbrain.models import Catalog
from prjbrain.models.converters import catalog_overview, doc_out, file_out, warning_out
from prjbrain.schemas import CatalogOverview, DocOut, FileOut, WarningOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def get_catalog_store(request: Request) -> CatalogStore:
    store = getattr(request.app.state, "catalog_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Catalog store not configured on app.state.catalog_store",
        )
    return store


# DI alias (no default!)
Store = Annotated[CatalogStore, Depends(get_catalog_store)]


def _current(store: CatalogStore) -> Catalog:
    try:
        return store.current
    except CatalogNotReady as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("", response_model=CatalogOverview)
async def get_overview(store: Store):
    """Project header and one summary row per document."""
    return catalog_overview(_current(store))


@router.get("/details", response_model=List[DocOut])
async def get_details(store: Store):
    """All documents with their files, sorted by document number."""
    catalog = _current(store)
    return [doc_out(catalog.docs[nr]) for nr in sorted(catalog.docs)]


@router.get("/docs/{nr}", response_model=DocOut)
async def get_doc(nr: str, store: Store):
    doc = _current(store).get(nr)
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Document {nr} not found")
    return doc_out(doc)


@router.get("/orphans", response_model=List[FileOut])
async def get_orphans(store: Store):
    """Project files that match no document in the number log."""
    return [file_out(f) for f in _current(store).orphan_files]


@router.get("/warnings", response_model=List[WarningOut])
async def get_warnings(store: Store):
    return [warning_out(w) for w in _current(store).warnings]


@router.post("/rescan", response_model=CatalogOverview)
def rescan(request: Request, store: Store):
    """
    Re-read the number log and rescan the folder.

    Runs in the threadpool (plain def) since the scan is blocking I/O.
    The new catalog replaces the old one only when the scan succeeds.
    """
    settings = request.app.state.settings
    try:
        catalog = store.rescan(settings)
    except PrjbrainError as e:
        logger.error(f"Rescan failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Rescan failed: {e}",
        )
    return catalog_overview(catalog)
