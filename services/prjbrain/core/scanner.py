# services/prjbrain/core/scanner.py
"""
One scan pass: number log -> registry -> folder walk -> Catalog.

The number log is read and closed before the walk starts. Files are
collected per document number and the Docs are only frozen into the
Catalog once the walk is done, so no half-filled Doc is ever visible.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from prjbrain.adapters.base import NumberLogSource
from prjbrain.adapters.xlsx import XlsxNumberLog
from prjbrain.models import Catalog, File

from .classifier import CASE_MISMATCH, EXACT, ORPHAN, FileClassifier
from .errors import WALK_ACCESS, CatalogNotReady, ScanWarning, WalkAccessError
from .parser import DocNumberParser
from .registry import build_registry, resolve_project_info
from .walker import walk

if TYPE_CHECKING:
    from prjbrain.settings import Settings

logger = logging.getLogger(__name__)

SourceFactory = Callable[[str], NumberLogSource]


def _utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def scan(settings: "Settings", open_source: Optional[SourceFactory] = None) -> Catalog:
    """
    Build a complete Catalog for `settings.root_dir`.

    Args:
        settings: resolved settings (see `load_settings`)
        open_source: factory returning a NumberLogSource for a path;
            defaults to the openpyxl reader

    Raises:
        ConfigError: bad patterns or unreadable number log
        RootTraversalError: root directory cannot be listed
    """
    started = time.time()
    parser = DocNumberParser(settings.nr_pattern, settings.rev_pattern)
    open_source = open_source or XlsxNumberLog

    source = open_source(settings.number_log)
    try:
        project_number, project_title = resolve_project_info(settings, source)
        registry = build_registry(
            source.iter_rows(settings.pn_start_row, settings.docnr_col, settings.title_col),
            parser,
        )
    finally:
        source.close()

    warnings: List[ScanWarning] = list(registry.warnings)

    def on_walk_error(err: WalkAccessError) -> None:
        logger.warning(str(err))
        warnings.append(ScanWarning(kind=WALK_ACCESS, message=str(err), path=err.path))

    classifier = FileClassifier(registry.docs.keys(), project_number, parser)
    files_by_nr: Dict[str, List[File]] = {nr: [] for nr in registry.docs}
    orphans: List[File] = []
    root_dir = settings.root_dir

    for path in walk(root_dir, settings.get_skip_dirs(), on_error=on_walk_error):
        result = classifier.classify(path, root_dir)
        if result.kind in (EXACT, CASE_MISMATCH):
            files_by_nr[result.nr].append(result.file)
        elif result.kind == ORPHAN:
            orphans.append(result.file)

    docs = {
        nr: replace(doc, files=tuple(files_by_nr[nr]))
        for nr, doc in registry.docs.items()
    }
    catalog = Catalog(
        project_number=project_number,
        project_title=project_title,
        root_dir=root_dir,
        docs=MappingProxyType(docs),
        orphan_files=tuple(orphans),
        warnings=tuple(warnings),
        scanned_at=_utc_iso(),
    )

    logger.info(
        f"✓ Scanned {root_dir} in {time.time() - started:.2f}s: "
        f"{len(docs)} documents, {catalog.file_count} files, "
        f"{len(orphans)} orphans, {len(warnings)} warnings"
    )
    return catalog


class CatalogStore:
    """
    Holds the published Catalog.

    A rescan builds a new Catalog off to the side and swaps it in with a
    single reference replace; readers see either the old or the new one.
    Rescans are serialized, so the last one to start is the last published.
    """

    def __init__(self, catalog: Optional[Catalog] = None) -> None:
        self._catalog = catalog
        self._lock = threading.Lock()
        self._rescan_lock = threading.Lock()

    @property
    def current(self) -> Catalog:
        catalog = self._catalog
        if catalog is None:
            raise CatalogNotReady("No scan has completed yet")
        return catalog

    @property
    def ready(self) -> bool:
        return self._catalog is not None

    def publish(self, catalog: Catalog) -> None:
        with self._lock:
            self._catalog = catalog

    def rescan(self, settings: "Settings", open_source: Optional[SourceFactory] = None) -> Catalog:
        """
        Scan again and publish the result. On failure the previous
        Catalog stays published and the error propagates.
        """
        with self._rescan_lock:
            catalog = scan(settings, open_source)
            self.publish(catalog)
        return catalog
