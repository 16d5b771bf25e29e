# services/prjbrain/core/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

from prjbrain.adapters.base import NumberLogRow, NumberLogSource
from prjbrain.models import Doc

from .errors import DUPLICATE_KEY, ROW_PARSE, InvalidFormat, ScanWarning
from .parser import DocNumberParser

if TYPE_CHECKING:
    from prjbrain.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """Docs keyed by canonical number (spreadsheet order), files still empty."""
    docs: Dict[str, Doc] = field(default_factory=dict)
    warnings: List[ScanWarning] = field(default_factory=list)


def build_registry(rows: Iterable[NumberLogRow], parser: DocNumberParser) -> Registry:
    """
    Build the document registry from number log rows.

    Rules:
    - rows with an empty (or whitespace-only) document number are blank
      separators -> skipped
    - rows that do not parse -> skipped with a `row_parse` warning
    - two rows with the same canonical number -> the later row wins,
      with a `duplicate_key` warning
    """
    registry = Registry()

    for r in rows:
        raw = r.doc_nr or ""
        text = raw.strip()
        if not text:
            continue

        # Parsed without surrounding whitespace; Doc.doc_nr keeps the cell as is.
        try:
            nr, rev = parser.parse(text)
        except InvalidFormat as e:
            logger.warning(f"Row {r.row}: {e}")
            registry.warnings.append(
                ScanWarning(kind=ROW_PARSE, message=str(e), row=r.row, value=raw)
            )
            continue

        previous = registry.docs.get(nr)
        if previous is not None:
            msg = (
                f"Document number {nr} on row {r.row} ({raw!r}) replaces "
                f"row {previous.row} ({previous.doc_nr!r})"
            )
            logger.warning(msg)
            registry.warnings.append(
                ScanWarning(kind=DUPLICATE_KEY, message=msg, row=r.row, value=raw)
            )

        registry.docs[nr] = Doc(nr=nr, doc_nr=raw, title=(r.title or "").strip(), rev=rev, row=r.row)

    logger.info(f"Registry built: {len(registry.docs)} documents, {len(registry.warnings)} warnings")
    return registry


def resolve_project_info(settings: "Settings", source: NumberLogSource) -> Tuple[str, str]:
    """
    Return (project_number, project_title).

    Configured values win; empty ones are read from the number log cells
    `prjnr_cell` / `prjtitle_cell`.
    """
    project_number = settings.prjnr or source.cell_text(settings.prjnr_cell).strip()
    project_title = settings.prjtitle or source.cell_text(settings.prjtitle_cell).strip()
    return project_number, project_title
