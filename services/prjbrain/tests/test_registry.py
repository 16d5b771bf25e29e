"""
Tests for building the document registry from number log rows.
"""
from prjbrain.adapters.base import NumberLogRow
from prjbrain.core.errors import DUPLICATE_KEY, ROW_PARSE
from prjbrain.core.parser import DocNumberParser
from prjbrain.core.registry import build_registry, resolve_project_info
from prjbrain.settings import Settings

from conftest import FakeNumberLog


def rows(*items):
    return [NumberLogRow(row=5 + i, doc_nr=d, title=t) for i, (d, t) in enumerate(items)]


class TestBuildRegistry:
    """Row handling rules."""

    def test_docs_keyed_by_canonical_number(self):
        registry = build_registry(
            rows(("P1234-1001", "Assembly"), ("P1234-1002-AB", "Part")),
            DocNumberParser(),
        )
        assert list(registry.docs) == ["P1234-1001", "P1234-1002"]
        doc = registry.docs["P1234-1002"]
        assert doc.doc_nr == "P1234-1002-AB"
        assert doc.title == "Part"
        assert doc.rev == "AB"
        assert doc.row == 6
        assert doc.files == ()
        assert registry.warnings == []

    def test_blank_rows_skipped_without_warning(self):
        registry = build_registry(
            rows(("", "Section heading"), ("   ", ""), ("P1-1", "Doc")),
            DocNumberParser(),
        )
        assert list(registry.docs) == ["P1-1"]
        assert registry.warnings == []

    def test_unparseable_row_warns_and_continues(self):
        registry = build_registry(
            rows(("P1-1", "a"), ("not a number", "b"), ("P1-2", "c")),
            DocNumberParser(),
        )
        assert list(registry.docs) == ["P1-1", "P1-2"]
        assert len(registry.warnings) == 1
        w = registry.warnings[0]
        assert w.kind == ROW_PARSE
        assert w.row == 6
        assert w.value == "not a number"

    def test_duplicate_number_last_write_wins(self):
        registry = build_registry(
            rows(("P1-1-AA", "first"), ("P1-2", "other"), ("P1-1_AB", "second")),
            DocNumberParser(),
        )
        assert list(registry.docs) == ["P1-1", "P1-2"]
        doc = registry.docs["P1-1"]
        assert doc.title == "second"
        assert doc.rev == "AB"
        assert doc.row == 7
        assert [w.kind for w in registry.warnings] == [DUPLICATE_KEY]
        assert registry.warnings[0].row == 7

    def test_surrounding_whitespace_ignored_for_parsing(self):
        registry = build_registry(rows((" P1-1-AB ", "  Title ")), DocNumberParser())
        doc = registry.docs["P1-1"]
        assert doc.rev == "AB"
        assert doc.doc_nr == " P1-1-AB "
        assert doc.title == "Title"
        assert registry.warnings == []


class TestResolveProjectInfo:
    """Project number/title come from config first, then from cells."""

    def test_read_from_cells(self):
        source = FakeNumberLog(cells={"C1": "P1234", "C2": "Widget"})
        assert resolve_project_info(Settings(), source) == ("P1234", "Widget")

    def test_config_overrides_cells(self):
        source = FakeNumberLog(cells={"C1": "P1234", "C2": "Widget"})
        settings = Settings(prjnr="P9999", prjtitle="Gadget")
        assert resolve_project_info(settings, source) == ("P9999", "Gadget")

    def test_custom_cells(self):
        source = FakeNumberLog(cells={"A1": "P42", "A2": "Answer"})
        settings = Settings(prjnr_cell="a1", prjtitle_cell="A2")
        assert resolve_project_info(settings, source) == ("P42", "Answer")

    def test_cell_values_trimmed(self):
        source = FakeNumberLog(cells={"C1": " P1234 ", "C2": "Widget\n"})
        assert resolve_project_info(Settings(), source) == ("P1234", "Widget")
