"""
Tests for document number parsing.

Run with: pytest services/prjbrain/tests/test_parser.py -v
"""
import pytest

from prjbrain.core.errors import ConfigError, InvalidFormat
from prjbrain.core.parser import (
    NR_PATTERN,
    REV_PATTERN,
    DocNumberParser,
    parse_doc_nr,
    translate_posix_classes,
)


class TestParseDocNr:
    """Default number and revision patterns."""

    @pytest.mark.parametrize(
        "raw, nr, rev",
        [
            ("P1234-M1230-AA_dsfsdaf.pdf", "P1234-M1230", "AA"),
            ("p1234-1235_AA-dsfsdaf.pdf", "p1234-1235", "AA"),
            ("p3234-M123-AA.pdf", "p3234-M123", "AA"),
            ("P121-C223.cd", "P121-C223", ""),
            ("P121-C223", "P121-C223", ""),
            ("P123-325_AA", "P123-325", "AA"),
        ],
    )
    def test_known_numbers(self, raw, nr, rev):
        assert parse_doc_nr(raw) == (nr, rev)

    @pytest.mark.parametrize("raw", ["", "garbage", "P1234", "-1234", " P1234-1001", "readme.txt"])
    def test_no_number_fails(self, raw):
        """Strings without a number at the start raise InvalidFormat."""
        with pytest.raises(InvalidFormat) as exc:
            parse_doc_nr(raw)
        assert exc.value.raw == raw

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            parse_doc_nr("nothing here")

    def test_missing_revision_is_not_an_error(self):
        assert parse_doc_nr("P1-2 final.pdf") == ("P1-2", "")

    def test_deterministic(self):
        parser = DocNumberParser()
        results = {parser.parse("P1234-M1230-AA_x.pdf") for _ in range(5)}
        assert results == {("P1234-M1230", "AA")}


class TestCustomPatterns:
    """User supplied patterns from the config file."""

    def test_posix_classes_translated(self):
        parser = DocNumberParser(
            "(^[[:alnum:]]+-[[:alnum:]]+)",
            "(?:[\\-_])([[:alnum:]]{2})(?:$|[\\-_\\.])",
        )
        assert parser.parse("P1234-M1230-AA_dsfsdaf.pdf") == ("P1234-M1230", "AA")
        assert parser.parse("P121-C223.cd") == ("P121-C223", "")

    def test_translate_posix_classes(self):
        assert translate_posix_classes("[[:digit:]]+") == "[0-9]+"
        assert translate_posix_classes(NR_PATTERN) == NR_PATTERN

    def test_number_anywhere_in_string(self):
        """Without the ^ anchor the first match anywhere is used."""
        parser = DocNumberParser(r"[A-Z]{3}-\d{4}", REV_PATTERN)
        assert parser.parse("drawing ABC-1234_BB.pdf") == ("ABC-1234", "BB")

    def test_rev_pattern_needs_one_group(self):
        with pytest.raises(ConfigError):
            DocNumberParser(NR_PATTERN, r"[\-_][A-Z]{2}")
        with pytest.raises(ConfigError):
            DocNumberParser(NR_PATTERN, r"([\-_])([A-Z]{2})")

    def test_malformed_pattern(self):
        with pytest.raises(ConfigError):
            DocNumberParser("([A-Z]+", REV_PATTERN)
        with pytest.raises(ConfigError):
            DocNumberParser(NR_PATTERN, "([A-Z]{2}")

    def test_parse_rev_only(self):
        parser = DocNumberParser()
        assert parser.parse_rev("P1234-1001-AB.dwg") == "AB"
        assert parser.parse_rev("readme.txt") == ""
