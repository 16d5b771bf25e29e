# services/prjbrain/core/parser.py
"""
Document number parsing.

A raw string (number log cell or file name) is split into the canonical
document number and an optional two character revision code:

    "P1234-M1230-AA_drawing.pdf" -> ("P1234-M1230", "AA")
    "P121-C223.cd"               -> ("P121-C223", "")
"""
from __future__ import annotations

import re
from typing import Optional, Pattern, Tuple

from .errors import ConfigError, InvalidFormat

# Alphanumerics, a hyphen, alphanumerics - anchored at the start.
NR_PATTERN = r"(^[A-Za-z0-9]+-[A-Za-z0-9]+)"
# Hyphen/underscore, two alphanumerics, then end or -_. separator.
REV_PATTERN = r"(?:[\-_])([A-Za-z0-9]{2})(?:$|[\-_\.])"

# Bracket classes accepted in config files written for POSIX regex engines
_POSIX_CLASSES = {
    "[:alnum:]": "A-Za-z0-9",
    "[:alpha:]": "A-Za-z",
    "[:digit:]": "0-9",
    "[:upper:]": "A-Z",
    "[:lower:]": "a-z",
    "[:space:]": r"\s",
    "[:word:]": r"\w",
}


def translate_posix_classes(pattern: str) -> str:
    """Replace POSIX bracket classes like `[[:alnum:]]` with Python ranges."""
    for posix, python in _POSIX_CLASSES.items():
        pattern = pattern.replace(posix, python)
    return pattern


def _compile(pattern: str, name: str) -> Pattern[str]:
    try:
        return re.compile(translate_posix_classes(pattern))
    except re.error as e:
        raise ConfigError(f"{name} {pattern!r} is not a valid regular expression: {e}") from e


class DocNumberParser:
    """
    Splits raw strings into (number, revision).

    Both patterns are compiled once at construction. The revision pattern
    must define exactly one capturing group.
    """

    def __init__(self, nr_pattern: str = NR_PATTERN, rev_pattern: str = REV_PATTERN):
        self.nr_pattern = nr_pattern
        self.rev_pattern = rev_pattern
        self._nr_re = _compile(nr_pattern, "nr_pattern")
        self._rev_re = _compile(rev_pattern, "rev_pattern")
        if self._rev_re.groups != 1:
            raise ConfigError(
                f"rev_pattern must define exactly one capturing group, "
                f"got {self._rev_re.groups}: {rev_pattern!r}"
            )

    def parse_nr(self, raw: str) -> str:
        m = self._nr_re.search(raw)
        return m.group(0) if m else ""

    def parse_rev(self, raw: str) -> str:
        m = self._rev_re.search(raw)
        if not m:
            return ""
        return m.group(1) or ""

    def parse(self, raw: str) -> Tuple[str, str]:
        """
        Return (nr, rev) for a raw string.

        Raises:
            InvalidFormat: no document number anywhere in `raw`
        """
        nr = self.parse_nr(raw)
        if not nr:
            raise InvalidFormat(raw)
        return nr, self.parse_rev(raw)


_default_parser: Optional[DocNumberParser] = None


def parse_doc_nr(raw: str) -> Tuple[str, str]:
    """Parse with the default patterns."""
    global _default_parser
    if _default_parser is None:
        _default_parser = DocNumberParser()
    return _default_parser.parse(raw)
