"""
Display names for shared lookup values (program types, grade levels, ...).

Programs store these as plain strings inside JSON arrays, written in either
the canonical or the English spelling depending on when the row was created,
so matching is done against both name columns.
"""
from typing import Iterable, List, Mapping, Optional

from django.conf import settings

from .localization import get_canonical_language, primary_subtag


def _column(row, name: str):
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def _alternate_column(language: str) -> Optional[str]:
    columns = getattr(settings, "LOOKUP_NAME_COLUMNS", {"en": "name_en"})
    return columns.get(language) or columns.get(primary_subtag(language))


def display_name(row, language: str) -> str:
    """Alternate-language name when the row has one, else the canonical name."""
    if row is None:
        return ""
    column = _alternate_column(language)
    if column and primary_subtag(language) != get_canonical_language():
        alternate = _column(row, column)
        if alternate:
            return alternate
    return _column(row, "name") or ""


class LabelIndex:
    """Lookup rows indexed by every spelling they are known under."""

    def __init__(self, rows: Iterable):
        self._by_value = {}
        self._columns = ["name"] + sorted(
            set(getattr(settings, "LOOKUP_NAME_COLUMNS", {"en": "name_en"}).values())
        )
        for row in rows or ():
            for column in self._columns:
                value = _column(row, column)
                # First row wins when two rows share a spelling.
                if value and value not in self._by_value:
                    self._by_value[value] = row

    def find(self, raw_value):
        return self._by_value.get(raw_value)

    def label(self, raw_value, language: str) -> str:
        if raw_value is None:
            return ""
        if not isinstance(raw_value, str):
            return raw_value
        row = self.find(raw_value)
        if row is None:
            return raw_value
        return display_name(row, language) or raw_value


def translate_label(raw_value, lookup_table, requested_language: str) -> str:
    """
    Display name of one lookup value. Unknown values come back unchanged.
    `lookup_table` is an iterable of rows or a prebuilt LabelIndex.
    """
    index = lookup_table if isinstance(lookup_table, LabelIndex) else LabelIndex(lookup_table)
    return index.label(raw_value, requested_language)


def translate_labels(raw_values, lookup_table, requested_language: str) -> List[str]:
    index = lookup_table if isinstance(lookup_table, LabelIndex) else LabelIndex(lookup_table)
    return [index.label(value, requested_language) for value in raw_values or ()]
