"""
Helpers for raw table rows.
"""

import re

RawRow = dict[str, str]

_LINE_BREAK = re.compile(r"\r?\n")


def sanitize(value: str | None) -> str:
    """Collapse embedded line breaks to a space and trim."""
    if value is None:
        return ""
    return _LINE_BREAK.sub(" ", value).strip()


def missing_columns(row: RawRow, columns: tuple[str, ...]) -> list[str]:
    """Return the columns that are absent from the row."""
    return [column for column in columns if row.get(column) is None]
