"""
Parsing of pasted or exported invoice and business trip tables.
"""

import io
import logging
import re
from pathlib import Path

import pandas as pd

from .rows import RawRow

logger = logging.getLogger(__name__)

SUPPORTED_DELIMITERS = ("\t", ";")


class TableReadError(Exception):
    """Exception raised when a source table cannot be read or parsed."""


def detect_delimiter(text: str) -> str:
    """Tab if the first non-empty line contains one, semicolon otherwise."""
    for line in text.splitlines():
        if line.strip():
            return "\t" if "\t" in line else ";"
    return "\t"


def strip_trailing_delimiters(text: str, delimiter: str) -> str:
    """
    Remove empty trailing columns from every record.

    Lines that end inside a quoted multi-line cell are kept as they are.
    """
    trailing = re.compile(rf"(?:{re.escape(delimiter)})+$")
    lines = []
    in_quotes = False
    for line in text.splitlines():
        # Escaped quotes come in pairs and do not change the parity
        if line.count('"') % 2:
            in_quotes = not in_quotes
        lines.append(line if in_quotes else trailing.sub("", line))
    return "\n".join(lines) + "\n"


def ensure_header(
    text: str,
    header: tuple[str, ...],
    delimiter: str,
    key_columns: tuple[str, ...] | None = None,
) -> str:
    """
    Prepend the expected header when the text starts with a data row.

    The first non-empty line counts as a header when it contains all key
    columns (all header columns if no key columns are given).
    """
    key_columns = key_columns or header
    for line in text.splitlines():
        if not line.strip():
            continue
        if all(column in line for column in key_columns):
            return text
        break

    logger.info("No header row found, using the default column layout")
    return delimiter.join(header) + "\n" + text


class TableReader:
    """Reader turning delimited text into rows keyed by column name."""

    def __init__(
        self,
        encoding: str = "utf-8",
        delimiter: str | None = None,
    ):
        self.encoding = encoding
        self.delimiter = delimiter

    def parse_rows(
        self,
        text: str,
        expected_header: tuple[str, ...] | None = None,
        key_columns: tuple[str, ...] | None = None,
    ) -> list[RawRow]:
        """
        Parse delimited text into a list of rows.

        Args:
            text: Table text, normally with a header line
            expected_header: Header to prepend if the text has none
            key_columns: Columns identifying a header line

        Returns:
            One dict per data row; cells missing from short rows are absent

        Raises:
            TableReadError: If pandas cannot parse the text
        """
        if text is None or not text.strip():
            return []

        delimiter = self.delimiter or detect_delimiter(text)
        text = strip_trailing_delimiters(text, delimiter)
        if expected_header:
            text = ensure_header(text, expected_header, delimiter, key_columns)

        try:
            df = pd.read_csv(
                io.StringIO(text),
                sep=delimiter,
                quotechar='"',
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
                engine="python",
                on_bad_lines=self._skip_bad_line,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise TableReadError(f"Error parsing table: {e}") from e

        # Clean up column names
        df.columns = df.columns.str.strip()

        rows = []
        for record in df.to_dict("records"):
            rows.append(
                {
                    column: value
                    for column, value in record.items()
                    if isinstance(value, str)
                },
            )

        logger.debug(f"Parsed {len(rows)} rows with columns {list(df.columns)}")
        return rows

    def read_file(self, file_path: str | Path) -> str:
        """Read a table file as text."""
        try:
            with open(file_path, encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TableReadError(f"Error reading file {file_path}: {e}") from e

    def parse_file(
        self,
        file_path: str | Path,
        expected_header: tuple[str, ...] | None = None,
        key_columns: tuple[str, ...] | None = None,
    ) -> list[RawRow]:
        return self.parse_rows(
            self.read_file(file_path),
            expected_header,
            key_columns,
        )

    @staticmethod
    def _skip_bad_line(fields: list[str]) -> None:
        logger.warning(f"Skipping malformed row with {len(fields)} fields: {fields}")
        return None


def parse_rows(text: str, delimiter: str | None = None) -> list[RawRow]:
    """Parse delimited text with a header line into rows."""
    return TableReader(delimiter=delimiter).parse_rows(text)
