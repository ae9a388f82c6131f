"""
Main generator that combines invoices and business trips into one transfer list.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .config import GeneratorConfig
from .csv_parser import TableReader
from .invoices import AMOUNT, BANK_ACCOUNT, COMPANY_NAME, STATUS, process_invoices
from .models import GenerationResult
from .output_formatter import SummaryFormatter, write_rows
from .rows import RawRow
from .trips import process_trips

logger = logging.getLogger(__name__)

INVOICE_HEADER_KEYS = (COMPANY_NAME, BANK_ACCOUNT, AMOUNT, STATUS)


class InputError(ValueError):
    """Exception raised when mandatory input is missing."""


class FileSavingError(Exception):
    """Exception raised when the transfer list cannot be saved."""


def generate(
    invoice_rows: Iterable[RawRow],
    trip_rows: Iterable[RawRow] | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """
    Run both pipelines and concatenate their output, invoices first.

    Args:
        invoice_rows: Parsed invoice table
        trip_rows: Parsed business trip table, None if there is none
        config: Generator configuration

    Returns:
        GenerationResult with the ordered transfer records and the
        diagnostics of every skipped row

    Raises:
        InputError: If no invoice rows were supplied
    """
    if invoice_rows is None:
        raise InputError("Invoice data is required")

    config = config or GeneratorConfig()

    invoices = process_invoices(invoice_rows, config)
    result = GenerationResult(
        records=list(invoices.records),
        skipped=list(invoices.skipped),
    )

    if trip_rows is not None:
        trips = process_trips(
            trip_rows,
            config,
            invoice_accounts=[record.bank_account for record in invoices.records],
        )
        result.records.extend(trips.records)
        result.skipped.extend(trips.skipped)
    else:
        logger.info("No business trip data provided")

    logger.info(f"Total output records: {len(result.records)}")
    return result


class TransfersListGenerator:
    """Generates bank transfer lists from invoice and business trip tables."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.reader = TableReader(delimiter=self.config.input_delimiter)
        self.summary_formatter = SummaryFormatter()

    def parse_invoices(self, invoice_text: str) -> list[RawRow]:
        return self.reader.parse_rows(
            invoice_text,
            expected_header=self.config.invoice_header,
            key_columns=INVOICE_HEADER_KEYS,
        )

    def parse_trips(self, trip_text: str) -> list[RawRow]:
        return self.reader.parse_rows(trip_text)

    def generate_bank_transfer_data(
        self,
        invoice_text: str | None,
        trip_text: str | None = None,
    ) -> GenerationResult:
        """
        Parse both tables from text and generate the transfer records.

        Raises:
            InputError: If the invoice text is missing or blank
            TableReadError: If a table cannot be parsed
        """
        if invoice_text is None or not invoice_text.strip():
            raise InputError("Invoice data cannot be null or empty")

        invoice_rows = self.parse_invoices(invoice_text)

        trip_rows = None
        if trip_text is not None and trip_text.strip():
            logger.info(f"Processing business trip data, length: {len(trip_text)}")
            trip_rows = self.parse_trips(trip_text)

        return generate(invoice_rows, trip_rows, self.config)

    def generate_from_strings(
        self,
        invoice_text: str | None,
        trip_text: str | None = None,
    ) -> str:
        """Generate the transfer list file content from table text."""
        result = self.generate_bank_transfer_data(invoice_text, trip_text)
        return self.format_rows(result)

    def generate_file(
        self,
        invoice_path: str | Path,
        trip_path: str | Path | None,
        output_path: str | Path,
    ) -> GenerationResult:
        """
        Read the tables from files and write the transfer list.

        Raises:
            InputError: If the invoice file is empty
            TableReadError: If an input file cannot be read or parsed
            FileSavingError: If the output file cannot be written
        """
        invoice_text = self.reader.read_file(invoice_path)
        trip_text = self.reader.read_file(trip_path) if trip_path else None

        result = self.generate_bank_transfer_data(invoice_text, trip_text)

        try:
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                f.write(self.format_rows(result))
            logger.info(f"Transfer list saved to {output_path}")
        except OSError as e:
            logger.error(f"Failed to save transfer list to {output_path}: {e}")
            raise FileSavingError(
                f"Failed to save transfer list to {output_path}: {e}",
            ) from e

        return result

    def format_rows(self, result: GenerationResult) -> str:
        return write_rows(
            result.records,
            delimiter=self.config.output_delimiter,
            columns=self.config.output_columns,
        )

    def format_summary(self, result: GenerationResult) -> str:
        return self.summary_formatter.format_summary(
            result,
            self.config.currency_marker,
        )
