"""
Output formatting for the bank import file and run summaries.
"""

import csv
import logging
from dataclasses import astuple, dataclass, fields
from datetime import date
from decimal import Decimal, InvalidOperation

import pandas as pd

from .config import OUTPUT_COLUMNS
from .models import GenerationResult, OutputRecord

logger = logging.getLogger(__name__)

OUTPUT_FILE_SUFFIX = "_invoice.ebgz"

_RECORD_FIELDS = tuple(f.name for f in fields(OutputRecord))


def write_rows(
    records: list[OutputRecord],
    delimiter: str = ";",
    columns: tuple[str, ...] = OUTPUT_COLUMNS,
) -> str:
    """
    Serialize records as the bank's import table.

    No header line is written and fields are only quoted when they contain
    the delimiter, a quote or a line break.
    """
    unknown = [column for column in columns if column not in _RECORD_FIELDS]
    if unknown:
        raise ValueError(f"Unknown output columns: {unknown}")

    df = pd.DataFrame(
        [dict(zip(_RECORD_FIELDS, astuple(record))) for record in records],
        columns=list(_RECORD_FIELDS),
    )
    return df.to_csv(
        columns=list(columns),
        sep=delimiter,
        header=False,
        index=False,
        quotechar='"',
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )


def default_output_filename(day: date | None = None) -> str:
    """File name used by the bank import, e.g. "17102026_invoice.ebgz"."""
    day = day or date.today()
    return day.strftime("%d%m%Y") + OUTPUT_FILE_SUFFIX


@dataclass(frozen=True)
class TransferSummary:
    """Totals shown before the transfer file is downloaded."""

    transfer_count: int
    total_amount: Decimal


def summarize(records: list[OutputRecord]) -> TransferSummary:
    """Count the transfers and add up their amounts."""
    total = Decimal("0.00")
    for record in records:
        try:
            amount = Decimal(record.amount)
        except InvalidOperation:
            amount = None

        if amount is not None and amount.is_finite():
            total += amount
        else:
            logger.warning(
                f"Amount '{record.amount}' for {record.payee_name} is not numeric, "
                f"leaving it out of the total",
            )
    return TransferSummary(transfer_count=len(records), total_amount=total)


class SummaryFormatter:
    """Formats summary information."""

    @staticmethod
    def format_summary(
        result: GenerationResult,
        currency_marker: str = "PLN",
    ) -> str:
        """Format a summary of the generation result."""
        summary = summarize(result.records)

        lines = []
        lines.append("=== Transfer List Summary ===")
        lines.append(f"Transfers: {summary.transfer_count}")
        lines.append(f"Total amount: {summary.total_amount} {currency_marker}")

        if result.skipped:
            lines.append("")
            lines.append(f"Skipped rows: {len(result.skipped)}")
            for skipped in result.skipped:
                line = f"  {skipped.source} row {skipped.row_number}: {skipped.reason.value}"
                if skipped.message:
                    line += f" ({skipped.message})"
                lines.append(line)

        return "\n".join(lines)
