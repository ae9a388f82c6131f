"""
Conversion of business trip rows into transfer records.
"""

import logging
import re
from collections.abc import Iterable

from .amounts import FormatError, normalize_amount
from .config import GeneratorConfig
from .models import (
    OutputRecord,
    PipelineResult,
    SkipReason,
    TripRecord,
    ValidationError,
)
from .rows import RawRow, missing_columns, sanitize

logger = logging.getLogger(__name__)

SOURCE = "trip"

NAME = "Name"
BANK_ACCOUNT = "Bank account number"
AMOUNT = "Amount"
TRIP_NUMBER = "Trip number"
STATUS = "Status"

REQUIRED_COLUMNS = (NAME, BANK_ACCOUNT, AMOUNT, TRIP_NUMBER)

_WHITESPACE = re.compile(r"\s+")


def canonical_account(bank_account: str) -> str:
    """Account number with all whitespace removed, for comparisons."""
    return _WHITESPACE.sub("", bank_account)


def build_trip_record(row: RawRow, config: GeneratorConfig) -> TripRecord:
    """
    Build a TripRecord from a row that passed the status filter.

    The currency marker is stripped when present but not required.
    """
    return TripRecord(
        employee_name=sanitize(row[NAME]),
        bank_account=sanitize(row[BANK_ACCOUNT]),
        amount=normalize_amount(
            row[AMOUNT],
            config.currency_marker,
            require_marker=False,
        ),
        trip_number=sanitize(row[TRIP_NUMBER]),
    )


def process_trips(
    rows: Iterable[RawRow],
    config: GeneratorConfig | None = None,
    invoice_accounts: Iterable[str] | None = None,
) -> PipelineResult:
    """
    Filter, sanitize and map business trip rows, keeping their order.

    Args:
        rows: Parsed trip table rows
        config: Generator configuration
        invoice_accounts: Bank accounts of the invoice output. Only used when
            config.match_trip_accounts is set, in which case trips paid to any
            other account are skipped.

    Returns:
        PipelineResult with output records and skipped row diagnostics
    """
    config = config or GeneratorConfig()
    result = PipelineResult()

    known_accounts = None
    if config.match_trip_accounts:
        known_accounts = {canonical_account(a) for a in invoice_accounts or ()}

    for row_number, row in enumerate(rows, start=1):
        status = row.get(STATUS)
        if status is None:
            logger.warning(f"Business trip row {row_number} has no Status field")
            result.skip(
                SOURCE,
                row_number,
                SkipReason.MISSING_FIELDS,
                "Status column missing",
            )
            continue

        if not config.accepts_trip_status(status):
            logger.debug(
                f"Business trip row {row_number} has status '{status.strip()}'",
            )
            result.skip(
                SOURCE,
                row_number,
                SkipReason.STATUS_NOT_ACCEPTED,
                f"Status '{status.strip()}' is not payable",
            )
            continue

        missing = missing_columns(row, REQUIRED_COLUMNS)
        if missing:
            logger.warning(
                f"Business trip row {row_number} is missing required fields: {missing}",
            )
            result.skip(
                SOURCE,
                row_number,
                SkipReason.MISSING_FIELDS,
                f"Missing columns: {', '.join(missing)}",
            )
            continue

        try:
            trip = build_trip_record(row, config)
        except FormatError as e:
            logger.warning(f"Skipping business trip row {row_number}: {e}")
            result.skip(SOURCE, row_number, SkipReason.INVALID_AMOUNT, str(e))
            continue
        except ValidationError as e:
            logger.warning(f"Skipping business trip row {row_number}: {e}")
            result.skip(SOURCE, row_number, SkipReason.INVALID_RECORD, str(e))
            continue

        if (
            known_accounts is not None
            and canonical_account(trip.bank_account) not in known_accounts
        ):
            logger.warning(
                f"Business trip row {row_number} account '{trip.bank_account}' "
                f"does not match any invoice account",
            )
            result.skip(
                SOURCE,
                row_number,
                SkipReason.UNMATCHED_ACCOUNT,
                f"Account '{trip.bank_account}' not found among invoices",
            )
            continue

        logger.debug(
            f"Processed business trip row {row_number}: trip='{trip.trip_number}', "
            f"name='{trip.employee_name}', amount='{trip.amount}'",
        )
        result.records.append(OutputRecord.from_trip(trip))

    logger.info(
        f"Processed {len(result.records)} business trip records, "
        f"skipped {len(result.skipped)} rows",
    )
    return result
