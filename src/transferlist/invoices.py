"""
Conversion of invoice rows into transfer records.
"""

import logging
from collections.abc import Iterable

from .amounts import FormatError, has_currency_marker, normalize_amount
from .config import GeneratorConfig
from .models import (
    InvoiceRecord,
    OutputRecord,
    PipelineResult,
    SkipReason,
    ValidationError,
)
from .reimbursement import try_extract_reimbursement
from .rows import RawRow, missing_columns, sanitize

logger = logging.getLogger(__name__)

SOURCE = "invoice"

COMPANY_NAME = "Company name (Invoice)"
BANK_ACCOUNT = "Bank account number"
DESCRIPTION = "Description"
INVOICE_NUMBER = "Invoice number"
AMOUNT = "Amount"
STATUS = "Status"

REQUIRED_COLUMNS = (COMPANY_NAME, BANK_ACCOUNT, DESCRIPTION, INVOICE_NUMBER)


def build_invoice_record(row: RawRow, config: GeneratorConfig) -> InvoiceRecord:
    """
    Build an InvoiceRecord from a row that passed the status filter.

    Raises:
        FormatError: If the amount is not currency-tagged
        ValidationError: If a required value is empty after sanitizing
    """
    company_name = sanitize(row[COMPANY_NAME])
    bank_account = sanitize(row[BANK_ACCOUNT])
    description = sanitize(row[DESCRIPTION])
    invoice_number = sanitize(row[INVOICE_NUMBER])

    reimbursement = try_extract_reimbursement(
        bank_account,
        config.reimbursement_prefixes,
    )
    if reimbursement:
        payee_name = reimbursement.employee_name
        bank_account = reimbursement.account_number
        title = config.reimbursement_title_prefix + description
    else:
        payee_name = company_name
        title = invoice_number

    amount = normalize_amount(row[AMOUNT], config.currency_marker)

    return InvoiceRecord(
        invoice_number=invoice_number,
        payee_name=payee_name,
        bank_account=bank_account,
        amount=amount,
        title=title,
        is_reimbursement=reimbursement is not None,
    )


def process_invoices(
    rows: Iterable[RawRow],
    config: GeneratorConfig | None = None,
) -> PipelineResult:
    """
    Filter, sanitize and map invoice rows, keeping their order.

    Rows that are not payable (wrong status, untagged amount) or cannot be
    converted are left out and reported in the result's skipped list.
    """
    config = config or GeneratorConfig()
    result = PipelineResult()

    for row_number, row in enumerate(rows, start=1):
        amount = row.get(AMOUNT)
        status = row.get(STATUS)
        if amount is None or status is None:
            logger.debug(f"Invoice row {row_number} has no amount or status")
            result.skip(
                SOURCE,
                row_number,
                SkipReason.MISSING_FIELDS,
                "Amount or Status column missing",
            )
            continue

        if not config.accepts_invoice_status(status):
            logger.debug(f"Invoice row {row_number} has status '{status.strip()}'")
            result.skip(
                SOURCE,
                row_number,
                SkipReason.STATUS_NOT_ACCEPTED,
                f"Status '{status.strip()}' is not payable",
            )
            continue

        if not has_currency_marker(amount, config.currency_marker):
            logger.debug(f"Invoice row {row_number} amount '{amount}' is not tagged")
            result.skip(
                SOURCE,
                row_number,
                SkipReason.AMOUNT_NOT_TAGGED,
                f"Amount '{amount.strip()}' has no {config.currency_marker} marker",
            )
            continue

        missing = missing_columns(row, REQUIRED_COLUMNS)
        if missing:
            logger.warning(
                f"Invoice row {row_number} is missing required fields: {missing}",
            )
            result.skip(
                SOURCE,
                row_number,
                SkipReason.MISSING_FIELDS,
                f"Missing columns: {', '.join(missing)}",
            )
            continue

        try:
            invoice = build_invoice_record(row, config)
        except FormatError as e:
            logger.warning(f"Skipping invoice row {row_number}: {e}")
            result.skip(SOURCE, row_number, SkipReason.INVALID_AMOUNT, str(e))
            continue
        except ValidationError as e:
            logger.warning(f"Skipping invoice row {row_number}: {e}")
            result.skip(SOURCE, row_number, SkipReason.INVALID_RECORD, str(e))
            continue

        logger.debug(
            f"Processed invoice row {row_number}: number='{invoice.invoice_number}', "
            f"payee='{invoice.payee_name}', amount='{invoice.amount}', "
            f"reimbursement={invoice.is_reimbursement}",
        )
        result.records.append(OutputRecord.from_invoice(invoice))

    logger.info(
        f"Processed {len(result.records)} invoice records, "
        f"skipped {len(result.skipped)} rows",
    )
    return result
