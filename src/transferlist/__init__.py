"""
Transfer List - turns invoice and business trip tables into a bank transfer list.

This package filters payable rows, normalizes amounts, decodes employee
reimbursements and writes the semicolon separated bulk transfer import file.
"""

from .amounts import FormatError, normalize_amount
from .config import GeneratorConfig
from .csv_parser import TableReader, TableReadError, parse_rows
from .generator import InputError, TransfersListGenerator, generate
from .models import (
    GenerationResult,
    InvoiceRecord,
    OutputRecord,
    SkippedRow,
    SkipReason,
    TripRecord,
    ValidationError,
)
from .output_formatter import SummaryFormatter, write_rows
from .reimbursement import try_extract_reimbursement

__version__ = "0.1.0"
__all__ = [
    "FormatError",
    "GenerationResult",
    "GeneratorConfig",
    "InputError",
    "InvoiceRecord",
    "OutputRecord",
    "SkipReason",
    "SkippedRow",
    "SummaryFormatter",
    "TableReadError",
    "TableReader",
    "TransfersListGenerator",
    "TripRecord",
    "ValidationError",
    "generate",
    "normalize_amount",
    "parse_rows",
    "try_extract_reimbursement",
    "write_rows",
]
