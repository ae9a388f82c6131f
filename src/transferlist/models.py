"""
Data models for transfer list generation.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class ValidationError(ValueError):
    """Exception raised when a record is missing a required value."""


def _require(record: object, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if value is None or not str(value).strip():
            raise ValidationError(
                f"{type(record).__name__}.{name} cannot be null or empty",
            )


@dataclass(frozen=True)
class InvoiceRecord:
    """A qualifying invoice row after sanitizing and reimbursement decoding."""

    invoice_number: str
    payee_name: str
    bank_account: str
    amount: str
    title: str
    is_reimbursement: bool = False

    def __post_init__(self):
        _require(self, "payee_name", "bank_account", "amount", "title")


@dataclass(frozen=True)
class TripRecord:
    """A qualifying business trip row."""

    employee_name: str
    bank_account: str
    amount: str
    trip_number: str

    def __post_init__(self):
        _require(self, "employee_name", "bank_account", "amount", "trip_number")


@dataclass(frozen=True)
class OutputRecord:
    """One line of the bank's bulk transfer import."""

    bank_account: str
    payee_name: str
    title: str
    amount: str
    short_name: str = ""
    address_line_1: str = ""
    address_line_2: str = ""
    address_line_3: str = ""
    address_line_4: str = ""

    def __post_init__(self):
        _require(self, "bank_account", "title", "amount")

    @classmethod
    def from_invoice(cls, invoice: InvoiceRecord) -> "OutputRecord":
        return cls(
            bank_account=invoice.bank_account,
            payee_name=invoice.payee_name,
            title=invoice.title,
            amount=invoice.amount,
        )

    @classmethod
    def from_trip(cls, trip: TripRecord) -> "OutputRecord":
        return cls(
            bank_account=trip.bank_account,
            payee_name=trip.employee_name,
            title=trip.trip_number,
            amount=trip.amount,
        )


class SkipReason(Enum):
    """Why a source row did not make it into the output."""

    STATUS_NOT_ACCEPTED = "status not accepted"
    AMOUNT_NOT_TAGGED = "amount not currency-tagged"
    MISSING_FIELDS = "missing required fields"
    INVALID_AMOUNT = "invalid amount"
    INVALID_RECORD = "invalid record"
    UNMATCHED_ACCOUNT = "bank account not found among invoices"


@dataclass(frozen=True)
class SkippedRow:
    """Diagnostic for a dropped source row."""

    source: str
    row_number: int
    reason: SkipReason
    message: str = ""


@dataclass
class PipelineResult:
    """Output of a single pipeline."""

    records: list[OutputRecord] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    def skip(
        self,
        source: str,
        row_number: int,
        reason: SkipReason,
        message: str = "",
    ) -> None:
        self.skipped.append(SkippedRow(source, row_number, reason, message))


@dataclass
class GenerationResult:
    """Invoice records followed by trip records, with all drop diagnostics."""

    records: list[OutputRecord] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[OutputRecord]:
        return iter(self.records)
