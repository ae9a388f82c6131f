"""
Extraction of employee name and account number from reimbursement notes.
"""

import re
from dataclasses import dataclass

# Display format of a bank account number: 2 digits followed by six groups
# of 4 digits, separated by single spaces.
ACCOUNT_NUMBER_PATTERN = r"\d{2}(?: \d{4}){6}"

REIMBURSEMENT_PATTERN = re.compile(
    r"(?:expenses )?reimbursement to the employee (?P<name>.+?)\s+"
    rf"(?P<account>{ACCOUNT_NUMBER_PATTERN})",
    re.IGNORECASE,
)

DEFAULT_PREFIXES = ("expenses reimbursement", "reimbursement")


@dataclass(frozen=True)
class ReimbursementMatch:
    """Employee and account decoded from a bank account field."""

    employee_name: str
    account_number: str


def is_reimbursement_field(
    field: str,
    prefixes: tuple[str, ...] = DEFAULT_PREFIXES,
) -> bool:
    lowered = field.lower()
    return any(lowered.startswith(prefix.lower()) for prefix in prefixes)


def try_extract_reimbursement(
    field: str,
    prefixes: tuple[str, ...] = DEFAULT_PREFIXES,
) -> ReimbursementMatch | None:
    """
    Decode a field like "Reimbursement to the employee John Doe 12 3456 ...".

    Returns None when the field does not start with a reimbursement prefix or
    when the name and account number cannot be found in it.
    """
    if not is_reimbursement_field(field, prefixes):
        return None

    match = REIMBURSEMENT_PATTERN.search(field)
    if not match:
        return None

    return ReimbursementMatch(
        employee_name=match.group("name").strip(),
        account_number=match.group("account").replace(" ", ""),
    )
