"""
Configuration for the transfer list generator.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

INVOICE_COLUMNS = (
    "No",
    "Company name (Invoice)",
    "Company name (White list)",
    "Invoice number",
    "NIP",
    "Bank account number",
    "Amount",
    "Payment deadline",
    "Is the counterparty on the white list?",
    "Status",
    "P&S Unit",
    "Cost centre",
    "Description",
    "Regular payment",
)

OUTPUT_COLUMNS = (
    "short_name",
    "bank_account",
    "payee_name",
    "address_line_1",
    "address_line_2",
    "address_line_3",
    "title",
    "amount",
)


@dataclass(frozen=True)
class GeneratorConfig:
    """Vocabulary and layout settings passed into the pipelines."""

    currency_marker: str = "PLN"
    invoice_statuses: tuple[str, ...] = ("PENDING", "TO PAY")
    trip_statuses: tuple[str, ...] = ("PENDING", "TO PAY")
    reimbursement_prefixes: tuple[str, ...] = (
        "expenses reimbursement",
        "reimbursement",
    )
    reimbursement_title_prefix: str = "Reimbursement - "
    input_delimiter: str | None = None
    output_delimiter: str = ";"
    output_columns: tuple[str, ...] = OUTPUT_COLUMNS
    invoice_header: tuple[str, ...] = INVOICE_COLUMNS
    match_trip_accounts: bool = False

    def accepts_invoice_status(self, status: str) -> bool:
        return _status_in(status, self.invoice_statuses)

    def accepts_trip_status(self, status: str) -> bool:
        return _status_in(status, self.trip_statuses)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        """Build a config from a JSON-style dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key '{key}'")
                continue
            if isinstance(value, list):
                value = tuple(value)
            values[key] = value
        return cls(**values)


def _status_in(status: str, accepted: tuple[str, ...]) -> bool:
    normalized = status.strip().upper()
    return any(normalized == value.strip().upper() for value in accepted)


def load_config(config_file: str | Path) -> dict:
    """Load generator configuration from a JSON file."""
    config_path = Path(config_file)
    if not config_path.exists():
        logger.debug(f"Config file {config_file} does not exist")
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        logger.debug(f"Loaded config from {config_file}")
        return config
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in config file {config_file}: {e}")
        return {}
    except OSError as e:
        logger.warning(f"Failed to load config from {config_file}: {e}")
        return {}
