"""
Normalization of currency-tagged amount strings.
"""

import re

_WHITESPACE = re.compile(r"\s+")


class FormatError(ValueError):
    """Exception raised when an amount is not currency-tagged."""


def has_currency_marker(raw: str, currency_marker: str = "PLN") -> bool:
    """Check whether the amount starts or ends with the currency marker."""
    value = raw.strip()
    return value.startswith(currency_marker) or value.endswith(currency_marker)


def normalize_amount(
    raw: str,
    currency_marker: str = "PLN",
    require_marker: bool = True,
) -> str:
    """
    Turn an amount such as "PLN 1.234,56" or "4567,09 PLN" into "1234.56".

    Whichever of comma and period occurs last is the decimal separator; the
    other one is a grouping separator and is dropped. The result is not
    rounded or checked for being numeric.

    Args:
        raw: Amount as found in the source table
        currency_marker: Marker expected at the start or end of the amount
        require_marker: Fail if the marker is missing instead of parsing the
            untagged value

    Returns:
        Plain decimal string with a period as decimal separator

    Raises:
        FormatError: If the marker is required but missing, or nothing is
            left after stripping it
    """
    value = raw.strip()

    if value.startswith(currency_marker):
        value = value[len(currency_marker) :]
    elif value.endswith(currency_marker):
        value = value[: -len(currency_marker)]
    elif require_marker:
        raise FormatError(f"Invalid amount format: {raw!r}")

    last_comma = value.rfind(",")
    last_period = value.rfind(".")

    if last_comma >= 0 and last_period >= 0:
        if last_period > last_comma:
            value = value.replace(",", "")
        else:
            value = value.replace(".", "").replace(",", ".")
    elif last_comma >= 0:
        value = value.replace(",", ".")

    value = _WHITESPACE.sub("", value)
    if not value:
        raise FormatError(f"Amount is empty: {raw!r}")
    return value
