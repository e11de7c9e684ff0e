"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

AMOUNT_PATTERN = re.compile(r"^\d+(\.\d+)?$")
CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a positive amount string into a Decimal.

    Handles both decimal separators used in uploads:
    - "123.45"
    - "123,45"

    Amounts are stored in cents, so values with a non-zero digit past the
    second decimal place are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount, always greater than zero and a whole number of cents

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Decimal comma becomes a decimal point
    normalized = amount_str.strip().replace(",", ".", 1)
    if not AMOUNT_PATTERN.match(normalized):
        raise ValueError(f"Could not parse amount '{amount_str}'")

    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if amount <= 0:
        raise ValueError(f"Amount must be a positive number, got '{amount_str}'")
    if amount != amount.quantize(CENT):
        raise ValueError(f"Amount has fractions of a cent: '{amount_str}'")
    return amount


def signed_amount(amount: Decimal, kind: str) -> Decimal:
    """Return the amount with the sign implied by the transaction kind."""
    return -amount if kind == "expense" else amount
