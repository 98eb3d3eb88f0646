"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

# Amounts are stored as integer minor units with a fixed scale.
MINOR_UNIT_SCALE = 2
MAX_MINOR_UNITS = 2**63 - 1


_GROUPED_RE = re.compile(r"[+-]?\d{1,3}(?:[.,]\d{3})+")


def _normalize_separators(amount_str: str) -> str:
    """Rewrite grouping and decimal separators to plain ``1234.56`` form.

    The last of ``.`` or ``,`` is the decimal point when both appear. A lone
    comma followed by one or two digits is a decimal comma; commas between
    three-digit groups are grouping.

    Raises:
        ValueError: If the separators are inconsistent or ambiguous
    """
    has_comma = "," in amount_str
    has_dot = "." in amount_str

    if has_comma and has_dot:
        decimal_sep = "," if amount_str.rfind(",") > amount_str.rfind(".") else "."
        group_sep = "." if decimal_sep == "," else ","
        whole, _, fraction = amount_str.rpartition(decimal_sep)
        if decimal_sep in whole or group_sep in fraction or not _GROUPED_RE.fullmatch(whole):
            raise ValueError(f"Could not parse amount '{amount_str}': mixed separators")
        return whole.replace(group_sep, "") + "." + fraction

    if has_comma:
        whole, _, fraction = amount_str.rpartition(",")
        if "," not in whole and 1 <= len(fraction) <= 2 and fraction.isdigit():
            return whole + "." + fraction
        if _GROUPED_RE.fullmatch(amount_str):
            return amount_str.replace(",", "")
        raise ValueError(f"Could not parse amount '{amount_str}': ambiguous comma")

    if amount_str.count(".") > 1:
        if _GROUPED_RE.fullmatch(amount_str):
            return amount_str.replace(".", "")
        raise ValueError(f"Could not parse amount '{amount_str}': too many decimal points")

    return amount_str


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "-12,34" and "1.234,56" (decimal comma)
    - "(123.45)" (negative in parentheses)
    - "+12.00"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not a finite number
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = str(amount_str).strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove whitespace again
    amount_str = _normalize_separators(amount_str.strip())

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    if is_negative:
        amount = -amount
    return amount


def amount_to_integer(amount: Decimal) -> int:
    """Convert a decimal amount to integer minor units (cents).

    Sub-cent digits are rounded half away from zero.

    Raises:
        ValueError: If the result does not fit in a signed 64-bit integer
    """
    try:
        minor = int(amount.scaleb(MINOR_UNIT_SCALE).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"Amount {amount} is out of range")
    if abs(minor) > MAX_MINOR_UNITS:
        raise ValueError(f"Amount {amount} is out of range")
    return minor


def integer_to_amount(minor: int) -> Decimal:
    """Convert integer minor units back to a decimal amount.

    ``integer_to_amount(-1234) == Decimal("-12.34")``
    """
    return Decimal(minor).scaleb(-MINOR_UNIT_SCALE)


def format_amount(minor: int) -> str:
    """Format integer minor units as a plain decimal string, e.g. ``-12.34``."""
    return f"{integer_to_amount(minor):.{MINOR_UNIT_SCALE}f}"
