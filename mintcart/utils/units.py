import re
from decimal import Decimal

from .errors import InvalidAmount

DEFAULT_DECIMALS = 18

MAX_UINT256 = 2 ** 256 - 1
_MAX_WHOLE_DIGITS = len(str(MAX_UINT256))

_DECIMAL_RE = re.compile(r"^(?:[0-9]+\.?[0-9]*|\.[0-9]+)$")


def parse_units(value: str, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a human readable decimal string to its integer amount in the
    smallest unit, e.g. parse_units("0.05") == 50000000000000000.

    Args:
        value: Non-negative decimal string ("1", "0.05", ".5")
        decimals: Number of fractional digits of the unit

    Raises:
        InvalidAmount: If the string is not a valid non-negative decimal or
            has more fractional digits than the unit supports, or does
            not fit in a uint256
    """
    if not isinstance(value, str):
        raise InvalidAmount(f"Amount must be a string, got {type(value).__name__}")

    value = value.strip()
    if not _DECIMAL_RE.match(value):
        raise InvalidAmount(f"Invalid amount: {value!r}")

    whole, _, fraction = value.partition(".")
    fraction = fraction.rstrip("0")
    if len(fraction) > decimals:
        raise InvalidAmount(
            f"Amount {value!r} has more than {decimals} fractional digits"
        )

    whole = whole.lstrip("0")
    if len(whole) > _MAX_WHOLE_DIGITS:
        raise InvalidAmount(f"Amount {value[:20]}... is too large")

    amount = int(whole or "0") * 10 ** decimals + int(fraction.ljust(decimals, "0") or "0")
    if amount > MAX_UINT256:
        raise InvalidAmount(f"Amount {value!r} does not fit in a uint256")
    return amount


def format_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Convert an integer amount in the smallest unit back to a decimal string."""
    ui_amount = Decimal(amount).scaleb(-decimals)
    text = f"{ui_amount:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
