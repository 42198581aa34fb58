"""
Fixed-point amount codec.

Stellar amounts are signed 64-bit counts of stroops (10^-7 units). Text
amounts carry up to 7 fractional digits; conversion goes through Decimal so
no float rounding can creep in.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
import re

from ..runtime.errors import InvalidFieldError, map_exception

STROOPS_PER_UNIT = 10 ** 7
MAX_STROOPS = 2 ** 63 - 1
MAX_AMOUNT = "922337203685.4775807"

_DECIMAL_RE = re.compile(r"^-?\d+(\.\d+)?$")
_INTEGER_RE = re.compile(r"^-?(0|[1-9]\d*)$")


def to_text(stroops: int) -> str:
    """
    Render a stroop count as a decimal string with exactly 7 fractional digits.

    >>> to_text(1005000000)
    '100.5000000'
    """
    sign = "-" if stroops < 0 else ""
    whole, frac = divmod(abs(stroops), STROOPS_PER_UNIT)
    return f"{sign}{whole}.{frac:07d}"


def from_text(text: str, key: str = "amount") -> int:
    """
    Parse a decimal amount into stroops.

    Args:
        text: Decimal string, at most 7 fractional digits
        key: TxRep key used in error messages

    Returns:
        Stroop count

    Raises:
        InvalidFieldError: On non-numeric, negative, over-precise or
            over-maximum input
    """
    text = text.strip()
    if not _DECIMAL_RE.match(text):
        raise InvalidFieldError(key, f"{text!r} is not a number")
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise map_exception(e, key, f"{text!r} is not a number") from e
    if value < 0:
        raise InvalidFieldError(key, "amount is negative")
    if len(text.partition(".")[2].rstrip("0")) > 7:
        raise InvalidFieldError(key, "amount has more than 7 decimal places")
    stroops = int(value * STROOPS_PER_UNIT)
    if stroops > MAX_STROOPS:
        raise InvalidFieldError(key, "amount exceeds maximum")
    return stroops


def stroops_from_text(text: str, key: str = "amount") -> int:
    """
    Parse a stroop integer as written in TxRep text.

    Applies the same bounds as :func:`from_text`.
    """
    if not _INTEGER_RE.match(text):
        raise InvalidFieldError(key, f"{text!r} is not an integer")
    stroops = int(text)
    if stroops < 0:
        raise InvalidFieldError(key, "amount is negative")
    if stroops > MAX_STROOPS:
        raise InvalidFieldError(key, "amount exceeds maximum")
    return stroops


def normalize(text: str, key: str = "amount") -> str:
    """Canonicalize a decimal amount to 7 fractional digits."""
    return to_text(from_text(text, key))


__all__ = [
    "STROOPS_PER_UNIT",
    "MAX_STROOPS",
    "MAX_AMOUNT",
    "to_text",
    "from_text",
    "stroops_from_text",
    "normalize",
]
