"""
Scalar value parsing for TxRep text.

Every parser takes the dotted key it is reading so failures name the exact
line. Integers are strict: the text must be the canonical decimal form of
the value it parses to, so ``"007"`` and ``"+7"`` are rejected.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Type, TypeVar
import json
import re

from pydantic import ValidationError

from ..runtime.errors import InvalidFieldError, map_exception

E = TypeVar("E", bound=Enum)

INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1
INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1

_INTEGER_RE = re.compile(r"^-?(0|[1-9]\d*)$")
_HEX_RE = re.compile(r"^([0-9a-fA-F]{2})*$")
_decoder = json.JSONDecoder()


def parse_int(text: str, key: str, minimum: int = INT64_MIN, maximum: int = INT64_MAX) -> int:
    """Parse a canonical decimal integer within ``[minimum, maximum]``."""
    if not _INTEGER_RE.match(text):
        raise InvalidFieldError(key, f"{text!r} is not an integer")
    value = int(text)
    if str(value) != text:
        raise InvalidFieldError(key, f"{text!r} is not an integer")
    if value < minimum or value > maximum:
        raise InvalidFieldError(key, f"{value} is out of range [{minimum}, {maximum}]")
    return value


def parse_bool(text: str, key: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise InvalidFieldError(key, f"expected true or false, got {text!r}")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_enum(enum_cls: Type[E], text: str, key: str) -> E:
    try:
        return enum_cls(text)
    except ValueError:
        raise InvalidFieldError(key, f"unknown value {text!r}")


def parse_hex(text: str, key: str, length: Optional[int] = None,
              max_length: Optional[int] = None) -> bytes:
    """Parse a hex blob, optionally checking its exact or maximum byte length."""
    if not _HEX_RE.match(text):
        raise InvalidFieldError(key, f"{text!r} is not valid hex")
    value = bytes.fromhex(text)
    if length is not None and len(value) != length:
        raise InvalidFieldError(key, f"expected {length} bytes, got {len(value)}")
    if max_length is not None and len(value) > max_length:
        raise InvalidFieldError(key, f"expected at most {max_length} bytes, got {len(value)}")
    return value


def quote(value: str) -> str:
    """Render a string as a JSON string literal."""
    return json.dumps(value)


def parse_quoted(raw: str, key: str) -> str:
    """
    Parse a JSON string literal from a raw (comment-bearing) value.

    The literal is read from the raw text so a ``(`` inside the quotes is
    kept; anything after the closing quote must be a ``(...)`` comment.
    """
    raw = raw.strip()
    if not raw.startswith('"'):
        raise InvalidFieldError(key, "expected a double-quoted string")
    try:
        value, end = _decoder.raw_decode(raw)
    except ValueError as e:
        raise map_exception(e, key, "malformed quoted string") from e
    rest = raw[end:].strip()
    if rest and not rest.startswith("("):
        raise InvalidFieldError(key, f"unexpected text after string: {rest!r}")
    return value


def round_half_up(total: int, count: int) -> int:
    """Divide and round half up, as used for per-operation fee shares."""
    return int((Decimal(total) / Decimal(count)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def describe(exc: Exception) -> str:
    """Short reason text for a collaborator or pydantic exception."""
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            message = errors[0].get("msg", "")
            return message[len("Value error, "):] if message.startswith("Value error, ") else message
    return str(exc) or exc.__class__.__name__


__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "UINT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "parse_int",
    "parse_bool",
    "format_bool",
    "parse_enum",
    "parse_hex",
    "quote",
    "parse_quoted",
    "round_half_up",
    "describe",
]
