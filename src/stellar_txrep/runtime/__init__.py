"""Runtime helpers for the TxRep transcoder"""

from .errors import (
    ErrorCode,
    TxRepError,
    MissingFieldError,
    InvalidFieldError,
    BoundsExceededError,
    UnsupportedOperationError,
    BinaryEncodingError,
    map_exception,
)
from .options import TxRepOptions, DEFAULT_OPTIONS

__all__ = [
    "ErrorCode",
    "TxRepError",
    "MissingFieldError",
    "InvalidFieldError",
    "BoundsExceededError",
    "UnsupportedOperationError",
    "BinaryEncodingError",
    "map_exception",
    "TxRepOptions",
    "DEFAULT_OPTIONS",
]
