"""
TxRep Facade.

Entry points for converting Stellar transaction envelopes between XDR and
TxRep text.

The TxRep class binds a set of decoding options; the module-level functions
use the defaults.

Example:
    ```python
    from stellar_txrep import TxRep, txrep_from_xdr, xdr_from_txrep

    # XDR (base64) to TxRep text and back
    text = txrep_from_xdr(envelope_xdr)
    assert xdr_from_txrep(text) == envelope_xdr

    # Stricter decoding caps
    txrep = TxRep(TxRepOptions(max_operations=10))
    tx = txrep.from_txrep(text)
    ```
"""

from __future__ import annotations
from typing import Optional, Union
import logging

from . import binary
from .codec import envelope as envelope_codec
from .models import Envelope, FeeBumpTransaction, Transaction
from .runtime.options import DEFAULT_OPTIONS, TxRepOptions

logger = logging.getLogger(__name__)

EnvelopeInput = Union[Transaction, FeeBumpTransaction, bytes, str]


class TxRep:
    """
    TxRep transcoder bound to a set of options.

    Attributes:
        options: Caps and policies applied when decoding text

    Example:
        ```python
        txrep = TxRep()
        text = txrep.txrep_from_xdr(envelope_xdr)
        envelope = txrep.from_txrep(text)
        ```
    """

    def __init__(self, options: Optional[TxRepOptions] = None):
        self.options = options or DEFAULT_OPTIONS

    def to_txrep(self, envelope: EnvelopeInput) -> str:
        """
        Render an envelope as TxRep text.

        Args:
            envelope: Envelope model, raw XDR bytes or base64 XDR

        Returns:
            TxRep text, one ``key: value`` per line
        """
        if isinstance(envelope, (bytes, str)):
            envelope = binary.decode_envelope(envelope)
        return envelope_codec.to_text(envelope)

    def from_txrep(self, text: str) -> Envelope:
        """
        Parse TxRep text into an envelope model.

        Raises:
            MissingFieldError: If a required key is absent
            InvalidFieldError: If a value is malformed
            BoundsExceededError: If a count exceeds the configured caps
            UnsupportedOperationError: On Soroban operations
        """
        return envelope_codec.from_text(text, self.options)

    def txrep_from_xdr(self, xdr: Union[bytes, str]) -> str:
        """Convert raw or base64 XDR to TxRep text."""
        return self.to_txrep(binary.decode_envelope(xdr))

    def xdr_from_txrep(self, text: str) -> str:
        """Convert TxRep text to base64 XDR."""
        envelope = self.from_txrep(text)
        logger.debug("Encoding %s to XDR", envelope.envelope_type.value)
        return binary.encode_envelope_base64(envelope)

    def xdr_bytes_from_txrep(self, text: str) -> bytes:
        """Convert TxRep text to raw XDR bytes."""
        return binary.encode_envelope(self.from_txrep(text))

    def __repr__(self) -> str:
        return f"TxRep(options={self.options!r})"


_default = TxRep()


def to_txrep(envelope: EnvelopeInput) -> str:
    """Render an envelope model or XDR as TxRep text."""
    return _default.to_txrep(envelope)


def from_txrep(text: str, options: Optional[TxRepOptions] = None) -> Envelope:
    """Parse TxRep text into an envelope model."""
    return TxRep(options).from_txrep(text) if options else _default.from_txrep(text)


def txrep_from_xdr(xdr: Union[bytes, str]) -> str:
    """Convert raw or base64 XDR to TxRep text."""
    return _default.txrep_from_xdr(xdr)


def xdr_from_txrep(text: str, options: Optional[TxRepOptions] = None) -> str:
    """Convert TxRep text to base64 XDR."""
    return TxRep(options).xdr_from_txrep(text) if options else _default.xdr_from_txrep(text)


__all__ = [
    "TxRep",
    "to_txrep",
    "from_txrep",
    "txrep_from_xdr",
    "xdr_from_txrep",
]
