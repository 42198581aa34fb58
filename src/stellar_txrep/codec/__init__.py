"""
TxRep Text Codec Module

Converts between transaction models and TxRep ``key: value`` text.

Key components:
- fieldmap.py: insertion-ordered key/value map and line parsing
- amount.py: fixed-point stroop amount conversion
- predicate.py: recursive claim predicate encoding/decoding
- fields.py: reusable typed field codecs
- operations.py: per-operation codec table
- envelope.py: plain and fee-bump envelope assembly

Only the leaf modules are re-exported here; the model-aware modules import
``stellar_txrep.models`` and are imported directly.
"""

from . import amount
from .fieldmap import FieldMap

__all__ = [
    "FieldMap",
    "amount",
]
