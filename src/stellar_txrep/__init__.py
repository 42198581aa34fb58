"""
Stellar TxRep Transcoder

Converts Stellar transaction envelopes between binary XDR and the
human-readable TxRep text form (SEP-0011), in both directions.
"""

# Domain models and tags
from .enums import *
from .models import *

# Errors and options
from .runtime.errors import *
from .runtime.options import TxRepOptions, DEFAULT_OPTIONS

# Text codec
from .codec.fieldmap import FieldMap
from .codec.envelope import encode_envelope, decode_envelope

# Binary adapter and facade
from . import binary
from .facade import TxRep, to_txrep, from_txrep, txrep_from_xdr, xdr_from_txrep

__version__ = "0.3.0"
__all__ = [
    # Facade
    "TxRep",
    "to_txrep",
    "from_txrep",
    "txrep_from_xdr",
    "xdr_from_txrep",
    "binary",
    # Text codec
    "FieldMap",
    "encode_envelope",
    "decode_envelope",
    # Options
    "TxRepOptions",
    "DEFAULT_OPTIONS",
    # Errors
    "ErrorCode",
    "TxRepError",
    "MissingFieldError",
    "InvalidFieldError",
    "BoundsExceededError",
    "UnsupportedOperationError",
    "BinaryEncodingError",
    # Tags
    "EnvelopeType",
    "PreconditionType",
    "MemoType",
    "OperationType",
    "ClaimPredicateType",
    "RevokeSponsorshipType",
    "LedgerKeyType",
    # Models
    "Asset",
    "Price",
    "ClaimPredicate",
    "Claimant",
    "Signer",
    "Memo",
    "TimeBounds",
    "LedgerBounds",
    "Preconditions",
    "DecoratedSignature",
    "LedgerKey",
    "RevokeSponsorshipSigner",
    "CreateAccountOp",
    "PaymentOp",
    "PathPaymentStrictReceiveOp",
    "PathPaymentStrictSendOp",
    "ManageSellOfferOp",
    "CreatePassiveSellOfferOp",
    "SetOptionsOp",
    "ChangeTrustOp",
    "AllowTrustOp",
    "AccountMergeOp",
    "InflationOp",
    "ManageDataOp",
    "BumpSequenceOp",
    "ManageBuyOfferOp",
    "CreateClaimableBalanceOp",
    "ClaimClaimableBalanceOp",
    "BeginSponsoringFutureReservesOp",
    "EndSponsoringFutureReservesOp",
    "RevokeSponsorshipOp",
    "ClawbackOp",
    "ClawbackClaimableBalanceOp",
    "SetTrustLineFlagsOp",
    "LiquidityPoolDepositOp",
    "LiquidityPoolWithdrawOp",
    "Operation",
    "Transaction",
    "FeeBumpTransaction",
    "Envelope",
]
