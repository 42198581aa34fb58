"""
TxRep tag enumerations.

Enum values are the literal tags written in TxRep text, so ``Enum(value)``
parses a tag and ``.value`` renders one.
"""

from enum import Enum


class EnvelopeType(str, Enum):
    """Envelope kinds a TxRep document can describe"""
    ENVELOPE_TYPE_TX = "ENVELOPE_TYPE_TX"
    ENVELOPE_TYPE_TX_FEE_BUMP = "ENVELOPE_TYPE_TX_FEE_BUMP"


class PreconditionType(str, Enum):
    """Transaction precondition kinds"""
    PRECOND_NONE = "PRECOND_NONE"
    PRECOND_TIME = "PRECOND_TIME"
    PRECOND_V2 = "PRECOND_V2"


class MemoType(str, Enum):
    """Memo kinds"""
    MEMO_NONE = "MEMO_NONE"
    MEMO_TEXT = "MEMO_TEXT"
    MEMO_ID = "MEMO_ID"
    MEMO_HASH = "MEMO_HASH"
    MEMO_RETURN = "MEMO_RETURN"


class OperationType(str, Enum):
    """Classic operation tags"""
    CREATE_ACCOUNT = "CREATE_ACCOUNT"
    PAYMENT = "PAYMENT"
    PATH_PAYMENT_STRICT_RECEIVE = "PATH_PAYMENT_STRICT_RECEIVE"
    MANAGE_SELL_OFFER = "MANAGE_SELL_OFFER"
    CREATE_PASSIVE_SELL_OFFER = "CREATE_PASSIVE_SELL_OFFER"
    SET_OPTIONS = "SET_OPTIONS"
    CHANGE_TRUST = "CHANGE_TRUST"
    ALLOW_TRUST = "ALLOW_TRUST"
    ACCOUNT_MERGE = "ACCOUNT_MERGE"
    INFLATION = "INFLATION"
    MANAGE_DATA = "MANAGE_DATA"
    BUMP_SEQUENCE = "BUMP_SEQUENCE"
    MANAGE_BUY_OFFER = "MANAGE_BUY_OFFER"
    PATH_PAYMENT_STRICT_SEND = "PATH_PAYMENT_STRICT_SEND"
    CREATE_CLAIMABLE_BALANCE = "CREATE_CLAIMABLE_BALANCE"
    CLAIM_CLAIMABLE_BALANCE = "CLAIM_CLAIMABLE_BALANCE"
    BEGIN_SPONSORING_FUTURE_RESERVES = "BEGIN_SPONSORING_FUTURE_RESERVES"
    END_SPONSORING_FUTURE_RESERVES = "END_SPONSORING_FUTURE_RESERVES"
    REVOKE_SPONSORSHIP = "REVOKE_SPONSORSHIP"
    CLAWBACK = "CLAWBACK"
    CLAWBACK_CLAIMABLE_BALANCE = "CLAWBACK_CLAIMABLE_BALANCE"
    SET_TRUST_LINE_FLAGS = "SET_TRUST_LINE_FLAGS"
    LIQUIDITY_POOL_DEPOSIT = "LIQUIDITY_POOL_DEPOSIT"
    LIQUIDITY_POOL_WITHDRAW = "LIQUIDITY_POOL_WITHDRAW"


# Operation tags that exist on the network but have no TxRep rendering here
SOROBAN_OPERATION_TAGS = frozenset({
    "INVOKE_HOST_FUNCTION",
    "EXTEND_FOOTPRINT_TTL",
    "RESTORE_FOOTPRINT",
})


class ClaimPredicateType(str, Enum):
    """Claim predicate node kinds"""
    CLAIM_PREDICATE_UNCONDITIONAL = "CLAIM_PREDICATE_UNCONDITIONAL"
    CLAIM_PREDICATE_AND = "CLAIM_PREDICATE_AND"
    CLAIM_PREDICATE_OR = "CLAIM_PREDICATE_OR"
    CLAIM_PREDICATE_NOT = "CLAIM_PREDICATE_NOT"
    CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME = "CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME"
    CLAIM_PREDICATE_BEFORE_RELATIVE_TIME = "CLAIM_PREDICATE_BEFORE_RELATIVE_TIME"


class RevokeSponsorshipType(str, Enum):
    """Revoke sponsorship targets"""
    REVOKE_SPONSORSHIP_LEDGER_ENTRY = "REVOKE_SPONSORSHIP_LEDGER_ENTRY"
    REVOKE_SPONSORSHIP_SIGNER = "REVOKE_SPONSORSHIP_SIGNER"


class LedgerKeyType(str, Enum):
    """Ledger entry kinds whose sponsorship can be revoked"""
    ACCOUNT = "ACCOUNT"
    TRUSTLINE = "TRUSTLINE"
    OFFER = "OFFER"
    DATA = "DATA"
    CLAIMABLE_BALANCE = "CLAIMABLE_BALANCE"
    LIQUIDITY_POOL = "LIQUIDITY_POOL"


__all__ = [
    "EnvelopeType",
    "PreconditionType",
    "MemoType",
    "OperationType",
    "SOROBAN_OPERATION_TAGS",
    "ClaimPredicateType",
    "RevokeSponsorshipType",
    "LedgerKeyType",
]
