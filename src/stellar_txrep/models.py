# Transaction models for the TxRep transcoder
# Mirrors the Stellar transaction envelope shape for the classic operation set

from __future__ import annotations
from typing import Annotated, List, Literal, Optional, Union
import re

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, field_validator, model_validator

from .codec import amount as amount_codec
from .enums import (
    ClaimPredicateType,
    EnvelopeType,
    LedgerKeyType,
    MemoType,
    OperationType,
    RevokeSponsorshipType,
)
from .runtime import address
from .runtime.errors import TxRepError


# =============================================================================
# Constrained scalar types
# =============================================================================

def _amount(value) -> str:
    try:
        return amount_codec.normalize(str(value))
    except TxRepError as e:
        raise ValueError(getattr(e, "reason", None) or e.message)


def _account(value: str) -> str:
    try:
        return address.parse_account(value)
    except TxRepError as e:
        raise ValueError(e.message)


def _muxed_account(value: str) -> str:
    try:
        return address.parse_muxed_account(value)
    except TxRepError as e:
        raise ValueError(e.message)


def _signer_key(value: str) -> str:
    try:
        return address.parse_signer_key(value)
    except TxRepError as e:
        raise ValueError(e.message)


def _hex_bytes(value):
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError:
            raise ValueError(f"{value!r} is not valid hex")
    return value


def _exact_length(size: int):
    def check(value: bytes) -> bytes:
        if len(value) != size:
            raise ValueError(f"expected {size} bytes, got {len(value)}")
        return value
    return check


Amount = Annotated[str, BeforeValidator(_amount)]
AccountId = Annotated[str, AfterValidator(_account)]
MuxedAccountId = Annotated[str, AfterValidator(_muxed_account)]
SignerKeyId = Annotated[str, AfterValidator(_signer_key)]
Hash32 = Annotated[bytes, BeforeValidator(_hex_bytes), AfterValidator(_exact_length(32))]
HexBytes = Annotated[bytes, BeforeValidator(_hex_bytes)]
Int32 = Annotated[int, Field(ge=-2 ** 31, le=2 ** 31 - 1)]
Uint32 = Annotated[int, Field(ge=0, le=2 ** 32 - 1)]
Int64 = Annotated[int, Field(ge=-2 ** 63, le=2 ** 63 - 1)]
Uint64 = Annotated[int, Field(ge=0, le=2 ** 64 - 1)]
SequenceNumber = Annotated[int, Field(ge=0, le=2 ** 63 - 1)]

_ASSET_CODE_RE = re.compile(r"^[A-Za-z0-9]{1,12}$")


def _utf8_length(value: str) -> int:
    return len(value.encode("utf-8"))


# =============================================================================
# Supporting Types
# =============================================================================

class Asset(BaseModel):
    """Native lumens (``XLM``) or a credit asset (``CODE:ISSUER``)."""
    code: str = "XLM"
    issuer: Optional[AccountId] = None

    model_config = {"frozen": True}

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if not _ASSET_CODE_RE.match(v):
            raise ValueError(f"invalid asset code {v!r}")
        return v

    @model_validator(mode="after")
    def validate_issuer(self) -> Asset:
        if self.issuer is None and self.code != "XLM":
            raise ValueError(f"credit asset {self.code} requires an issuer")
        return self

    @classmethod
    def native(cls) -> Asset:
        return cls(code="XLM")

    @classmethod
    def parse(cls, text: str) -> Asset:
        """Parse ``XLM``, ``native`` or ``CODE:ISSUER``."""
        if text in ("XLM", "native"):
            return cls.native()
        code, sep, issuer = text.partition(":")
        if not sep:
            raise ValueError(f"{text!r} is not an asset")
        return cls(code=code, issuer=issuer)

    @property
    def is_native(self) -> bool:
        return self.issuer is None

    def to_text(self) -> str:
        return "XLM" if self.is_native else f"{self.code}:{self.issuer}"


class Price(BaseModel):
    """Price as a fraction of two int32 values."""
    n: Int32
    d: Int32

    model_config = {"frozen": True}

    @field_validator("d")
    @classmethod
    def validate_denominator(cls, v: int) -> int:
        if v == 0:
            raise ValueError("price denominator can not be 0")
        return v


class ClaimPredicate(BaseModel):
    """
    Claim predicate tree node.

    AND and OR nodes hold exactly two children in ``predicates``; a NOT node
    holds at most one child in ``not_predicate``; the time variants carry an
    int64 in ``abs_before`` or ``rel_before``.
    """
    type: ClaimPredicateType = ClaimPredicateType.CLAIM_PREDICATE_UNCONDITIONAL
    predicates: List[ClaimPredicate] = Field(default_factory=list)
    not_predicate: Optional[ClaimPredicate] = None
    abs_before: Optional[Int64] = None
    rel_before: Optional[Int64] = None

    @model_validator(mode="after")
    def validate_shape(self) -> ClaimPredicate:
        kind = self.type
        if kind in (ClaimPredicateType.CLAIM_PREDICATE_AND, ClaimPredicateType.CLAIM_PREDICATE_OR):
            if len(self.predicates) != 2:
                raise ValueError(f"{kind.value} requires exactly 2 predicates, got {len(self.predicates)}")
        elif self.predicates:
            raise ValueError(f"{kind.value} takes no child predicates")
        if kind != ClaimPredicateType.CLAIM_PREDICATE_NOT and self.not_predicate is not None:
            raise ValueError(f"{kind.value} takes no negated predicate")
        if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME and self.abs_before is None:
            raise ValueError("abs_before is required")
        if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME and self.rel_before is None:
            raise ValueError("rel_before is required")
        return self

    @classmethod
    def unconditional(cls) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_UNCONDITIONAL)

    @classmethod
    def and_(cls, left: ClaimPredicate, right: ClaimPredicate) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_AND, predicates=[left, right])

    @classmethod
    def or_(cls, left: ClaimPredicate, right: ClaimPredicate) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_OR, predicates=[left, right])

    @classmethod
    def not_(cls, predicate: Optional[ClaimPredicate] = None) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_NOT, not_predicate=predicate)

    @classmethod
    def before_absolute_time(cls, epoch_seconds: int) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME, abs_before=epoch_seconds)

    @classmethod
    def before_relative_time(cls, seconds: int) -> ClaimPredicate:
        return cls(type=ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME, rel_before=seconds)


class Claimant(BaseModel):
    """Claimable balance recipient."""
    destination: AccountId
    predicate: ClaimPredicate = Field(default_factory=ClaimPredicate.unconditional)


class Signer(BaseModel):
    """Signer added, updated or removed by SET_OPTIONS."""
    key: SignerKeyId
    weight: Uint32


class Memo(BaseModel):
    """Transaction memo; ``hash`` holds the value for both MEMO_HASH and MEMO_RETURN."""
    type: MemoType = MemoType.MEMO_NONE
    text: Optional[str] = None
    id: Optional[Uint64] = None
    hash: Optional[Hash32] = None

    @model_validator(mode="after")
    def validate_value(self) -> Memo:
        expected = {
            MemoType.MEMO_NONE: None,
            MemoType.MEMO_TEXT: "text",
            MemoType.MEMO_ID: "id",
            MemoType.MEMO_HASH: "hash",
            MemoType.MEMO_RETURN: "hash",
        }[self.type]
        for name in ("text", "id", "hash"):
            value = getattr(self, name)
            if name == expected and value is None:
                raise ValueError(f"{self.type.value} requires a {name} value")
            if name != expected and value is not None:
                raise ValueError(f"{self.type.value} does not take a {name} value")
        if self.text is not None and _utf8_length(self.text) > 28:
            raise ValueError("memo text is longer than 28 bytes")
        return self

    @classmethod
    def none(cls) -> Memo:
        return cls()

    @classmethod
    def of_text(cls, text: str) -> Memo:
        return cls(type=MemoType.MEMO_TEXT, text=text)

    @classmethod
    def of_id(cls, memo_id: int) -> Memo:
        return cls(type=MemoType.MEMO_ID, id=memo_id)

    @classmethod
    def of_hash(cls, value: Union[bytes, str]) -> Memo:
        return cls(type=MemoType.MEMO_HASH, hash=value)

    @classmethod
    def of_return(cls, value: Union[bytes, str]) -> Memo:
        return cls(type=MemoType.MEMO_RETURN, hash=value)


class TimeBounds(BaseModel):
    """Validity window in unix seconds; 0 means unbounded."""
    min_time: Uint64 = 0
    max_time: Uint64 = 0


class LedgerBounds(BaseModel):
    """Validity window in ledger sequence numbers; a max of 0 means unbounded."""
    min_ledger: Uint32 = 0
    max_ledger: Uint32 = 0


class Preconditions(BaseModel):
    """Extended (V2) transaction preconditions."""
    time_bounds: Optional[TimeBounds] = None
    ledger_bounds: Optional[LedgerBounds] = None
    min_sequence_number: Optional[SequenceNumber] = None
    min_sequence_age: Uint64 = 0
    min_sequence_ledger_gap: Uint32 = 0
    extra_signers: List[SignerKeyId] = Field(default_factory=list, max_length=2)


class DecoratedSignature(BaseModel):
    """Signature with the 4-byte hint of the signing key."""
    hint: HexBytes
    signature: HexBytes

    @field_validator("hint")
    @classmethod
    def validate_hint(cls, v: bytes) -> bytes:
        if len(v) != 4:
            raise ValueError(f"signature hint must be 4 bytes, got {len(v)}")
        return v

    @field_validator("signature")
    @classmethod
    def validate_signature(cls, v: bytes) -> bytes:
        if len(v) > 64:
            raise ValueError(f"signature must be at most 64 bytes, got {len(v)}")
        return v


class LedgerKey(BaseModel):
    """Ledger entry whose sponsorship is revoked; the fields used depend on ``type``."""
    type: LedgerKeyType
    account_id: Optional[AccountId] = None
    asset: Optional[Asset] = None
    offer_id: Optional[Int64] = None
    data_name: Optional[str] = None
    balance_id: Optional[Hash32] = None
    liquidity_pool_id: Optional[Hash32] = None

    @model_validator(mode="after")
    def validate_fields(self) -> LedgerKey:
        required = {
            LedgerKeyType.ACCOUNT: ("account_id",),
            LedgerKeyType.TRUSTLINE: ("account_id", "asset"),
            LedgerKeyType.OFFER: ("account_id", "offer_id"),
            LedgerKeyType.DATA: ("account_id", "data_name"),
            LedgerKeyType.CLAIMABLE_BALANCE: ("balance_id",),
            LedgerKeyType.LIQUIDITY_POOL: ("liquidity_pool_id",),
        }[self.type]
        for name in ("account_id", "asset", "offer_id", "data_name", "balance_id", "liquidity_pool_id"):
            value = getattr(self, name)
            if name in required and value is None:
                raise ValueError(f"{self.type.value} ledger key requires {name}")
            if name not in required and value is not None:
                raise ValueError(f"{self.type.value} ledger key does not take {name}")
        return self

    @classmethod
    def account(cls, account_id: str) -> LedgerKey:
        return cls(type=LedgerKeyType.ACCOUNT, account_id=account_id)

    @classmethod
    def trust_line(cls, account_id: str, asset: Asset) -> LedgerKey:
        return cls(type=LedgerKeyType.TRUSTLINE, account_id=account_id, asset=asset)

    @classmethod
    def offer(cls, seller_id: str, offer_id: int) -> LedgerKey:
        return cls(type=LedgerKeyType.OFFER, account_id=seller_id, offer_id=offer_id)

    @classmethod
    def data(cls, account_id: str, data_name: str) -> LedgerKey:
        return cls(type=LedgerKeyType.DATA, account_id=account_id, data_name=data_name)

    @classmethod
    def claimable_balance(cls, balance_id: Union[bytes, str]) -> LedgerKey:
        return cls(type=LedgerKeyType.CLAIMABLE_BALANCE, balance_id=balance_id)

    @classmethod
    def liquidity_pool(cls, pool_id: Union[bytes, str]) -> LedgerKey:
        return cls(type=LedgerKeyType.LIQUIDITY_POOL, liquidity_pool_id=pool_id)


class RevokeSponsorshipSigner(BaseModel):
    """Signer whose sponsorship is revoked."""
    account_id: AccountId
    signer_key: SignerKeyId


# =============================================================================
# Operations
# =============================================================================

class OperationBase(BaseModel):
    """Fields shared by every operation."""
    source_account: Optional[MuxedAccountId] = None

    model_config = {"populate_by_name": True}


class CreateAccountOp(OperationBase):
    type: Literal[OperationType.CREATE_ACCOUNT] = OperationType.CREATE_ACCOUNT
    destination: AccountId
    starting_balance: Amount


class PaymentOp(OperationBase):
    type: Literal[OperationType.PAYMENT] = OperationType.PAYMENT
    destination: MuxedAccountId
    asset: Asset
    amount: Amount


class PathPaymentStrictReceiveOp(OperationBase):
    type: Literal[OperationType.PATH_PAYMENT_STRICT_RECEIVE] = OperationType.PATH_PAYMENT_STRICT_RECEIVE
    send_asset: Asset
    send_max: Amount
    destination: MuxedAccountId
    dest_asset: Asset
    dest_amount: Amount
    path: List[Asset] = Field(default_factory=list, max_length=5)


class PathPaymentStrictSendOp(OperationBase):
    type: Literal[OperationType.PATH_PAYMENT_STRICT_SEND] = OperationType.PATH_PAYMENT_STRICT_SEND
    send_asset: Asset
    send_amount: Amount
    destination: MuxedAccountId
    dest_asset: Asset
    dest_min: Amount
    path: List[Asset] = Field(default_factory=list, max_length=5)


class ManageSellOfferOp(OperationBase):
    type: Literal[OperationType.MANAGE_SELL_OFFER] = OperationType.MANAGE_SELL_OFFER
    selling: Asset
    buying: Asset
    amount: Amount
    price: Price
    offer_id: Int64 = 0


class CreatePassiveSellOfferOp(OperationBase):
    type: Literal[OperationType.CREATE_PASSIVE_SELL_OFFER] = OperationType.CREATE_PASSIVE_SELL_OFFER
    selling: Asset
    buying: Asset
    amount: Amount
    price: Price


class SetOptionsOp(OperationBase):
    type: Literal[OperationType.SET_OPTIONS] = OperationType.SET_OPTIONS
    inflation_dest: Optional[AccountId] = None
    clear_flags: Optional[Uint32] = None
    set_flags: Optional[Uint32] = None
    master_weight: Optional[Uint32] = None
    low_threshold: Optional[Uint32] = None
    med_threshold: Optional[Uint32] = None
    high_threshold: Optional[Uint32] = None
    home_domain: Optional[str] = None
    signer: Optional[Signer] = None

    @field_validator("home_domain")
    @classmethod
    def validate_home_domain(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and _utf8_length(v) > 32:
            raise ValueError("home domain is longer than 32 bytes")
        return v


class ChangeTrustOp(OperationBase):
    type: Literal[OperationType.CHANGE_TRUST] = OperationType.CHANGE_TRUST
    line: Asset
    limit: Amount = amount_codec.MAX_AMOUNT


class AllowTrustOp(OperationBase):
    type: Literal[OperationType.ALLOW_TRUST] = OperationType.ALLOW_TRUST
    trustor: AccountId
    asset_code: str
    authorize: int = Field(ge=0, le=2)

    @field_validator("asset_code")
    @classmethod
    def validate_asset_code(cls, v: str) -> str:
        if not _ASSET_CODE_RE.match(v):
            raise ValueError(f"invalid asset code {v!r}")
        return v


class AccountMergeOp(OperationBase):
    type: Literal[OperationType.ACCOUNT_MERGE] = OperationType.ACCOUNT_MERGE
    destination: MuxedAccountId


class InflationOp(OperationBase):
    type: Literal[OperationType.INFLATION] = OperationType.INFLATION


class ManageDataOp(OperationBase):
    type: Literal[OperationType.MANAGE_DATA] = OperationType.MANAGE_DATA
    data_name: str
    data_value: Optional[HexBytes] = None

    @field_validator("data_name")
    @classmethod
    def validate_data_name(cls, v: str) -> str:
        if not 1 <= _utf8_length(v) <= 64:
            raise ValueError("data name must be 1 to 64 bytes")
        return v

    @field_validator("data_value")
    @classmethod
    def validate_data_value(cls, v: Optional[bytes]) -> Optional[bytes]:
        if v is not None and len(v) > 64:
            raise ValueError("data value is longer than 64 bytes")
        return v


class BumpSequenceOp(OperationBase):
    type: Literal[OperationType.BUMP_SEQUENCE] = OperationType.BUMP_SEQUENCE
    bump_to: SequenceNumber


class ManageBuyOfferOp(OperationBase):
    type: Literal[OperationType.MANAGE_BUY_OFFER] = OperationType.MANAGE_BUY_OFFER
    selling: Asset
    buying: Asset
    buy_amount: Amount
    price: Price
    offer_id: Int64 = 0


class CreateClaimableBalanceOp(OperationBase):
    type: Literal[OperationType.CREATE_CLAIMABLE_BALANCE] = OperationType.CREATE_CLAIMABLE_BALANCE
    asset: Asset
    amount: Amount
    claimants: List[Claimant] = Field(min_length=1, max_length=10)


class ClaimClaimableBalanceOp(OperationBase):
    type: Literal[OperationType.CLAIM_CLAIMABLE_BALANCE] = OperationType.CLAIM_CLAIMABLE_BALANCE
    balance_id: Hash32


class BeginSponsoringFutureReservesOp(OperationBase):
    type: Literal[OperationType.BEGIN_SPONSORING_FUTURE_RESERVES] = OperationType.BEGIN_SPONSORING_FUTURE_RESERVES
    sponsored_id: AccountId


class EndSponsoringFutureReservesOp(OperationBase):
    type: Literal[OperationType.END_SPONSORING_FUTURE_RESERVES] = OperationType.END_SPONSORING_FUTURE_RESERVES


class RevokeSponsorshipOp(OperationBase):
    """Revokes sponsorship of either a ledger entry or a signer; exactly one is set."""
    type: Literal[OperationType.REVOKE_SPONSORSHIP] = OperationType.REVOKE_SPONSORSHIP
    ledger_key: Optional[LedgerKey] = None
    signer: Optional[RevokeSponsorshipSigner] = None

    @model_validator(mode="after")
    def validate_target(self) -> RevokeSponsorshipOp:
        if (self.ledger_key is None) == (self.signer is None):
            raise ValueError("exactly one of ledger_key or signer must be set")
        return self

    @property
    def target(self) -> RevokeSponsorshipType:
        if self.ledger_key is not None:
            return RevokeSponsorshipType.REVOKE_SPONSORSHIP_LEDGER_ENTRY
        return RevokeSponsorshipType.REVOKE_SPONSORSHIP_SIGNER


class ClawbackOp(OperationBase):
    type: Literal[OperationType.CLAWBACK] = OperationType.CLAWBACK
    asset: Asset
    from_account: MuxedAccountId = Field(alias="from")
    amount: Amount


class ClawbackClaimableBalanceOp(OperationBase):
    type: Literal[OperationType.CLAWBACK_CLAIMABLE_BALANCE] = OperationType.CLAWBACK_CLAIMABLE_BALANCE
    balance_id: Hash32


class SetTrustLineFlagsOp(OperationBase):
    type: Literal[OperationType.SET_TRUST_LINE_FLAGS] = OperationType.SET_TRUST_LINE_FLAGS
    trustor: AccountId
    asset: Asset
    clear_flags: Uint32 = 0
    set_flags: Uint32 = 0


class LiquidityPoolDepositOp(OperationBase):
    type: Literal[OperationType.LIQUIDITY_POOL_DEPOSIT] = OperationType.LIQUIDITY_POOL_DEPOSIT
    liquidity_pool_id: Hash32
    max_amount_a: Amount
    max_amount_b: Amount
    min_price: Price
    max_price: Price


class LiquidityPoolWithdrawOp(OperationBase):
    type: Literal[OperationType.LIQUIDITY_POOL_WITHDRAW] = OperationType.LIQUIDITY_POOL_WITHDRAW
    liquidity_pool_id: Hash32
    amount: Amount
    min_amount_a: Amount
    min_amount_b: Amount


Operation = Annotated[
    Union[
        CreateAccountOp,
        PaymentOp,
        PathPaymentStrictReceiveOp,
        ManageSellOfferOp,
        CreatePassiveSellOfferOp,
        SetOptionsOp,
        ChangeTrustOp,
        AllowTrustOp,
        AccountMergeOp,
        InflationOp,
        ManageDataOp,
        BumpSequenceOp,
        ManageBuyOfferOp,
        PathPaymentStrictSendOp,
        CreateClaimableBalanceOp,
        ClaimClaimableBalanceOp,
        BeginSponsoringFutureReservesOp,
        EndSponsoringFutureReservesOp,
        RevokeSponsorshipOp,
        ClawbackOp,
        ClawbackClaimableBalanceOp,
        SetTrustLineFlagsOp,
        LiquidityPoolDepositOp,
        LiquidityPoolWithdrawOp,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Envelopes
# =============================================================================

class Transaction(BaseModel):
    """
    Transaction together with its signatures (a plain envelope).

    Legacy ``time_bounds`` and V2 ``preconditions`` are mutually exclusive;
    V2 preconditions carry their own time bounds.
    """
    source_account: MuxedAccountId
    fee: Uint32 = 100
    sequence: SequenceNumber
    time_bounds: Optional[TimeBounds] = None
    preconditions: Optional[Preconditions] = None
    memo: Memo = Field(default_factory=Memo)
    operations: List[Operation] = Field(default_factory=list, max_length=100)
    signatures: List[DecoratedSignature] = Field(default_factory=list, max_length=20)

    @model_validator(mode="after")
    def validate_conditions(self) -> Transaction:
        if self.time_bounds is not None and self.preconditions is not None:
            raise ValueError("set time bounds on preconditions when preconditions are used")
        return self

    @property
    def envelope_type(self) -> EnvelopeType:
        return EnvelopeType.ENVELOPE_TYPE_TX


class FeeBumpTransaction(BaseModel):
    """Fee-bump envelope wrapping a signed inner transaction."""
    fee_source: MuxedAccountId
    fee: Int64
    inner: Transaction
    signatures: List[DecoratedSignature] = Field(default_factory=list, max_length=20)

    @property
    def envelope_type(self) -> EnvelopeType:
        return EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP


Envelope = Union[Transaction, FeeBumpTransaction]


__all__ = [
    "Amount",
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
    "OperationBase",
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
