"""
Operation codec table.

One declaration per operation kind drives both directions: the TxRep tag,
the body prefix token, the model class, and the ordered field rules. Every
operation is written as

    {opPath}.sourceAccount._present: true|false
    {opPath}.sourceAccount: ...            (when present)
    {opPath}.body.type: TAG
    {opPath}.body.{prefix}.{field}: ...

ACCOUNT_MERGE is the exception to the nesting: its destination sits
directly at ``{opPath}.body.destination``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type
import logging

from pydantic import BaseModel

from .fieldmap import FieldMap
from .fields import (
    ACCOUNT,
    AMOUNT,
    ASSET,
    BALANCE_ID,
    HASH,
    INT64,
    MUXED_ACCOUNT,
    PRICE,
    SEQUENCE,
    SIGNER_KEY,
    UINT32,
    ArrayField,
    AssetCodeField,
    FieldCodec,
    FieldRule,
    HexField,
    IntField,
    OptionalField,
    QuotedStringField,
    StructField,
    build_model,
    decode_rules,
    encode_rules,
)
from .predicate import PredicateField
from .scalars import format_bool, parse_bool, parse_enum
from ..enums import LedgerKeyType, OperationType, RevokeSponsorshipType, SOROBAN_OPERATION_TAGS
from ..models import (
    AccountMergeOp,
    AllowTrustOp,
    BeginSponsoringFutureReservesOp,
    BumpSequenceOp,
    ChangeTrustOp,
    Claimant,
    ClaimClaimableBalanceOp,
    ClawbackClaimableBalanceOp,
    ClawbackOp,
    CreateAccountOp,
    CreateClaimableBalanceOp,
    CreatePassiveSellOfferOp,
    EndSponsoringFutureReservesOp,
    InflationOp,
    LedgerKey,
    LiquidityPoolDepositOp,
    LiquidityPoolWithdrawOp,
    ManageBuyOfferOp,
    ManageDataOp,
    ManageSellOfferOp,
    Operation,
    PathPaymentStrictReceiveOp,
    PathPaymentStrictSendOp,
    PaymentOp,
    RevokeSponsorshipOp,
    RevokeSponsorshipSigner,
    SetOptionsOp,
    SetTrustLineFlagsOp,
    Signer,
)
from ..runtime.errors import InvalidFieldError, UnsupportedOperationError
from ..runtime.options import TxRepOptions

logger = logging.getLogger(__name__)


class ClaimantField(FieldCodec):
    """Claimant: ``{key}.type`` marker, ``{key}.v0.destination`` and ``{key}.v0.predicate.*``."""

    TYPE = "CLAIMANT_TYPE_V0"
    RULES = (
        FieldRule("destination", "destination", ACCOUNT),
        FieldRule("predicate", "predicate", PredicateField()),
    )

    def encode(self, fields: FieldMap, key: str, value: Claimant) -> None:
        fields.put(f"{key}.type", self.TYPE)
        encode_rules(fields, f"{key}.v0", value, self.RULES)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Claimant:
        type_key = f"{key}.type"
        kind = fields.require(type_key)
        if kind != self.TYPE:
            raise InvalidFieldError(type_key, f"unsupported claimant type {kind!r}")
        return build_model(Claimant, decode_rules(fields, f"{key}.v0", self.RULES, options), key)


# Ledger key layouts for REVOKE_SPONSORSHIP: key type -> (arm name, rules)
LEDGER_KEY_LAYOUTS: Dict[LedgerKeyType, Tuple[str, Tuple[FieldRule, ...]]] = {
    LedgerKeyType.ACCOUNT: ("account", (
        FieldRule("accountID", "account_id", ACCOUNT),
    )),
    LedgerKeyType.TRUSTLINE: ("trustLine", (
        FieldRule("accountID", "account_id", ACCOUNT),
        FieldRule("asset", "asset", ASSET),
    )),
    LedgerKeyType.OFFER: ("offer", (
        FieldRule("sellerID", "account_id", ACCOUNT),
        FieldRule("offerID", "offer_id", INT64),
    )),
    LedgerKeyType.DATA: ("data", (
        FieldRule("accountID", "account_id", ACCOUNT),
        FieldRule("dataName", "data_name", QuotedStringField(64, min_bytes=1)),
    )),
    LedgerKeyType.CLAIMABLE_BALANCE: ("claimableBalance", (
        FieldRule("balanceID", "balance_id", BALANCE_ID),
    )),
    LedgerKeyType.LIQUIDITY_POOL: ("liquidityPool", (
        FieldRule("liquidityPoolID", "liquidity_pool_id", HASH),
    )),
}

REVOKE_SIGNER = StructField(RevokeSponsorshipSigner, (
    FieldRule("accountID", "account_id", ACCOUNT),
    FieldRule("signerKey", "signer_key", SIGNER_KEY),
))


class RevokeSponsorshipField(FieldCodec):
    """
    Revoke sponsorship target, written at the operation prefix itself.

    Decodes to the keyword arguments of :class:`RevokeSponsorshipOp`.
    """

    def encode(self, fields: FieldMap, key: str, value: RevokeSponsorshipOp) -> None:
        fields.put(f"{key}.type", value.target.value)
        if value.ledger_key is None:
            REVOKE_SIGNER.encode(fields, f"{key}.signer", value.signer)
            return
        ledger_key = value.ledger_key
        lk_key = f"{key}.ledgerKey"
        fields.put(f"{lk_key}.type", ledger_key.type.value)
        arm, rules = LEDGER_KEY_LAYOUTS[ledger_key.type]
        encode_rules(fields, f"{lk_key}.{arm}", ledger_key, rules)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Dict[str, Any]:
        type_key = f"{key}.type"
        target = parse_enum(RevokeSponsorshipType, fields.require(type_key), type_key)
        if target == RevokeSponsorshipType.REVOKE_SPONSORSHIP_SIGNER:
            return {"signer": REVOKE_SIGNER.decode(fields, f"{key}.signer", options)}
        lk_key = f"{key}.ledgerKey"
        lk_type_key = f"{lk_key}.type"
        kind = parse_enum(LedgerKeyType, fields.require(lk_type_key), lk_type_key)
        arm, rules = LEDGER_KEY_LAYOUTS[kind]
        values = decode_rules(fields, f"{lk_key}.{arm}", rules, options)
        return {"ledger_key": build_model(LedgerKey, dict(values, type=kind), lk_key)}


@dataclass(frozen=True)
class OperationCodec:
    """Codec declaration for one operation kind; ``prefix`` None writes fields directly under ``body``."""
    type: OperationType
    prefix: Optional[str]
    model: Type[BaseModel]
    rules: Tuple[FieldRule, ...] = ()


SIGNER = StructField(Signer, (
    FieldRule("key", "key", SIGNER_KEY),
    FieldRule("weight", "weight", UINT32),
))

_CODECS = (
    OperationCodec(OperationType.CREATE_ACCOUNT, "createAccountOp", CreateAccountOp, (
        FieldRule("destination", "destination", ACCOUNT),
        FieldRule("startingBalance", "starting_balance", AMOUNT),
    )),
    OperationCodec(OperationType.PAYMENT, "paymentOp", PaymentOp, (
        FieldRule("destination", "destination", MUXED_ACCOUNT),
        FieldRule("asset", "asset", ASSET),
        FieldRule("amount", "amount", AMOUNT),
    )),
    OperationCodec(OperationType.PATH_PAYMENT_STRICT_RECEIVE, "pathPaymentStrictReceiveOp", PathPaymentStrictReceiveOp, (
        FieldRule("sendAsset", "send_asset", ASSET),
        FieldRule("sendMax", "send_max", AMOUNT),
        FieldRule("destination", "destination", MUXED_ACCOUNT),
        FieldRule("destAsset", "dest_asset", ASSET),
        FieldRule("destAmount", "dest_amount", AMOUNT),
        FieldRule("path", "path", ArrayField(ASSET, "max_path_length")),
    )),
    OperationCodec(OperationType.MANAGE_SELL_OFFER, "manageSellOfferOp", ManageSellOfferOp, (
        FieldRule("selling", "selling", ASSET),
        FieldRule("buying", "buying", ASSET),
        FieldRule("amount", "amount", AMOUNT),
        FieldRule("price", "price", PRICE),
        FieldRule("offerID", "offer_id", INT64),
    )),
    OperationCodec(OperationType.CREATE_PASSIVE_SELL_OFFER, "createPassiveSellOfferOp", CreatePassiveSellOfferOp, (
        FieldRule("selling", "selling", ASSET),
        FieldRule("buying", "buying", ASSET),
        FieldRule("amount", "amount", AMOUNT),
        FieldRule("price", "price", PRICE),
    )),
    OperationCodec(OperationType.SET_OPTIONS, "setOptionsOp", SetOptionsOp, (
        FieldRule("inflationDest", "inflation_dest", OptionalField(ACCOUNT)),
        FieldRule("clearFlags", "clear_flags", OptionalField(UINT32)),
        FieldRule("setFlags", "set_flags", OptionalField(UINT32)),
        FieldRule("masterWeight", "master_weight", OptionalField(UINT32)),
        FieldRule("lowThreshold", "low_threshold", OptionalField(UINT32)),
        FieldRule("medThreshold", "med_threshold", OptionalField(UINT32)),
        FieldRule("highThreshold", "high_threshold", OptionalField(UINT32)),
        FieldRule("homeDomain", "home_domain", OptionalField(QuotedStringField(32))),
        FieldRule("signer", "signer", OptionalField(SIGNER)),
    )),
    OperationCodec(OperationType.CHANGE_TRUST, "changeTrustOp", ChangeTrustOp, (
        FieldRule("line", "line", ASSET),
        FieldRule("limit", "limit", AMOUNT),
    )),
    OperationCodec(OperationType.ALLOW_TRUST, "allowTrustOp", AllowTrustOp, (
        FieldRule("trustor", "trustor", ACCOUNT),
        FieldRule("asset", "asset_code", AssetCodeField()),
        FieldRule("authorize", "authorize", IntField(0, 2)),
    )),
    OperationCodec(OperationType.ACCOUNT_MERGE, None, AccountMergeOp, (
        FieldRule("destination", "destination", MUXED_ACCOUNT),
    )),
    OperationCodec(OperationType.INFLATION, None, InflationOp),
    OperationCodec(OperationType.MANAGE_DATA, "manageDataOp", ManageDataOp, (
        FieldRule("dataName", "data_name", QuotedStringField(64, min_bytes=1)),
        FieldRule("dataValue", "data_value", OptionalField(HexField(max_length=64))),
    )),
    OperationCodec(OperationType.BUMP_SEQUENCE, "bumpSequenceOp", BumpSequenceOp, (
        FieldRule("bumpTo", "bump_to", SEQUENCE),
    )),
    OperationCodec(OperationType.MANAGE_BUY_OFFER, "manageBuyOfferOp", ManageBuyOfferOp, (
        FieldRule("selling", "selling", ASSET),
        FieldRule("buying", "buying", ASSET),
        FieldRule("buyAmount", "buy_amount", AMOUNT),
        FieldRule("price", "price", PRICE),
        FieldRule("offerID", "offer_id", INT64),
    )),
    OperationCodec(OperationType.PATH_PAYMENT_STRICT_SEND, "pathPaymentStrictSendOp", PathPaymentStrictSendOp, (
        FieldRule("sendAsset", "send_asset", ASSET),
        FieldRule("sendAmount", "send_amount", AMOUNT),
        FieldRule("destination", "destination", MUXED_ACCOUNT),
        FieldRule("destAsset", "dest_asset", ASSET),
        FieldRule("destMin", "dest_min", AMOUNT),
        FieldRule("path", "path", ArrayField(ASSET, "max_path_length")),
    )),
    OperationCodec(OperationType.CREATE_CLAIMABLE_BALANCE, "createClaimableBalanceOp", CreateClaimableBalanceOp, (
        FieldRule("asset", "asset", ASSET),
        FieldRule("amount", "amount", AMOUNT),
        FieldRule("claimants", "claimants", ArrayField(ClaimantField(), "max_claimants")),
    )),
    OperationCodec(OperationType.CLAIM_CLAIMABLE_BALANCE, "claimClaimableBalanceOp", ClaimClaimableBalanceOp, (
        FieldRule("balanceID", "balance_id", BALANCE_ID),
    )),
    OperationCodec(OperationType.BEGIN_SPONSORING_FUTURE_RESERVES, "beginSponsoringFutureReservesOp",
                  BeginSponsoringFutureReservesOp, (
        FieldRule("sponsoredID", "sponsored_id", ACCOUNT),
    )),
    OperationCodec(OperationType.END_SPONSORING_FUTURE_RESERVES, None, EndSponsoringFutureReservesOp),
    OperationCodec(OperationType.REVOKE_SPONSORSHIP, "revokeSponsorshipOp", RevokeSponsorshipOp, (
        FieldRule(None, None, RevokeSponsorshipField()),
    )),
    OperationCodec(OperationType.CLAWBACK, "clawbackOp", ClawbackOp, (
        FieldRule("asset", "asset", ASSET),
        FieldRule("from", "from_account", MUXED_ACCOUNT),
        FieldRule("amount", "amount", AMOUNT),
    )),
    OperationCodec(OperationType.CLAWBACK_CLAIMABLE_BALANCE, "clawbackClaimableBalanceOp", ClawbackClaimableBalanceOp, (
        FieldRule("balanceID", "balance_id", BALANCE_ID),
    )),
    OperationCodec(OperationType.SET_TRUST_LINE_FLAGS, "setTrustLineFlagsOp", SetTrustLineFlagsOp, (
        FieldRule("trustor", "trustor", ACCOUNT),
        FieldRule("asset", "asset", ASSET),
        FieldRule("clearFlags", "clear_flags", UINT32),
        FieldRule("setFlags", "set_flags", UINT32),
    )),
    OperationCodec(OperationType.LIQUIDITY_POOL_DEPOSIT, "liquidityPoolDepositOp", LiquidityPoolDepositOp, (
        FieldRule("liquidityPoolID", "liquidity_pool_id", HASH),
        FieldRule("maxAmountA", "max_amount_a", AMOUNT),
        FieldRule("maxAmountB", "max_amount_b", AMOUNT),
        FieldRule("minPrice", "min_price", PRICE),
        FieldRule("maxPrice", "max_price", PRICE),
    )),
    OperationCodec(OperationType.LIQUIDITY_POOL_WITHDRAW, "liquidityPoolWithdrawOp", LiquidityPoolWithdrawOp, (
        FieldRule("liquidityPoolID", "liquidity_pool_id", HASH),
        FieldRule("amount", "amount", AMOUNT),
        FieldRule("minAmountA", "min_amount_a", AMOUNT),
        FieldRule("minAmountB", "min_amount_b", AMOUNT),
    )),
)

OPERATION_CODECS: Dict[OperationType, OperationCodec] = {codec.type: codec for codec in _CODECS}

_missing = [t.value for t in OperationType if t not in OPERATION_CODECS]
if _missing or len(OPERATION_CODECS) != len(_CODECS):
    raise RuntimeError(f"Operation codec table is incomplete or duplicated: missing {_missing}")


def body_key(op_path: str, codec: OperationCodec) -> str:
    if codec.prefix is None:
        return f"{op_path}.body"
    return f"{op_path}.body.{codec.prefix}"


def encode_operation(fields: FieldMap, op_path: str, op: Operation) -> None:
    """
    Write one operation.

    Args:
        fields: Field map being built
        op_path: Operation key, e.g. ``tx.operations[0]``
        op: Operation model
    """
    fields.put(f"{op_path}.sourceAccount._present", format_bool(op.source_account is not None))
    if op.source_account is not None:
        fields.put(f"{op_path}.sourceAccount", op.source_account)
    fields.put(f"{op_path}.body.type", op.type.value)
    codec = OPERATION_CODECS[op.type]
    encode_rules(fields, body_key(op_path, codec), op, codec.rules)


def decode_operation(fields: FieldMap, op_path: str, options: TxRepOptions) -> Optional[Operation]:
    """
    Read one operation.

    Returns:
        Operation model, or None when an unknown tag is skipped because
        ``options.reject_unknown_operations`` is off

    Raises:
        InvalidFieldError: On an unknown tag (by default) or a bad field
        UnsupportedOperationError: On a Soroban operation tag
    """
    present_key = f"{op_path}.sourceAccount._present"
    source = None
    if parse_bool(fields.require(present_key), present_key):
        source = MUXED_ACCOUNT.decode(fields, f"{op_path}.sourceAccount", options)

    type_key = f"{op_path}.body.type"
    tag = fields.require(type_key)
    try:
        op_type = OperationType(tag)
    except ValueError:
        if tag in SOROBAN_OPERATION_TAGS:
            raise UnsupportedOperationError(f"{tag} operations are not supported", key=type_key)
        if options.reject_unknown_operations:
            raise InvalidFieldError(type_key, f"unknown operation type {tag!r}")
        logger.warning("Skipping %s with unknown operation type %s", op_path, tag)
        return None

    codec = OPERATION_CODECS[op_type]
    base = body_key(op_path, codec)
    values = decode_rules(fields, base, codec.rules, options)
    return build_model(codec.model, dict(values, source_account=source), base)


__all__ = [
    "OperationCodec",
    "OPERATION_CODECS",
    "ClaimantField",
    "RevokeSponsorshipField",
    "body_key",
    "encode_operation",
    "decode_operation",
]
