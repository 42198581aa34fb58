"""
Binary (XDR) envelope adapter.

Converts between the transaction models and ``stellar_sdk.xdr``
``TransactionEnvelope`` objects, and between those and raw or base64 XDR.
Every XDR struct is built and read through stellar_sdk's generated classes;
this module never packs bytes itself.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging

from stellar_sdk import xdr as stellar_xdr

from .codec import amount as amount_codec
from .codec.operations import OPERATION_CODECS
from .codec.scalars import describe
from .enums import (
    ClaimPredicateType,
    LedgerKeyType,
    MemoType,
    OperationType,
    SOROBAN_OPERATION_TAGS,
)
from .models import (
    Asset,
    ClaimPredicate,
    Claimant,
    DecoratedSignature,
    Envelope,
    FeeBumpTransaction,
    LedgerBounds,
    LedgerKey,
    Memo,
    Operation,
    Preconditions,
    Price,
    RevokeSponsorshipSigner,
    Signer,
    TimeBounds,
    Transaction,
)
from .runtime.address import (
    account_from_xdr,
    account_to_xdr,
    format_account,
    muxed_from_xdr,
    muxed_to_xdr,
    signer_key_from_xdr,
    signer_key_to_xdr,
)
from .runtime.errors import BinaryEncodingError, TxRepError, UnsupportedOperationError

logger = logging.getLogger(__name__)


# =============================================================================
# Public API
# =============================================================================

def decode_envelope(data: Union[bytes, str]) -> Envelope:
    """
    Decode an XDR transaction envelope.

    V0 envelopes are read as ``ENVELOPE_TYPE_TX`` transactions.

    Args:
        data: Raw XDR bytes or base64 text

    Returns:
        Transaction or FeeBumpTransaction

    Raises:
        BinaryEncodingError: If the input is not a valid envelope
        UnsupportedOperationError: If it holds something TxRep cannot express
    """
    try:
        if isinstance(data, str):
            envelope = stellar_xdr.TransactionEnvelope.from_xdr(data.strip())
        else:
            envelope = stellar_xdr.TransactionEnvelope.from_xdr_bytes(data)
    except Exception as e:
        raise BinaryEncodingError(f"Invalid transaction envelope XDR: {e}", cause=e) from e
    return envelope_from_xdr(envelope)


def encode_envelope(envelope: Envelope) -> bytes:
    """Encode a model envelope as raw XDR bytes."""
    return envelope_to_xdr(envelope).to_xdr_bytes()


def encode_envelope_base64(envelope: Envelope) -> str:
    """Encode a model envelope as base64 XDR."""
    return envelope_to_xdr(envelope).to_xdr()


def envelope_from_xdr(envelope: stellar_xdr.TransactionEnvelope) -> Envelope:
    """Convert a stellar_sdk XDR envelope into a model envelope."""
    kind = envelope.type
    try:
        if kind == stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX_V0:
            logger.debug("Reading V0 envelope as ENVELOPE_TYPE_TX")
            return _transaction_from_v0(envelope.v0)
        if kind == stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX:
            return _transaction_from_xdr(envelope.v1.tx, envelope.v1.signatures)
        if kind == stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP:
            fee_bump = envelope.fee_bump
            inner = fee_bump.tx.inner_tx.v1
            return FeeBumpTransaction(
                fee_source=muxed_from_xdr(fee_bump.tx.fee_source),
                fee=fee_bump.tx.fee.int64,
                inner=_transaction_from_xdr(inner.tx, inner.signatures),
                signatures=_signatures_from_xdr(fee_bump.signatures),
            )
    except ValueError as e:
        # pydantic ValidationError and UnicodeDecodeError both land here
        raise BinaryEncodingError(f"Envelope cannot be represented: {describe(e)}", cause=e) from e
    raise UnsupportedOperationError(f"Unsupported envelope type {kind.name}")


def envelope_to_xdr(envelope: Envelope) -> stellar_xdr.TransactionEnvelope:
    """Convert a model envelope into a stellar_sdk XDR envelope."""
    try:
        if isinstance(envelope, FeeBumpTransaction):
            fee_bump_tx = stellar_xdr.FeeBumpTransaction(
                fee_source=muxed_to_xdr(envelope.fee_source),
                fee=stellar_xdr.Int64(envelope.fee),
                inner_tx=stellar_xdr.FeeBumpTransactionInnerTx(
                    type=stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX,
                    v1=_v1_envelope(envelope.inner),
                ),
                ext=stellar_xdr.FeeBumpTransactionExt(v=0),
            )
            return stellar_xdr.TransactionEnvelope(
                type=stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP,
                fee_bump=stellar_xdr.FeeBumpTransactionEnvelope(
                    tx=fee_bump_tx,
                    signatures=_signatures_to_xdr(envelope.signatures),
                ),
            )
        return stellar_xdr.TransactionEnvelope(
            type=stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX,
            v1=_v1_envelope(envelope),
        )
    except TxRepError:
        raise
    except (ValueError, TypeError) as e:
        raise BinaryEncodingError(f"Envelope cannot be encoded: {e}", cause=e) from e


# =============================================================================
# Transactions
# =============================================================================

def _v1_envelope(tx: Transaction) -> stellar_xdr.TransactionV1Envelope:
    tx_xdr = stellar_xdr.Transaction(
        source_account=muxed_to_xdr(tx.source_account),
        fee=stellar_xdr.Uint32(tx.fee),
        seq_num=stellar_xdr.SequenceNumber(stellar_xdr.Int64(tx.sequence)),
        cond=_conditions_to_xdr(tx),
        memo=_memo_to_xdr(tx.memo),
        operations=[_operation_to_xdr(op) for op in tx.operations],
        ext=stellar_xdr.TransactionExt(v=0),
    )
    return stellar_xdr.TransactionV1Envelope(tx=tx_xdr, signatures=_signatures_to_xdr(tx.signatures))


def _transaction_from_xdr(tx: stellar_xdr.Transaction,
                          signatures: List[stellar_xdr.DecoratedSignature]) -> Transaction:
    if tx.ext.v != 0:
        raise UnsupportedOperationError("Transactions carrying Soroban resource data are not supported")
    time_bounds, preconditions = _conditions_from_xdr(tx.cond)
    return Transaction(
        source_account=muxed_from_xdr(tx.source_account),
        fee=tx.fee.uint32,
        sequence=tx.seq_num.sequence_number.int64,
        time_bounds=time_bounds,
        preconditions=preconditions,
        memo=_memo_from_xdr(tx.memo),
        operations=[_operation_from_xdr(op) for op in tx.operations],
        signatures=_signatures_from_xdr(signatures),
    )


def _transaction_from_v0(envelope: stellar_xdr.TransactionV0Envelope) -> Transaction:
    tx = envelope.tx
    return Transaction(
        source_account=format_account(tx.source_account_ed25519.uint256),
        fee=tx.fee.uint32,
        sequence=tx.seq_num.sequence_number.int64,
        time_bounds=_time_bounds_from_xdr(tx.time_bounds) if tx.time_bounds else None,
        memo=_memo_from_xdr(tx.memo),
        operations=[_operation_from_xdr(op) for op in tx.operations],
        signatures=_signatures_from_xdr(envelope.signatures),
    )


def _signatures_to_xdr(signatures: List[DecoratedSignature]) -> List[stellar_xdr.DecoratedSignature]:
    return [
        stellar_xdr.DecoratedSignature(
            hint=stellar_xdr.SignatureHint(s.hint),
            signature=stellar_xdr.Signature(s.signature),
        )
        for s in signatures
    ]


def _signatures_from_xdr(signatures: List[stellar_xdr.DecoratedSignature]) -> List[DecoratedSignature]:
    return [
        DecoratedSignature(hint=s.hint.signature_hint, signature=s.signature.signature)
        for s in signatures
    ]


def _time_bounds_to_xdr(tb: TimeBounds) -> stellar_xdr.TimeBounds:
    return stellar_xdr.TimeBounds(
        min_time=stellar_xdr.TimePoint(stellar_xdr.Uint64(tb.min_time)),
        max_time=stellar_xdr.TimePoint(stellar_xdr.Uint64(tb.max_time)),
    )


def _time_bounds_from_xdr(tb: stellar_xdr.TimeBounds) -> TimeBounds:
    return TimeBounds(min_time=tb.min_time.time_point.uint64, max_time=tb.max_time.time_point.uint64)


def _conditions_to_xdr(tx: Transaction) -> stellar_xdr.Preconditions:
    if tx.preconditions is not None:
        pc = tx.preconditions
        v2 = stellar_xdr.PreconditionsV2(
            time_bounds=_time_bounds_to_xdr(pc.time_bounds) if pc.time_bounds else None,
            ledger_bounds=stellar_xdr.LedgerBounds(
                min_ledger=stellar_xdr.Uint32(pc.ledger_bounds.min_ledger),
                max_ledger=stellar_xdr.Uint32(pc.ledger_bounds.max_ledger),
            ) if pc.ledger_bounds else None,
            min_seq_num=stellar_xdr.SequenceNumber(stellar_xdr.Int64(pc.min_sequence_number))
            if pc.min_sequence_number is not None else None,
            min_seq_age=stellar_xdr.Duration(stellar_xdr.Uint64(pc.min_sequence_age)),
            min_seq_ledger_gap=stellar_xdr.Uint32(pc.min_sequence_ledger_gap),
            extra_signers=[signer_key_to_xdr(s) for s in pc.extra_signers],
        )
        return stellar_xdr.Preconditions(type=stellar_xdr.PreconditionType.PRECOND_V2, v2=v2)
    if tx.time_bounds is not None:
        return stellar_xdr.Preconditions(
            type=stellar_xdr.PreconditionType.PRECOND_TIME,
            time_bounds=_time_bounds_to_xdr(tx.time_bounds),
        )
    return stellar_xdr.Preconditions(type=stellar_xdr.PreconditionType.PRECOND_NONE)


def _conditions_from_xdr(cond: stellar_xdr.Preconditions) -> Tuple[Optional[TimeBounds], Optional[Preconditions]]:
    if cond.type == stellar_xdr.PreconditionType.PRECOND_NONE:
        return None, None
    if cond.type == stellar_xdr.PreconditionType.PRECOND_TIME:
        return _time_bounds_from_xdr(cond.time_bounds), None
    v2 = cond.v2
    return None, Preconditions(
        time_bounds=_time_bounds_from_xdr(v2.time_bounds) if v2.time_bounds else None,
        ledger_bounds=LedgerBounds(
            min_ledger=v2.ledger_bounds.min_ledger.uint32,
            max_ledger=v2.ledger_bounds.max_ledger.uint32,
        ) if v2.ledger_bounds else None,
        min_sequence_number=v2.min_seq_num.sequence_number.int64 if v2.min_seq_num else None,
        min_sequence_age=v2.min_seq_age.duration.uint64,
        min_sequence_ledger_gap=v2.min_seq_ledger_gap.uint32,
        extra_signers=[signer_key_from_xdr(s) for s in v2.extra_signers],
    )


def _memo_to_xdr(memo: Memo) -> stellar_xdr.Memo:
    kind = stellar_xdr.MemoType[memo.type.value]
    if memo.type == MemoType.MEMO_TEXT:
        return stellar_xdr.Memo(type=kind, text=memo.text.encode("utf-8"))
    if memo.type == MemoType.MEMO_ID:
        return stellar_xdr.Memo(type=kind, id=stellar_xdr.Uint64(memo.id))
    if memo.type == MemoType.MEMO_HASH:
        return stellar_xdr.Memo(type=kind, hash=stellar_xdr.Hash(memo.hash))
    if memo.type == MemoType.MEMO_RETURN:
        return stellar_xdr.Memo(type=kind, ret_hash=stellar_xdr.Hash(memo.hash))
    return stellar_xdr.Memo(type=kind)


def _memo_from_xdr(memo: stellar_xdr.Memo) -> Memo:
    kind = MemoType(memo.type.name)
    if kind == MemoType.MEMO_TEXT:
        try:
            return Memo.of_text(memo.text.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise UnsupportedOperationError(f"Memo text is not valid UTF-8: {e}")
    if kind == MemoType.MEMO_ID:
        return Memo.of_id(memo.id.uint64)
    if kind == MemoType.MEMO_HASH:
        return Memo.of_hash(memo.hash.hash)
    if kind == MemoType.MEMO_RETURN:
        return Memo.of_return(memo.ret_hash.hash)
    return Memo.none()


# =============================================================================
# Shared values
# =============================================================================

def _amount_to_xdr(value: str) -> stellar_xdr.Int64:
    return stellar_xdr.Int64(amount_codec.from_text(value))


def _amount_from_xdr(value: stellar_xdr.Int64) -> str:
    return amount_codec.to_text(value.int64)


def _asset_to_xdr(asset: Asset, xdr_cls=stellar_xdr.Asset):
    """Build an Asset, ChangeTrustAsset or TrustLineAsset; the three share their credit arms."""
    if asset.is_native:
        return xdr_cls(type=stellar_xdr.AssetType.ASSET_TYPE_NATIVE)
    code = asset.code.encode("ascii")
    issuer = account_to_xdr(asset.issuer)
    if len(code) <= 4:
        return xdr_cls(
            type=stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4,
            alpha_num4=stellar_xdr.AlphaNum4(asset_code=stellar_xdr.AssetCode4(code.ljust(4, b"\x00")), issuer=issuer),
        )
    return xdr_cls(
        type=stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12,
        alpha_num12=stellar_xdr.AlphaNum12(asset_code=stellar_xdr.AssetCode12(code.ljust(12, b"\x00")), issuer=issuer),
    )


def _asset_from_xdr(value) -> Asset:
    if value.type == stellar_xdr.AssetType.ASSET_TYPE_NATIVE:
        return Asset.native()
    if value.type == stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
        arm = value.alpha_num4
        code = arm.asset_code.asset_code4
    elif value.type == stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12:
        arm = value.alpha_num12
        code = arm.asset_code.asset_code12
    else:
        raise UnsupportedOperationError("Liquidity pool share assets are not supported")
    return Asset(code=code.rstrip(b"\x00").decode("ascii"), issuer=account_from_xdr(arm.issuer))


def _asset_code_to_xdr(code: str) -> stellar_xdr.AssetCode:
    raw = code.encode("ascii")
    if len(raw) <= 4:
        return stellar_xdr.AssetCode(
            type=stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4,
            asset_code4=stellar_xdr.AssetCode4(raw.ljust(4, b"\x00")),
        )
    return stellar_xdr.AssetCode(
        type=stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12,
        asset_code12=stellar_xdr.AssetCode12(raw.ljust(12, b"\x00")),
    )


def _asset_code_from_xdr(value: stellar_xdr.AssetCode) -> str:
    if value.type == stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
        raw = value.asset_code4.asset_code4
    else:
        raw = value.asset_code12.asset_code12
    return raw.rstrip(b"\x00").decode("ascii")


def _price_to_xdr(price: Price) -> stellar_xdr.Price:
    return stellar_xdr.Price(n=stellar_xdr.Int32(price.n), d=stellar_xdr.Int32(price.d))


def _price_from_xdr(price: stellar_xdr.Price) -> Price:
    return Price(n=price.n.int32, d=price.d.int32)


def _balance_id_to_xdr(balance_id: bytes) -> stellar_xdr.ClaimableBalanceID:
    return stellar_xdr.ClaimableBalanceID(
        type=stellar_xdr.ClaimableBalanceIDType.CLAIMABLE_BALANCE_ID_TYPE_V0,
        v0=stellar_xdr.Hash(balance_id),
    )


def _balance_id_from_xdr(balance_id: stellar_xdr.ClaimableBalanceID) -> bytes:
    return balance_id.v0.hash


def _pool_id_to_xdr(pool_id: bytes) -> stellar_xdr.PoolID:
    return stellar_xdr.PoolID(stellar_xdr.Hash(pool_id))


def _pool_id_from_xdr(pool_id: stellar_xdr.PoolID) -> bytes:
    return pool_id.pool_id.hash


def _optional_uint32(value: Optional[int]) -> Optional[stellar_xdr.Uint32]:
    return stellar_xdr.Uint32(value) if value is not None else None


def _optional_uint32_value(value: Optional[stellar_xdr.Uint32]) -> Optional[int]:
    return value.uint32 if value is not None else None


def _predicate_to_xdr(predicate: ClaimPredicate) -> stellar_xdr.ClaimPredicate:
    kind = stellar_xdr.ClaimPredicateType[predicate.type.value]
    if predicate.type == ClaimPredicateType.CLAIM_PREDICATE_AND:
        return stellar_xdr.ClaimPredicate(type=kind, and_predicates=[_predicate_to_xdr(p) for p in predicate.predicates])
    if predicate.type == ClaimPredicateType.CLAIM_PREDICATE_OR:
        return stellar_xdr.ClaimPredicate(type=kind, or_predicates=[_predicate_to_xdr(p) for p in predicate.predicates])
    if predicate.type == ClaimPredicateType.CLAIM_PREDICATE_NOT:
        child = _predicate_to_xdr(predicate.not_predicate) if predicate.not_predicate else None
        return stellar_xdr.ClaimPredicate(type=kind, not_predicate=child)
    if predicate.type == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME:
        return stellar_xdr.ClaimPredicate(type=kind, abs_before=stellar_xdr.Int64(predicate.abs_before))
    if predicate.type == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME:
        return stellar_xdr.ClaimPredicate(type=kind, rel_before=stellar_xdr.Int64(predicate.rel_before))
    return stellar_xdr.ClaimPredicate(type=kind)


def _predicate_from_xdr(predicate: stellar_xdr.ClaimPredicate) -> ClaimPredicate:
    kind = ClaimPredicateType(predicate.type.name)
    if kind == ClaimPredicateType.CLAIM_PREDICATE_AND:
        return ClaimPredicate(type=kind, predicates=[_predicate_from_xdr(p) for p in predicate.and_predicates])
    if kind == ClaimPredicateType.CLAIM_PREDICATE_OR:
        return ClaimPredicate(type=kind, predicates=[_predicate_from_xdr(p) for p in predicate.or_predicates])
    if kind == ClaimPredicateType.CLAIM_PREDICATE_NOT:
        child = predicate.not_predicate
        return ClaimPredicate.not_(_predicate_from_xdr(child) if child is not None else None)
    if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME:
        return ClaimPredicate.before_absolute_time(predicate.abs_before.int64)
    if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME:
        return ClaimPredicate.before_relative_time(predicate.rel_before.int64)
    return ClaimPredicate.unconditional()


def _ledger_key_to_xdr(key: LedgerKey) -> stellar_xdr.LedgerKey:
    kind = stellar_xdr.LedgerEntryType[key.type.value]
    if key.type == LedgerKeyType.ACCOUNT:
        return stellar_xdr.LedgerKey(type=kind, account=stellar_xdr.LedgerKeyAccount(
            account_id=account_to_xdr(key.account_id)))
    if key.type == LedgerKeyType.TRUSTLINE:
        return stellar_xdr.LedgerKey(type=kind, trust_line=stellar_xdr.LedgerKeyTrustLine(
            account_id=account_to_xdr(key.account_id),
            asset=_asset_to_xdr(key.asset, stellar_xdr.TrustLineAsset)))
    if key.type == LedgerKeyType.OFFER:
        return stellar_xdr.LedgerKey(type=kind, offer=stellar_xdr.LedgerKeyOffer(
            seller_id=account_to_xdr(key.account_id), offer_id=stellar_xdr.Int64(key.offer_id)))
    if key.type == LedgerKeyType.DATA:
        return stellar_xdr.LedgerKey(type=kind, data=stellar_xdr.LedgerKeyData(
            account_id=account_to_xdr(key.account_id),
            data_name=stellar_xdr.String64(key.data_name.encode("utf-8"))))
    if key.type == LedgerKeyType.CLAIMABLE_BALANCE:
        return stellar_xdr.LedgerKey(type=kind, claimable_balance=stellar_xdr.LedgerKeyClaimableBalance(
            balance_id=_balance_id_to_xdr(key.balance_id)))
    return stellar_xdr.LedgerKey(type=kind, liquidity_pool=stellar_xdr.LedgerKeyLiquidityPool(
        liquidity_pool_id=_pool_id_to_xdr(key.liquidity_pool_id)))


def _ledger_key_from_xdr(key: stellar_xdr.LedgerKey) -> LedgerKey:
    try:
        kind = LedgerKeyType(key.type.name)
    except ValueError:
        raise UnsupportedOperationError(f"Revoking sponsorship of {key.type.name} entries is not supported")
    if kind == LedgerKeyType.ACCOUNT:
        return LedgerKey.account(account_from_xdr(key.account.account_id))
    if kind == LedgerKeyType.TRUSTLINE:
        return LedgerKey.trust_line(account_from_xdr(key.trust_line.account_id), _asset_from_xdr(key.trust_line.asset))
    if kind == LedgerKeyType.OFFER:
        return LedgerKey.offer(account_from_xdr(key.offer.seller_id), key.offer.offer_id.int64)
    if kind == LedgerKeyType.DATA:
        return LedgerKey.data(account_from_xdr(key.data.account_id), key.data.data_name.string64.decode("utf-8"))
    if kind == LedgerKeyType.CLAIMABLE_BALANCE:
        return LedgerKey.claimable_balance(_balance_id_from_xdr(key.claimable_balance.balance_id))
    return LedgerKey.liquidity_pool(_pool_id_from_xdr(key.liquidity_pool.liquidity_pool_id))


# =============================================================================
# Operations
# =============================================================================

def _create_account_to_xdr(op):
    return stellar_xdr.CreateAccountOp(
        destination=account_to_xdr(op.destination),
        starting_balance=_amount_to_xdr(op.starting_balance),
    )


def _create_account_from_xdr(body):
    return {
        "destination": account_from_xdr(body.destination),
        "starting_balance": _amount_from_xdr(body.starting_balance),
    }


def _payment_to_xdr(op):
    return stellar_xdr.PaymentOp(
        destination=muxed_to_xdr(op.destination),
        asset=_asset_to_xdr(op.asset),
        amount=_amount_to_xdr(op.amount),
    )


def _payment_from_xdr(body):
    return {
        "destination": muxed_from_xdr(body.destination),
        "asset": _asset_from_xdr(body.asset),
        "amount": _amount_from_xdr(body.amount),
    }


def _path_receive_to_xdr(op):
    return stellar_xdr.PathPaymentStrictReceiveOp(
        send_asset=_asset_to_xdr(op.send_asset),
        send_max=_amount_to_xdr(op.send_max),
        destination=muxed_to_xdr(op.destination),
        dest_asset=_asset_to_xdr(op.dest_asset),
        dest_amount=_amount_to_xdr(op.dest_amount),
        path=[_asset_to_xdr(a) for a in op.path],
    )


def _path_receive_from_xdr(body):
    return {
        "send_asset": _asset_from_xdr(body.send_asset),
        "send_max": _amount_from_xdr(body.send_max),
        "destination": muxed_from_xdr(body.destination),
        "dest_asset": _asset_from_xdr(body.dest_asset),
        "dest_amount": _amount_from_xdr(body.dest_amount),
        "path": [_asset_from_xdr(a) for a in body.path],
    }


def _path_send_to_xdr(op):
    return stellar_xdr.PathPaymentStrictSendOp(
        send_asset=_asset_to_xdr(op.send_asset),
        send_amount=_amount_to_xdr(op.send_amount),
        destination=muxed_to_xdr(op.destination),
        dest_asset=_asset_to_xdr(op.dest_asset),
        dest_min=_amount_to_xdr(op.dest_min),
        path=[_asset_to_xdr(a) for a in op.path],
    )


def _path_send_from_xdr(body):
    return {
        "send_asset": _asset_from_xdr(body.send_asset),
        "send_amount": _amount_from_xdr(body.send_amount),
        "destination": muxed_from_xdr(body.destination),
        "dest_asset": _asset_from_xdr(body.dest_asset),
        "dest_min": _amount_from_xdr(body.dest_min),
        "path": [_asset_from_xdr(a) for a in body.path],
    }


def _manage_sell_to_xdr(op):
    return stellar_xdr.ManageSellOfferOp(
        selling=_asset_to_xdr(op.selling),
        buying=_asset_to_xdr(op.buying),
        amount=_amount_to_xdr(op.amount),
        price=_price_to_xdr(op.price),
        offer_id=stellar_xdr.Int64(op.offer_id),
    )


def _manage_sell_from_xdr(body):
    return {
        "selling": _asset_from_xdr(body.selling),
        "buying": _asset_from_xdr(body.buying),
        "amount": _amount_from_xdr(body.amount),
        "price": _price_from_xdr(body.price),
        "offer_id": body.offer_id.int64,
    }


def _manage_buy_to_xdr(op):
    return stellar_xdr.ManageBuyOfferOp(
        selling=_asset_to_xdr(op.selling),
        buying=_asset_to_xdr(op.buying),
        buy_amount=_amount_to_xdr(op.buy_amount),
        price=_price_to_xdr(op.price),
        offer_id=stellar_xdr.Int64(op.offer_id),
    )


def _manage_buy_from_xdr(body):
    return {
        "selling": _asset_from_xdr(body.selling),
        "buying": _asset_from_xdr(body.buying),
        "buy_amount": _amount_from_xdr(body.buy_amount),
        "price": _price_from_xdr(body.price),
        "offer_id": body.offer_id.int64,
    }


def _passive_sell_to_xdr(op):
    return stellar_xdr.CreatePassiveSellOfferOp(
        selling=_asset_to_xdr(op.selling),
        buying=_asset_to_xdr(op.buying),
        amount=_amount_to_xdr(op.amount),
        price=_price_to_xdr(op.price),
    )


def _passive_sell_from_xdr(body):
    return {
        "selling": _asset_from_xdr(body.selling),
        "buying": _asset_from_xdr(body.buying),
        "amount": _amount_from_xdr(body.amount),
        "price": _price_from_xdr(body.price),
    }


def _set_options_to_xdr(op):
    return stellar_xdr.SetOptionsOp(
        inflation_dest=account_to_xdr(op.inflation_dest) if op.inflation_dest else None,
        clear_flags=_optional_uint32(op.clear_flags),
        set_flags=_optional_uint32(op.set_flags),
        master_weight=_optional_uint32(op.master_weight),
        low_threshold=_optional_uint32(op.low_threshold),
        med_threshold=_optional_uint32(op.med_threshold),
        high_threshold=_optional_uint32(op.high_threshold),
        home_domain=stellar_xdr.String32(op.home_domain.encode("utf-8")) if op.home_domain is not None else None,
        signer=stellar_xdr.Signer(
            key=signer_key_to_xdr(op.signer.key),
            weight=stellar_xdr.Uint32(op.signer.weight),
        ) if op.signer else None,
    )


def _set_options_from_xdr(body):
    return {
        "inflation_dest": account_from_xdr(body.inflation_dest) if body.inflation_dest else None,
        "clear_flags": _optional_uint32_value(body.clear_flags),
        "set_flags": _optional_uint32_value(body.set_flags),
        "master_weight": _optional_uint32_value(body.master_weight),
        "low_threshold": _optional_uint32_value(body.low_threshold),
        "med_threshold": _optional_uint32_value(body.med_threshold),
        "high_threshold": _optional_uint32_value(body.high_threshold),
        "home_domain": body.home_domain.string32.decode("utf-8") if body.home_domain is not None else None,
        "signer": Signer(
            key=signer_key_from_xdr(body.signer.key),
            weight=body.signer.weight.uint32,
        ) if body.signer else None,
    }


def _change_trust_to_xdr(op):
    return stellar_xdr.ChangeTrustOp(
        line=_asset_to_xdr(op.line, stellar_xdr.ChangeTrustAsset),
        limit=_amount_to_xdr(op.limit),
    )


def _change_trust_from_xdr(body):
    return {"line": _asset_from_xdr(body.line), "limit": _amount_from_xdr(body.limit)}


def _allow_trust_to_xdr(op):
    return stellar_xdr.AllowTrustOp(
        trustor=account_to_xdr(op.trustor),
        asset=_asset_code_to_xdr(op.asset_code),
        authorize=stellar_xdr.Uint32(op.authorize),
    )


def _allow_trust_from_xdr(body):
    return {
        "trustor": account_from_xdr(body.trustor),
        "asset_code": _asset_code_from_xdr(body.asset),
        "authorize": body.authorize.uint32,
    }


def _account_merge_to_xdr(op):
    return muxed_to_xdr(op.destination)


def _account_merge_from_xdr(body):
    return {"destination": muxed_from_xdr(body)}


def _manage_data_to_xdr(op):
    return stellar_xdr.ManageDataOp(
        data_name=stellar_xdr.String64(op.data_name.encode("utf-8")),
        data_value=stellar_xdr.DataValue(op.data_value) if op.data_value is not None else None,
    )


def _manage_data_from_xdr(body):
    return {
        "data_name": body.data_name.string64.decode("utf-8"),
        "data_value": body.data_value.data_value if body.data_value is not None else None,
    }


def _bump_sequence_to_xdr(op):
    return stellar_xdr.BumpSequenceOp(bump_to=stellar_xdr.SequenceNumber(stellar_xdr.Int64(op.bump_to)))


def _bump_sequence_from_xdr(body):
    return {"bump_to": body.bump_to.sequence_number.int64}


def _create_claimable_balance_to_xdr(op):
    return stellar_xdr.CreateClaimableBalanceOp(
        asset=_asset_to_xdr(op.asset),
        amount=_amount_to_xdr(op.amount),
        claimants=[
            stellar_xdr.Claimant(
                type=stellar_xdr.ClaimantType.CLAIMANT_TYPE_V0,
                v0=stellar_xdr.ClaimantV0(
                    destination=account_to_xdr(c.destination),
                    predicate=_predicate_to_xdr(c.predicate),
                ),
            )
            for c in op.claimants
        ],
    )


def _create_claimable_balance_from_xdr(body):
    return {
        "asset": _asset_from_xdr(body.asset),
        "amount": _amount_from_xdr(body.amount),
        "claimants": [
            Claimant(destination=account_from_xdr(c.v0.destination), predicate=_predicate_from_xdr(c.v0.predicate))
            for c in body.claimants
        ],
    }


def _balance_op_to_xdr(xdr_cls):
    def convert(op):
        return xdr_cls(balance_id=_balance_id_to_xdr(op.balance_id))
    return convert


def _balance_op_from_xdr(body):
    return {"balance_id": _balance_id_from_xdr(body.balance_id)}


def _begin_sponsoring_to_xdr(op):
    return stellar_xdr.BeginSponsoringFutureReservesOp(sponsored_id=account_to_xdr(op.sponsored_id))


def _begin_sponsoring_from_xdr(body):
    return {"sponsored_id": account_from_xdr(body.sponsored_id)}


def _revoke_sponsorship_to_xdr(op):
    kind = stellar_xdr.RevokeSponsorshipType[op.target.value]
    if op.ledger_key is not None:
        return stellar_xdr.RevokeSponsorshipOp(type=kind, ledger_key=_ledger_key_to_xdr(op.ledger_key))
    return stellar_xdr.RevokeSponsorshipOp(type=kind, signer=stellar_xdr.RevokeSponsorshipOpSigner(
        account_id=account_to_xdr(op.signer.account_id),
        signer_key=signer_key_to_xdr(op.signer.signer_key),
    ))


def _revoke_sponsorship_from_xdr(body):
    if body.type == stellar_xdr.RevokeSponsorshipType.REVOKE_SPONSORSHIP_LEDGER_ENTRY:
        return {"ledger_key": _ledger_key_from_xdr(body.ledger_key)}
    return {"signer": RevokeSponsorshipSigner(
        account_id=account_from_xdr(body.signer.account_id),
        signer_key=signer_key_from_xdr(body.signer.signer_key),
    )}


def _clawback_to_xdr(op):
    return stellar_xdr.ClawbackOp(
        asset=_asset_to_xdr(op.asset),
        from_=muxed_to_xdr(op.from_account),
        amount=_amount_to_xdr(op.amount),
    )


def _clawback_from_xdr(body):
    return {
        "asset": _asset_from_xdr(body.asset),
        "from_account": muxed_from_xdr(body.from_),
        "amount": _amount_from_xdr(body.amount),
    }


def _set_trust_line_flags_to_xdr(op):
    return stellar_xdr.SetTrustLineFlagsOp(
        trustor=account_to_xdr(op.trustor),
        asset=_asset_to_xdr(op.asset),
        clear_flags=stellar_xdr.Uint32(op.clear_flags),
        set_flags=stellar_xdr.Uint32(op.set_flags),
    )


def _set_trust_line_flags_from_xdr(body):
    return {
        "trustor": account_from_xdr(body.trustor),
        "asset": _asset_from_xdr(body.asset),
        "clear_flags": body.clear_flags.uint32,
        "set_flags": body.set_flags.uint32,
    }


def _pool_deposit_to_xdr(op):
    return stellar_xdr.LiquidityPoolDepositOp(
        liquidity_pool_id=_pool_id_to_xdr(op.liquidity_pool_id),
        max_amount_a=_amount_to_xdr(op.max_amount_a),
        max_amount_b=_amount_to_xdr(op.max_amount_b),
        min_price=_price_to_xdr(op.min_price),
        max_price=_price_to_xdr(op.max_price),
    )


def _pool_deposit_from_xdr(body):
    return {
        "liquidity_pool_id": _pool_id_from_xdr(body.liquidity_pool_id),
        "max_amount_a": _amount_from_xdr(body.max_amount_a),
        "max_amount_b": _amount_from_xdr(body.max_amount_b),
        "min_price": _price_from_xdr(body.min_price),
        "max_price": _price_from_xdr(body.max_price),
    }


def _pool_withdraw_to_xdr(op):
    return stellar_xdr.LiquidityPoolWithdrawOp(
        liquidity_pool_id=_pool_id_to_xdr(op.liquidity_pool_id),
        amount=_amount_to_xdr(op.amount),
        min_amount_a=_amount_to_xdr(op.min_amount_a),
        min_amount_b=_amount_to_xdr(op.min_amount_b),
    )


def _pool_withdraw_from_xdr(body):
    return {
        "liquidity_pool_id": _pool_id_from_xdr(body.liquidity_pool_id),
        "amount": _amount_from_xdr(body.amount),
        "min_amount_a": _amount_from_xdr(body.min_amount_a),
        "min_amount_b": _amount_from_xdr(body.min_amount_b),
    }


# Operation type -> (OperationBody arm, model -> XDR, XDR -> model kwargs); arm None for bodiless operations
XDR_OPERATIONS: Dict[OperationType, Tuple[Optional[str], Optional[Callable[[Any], Any]], Optional[Callable[[Any], dict]]]] = {
    OperationType.CREATE_ACCOUNT: ("create_account_op", _create_account_to_xdr, _create_account_from_xdr),
    OperationType.PAYMENT: ("payment_op", _payment_to_xdr, _payment_from_xdr),
    OperationType.PATH_PAYMENT_STRICT_RECEIVE: ("path_payment_strict_receive_op", _path_receive_to_xdr, _path_receive_from_xdr),
    OperationType.MANAGE_SELL_OFFER: ("manage_sell_offer_op", _manage_sell_to_xdr, _manage_sell_from_xdr),
    OperationType.CREATE_PASSIVE_SELL_OFFER: ("create_passive_sell_offer_op", _passive_sell_to_xdr, _passive_sell_from_xdr),
    OperationType.SET_OPTIONS: ("set_options_op", _set_options_to_xdr, _set_options_from_xdr),
    OperationType.CHANGE_TRUST: ("change_trust_op", _change_trust_to_xdr, _change_trust_from_xdr),
    OperationType.ALLOW_TRUST: ("allow_trust_op", _allow_trust_to_xdr, _allow_trust_from_xdr),
    OperationType.ACCOUNT_MERGE: ("destination", _account_merge_to_xdr, _account_merge_from_xdr),
    OperationType.INFLATION: (None, None, None),
    OperationType.MANAGE_DATA: ("manage_data_op", _manage_data_to_xdr, _manage_data_from_xdr),
    OperationType.BUMP_SEQUENCE: ("bump_sequence_op", _bump_sequence_to_xdr, _bump_sequence_from_xdr),
    OperationType.MANAGE_BUY_OFFER: ("manage_buy_offer_op", _manage_buy_to_xdr, _manage_buy_from_xdr),
    OperationType.PATH_PAYMENT_STRICT_SEND: ("path_payment_strict_send_op", _path_send_to_xdr, _path_send_from_xdr),
    OperationType.CREATE_CLAIMABLE_BALANCE: (
        "create_claimable_balance_op", _create_claimable_balance_to_xdr, _create_claimable_balance_from_xdr),
    OperationType.CLAIM_CLAIMABLE_BALANCE: (
        "claim_claimable_balance_op", _balance_op_to_xdr(stellar_xdr.ClaimClaimableBalanceOp), _balance_op_from_xdr),
    OperationType.BEGIN_SPONSORING_FUTURE_RESERVES: (
        "begin_sponsoring_future_reserves_op", _begin_sponsoring_to_xdr, _begin_sponsoring_from_xdr),
    OperationType.END_SPONSORING_FUTURE_RESERVES: (None, None, None),
    OperationType.REVOKE_SPONSORSHIP: ("revoke_sponsorship_op", _revoke_sponsorship_to_xdr, _revoke_sponsorship_from_xdr),
    OperationType.CLAWBACK: ("clawback_op", _clawback_to_xdr, _clawback_from_xdr),
    OperationType.CLAWBACK_CLAIMABLE_BALANCE: (
        "clawback_claimable_balance_op", _balance_op_to_xdr(stellar_xdr.ClawbackClaimableBalanceOp), _balance_op_from_xdr),
    OperationType.SET_TRUST_LINE_FLAGS: (
        "set_trust_line_flags_op", _set_trust_line_flags_to_xdr, _set_trust_line_flags_from_xdr),
    OperationType.LIQUIDITY_POOL_DEPOSIT: ("liquidity_pool_deposit_op", _pool_deposit_to_xdr, _pool_deposit_from_xdr),
    OperationType.LIQUIDITY_POOL_WITHDRAW: ("liquidity_pool_withdraw_op", _pool_withdraw_to_xdr, _pool_withdraw_from_xdr),
}

_missing = [t.value for t in OperationType if t not in XDR_OPERATIONS]
if _missing:
    raise RuntimeError(f"XDR operation table is missing {_missing}")


def _operation_to_xdr(op: Operation) -> stellar_xdr.Operation:
    arm, to_xdr, _ = XDR_OPERATIONS[op.type]
    body_args = {arm: to_xdr(op)} if arm is not None else {}
    return stellar_xdr.Operation(
        source_account=muxed_to_xdr(op.source_account) if op.source_account else None,
        body=stellar_xdr.OperationBody(type=stellar_xdr.OperationType[op.type.value], **body_args),
    )


def _operation_from_xdr(op: stellar_xdr.Operation) -> Operation:
    tag = op.body.type.name
    if tag in SOROBAN_OPERATION_TAGS:
        raise UnsupportedOperationError(f"{tag} operations are not supported")
    op_type = OperationType(tag)
    arm, _, from_xdr = XDR_OPERATIONS[op_type]
    values = from_xdr(getattr(op.body, arm)) if arm is not None else {}
    source = muxed_from_xdr(op.source_account) if op.source_account else None
    return OPERATION_CODECS[op_type].model(source_account=source, **values)


__all__ = [
    "decode_envelope",
    "encode_envelope",
    "encode_envelope_base64",
    "envelope_from_xdr",
    "envelope_to_xdr",
    "XDR_OPERATIONS",
]
