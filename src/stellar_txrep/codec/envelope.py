"""
Envelope assembler.

Walks a plain or fee-bump envelope in a fixed order to produce a
:class:`FieldMap`, and reads one back in the same order. Key prefixes:

- ``tx.`` for a plain transaction
- ``feeBump.tx.`` for the fee-bump's own fields
- ``feeBump.tx.innerTx.tx.`` for the transaction wrapped by a fee-bump

Signature blocks sit beside the transaction they sign: ``tx.signatures``
for a plain envelope, ``feeBump.tx.innerTx.signatures`` for the inner
transaction and ``feeBump.signatures`` for the fee-bump itself.

Decoding is fail-fast: the first missing or invalid key raises.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from .fieldmap import FieldMap
from .fields import (
    ArrayField,
    FieldRule,
    HexField,
    OptionalField,
    SEQUENCE,
    SIGNER_KEY,
    StructField,
    UINT32,
    UINT64,
    build_model,
    decode_count,
)
from .operations import decode_operation, encode_operation
from .scalars import (
    INT64_MAX,
    UINT32_MAX,
    format_bool,
    parse_bool,
    parse_enum,
    parse_hex,
    parse_int,
    parse_quoted,
    quote,
    round_half_up,
)
from ..enums import EnvelopeType, MemoType, PreconditionType
from ..models import (
    DecoratedSignature,
    Envelope,
    FeeBumpTransaction,
    LedgerBounds,
    Memo,
    Preconditions,
    TimeBounds,
    Transaction,
)
from ..runtime import address
from ..runtime.errors import BoundsExceededError, InvalidFieldError
from ..runtime.options import DEFAULT_OPTIONS, TxRepOptions

logger = logging.getLogger(__name__)

TX_PREFIX = "tx."
FEE_BUMP_PREFIX = "feeBump.tx."
INNER_TX_PREFIX = "feeBump.tx.innerTx.tx."
INNER_SIGNATURES_PREFIX = "feeBump.tx.innerTx."
FEE_BUMP_SIGNATURES_PREFIX = "feeBump."

TIME_BOUNDS = StructField(TimeBounds, (
    FieldRule("minTime", "min_time", UINT64),
    FieldRule("maxTime", "max_time", UINT64),
))

LEDGER_BOUNDS = StructField(LedgerBounds, (
    FieldRule("minLedger", "min_ledger", UINT32),
    FieldRule("maxLedger", "max_ledger", UINT32),
))

PRECONDITIONS_V2 = StructField(Preconditions, (
    FieldRule("timeBounds", "time_bounds", OptionalField(TIME_BOUNDS)),
    FieldRule("ledgerBounds", "ledger_bounds", OptionalField(LEDGER_BOUNDS)),
    FieldRule("minSeqNum", "min_sequence_number", OptionalField(SEQUENCE)),
    FieldRule("minSeqAge", "min_sequence_age", UINT64),
    FieldRule("minSeqLedgerGap", "min_sequence_ledger_gap", UINT32),
    FieldRule("extraSigners", "extra_signers", ArrayField(SIGNER_KEY, "max_extra_signers")),
))

SIGNATURE = StructField(DecoratedSignature, (
    FieldRule("hint", "hint", HexField(length=4)),
    FieldRule("signature", "signature", HexField(max_length=64)),
))


# =============================================================================
# Encoding
# =============================================================================

def encode_envelope(envelope: Envelope) -> FieldMap:
    """
    Build the field map for an envelope.

    Args:
        envelope: Plain transaction or fee-bump envelope

    Returns:
        Ordered field map
    """
    fields = FieldMap()
    if isinstance(envelope, FeeBumpTransaction):
        logger.debug("Encoding fee-bump envelope with %d inner operations", len(envelope.inner.operations))
        fields.put("type", EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP.value)
        fields.put(f"{FEE_BUMP_PREFIX}feeSource", envelope.fee_source)
        fields.put(f"{FEE_BUMP_PREFIX}fee", str(envelope.fee))
        fields.put(f"{FEE_BUMP_PREFIX}innerTx.type", EnvelopeType.ENVELOPE_TYPE_TX.value)
        _encode_transaction(fields, INNER_TX_PREFIX, envelope.inner)
        _encode_signatures(fields, INNER_SIGNATURES_PREFIX, envelope.inner.signatures)
        fields.put(f"{FEE_BUMP_PREFIX}ext.v", "0")
        _encode_signatures(fields, FEE_BUMP_SIGNATURES_PREFIX, envelope.signatures)
    else:
        logger.debug("Encoding envelope with %d operations", len(envelope.operations))
        fields.put("type", EnvelopeType.ENVELOPE_TYPE_TX.value)
        _encode_transaction(fields, TX_PREFIX, envelope)
        _encode_signatures(fields, TX_PREFIX, envelope.signatures)
    return fields


def _encode_transaction(fields: FieldMap, prefix: str, tx: Transaction) -> None:
    fields.put(f"{prefix}sourceAccount", tx.source_account)
    fields.put(f"{prefix}fee", str(tx.fee))
    fields.put(f"{prefix}seqNum", str(tx.sequence))
    _encode_conditions(fields, prefix, tx)
    _encode_memo(fields, prefix, tx.memo)
    fields.put(f"{prefix}operations.len", str(len(tx.operations)))
    for i, op in enumerate(tx.operations):
        encode_operation(fields, f"{prefix}operations[{i}]", op)
    fields.put(f"{prefix}ext.v", "0")


def _encode_conditions(fields: FieldMap, prefix: str, tx: Transaction) -> None:
    if tx.preconditions is not None:
        fields.put(f"{prefix}cond.type", PreconditionType.PRECOND_V2.value)
        PRECONDITIONS_V2.encode(fields, f"{prefix}cond.v2", tx.preconditions)
        return
    fields.put(f"{prefix}timeBounds._present", format_bool(tx.time_bounds is not None))
    if tx.time_bounds is not None:
        TIME_BOUNDS.encode(fields, f"{prefix}timeBounds", tx.time_bounds)


def _encode_memo(fields: FieldMap, prefix: str, memo: Memo) -> None:
    fields.put(f"{prefix}memo.type", memo.type.value)
    if memo.type == MemoType.MEMO_TEXT:
        fields.put(f"{prefix}memo.text", quote(memo.text))
    elif memo.type == MemoType.MEMO_ID:
        fields.put(f"{prefix}memo.id", str(memo.id))
    elif memo.type == MemoType.MEMO_HASH:
        fields.put(f"{prefix}memo.hash", memo.hash.hex())
    elif memo.type == MemoType.MEMO_RETURN:
        fields.put(f"{prefix}memo.retHash", memo.hash.hex())


def _encode_signatures(fields: FieldMap, prefix: str, signatures: List[DecoratedSignature]) -> None:
    fields.put(f"{prefix}signatures.len", str(len(signatures)))
    for i, signature in enumerate(signatures):
        SIGNATURE.encode(fields, f"{prefix}signatures[{i}]", signature)


def to_text(envelope: Envelope) -> str:
    """Render an envelope as TxRep text."""
    return encode_envelope(envelope).to_text()


# =============================================================================
# Decoding
# =============================================================================

def decode_envelope(fields: FieldMap, options: TxRepOptions = DEFAULT_OPTIONS) -> Envelope:
    """
    Build an envelope from a field map.

    Args:
        fields: Parsed field map
        options: Decoding caps and policies

    Returns:
        Transaction for ``ENVELOPE_TYPE_TX``, FeeBumpTransaction for
        ``ENVELOPE_TYPE_TX_FEE_BUMP``

    Raises:
        MissingFieldError: If a required key is absent
        InvalidFieldError: If a value fails validation
        BoundsExceededError: If a count or derived fee is over its cap
    """
    kind = parse_enum(EnvelopeType, fields.require("type"), "type")
    if kind == EnvelopeType.ENVELOPE_TYPE_TX:
        tx, _ = _decode_transaction(fields, TX_PREFIX, TX_PREFIX, options, legacy_signature_prefix="")
        return tx

    fee_source = address.parse_muxed_account(
        fields.require(f"{FEE_BUMP_PREFIX}feeSource"), f"{FEE_BUMP_PREFIX}feeSource")
    fee_key = f"{FEE_BUMP_PREFIX}fee"
    fee = parse_int(fields.require(fee_key), fee_key, 0, INT64_MAX)
    inner_type_key = f"{FEE_BUMP_PREFIX}innerTx.type"
    inner_type = fields.require(inner_type_key)
    if inner_type != EnvelopeType.ENVELOPE_TYPE_TX.value:
        raise InvalidFieldError(inner_type_key, f"inner transaction must be ENVELOPE_TYPE_TX, got {inner_type!r}")

    inner, declared = _decode_transaction(fields, INNER_TX_PREFIX, INNER_SIGNATURES_PREFIX, options)
    _check_ext(fields, f"{FEE_BUMP_PREFIX}ext.v")
    signatures = _decode_signatures(fields, FEE_BUMP_SIGNATURES_PREFIX, options)

    if options.derive_fees:
        # The outer fee also pays for the fee-bump itself
        fee = _derive_fee(fee, declared + 1, len(inner.operations) + 1, fee_key, INT64_MAX)

    return build_model(FeeBumpTransaction, {
        "fee_source": fee_source,
        "fee": fee,
        "inner": inner,
        "signatures": signatures,
    }, "feeBump")


def _decode_transaction(fields: FieldMap, prefix: str, signature_prefix: str, options: TxRepOptions,
                        legacy_signature_prefix: Optional[str] = None) -> Tuple[Transaction, int]:
    """Decode one transaction; also returns the declared ``operations.len``."""
    source = address.parse_muxed_account(fields.require(f"{prefix}sourceAccount"), f"{prefix}sourceAccount")
    fee = parse_int(fields.require(f"{prefix}fee"), f"{prefix}fee", 0, UINT32_MAX)
    sequence = parse_int(fields.require(f"{prefix}seqNum"), f"{prefix}seqNum", 0, INT64_MAX)
    time_bounds, preconditions = _decode_conditions(fields, prefix, options)
    memo = _decode_memo(fields, prefix)

    count = decode_count(fields, f"{prefix}operations.len", options.max_operations)
    operations = []
    for i in range(count):
        op = decode_operation(fields, f"{prefix}operations[{i}]", options)
        if op is not None:
            operations.append(op)

    _check_ext(fields, f"{prefix}ext.v")
    signatures = _decode_signatures(fields, signature_prefix, options, legacy_signature_prefix)

    if options.derive_fees and count:
        fee = _derive_fee(fee, count, len(operations), f"{prefix}fee", UINT32_MAX)

    tx = build_model(Transaction, {
        "source_account": source,
        "fee": fee,
        "sequence": sequence,
        "time_bounds": time_bounds,
        "preconditions": preconditions,
        "memo": memo,
        "operations": operations,
        "signatures": signatures,
    }, prefix.rstrip("."))
    return tx, count


def _derive_fee(fee: int, declared: int, decoded: int, key: str, limit: int) -> int:
    """
    Recompute a fee from its per-slot share.

    The share is taken over the declared slot count; the result covers the
    slots that actually decoded, so skipped unknown operations do not pay.
    """
    derived = round_half_up(fee, declared) * decoded
    if derived > limit:
        raise BoundsExceededError(key, limit, derived)
    if derived != fee:
        logger.debug("Fee %d adjusted to %d for %d of %d slots", fee, derived, decoded, declared)
    return derived


def _decode_conditions(fields: FieldMap, prefix: str, options: TxRepOptions):
    cond_key = f"{prefix}cond.type"
    if cond_key not in fields:
        tb_key = f"{prefix}timeBounds"
        return OptionalField(TIME_BOUNDS).decode(fields, tb_key, options), None

    kind = parse_enum(PreconditionType, fields.require(cond_key), cond_key)
    if kind == PreconditionType.PRECOND_NONE:
        return None, None
    if kind == PreconditionType.PRECOND_TIME:
        return TIME_BOUNDS.decode(fields, f"{prefix}cond.timeBounds", options), None
    return None, PRECONDITIONS_V2.decode(fields, f"{prefix}cond.v2", options)


def _decode_memo(fields: FieldMap, prefix: str) -> Memo:
    type_key = f"{prefix}memo.type"
    kind = parse_enum(MemoType, fields.require(type_key), type_key)
    if kind == MemoType.MEMO_NONE:
        return Memo.none()
    if kind == MemoType.MEMO_TEXT:
        key = f"{prefix}memo.text"
        text = parse_quoted(fields.require_raw(key), key)
        if len(text.encode("utf-8")) > 28:
            raise InvalidFieldError(key, "memo text is longer than 28 bytes")
        return Memo.of_text(text)
    if kind == MemoType.MEMO_ID:
        key = f"{prefix}memo.id"
        return Memo.of_id(parse_int(fields.require(key), key, 0, 2 ** 64 - 1))
    if kind == MemoType.MEMO_HASH:
        key = f"{prefix}memo.hash"
        return Memo.of_hash(parse_hex(fields.require(key), key, length=32))
    key = f"{prefix}memo.retHash"
    return Memo.of_return(parse_hex(fields.require(key), key, length=32))


def _check_ext(fields: FieldMap, key: str) -> None:
    value = fields.get(key)
    if value is not None and value != "0":
        raise InvalidFieldError(key, f"unsupported extension version {value!r}")


def _decode_signatures(fields: FieldMap, prefix: str, options: TxRepOptions,
                       legacy_prefix: Optional[str] = None) -> List[DecoratedSignature]:
    len_key = f"{prefix}signatures.len"
    if len_key not in fields and legacy_prefix is not None and f"{legacy_prefix}signatures.len" in fields:
        logger.warning("Reading signatures from unprefixed %ssignatures block", legacy_prefix)
        prefix = legacy_prefix
        len_key = f"{prefix}signatures.len"
    if len_key not in fields:
        return []
    return ArrayField(SIGNATURE, "max_signatures").decode(fields, f"{prefix}signatures", options)


def from_text(text: str, options: TxRepOptions = DEFAULT_OPTIONS) -> Envelope:
    """Parse TxRep text into an envelope."""
    return decode_envelope(FieldMap.from_text(text), options)


__all__ = [
    "TX_PREFIX",
    "FEE_BUMP_PREFIX",
    "INNER_TX_PREFIX",
    "encode_envelope",
    "decode_envelope",
    "to_text",
    "from_text",
]
