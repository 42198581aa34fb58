"""
Binary (XDR) adapter tests.
"""

import base64
from types import SimpleNamespace

import pytest
from stellar_sdk import xdr as stellar_xdr

from stellar_txrep import binary
from stellar_txrep.enums import OperationType
from stellar_txrep.models import ClaimClaimableBalanceOp, FeeBumpTransaction, Memo, TimeBounds, Transaction
from stellar_txrep.runtime.errors import BinaryEncodingError, UnsupportedOperationError

from helpers.factories import (
    BALANCE_ID,
    CLAIM_BALANCE_XDR,
    SOURCE,
    mk_all_operations,
    mk_fee_bump,
    mk_transaction,
)


class TestDecodeVector:
    """Test decoding a known envelope."""

    def test_decode_base64(self):
        tx = binary.decode_envelope(CLAIM_BALANCE_XDR)
        assert isinstance(tx, Transaction)
        assert tx.source_account == SOURCE
        assert tx.fee == 100
        assert tx.sequence == 2916609211498497
        assert tx.time_bounds == TimeBounds(min_time=0, max_time=0)
        assert tx.memo == Memo.none()
        assert len(tx.operations) == 1
        op = tx.operations[0]
        assert isinstance(op, ClaimClaimableBalanceOp)
        assert op.balance_id.hex() == BALANCE_ID
        assert len(tx.signatures) == 1
        assert tx.signatures[0].hint.hex() == "ecd197ef"

    def test_decode_bytes(self):
        raw = base64.b64decode(CLAIM_BALANCE_XDR)
        assert binary.decode_envelope(raw) == binary.decode_envelope(CLAIM_BALANCE_XDR)

    def test_reencode_is_byte_exact(self):
        tx = binary.decode_envelope(CLAIM_BALANCE_XDR)
        assert binary.encode_envelope_base64(tx) == CLAIM_BALANCE_XDR
        assert binary.encode_envelope(tx) == base64.b64decode(CLAIM_BALANCE_XDR)

    def test_surrounding_whitespace(self):
        assert isinstance(binary.decode_envelope(f"  {CLAIM_BALANCE_XDR}\n"), Transaction)


class TestModelRoundTrip:
    """Models survive model -> XDR -> model."""

    def test_all_operations(self):
        tx = mk_transaction(operations=mk_all_operations())
        assert binary.decode_envelope(binary.encode_envelope(tx)) == tx

    def test_fee_bump(self):
        fee_bump = mk_fee_bump()
        decoded = binary.decode_envelope(binary.encode_envelope_base64(fee_bump))
        assert isinstance(decoded, FeeBumpTransaction)
        assert decoded == fee_bump

    @pytest.mark.parametrize("memo", [
        Memo.of_text("hello"),
        Memo.of_id(42),
        Memo.of_hash("ab" * 32),
        Memo.of_return("cd" * 32),
    ], ids=lambda m: m.type.value)
    def test_memos(self, memo):
        tx = mk_transaction(memo=memo)
        assert binary.decode_envelope(binary.encode_envelope(tx)).memo == memo

    def test_envelope_object(self):
        tx = mk_transaction()
        xdr_env = binary.envelope_to_xdr(tx)
        assert xdr_env.type == stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX
        assert binary.envelope_from_xdr(xdr_env) == tx

    def test_credit_codes_padded(self):
        """Short codes use the 4-byte arm, long codes the 12-byte arm."""
        ops = mk_all_operations()
        xdr_env = binary.envelope_to_xdr(mk_transaction(operations=ops))
        path_op = xdr_env.v1.tx.operations[2].body.path_payment_strict_receive_op
        assert path_op.path[0].type == stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12
        assert path_op.path[1].type == stellar_xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4
        assert path_op.path[1].alpha_num4.asset_code.asset_code4 == b"EUR\x00"


class TestV0Envelope:
    """V0 envelopes are read as plain transactions."""

    def test_v0_upgrade(self):
        tx = mk_transaction(signatures=[])
        v1 = binary.envelope_to_xdr(tx).v1.tx
        raw_key = stellar_xdr.Uint256(
            binary.envelope_to_xdr(tx).v1.tx.source_account.ed25519.uint256
        )
        v0 = stellar_xdr.TransactionEnvelope(
            type=stellar_xdr.EnvelopeType.ENVELOPE_TYPE_TX_V0,
            v0=stellar_xdr.TransactionV0Envelope(
                tx=stellar_xdr.TransactionV0(
                    source_account_ed25519=raw_key,
                    fee=v1.fee,
                    seq_num=v1.seq_num,
                    time_bounds=None,
                    memo=v1.memo,
                    operations=v1.operations,
                    ext=stellar_xdr.TransactionV0Ext(v=0),
                ),
                signatures=[],
            ),
        )
        decoded = binary.decode_envelope(v0.to_xdr())
        assert decoded == tx


class TestBinaryErrors:
    """Test malformed and unrepresentable input."""

    def test_truncated_bytes(self):
        with pytest.raises(BinaryEncodingError):
            binary.decode_envelope(b"\x00\x00\x00\x02\x00")

    def test_not_base64(self):
        with pytest.raises(BinaryEncodingError):
            binary.decode_envelope("this is not xdr!")

    def test_soroban_operation(self):
        op = SimpleNamespace(body=SimpleNamespace(type=stellar_xdr.OperationType.INVOKE_HOST_FUNCTION))
        with pytest.raises(UnsupportedOperationError, match="INVOKE_HOST_FUNCTION"):
            binary._operation_from_xdr(op)

    def test_pool_share_asset(self):
        asset = SimpleNamespace(type=stellar_xdr.AssetType.ASSET_TYPE_POOL_SHARE)
        with pytest.raises(UnsupportedOperationError, match="pool share"):
            binary._asset_from_xdr(asset)

    def test_memo_text_not_utf8(self):
        memo = stellar_xdr.Memo(type=stellar_xdr.MemoType.MEMO_TEXT, text=b"\xff\xfe")
        with pytest.raises(UnsupportedOperationError, match="UTF-8"):
            binary._memo_from_xdr(memo)

    def test_table_covers_every_operation(self):
        assert set(binary.XDR_OPERATIONS) == set(OperationType)
