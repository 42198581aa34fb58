"""
Domain model validation tests.
"""

import pytest
from pydantic import ValidationError

from stellar_txrep.enums import EnvelopeType, MemoType, RevokeSponsorshipType
from stellar_txrep.models import (
    Asset,
    ClaimPredicate,
    ClawbackOp,
    CreateClaimableBalanceOp,
    DecoratedSignature,
    LedgerKey,
    ManageDataOp,
    Memo,
    PaymentOp,
    Preconditions,
    Price,
    RevokeSponsorshipOp,
    TimeBounds,
    Transaction,
)

from helpers.factories import ACCOUNT_A, ACCOUNT_B, ACCOUNT_C, BALANCE_ID, PRE_AUTH_TX, SOURCE, mk_payment


class TestAsset:
    def test_native(self):
        assert Asset.native().is_native
        assert Asset.parse("XLM") == Asset.native()
        assert Asset.parse("native") == Asset.native()

    def test_credit(self):
        asset = Asset.parse(f"USD:{ACCOUNT_C}")
        assert asset.code == "USD"
        assert asset.issuer == ACCOUNT_C
        assert asset.to_text() == f"USD:{ACCOUNT_C}"

    @pytest.mark.parametrize("text", ["USD", f"TOOLONGASSETCODE:{ACCOUNT_C}", f"US-D:{ACCOUNT_C}", "USD:GBAD"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            Asset.parse(text)

    def test_credit_requires_issuer(self):
        with pytest.raises(ValidationError, match="requires an issuer"):
            Asset(code="USD")


class TestScalars:
    def test_amount_normalized(self):
        assert mk_payment("100.5").amount == "100.5000000"

    def test_amount_over_maximum(self):
        with pytest.raises(ValidationError, match="exceeds maximum"):
            mk_payment("922337203686")

    def test_price_denominator(self):
        with pytest.raises(ValidationError, match="denominator"):
            Price(n=1, d=0)

    def test_hash_length(self):
        with pytest.raises(ValidationError, match="expected 32 bytes"):
            Memo.of_hash("abcd")

    def test_signature_hint_length(self):
        with pytest.raises(ValidationError, match="4 bytes"):
            DecoratedSignature(hint="aabb", signature="")

    def test_data_value_length(self):
        with pytest.raises(ValidationError, match="longer than 64 bytes"):
            ManageDataOp(data_name="x", data_value="00" * 65)


class TestMemo:
    def test_kinds(self):
        assert Memo.none().type == MemoType.MEMO_NONE
        assert Memo.of_id(5).id == 5
        assert Memo.of_return("ab" * 32).hash == bytes.fromhex("ab" * 32)

    def test_text_byte_limit(self):
        """The 28-byte limit counts UTF-8 bytes, not characters."""
        Memo.of_text("x" * 28)
        with pytest.raises(ValidationError, match="28 bytes"):
            Memo.of_text("ö" * 15)

    def test_mismatched_value(self):
        with pytest.raises(ValidationError, match="does not take"):
            Memo(type=MemoType.MEMO_ID, id=1, text="x")


class TestPredicates:
    def test_and_arity(self):
        with pytest.raises(ValidationError, match="exactly 2"):
            ClaimPredicate(type="CLAIM_PREDICATE_AND", predicates=[ClaimPredicate.unconditional()])

    def test_time_required(self):
        with pytest.raises(ValidationError, match="abs_before"):
            ClaimPredicate(type="CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME")


class TestOperations:
    def test_clawback_alias(self):
        op = ClawbackOp.model_validate({"asset": Asset.native(), "from": ACCOUNT_A, "amount": "1"})
        assert op.from_account == ACCOUNT_A

    def test_claimant_bounds(self):
        with pytest.raises(ValidationError):
            CreateClaimableBalanceOp(asset=Asset.native(), amount="1", claimants=[])

    def test_revoke_requires_one_target(self):
        with pytest.raises(ValidationError, match="exactly one"):
            RevokeSponsorshipOp()

    def test_revoke_target(self):
        op = RevokeSponsorshipOp(ledger_key=LedgerKey.claimable_balance(BALANCE_ID))
        assert op.target == RevokeSponsorshipType.REVOKE_SPONSORSHIP_LEDGER_ENTRY

    def test_ledger_key_fields(self):
        with pytest.raises(ValidationError, match="requires account_id"):
            LedgerKey(type="ACCOUNT")
        with pytest.raises(ValidationError, match="does not take"):
            LedgerKey(type="ACCOUNT", account_id=ACCOUNT_A, offer_id=1)

    def test_muxed_destination(self):
        with pytest.raises(ValidationError, match="not a valid address"):
            PaymentOp(destination="GBAD", asset=Asset.native(), amount="1")


class TestTransaction:
    def test_discriminated_operations(self):
        tx = Transaction.model_validate({
            "source_account": SOURCE,
            "sequence": 1,
            "operations": [{"type": "PAYMENT", "destination": ACCOUNT_B, "asset": {"code": "XLM"}, "amount": "5"}],
        })
        assert isinstance(tx.operations[0], PaymentOp)
        assert tx.envelope_type == EnvelopeType.ENVELOPE_TYPE_TX

    def test_operation_cap(self):
        with pytest.raises(ValidationError):
            Transaction(source_account=SOURCE, sequence=1, operations=[mk_payment()] * 101)

    def test_conditions_exclusive(self):
        with pytest.raises(ValidationError, match="preconditions"):
            Transaction(
                source_account=SOURCE, sequence=1,
                time_bounds=TimeBounds(), preconditions=Preconditions(extra_signers=[PRE_AUTH_TX]),
            )
