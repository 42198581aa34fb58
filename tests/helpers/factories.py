"""
Test factories for creating test data consistently.

Provides well-known addresses and builders for operations, transactions,
fee-bump envelopes and signatures.
"""

from __future__ import annotations
from typing import List, Optional

from stellar_txrep.models import (
    AccountMergeOp,
    AllowTrustOp,
    Asset,
    BeginSponsoringFutureReservesOp,
    BumpSequenceOp,
    ChangeTrustOp,
    ClaimClaimableBalanceOp,
    ClaimPredicate,
    Claimant,
    ClawbackClaimableBalanceOp,
    ClawbackOp,
    CreateAccountOp,
    CreateClaimableBalanceOp,
    CreatePassiveSellOfferOp,
    DecoratedSignature,
    EndSponsoringFutureReservesOp,
    FeeBumpTransaction,
    InflationOp,
    LedgerKey,
    LiquidityPoolDepositOp,
    LiquidityPoolWithdrawOp,
    ManageBuyOfferOp,
    ManageDataOp,
    ManageSellOfferOp,
    Memo,
    PathPaymentStrictReceiveOp,
    PathPaymentStrictSendOp,
    PaymentOp,
    Price,
    RevokeSponsorshipOp,
    RevokeSponsorshipSigner,
    SetOptionsOp,
    SetTrustLineFlagsOp,
    Signer,
    Transaction,
)

SOURCE = "GBCJLPKHE2QTXTYZNZG6K3OBRPHJHABT2MG6JLAMM5FOARHM2GL67VCW"
ACCOUNT_A = "GDICQ4HZOFVPJF7QNLHOUFUBNAH3TN4AJSRHZKFQH25I465VDVQE4ZS2"
ACCOUNT_B = "GALKCFFI5YT2D2SR2WPXAPFN7AWYIMU4DYSPN6HNBHH37YAD2PNFIGXE"
ACCOUNT_C = "GAZFEVBSEGJJ63WPVVIWXLZLWN2JYZECECGT6GUNP4FJDVZVNXWQWMYI"
ACCOUNT_D = "GBD4KWT3HXUGS4ACUZZELY67UJXLOFTZAPR5DT5QIMBO6BX53FXFSLQS"
MUXED = "MA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJVAAAAAAAAAAAAAJLK"
PRE_AUTH_TX = "TD3J3C5TAC4FCWIKWL45L3Z6LE3KK4OZ3DN3AC3CAE4HHYIGVW4TVRW6"
HASH_X = "XD3J3C5TAC4FCWIKWL45L3Z6LE3KK4OZ3DN3AC3CAE4HHYIGVW4TUVTH"
SIGNED_PAYLOAD = (
    "PA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJUAAAAAQACAQDAQCQMBYIBEFAWDANBYHRAEISCMKBKFQXDAMRUGY4DUPB6IBZGM"
)

BALANCE_ID = "ceab14eebbdbfe25a1830e39e311c2180846df74947ba24a386b8314ccba6622"
POOL_ID = "f69d8bb300b851590ab2f9d5ef3e5936a571d9d8dbb00b62013873e106adb93a"
DATA_VALUE = "446965204df662656c2073696e6420686569df21"

SIGNATURE_HINT = "b51d604e"
SIGNATURE = (
    "c52a9c15a60a9b7281cb9e932e0eb1ffbe9a759b6cc242eeb08dda88cfff3faa"
    "a47b5d817153617825941d1d0c46523f54d9b3790f1cee1370af08a5c29dfe03"
)

# Single CLAIM_CLAIMABLE_BALANCE envelope with PRECOND_TIME 0/0 and one signature
CLAIM_BALANCE_XDR = (
    "AAAAAgAAAABElb1HJqE7zxluTeVtwYvOk4Az0w3krAxnSuBE7NGX7wAAAGQAClykAAAAAQAAAAEAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAEAAAAA"
    "AAAADwAAAADOqxTuu9v+JaGDDjnjEcIYCEbfdJR7oko4a4MUzLpmIgAAAAAAAAAB7NGX7wAAAECUdb7ymUWLsQX2OsWN9CAQZNYPfP2P/sisj9NB"
    "mLlOJ5olf5t7rn8uOnWSaGErVlBD2ston333yZzVXZ1RuwsG"
)


def mk_asset(code: str = "USD", issuer: str = ACCOUNT_C) -> Asset:
    """Create a credit asset (``XLM`` gives the native asset)."""
    if code == "XLM":
        return Asset.native()
    return Asset(code=code, issuer=issuer)


def mk_signature(hint: str = SIGNATURE_HINT, signature: str = SIGNATURE) -> DecoratedSignature:
    """Create a decorated signature from hex strings."""
    return DecoratedSignature(hint=hint, signature=signature)


def mk_payment(amount: str = "100", destination: str = ACCOUNT_B, asset: Optional[Asset] = None,
               source_account: Optional[str] = None) -> PaymentOp:
    """Create a payment operation, native by default."""
    return PaymentOp(
        destination=destination,
        asset=asset or Asset.native(),
        amount=amount,
        source_account=source_account,
    )


def mk_predicate_tree() -> ClaimPredicate:
    """Predicate using every node kind."""
    return ClaimPredicate.or_(
        ClaimPredicate.and_(
            ClaimPredicate.not_(ClaimPredicate.before_relative_time(100)),
            ClaimPredicate.before_absolute_time(1629344902),
        ),
        ClaimPredicate.unconditional(),
    )


def mk_all_operations() -> List:
    """One instance of every supported operation kind."""
    usd = mk_asset("USD")
    long_code = mk_asset("ACMEINDUSTRY")
    return [
        CreateAccountOp(destination=ACCOUNT_A, starting_balance="920.0000000"),
        mk_payment("100.5", destination=MUXED, asset=usd, source_account=ACCOUNT_D),
        PathPaymentStrictReceiveOp(
            send_asset=Asset.native(), send_max="400", destination=ACCOUNT_A,
            dest_asset=usd, dest_amount="1200", path=[long_code, mk_asset("EUR")],
        ),
        ManageSellOfferOp(selling=usd, buying=Asset.native(), amount="82000", price=Price(n=7, d=10), offer_id=9298298398333),
        CreatePassiveSellOfferOp(selling=usd, buying=long_code, amount="100", price=Price(n=1, d=2)),
        SetOptionsOp(
            inflation_dest=ACCOUNT_B, clear_flags=2, set_flags=4, master_weight=122,
            low_threshold=10, med_threshold=50, high_threshold=122,
            home_domain="www.soneso.com", signer=Signer(key=PRE_AUTH_TX, weight=10),
        ),
        SetOptionsOp(signer=Signer(key=HASH_X, weight=1)),
        ChangeTrustOp(line=usd, limit="10000"),
        ChangeTrustOp(line=long_code),
        AllowTrustOp(trustor=ACCOUNT_B, asset_code="USD", authorize=1),
        AccountMergeOp(destination=ACCOUNT_A),
        InflationOp(),
        ManageDataOp(data_name="Sommer", data_value=DATA_VALUE),
        ManageDataOp(data_name="Remove me"),
        BumpSequenceOp(bump_to=1234567890),
        ManageBuyOfferOp(selling=Asset.native(), buying=usd, buy_amount="7.123", price=Price(n=3, d=5)),
        PathPaymentStrictSendOp(
            send_asset=usd, send_amount="10", destination=MUXED,
            dest_asset=Asset.native(), dest_min="9.99", path=[],
        ),
        CreateClaimableBalanceOp(asset=usd, amount="420", claimants=[
            Claimant(destination=ACCOUNT_A, predicate=mk_predicate_tree()),
            Claimant(destination=ACCOUNT_B),
        ]),
        ClaimClaimableBalanceOp(balance_id=BALANCE_ID),
        BeginSponsoringFutureReservesOp(sponsored_id=ACCOUNT_A),
        EndSponsoringFutureReservesOp(source_account=ACCOUNT_A),
        RevokeSponsorshipOp(ledger_key=LedgerKey.account(ACCOUNT_A)),
        RevokeSponsorshipOp(ledger_key=LedgerKey.trust_line(ACCOUNT_A, usd)),
        RevokeSponsorshipOp(ledger_key=LedgerKey.offer(ACCOUNT_A, 293893)),
        RevokeSponsorshipOp(ledger_key=LedgerKey.data(ACCOUNT_A, "Sommer")),
        RevokeSponsorshipOp(ledger_key=LedgerKey.claimable_balance(BALANCE_ID)),
        RevokeSponsorshipOp(ledger_key=LedgerKey.liquidity_pool(POOL_ID)),
        RevokeSponsorshipOp(signer=RevokeSponsorshipSigner(account_id=ACCOUNT_A, signer_key=ACCOUNT_B)),
        ClawbackOp(asset=usd, from_account=ACCOUNT_B, amount="1"),
        ClawbackClaimableBalanceOp(balance_id=BALANCE_ID),
        SetTrustLineFlagsOp(trustor=ACCOUNT_B, asset=usd, clear_flags=1, set_flags=2),
        LiquidityPoolDepositOp(
            liquidity_pool_id=POOL_ID, max_amount_a="100", max_amount_b="200",
            min_price=Price(n=1, d=2), max_price=Price(n=2, d=1),
        ),
        LiquidityPoolWithdrawOp(liquidity_pool_id=POOL_ID, amount="50", min_amount_a="10", min_amount_b="20"),
    ]


def mk_transaction(operations: Optional[List] = None, memo: Optional[Memo] = None,
                   signatures: Optional[List[DecoratedSignature]] = None, **kwargs) -> Transaction:
    """
    Create a plain transaction.

    The fee defaults to 100 per operation so fee derivation on decode
    leaves it unchanged.
    """
    operations = operations if operations is not None else [mk_payment()]
    kwargs.setdefault("source_account", SOURCE)
    kwargs.setdefault("fee", 100 * max(len(operations), 1))
    kwargs.setdefault("sequence", 2916609211498497)
    return Transaction(
        operations=operations,
        memo=memo or Memo.none(),
        signatures=signatures if signatures is not None else [mk_signature()],
        **kwargs,
    )


def mk_fee_bump(inner: Optional[Transaction] = None, fee: Optional[int] = None,
                fee_source: str = ACCOUNT_D) -> FeeBumpTransaction:
    """Create a fee-bump envelope; the fee defaults to 200 per slot."""
    inner = inner or mk_transaction()
    if fee is None:
        fee = 200 * (len(inner.operations) + 1)
    return FeeBumpTransaction(
        fee_source=fee_source,
        fee=fee,
        inner=inner,
        signatures=[mk_signature("00000001", "ab" * 64)],
    )
