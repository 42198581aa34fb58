"""
Shared fixtures for the TxRep test suite.
"""

import pytest

from stellar_txrep.models import Memo
from stellar_txrep.runtime.options import TxRepOptions

from helpers.factories import mk_all_operations, mk_fee_bump, mk_payment, mk_transaction


@pytest.fixture
def payment_tx():
    """Plain transaction with one native payment, MEMO_ID and one signature."""
    return mk_transaction(operations=[mk_payment("100")], memo=Memo.of_id(123456789))


@pytest.fixture
def fee_bump_tx():
    """Fee-bump envelope wrapping the payment transaction."""
    return mk_fee_bump(mk_transaction(operations=[mk_payment("100")], memo=Memo.of_id(123456789)))


@pytest.fixture
def all_operations():
    """One instance of every supported operation kind."""
    return mk_all_operations()


@pytest.fixture
def lenient_options():
    """Options that skip unknown operations instead of rejecting them."""
    return TxRepOptions(reject_unknown_operations=False)
