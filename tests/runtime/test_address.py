"""
Address adapter tests.
"""

import pytest

from stellar_txrep.runtime import address
from stellar_txrep.runtime.errors import InvalidFieldError

from helpers.factories import ACCOUNT_A, HASH_X, MUXED, PRE_AUTH_TX, SIGNED_PAYLOAD


class TestParseAccount:
    def test_valid(self):
        assert address.parse_account(ACCOUNT_A) == ACCOUNT_A

    def test_bad_checksum(self):
        broken = ACCOUNT_A[:-1] + ("A" if ACCOUNT_A[-1] != "A" else "B")
        with pytest.raises(InvalidFieldError) as exc_info:
            address.parse_account(broken, "tx.sourceAccount")
        assert exc_info.value.key == "tx.sourceAccount"
        assert "is not a valid address" in exc_info.value.message
        assert isinstance(exc_info.value.cause, (ValueError, TypeError))

    def test_muxed_not_accepted(self):
        with pytest.raises(InvalidFieldError):
            address.parse_account(MUXED)

    def test_default_key(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            address.parse_account("GABC")
        assert exc_info.value.key == "address"


class TestParseMuxedAccount:
    def test_plain_account(self):
        assert address.parse_muxed_account(ACCOUNT_A) == ACCOUNT_A

    def test_muxed_account(self):
        assert address.parse_muxed_account(MUXED) == MUXED

    def test_invalid(self):
        with pytest.raises(InvalidFieldError, match="not a valid address"):
            address.parse_muxed_account("MXYZ", "tx.sourceAccount")


class TestParseSignerKey:
    @pytest.mark.parametrize("key", [ACCOUNT_A, PRE_AUTH_TX, HASH_X, SIGNED_PAYLOAD])
    def test_valid(self, key):
        assert address.parse_signer_key(key) == key

    def test_invalid(self):
        with pytest.raises(InvalidFieldError):
            address.parse_signer_key("SBAD")


class TestXdrConversions:
    """Address strings survive conversion to stellar_sdk XDR objects."""

    def test_account(self):
        assert address.account_from_xdr(address.account_to_xdr(ACCOUNT_A)) == ACCOUNT_A

    def test_muxed(self):
        assert address.muxed_from_xdr(address.muxed_to_xdr(MUXED)) == MUXED
        assert address.muxed_from_xdr(address.muxed_to_xdr(ACCOUNT_A)) == ACCOUNT_A

    @pytest.mark.parametrize("key", [ACCOUNT_A, PRE_AUTH_TX, HASH_X, SIGNED_PAYLOAD])
    def test_signer_key(self, key):
        assert address.signer_key_from_xdr(address.signer_key_to_xdr(key)) == key

    def test_format_account(self):
        raw = address.account_to_xdr(ACCOUNT_A).account_id.ed25519.uint256
        assert address.format_account(raw) == ACCOUNT_A
