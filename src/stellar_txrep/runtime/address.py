"""
StrKey address adapter.

Thin wrapper over the stellar_sdk StrKey codec. Text-side helpers validate
and normalize address strings and report failures against a TxRep key;
XDR-side helpers convert between address strings and stellar_sdk XDR
objects.
"""

from __future__ import annotations
from typing import Optional

from stellar_sdk import Keypair, MuxedAccount, SignerKey, StrKey
from stellar_sdk import xdr as stellar_xdr

from .errors import map_exception


def parse_account(text: str, key: Optional[str] = None) -> str:
    """
    Validate an ed25519 account id (``G...``).

    Args:
        text: Address string
        key: TxRep key used in error messages

    Returns:
        The address string

    Raises:
        InvalidFieldError: On bad prefix, length or checksum
    """
    try:
        StrKey.decode_ed25519_public_key(text)
    except (ValueError, TypeError) as e:
        raise map_exception(e, key or "address", f"{text!r} is not a valid address") from e
    return text


def parse_muxed_account(text: str, key: Optional[str] = None) -> str:
    """Validate an account id that may be multiplexed (``G...`` or ``M...``)."""
    try:
        return MuxedAccount.from_account(text).universal_account_id
    except (ValueError, TypeError) as e:
        raise map_exception(e, key or "address", f"{text!r} is not a valid address") from e


def parse_signer_key(text: str, key: Optional[str] = None) -> str:
    """Validate a signer key (``G...``, ``T...``, ``X...`` or ``P...``)."""
    try:
        return SignerKey.from_encoded_signer_key(text).encoded_signer_key
    except (ValueError, TypeError) as e:
        raise map_exception(e, key or "address", f"{text!r} is not a valid address") from e


def format_account(raw: bytes) -> str:
    """Render a 32-byte ed25519 public key as a ``G...`` address."""
    return StrKey.encode_ed25519_public_key(raw)


# XDR conversions

def account_to_xdr(address: str) -> stellar_xdr.AccountID:
    return Keypair.from_public_key(address).xdr_account_id()


def account_from_xdr(account_id: stellar_xdr.AccountID) -> str:
    return format_account(account_id.account_id.ed25519.uint256)


def muxed_to_xdr(address: str) -> stellar_xdr.MuxedAccount:
    return MuxedAccount.from_account(address).to_xdr_object()


def muxed_from_xdr(muxed: stellar_xdr.MuxedAccount) -> str:
    return MuxedAccount.from_xdr_object(muxed).universal_account_id


def signer_key_to_xdr(encoded: str) -> stellar_xdr.SignerKey:
    return SignerKey.from_encoded_signer_key(encoded).to_xdr_object()


def signer_key_from_xdr(signer_key: stellar_xdr.SignerKey) -> str:
    return SignerKey.from_xdr_object(signer_key).encoded_signer_key


__all__ = [
    "parse_account",
    "parse_muxed_account",
    "parse_signer_key",
    "format_account",
    "account_to_xdr",
    "account_from_xdr",
    "muxed_to_xdr",
    "muxed_from_xdr",
    "signer_key_to_xdr",
    "signer_key_from_xdr",
]
