"""
TxRep field codecs.

Each codec knows how to write one typed value under a dotted key and read
it back. Composite codecs (prices, optional values, arrays, structs) write
several lines by appending sub-keys to the key they are given. Operation
and envelope layouts are declared as sequences of :class:`FieldRule` over
these codecs, so the same declaration drives both directions.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Type, Union
import logging

from pydantic import BaseModel, ValidationError

from . import amount as amount_codec
from .fieldmap import FieldMap
from .scalars import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    UINT32_MAX,
    UINT64_MAX,
    describe,
    format_bool,
    parse_bool,
    parse_hex,
    parse_int,
    parse_quoted,
    quote,
)
from ..models import Asset, Price
from ..runtime import address
from ..runtime.errors import BoundsExceededError, InvalidFieldError, map_exception
from ..runtime.options import TxRepOptions

logger = logging.getLogger(__name__)


class FieldCodec(ABC):
    """
    Base class for TxRep field codecs.

    Defines the interface for writing a value into a field map and reading
    it back with key-precise validation.
    """

    @abstractmethod
    def encode(self, fields: FieldMap, key: str, value: Any) -> None:
        """
        Write a value.

        Args:
            fields: Field map being built
            key: Dotted key for the value
            value: Model value
        """

    @abstractmethod
    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Any:
        """
        Read a value.

        Args:
            fields: Parsed field map
            key: Dotted key of the value
            options: Decoding caps and policies

        Returns:
            Model value

        Raises:
            MissingFieldError: If a required key is absent
            InvalidFieldError: If a value fails validation
            BoundsExceededError: If a collection is over its cap
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


@dataclass(frozen=True)
class FieldRule:
    """
    One field of a composite layout.

    ``name`` is the TxRep key segment; None places the codec at the parent
    key itself. ``attr`` is the model attribute; None hands the codec the
    whole parent value and merges the dict it decodes into the parent.
    """
    name: Optional[str]
    attr: Optional[str]
    codec: FieldCodec


def child_key(base: str, name: Optional[str]) -> str:
    return base if name is None else f"{base}.{name}"


def encode_rules(fields: FieldMap, base: str, value: Any, rules: Sequence[FieldRule]) -> None:
    for rule in rules:
        field_value = value if rule.attr is None else getattr(value, rule.attr)
        rule.codec.encode(fields, child_key(base, rule.name), field_value)


def decode_rules(fields: FieldMap, base: str, rules: Sequence[FieldRule],
                 options: TxRepOptions) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for rule in rules:
        decoded = rule.codec.decode(fields, child_key(base, rule.name), options)
        if rule.attr is None:
            values.update(decoded)
        else:
            values[rule.attr] = decoded
    return values


def build_model(model: Type[BaseModel], values: Dict[str, Any], key: str) -> Any:
    """Construct a model, reporting validation failures against ``key``."""
    try:
        return model(**values)
    except ValidationError as e:
        raise map_exception(e, key, describe(e)) from e


# =============================================================================
# Scalar codecs
# =============================================================================

class IntField(FieldCodec):
    """Integer within a fixed range."""

    def __init__(self, minimum: int = INT64_MIN, maximum: int = INT64_MAX):
        self.minimum = minimum
        self.maximum = maximum

    def encode(self, fields: FieldMap, key: str, value: int) -> None:
        fields.put(key, str(value))

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> int:
        return parse_int(fields.require(key), key, self.minimum, self.maximum)

    def __repr__(self) -> str:
        return f"IntField({self.minimum}, {self.maximum})"


class AmountField(FieldCodec):
    """Amount written as a stroop integer; the model side is a 7-digit decimal string."""

    def encode(self, fields: FieldMap, key: str, value: str) -> None:
        fields.put(key, str(amount_codec.from_text(value, key)))

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        return amount_codec.to_text(amount_codec.stroops_from_text(fields.require(key), key))


class AccountField(FieldCodec):
    """Ed25519 account id (``G...``)."""

    def encode(self, fields: FieldMap, key: str, value: str) -> None:
        fields.put(key, value)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        return address.parse_account(fields.require(key), key)


class MuxedAccountField(AccountField):
    """Account id that may be multiplexed (``G...`` or ``M...``)."""

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        return address.parse_muxed_account(fields.require(key), key)


class SignerKeyField(AccountField):
    """Signer key (``G...``, ``T...``, ``X...`` or ``P...``)."""

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        return address.parse_signer_key(fields.require(key), key)


class AssetField(FieldCodec):
    """Asset written as ``XLM`` or ``CODE:ISSUER``."""

    def encode(self, fields: FieldMap, key: str, value: Asset) -> None:
        fields.put(key, value.to_text())

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Asset:
        text = fields.require(key)
        try:
            return Asset.parse(text)
        except ValueError as e:
            raise map_exception(e, key, describe(e)) from e


class AssetCodeField(FieldCodec):
    """Bare asset code, as used by ALLOW_TRUST."""

    def encode(self, fields: FieldMap, key: str, value: str) -> None:
        fields.put(key, value)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        text = fields.require(key)
        if not text.isascii() or not text.isalnum() or len(text) > 12:
            raise InvalidFieldError(key, f"invalid asset code {text!r}")
        return text


class QuotedStringField(FieldCodec):
    """JSON-quoted string with a UTF-8 byte length limit."""

    def __init__(self, max_bytes: int, min_bytes: int = 0):
        self.max_bytes = max_bytes
        self.min_bytes = min_bytes

    def encode(self, fields: FieldMap, key: str, value: str) -> None:
        fields.put(key, quote(value))

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> str:
        value = parse_quoted(fields.require_raw(key), key)
        size = len(value.encode("utf-8"))
        if size > self.max_bytes or size < self.min_bytes:
            raise InvalidFieldError(key, f"must be {self.min_bytes} to {self.max_bytes} bytes, got {size}")
        return value


class HexField(FieldCodec):
    """Binary blob written as lowercase hex."""

    def __init__(self, length: Optional[int] = None, max_length: Optional[int] = None):
        self.length = length
        self.max_length = max_length

    def encode(self, fields: FieldMap, key: str, value: bytes) -> None:
        fields.put(key, value.hex())

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> bytes:
        return parse_hex(fields.require(key), key, self.length, self.max_length)


class PriceField(FieldCodec):
    """Price fraction written as ``{key}.n`` and ``{key}.d``."""

    def encode(self, fields: FieldMap, key: str, value: Price) -> None:
        fields.put(f"{key}.n", str(value.n))
        fields.put(f"{key}.d", str(value.d))

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Price:
        n = parse_int(fields.require(f"{key}.n"), f"{key}.n", INT32_MIN, INT32_MAX)
        d = parse_int(fields.require(f"{key}.d"), f"{key}.d", INT32_MIN, INT32_MAX)
        if d == 0:
            raise InvalidFieldError(f"{key}.d", "price denominator can not be 0")
        return Price(n=n, d=d)


# =============================================================================
# Composite codecs
# =============================================================================

class OptionalField(FieldCodec):
    """Value gated by a ``{key}._present`` sentinel."""

    def __init__(self, inner: FieldCodec):
        self.inner = inner

    def encode(self, fields: FieldMap, key: str, value: Any) -> None:
        fields.put(f"{key}._present", format_bool(value is not None))
        if value is not None:
            self.inner.encode(fields, key, value)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Any:
        present_key = f"{key}._present"
        if not parse_bool(fields.require(present_key), present_key):
            return None
        return self.inner.decode(fields, key, options)

    def __repr__(self) -> str:
        return f"OptionalField({self.inner!r})"


class ArrayField(FieldCodec):
    """
    Length-prefixed array: ``{key}.len`` followed by ``{key}[i]`` entries.

    ``cap`` is either a fixed maximum or the name of a :class:`TxRepOptions`
    attribute holding it.
    """

    def __init__(self, inner: FieldCodec, cap: Union[int, str]):
        self.inner = inner
        self.cap = cap

    def limit(self, options: TxRepOptions) -> int:
        return getattr(options, self.cap) if isinstance(self.cap, str) else self.cap

    def encode(self, fields: FieldMap, key: str, value: Sequence[Any]) -> None:
        fields.put(f"{key}.len", str(len(value)))
        for i, item in enumerate(value):
            self.inner.encode(fields, f"{key}[{i}]", item)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> list:
        count = decode_count(fields, f"{key}.len", self.limit(options))
        return [self.inner.decode(fields, f"{key}[{i}]", options) for i in range(count)]

    def __repr__(self) -> str:
        return f"ArrayField({self.inner!r}, {self.cap!r})"


def decode_count(fields: FieldMap, key: str, limit: int) -> int:
    """Read a ``.len`` value, enforcing its cap."""
    count = parse_int(fields.require(key), key, 0, UINT32_MAX)
    if count > limit:
        raise BoundsExceededError(key, limit, count)
    return count


class StructField(FieldCodec):
    """Nested model laid out by a sequence of field rules."""

    def __init__(self, model: Type[BaseModel], rules: Sequence[FieldRule]):
        self.model = model
        self.rules = tuple(rules)

    def encode(self, fields: FieldMap, key: str, value: BaseModel) -> None:
        encode_rules(fields, key, value, self.rules)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> BaseModel:
        return build_model(self.model, decode_rules(fields, key, self.rules, options), key)

    def __repr__(self) -> str:
        return f"StructField({self.model.__name__})"


class BalanceIdField(FieldCodec):
    """Claimable balance id: ``{key}.type`` marker plus ``{key}.v0`` hash."""

    TYPE = "CLAIMABLE_BALANCE_ID_TYPE_V0"

    def encode(self, fields: FieldMap, key: str, value: bytes) -> None:
        fields.put(f"{key}.type", self.TYPE)
        fields.put(f"{key}.v0", value.hex())

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> bytes:
        type_key = f"{key}.type"
        kind = fields.require(type_key)
        if kind != self.TYPE:
            raise InvalidFieldError(type_key, f"unsupported balance id type {kind!r}")
        return parse_hex(fields.require(f"{key}.v0"), f"{key}.v0", length=32)


# Shared codec instances
ACCOUNT = AccountField()
MUXED_ACCOUNT = MuxedAccountField()
SIGNER_KEY = SignerKeyField()
ASSET = AssetField()
AMOUNT = AmountField()
PRICE = PriceField()
INT64 = IntField(INT64_MIN, INT64_MAX)
UINT32 = IntField(0, UINT32_MAX)
UINT64 = IntField(0, UINT64_MAX)
SEQUENCE = IntField(0, INT64_MAX)
HASH = HexField(length=32)
BALANCE_ID = BalanceIdField()


__all__ = [
    "FieldCodec",
    "FieldRule",
    "child_key",
    "encode_rules",
    "decode_rules",
    "build_model",
    "decode_count",
    "IntField",
    "AmountField",
    "AccountField",
    "MuxedAccountField",
    "SignerKeyField",
    "AssetField",
    "AssetCodeField",
    "QuotedStringField",
    "HexField",
    "PriceField",
    "OptionalField",
    "ArrayField",
    "StructField",
    "BalanceIdField",
    "ACCOUNT",
    "MUXED_ACCOUNT",
    "SIGNER_KEY",
    "ASSET",
    "AMOUNT",
    "PRICE",
    "INT64",
    "UINT32",
    "UINT64",
    "SEQUENCE",
    "HASH",
    "BALANCE_ID",
]
