"""
Claim predicate codec.

Predicates are written recursively under a key prefix ending in ``.``:

    {prefix}type: CLAIM_PREDICATE_AND
    {prefix}andPredicates.len: 2
    {prefix}andPredicates[0].type: ...
    {prefix}andPredicates[1].type: ...

AND and OR always carry exactly two children. The XDR union is n-ary, but
TxRep tooling relies on the fixed arity, so any other ``.len`` is rejected
rather than coerced.
"""

from __future__ import annotations
from typing import Any

from .fieldmap import FieldMap
from .fields import FieldCodec
from .scalars import INT64_MAX, INT64_MIN, UINT32_MAX, format_bool, parse_bool, parse_enum, parse_int
from ..enums import ClaimPredicateType
from ..models import ClaimPredicate
from ..runtime.errors import BoundsExceededError, InvalidFieldError
from ..runtime.options import DEFAULT_OPTIONS, TxRepOptions

_BRANCH_KEYS = {
    ClaimPredicateType.CLAIM_PREDICATE_AND: "andPredicates",
    ClaimPredicateType.CLAIM_PREDICATE_OR: "orPredicates",
}


def encode(fields: FieldMap, prefix: str, predicate: ClaimPredicate) -> None:
    """
    Write a predicate tree.

    Args:
        fields: Field map being built
        prefix: Key prefix, including the trailing ``.``
        predicate: Predicate to write
    """
    kind = predicate.type
    fields.put(f"{prefix}type", kind.value)
    if kind in _BRANCH_KEYS:
        list_key = f"{prefix}{_BRANCH_KEYS[kind]}"
        fields.put(f"{list_key}.len", str(len(predicate.predicates)))
        for i, child in enumerate(predicate.predicates):
            encode(fields, f"{list_key}[{i}].", child)
    elif kind == ClaimPredicateType.CLAIM_PREDICATE_NOT:
        present = predicate.not_predicate is not None
        fields.put(f"{prefix}notPredicate._present", format_bool(present))
        if present:
            encode(fields, f"{prefix}notPredicate.", predicate.not_predicate)
    elif kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME:
        fields.put(f"{prefix}absBefore", str(predicate.abs_before))
    elif kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME:
        fields.put(f"{prefix}relBefore", str(predicate.rel_before))


def decode(fields: FieldMap, prefix: str, options: TxRepOptions = DEFAULT_OPTIONS,
           depth: int = 1) -> ClaimPredicate:
    """
    Read a predicate tree.

    Args:
        fields: Parsed field map
        prefix: Key prefix, including the trailing ``.``
        options: Decoding caps
        depth: Nesting level of this node, 1 for the root

    Returns:
        Decoded predicate

    Raises:
        MissingFieldError: If a required key is absent
        InvalidFieldError: On an unknown type, wrong arity or bad value
        BoundsExceededError: If nesting is deeper than allowed
    """
    type_key = f"{prefix}type"
    kind = parse_enum(ClaimPredicateType, fields.require(type_key), type_key)
    if depth > options.max_predicate_depth:
        raise BoundsExceededError(type_key, options.max_predicate_depth, depth)

    if kind == ClaimPredicateType.CLAIM_PREDICATE_UNCONDITIONAL:
        return ClaimPredicate.unconditional()

    if kind in _BRANCH_KEYS:
        list_key = f"{prefix}{_BRANCH_KEYS[kind]}"
        len_key = f"{list_key}.len"
        count = parse_int(fields.require(len_key), len_key, 0, UINT32_MAX)
        if count != 2:
            raise InvalidFieldError(len_key, f"{kind.value} requires exactly 2 predicates, got {count}")
        left = decode(fields, f"{list_key}[0].", options, depth + 1)
        right = decode(fields, f"{list_key}[1].", options, depth + 1)
        if kind == ClaimPredicateType.CLAIM_PREDICATE_AND:
            return ClaimPredicate.and_(left, right)
        return ClaimPredicate.or_(left, right)

    if kind == ClaimPredicateType.CLAIM_PREDICATE_NOT:
        present_key = f"{prefix}notPredicate._present"
        if not parse_bool(fields.require(present_key), present_key):
            return ClaimPredicate.not_()
        return ClaimPredicate.not_(decode(fields, f"{prefix}notPredicate.", options, depth + 1))

    if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_ABSOLUTE_TIME:
        key = f"{prefix}absBefore"
        return ClaimPredicate.before_absolute_time(parse_int(fields.require(key), key, INT64_MIN, INT64_MAX))

    if kind == ClaimPredicateType.CLAIM_PREDICATE_BEFORE_RELATIVE_TIME:
        key = f"{prefix}relBefore"
        return ClaimPredicate.before_relative_time(parse_int(fields.require(key), key, INT64_MIN, INT64_MAX))

    raise InvalidFieldError(type_key, f"unhandled predicate type {kind.value}")


class PredicateField(FieldCodec):
    """Field codec adapter writing a predicate under ``{key}.``."""

    def encode(self, fields: FieldMap, key: str, value: ClaimPredicate) -> None:
        encode(fields, f"{key}.", value)

    def decode(self, fields: FieldMap, key: str, options: TxRepOptions) -> Any:
        return decode(fields, f"{key}.", options)


__all__ = ["encode", "decode", "PredicateField"]
