"""
Transcoder options.

Caps and policy switches consulted while decoding TxRep text. Defaults match
the limits the Stellar protocol itself enforces.
"""

from __future__ import annotations
from typing import Any, Dict
from pydantic import BaseModel, Field


class TxRepOptions(BaseModel):
    """
    Options for TxRep decoding.

    Caps may be lowered but never raised above the protocol limits.
    """
    max_operations: int = Field(default=100, ge=1, le=100, alias="maxOperations",
                                description="Maximum operations per transaction")
    max_signatures: int = Field(default=20, ge=1, le=20, alias="maxSignatures",
                                description="Maximum signatures per signature block")
    max_path_length: int = Field(default=5, ge=0, le=5, alias="maxPathLength",
                                 description="Maximum intermediate assets in a path payment")
    max_claimants: int = Field(default=10, ge=1, le=10, alias="maxClaimants",
                               description="Maximum claimants of a claimable balance")
    max_extra_signers: int = Field(default=2, ge=0, le=2, alias="maxExtraSigners",
                                   description="Maximum extra signers in V2 preconditions")
    max_predicate_depth: int = Field(default=4, ge=1, le=8, alias="maxPredicateDepth",
                                     description="Maximum nesting of claim predicates")
    reject_unknown_operations: bool = Field(default=True, alias="rejectUnknownOperations",
                                            description="Fail on unknown operation tags instead of skipping them")
    derive_fees: bool = Field(default=True, alias="deriveFees",
                              description="Recompute fees as per-operation shares on decode")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary."""
        return self.model_dump(by_alias=True)


DEFAULT_OPTIONS = TxRepOptions()


__all__ = ["TxRepOptions", "DEFAULT_OPTIONS"]
