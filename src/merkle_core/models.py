from __future__ import annotations
from typing import List, Literal
from pydantic import BaseModel, Field, field_validator
from pydantic import ConfigDict
import re

import rfc8785

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})+")


class SiblingModel(BaseModel):
    """One proof step as it crosses the boundary: hex digest plus side."""

    model_config = ConfigDict(strict=True, frozen=True)

    digest: str
    side: Literal["LEFT", "RIGHT"]

    @field_validator("digest")
    @classmethod
    def _digest_must_be_hex(cls, v: str) -> str:
        if not _HEX.fullmatch(v):
            raise ValueError("digest must be a non-empty even-length hex string")
        return v.lower()


class ProofModel(BaseModel):
    """External form of an inclusion proof.

    ``{"leafIndex": 1, "siblings": [{"digest": "<hex>", "side": "LEFT"}]}``
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    leaf_index: int = Field(alias="leafIndex", ge=0)
    siblings: List[SiblingModel] = Field(default_factory=list)

    def canonical_json(self) -> bytes:
        """Deterministic canonical JSON bytes per RFC8785."""
        return rfc8785.dumps(self.model_dump(by_alias=True, mode="json"))


class TreeSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    levels: int
    leaf_count: int = Field(alias="leafCount")
    leaf_capacity: int = Field(alias="leafCapacity")
    root: str
