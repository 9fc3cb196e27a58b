from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Tuple

from .errors import LeafNotFound
from .hashing import LeafValue, digest_hex, leaf_hash, parse_digest
from .models import ProofModel, SiblingModel
from .tree import MerkleTree

logger = logging.getLogger(__name__)


class Side(str, enum.Enum):
    """Where the sibling sits relative to the running hash."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass(frozen=True)
class ProofStep:
    digest: bytes
    side: Side


@dataclass(frozen=True)
class InclusionProof:
    leaf_index: int
    siblings: Tuple[ProofStep, ...] = ()

    def to_model(self) -> ProofModel:
        return ProofModel(
            leaf_index=self.leaf_index,
            siblings=[
                SiblingModel(digest=digest_hex(s.digest), side=s.side.value)
                for s in self.siblings
            ],
        )

    @classmethod
    def from_model(cls, model: ProofModel) -> "InclusionProof":
        return cls(
            leaf_index=model.leaf_index,
            siblings=tuple(
                ProofStep(parse_digest(s.digest), Side(s.side)) for s in model.siblings
            ),
        )


def find_leaf(tree: MerkleTree, leaf: LeafValue) -> int:
    """Index of the first real leaf whose digest matches ``leaf``.

    Only the real leaves [0, leaf_count) are searched, so internal nodes and
    padding slots can never be returned.
    """
    target = leaf_hash(tree.engine, leaf)
    for i in range(tree.leaf_count):
        if tree.nodes[i] == target:
            return i
    raise LeafNotFound(f"leaf {digest_hex(target)} not in tree")


def prove_index(tree: MerkleTree, index: int) -> InclusionProof:
    """Return the inclusion proof for the real leaf at ``index``."""
    if not 0 <= index < tree.leaf_count:
        raise LeafNotFound(f"leaf index {index} out of range")
    steps = []
    idx = index
    for level in range(tree.levels - 1):
        offset = tree.level_offset(level)
        if idx % 2 == 0:
            steps.append(ProofStep(tree.nodes[offset + idx + 1], Side.RIGHT))
        else:
            steps.append(ProofStep(tree.nodes[offset + idx - 1], Side.LEFT))
        idx //= 2
    return InclusionProof(leaf_index=index, siblings=tuple(steps))


def prove(tree: MerkleTree, leaf: LeafValue) -> InclusionProof:
    index = find_leaf(tree, leaf)
    logger.debug("leaf found at index %d, computing proof", index)
    return prove_index(tree, index)
