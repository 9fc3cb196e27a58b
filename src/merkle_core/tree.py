from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .errors import InvalidInput
from .hashing import (
    HashEngine,
    LeafValue,
    digest_hex,
    engine_for,
    leaf_hash,
    node_hash,
    padding_digest,
)
from .models import TreeSummary
from .settings import settings

logger = logging.getLogger(__name__)


def levels_for(n: int) -> int:
    """Number of levels for ``n`` leaves: ceil(log2(n)) + 1."""
    if n < 1:
        raise InvalidInput("no leaves")
    return (n - 1).bit_length() + 1


@dataclass(frozen=True)
class MerkleTree:
    """Flat, index-addressed binary hash tree.

    ``nodes`` holds ``2**levels - 1`` digests: the leaf segment first, then
    each higher level in order, ending with the root. Level ``L`` starts at
    ``2**levels - 2**(levels - L)`` and spans ``2**(levels - 1 - L)`` slots.
    """

    nodes: Tuple[bytes, ...]
    levels: int
    leaf_count: int
    engine: HashEngine = field(repr=False, compare=False)

    @property
    def leaf_capacity(self) -> int:
        return 1 << (self.levels - 1)

    @property
    def root(self) -> bytes:
        return self.nodes[-1]

    @property
    def root_hex(self) -> str:
        return digest_hex(self.root)

    @property
    def leaf_segment(self) -> Tuple[bytes, ...]:
        return self.nodes[: self.leaf_capacity]

    def level_offset(self, level: int) -> int:
        if not 0 <= level < self.levels:
            raise IndexError(f"level {level} out of range")
        return (1 << self.levels) - (1 << (self.levels - level))

    def level(self, level: int) -> Tuple[bytes, ...]:
        start = self.level_offset(level)
        return self.nodes[start : start + (1 << (self.levels - 1 - level))]

    def is_padding(self, position: int) -> bool:
        return self.leaf_count <= position < self.leaf_capacity

    def summary(self) -> TreeSummary:
        return TreeSummary(
            levels=self.levels,
            leaf_count=self.leaf_count,
            leaf_capacity=self.leaf_capacity,
            root=self.root_hex,
        )


def build(leaves: Sequence[LeafValue], engine: Optional[HashEngine] = None) -> MerkleTree:
    """Hash ``leaves`` into a fresh MerkleTree.

    Raises InvalidInput for an empty leaf list, or one above ``max_leaves``
    when that cap is configured.
    """
    n = len(leaves)
    if n == 0:
        raise InvalidInput("no leaves")
    if settings.max_leaves is not None and n > settings.max_leaves:
        raise InvalidInput(f"too many leaves: {n} > {settings.max_leaves}")
    if engine is None:
        engine = engine_for()

    levels = levels_for(n)
    capacity = 1 << (levels - 1)
    nodes = [leaf_hash(engine, v) for v in leaves]
    if capacity > n:
        nodes.extend([padding_digest(engine)] * (capacity - n))

    lo = 0
    width = capacity
    while width > 1:
        for k in range(0, width, 2):
            nodes.append(node_hash(engine, nodes[lo + k], nodes[lo + k + 1]))
        lo += width
        width //= 2

    logger.debug(
        "built tree: leaves=%d padding=%d levels=%d root=%s",
        n, capacity - n, levels, digest_hex(nodes[-1]),
    )
    return MerkleTree(nodes=tuple(nodes), levels=levels, leaf_count=n, engine=engine)


def root(tree: MerkleTree) -> bytes:
    return tree.root
