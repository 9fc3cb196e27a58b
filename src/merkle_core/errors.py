class MerkleError(Exception):
    """Base class for tree construction and proof errors."""


class InvalidInput(MerkleError, ValueError):
    """Leaf list is empty or larger than the configured maximum."""


class LeafNotFound(MerkleError, LookupError):
    """Queried value is not one of the tree's real leaves."""


class UnsupportedHashAlgorithm(MerkleError, ValueError):
    pass
