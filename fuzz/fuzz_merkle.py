"""Fuzz harness for tree construction & proof round trips."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.tree import build
    from merkle_core.proofs import prove_index
    from merkle_sdk.verify import verify


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Split data deterministically into leaves (bounded count)
    size = max(1, min(32, data[0]))
    leaves = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 64), size)]
    if not leaves:
        return
    tree = build(leaves)
    if len(tree.nodes) != 2 ** tree.levels - 1:
        raise RuntimeError("flat layout has wrong length")
    idx = data[-1] % len(leaves)
    proof = prove_index(tree, idx)
    if not verify(leaves[idx], proof, tree.root):
        raise RuntimeError("valid inclusion proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
