"""Inclusion proof fuzzing with mutated proofs and leaves."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from merkle_core.hashing import leaf_hash, node_hash
    from merkle_core.tree import build
    from merkle_core.proofs import InclusionProof, ProofStep, Side, prove
    from merkle_sdk.verify import verify, verify_json


def _running_hash(engine, leaf, steps):
    h = leaf_hash(engine, leaf)
    for step in steps:
        if step.side == Side.LEFT:
            h = node_hash(engine, step.digest, h)
        else:
            h = node_hash(engine, h, step.digest)
    return h


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    seed = int.from_bytes(data[:4], 'little')
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    leaves = [body[i:i+chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    if len(leaves) < 3:
        return
    tree = build(leaves)
    leaf = leaves[seed % len(leaves)]
    proof = prove(tree, leaf)
    if not verify(leaf, proof, tree.root):
        raise RuntimeError("valid proof failed")
    if not verify_json(leaf, proof.to_model().canonical_json(), tree.root_hex):
        raise RuntimeError("external proof form failed")
    steps = list(proof.siblings)
    i = random.randrange(len(steps))
    sib = steps[i]
    if random.random() < 0.5:
        mutated = ProofStep(bytes([sib.digest[0] ^ 0x01]) + sib.digest[1:], sib.side)
    else:
        mutated = ProofStep(sib.digest, Side.LEFT if sib.side == Side.RIGHT else Side.RIGHT)
    steps[i] = mutated
    tampered = InclusionProof(proof.leaf_index, tuple(steps))
    # a side flip is a no-op when the sibling equals the running hash
    changed = mutated.digest != sib.digest or sib.digest != _running_hash(
        tree.engine, leaf, steps[:i]
    )
    if changed and verify(leaf, tampered, tree.root):
        raise RuntimeError("tampered proof unexpectedly verified")
    # garbage JSON must never raise
    verify_json(leaf, body, tree.root_hex)


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
