from __future__ import annotations
import json
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from merkle_core.hashing import HashEngine, LeafValue, engine_for, leaf_hash, node_hash, parse_digest
from merkle_core.models import ProofModel
from merkle_core.proofs import InclusionProof, Side


def _root_bytes(root: Union[bytes, str]) -> Optional[bytes]:
    if isinstance(root, str):
        try:
            return parse_digest(root)
        except ValueError:
            return None
    return bytes(root)


def verify(
    leaf: LeafValue,
    proof: InclusionProof,
    root: Union[bytes, str],
    engine: Optional[HashEngine] = None,
) -> bool:
    """Return True if ``proof`` links ``leaf`` to ``root``.

    Needs only the proof, the claimed leaf and the root. A proof of the wrong
    length, with foreign siblings or flipped sides, or an unparseable hex root
    yields False rather than an error.
    """
    expected = _root_bytes(root)
    if expected is None:
        return False
    if engine is None:
        engine = engine_for()
    running = leaf_hash(engine, leaf)
    for step in proof.siblings:
        if step.side == Side.LEFT:
            running = node_hash(engine, step.digest, running)
        else:
            running = node_hash(engine, running, step.digest)
    return running == expected


def verify_json(
    leaf: LeafValue,
    proof_json: Union[str, bytes, Dict[str, Any]],
    root: Union[bytes, str],
    engine: Optional[HashEngine] = None,
) -> bool:
    """Verify a proof given in its external ``{leafIndex, siblings}`` form."""
    try:
        if isinstance(proof_json, (str, bytes)):
            proof_json = json.loads(proof_json)
        model = ProofModel.model_validate(proof_json)
        proof = InclusionProof.from_model(model)
    except (ValidationError, ValueError, TypeError, RecursionError):
        return False
    return verify(leaf, proof, root, engine)
