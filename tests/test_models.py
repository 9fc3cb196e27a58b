import json

import pytest
from pydantic import ValidationError

from merkle_core.models import ProofModel, SiblingModel
from merkle_core.proofs import InclusionProof, prove
from merkle_core.tree import build


def test_external_representation(scenario_a):
    tree = build(scenario_a)
    model = prove(tree, "world").to_model()
    doc = json.loads(model.canonical_json())
    assert list(doc) == ["leafIndex", "siblings"]
    assert doc["leafIndex"] == 1
    assert [s["side"] for s in doc["siblings"]] == ["LEFT", "RIGHT"]
    assert all(len(s["digest"]) == 64 for s in doc["siblings"])


def test_canonical_json_is_stable(scenario_b):
    tree = build(scenario_b)
    a = prove(tree, "3").to_model().canonical_json()
    b = ProofModel.model_validate(json.loads(a)).canonical_json()
    assert a == b
    assert b" " not in a


def test_from_model_restores_proof(scenario_b):
    tree = build(scenario_b)
    proof = prove(tree, "world")
    assert InclusionProof.from_model(proof.to_model()) == proof


def test_sibling_digest_normalized_and_validated():
    assert SiblingModel(digest="ABCD", side="LEFT").digest == "abcd"
    for bad in ("", "abc", "gg"):
        with pytest.raises(ValidationError):
            SiblingModel(digest=bad, side="LEFT")
    with pytest.raises(ValidationError):
        SiblingModel(digest="00", side="left")


def test_leaf_index_must_be_non_negative():
    with pytest.raises(ValidationError):
        ProofModel(leafIndex=-1)
    assert ProofModel(leaf_index=3).leaf_index == 3


def test_sibling_digest_rejects_whitespace():
    for bad in ("ab  cd", " abcd", "abcd\n", "ab\tcd"):
        with pytest.raises(ValidationError):
            SiblingModel(digest=bad, side="RIGHT")
