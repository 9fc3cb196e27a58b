import hashlib
import json

from typer.testing import CliRunner

from merkle_cli.__main__ import app

runner = CliRunner()


def test_root_command(scenario_a):
    r = runner.invoke(app, ["root", *scenario_a])
    assert r.exit_code == 0, r.output
    summary = json.loads(r.output.strip().splitlines()[-1])
    assert summary["levels"] == 3
    assert summary["leafCount"] == 4
    assert len(summary["root"]) == 64


def test_root_from_file(tmp_path, scenario_b):
    p = tmp_path / "leaves.txt"
    p.write_text("\n".join(scenario_b) + "\n", encoding="utf-8")
    from_file = runner.invoke(app, ["root", "--file", str(p)])
    from_args = runner.invoke(app, ["root", *scenario_b])
    assert from_file.exit_code == 0
    assert from_file.output == from_args.output


def test_empty_leaves_exit_code():
    r = runner.invoke(app, ["root"])
    assert r.exit_code == 2


def test_unknown_algorithm_exit_code():
    r = runner.invoke(app, ["--algorithm", "nope", "root", "a"])
    assert r.exit_code == 2


def test_show_marks_padding(scenario_b):
    r = runner.invoke(app, ["show", *scenario_b])
    assert r.exit_code == 0
    lines = r.output.strip().splitlines()
    pad = hashlib.sha256(b"").hexdigest()
    assert f"tree[3] level=0 {pad} (padding)" in lines
    assert lines[-1].startswith("root = ")


def test_prove_then_verify(tmp_path, scenario_a):
    r = runner.invoke(app, ["prove", "world", *scenario_a])
    assert r.exit_code == 0, r.output
    proof_path = tmp_path / "proof.json"
    proof_path.write_text(r.output.strip(), encoding="utf-8")
    root = json.loads(runner.invoke(app, ["root", *scenario_a]).output.strip())["root"]

    ok = runner.invoke(app, ["verify", "world", str(proof_path), root])
    assert ok.exit_code == 0
    assert json.loads(ok.output) == {"valid": True}

    bad = runner.invoke(app, ["verify", "mallory", str(proof_path), root])
    assert bad.exit_code == 1
    assert json.loads(bad.output) == {"valid": False}


def test_prove_missing_leaf(scenario_a):
    r = runner.invoke(app, ["prove", "mallory", *scenario_a])
    assert r.exit_code == 1


def test_algorithm_option_changes_root():
    a = runner.invoke(app, ["root", "x", "y"])
    b = runner.invoke(app, ["--algorithm", "blake2b", "root", "x", "y"])
    assert a.exit_code == b.exit_code == 0
    assert json.loads(a.output)["root"] != json.loads(b.output)["root"]
    assert len(json.loads(b.output)["root"]) == 128


def test_undecodable_argv_leaf():
    from merkle_core.tree import build

    # non-UTF-8 argv bytes reach the CLI as lone surrogates
    r = runner.invoke(app, ["root", "a", "\udcff"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.output)["root"] == build([b"a", b"\xff"]).root_hex
