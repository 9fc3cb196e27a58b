from __future__ import annotations
import json
import pathlib
from typing import List, Optional

import typer
from rich import print

from merkle_core.errors import InvalidInput, LeafNotFound, UnsupportedHashAlgorithm
from merkle_core.hashing import HashEngine, digest_hex, engine_for
from merkle_core.logutil import setup_logging
from merkle_core.proofs import prove as prove_leaf
from merkle_core.settings import settings
from merkle_core.tree import MerkleTree, build
from merkle_sdk.verify import verify_json

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    ctx: typer.Context,
    algorithm: Optional[str] = typer.Option(
        None, "--algorithm", help="hashlib algorithm (default: MERKLE_HASH_ALGORITHM)"
    ),
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
):
    setup_logging(log_level)
    ctx.obj = algorithm


def _engine(ctx: typer.Context) -> HashEngine:
    try:
        return engine_for(ctx.obj)
    except UnsupportedHashAlgorithm as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)


def _load_leaves(leaves: Optional[List[str]], file: Optional[str]) -> List[str]:
    out = list(leaves or [])
    if file is not None:
        out.extend(pathlib.Path(file).read_text(encoding="utf-8").splitlines())
    return out


def _build_or_exit(ctx: typer.Context, leaves, file) -> MerkleTree:
    engine = _engine(ctx)
    try:
        return build(_load_leaves(leaves, file), engine)
    except InvalidInput as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)


@app.command()
def root(
    ctx: typer.Context,
    leaves: List[str] = typer.Argument(None, help="Leaf values"),
    file: Optional[str] = typer.Option(None, "--file", help="One leaf per line"),
):
    """Print the root digest and shape of a tree built over the leaves."""
    tree = _build_or_exit(ctx, leaves, file)
    typer.echo(tree.summary().model_dump_json(by_alias=True))


@app.command()
def show(
    ctx: typer.Context,
    leaves: List[str] = typer.Argument(None, help="Leaf values"),
    file: Optional[str] = typer.Option(None, "--file", help="One leaf per line"),
):
    """Dump every slot of the flat tree array."""
    tree = _build_or_exit(ctx, leaves, file)
    for level in range(tree.levels):
        offset = tree.level_offset(level)
        for i, digest in enumerate(tree.level(level)):
            pad = " (padding)" if level == 0 and tree.is_padding(i) else ""
            typer.echo(f"tree[{offset + i}] level={level} {digest_hex(digest)}{pad}")
    typer.echo(f"root = {tree.root_hex}")


@app.command()
def prove(
    ctx: typer.Context,
    leaf: str = typer.Argument(..., help="Leaf value to prove"),
    leaves: List[str] = typer.Argument(None, help="Leaf values of the tree"),
    file: Optional[str] = typer.Option(None, "--file", help="One leaf per line"),
):
    """Emit the inclusion proof for LEAF as canonical JSON."""
    tree = _build_or_exit(ctx, leaves, file)
    try:
        proof = prove_leaf(tree, leaf)
    except LeafNotFound:
        print(f"[red]Leaf not found: {leaf}[/red]")
        raise typer.Exit(code=1)
    typer.echo(proof.to_model().canonical_json().decode("utf-8"))


@app.command()
def verify(
    ctx: typer.Context,
    leaf: str = typer.Argument(..., help="Claimed leaf value"),
    proof_path: str = typer.Argument(..., help="Proof JSON file"),
    root_hex: str = typer.Argument(..., help="Expected root digest (hex)"),
):
    """Verify a proof file against a root without the tree."""
    engine = _engine(ctx)
    text = pathlib.Path(proof_path).read_text(encoding="utf-8")
    ok = verify_json(leaf, text, root_hex, engine)
    typer.echo(json.dumps({"valid": ok}))
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
