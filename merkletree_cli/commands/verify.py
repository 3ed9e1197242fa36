"""
CLI Verify Command

Verify an inclusion proof against a serialized level table.

Usage:
    merkletree verify tree.json --proof proof.json [--leaf 0x...] [--payload TEXT] [--hash ALG]

Exit codes: 0 when the proof verifies against the tree root it names, 2 when
it does not, 1 on errors.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from merkletree.crypto.hashing import from_hex, get_hash_func, hash_with, to_hex
from merkletree.merkle import MerkleProof, verify_proof
from merkletree.schemas.errors import MerkleException
from merkletree_cli.commands.prove import load_table


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    tree_path: str = ""
    index: int = 0
    leaf: str = ""
    root: str = ""
    root_matches_proof: bool = False
    verified: bool = False
    errors: list[str] = field(default_factory=list)
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        if d["error"] is None:
            del d["error"]
        return d


def load_proof(proof_path: str) -> MerkleProof:
    """
    Read a proof document written by the prove command.

    Raises:
        OSError: If the file cannot be read
        DecodingException: If the document is malformed
    """
    with open(proof_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return MerkleProof.from_dict(data)


def print_summary_human(summary: VerifySummary) -> None:
    print(f"tree: {summary.tree_path}")
    print(f"index: {summary.index}")
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"verified: {str(summary.verified).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    algorithm = args.hash or args.cli_config.runtime.hash_algorithm
    hash_func = get_hash_func(algorithm)
    output_json = args.json or args.cli_config.default_output_format == "json"

    if not Path(args.tree).exists():
        print(f"Error: Tree not found: {args.tree}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        table = load_table(args.tree)
        proof = load_proof(args.proof)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        if args.payload is not None:
            leaf = hash_with(hash_func, args.payload.encode("utf-8"))
        elif args.leaf is not None:
            leaf = from_hex(args.leaf)
        else:
            leaf = proof.leaf
    except (ValueError, MerkleException) as e:
        print(f"Error: invalid leaf: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        tree_path=args.tree,
        index=proof.index,
        leaf=to_hex(leaf),
    )

    try:
        summary.root = to_hex(table.root_digest())
        summary.root_matches_proof = table.root_digest() == proof.root
        leaf_verifies = verify_proof(table, proof.path, leaf, hash_func)
    except MerkleException as e:
        logger.debug(f"Verification aborted: {e!r}")
        summary.errors.append(e.message)
        summary.error = e.to_error_model().model_dump()
        if output_json:
            print(json.dumps(summary.to_dict(), indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # A proof issued against another root does not verify, even if the leaf does
    summary.verified = leaf_verifies and summary.root_matches_proof
    if not summary.root_matches_proof:
        summary.errors.append("Proof was issued against a different root")

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.verified else EXIT_VERIFICATION_FAILED
