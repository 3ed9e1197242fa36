"""
CLI Build Command

Build a Merkle tree from a file of leaf payloads (one per line) and write
the serialized level table.

Usage:
    merkletree build leaves.txt [--hash sha256] [--sort] [--out tree.json]
    merkletree build digests.txt --digests --out tree.json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from merkletree.crypto.hashing import from_hex, get_hash_func, to_hex
from merkletree.merkle import Leaves, build_tree, marshal_node, marshal_table
from merkletree.schemas.errors import MerkleException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    input_path: str = ""
    hash_algorithm: str = ""
    leaf_count: int = 0
    padded: bool = False
    height: int = 0
    widths: list[int] | None = None
    root: str = ""
    out: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["out"] is None:
            del d["out"]
        return d


def read_lines(input_path: str) -> list[str]:
    """Read non-empty lines from a file, or stdin when the path is '-'."""
    if input_path == "-":
        text = sys.stdin.read()
    else:
        text = Path(input_path).read_text(encoding="utf-8")
    return [line for line in text.splitlines() if line != ""]


def load_leaves(lines: list[str], digests: bool) -> Leaves:
    """Turn input lines into leaves: raw UTF-8 payloads or 0x digests."""
    if digests:
        return Leaves.from_digests(from_hex(line.strip()) for line in lines)
    return Leaves.from_payloads(line.encode("utf-8") for line in lines)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    runtime = args.cli_config.runtime
    algorithm = args.hash or runtime.hash_algorithm
    hash_func = get_hash_func(algorithm)
    output_json = args.json or args.cli_config.default_output_format == "json"
    # Pre-hashed input: lines are 0x leaf digests
    skip_hash = args.digests or runtime.skip_hash

    try:
        lines = read_lines(args.input)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        leaves = load_leaves(lines, skip_hash)
    except ValueError as e:
        print(f"Error parsing digests: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.sort:
        if not skip_hash:
            leaves.hash_payloads(hash_func)
            skip_hash = True
        leaves.sort_by_digest()

    original_count = len(leaves)
    logger.info(f"Building tree over {original_count} leaves with {algorithm}")

    try:
        table, root = build_tree(leaves, hash_func=hash_func, skip_hash=skip_hash)
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        Path(args.out).write_bytes(marshal_table(table))
        logger.info(f"Wrote level table to {args.out}")
    if args.root_out:
        Path(args.root_out).write_bytes(marshal_node(root))
        logger.info(f"Wrote root node to {args.root_out}")

    summary = BuildSummary(
        input_path=args.input,
        hash_algorithm=algorithm,
        leaf_count=len(leaves),
        padded=len(leaves) != original_count,
        height=table.height(),
        widths=table.widths(),
        root=to_hex(table.root_digest()),
        out=args.out,
    )

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"leaves: {summary.leaf_count}{' (padded)' if summary.padded else ''}")
        print(f"height: {summary.height}")
        print(f"root: {summary.root}")
        if args.out is None:
            print(marshal_table(table).decode("utf-8"))

    return EXIT_SUCCESS
