"""
CLI Prove Command

Derive the inclusion proof for one leaf of a serialized level table.

Usage:
    merkletree prove tree.json --index 2 [--out proof.json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from merkletree.merkle import LevelTable, prove_leaf, unmarshal_table
from merkletree.schemas.errors import MerkleException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def load_table(tree_path: str) -> LevelTable:
    """
    Read and decode a serialized level table.

    Raises:
        OSError: If the file cannot be read
        DecodingException: If the content is not a level table
    """
    return unmarshal_table(Path(tree_path).read_bytes())


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        table = load_table(args.tree)
        proof = prove_leaf(table, args.index)
    except OSError as e:
        print(f"Error reading tree: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = json.dumps(proof.to_dict(), indent=2)
    logger.info(f"Derived proof for leaf {args.index} with {len(proof.path)} steps")

    if args.out:
        Path(args.out).write_text(document + "\n", encoding="utf-8")
        if args.json:
            print(json.dumps({"index": proof.index, "out": args.out, "steps": len(proof.path)}))
        else:
            print(f"Wrote proof for leaf {proof.index} to {args.out}")
    else:
        print(document)

    return EXIT_SUCCESS
