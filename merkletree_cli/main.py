"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkletree_cli build leaves.txt [--hash sha256] [--sort] [--out tree.json]
    python -m merkletree_cli prove tree.json --index 2 [--out proof.json]
    python -m merkletree_cli verify tree.json --proof proof.json [--payload TEXT]
    python -m merkletree_cli config --init

Environment Variables:
    MERKLETREE_HASH_ALGORITHM   Digest algorithm: keccak256 (default) or sha256
    MERKLETREE_SKIP_HASH        Treat input leaves as pre-hashed (default: false)
    MERKLETREE_LOG_LEVEL        Log level (default: INFO)
    MERKLETREE_LOG_FILE         Optional log file
    MERKLETREE_OUTPUT_FORMAT    human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkletree.crypto.hashing import HASH_FUNCTIONS
from merkletree_cli import __version__
from merkletree_cli.commands import build, prove, verify
from merkletree_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    hash_choices = sorted(HASH_FUNCTIONS)

    parser = argparse.ArgumentParser(
        prog="merkletree",
        description="Build Merkle trees, derive inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkletree.json or ~/.config/merkletree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree from leaf payloads",
        description="Hash one leaf per input line and write the serialized level table.",
    )
    build_parser.add_argument(
        "input",
        type=str,
        help="File with one leaf per line, or '-' for stdin",
    )
    build_parser.add_argument(
        "--hash",
        type=str,
        choices=hash_choices,
        default=None,
        help="Digest algorithm (default: from config, keccak256)",
    )
    build_parser.add_argument(
        "--digests",
        action="store_true",
        default=False,
        help="Input lines are 0x-prefixed leaf digests; skip leaf hashing",
    )
    build_parser.add_argument(
        "--sort",
        action="store_true",
        default=False,
        help="Sort leaves by digest before building",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for the serialized level table",
    )
    build_parser.add_argument(
        "--root-out",
        type=str,
        default=None,
        help="Output path for the serialized root node graph",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Derive the inclusion proof for a leaf",
        description="Derive the sibling path of one leaf from a serialized level table.",
    )
    prove_parser.add_argument(
        "tree",
        type=str,
        help="Path to a serialized level table",
    )
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Leaf offset to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for the proof document (default: stdout)",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof",
        description="Recompute the root from a leaf and its proof and compare it to the tree.",
    )
    verify_parser.add_argument(
        "tree",
        type=str,
        help="Path to a serialized level table",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Path to a proof document written by 'prove'",
    )
    leaf_group = verify_parser.add_mutually_exclusive_group()
    leaf_group.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Claimed leaf digest (0x hex); defaults to the digest in the proof",
    )
    leaf_group.add_argument(
        "--payload",
        type=str,
        default=None,
        help="Claimed leaf payload (UTF-8 text), hashed before verifying",
    )
    verify_parser.add_argument(
        "--hash",
        type=str,
        choices=hash_choices,
        default=None,
        help="Digest algorithm the tree was built with",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkletree.json",
        help="Path for config file (default: merkletree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLETREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = config.runtime.to_dict()
        config_dict["default_output_format"] = config.default_output_format
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: merkletree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
