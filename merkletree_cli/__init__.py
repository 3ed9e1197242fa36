"""
merkletree CLI

Command-line interface for building trees, deriving proofs and verifying them.

Usage:
    python -m merkletree_cli build leaves.txt --out tree.json
    python -m merkletree_cli prove tree.json --index 2 --out proof.json
    python -m merkletree_cli verify tree.json --proof proof.json
"""

__version__ = "0.1.0"
