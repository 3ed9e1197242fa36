"""
CLI command modules.
"""

from merkletree_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
