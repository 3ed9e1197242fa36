"""
merkletree

Binary hash trees over ordered data with compact inclusion proofs.
"""

__version__ = "0.1.0"
