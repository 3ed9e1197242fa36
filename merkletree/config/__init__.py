"""
Runtime Configuration Module

Provides build options and configuration loading.
"""

from .runtime import BuildOptions, RuntimeConfig

__all__ = [
    "BuildOptions",
    "RuntimeConfig",
]
