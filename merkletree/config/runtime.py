"""
Runtime Configuration

Build options for the tree builder and the settings they are derived from.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkletree.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunc,
    get_hash_func,
    keccak256,
)

load_dotenv()

ENV_PREFIX = "MERKLETREE_"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BuildOptions:
    """
    Options for a single tree build.

    Attributes:
        hash_func: Digest provider used for leaves and internal nodes
        skip_hash: Trust pre-populated leaf digests instead of hashing payloads
    """
    hash_func: HashFunc = keccak256
    skip_hash: bool = False

    def with_hash_func(self, hash_func: HashFunc) -> "BuildOptions":
        return replace(self, hash_func=hash_func)

    def with_skip_hash(self, skip_hash: bool) -> "BuildOptions":
        return replace(self, skip_hash=skip_hash)


@dataclass
class RuntimeConfig:
    """
    Library configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    skip_hash: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLETREE_HASH_ALGORITHM: keccak256 or sha256
        - MERKLETREE_SKIP_HASH: Trust leaf digests (true/false)
        - MERKLETREE_LOG_LEVEL: Log level name
        - MERKLETREE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}SKIP_HASH"):
            overrides["skip_hash"] = _env_flag(os.getenv(f"{ENV_PREFIX}SKIP_HASH", "false"))
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        skip_hash = data.get("skip_hash", False)
        if isinstance(skip_hash, str):
            skip_hash = _env_flag(skip_hash)

        config = cls(
            hash_algorithm=data.get("hash_algorithm") or DEFAULT_HASH_ALGORITHM,
            skip_hash=bool(skip_hash),
            log_level=data.get("log_level") or "INFO",
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )
        # Fail early on unknown algorithms
        get_hash_func(config.hash_algorithm)
        return config

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        get_hash_func(new_config.hash_algorithm)
        return new_config

    def build_options(self) -> BuildOptions:
        """Resolve this configuration into BuildOptions."""
        return BuildOptions(
            hash_func=get_hash_func(self.hash_algorithm),
            skip_hash=self.skip_hash,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "skip_hash": self.skip_hash,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }
