"""
CLI Configuration

Configuration management for the merkletree CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from merkletree.config.runtime import ENV_PREFIX, RuntimeConfig


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Library settings (hash algorithm, skip_hash, logging)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Output
    default_output_format: str = "human"  # "human" or "json"

    @property
    def log_level(self) -> str:
        return self.runtime.log_level

    @property
    def log_file(self) -> str | None:
        return self.runtime.log_file


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    return CLIConfig(
        runtime=RuntimeConfig.from_dict(data),
        default_output_format=data.get("default_output_format", "human"),
    )


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "merkletree.json",
            Path.cwd() / ".merkletree.json",
            Path.home() / ".config" / "merkletree" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config.runtime = config.runtime.with_env_overrides()

    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash_algorithm": "keccak256",
  "skip_hash": false,
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
