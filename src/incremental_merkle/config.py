"""Configuration management for Incremental Merkle."""

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from . import CONFIG_FILE, ENV_PREFIX
from .hashing import HashFunction, get_hasher, is_supported


class MerkleConfig(BaseModel):
    """Configuration for Incremental Merkle."""

    version: int = 1
    hash_algorithm: str = "sha256"
    digest_format: Literal["hex", "raw"] = "hex"
    chunk_size: int = Field(default=1024 * 1024, ge=1)

    @field_validator("hash_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        value = value.lower()
        if not is_supported(value):
            raise ValueError(f"unknown hash algorithm: {value!r}")
        return value

    def hasher(self) -> HashFunction:
        """Build the configured hash function."""
        return get_hasher(self.hash_algorithm, self.digest_format)


def get_config_path(project_root: Path) -> Path:
    """Get the config file path."""
    return project_root / CONFIG_FILE


def load_config(project_root: Path) -> MerkleConfig:
    """Load configuration from the project's config file.

    Falls back to defaults if file doesn't exist.
    Environment variables can override config values.
    """
    config_path = get_config_path(project_root)

    if config_path.exists():
        with open(config_path) as f:
            data = json.load(f)
        config = MerkleConfig.model_validate(data)
    else:
        config = MerkleConfig()

    return _apply_env_overrides(config)


def save_config(config: MerkleConfig, project_root: Path) -> None:
    """Save configuration to the project's config file."""
    config_path = get_config_path(project_root)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config.model_dump(), f, indent=2)


def _apply_env_overrides(config: MerkleConfig) -> MerkleConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    # IMERKLE_HASH_ALGORITHM
    if algorithm := os.environ.get(f"{ENV_PREFIX}HASH_ALGORITHM"):
        data["hash_algorithm"] = algorithm

    # IMERKLE_CHUNK_SIZE
    if chunk_size := os.environ.get(f"{ENV_PREFIX}CHUNK_SIZE"):
        data["chunk_size"] = chunk_size

    return MerkleConfig.model_validate(data)
