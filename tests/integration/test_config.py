"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from incremental_merkle import CONFIG_FILE
from incremental_merkle.config import MerkleConfig, load_config, save_config


class TestConfig:
    def test_defaults(self, clean_env: Path):
        config = load_config(clean_env)
        assert config.hash_algorithm == "sha256"
        assert config.digest_format == "hex"
        assert config.chunk_size == 1024 * 1024

    def test_save_and_load(self, clean_env: Path):
        save_config(MerkleConfig(hash_algorithm="md5", chunk_size=16), clean_env)
        assert (clean_env / CONFIG_FILE).exists()

        config = load_config(clean_env)
        assert config.hash_algorithm == "md5"
        assert config.chunk_size == 16

    def test_env_overrides(self, clean_env: Path, monkeypatch):
        save_config(MerkleConfig(hash_algorithm="md5"), clean_env)
        monkeypatch.setenv("IMERKLE_HASH_ALGORITHM", "sha1")
        monkeypatch.setenv("IMERKLE_CHUNK_SIZE", "4096")

        config = load_config(clean_env)
        assert config.hash_algorithm == "sha1"
        assert config.chunk_size == 4096

    def test_rejects_unknown_algorithm(self):
        with pytest.raises(ValidationError):
            MerkleConfig(hash_algorithm="not-a-hash")

    def test_rejects_zero_chunk_size(self):
        with pytest.raises(ValidationError):
            MerkleConfig(chunk_size=0)

    def test_hasher(self):
        hasher = MerkleConfig(hash_algorithm="md5").hasher()
        assert hasher(b"hello") == "5d41402abc4b2a76b9719d911017c592"
