"""Shared test fixtures for incremental-merkle."""

import hashlib

import pytest
from click.testing import CliRunner


def md5_hex(data: bytes) -> str:
    """Reference hash function: MD5 as lowercase hex."""
    return hashlib.md5(data).hexdigest()


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def md5():
    """MD5 hex hasher used by the reference vectors."""
    return md5_hex


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no IMERKLE_* overrides."""
    monkeypatch.delenv("IMERKLE_HASH_ALGORITHM", raising=False)
    monkeypatch.delenv("IMERKLE_CHUNK_SIZE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
