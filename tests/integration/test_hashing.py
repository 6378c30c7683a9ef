"""Tests for hash function adapters."""

import hashlib

import pytest

from incremental_merkle.errors import UnknownHashAlgorithm
from incremental_merkle.hashing import (
    CallableHasher,
    HashFunction,
    HashlibHasher,
    as_hasher,
    get_hasher,
    is_supported,
    to_bytes,
)
from tests.conftest import md5_hex


class TestHashlibHasher:
    def test_hex_output(self):
        assert get_hasher("md5")(b"hello") == md5_hex(b"hello")

    def test_raw_output(self):
        hasher = get_hasher("sha256", output="raw")
        assert hasher(b"hello") == hashlib.sha256(b"hello").digest()

    def test_algorithm_name_is_case_insensitive(self):
        assert HashlibHasher("SHA256").algorithm == "sha256"

    @pytest.mark.parametrize("name", ["not-a-hash", "shake_128"])
    def test_unknown_algorithm(self, name: str):
        with pytest.raises(UnknownHashAlgorithm):
            get_hasher(name)
        assert not is_supported(name)

    def test_combine_hex(self):
        hasher = get_hasher("md5")
        left, right = hasher(b"hello"), hasher(b"world")
        assert hasher.combine(left, right) == "ae802c1f58f394d46485b7da18c56e9b"

    def test_combine_raw(self):
        hasher = get_hasher("md5", output="raw")
        left, right = hasher(b"a"), hasher(b"b")
        assert hasher.combine(left, right) == hashlib.md5(left + right).digest()


class TestAsHasher:
    def test_wraps_callable(self):
        hasher = as_hasher(md5_hex)
        assert isinstance(hasher, CallableHasher)
        assert hasher.digest(b"x") == md5_hex(b"x")

    def test_passes_hash_function_through(self):
        hasher = get_hasher("md5")
        assert as_hasher(hasher) is hasher

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            as_hasher("md5")

    def test_custom_subclass(self):
        class Upper(HashFunction):
            def digest(self, data: bytes) -> str:
                return data.decode().upper()

        assert as_hasher(Upper()).combine("ab", "cd") == "ABCD"


def test_to_bytes():
    assert to_bytes("héllo") == "héllo".encode("utf-8")
    assert to_bytes(b"\x00\x01") == b"\x00\x01"


@pytest.mark.parametrize("value", [3, None, 2.0])
def test_to_bytes_rejects_non_bytes(value):
    with pytest.raises(TypeError):
        to_bytes(value)


def test_to_bytes_bytes_like():
    assert to_bytes(bytearray(b"ab")) == b"ab"
    assert to_bytes(memoryview(b"cd")) == b"cd"
