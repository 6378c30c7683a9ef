"""Hash functions used to build merkle trees."""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Literal

from .errors import UnknownHashAlgorithm

# Hex digests (str) or raw digests (bytes), depending on the hasher
Digest = str | bytes
DigestFormat = Literal["hex", "raw"]


class HashFunction(ABC):
    """Abstract base class for hash functions.

    A hash function must be deterministic and synchronous, and return
    digests of one consistent type for its whole lifetime.
    """

    @abstractmethod
    def digest(self, data: bytes) -> Digest:
        """
        Hash a byte sequence.

        Args:
            data: Bytes to hash

        Returns:
            The digest, as hex text or raw bytes
        """
        ...

    def __call__(self, data: bytes) -> Digest:
        return self.digest(data)

    def combine(self, left: Digest, right: Digest) -> Digest:
        """Hash two child digests, always left then right."""
        return self.digest(to_bytes(left + right))


class HashlibHasher(HashFunction):
    """Hash function backed by any algorithm in hashlib."""

    def __init__(self, algorithm: str = "sha256", output: DigestFormat = "hex"):
        algorithm = algorithm.lower()
        if not is_supported(algorithm):
            raise UnknownHashAlgorithm(algorithm)
        self.algorithm = algorithm
        self.output = output

    def digest(self, data: bytes) -> Digest:
        h = hashlib.new(self.algorithm, data)
        if self.output == "raw":
            return h.digest()
        return h.hexdigest()

    def __repr__(self) -> str:
        return f"HashlibHasher({self.algorithm!r}, output={self.output!r})"


class CallableHasher(HashFunction):
    """Adapts a plain ``bytes -> digest`` callable."""

    def __init__(self, func: Callable[[bytes], Digest]):
        self.func = func

    def digest(self, data: bytes) -> Digest:
        return self.func(data)


def is_supported(algorithm: str) -> bool:
    """Check hashlib offers a fixed-length digest for the algorithm."""
    algorithm = algorithm.lower()
    # shake_* digests need an explicit length
    return algorithm in hashlib.algorithms_available and not algorithm.startswith("shake_")


def to_bytes(value: str | bytes) -> bytes:
    """Encode text as UTF-8 and copy bytes-like objects to bytes.

    Raises TypeError for anything else, integers included.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bytes):
        return value
    try:
        return bytes(memoryview(value))
    except TypeError:
        raise TypeError(
            f"leaf data must be bytes-like or str, not {type(value).__name__}"
        ) from None


def as_hasher(hasher: HashFunction | Callable[[bytes], Digest]) -> HashFunction:
    """Wrap a plain callable so it can be used as a HashFunction."""
    if isinstance(hasher, HashFunction):
        return hasher
    if not callable(hasher):
        raise TypeError(f"hasher must be callable, got {type(hasher).__name__}")
    return CallableHasher(hasher)


def get_hasher(algorithm: str = "sha256", output: DigestFormat = "hex") -> HashFunction:
    """Get a hash function for a hashlib algorithm name."""
    return HashlibHasher(algorithm, output)
