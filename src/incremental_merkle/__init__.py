"""Incremental Merkle - Merkle roots over leaves that arrive out of order."""

__version__ = "0.1.0"

# File and environment constants
CONFIG_FILE = ".incremental-merkle.json"
ENV_PREFIX = "IMERKLE_"

from .errors import (  # noqa: E402
    DuplicateAssignment,
    IndexOutOfRange,
    InvalidWidth,
    MerkleError,
    TreeLocked,
    UnknownHashAlgorithm,
)
from .fixed import FixedSizeTree  # noqa: E402
from .hashing import HashFunction, HashlibHasher, get_hasher  # noqa: E402
from .tree import GrowableBinaryTree  # noqa: E402

__all__ = [
    "DuplicateAssignment",
    "FixedSizeTree",
    "GrowableBinaryTree",
    "HashFunction",
    "HashlibHasher",
    "IndexOutOfRange",
    "InvalidWidth",
    "MerkleError",
    "TreeLocked",
    "UnknownHashAlgorithm",
    "get_hasher",
]
