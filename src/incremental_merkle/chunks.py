"""Split files into fixed-size chunks and hash them as merkle leaves."""

import random
from pathlib import Path
from typing import Literal

from .fixed import FixedSizeTree
from .hashing import Digest, HashFunction

ChunkOrder = Literal["sequential", "reverse", "shuffle"]


def chunk_count(size: int, chunk_size: int) -> int:
    """Number of chunks for a file of the given size.

    An empty file is a single empty chunk, so every file has a root.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1 (got {chunk_size})")
    if size <= 0:
        return 1
    return -(-size // chunk_size)


def read_chunk(path: Path, index: int, chunk_size: int) -> bytes:
    """Read one chunk of a file by index."""
    with open(path, "rb") as f:
        f.seek(index * chunk_size)
        return f.read(chunk_size)


def chunk_indices(count: int, order: ChunkOrder = "sequential", seed: int | None = None) -> list[int]:
    """Return chunk indices in the order they should be fed to a tree."""
    indices = list(range(count))
    if order == "reverse":
        indices.reverse()
    elif order == "shuffle":
        random.Random(seed).shuffle(indices)
    return indices


def file_root(
    path: Path,
    hasher: HashFunction,
    chunk_size: int,
    order: ChunkOrder = "sequential",
    seed: int | None = None,
) -> tuple[Digest, FixedSizeTree]:
    """
    Compute a file's merkle root from its chunks.

    Args:
        path: File to hash
        hasher: Hash function for leaves and nodes
        chunk_size: Bytes per leaf
        order: Order in which chunks are read and set
        seed: Seed for the shuffle order

    Returns:
        Tuple of (root digest, the completed tree)
    """
    count = chunk_count(path.stat().st_size, chunk_size)
    completed: list[Digest] = []
    tree = FixedSizeTree(count, hasher, on_complete=completed.append)

    for index in chunk_indices(count, order, seed):
        tree.set(index, read_chunk(path, index, chunk_size))

    # Every index was set exactly once, so the callback has fired
    return completed[0], tree
