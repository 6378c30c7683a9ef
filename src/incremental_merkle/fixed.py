"""Merkle tree of a width known up front, filled in any order.

Say you are downloading chunks of a file out of order. If you know the
length of the file and pick a chunk size, you know the width of the tree
ahead of time. Build the tree, then set each chunk as it arrives. Every
subtree that can be hashed is hashed as soon as possible, and references
to the nodes beneath it are dropped.
"""

import logging
import threading
from collections.abc import Callable

from .errors import InvalidWidth
from .hashing import Digest, HashFunction, as_hasher
from .tree import GrowableBinaryTree, TreeStats

logger = logging.getLogger(__name__)

# Called once with the root digest when the last leaf resolves the tree
CompletionCallback = Callable[[Digest], None]


class FixedSizeTree:
    """Merkle tree with a fixed number of leaves."""

    def __init__(
        self,
        width: int,
        hasher: HashFunction | Callable[[bytes], Digest],
        on_complete: CompletionCallback | None = None,
    ):
        if width < 1:
            raise InvalidWidth(width)

        self.hasher = as_hasher(hasher)
        self.on_complete = on_complete
        self._lock = threading.Lock()

        tree = GrowableBinaryTree(self.hasher)
        for _ in range(width):
            tree.add_leaf_node()
        tree.lock()
        self._tree = tree

    @property
    def width(self) -> int:
        return self._tree.width

    @property
    def is_complete(self) -> bool:
        return self._tree.root_digest is not None

    @property
    def stats(self) -> TreeStats:
        return self._tree.stats

    def levels(self) -> int:
        """Return the number of levels of the tree."""
        return self._tree.levels()

    def level_sizes(self) -> list[int]:
        return self._tree.level_sizes()

    def hash(self) -> Digest | None:
        """Return the root digest, or None if some leaves are still missing."""
        return self._tree.root_digest

    def set(self, index: int, value: bytes | str) -> None:
        """
        Set the data for one leaf.

        If this completes the tree, on_complete is called with the root
        digest before this method returns.

        Args:
            index: Leaf index, 0 <= index < width
            value: Raw leaf data (str is UTF-8 encoded)

        Raises:
            IndexOutOfRange: If index is outside the tree
            DuplicateAssignment: If the leaf has already been set
        """
        with self._lock:
            root = self._tree.set(index, value)

        if root is None:
            return

        logger.debug(f"Tree of width {self.width} complete")
        if self.on_complete is not None:
            self.on_complete(root)
