"""Binary merkle tree that grows one leaf at a time and resolves out of order.

Leaves are added bottom-up with add_leaf_node(). A tree with two leaves
looks like this:

     O
    / \\
   O   O

A tree with three leaves has a degenerate node (one child) on the right:

        O
      /   \\
     O     O
    / \\   /
   O   O O

A tree with five leaves:

            O
          /   \\
         /     \\
        O       O
      /   \\      \\
     O     O      O
    / \\   / \\   /
   O   O O   O O

As leaves are added the tree grows upward and the root changes. Once the
shape is final, lock() lets degenerate nodes resolve by hashing their lone
child's digest twice.

When a node resolves, its children are dropped from the tree, so memory
is proportional to the unresolved part of the tree plus one assigned flag
per leaf.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from dataclasses import dataclass

from .errors import DuplicateAssignment, IndexOutOfRange, TreeLocked
from .hashing import Digest, HashFunction, as_hasher, to_bytes
from .node import Node

logger = logging.getLogger(__name__)


@dataclass
class TreeStats:
    """Counters for a tree's resolution progress."""

    leaves_added: int = 0
    leaves_assigned: int = 0
    nodes_resolved: int = 0  # Leaves and internal nodes that have a digest

    @property
    def leaves_pending(self) -> int:
        return self.leaves_added - self.leaves_assigned


def level_sizes_for(width: int) -> list[int]:
    """Level sizes, leaves first, of a tree with the given number of leaves."""
    if width < 1:
        return [0]
    sizes = [width]
    while sizes[-1] > 1:
        sizes.append((sizes[-1] + 1) // 2)
    return sizes


class GrowableBinaryTree:
    """Merkle tree that is grown leaf by leaf, then locked.

    Nodes are kept in an arena of levels, level 0 being the leaves. The
    node at (level, position) has its parent at (level + 1, position // 2).
    Slots of nodes whose parent has resolved are set to None.
    """

    def __init__(self, hasher: HashFunction | Callable[[bytes], Digest]):
        self.hasher = as_hasher(hasher)
        self.stats = TreeStats()
        self._levels: list[list[Node | None]] = [[]]
        self._assigned = bytearray()
        self._locked = False
        self._completed = False

    @property
    def width(self) -> int:
        """Number of leaves."""
        return len(self._levels[0])

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def root_digest(self) -> Digest | None:
        """The root digest, or None until the tree is locked and fully resolved."""
        if not self._completed:
            return None
        root = self.root()
        return root.digest if root is not None else None

    def levels(self) -> int:
        """Return the number of levels of the tree."""
        return len(self._levels)

    def level_sizes(self) -> list[int]:
        """Return the number of nodes on each level, leaves first."""
        return [len(row) for row in self._levels]

    def root(self) -> Node | None:
        """
        Return the current root node.

        This may change every time add_leaf_node() is called, so only rely
        on it once all leaves have been added.
        """
        if not self._levels[0]:
            return None
        return self._levels[-1][0]

    def node_at(self, level: int, position: int) -> Node | None:
        """Return the node at the given level and position, or None once released."""
        return self._levels[level][position]

    def is_assigned(self, index: int) -> bool:
        """Check whether a leaf has been set."""
        return bool(self._assigned[index])

    def add_leaf_node(self) -> int:
        """
        Add a new leaf to the bottom right of the tree.

        Returns:
            Index of the new leaf

        Raises:
            TreeLocked: If lock() has already been called
        """
        if self._locked:
            raise TreeLocked(f"tree is locked at width {self.width}; cannot add leaves")

        self._add_node(0, Node())
        self._assigned.append(0)
        self.stats.leaves_added += 1
        return self.width - 1

    def _add_node(self, level: int, node: Node) -> None:
        """Append a node to a level, creating or completing its parent.

        Recurses at most once per level.
        """
        row = self._levels[level]
        row.append(node)
        size = len(row)

        if size == 1:
            # Sole node on the top level: provisional root
            return

        if size == 2:
            self._levels.append([Node(row[0], row[1])])
            return

        if size % 2 == 0:
            # Complete the degenerate parent created for the previous node
            self._levels[level + 1][-1].right = node
            return

        self._add_node(level + 1, Node(left=node))

    def lock(self) -> Digest | None:
        """
        Finalize the tree's shape.

        Degenerate nodes become resolvable by duplication, and any node
        whose children were resolved before locking is resolved now.
        Calling lock() again has no effect.

        Returns:
            The root digest if this call resolved it, otherwise None
        """
        if self._locked:
            return None
        self._locked = True

        duplicable = 0
        for level in range(1, len(self._levels)):
            for position, node in enumerate(self._levels[level]):
                if node is None or node.resolved:
                    continue
                if node.is_degenerate:
                    node.duplicable = True
                    duplicable += 1
                # Bottom-up, so children are already as resolved as they can be
                if node.try_resolve(self.hasher) is not None:
                    self.stats.nodes_resolved += 1
                    self._release_children(level, position)

        logger.debug(
            f"Locked tree: width={self.width} levels={self.levels()} duplicable={duplicable}"
        )

        root = self.root()
        if root is not None and root.resolved:
            return self._complete()
        return None

    def set(self, index: int, value: bytes | str) -> Digest | None:
        """
        Assign a leaf's value and resolve as many ancestors as possible.

        All hashing is done before any node changes, so if the hasher
        raises, the tree is left exactly as it was.

        Args:
            index: Leaf index, 0 <= index < width
            value: Raw leaf data, bytes-like or str

        Returns:
            The root digest if this call completed the tree, otherwise None

        Raises:
            IndexOutOfRange: If index is outside the tree
            DuplicateAssignment: If the leaf has already been set
            TypeError: If value is not bytes-like or str
        """
        index = operator.index(index)
        width = self.width
        if index < 0 or index >= width:
            logger.debug(f"Rejected leaf {index}: out of range for width {width}")
            raise IndexOutOfRange(index, width)

        data = to_bytes(value)
        if self._assigned[index]:
            logger.debug(f"Rejected leaf {index}: already set")
            raise DuplicateAssignment(index)

        chain = self._hash_chain(index, data)

        self._assigned[index] = 1
        self.stats.leaves_assigned += 1
        for level, (position, node, digest) in enumerate(chain):
            node.settle(digest)
            self.stats.nodes_resolved += 1
            if level > 0:
                self._release_children(level, position)

        if len(chain) < len(self._levels):
            return None
        return self._complete()

    def _hash_chain(self, index: int, data: bytes) -> list[tuple[int, Node, Digest]]:
        """
        Hash a leaf and every ancestor it makes resolvable, without changing them.

        Returns:
            (position, node, digest) for each level, leaf first, up to the
            first ancestor still missing data
        """
        node = self._levels[0][index]
        digest = self.hasher(data)
        chain = [(index, node, digest)]

        position = index
        for level in range(1, len(self._levels)):
            position //= 2
            parent = self._levels[level][position]
            digest = parent.digest_with(node, digest, self.hasher)
            if digest is None:
                break
            chain.append((position, parent, digest))
            node = parent
        return chain

    def _release_children(self, level: int, position: int) -> None:
        """Drop the children of a resolved node from the level below."""
        below = self._levels[level - 1]
        for child in (2 * position, 2 * position + 1):
            if child < len(below):
                below[child] = None

    def _complete(self) -> Digest | None:
        """Report the root digest, once, and only for a locked tree."""
        if not self._locked or self._completed:
            return None
        self._completed = True
        digest = self.root_digest
        logger.debug(f"Resolved merkle root for width {self.width}: {digest!r}")
        return digest
