"""A single node of an incrementally resolved merkle tree."""

from __future__ import annotations

from .errors import DuplicateAssignment
from .hashing import Digest, HashFunction


class Node:
    """A vertex of a binary merkle tree.

    Leaves hold a raw value until they are hashed. Internal nodes hold up
    to two children and resolve once both children have digests. A node
    with only a left child is degenerate: it resolves by duplicating its
    left child's digest, but only after the tree marks it duplicable.

    Once a node has a digest it never changes, and the node drops its
    children and value since they are no longer needed.
    """

    __slots__ = ("left", "right", "value", "digest", "duplicable")

    def __init__(self, left: Node | None = None, right: Node | None = None):
        self.left = left
        self.right = right
        self.value: bytes | None = None
        self.digest: Digest | None = None
        self.duplicable = False

    @property
    def resolved(self) -> bool:
        return self.digest is not None

    @property
    def is_degenerate(self) -> bool:
        """True for an unresolved node with a left child and no right child."""
        return self.left is not None and self.right is None

    @property
    def is_empty(self) -> bool:
        """True for a placeholder with no children, value or digest."""
        return (
            self.left is None
            and self.right is None
            and self.value is None
            and self.digest is None
        )

    def assign_leaf(self, value: bytes) -> None:
        """Set this leaf's raw value. Ancestors are not touched."""
        if self.value is not None or self.digest is not None:
            raise DuplicateAssignment()
        self.value = value

    def try_resolve(self, hasher: HashFunction) -> Digest | None:
        """
        Resolve this node's digest if the data for it is available.

        Args:
            hasher: Hash function used for leaves and child pairs

        Returns:
            The digest, or None if the node cannot be resolved yet
        """
        if self.digest is not None:
            return self.digest

        if self.value is not None:
            self.settle(hasher(self.value))
            return self.digest

        digest = self.digest_with(None, None, hasher)
        if digest is not None:
            self.settle(digest)
        return digest

    def digest_with(
        self, child: Node | None, child_digest: Digest | None, hasher: HashFunction
    ) -> Digest | None:
        """
        Compute the digest this node would have if ``child`` had ``child_digest``.

        Nothing is modified, so a failing hasher leaves the node as it was.

        Returns:
            The digest, or None if the other child is not resolved yet
        """
        if self.digest is not None:
            return self.digest
        if self.left is None:
            return None

        left = child_digest if self.left is child else self.left.digest
        if left is None:
            return None

        if self.right is None:
            if not self.duplicable:
                return None
            return hasher.combine(left, left)

        right = child_digest if self.right is child else self.right.digest
        if right is None:
            return None
        return hasher.combine(left, right)

    def settle(self, digest: Digest) -> None:
        """Record this node's digest and drop the data it was computed from."""
        self.digest = digest
        self.value = None
        self.left = None
        self.right = None

    def __repr__(self) -> str:
        if self.digest is not None:
            state = f"digest={self.digest!r}"
        elif self.value is not None:
            state = "leaf, assigned"
        elif self.is_degenerate:
            state = "degenerate"
        elif self.left is not None:
            state = "pending"
        else:
            state = "empty"
        return f"<Node {state}>"
