"""Exceptions raised by incremental merkle trees.

All of these signal caller misuse. None of them leave a tree in a
different state than it was before the failing call.
"""


class MerkleError(Exception):
    """Base exception for merkle tree errors."""

    pass


class InvalidWidth(MerkleError, ValueError):
    """A fixed-size tree was asked for fewer than one leaf."""

    def __init__(self, width: int):
        self.width = width
        super().__init__(f"width cannot be less than 1 (got {width})")


class IndexOutOfRange(MerkleError, IndexError):
    """A leaf index outside ``[0, width)``."""

    def __init__(self, index: int, width: int):
        self.index = index
        self.width = width
        if width == 0:
            message = f"tree has no leaves; cannot set index {index}"
        else:
            message = f"index {index} is outside [0, {width - 1}]"
        super().__init__(message)


class DuplicateAssignment(MerkleError):
    """A leaf was assigned a second time."""

    def __init__(self, index: int | None = None):
        self.index = index
        if index is None:
            message = "leaf data can only be set once"
        else:
            message = f"leaf {index} has already been set"
        super().__init__(message)


class TreeLocked(MerkleError):
    """The tree shape is final and no more leaves may be added."""

    pass


class UnknownHashAlgorithm(MerkleError, ValueError):
    """hashlib does not provide the requested algorithm."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"unknown hash algorithm: {algorithm!r}")
