"""Exceptions raised by the binary search tree."""


class TreeError(Exception):
    """Base class for tree errors."""


class InvalidKeyError(TreeError, ValueError):
    """Raised when a public operation is given a ``None`` key."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} called with a None key")
        self.operation = operation


class TreeStructureError(TreeError, RuntimeError):
    """Raised when the invariant checker finds a corrupted tree.

    Not recoverable: the tree must be discarded.
    """

    def __init__(self, message: str, key=None) -> None:
        super().__init__(message)
        self.key = key
