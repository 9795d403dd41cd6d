"""
Custom exceptions for the ordered index.
"""

from typing import Any


class ValidationError(Exception):
    """
    Base class for structural invariant violations found while validating a tree.

    Validation is fail-fast: the first violation aborts the walk.
    """

    def __init__(self, key: Any, message: str):
        """
        Initialize validation error.

        Args:
            key: Key of the node where the violation was detected.
            message: Human readable description.
        """
        self.key = key
        super().__init__(message)


class BSTOrderViolation(ValidationError):
    """Raised when a descendant key is on the wrong side of an ancestor key."""

    def __init__(self, key: Any):
        super().__init__(key, f"Tree with root {key!r} is not a binary search tree")


class BrokenParentPointer(ValidationError):
    """Raised when a child's parent reference does not point back to its parent."""

    def __init__(self, key: Any):
        super().__init__(key, f"Parent pointer broken for key {key!r}")


class RootHasParent(ValidationError):
    """Raised when the node validated as a root still references a parent."""

    def __init__(self, key: Any):
        super().__init__(key, f"The root {key!r} shouldn't have a parent")


class UniqueConstraintViolation(Exception):
    """
    Raised when inserting an existing key into a unique index.
    """

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Can't insert key {key!r}, it violates the unique constraint")
