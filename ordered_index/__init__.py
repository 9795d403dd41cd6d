"""
In-memory ordered index built on binary search tree nodes.

This package provides:
- Node - abstract tree node with search, range query, traversal and validation
- BinarySearchTree - unbalanced index mapping keys to lists of values
- Range queries with $gt, $gte, $lt, $lte and $ne constraints
"""

from ordered_index.models.bounds import Bound, BoundType, RangeQuery
from ordered_index.models.comparators import KeyComparator
from ordered_index.models.exceptions import (
    BrokenParentPointer,
    BSTOrderViolation,
    RootHasParent,
    UniqueConstraintViolation,
    ValidationError,
)
from ordered_index.models.node import Node
from ordered_index.models.sortedcontainers import BinarySearchTree, BSTNode

__all__ = [
    "Bound",
    "BoundType",
    "BrokenParentPointer",
    "BSTNode",
    "BSTOrderViolation",
    "BinarySearchTree",
    "KeyComparator",
    "Node",
    "RangeQuery",
    "RootHasParent",
    "UniqueConstraintViolation",
    "ValidationError",
]
