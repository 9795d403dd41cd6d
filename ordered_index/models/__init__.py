"""
Data models for the ordered index.
"""

from ordered_index.models.bounds import Bound, BoundType, RangeQuery
from ordered_index.models.comparators import KeyComparator
from ordered_index.models.node import Node

__all__ = [
    "Bound",
    "BoundType",
    "KeyComparator",
    "Node",
    "RangeQuery",
]
