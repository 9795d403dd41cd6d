"""
Abstract base classes for ordered indexes.
"""

from ordered_index.interfaces.range_iterable import RangeIterable
from ordered_index.interfaces.sorted_index import SortedIndex

__all__ = ["RangeIterable", "SortedIndex"]
