"""
RangeIterable protocol for indexes that support ordered iteration over a key range.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator, Mapping
from typing import Any


class RangeIterable(ABC):
    """
    Protocol for data structures that support iteration over a range of keys.

    Implementations must support:
    - Full iteration via __iter__
    - Constraint-bounded iteration via iterator(query)
    - Async iteration via __aiter__
    - Async constraint-bounded iteration via async_iterator(query)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[tuple[Any, list[Any]]]:
        """Return an iterator over all (key, values) pairs in ascending key order."""
        pass

    @abstractmethod
    def iterator(
        self, query: Mapping[str, Any] | None = None
    ) -> Iterator[tuple[Any, list[Any]]]:
        """
        Return an iterator over (key, values) pairs matching query.

        Args:
            query: Constraint mapping with optional $gt, $gte, $lt, $lte and $ne.
                If None, iterates over every key.

        Returns:
            Iterator yielding (key, values) tuples in ascending key order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[tuple[Any, list[Any]]]:
        """Return an async iterator over all (key, values) pairs in ascending key order."""
        pass

    @abstractmethod
    def async_iterator(
        self, query: Mapping[str, Any] | None = None
    ) -> AsyncIterator[tuple[Any, list[Any]]]:
        """
        Return an async iterator over (key, values) pairs matching query.

        Args:
            query: Constraint mapping with optional $gt, $gte, $lt, $lte and $ne.
                If None, iterates over every key.

        Returns:
            AsyncIterator yielding (key, values) tuples in ascending key order.
        """
        pass
