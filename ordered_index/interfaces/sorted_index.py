"""
SortedIndex abstract base class for ordered key to values indexes.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

from ordered_index.interfaces.range_iterable import RangeIterable


class SortedIndex(RangeIterable):
    """
    Abstract base class for ordered indexes mapping each key to a list of values.

    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - BinarySearchTree: Unbalanced tree, O(height) operations
    """

    @abstractmethod
    def insert(self, key: Any, value: Any) -> None:
        """
        Store value under key.

        Args:
            key: The key to insert.
            value: The value to append to the key's values.

        Raises:
            UniqueConstraintViolation: If the index is unique and key exists.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def delete(self, key: Any, value: Any = None) -> bool:
        """
        Remove a key, or a single value stored under it.

        Args:
            key: The key to remove.
            value: If given, only matching values are removed while others remain.

        Returns:
            True if something was removed, False otherwise.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def search(self, key: Any) -> list[Any]:
        """
        Retrieve the values stored under key.

        Args:
            key: The key to look up.

        Returns:
            The values, or an empty list if key is absent.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def query(self, query: Mapping[str, Any] | None = None) -> list[Any]:
        """
        Retrieve values for every key matching the constraints.

        Args:
            query: Mapping with optional $gt, $gte, $lt, $lte and $ne.

        Returns:
            Values in ascending key order.
        """
        pass

    @abstractmethod
    def has(self, key: Any) -> bool:
        """
        Check if a key exists.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of keys.

        Time complexity: O(1)
        """
        pass
