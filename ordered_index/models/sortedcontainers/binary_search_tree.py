"""
Binary search tree index built on the abstract Node.

Unbalanced: operations are O(height), which is O(log N) for random insertion
order and O(N) for sorted insertion order.
"""

import logging
from collections.abc import AsyncIterator, Callable, Iterator, Mapping
from typing import Any

from ordered_index.interfaces.sorted_index import SortedIndex
from ordered_index.models.comparators import CheckEquality, CompareKeys, KeyComparator
from ordered_index.models.exceptions import UniqueConstraintViolation, ValidationError
from ordered_index.models.node import Node

logger = logging.getLogger(__name__)

_COMPARISON_OPTIONS = frozenset({"compare_keys", "check_key_equality", "check_value_equality"})


class BSTNode(Node):
    """Node in a BinarySearchTree."""

    def create_similar(self, **options: Any) -> "BSTNode":
        options.setdefault("unique", self.unique)
        # Explicit comparison functions override the inherited comparator
        if not _COMPARISON_OPTIONS & options.keys():
            options.setdefault("comparator", self.comparator)
        return BSTNode(**options)

    def create_left_child(self, **options: Any) -> "BSTNode":
        child = self.create_similar(parent=self, **options)
        self.left = child
        return child

    def create_right_child(self, **options: Any) -> "BSTNode":
        child = self.create_similar(parent=self, **options)
        self.right = child
        return child


class BinarySearchTree(SortedIndex):
    """
    Binary search tree implementation of SortedIndex.

    Each key maps to a list of values. In a non-unique tree inserting an existing
    key appends to its values; in a unique tree it raises
    UniqueConstraintViolation.

    The root is an empty BSTNode while the tree holds no keys.
    """

    def __init__(
        self,
        unique: bool = False,
        compare_keys: CompareKeys | None = None,
        check_key_equality: CheckEquality | None = None,
        check_value_equality: CheckEquality | None = None,
    ) -> None:
        """
        Initialize an empty tree.

        Args:
            unique: Reject duplicate keys.
            compare_keys: Three-way key comparison (default: numbers, strings, dates).
            check_key_equality: Key equality used by $ne (default: ==).
            check_value_equality: Value equality used by delete (default: ==).
        """
        if not isinstance(unique, bool):
            raise TypeError(f"unique must be a bool, got {unique!r}")

        self._unique = unique
        self._comparator = KeyComparator.from_options(
            compare_keys, check_key_equality, check_value_equality
        )
        self._root = BSTNode(unique=unique, comparator=self._comparator)
        self._size: int = 0

    @property
    def root(self) -> BSTNode:
        return self._root

    @property
    def unique(self) -> bool:
        return self._unique

    def insert(self, key: Any, value: Any) -> None:
        """Insert value under key. O(height)"""
        if key is None:
            raise ValueError("key cannot be None")

        if self._root.key is None:
            self._root.key = key
            self._root.value.append(value)
            self._size = 1
            logger.debug(f"Inserted root key {key!r}")
            return

        current = self._root
        while True:
            cmp = current.compare_keys(key, current.key)
            if cmp == 0:
                if current.unique:
                    raise UniqueConstraintViolation(key)
                current.value.append(value)
                return

            if cmp < 0:
                if current.left is None:
                    child = current.create_left_child(key=key)
                    break
                current = current.left
            else:
                if current.right is None:
                    child = current.create_right_child(key=key)
                    break
                current = current.right

        child.value.append(value)
        self._size += 1
        logger.debug(f"Inserted key {key!r} under parent {current.key!r}")

    def delete(self, key: Any, value: Any = None) -> bool:
        """
        Remove key, or only the stored values equal to value. O(height)

        When value is given, the key itself is removed only once no values remain.
        """
        node = self._find_node(key)
        if node is None:
            return False

        if value is not None:
            remaining = [v for v in node.value if not node.check_value_equality(v, value)]
            if len(remaining) == len(node.value):
                return False
            if remaining:
                node.value = remaining
                return True

        self._delete_node(node)
        self._size -= 1
        logger.debug(f"Deleted key {key!r}")
        return True

    def search(self, key: Any) -> list[Any]:
        return self._root.search(key)

    def query(self, query: Mapping[str, Any] | None = None) -> list[Any]:
        return self._root.query(query)

    def has(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def get_number_of_keys(self) -> int:
        """Count keys by walking the tree. O(N)"""
        return self._root.get_number_of_keys()

    def min_key(self) -> Any:
        """Smallest key, or None if the tree is empty."""
        return self._root.get_min_key()

    def max_key(self) -> Any:
        """Greatest key, or None if the tree is empty."""
        return self._root.get_max_key()

    def check_is_bst(self) -> None:
        """Raise a ValidationError if the tree structure is corrupt."""
        self._root.check_is_node()

    def validate(self) -> ValidationError | None:
        return self._root.validate()

    def execute_on_every_node(self, fn: Callable[[Node], Any]) -> None:
        self._root.execute_on_every_node(fn)

    def __iter__(self) -> Iterator[tuple[Any, list[Any]]]:
        return self.iterator()

    def iterator(
        self, query: Mapping[str, Any] | None = None
    ) -> Iterator[tuple[Any, list[Any]]]:
        for node in self._root.iter_query(query):
            yield node.key, list(node.value)

    def __aiter__(self) -> AsyncIterator[tuple[Any, list[Any]]]:
        return self.async_iterator()

    def async_iterator(
        self, query: Mapping[str, Any] | None = None
    ) -> AsyncIterator[tuple[Any, list[Any]]]:
        return _AsyncQueryIterator(self.iterator(query))

    def _find_node(self, key: Any) -> BSTNode | None:
        """Find node by key."""
        current = self._root
        while current is not None and current.key is not None:
            cmp = current.compare_keys(key, current.key)
            if cmp < 0:
                current = current.left
            elif cmp > 0:
                current = current.right
            else:
                return current
        return None

    def _delete_node(self, node: BSTNode) -> None:
        """Detach node from the tree."""
        if node.left is not None and node.right is not None:
            # Node has two children - find successor
            successor = node.right.get_min_key_descendant()

            # Copy successor's data to node
            node.key = successor.key
            node.value = successor.value
            node = successor

        # Node has at most one child
        child = node.left if node.left is not None else node.right

        if node.parent is None and child is None:
            # Last key of the tree: keep an empty root
            node.key = None
            node.value = []
            return

        self._replace_node(node, child)

    def _replace_node(self, node: BSTNode, child: BSTNode | None) -> None:
        """Replace node with child in tree."""
        if node.parent is None:
            self._root = child
        elif node is node.parent.left:
            node.parent.left = child
        else:
            node.parent.right = child

        if child is not None:
            child.parent = node.parent
        node.parent = None


class _AsyncQueryIterator(AsyncIterator[tuple[Any, list[Any]]]):
    """Async iterator over query results (in-memory, no I/O)."""

    def __init__(self, source: Iterator[tuple[Any, list[Any]]]) -> None:
        self._source = source

    def __aiter__(self) -> "_AsyncQueryIterator":
        return self

    async def __anext__(self) -> tuple[Any, list[Any]]:
        try:
            return next(self._source)
        except StopIteration:
            raise StopAsyncIteration from None
