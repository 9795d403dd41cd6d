"""
Abstract binary search tree node used as the building block of ordered indexes.

The node provides navigation, validation, range query, exact search and in-order
traversal. It never changes tree topology: insertion, deletion and rebalancing
belong to concrete subclasses (see sortedcontainers.binary_search_tree).

Every algorithm walks the tree with an explicit stack, so tree height is not
limited by the interpreter recursion limit.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from ordered_index.models.bounds import Bound, RangeQuery
from ordered_index.models.comparators import (
    CheckEquality,
    CompareKeys,
    KeyComparator,
)
from ordered_index.models.exceptions import (
    BrokenParentPointer,
    BSTOrderViolation,
    RootHasParent,
    ValidationError,
)

logger = logging.getLogger(__name__)

Query = RangeQuery | Mapping[str, Any]


class Node(ABC):
    """
    Node in an ordered binary search tree.

    Attributes:
        key: The indexed key; None marks an empty node (a tree with no entries).
        value: Values stored under key, in insertion order.
        unique: Whether the owning index rejects duplicate keys.
        left: Child holding smaller keys.
        right: Child holding greater keys.
        parent: Structural parent, None for the root.
        comparator: Comparison strategy shared with the rest of the tree.

    Invariants of a valid tree:
    1. Keys in the left subtree compare strictly less than key, keys in the right
       subtree strictly greater.
    2. A child's parent is the node holding it.
    3. The root has no parent.
    4. An empty node has no children.
    """

    def __init__(
        self,
        parent: "Node | None" = None,
        key: Any = None,
        value: Any = None,
        unique: bool = False,
        compare_keys: CompareKeys | None = None,
        check_key_equality: CheckEquality | None = None,
        check_value_equality: CheckEquality | None = None,
        comparator: KeyComparator | None = None,
    ) -> None:
        """
        Initialize a node.

        Args:
            parent: Structural parent, if any.
            key: Key of the entry, None for an empty node.
            value: Initial value stored under key. None stores nothing.
            unique: Whether the owning index rejects duplicate keys.
            compare_keys: Custom three-way key comparison.
            check_key_equality: Custom key equality.
            check_value_equality: Custom value equality.
            comparator: Pre-built comparator shared across nodes. Takes precedence
                over the individual functions.
        """
        self.left: Node | None = None
        self.right: Node | None = None
        self.parent = parent
        self.key = key
        self.value: list[Any] = [] if value is None else [value]
        self.unique = unique
        self.comparator = comparator or KeyComparator.from_options(
            compare_keys, check_key_equality, check_value_equality
        )

    @abstractmethod
    def create_similar(self, **options: Any) -> "Node":
        """
        Create a node of the same concrete type, sharing unique and comparator.

        Args:
            **options: Construction options (parent, key, value).
        """

    @property
    def compare_keys(self) -> CompareKeys:
        return self.comparator.compare_keys

    @property
    def check_key_equality(self) -> CheckEquality:
        return self.comparator.check_key_equality

    @property
    def check_value_equality(self) -> CheckEquality:
        return self.comparator.check_value_equality

    def is_empty(self) -> bool:
        return self.key is None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r}, value={self.value!r})"

    # Navigation

    def get_max_key_descendant(self) -> "Node":
        """Follow right children down to the node with the greatest key."""
        node = self
        while node.right is not None:
            node = node.right
        return node

    def get_min_key_descendant(self) -> "Node":
        """Follow left children down to the node with the smallest key."""
        node = self
        while node.left is not None:
            node = node.left
        return node

    def get_max_key(self) -> Any:
        return self.get_max_key_descendant().key

    def get_min_key(self) -> Any:
        return self.get_min_key_descendant().key

    # Validation

    def check_is_node(self) -> None:
        """
        Validate the whole subtree rooted at this node.

        Must be called on a structural root.

        Raises:
            BSTOrderViolation: A key is on the wrong side of an ancestor.
            BrokenParentPointer: A child does not point back to its parent.
            RootHasParent: This node has a parent.
        """
        self.check_node_ordering()
        self.check_internal_pointers()
        if self.parent is not None:
            raise RootHasParent(self.key)

    def validate(self) -> ValidationError | None:
        """
        Validate the subtree without raising.

        Returns:
            None if the subtree is valid, otherwise the first violation found.
        """
        try:
            self.check_is_node()
        except ValidationError as e:
            logger.warning(f"Tree validation failed: {e}")
            return e
        return None

    def get_number_of_keys(self) -> int:
        """Count keys in this subtree. An empty node counts as zero."""
        count = 0
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node.key is None:
                continue
            count += 1
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return count

    def check_all_nodes_fulfill_condition(self, test: Callable[[Any], None]) -> None:
        """
        Apply test to every key of the subtree, pre-order.

        test signals failure by raising; the first exception propagates. An empty
        node is passed to test but its subtree is not visited.
        """
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            test(node.key)

            if node.key is None:
                continue

            # Right pushed first so left is visited first
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def check_node_ordering(self) -> None:
        """
        Check that every node's descendants are on the correct side of it.

        For each node the left subtree is checked, then validated in turn, before
        the right subtree, so the reported key is the first violation in that order.

        Raises:
            BSTOrderViolation: Identifying the ancestor whose ordering is broken.
        """
        tasks: list[tuple[str, Node]] = [("order", self)]
        while tasks:
            task, node = tasks.pop()

            if task == "left":
                node.left.check_all_nodes_fulfill_condition(node._less_than_key_test())
                continue
            if task == "right":
                node.right.check_all_nodes_fulfill_condition(node._greater_than_key_test())
                continue

            if node.key is None:
                continue

            if node.right is not None:
                tasks.append(("order", node.right))
                tasks.append(("right", node))
            if node.left is not None:
                tasks.append(("order", node.left))
                tasks.append(("left", node))

    def check_internal_pointers(self) -> None:
        """
        Check that every child references the node holding it as parent.

        Raises:
            BrokenParentPointer: Identifying the parent whose child points elsewhere.
        """
        stack: list[tuple[Node, Node | None]] = [(self, None)]
        while stack:
            node, expected_parent = stack.pop()
            if expected_parent is not None and node.parent is not expected_parent:
                raise BrokenParentPointer(expected_parent.key)

            if node.right is not None:
                stack.append((node.right, node))
            if node.left is not None:
                stack.append((node.left, node))

    def _less_than_key_test(self) -> Callable[[Any], None]:
        def test(k: Any) -> None:
            if self.compare_keys(k, self.key) >= 0:
                raise BSTOrderViolation(self.key)

        return test

    def _greater_than_key_test(self) -> Callable[[Any], None]:
        def test(k: Any) -> None:
            if self.compare_keys(k, self.key) <= 0:
                raise BSTOrderViolation(self.key)

        return test

    # Bound matching

    def get_lower_bound_matcher(self, query: Query) -> bool:
        """
        Check this key against the ``$gt``/``$gte`` part of query.

        Example query: {"$gt": 3} or {"$gte": 5}. If both are given the tighter
        one applies, and equal bounds behave as ``$gt``.
        """
        return self._matches_lower(self._resolve_query(query).lower)

    def get_upper_bound_matcher(self, query: Query) -> bool:
        """
        Check this key against the ``$lt``/``$lte`` part of query.

        Example query: {"$lt": 3} or {"$lte": 4}. If both are given the tighter
        one applies, and equal bounds behave as ``$lt``.
        """
        return self._matches_upper(self._resolve_query(query).upper)

    def get_equality_bounds(self, query: Query) -> bool:
        """Return False only when query has ``$ne`` and this key equals it."""
        return self._matches_not_equal(self._resolve_query(query))

    def _resolve_query(self, query: Query | None) -> RangeQuery:
        return RangeQuery.coerce(query, self.compare_keys)

    def _matches_lower(self, bound: Bound | None) -> bool:
        if bound is None:
            return True
        cmp = self.compare_keys(self.key, bound.key)
        return cmp >= 0 if bound.is_inclusive() else cmp > 0

    def _matches_upper(self, bound: Bound | None) -> bool:
        if bound is None:
            return True
        cmp = self.compare_keys(self.key, bound.key)
        return cmp <= 0 if bound.is_inclusive() else cmp < 0

    def _matches_not_equal(self, query: RangeQuery) -> bool:
        if not query.has_not_equal:
            return True
        return not self.check_key_equality(self.key, query.not_equal)

    # Query, search and traversal

    def query(self, query: Query | None = None) -> list[Any]:
        """
        Return the values of every key matching query, in ascending key order.

        Args:
            query: Constraints, e.g. {"$gt": 1, "$lte": 3, "$ne": 2}. Every
                operator is optional; None or {} matches everything.

        Returns:
            Flat list of stored values.
        """
        res: list[Any] = []
        for node in self.iter_query(query):
            res.extend(node.value)
        return res

    def iter_query(self, query: Query | None = None) -> Iterator["Node"]:
        """
        Yield nodes whose key matches query, in ascending key order.

        The left child is explored only when this node's key satisfies the lower
        bound, the right child only when it satisfies the upper bound.
        """
        resolved = self._resolve_query(query)
        stack: list[tuple[Node, bool]] = []
        self._push_query_left_path(self, resolved, stack)

        while stack:
            node, lower_ok = stack.pop()
            upper_ok = node._matches_upper(resolved.upper)

            if lower_ok and upper_ok and node._matches_not_equal(resolved):
                yield node

            if upper_ok and node.right is not None:
                self._push_query_left_path(node.right, resolved, stack)

    @staticmethod
    def _push_query_left_path(
        node: "Node | None", query: RangeQuery, stack: list[tuple["Node", bool]]
    ) -> None:
        """Push the left path that the lower bound allows, with each node's lower match."""
        while node is not None and node.key is not None:
            lower_ok = node._matches_lower(query.lower)
            stack.append((node, lower_ok))
            node = node.left if lower_ok else None

    def search(self, key: Any) -> list[Any]:
        """
        Find the values stored under key.

        Returns:
            The node's value list, or an empty list if key is absent.
        """
        node: Node | None = self
        while node is not None and node.key is not None:
            if node.compare_keys(node.key, key) == 0:
                return node.value
            node = node.left if node.compare_keys(key, node.key) < 0 else node.right
        return []

    def execute_on_every_node(self, fn: Callable[["Node"], Any]) -> None:
        """Call fn on every node of the subtree, in ascending key order."""
        stack: list[Node] = []
        node: Node | None = self
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            fn(node)
            node = node.right
