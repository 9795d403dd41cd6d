"""
Bound and RangeQuery for representing resolved range constraints.

A query mapping such as ``{"$gt": 1, "$lte": 3, "$ne": 2}`` is resolved once into a
RangeQuery. When both the exclusive and inclusive variant of the same side are
given, the tighter one wins and ties resolve to the exclusive bound.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from ordered_index.models.comparators import CompareKeys, default_compare_keys

QUERY_OPERATORS = frozenset({"$gt", "$gte", "$lt", "$lte", "$ne"})


class BoundType(IntEnum):
    """Whether a bound includes its own key."""

    EXCLUSIVE = 0
    INCLUSIVE = 1


@dataclass(frozen=True)
class Bound:
    """One side of a range constraint."""

    key: Any
    type: BoundType = BoundType.EXCLUSIVE

    def is_inclusive(self) -> bool:
        return self.type == BoundType.INCLUSIVE


@dataclass(frozen=True)
class RangeQuery:
    """
    Resolved constraint set for range queries.

    Attributes:
        lower: Lower bound, or None for no lower bound.
        upper: Upper bound, or None for no upper bound.
        not_equal: Key excluded from results when has_not_equal is set.
        has_not_equal: Whether a ``$ne`` constraint was given. Kept apart from
            not_equal so that ``{"$ne": None}`` is still a constraint.
    """

    lower: Bound | None = None
    upper: Bound | None = None
    not_equal: Any = None
    has_not_equal: bool = False

    @classmethod
    def from_mapping(
        cls, query: Mapping[str, Any], compare_keys: CompareKeys = default_compare_keys
    ) -> "RangeQuery":
        """
        Resolve a ``$gt``/``$gte``/``$lt``/``$lte``/``$ne`` mapping.

        Args:
            query: Constraint mapping; every operator is optional.
            compare_keys: Comparator used to pick the tighter of two bounds.

        Raises:
            ValueError: If the mapping contains an unknown operator.
        """
        unknown = set(query) - QUERY_OPERATORS
        if unknown:
            raise ValueError(f"Unknown query operators: {sorted(unknown)}")

        return cls(
            lower=_resolve_lower(query, compare_keys),
            upper=_resolve_upper(query, compare_keys),
            not_equal=query.get("$ne"),
            has_not_equal="$ne" in query,
        )

    @classmethod
    def coerce(
        cls,
        query: "RangeQuery | Mapping[str, Any] | None",
        compare_keys: CompareKeys = default_compare_keys,
    ) -> "RangeQuery":
        """Return query unchanged if already resolved, otherwise resolve it."""
        if query is None:
            return cls()
        if isinstance(query, RangeQuery):
            return query
        return cls.from_mapping(query, compare_keys)


def _resolve_lower(query: Mapping[str, Any], compare_keys: CompareKeys) -> Bound | None:
    has_gt = "$gt" in query
    has_gte = "$gte" in query

    if has_gt and has_gte:
        # $gte strictly above $gt is the only case where the inclusive bound is tighter
        if compare_keys(query["$gte"], query["$gt"]) > 0:
            return Bound(query["$gte"], BoundType.INCLUSIVE)
        return Bound(query["$gt"], BoundType.EXCLUSIVE)

    if has_gt:
        return Bound(query["$gt"], BoundType.EXCLUSIVE)
    if has_gte:
        return Bound(query["$gte"], BoundType.INCLUSIVE)
    return None


def _resolve_upper(query: Mapping[str, Any], compare_keys: CompareKeys) -> Bound | None:
    has_lt = "$lt" in query
    has_lte = "$lte" in query

    if has_lt and has_lte:
        if compare_keys(query["$lte"], query["$lt"]) < 0:
            return Bound(query["$lte"], BoundType.INCLUSIVE)
        return Bound(query["$lt"], BoundType.EXCLUSIVE)

    if has_lt:
        return Bound(query["$lt"], BoundType.EXCLUSIVE)
    if has_lte:
        return Bound(query["$lte"], BoundType.INCLUSIVE)
    return None
