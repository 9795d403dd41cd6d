"""
Default key/value comparison functions and the comparator strategy shared by a tree.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from numbers import Real
from typing import Any

CompareKeys = Callable[[Any, Any], int]
CheckEquality = Callable[[Any, Any], bool]

# Key types the default comparator orders; Decimal is a numbers.Number but not a numbers.Real
_ORDERABLE_TYPES = (Real, Decimal, str, bytes, date, tuple)


def default_compare_keys(a: Any, b: Any) -> int:
    """
    Three-way comparison for real numbers (int, float, Decimal, Fraction, bool),
    strings, bytes, dates and tuples.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b.

    Raises:
        TypeError: If either key is not of a supported type. Keys of structured
            types need a custom compare function.
    """
    if not isinstance(a, _ORDERABLE_TYPES) or not isinstance(b, _ORDERABLE_TYPES):
        raise TypeError(f"Couldn't compare elements {a!r} and {b!r}")

    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def default_check_key_equality(a: Any, b: Any) -> bool:
    return a == b


def default_check_value_equality(a: Any, b: Any) -> bool:
    return a == b


@dataclass(frozen=True)
class KeyComparator:
    """
    Comparison strategy supplied once per tree and shared by all of its nodes.

    Attributes:
        compare_keys: Total order over keys, returning a negative, zero or positive int.
        check_key_equality: Key equality, independent of compare_keys.
        check_value_equality: Equality over stored values, used when deleting a
            single value from a key.
    """

    compare_keys: CompareKeys = default_compare_keys
    check_key_equality: CheckEquality = default_check_key_equality
    check_value_equality: CheckEquality = default_check_value_equality

    def __post_init__(self) -> None:
        for name in ("compare_keys", "check_key_equality", "check_value_equality"):
            if not callable(getattr(self, name)):
                raise TypeError(f"{name} must be callable, got {getattr(self, name)!r}")

    @classmethod
    def from_options(
        cls,
        compare_keys: CompareKeys | None = None,
        check_key_equality: CheckEquality | None = None,
        check_value_equality: CheckEquality | None = None,
    ) -> "KeyComparator":
        """Build a comparator, falling back to the defaults for missing functions."""
        return cls(
            compare_keys=compare_keys or default_compare_keys,
            check_key_equality=check_key_equality or default_check_key_equality,
            check_value_equality=check_value_equality or default_check_value_equality,
        )
