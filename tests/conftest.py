"""
Shared pytest fixtures for ordered index tests.
"""

import pytest

from ordered_index.models.sortedcontainers import BinarySearchTree


def build_tree(keys, **options):
    """Build a BinarySearchTree storing each key as its own value."""
    tree = BinarySearchTree(**options)
    for key in keys:
        tree.insert(key, key)
    return tree


@pytest.fixture
def make_tree():
    """Provide the build_tree helper."""
    return build_tree


@pytest.fixture
def empty_tree():
    """Provide a tree holding no keys."""
    return BinarySearchTree()


@pytest.fixture
def sample_tree():
    """
    Provide the tree built from keys [5, 3, 8, 1, 4]:

            5
           / \\
          3   8
         / \\
        1   4
    """
    return build_tree([5, 3, 8, 1, 4])


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return [
        ("key1", "value1"),
        ("key2", "value2"),
        ("key3", "value3"),
    ]
