"""
Sorted container implementations built on Node.
"""

from ordered_index.models.sortedcontainers.binary_search_tree import BinarySearchTree, BSTNode

__all__ = ["BinarySearchTree", "BSTNode"]
