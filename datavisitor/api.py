"""High-level API for datavisitor.

This module provides simple, functional interfaces for common traversal
jobs. These functions wrap the Visitor class for ease of use in simple
cases.
"""

from typing import Any, List, Optional

from .config import VisitorConfig
from .visitor import Visitor
from .visitors import LeafCollector, LeafCounter


def traverse_and_build(
    value: Any,
    visitor: Optional[Visitor] = None,
    config: Optional[VisitorConfig] = None
) -> Any:
    """Traverse a value in construct mode and return the produced value.

    Args:
        value: Root value to traverse
        visitor: Visitor to use (a default deep-copying Visitor if None)
        config: Configuration for the default visitor

    Returns:
        The new value built from the visitor's hooks

    Raises:
        ValueError: If both visitor and config are given

    Example:
        >>> traverse_and_build({"a": [1, 2]})
        {'a': [1, 2]}
    """
    if visitor is not None and config is not None:
        raise ValueError("pass either a visitor or a config, not both")
    if visitor is None:
        visitor = Visitor(config)
    return visitor.traverse_and_build(value)


def traverse_for_effect(value: Any, visitor: Visitor) -> Visitor:
    """Traverse a value in effect mode.

    Args:
        value: Root value to traverse (hooks may mutate it in place)
        visitor: Visitor whose hooks perform the side effects

    Returns:
        The visitor, so accumulated state can be read off directly

    Example:
        >>> traverse_for_effect([1, "foo", 2, "foo"], LeafCounter("foo")).count
        2
    """
    visitor.traverse_for_effect(value)
    return visitor


def deep_copy(value: Any, config: Optional[VisitorConfig] = None) -> Any:
    """Return a cycle-safe deep copy of value's container structure.

    Only mappings, sequences, scalar refs and external handles are
    copied. Tuples, sets and other objects without a container hook are
    passed through and shared with the input, so
    ``deep_copy({"t": ([1],)})["t"]`` is the very same tuple. Use
    ``copy.deepcopy`` when those must be copied too.
    """
    return Visitor(config).traverse_and_build(value)


def count_value(value: Any, target: Any, config: Optional[VisitorConfig] = None) -> int:
    """Count leaves equal to target and of the same type inside value."""
    return traverse_for_effect(value, LeafCounter(target, config)).count


def collect_leaves(value: Any, config: Optional[VisitorConfig] = None) -> List[Any]:
    """Collect every leaf value (mapping keys excluded)."""
    return traverse_for_effect(value, LeafCollector(config)).leaves
