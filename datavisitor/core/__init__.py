"""Core abstractions for datavisitor.

This package holds the value model (shapes, tags, containers) and the
identity tracker. It must never import from the engine or the config
module to avoid circular dependencies.
"""

from .shapes import (
    DEFAULT_LEAF_TYPES,
    HANDLE_SLOTS,
    Shape,
    Taggable,
    TaggedDict,
    TaggedList,
    ScalarRef,
    ExternalHandle,
    classify,
    is_reference,
    is_taggable,
    tag_of,
)
from .identity import Identity, IdentityTracker, Pending, Slot

__all__ = [
    "DEFAULT_LEAF_TYPES",
    "HANDLE_SLOTS",
    "Shape",
    "Taggable",
    "TaggedDict",
    "TaggedList",
    "ScalarRef",
    "ExternalHandle",
    "classify",
    "is_reference",
    "is_taggable",
    "tag_of",
    "Identity",
    "IdentityTracker",
    "Pending",
    "Slot",
]
