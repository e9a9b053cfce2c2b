"""Value shapes understood by the visitor engine.

Every value handed to a Visitor falls into exactly one Shape. Leaves are
plain scalars; everything else is reference-typed and is tracked by
identity during a traversal. Container shapes have their own visit hook,
while OBJECT covers reference values with no dedicated hook (tuples,
sets, arbitrary instances) and degrades to leaf pass-through.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional, Tuple


DEFAULT_LEAF_TYPES: Tuple[type, ...] = (
    type(None), bool, int, float, complex, str, bytes
)

HANDLE_SLOTS: Tuple[str, ...] = ("scalar", "sequence", "mapping")


class Shape(Enum):
    """Closed enumeration of value shapes."""
    LEAF = "leaf"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR_REF = "scalar_ref"
    EXTERNAL_HANDLE = "external_handle"
    OBJECT = "object"


class Taggable:
    """Mixin for containers that can carry an opaque type tag.

    The tag identifies the container's logical class independently of
    its physical shape. ``None`` means untagged.
    """

    tag: Optional[Hashable] = None


class TaggedDict(dict, Taggable):
    """A dict that can carry a type tag."""

    def __init__(self, data=(), tag: Optional[Hashable] = None):
        super().__init__(data)
        self.tag = tag

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict.__repr__(self)}, tag={self.tag!r})"


class TaggedList(list, Taggable):
    """A list that can carry a type tag."""

    def __init__(self, data=(), tag: Optional[Hashable] = None):
        super().__init__(data)
        self.tag = tag

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list.__repr__(self)}, tag={self.tag!r})"


@dataclass(eq=True, repr=True)
class ScalarRef(Taggable):
    """Container holding exactly one inner value."""

    value: Any = None
    tag: Optional[Hashable] = None


@dataclass(eq=True, repr=True)
class ExternalHandle(Taggable):
    """Composite record with up to three independently present slots.

    A slot holding ``None`` is absent. ``sequence`` is expected to hold a
    list and ``mapping`` a dict; ``scalar`` may hold any value.
    """

    scalar: Any = None
    sequence: Optional[list] = None
    mapping: Optional[dict] = None
    tag: Optional[Hashable] = None

    def present_slots(self) -> Tuple[str, ...]:
        """Names of the slots that hold a value, in canonical order."""
        return tuple(name for name in HANDLE_SLOTS if getattr(self, name) is not None)


def is_taggable(value: Any) -> bool:
    return isinstance(value, Taggable)


def tag_of(value: Any) -> Optional[Hashable]:
    """Return the value's tag, or None when untagged or not taggable."""
    if isinstance(value, Taggable):
        return value.tag
    return None


def is_reference(value: Any, leaf_types: Tuple[type, ...] = DEFAULT_LEAF_TYPES) -> bool:
    return not isinstance(value, leaf_types)


def classify(value: Any, leaf_types: Tuple[type, ...] = DEFAULT_LEAF_TYPES) -> Shape:
    """Classify a value by its runtime shape.

    Args:
        value: Any value
        leaf_types: Types treated as non-reference scalars

    Returns:
        The Shape of the value
    """
    if isinstance(value, leaf_types):
        return Shape.LEAF
    if isinstance(value, dict):
        return Shape.MAPPING
    if isinstance(value, list):
        return Shape.SEQUENCE
    if isinstance(value, ScalarRef):
        return Shape.SCALAR_REF
    if isinstance(value, ExternalHandle):
        return Shape.EXTERNAL_HANDLE
    return Shape.OBJECT
