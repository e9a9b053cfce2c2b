"""Configuration system for datavisitor.

This module defines how users tune a Visitor: which values count as
leaves, which container shapes get routed to their visit hooks, and how
diagnostics are reported.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from .core.shapes import DEFAULT_LEAF_TYPES, Shape


CONTAINER_SHAPES: FrozenSet[Shape] = frozenset({
    Shape.MAPPING,
    Shape.SEQUENCE,
    Shape.SCALAR_REF,
    Shape.EXTERNAL_HANDLE,
})


class ConfigurationError(ValueError):
    """Raised when a VisitorConfig fails validation."""
    pass


@dataclass
class VisitorConfig:
    """Complete configuration for a Visitor.

    Shapes left out of ``shapes`` are not routed to their container hook
    and degrade to leaf pass-through, exactly like shapes with no hook.
    """

    # Types treated as non-reference scalars (never identity-tracked)
    leaf_types: Tuple[type, ...] = DEFAULT_LEAF_TYPES

    # Container shapes routed to their visit hook (None = all of them)
    shapes: Optional[FrozenSet[Shape]] = None

    # Emit UnmappedSlotWarning when a handle slot maps to nothing
    warn_on_dropped_slot: bool = True

    # Rewrite references to a cycle-captured provisional value
    patch_placeholders: bool = True

    extra_leaf_types: Tuple[type, ...] = field(default_factory=tuple)

    @classmethod
    def plain_data(cls) -> 'VisitorConfig':
        """Create config that only descends into mappings and sequences.

        Returns:
            VisitorConfig for JSON-like data
        """
        return cls(shapes=frozenset({Shape.MAPPING, Shape.SEQUENCE}))

    @classmethod
    def all_shapes(cls) -> 'VisitorConfig':
        return cls(shapes=CONTAINER_SHAPES)

    @property
    def all_leaf_types(self) -> Tuple[type, ...]:
        return tuple(self.leaf_types) + tuple(self.extra_leaf_types)

    @property
    def enabled_shapes(self) -> FrozenSet[Shape]:
        if self.shapes is None:
            return CONTAINER_SHAPES
        return frozenset(self.shapes)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for leaf_type in self.all_leaf_types:
            if not isinstance(leaf_type, type):
                errors.append(f"leaf type {leaf_type!r} is not a type")
            elif issubclass(leaf_type, (dict, list)):
                errors.append(f"{leaf_type.__name__} is a container and cannot be a leaf type")

        if self.shapes is not None:
            for shape in self.shapes:
                if not isinstance(shape, Shape):
                    errors.append(f"{shape!r} is not a Shape")
                elif shape not in CONTAINER_SHAPES:
                    errors.append(f"{shape.name} has no container hook")

        return errors
