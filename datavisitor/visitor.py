"""Visitor engine for datavisitor.

The Visitor walks an arbitrary value's shape and calls an overridable
hook per shape. A traversal runs in one of two modes:

- construct mode (``traverse_and_build``): hooks return values and the
  engine assembles a new, structurally faithful value from them.
- effect mode (``traverse_for_effect``): hooks run for side effects only,
  results are discarded and no container is allocated.

Every top-level traversal gets a fresh IdentityTracker, so cyclic and
self-referential graphs are visited once per reference value.
"""

import threading
import types
import warnings
from collections import defaultdict
from typing import Any, Dict, Hashable, Optional, Tuple

from .config import ConfigurationError, VisitorConfig
from .core.identity import IdentityTracker, Pending
from .core.shapes import (
    ExternalHandle,
    ScalarRef,
    Shape,
    classify,
    is_taggable,
    tag_of,
)


class UnmappedSlotWarning(UserWarning):
    """A present external handle slot was mapped to nothing and dropped."""
    pass


class _TraversalState(threading.local):
    """Per-thread state of the traversal currently running on a Visitor."""
    tracker: Optional[IdentityTracker] = None
    building: bool = True


class Visitor:
    """Base visitor for structural traversal of Python values.

    Subclass and override any hook; each one is independently
    overridable and the defaults implement deep-copy (construct mode)
    or plain walking (effect mode).

    Example:
        class FooCounter(Visitor):
            def __init__(self):
                super().__init__()
                self.count = 0

            def visit_value(self, value):
                if value == "foo":
                    self.count += 1
                return value

        counter = FooCounter()
        counter.traverse_for_effect([1, "foo", 2, "foo"])
        counter.count  # 2
    """

    # Shape -> hook name used by visit_ref
    shape_handlers: Dict[Shape, str] = {
        Shape.MAPPING: "visit_mapping",
        Shape.SEQUENCE: "visit_sequence",
        Shape.SCALAR_REF: "visit_scalar_ref",
        Shape.EXTERNAL_HANDLE: "visit_handle",
    }

    def __init__(self, config: Optional[VisitorConfig] = None):
        """Initialize visitor with an optional configuration.

        Args:
            config: VisitorConfig (defaults to all shapes enabled)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config or VisitorConfig()
        errors = self.config.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
        self._leaf_types = self.config.all_leaf_types
        self._enabled_shapes = self.config.enabled_shapes
        self._state = _TraversalState()

    # Entry points

    def traverse_and_build(self, value: Any) -> Any:
        """Run a construct-mode traversal and return the produced value."""
        return self._run(value, building=True)

    def traverse_for_effect(self, value: Any) -> None:
        """Run an effect-mode traversal; hooks may mutate value in place."""
        self._run(value, building=False)

    def _run(self, value: Any, building: bool) -> Any:
        state = self._state
        outer = (state.tracker, state.building)
        state.tracker = IdentityTracker()
        state.building = building
        try:
            return self._visit_tracked(value)
        finally:
            state.tracker, state.building = outer

    @property
    def building(self) -> bool:
        """True while a construct-mode traversal is running."""
        return self._state.tracker is None or self._state.building

    @property
    def tracker(self) -> Optional[IdentityTracker]:
        """Tracker of the running traversal (None outside a traversal)."""
        return self._state.tracker

    # Dispatcher

    def visit(self, value: Any) -> Any:
        """Visit a value.

        Inside a running traversal this shares its tracker and mode.
        Called on its own it starts a construct-mode traversal.
        """
        if self._state.tracker is None:
            return self.traverse_and_build(value)
        return self._visit_tracked(value)

    def _visit_tracked(self, value: Any) -> Any:
        if isinstance(value, self._leaf_types):
            return self.visit_value(value)

        tracker = self._state.tracker
        if value in tracker:
            return tracker.resolve(value)

        if not self._state.building:
            tracker.enter(value, value)
            return self.visit_untracked(value)

        provisional = self._provisional_for(value)
        identity = tracker.enter(value, provisional)
        result = self.visit_untracked(value)
        slot = tracker.finalize(identity, result)
        if slot.observed and result is not provisional and self.config.patch_placeholders:
            _patch(result, provisional, result)
        return result

    def visit_untracked(self, value: Any) -> Any:
        """Dispatch value without consulting the tracker."""
        if isinstance(value, self._leaf_types):
            return self.visit_value(value)
        if tag_of(value) is not None:
            return self.visit_object(value)
        return self.visit_ref(value)

    def _provisional_for(self, value: Any) -> Any:
        # Pre-allocate the result container so self-references resolve to it
        shape = classify(value, self._leaf_types)
        if self._handler_for(shape) is not None:
            factory = _FACTORIES.get(shape)
            if factory is not None:
                return getattr(self, factory)(value)
        return Pending(type(value))

    def _claim(self, source: Any, factory) -> Any:
        claimed = None
        if self._state.tracker is not None:
            claimed = self._state.tracker.claim(source)
        if claimed is None:
            claimed = factory(source)
        return claimed

    # Shape router

    def visit_object(self, obj: Any) -> Any:
        """Called for tagged values. Default routes by shape."""
        return self.visit_ref(obj)

    def visit_ref(self, value: Any) -> Any:
        """Route a reference value to its container hook.

        Shapes with no enabled hook fall back to visit_value.
        """
        handler = self._handler_for(classify(value, self._leaf_types))
        if handler is None:
            return self.visit_value(value)
        return handler(value)

    def _handler_for(self, shape: Shape):
        if shape not in self._enabled_shapes:
            return None
        name = self.shape_handlers.get(shape)
        if name is None:
            return None
        return getattr(self, name, None)

    def visit_value(self, value: Any) -> Any:
        """Called for leaves and unsupported shapes. Default is identity."""
        return value

    # Mappings

    def visit_mapping(self, mapping: dict) -> Any:
        if not self.building:
            for key, value in list(mapping.items()):
                self.visit_mapping_entry(key, value, mapping)
            return mapping

        new = self._claim(mapping, self.new_mapping)
        for key, value in list(mapping.items()):
            new_key, new_value = self.visit_mapping_entry(key, value, mapping)
            new[new_key] = new_value
        return self.retain_tag(mapping, new)

    def visit_mapping_entry(self, key: Hashable, value: Any, mapping: dict) -> Tuple[Any, Any]:
        """Return the transformed (key, value) pair."""
        return (
            self.visit_mapping_key(key, value, mapping),
            self.visit_mapping_value(value, key, mapping),
        )

    def visit_mapping_key(self, key: Hashable, value: Any, mapping: dict) -> Any:
        return self.visit(key)

    def visit_mapping_value(self, value: Any, key: Hashable, mapping: dict) -> Any:
        return self.visit(value)

    # Sequences

    def visit_sequence(self, sequence: list) -> Any:
        if not self.building:
            for index, value in enumerate(list(sequence)):
                self.visit_sequence_entry(value, index, sequence)
            return sequence

        new = self._claim(sequence, self.new_sequence)
        for index, value in enumerate(list(sequence)):
            new.append(self.visit_sequence_entry(value, index, sequence))
        return self.retain_tag(sequence, new)

    def visit_sequence_entry(self, value: Any, index: int, sequence: list) -> Any:
        return self.visit(value)

    # Single-slot references

    def visit_scalar_ref(self, ref: ScalarRef) -> Any:
        if not self.building:
            self.visit(ref.value)
            return ref

        new = self._claim(ref, self.new_scalar_ref)
        new.value = self.visit(ref.value)
        return self.retain_tag(ref, new)

    # External handles

    def visit_handle(self, handle: ExternalHandle) -> Any:
        """Visit each present slot of an external handle.

        In construct mode a slot that maps to None is dropped from the
        new handle with an UnmappedSlotWarning.
        """
        if not self.building:
            for name in handle.present_slots():
                self.visit_handle_slot(name, getattr(handle, name), handle)
            return handle

        new = self._claim(handle, self.new_handle)
        for name in handle.present_slots():
            mapped = self.visit_handle_slot(name, getattr(handle, name), handle)
            if mapped is None:
                if self.config.warn_on_dropped_slot:
                    warnings.warn(
                        f"{name} slot of {type(handle).__name__} mapped to None, dropping it",
                        UnmappedSlotWarning,
                        stacklevel=2
                    )
                continue
            setattr(new, name, mapped)
        return self.retain_tag(handle, new)

    def visit_handle_slot(self, name: str, value: Any, handle: ExternalHandle) -> Any:
        return self.visit(value)

    # Construction

    def new_mapping(self, mapping: dict) -> dict:
        """Return an empty, untagged mapping of the same kind."""
        if isinstance(mapping, defaultdict):
            return type(mapping)(mapping.default_factory)
        return type(mapping)()

    def new_sequence(self, sequence: list) -> list:
        return type(sequence)()

    def new_scalar_ref(self, ref: ScalarRef) -> ScalarRef:
        return type(ref)()

    def new_handle(self, handle: ExternalHandle) -> ExternalHandle:
        return type(handle)()

    # Tag retention

    def retain_tag(self, source: Any, new: Any) -> Any:
        """Copy source's tag onto new if new is taggable and untagged."""
        tag = tag_of(source)
        if tag is not None and is_taggable(new) and tag_of(new) is None:
            new.tag = tag
        return new


_FACTORIES = {
    Shape.MAPPING: "new_mapping",
    Shape.SEQUENCE: "new_sequence",
    Shape.SCALAR_REF: "new_scalar_ref",
    Shape.EXTERNAL_HANDLE: "new_handle",
}


def _patch(value: Any, placeholder: Any, replacement: Any, seen: Optional[set] = None) -> None:
    """Replace every reference to placeholder inside value with replacement."""
    if seen is None:
        seen = set()
    if id(value) in seen:
        return
    seen.add(id(value))

    if isinstance(value, dict):
        for key, item in list(value.items()):
            if item is placeholder:
                value[key] = replacement
            else:
                _patch(item, placeholder, replacement, seen)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            if item is placeholder:
                value[index] = replacement
            else:
                _patch(item, placeholder, replacement, seen)
    elif hasattr(value, "__dict__") and not isinstance(value, (type, types.ModuleType)):
        for name, item in list(vars(value).items()):
            if item is placeholder:
                setattr(value, name, replacement)
            else:
                _patch(item, placeholder, replacement, seen)
