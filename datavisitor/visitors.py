"""Ready-made visitors for datavisitor.

These cover the common jobs people otherwise subclass Visitor for:
counting or collecting leaves and rewriting leaf values, either into a
new structure or in place.
"""

from collections.abc import Hashable
from typing import Any, Dict, List, Optional, Tuple

from .config import VisitorConfig
from .core.shapes import ExternalHandle, ScalarRef
from .visitor import Visitor


class LeafCounter(Visitor):
    """Counts leaves equal to a target value of the same type.

    ``True`` and ``1.0`` do not count as ``1``.

    Example:
        counter = LeafCounter("foo")
        counter.traverse_for_effect({"a": ["foo", "bar"], "b": "foo"})
        counter.count  # 2
    """

    def __init__(self, target: Any, config: Optional[VisitorConfig] = None):
        super().__init__(config)
        self.target = target
        self.count = 0

    def visit_value(self, value: Any) -> Any:
        if type(value) is type(self.target) and value == self.target:
            self.count += 1
        return value


class LeafCollector(Visitor):
    """Collects every leaf in traversal order.

    Mapping order follows dict iteration; sequence order is preserved.
    """

    def __init__(self, config: Optional[VisitorConfig] = None):
        super().__init__(config)
        self.leaves: List[Any] = []

    def visit_mapping_key(self, key, value, mapping):
        # Keys are structure, not data
        return key

    def visit_value(self, value: Any) -> Any:
        self.leaves.append(value)
        return value


class ValueRewriter(Visitor):
    """Builds a copy with leaves replaced through a lookup table.

    A leaf matches a table key only when both value and type agree, so
    ``True`` and ``1.0`` are not replaced by an entry for ``1``. The
    table is read once, at construction. Keys are rewritten too unless
    ``rewrite_keys`` is False.
    """

    def __init__(self,
                 replacements: Dict[Any, Any],
                 rewrite_keys: bool = True,
                 config: Optional[VisitorConfig] = None):
        super().__init__(config)
        self.replacements = replacements
        self.rewrite_keys = rewrite_keys
        self._table = {(type(key), key): new for key, new in replacements.items()}

    def visit_mapping_key(self, key, value, mapping):
        if not self.rewrite_keys:
            return key
        return super().visit_mapping_key(key, value, mapping)

    def _lookup(self, value: Any) -> Tuple[bool, Any]:
        # Only leaves are looked up; other values may not be hashable
        if isinstance(value, self._leaf_types) and isinstance(value, Hashable):
            entry = (type(value), value)
            if entry in self._table:
                return True, self._table[entry]
        return False, value

    def visit_value(self, value: Any) -> Any:
        return self._lookup(value)[1]


class InPlaceRewriter(ValueRewriter):
    """Rewrites leaves of the original structure in place.

    Under traverse_for_effect replacements are written back through the
    owning container at the visited position. Under traverse_and_build
    it behaves like ValueRewriter and leaves the source untouched.
    """

    def visit_mapping_value(self, value, key, mapping):
        found, new = self._lookup(value)
        if not found:
            return super().visit_mapping_value(value, key, mapping)
        if not self.building:
            mapping[key] = new
        return new

    def visit_sequence_entry(self, value, index, sequence):
        found, new = self._lookup(value)
        if not found:
            return super().visit_sequence_entry(value, index, sequence)
        if not self.building:
            sequence[index] = new
        return new

    def visit_scalar_ref(self, ref: ScalarRef) -> Any:
        found, new = self._lookup(ref.value)
        if found and not self.building:
            ref.value = new
            return ref
        return super().visit_scalar_ref(ref)

    def visit_handle_slot(self, name: str, value: Any, handle: ExternalHandle) -> Any:
        found, new = self._lookup(value)
        if not found:
            return super().visit_handle_slot(name, value, handle)
        if not self.building:
            setattr(handle, name, new)
        return new
