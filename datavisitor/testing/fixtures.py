"""Test fixtures for datavisitor consumers.

These fixtures record what the engine does during a traversal so test
suites can assert on hook order and counts without subclassing Visitor
themselves.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from ..config import VisitorConfig
from ..visitor import Visitor


RECORDED_HOOKS = (
    "visit_object",
    "visit_ref",
    "visit_value",
    "visit_mapping",
    "visit_mapping_entry",
    "visit_sequence",
    "visit_sequence_entry",
    "visit_scalar_ref",
    "visit_handle",
    "visit_handle_slot",
    "retain_tag",
)


class RecordingVisitor(Visitor):
    """Visitor that records every hook invocation.

    Behaves exactly like the default Visitor; each hook call is appended
    to ``calls`` as ``(hook_name, first_argument)`` before delegating.

    Example:
        recorder = RecordingVisitor()
        recorder.traverse_for_effect({"a": [1, 2]})
        recorder.count("visit_value")  # 3 (key "a", 1 and 2)
    """

    def __init__(self, config: Optional[VisitorConfig] = None):
        super().__init__(config)
        self.calls: List[Tuple[str, Any]] = []

    def _record(self, hook: str, argument: Any) -> None:
        self.calls.append((hook, argument))

    def visit_object(self, obj):
        self._record("visit_object", obj)
        return super().visit_object(obj)

    def visit_ref(self, value):
        self._record("visit_ref", value)
        return super().visit_ref(value)

    def visit_value(self, value):
        self._record("visit_value", value)
        return super().visit_value(value)

    def visit_mapping(self, mapping):
        self._record("visit_mapping", mapping)
        return super().visit_mapping(mapping)

    def visit_mapping_entry(self, key, value, mapping):
        self._record("visit_mapping_entry", key)
        return super().visit_mapping_entry(key, value, mapping)

    def visit_sequence(self, sequence):
        self._record("visit_sequence", sequence)
        return super().visit_sequence(sequence)

    def visit_sequence_entry(self, value, index, sequence):
        self._record("visit_sequence_entry", value)
        return super().visit_sequence_entry(value, index, sequence)

    def visit_scalar_ref(self, ref):
        self._record("visit_scalar_ref", ref)
        return super().visit_scalar_ref(ref)

    def visit_handle(self, handle):
        self._record("visit_handle", handle)
        return super().visit_handle(handle)

    def visit_handle_slot(self, name, value, handle):
        self._record("visit_handle_slot", name)
        return super().visit_handle_slot(name, value, handle)

    def retain_tag(self, source, new):
        self._record("retain_tag", source)
        return super().retain_tag(source, new)

    # Queries

    def count(self, hook: str) -> int:
        return sum(1 for name, _ in self.calls if name == hook)

    def hooks(self) -> List[str]:
        """Names of the hooks called, in call order."""
        return [name for name, _ in self.calls]

    def arguments(self, hook: str) -> List[Any]:
        return [arg for name, arg in self.calls if name == hook]

    def get_summary(self) -> Dict[str, int]:
        """Returns call counts per hook for the recorded traversals."""
        return dict(Counter(self.hooks()))

    def reset(self) -> None:
        self.calls.clear()
