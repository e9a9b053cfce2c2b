"""Identity tracking for a single traversal.

The IdentityTracker is the engine's only cycle-safety mechanism. It maps
each reference value seen during one top-level traversal to the value it
was mapped to. Slots live in an arena and are addressed by Identity
handles; the tracker keeps the source objects alive for the duration of
the traversal so that an ``id()`` can never be recycled within it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, NamedTuple, Optional


class Identity(NamedTuple):
    """Handle for a reference value, valid within one tracker."""
    index: int


class Pending:
    """Provisional marker for a value whose construction has not finished."""

    __slots__ = ("source_type",)

    def __init__(self, source_type: type):
        self.source_type = source_type

    def __repr__(self) -> str:
        return f"<Pending {self.source_type.__name__}>"


@dataclass
class Slot:
    """Arena entry for one tracked source value."""
    source: Any
    value: Any
    pending: bool = True
    observed: bool = False
    claimed: bool = False


class IdentityTracker:
    """Handle table mapping source identities to produced values.

    Usage:
        tracker = IdentityTracker()
        ident = tracker.enter(source, provisional)
        ...
        tracker.finalize(ident, produced)
    """

    def __init__(self):
        self._arena: List[Slot] = []
        self._index: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._arena)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._index

    def __iter__(self) -> Iterator[Identity]:
        return (Identity(i) for i in range(len(self._arena)))

    def identify(self, obj: Any) -> Optional[Identity]:
        """Return the handle for obj, or None if it has not been seen."""
        index = self._index.get(id(obj))
        if index is None:
            return None
        return Identity(index)

    def slot(self, identity: Identity) -> Slot:
        return self._arena[identity.index]

    def enter(self, obj: Any, provisional: Any) -> Identity:
        """Record obj with a provisional mapped value before descending.

        Raises:
            KeyError: If obj is already tracked
        """
        key = id(obj)
        if key in self._index:
            raise KeyError(f"{type(obj).__name__} at {key:#x} is already tracked")
        self._index[key] = len(self._arena)
        self._arena.append(Slot(source=obj, value=provisional))
        return Identity(self._index[key])

    def resolve(self, obj: Any) -> Any:
        """Return the value obj was mapped to.

        A lookup that lands on a slot still under construction marks the
        slot as observed, i.e. a cycle has captured its provisional value.
        """
        slot = self._arena[self._index[id(obj)]]
        if slot.pending:
            slot.observed = True
        return slot.value

    def claim(self, obj: Any) -> Optional[Any]:
        """Hand out obj's provisional container for in-place construction.

        Returns the provisional value the first time it is claimed while
        the slot is pending, and None afterwards or for untracked objects.
        """
        index = self._index.get(id(obj))
        if index is None:
            return None
        slot = self._arena[index]
        if not slot.pending or slot.claimed or isinstance(slot.value, Pending):
            return None
        slot.claimed = True
        return slot.value

    def finalize(self, identity: Identity, value: Any) -> Slot:
        """Overwrite the provisional entry with the produced value."""
        slot = self._arena[identity.index]
        slot.value = value
        slot.pending = False
        return slot
