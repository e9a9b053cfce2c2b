"""Tests for the per-traversal identity tracker."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datavisitor.core import Identity, IdentityTracker, Pending


class TestIdentityTracker:
    """Handle table behavior."""

    def test_enter_and_identify(self):
        tracker = IdentityTracker()
        source = [1, 2]

        ident = tracker.enter(source, "provisional")

        assert ident == Identity(0)
        assert tracker.identify(source) == ident
        assert source in tracker
        assert len(tracker) == 1

    def test_identity_is_not_equality(self):
        """Content-equal but distinct values get distinct handles."""
        tracker = IdentityTracker()
        a, b = [1], [1]

        ident_a = tracker.enter(a, None)

        assert b not in tracker
        assert tracker.identify(b) is None
        assert tracker.enter(b, None) != ident_a

    def test_enter_twice_raises(self):
        tracker = IdentityTracker()
        source = {}
        tracker.enter(source, None)

        with pytest.raises(KeyError):
            tracker.enter(source, None)

    def test_resolve_marks_pending_slot_observed(self):
        tracker = IdentityTracker()
        source = {}
        ident = tracker.enter(source, "placeholder")

        assert tracker.resolve(source) == "placeholder"
        assert tracker.slot(ident).observed

    def test_resolve_after_finalize(self):
        tracker = IdentityTracker()
        source = {}
        ident = tracker.enter(source, "placeholder")

        slot = tracker.finalize(ident, "final")

        assert not slot.pending
        assert tracker.resolve(source) == "final"
        assert not tracker.slot(ident).observed

    def test_claim_hands_out_provisional_once(self):
        tracker = IdentityTracker()
        source = {}
        placeholder = {}
        tracker.enter(source, placeholder)

        assert tracker.claim(source) is placeholder
        assert tracker.claim(source) is None

    def test_claim_refuses_pending_marker_and_unknown_values(self):
        tracker = IdentityTracker()
        source = object()
        tracker.enter(source, Pending(object))

        assert tracker.claim(source) is None
        assert tracker.claim([]) is None

    def test_claim_after_finalize(self):
        tracker = IdentityTracker()
        source = []
        ident = tracker.enter(source, [])
        tracker.finalize(ident, [])

        assert tracker.claim(source) is None

    def test_sources_are_kept_alive(self):
        """Arena holds the source so its id cannot be reused mid-traversal."""
        tracker = IdentityTracker()
        ident = tracker.enter([1, 2, 3], None)

        assert tracker.slot(ident).source == [1, 2, 3]

    def test_iterates_handles(self):
        tracker = IdentityTracker()
        for value in ([], {}, []):
            tracker.enter(value, None)

        assert list(tracker) == [Identity(0), Identity(1), Identity(2)]


def test_pending_repr():
    assert repr(Pending(list)) == "<Pending list>"
