"""Testing utilities for datavisitor consumers."""

from .fixtures import RecordingVisitor, RECORDED_HOOKS

__all__ = ['RecordingVisitor', 'RECORDED_HOOKS']
