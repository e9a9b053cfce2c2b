"""Tests for VisitorConfig validation and its effect on the engine."""

import sys
import unittest
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datavisitor import (
    Visitor,
    VisitorConfig,
    ConfigurationError,
    CONTAINER_SHAPES,
    Shape,
    ScalarRef,
)
from datavisitor.testing import RecordingVisitor


class TestVisitorConfig(unittest.TestCase):
    """Test configuration defaults and validation."""

    def test_defaults_are_valid(self):
        config = VisitorConfig()

        self.assertEqual(config.validate(), [])
        self.assertEqual(config.enabled_shapes, CONTAINER_SHAPES)
        self.assertTrue(config.warn_on_dropped_slot)
        self.assertTrue(config.patch_placeholders)

    def test_plain_data(self):
        config = VisitorConfig.plain_data()

        self.assertEqual(config.enabled_shapes, {Shape.MAPPING, Shape.SEQUENCE})
        self.assertEqual(config.validate(), [])

    def test_all_shapes(self):
        self.assertEqual(VisitorConfig.all_shapes().enabled_shapes, CONTAINER_SHAPES)

    def test_extra_leaf_types(self):
        config = VisitorConfig(extra_leaf_types=(Decimal,))

        self.assertIn(Decimal, config.all_leaf_types)
        self.assertIn(str, config.all_leaf_types)

    def test_container_leaf_type_rejected(self):
        errors = VisitorConfig(extra_leaf_types=(dict,)).validate()

        self.assertEqual(len(errors), 1)
        self.assertIn("dict", errors[0])

    def test_non_type_leaf_rejected(self):
        errors = VisitorConfig(leaf_types=(int, "str")).validate()

        self.assertEqual(len(errors), 1)
        self.assertIn("'str'", errors[0])

    def test_shapes_without_hooks_rejected(self):
        errors = VisitorConfig(shapes=frozenset({Shape.LEAF, Shape.OBJECT})).validate()

        self.assertEqual(len(errors), 2)

    def test_visitor_refuses_invalid_config(self):
        with self.assertRaises(ConfigurationError) as ctx:
            Visitor(VisitorConfig(extra_leaf_types=(list,)))

        self.assertIn("Invalid configuration", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)


class TestConfigEffects(unittest.TestCase):
    """Test how configuration changes traversal."""

    def test_extra_leaf_type_is_not_tracked(self):
        recorder = RecordingVisitor(VisitorConfig(extra_leaf_types=(tuple,)))
        recorder.traverse_and_build((1, 2))

        self.assertEqual(recorder.hooks(), ["visit_value"])

    def test_only_enabled_shapes_descend(self):
        ref = ScalarRef([1])
        config = VisitorConfig(shapes=frozenset({Shape.SCALAR_REF}))

        result = Visitor(config).traverse_and_build([ref])

        # The outer list is passed through untouched
        self.assertIs(result[0], ref)

    def test_default_visitor_config(self):
        self.assertEqual(Visitor().config, VisitorConfig())


if __name__ == "__main__":
    unittest.main()
