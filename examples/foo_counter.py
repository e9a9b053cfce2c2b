#!/usr/bin/env python3
"""
Counting and rewriting example for datavisitor.

This example demonstrates:
- Subclassing Visitor to count leaves in effect mode
- Building a rewritten copy in construct mode
- Copying a self-referential structure
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from datavisitor import Visitor, TaggedDict


class FooCounter(Visitor):
    """Counts how many leaves equal "foo"."""

    def __init__(self):
        super().__init__()
        self.number_of_foos = 0

    def visit_value(self, value):
        if value == "foo":
            self.number_of_foos += 1
        return value


class Shouter(Visitor):
    """Upper-cases every string leaf."""

    def visit_value(self, value):
        if isinstance(value, str):
            return value.upper()
        return value


def main():
    data = TaggedDict({
        "this": "that",
        "some_foos": ["foo", "foo", "bar", "foo"],
        "the_other": "foo",
    }, tag="Document")
    data["myself"] = data

    counter = FooCounter()
    counter.traverse_for_effect(data)
    print(f"foos found: {counter.number_of_foos}")

    loud = Shouter().traverse_and_build(data)
    print(f"tag kept:   {loud.tag}")
    print(f"rewritten:  {loud['SOME_FOOS']}")
    print(f"cycle kept: {loud['MYSELF'] is loud}")


if __name__ == "__main__":
    main()
