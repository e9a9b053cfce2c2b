"""datavisitor - Visitor-style traversal of arbitrary Python values.

datavisitor walks any in-memory value (scalars, dicts, lists, single-slot
references, multi-slot handles and tagged containers), calls an
overridable hook per shape and either builds a structurally faithful new
value or just runs the hooks for their side effects. Cyclic structures
are handled by per-traversal identity tracking.

Choose your mode:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Construct:
    new_value = Visitor().traverse_and_build(value)

Effect:
    MyCounter().traverse_for_effect(value)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .config import VisitorConfig, ConfigurationError, CONTAINER_SHAPES
from .core import (
    Shape,
    Taggable,
    TaggedDict,
    TaggedList,
    ScalarRef,
    ExternalHandle,
    Identity,
    IdentityTracker,
    classify,
    is_reference,
    is_taggable,
    tag_of,
)
from .visitor import Visitor, UnmappedSlotWarning
from .visitors import LeafCounter, LeafCollector, ValueRewriter, InPlaceRewriter
from .api import (
    traverse_and_build,
    traverse_for_effect,
    deep_copy,
    count_value,
    collect_leaves,
)

__all__ = [
    "__version__",
    # Config
    "VisitorConfig",
    "ConfigurationError",
    "CONTAINER_SHAPES",
    # Core
    "Shape",
    "Taggable",
    "TaggedDict",
    "TaggedList",
    "ScalarRef",
    "ExternalHandle",
    "Identity",
    "IdentityTracker",
    "classify",
    "is_reference",
    "is_taggable",
    "tag_of",
    # Engine
    "Visitor",
    "UnmappedSlotWarning",
    "LeafCounter",
    "LeafCollector",
    "ValueRewriter",
    "InPlaceRewriter",
    # API
    "traverse_and_build",
    "traverse_for_effect",
    "deep_copy",
    "count_value",
    "collect_leaves",
]
