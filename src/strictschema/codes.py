"""Prune code constants reported by strictschema compilation.

These constants prevent stringly-typed reason codes and ensure
client code matches on the codes the compiler actually emits.
"""

from enum import Enum


class PruneCode(str, Enum):
    """Reasons a schema node was dropped."""

    # Node-level rejections
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    VETO_KEYWORD = "VETO_KEYWORD"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Containers left without representable content
    EMPTY_ANY_OF = "EMPTY_ANY_OF"
    EMPTY_OBJECT = "EMPTY_OBJECT"
    MISSING_ITEMS = "MISSING_ITEMS"
    UNSUPPORTED_ITEMS = "UNSUPPORTED_ITEMS"
    EMPTY_ITEMS_TUPLE = "EMPTY_ITEMS_TUPLE"

    # The whole schema is unusable
    UNSUPPORTED_ROOT = "UNSUPPORTED_ROOT"
