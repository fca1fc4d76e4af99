"""Canonical JSON serialization and hashing of compiled schemas.

Compiled schemas are written to disk and embedded in outbound requests; the
same schema must always produce the same bytes and the same hash.
"""

import hashlib
import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Serialize to canonical JSON.

    Rules:
    - Sorted keys
    - Compact separators (",", ":")
    - Non-ASCII kept as UTF-8
    - List order preserved (anyOf and positional items are ordered)

    Args:
        obj: JSON-compatible Python object

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )


def compute_schema_hash(schema: Any) -> str:
    """Compute SHA256 hash of a canonicalized schema.

    Args:
        schema: Compiled schema in wire form

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    digest = hashlib.sha256(canonical_dumps(schema).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
