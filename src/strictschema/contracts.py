"""Public result models for strictschema compilation."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class CompileIssue(BaseModel):
    """A node dropped while compiling a schema."""
    code: str  # PruneCode value, e.g. "VETO_KEYWORD"
    path: str  # JSON pointer fragment of the dropped node, "#" for the root
    message: str


class CompileResult(BaseModel):
    """Result of compiling a schema for structured-output generation."""
    ok: bool  # False if the root itself cannot be represented
    compiled_schema: Optional[Dict[str, Any]] = None  # Wire form, None when not ok
    schema_hash: Optional[str] = None  # "sha256:<hex>" of the canonical compiled schema
    issues: List[CompileIssue] = Field(default_factory=list)  # sorted by (path, code)
    pruned_count: int = 0  # Number of nodes dropped below the root
