"""Public API for strictschema.

High-level functions that load a resolved JSON Schema, compile it for
structured-output generation and wrap it for the outbound request.
Callers should use these functions instead of importing from kernel.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from strictschema.codes import PruneCode
from strictschema.contracts import CompileIssue, CompileResult
from strictschema.kernel.compiler import ROOT_PATH, PruneEvent, compile_node
from strictschema.kernel.node import SchemaNode
from strictschema._internal.canonical_json import compute_schema_hash
from strictschema._internal.contract import (
    RESPONSE_FORMAT_NAME_PATTERN,
    RESPONSE_FORMAT_TYPE,
    UNSUPPORTED_ROOT_MESSAGE,
)

logger = logging.getLogger(__name__)

SchemaSource = Union[str, os.PathLike, Path, Dict[str, Any], SchemaNode]


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _load_document_from_path(path: Path) -> Any:
    """Load a JSON document from file."""
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Schema file is not valid JSON: {path}: {e}")


def load_schema(source: SchemaSource) -> SchemaNode:
    """
    Load a resolved JSON Schema into a SchemaNode tree.

    Args:
        source: SchemaNode, decoded JSON object, or path to a JSON file

    Returns:
        SchemaNode tree

    Raises:
        FileNotFoundError: If a path is given and does not exist
        ValueError: If the document is not a JSON object or has invalid keyword values
    """
    if isinstance(source, SchemaNode):
        return source

    if isinstance(source, dict):
        document = source
    else:
        document = _load_document_from_path(_normalize_path(source))

    if not isinstance(document, dict):
        raise ValueError(f"Schema document must be a JSON object, got {type(document).__name__}")

    try:
        return SchemaNode.from_dict(document)
    except ValidationError as e:
        raise ValueError(f"Invalid schema structure: {e}")


def _event_to_issue(event: PruneEvent) -> CompileIssue:
    """Convert PruneEvent dataclass to a public issue."""
    return CompileIssue(code=event.code.value, path=event.path, message=event.detail)


def compile_schema(source: SchemaSource) -> CompileResult:
    """
    Compile a schema for structured-output generation.

    Unsupported sub-schemas are pruned and reported as issues; the result is
    only not ok when the root itself cannot be represented.

    Args:
        source: SchemaNode, decoded JSON object, or path to a JSON file

    Returns:
        CompileResult with the compiled wire-form schema and pruning issues

    Raises:
        FileNotFoundError: If a path is given and does not exist
        ValueError: If the document structure is invalid
    """
    node = load_schema(source)

    events = []
    compiled = compile_node(node, trace=events)

    issues = [_event_to_issue(event) for event in events]
    pruned_count = len([event for event in events if event.path != ROOT_PATH])

    if compiled is None:
        issues.append(CompileIssue(
            code=PruneCode.UNSUPPORTED_ROOT.value,
            path=ROOT_PATH,
            message=UNSUPPORTED_ROOT_MESSAGE,
        ))
        logger.info("schema rejected: %s", UNSUPPORTED_ROOT_MESSAGE)
        return CompileResult(
            ok=False,
            issues=sorted(issues, key=lambda issue: (issue.path, issue.code)),
            pruned_count=pruned_count,
        )

    compiled_schema = compiled.to_dict()
    logger.info("schema compiled with %d pruned node(s)", pruned_count)
    return CompileResult(
        ok=True,
        compiled_schema=compiled_schema,
        schema_hash=compute_schema_hash(compiled_schema),
        issues=sorted(issues, key=lambda issue: (issue.path, issue.code)),
        pruned_count=pruned_count,
    )


def validate_response_format_name(name: str) -> None:
    """Raise ValueError unless `name` is an acceptable structured-output schema name."""
    if not name or not re.fullmatch(RESPONSE_FORMAT_NAME_PATTERN, name):
        raise ValueError(f"Invalid response format name '{name}': must match {RESPONSE_FORMAT_NAME_PATTERN}")


def response_format_from_result(
    result: CompileResult,
    name: str,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Wrap an already compiled schema as a strict structured-output response format.

    Raises:
        ValueError: If the name is invalid or the result is not ok
    """
    validate_response_format_name(name)
    if not result.ok:
        raise ValueError(f"Schema '{name}': {UNSUPPORTED_ROOT_MESSAGE}")

    json_schema: Dict[str, Any] = {
        "name": name,
        "schema": result.compiled_schema,
        "strict": True,
    }
    if description:
        json_schema["description"] = description

    return {"type": RESPONSE_FORMAT_TYPE, "json_schema": json_schema}


def build_response_format(
    source: SchemaSource,
    name: str,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Compile a schema and wrap it as a strict structured-output response format.

    Args:
        source: SchemaNode, decoded JSON object, or path to a JSON file
        name: Schema name sent to the API (letters, digits, "_" and "-", up to 64)
        description: Optional description of what the schema produces

    Returns:
        {"type": "json_schema", "json_schema": {"name", "schema", "strict", ["description"]}}

    Raises:
        ValueError: If the name is invalid or the schema cannot be represented
    """
    validate_response_format_name(name)
    return response_format_from_result(compile_schema(source), name, description)
