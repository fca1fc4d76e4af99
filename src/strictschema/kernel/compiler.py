"""Compile JSON Schema nodes into the structured-output dialect.

The structured-output contract of a generative-text API accepts a strict subset
of JSON Schema: every property of every object is required, unknown keys are
rejected, and only a fixed vocabulary of types, formats and keywords may
appear. `compile_node` rewrites a node into that subset, or returns None when
the node cannot be expressed in it.

Pruning is local. A property that cannot be compiled is removed from its
object, an `anyOf` alternative is removed from its list, a tuple item is
removed from its tuple. Only a None at the root means the whole schema is
unusable.

The input tree must be fully resolved (no `$ref`) and acyclic; a cyclic tree
recurses until Python's recursion limit is hit.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from strictschema.codes import PruneCode
from .dialect import (
    ARRAY_TYPE,
    CANONICAL_ADDITIONAL_PROPERTIES,
    FLAG_VETOES,
    NULL_TYPE,
    OBJECT_TYPE,
    PRESENCE_VETOES,
    SUPPORTED_FORMATS,
    SUPPORTED_TYPES,
)
from .node import SchemaNode

logger = logging.getLogger(__name__)

ROOT_PATH = "#"


@dataclass
class PruneEvent:
    """A node dropped during compilation."""
    path: str  # JSON pointer fragment, e.g. "#/properties/title"
    code: PruneCode
    detail: str


def compile_node(node: Optional[SchemaNode], trace: Optional[List[PruneEvent]] = None) -> Optional[SchemaNode]:
    """
    Compile a schema node into the structured-output dialect.

    The input node is left untouched; a new canonical node is returned.

    Args:
        node: Resolved schema node (None is accepted and rejected)
        trace: Optional list collecting a PruneEvent for every dropped node

    Returns:
        The compiled node, or None if the node cannot be represented
    """
    return _compile(node, ROOT_PATH, trace)


def is_representable(node: Optional[SchemaNode]) -> bool:
    """Return True if `node` survives compilation."""
    return compile_node(node) is not None


def _compile(node: Optional[SchemaNode], path: str, trace: Optional[List[PruneEvent]]) -> Optional[SchemaNode]:
    if node is None:
        return _prune(trace, path, PruneCode.UNSUPPORTED_TYPE, "subschema is null")

    # anyOf nodes compile to exactly {anyOf: [...]}; every other keyword is dropped.
    if node.any_of:
        alternatives = []
        for index, alternative in enumerate(node.any_of):
            compiled = _compile(alternative, f"{path}/anyOf/{index}", trace)
            if compiled is not None:
                alternatives.append(compiled)
        if not alternatives:
            return _prune(trace, path, PruneCode.EMPTY_ANY_OF, "no anyOf alternative is representable")
        return SchemaNode(any_of=alternatives)

    types = _resolve_types(node, path)
    if not types:
        return _prune(trace, path, PruneCode.UNSUPPORTED_TYPE, f"no supported type in {_declared_types(node)}")

    veto = _find_veto(node)
    if veto is not None:
        return _prune(trace, path, PruneCode.VETO_KEYWORD, f"keyword '{veto}' is not supported")

    if node.format and node.format not in SUPPORTED_FORMATS:
        return _prune(trace, path, PruneCode.UNSUPPORTED_FORMAT, f"format '{node.format}' is not supported")

    is_object = OBJECT_TYPE in types
    is_array = ARRAY_TYPE in types

    properties = None
    required = None
    additional_properties = None
    if is_object:
        declared_required = set(node.required or [])
        properties = {}
        for name, value in (node.properties or {}).items():
            compiled = _compile(value, f"{path}/properties/{_escape_pointer(name)}", trace)
            if compiled is None:
                continue
            if name not in declared_required:
                compiled = _widen_nullable(compiled)
            properties[name] = compiled

        if not properties:
            return _prune(trace, path, PruneCode.EMPTY_OBJECT, "object has no representable property")

        required = list(properties)
        additional_properties = SchemaNode.from_dict(CANONICAL_ADDITIONAL_PROPERTIES)

    items = None
    items_tuple = None
    if is_array:
        if node.items is not None:
            items = _compile(node.items, f"{path}/items", trace)
            if items is None:
                return _prune(trace, path, PruneCode.UNSUPPORTED_ITEMS, "array item schema is not representable")
        elif node.items_tuple:
            items_tuple = []
            for index, item in enumerate(node.items_tuple):
                compiled = _compile(item, f"{path}/items/{index}", trace)
                if compiled is not None:
                    items_tuple.append(compiled)
            if not items_tuple:
                return _prune(trace, path, PruneCode.EMPTY_ITEMS_TUPLE, "no positional item is representable")
        else:
            return _prune(trace, path, PruneCode.MISSING_ITEMS, "array does not declare its items")

    # Rebuild from the whitelist so nothing else can leak through.
    return SchemaNode(
        type=types[0] if len(types) == 1 else None,
        types=types if len(types) > 1 else None,
        min_length=node.min_length,
        max_length=node.max_length,
        pattern=node.pattern,
        format=node.format or None,
        multiple_of=node.multiple_of,
        maximum=node.maximum,
        exclusive_maximum=node.exclusive_maximum,
        minimum=node.minimum,
        exclusive_minimum=node.exclusive_minimum,
        min_items=node.min_items,
        max_items=node.max_items,
        items=items,
        items_tuple=items_tuple,
        properties=properties,
        required=required,
        additional_properties=additional_properties,
        examples=list(node.examples) if node.examples is not None else None,
    )


def _resolve_types(node: SchemaNode, path: str) -> List[str]:
    """Supported types of a node, list form first, then the scalar form.

    Duplicates are not collapsed: a scalar type repeated in the list is kept
    twice and the node is emitted in list form.
    """
    candidates = list(node.types or [])
    if node.type is not None:
        candidates.append(node.type)

    types = [candidate for candidate in candidates if candidate in SUPPORTED_TYPES]
    if len(types) != len(set(types)):
        logger.warning("%s: duplicate type entries %s are kept as declared", path, types)
    return types


def _declared_types(node: SchemaNode) -> List[str]:
    declared = list(node.types or [])
    if node.type is not None:
        declared.append(node.type)
    return declared


def _find_veto(node: SchemaNode) -> Optional[str]:
    """Return the first vetoed keyword set on the node, if any."""
    for field_name, keyword in PRESENCE_VETOES.items():
        if node.has_keyword(field_name):
            return keyword
    for field_name, keyword in FLAG_VETOES.items():
        if getattr(node, field_name):
            return keyword
    return None


def _widen_nullable(node: SchemaNode) -> SchemaNode:
    """Let an optional property hold null, since every property becomes required."""
    if node.any_of is not None:
        if any(_admits_null(alternative) for alternative in node.any_of):
            return node
        return SchemaNode(any_of=node.any_of + [SchemaNode(type=NULL_TYPE)])

    if node.type is not None:
        return node.model_copy(update={"type": None, "types": [node.type, NULL_TYPE]})

    if NULL_TYPE not in node.types:
        return node.model_copy(update={"types": node.types + [NULL_TYPE]})
    return node


def _admits_null(node: SchemaNode) -> bool:
    return node.type == NULL_TYPE or NULL_TYPE in (node.types or [])


def _escape_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _prune(trace: Optional[List[PruneEvent]], path: str, code: PruneCode, detail: str) -> None:
    logger.debug("pruned %s (%s): %s", path, code.value, detail)
    if trace is not None:
        trace.append(PruneEvent(path=path, code=code, detail=detail))
    return None
