"""Pydantic model for a (resolved) JSON Schema node."""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator


# Fields whose JSON keyword differs from their alias because two fields share
# one keyword on the wire.
_WIRE_OVERRIDES = {
    "types": "type",
    "items_tuple": "items",
}

# Keywords holding a single subschema, a list of subschemas, or a mapping of them.
_SUBSCHEMA_KEYWORDS = ("items", "not")
_SUBSCHEMA_LIST_KEYWORDS = ("anyOf",)
_SUBSCHEMA_MAP_KEYWORDS = ("properties",)

# Boolean keywords; a JSON null reads as false.
_FLAG_KEYWORDS = ("uniqueItems", "deprecated", "readOnly", "unique_items", "read_only")

Number = Union[int, float]


def _boolean_schema(value: Any) -> Any:
    """Expand a boolean schema: true matches anything, false matches nothing."""
    if value is True:
        return {}
    if value is False:
        return {"not": {}}
    return value


class SchemaNode(BaseModel):
    """One JSON Schema document or sub-schema.

    `type` may arrive either as a string or as a list of strings; the list form
    is held in `types`. Likewise `items` may be a single schema (`items`) or a
    positional list (`items_tuple`). Keywords the model does not know are kept
    as extras so that callers can inspect them, but they are never emitted by a
    compiled node.
    """
    type: Optional[str] = None
    types: Optional[List[str]] = None
    any_of: Optional[List[Optional["SchemaNode"]]] = Field(None, alias="anyOf")

    # String constraints
    min_length: Optional[int] = Field(None, alias="minLength")
    max_length: Optional[int] = Field(None, alias="maxLength")
    pattern: Optional[str] = None
    format: Optional[str] = None

    # Numeric constraints
    multiple_of: Optional[Number] = Field(None, alias="multipleOf")
    maximum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = Field(None, alias="exclusiveMaximum")
    minimum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = Field(None, alias="exclusiveMinimum")

    # Array constraints
    min_items: Optional[int] = Field(None, alias="minItems")
    max_items: Optional[int] = Field(None, alias="maxItems")
    items: Optional["SchemaNode"] = None
    items_tuple: Optional[List[Optional["SchemaNode"]]] = None

    # Object constraints
    properties: Optional[Dict[str, Optional["SchemaNode"]]] = None
    required: Optional[List[str]] = None
    additional_properties: Optional[Union[bool, "SchemaNode"]] = Field(None, alias="additionalProperties")

    not_: Optional["SchemaNode"] = Field(None, alias="not")

    # Keywords that make a node unrepresentable
    const: Any = None
    contains: Any = None
    unique_items: bool = Field(False, alias="uniqueItems")
    deprecated: bool = False
    read_only: bool = Field(False, alias="readOnly")
    pattern_properties: Optional[Dict[str, Any]] = Field(None, alias="patternProperties")
    additional_items: Any = Field(None, alias="additionalItems")
    all_of: Optional[List[Any]] = Field(None, alias="allOf")
    one_of: Optional[List[Any]] = Field(None, alias="oneOf")
    prefix_items: Optional[List[Any]] = Field(None, alias="prefixItems")

    examples: Optional[List[Any]] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def split_polymorphic_keywords(cls, data: Any) -> Any:
        """Route list-valued `type`/`items` to their list fields and expand boolean subschemas.

        Null entries inside `anyOf`, `properties` and positional `items` are kept
        as None so the compiler can prune them one by one.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if isinstance(data.get("type"), list):
            if "types" in data:
                raise ValueError("'type' given as a list cannot be combined with 'types'")
            data["types"] = data.pop("type")

        if isinstance(data.get("items"), list):
            if "items_tuple" in data:
                raise ValueError("'items' given as a list cannot be combined with 'items_tuple'")
            data["items_tuple"] = [_boolean_schema(item) for item in data.pop("items")]

        for keyword in _SUBSCHEMA_KEYWORDS:
            if keyword in data:
                data[keyword] = _boolean_schema(data[keyword])
        for keyword in _SUBSCHEMA_LIST_KEYWORDS:
            if isinstance(data.get(keyword), list):
                data[keyword] = [_boolean_schema(item) for item in data[keyword]]
        for keyword in _SUBSCHEMA_MAP_KEYWORDS:
            if isinstance(data.get(keyword), dict):
                data[keyword] = {key: _boolean_schema(value) for key, value in data[keyword].items()}

        for keyword in _FLAG_KEYWORDS:
            if keyword in data and data[keyword] is None:
                data[keyword] = False

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaNode":
        """Build a node tree from a decoded JSON document."""
        return cls.model_validate(data)

    def has_keyword(self, field_name: str) -> bool:
        """True if the keyword was given on input (a null `const` counts)."""
        if field_name not in self.model_fields_set:
            return False
        return field_name == "const" or getattr(self, field_name) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Encode the node back to its JSON Schema wire form.

        Only keywords that were given (or set by the compiler) are emitted;
        unknown keywords held as extras come last, unchanged.
        """
        out: Dict[str, Any] = {}
        for name, info in self.__class__.model_fields.items():
            if not self.has_keyword(name):
                continue
            keyword = _WIRE_OVERRIDES.get(name, info.alias or name)
            out[keyword] = _encode(getattr(self, name))
        if self.model_extra:
            out.update(self.model_extra)
        return out


def _encode(value: Any) -> Any:
    if isinstance(value, SchemaNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


SchemaNode.model_rebuild()
