"""Tests for kernel/node.py."""

import pytest
from pydantic import ValidationError

from strictschema.kernel.node import SchemaNode


def test_scalar_type():
    node = SchemaNode.from_dict({"type": "string"})
    assert node.type == "string"
    assert node.types is None


def test_list_type_decodes_to_types():
    node = SchemaNode.from_dict({"type": ["string", "null"]})
    assert node.type is None
    assert node.types == ["string", "null"]


def test_list_type_conflicting_with_types_is_rejected():
    with pytest.raises(ValidationError):
        SchemaNode.from_dict({"type": ["string"], "types": ["null"]})


def test_single_items_schema():
    node = SchemaNode.from_dict({"type": "array", "items": {"type": "string"}})
    assert node.items.type == "string"
    assert node.items_tuple is None


def test_items_list_decodes_to_items_tuple():
    node = SchemaNode.from_dict({"type": "array", "items": [{"type": "string"}, {"type": "integer"}]})
    assert node.items is None
    assert [item.type for item in node.items_tuple] == ["string", "integer"]


def test_camel_case_keywords():
    node = SchemaNode.from_dict({
        "type": "object",
        "minLength": 1,
        "maxItems": 3,
        "additionalProperties": False,
        "patternProperties": {"^x": {}},
        "anyOf": [{"type": "string"}],
    })
    assert node.min_length == 1
    assert node.max_items == 3
    assert node.additional_properties is False
    assert node.pattern_properties == {"^x": {}}
    assert node.any_of[0].type == "string"


def test_boolean_subschemas_are_expanded():
    node = SchemaNode.from_dict({
        "type": "object",
        "properties": {"anything": True, "nothing": False},
        "anyOf": [True],
    })
    assert node.properties["anything"].to_dict() == {}
    assert node.properties["nothing"].to_dict() == {"not": {}}
    assert node.any_of[0].to_dict() == {}


def test_unknown_keywords_kept_as_extras():
    node = SchemaNode.from_dict({"type": "string", "title": "Name", "x-order": 2})
    assert node.model_extra == {"title": "Name", "x-order": 2}


def test_const_null_counts_as_present():
    assert SchemaNode.from_dict({"const": None}).has_keyword("const")
    assert not SchemaNode.from_dict({}).has_keyword("const")


def test_explicit_null_keyword_is_not_present():
    node = SchemaNode.from_dict({"contains": None})
    assert not node.has_keyword("contains")


def test_invalid_keyword_value_is_rejected():
    with pytest.raises(ValidationError):
        SchemaNode.from_dict({"type": "string", "minLength": "five"})


def test_to_dict_uses_wire_keywords():
    data = {
        "type": ["object", "null"],
        "properties": {
            "tags": {"type": "array", "items": [{"type": "string"}], "minItems": 1},
            "score": {"type": "number", "exclusiveMinimum": 0},
        },
        "required": ["tags"],
        "additionalProperties": {"not": {}},
        "examples": [{"tags": ["a"], "score": 1}],
        "description": "kept as extra",
    }
    assert SchemaNode.from_dict(data).to_dict() == data


def test_to_dict_skips_unset_fields():
    assert SchemaNode(type="string", min_length=None).to_dict() == {"type": "string"}
