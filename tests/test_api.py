"""Tests for the public strictschema.api functions."""

import json

import pytest

from strictschema.api import (
    build_response_format,
    compile_schema,
    load_schema,
    response_format_from_result,
)
from strictschema.codes import PruneCode
from strictschema.contracts import CompileResult
from strictschema.kernel.node import SchemaNode


ARTICLE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "summary": {"type": "string"},
        "homepage": {"type": "string", "format": "uri"},
    },
    "required": ["title"],
}


def test_load_schema_from_dict():
    node = load_schema(ARTICLE_SCHEMA)
    assert isinstance(node, SchemaNode)
    assert node.properties["title"].type == "string"


def test_load_schema_passes_nodes_through():
    node = SchemaNode(type="string")
    assert load_schema(node) is node


def test_load_schema_from_path(tmp_path):
    path = tmp_path / "article.json"
    path.write_text(json.dumps(ARTICLE_SCHEMA), encoding="utf-8")

    assert load_schema(path).type == "object"
    assert load_schema(str(path)).type == "object"


def test_load_schema_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema(tmp_path / "missing.json")


def test_load_schema_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_schema(path)


def test_load_schema_rejects_non_object_document(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a JSON object"):
        load_schema(path)


def test_load_schema_rejects_invalid_keyword_values():
    with pytest.raises(ValueError, match="Invalid schema structure"):
        load_schema({"type": "string", "maxLength": "long"})


def test_compile_schema_reports_pruned_nodes():
    result = compile_schema(ARTICLE_SCHEMA)

    assert isinstance(result, CompileResult)
    assert result.ok is True
    assert result.compiled_schema == {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "summary": {"type": ["string", "null"]},
        },
        "required": ["title", "summary"],
        "additionalProperties": {"not": {}},
    }
    assert result.pruned_count == 1
    assert [(issue.code, issue.path) for issue in result.issues] == [
        (PruneCode.UNSUPPORTED_FORMAT.value, "#/properties/homepage"),
    ]


def test_compile_schema_hash_is_stable():
    first = compile_schema(ARTICLE_SCHEMA)
    reordered = dict(reversed(list(ARTICLE_SCHEMA.items())))
    second = compile_schema(reordered)

    assert first.schema_hash.startswith("sha256:")
    assert first.schema_hash == second.schema_hash


def test_compile_schema_unsupported_root():
    result = compile_schema({"type": "object", "properties": {"a": {"type": "string", "readOnly": True}}})

    assert result.ok is False
    assert result.compiled_schema is None
    assert result.schema_hash is None
    assert result.pruned_count == 1
    codes = [issue.code for issue in result.issues]
    assert PruneCode.UNSUPPORTED_ROOT.value in codes
    assert PruneCode.EMPTY_OBJECT.value in codes
    assert PruneCode.VETO_KEYWORD.value in codes


def test_compile_schema_issues_are_sorted():
    result = compile_schema({
        "type": "object",
        "properties": {
            "z": {"type": "string", "deprecated": True},
            "a": {"type": "string", "format": "uri"},
            "ok": {"type": "boolean"},
        },
    })
    paths = [issue.path for issue in result.issues]
    assert paths == sorted(paths)


def test_build_response_format():
    response_format = build_response_format(ARTICLE_SCHEMA, "article", description="A news article")

    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "article"
    assert response_format["json_schema"]["strict"] is True
    assert response_format["json_schema"]["description"] == "A news article"
    assert response_format["json_schema"]["schema"] == compile_schema(ARTICLE_SCHEMA).compiled_schema


def test_build_response_format_without_description():
    response_format = build_response_format(ARTICLE_SCHEMA, "article")
    assert "description" not in response_format["json_schema"]


@pytest.mark.parametrize("name", ["", "has space", "a" * 65, "dotted.name"])
def test_build_response_format_rejects_invalid_names(name):
    with pytest.raises(ValueError, match="Invalid response format name"):
        build_response_format(ARTICLE_SCHEMA, name)


def test_build_response_format_rejects_unsupported_schema():
    with pytest.raises(ValueError, match="structured-output generation"):
        build_response_format({"type": "object"}, "empty")


def test_compile_schema_prunes_null_subschemas_locally():
    result = compile_schema({
        "type": "object",
        "properties": {"a": None, "b": {"type": "string", "deprecated": None}},
        "required": ["b"],
    })

    assert result.ok is True
    assert result.compiled_schema["properties"] == {"b": {"type": "string"}}
    assert [(issue.code, issue.path) for issue in result.issues] == [
        (PruneCode.UNSUPPORTED_TYPE.value, "#/properties/a"),
    ]


def test_response_format_from_result_reuses_compiled_schema():
    result = compile_schema(ARTICLE_SCHEMA)
    response_format = response_format_from_result(result, "article")

    assert response_format["json_schema"]["schema"] is result.compiled_schema
    assert response_format["json_schema"]["strict"] is True


def test_response_format_from_result_rejects_failed_result():
    result = compile_schema({"type": "object"})
    with pytest.raises(ValueError, match="structured-output generation"):
        response_format_from_result(result, "empty")
