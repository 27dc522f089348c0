import pytest

from openapi_har.translator.sampler import SchemaSamplingError, sample

ROOT = {
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "readOnly": True},
                    "name": {"type": "string", "example": "doggie"},
                    "category": {"$ref": "#/components/schemas/Category"},
                },
            },
            "Category": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Node": {
                "type": "object",
                "properties": {
                    "value": {"type": "integer"},
                    "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
                },
            },
            "Secret": {"type": "string", "writeOnly": True},
        }
    }
}


class TestKeywords:
    def test_example_wins(self):
        assert sample({"type": "string", "example": "x", "default": "y"}) == "x"

    def test_const(self):
        assert sample({"const": 5, "example": 6}) == 5

    def test_examples_list(self):
        assert sample({"type": "string", "examples": ["first", "second"]}) == "first"

    def test_default(self):
        assert sample({"type": "integer", "default": 7}) == 7

    def test_enum(self):
        assert sample({"type": "string", "enum": ["available", "sold"]}) == "available"

    def test_example_is_copied(self):
        schema = {"type": "object", "example": {"a": [1]}}
        result = sample(schema)
        result["a"].append(2)
        assert schema["example"] == {"a": [1]}


class TestTypes:
    def test_primitives(self):
        assert sample({"type": "string"}) == "string"
        assert sample({"type": "integer"}) == 0
        assert sample({"type": "number", "minimum": 1.5}) == 1.5
        assert sample({"type": "integer", "minimum": 3, "exclusiveMinimum": True}) == 4
        assert sample({"type": "integer", "exclusiveMinimum": 10}) == 11
        assert sample({"type": "boolean"}) is True
        assert sample({"type": "null"}) is None

    def test_string_formats(self):
        assert sample({"type": "string", "format": "email"}) == "user@example.com"
        assert sample({"type": "string", "format": "date"}) == "2019-08-24"

    def test_string_length_bounds(self):
        assert len(sample({"type": "string", "minLength": 10})) == 10
        assert sample({"type": "string", "maxLength": 3}) == "str"

    def test_array(self):
        assert sample({"type": "array", "items": {"type": "integer"}}) == [0]
        assert sample({"type": "array", "items": {"type": "integer"}, "minItems": 2}) == [0, 0]

    def test_inferred_types(self):
        assert sample({"properties": {"a": {"type": "boolean"}}}) == {"a": True}
        assert sample({"items": {"type": "string"}}) == ["string"]
        assert sample({}) is None

    def test_type_list(self):
        assert sample({"type": ["null", "string"]}) == "string"

    def test_swagger_file(self):
        assert sample({"type": "file"}) == ""

    def test_unknown_type_raises(self):
        with pytest.raises(SchemaSamplingError):
            sample({"type": "tuple"})


class TestComposition:
    def test_all_of_merges(self):
        schema = {
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}},
                {"type": "object", "properties": {"b": {"type": "integer"}}},
            ]
        }
        assert sample(schema) == {"a": "string", "b": 0}

    def test_all_of_incompatible_types_raise(self):
        with pytest.raises(SchemaSamplingError):
            sample({"allOf": [{"type": "string"}, {"type": "integer"}]})

    def test_one_of_takes_first(self):
        assert sample({"oneOf": [{"type": "integer"}, {"type": "string"}]}) == 0

    def test_any_of_takes_first(self):
        assert sample({"anyOf": [{"type": "string"}, {"type": "integer"}]}) == "string"


class TestRefs:
    def test_resolves_refs_against_root(self):
        result = sample({"$ref": "#/components/schemas/Pet"}, {}, ROOT)
        assert result == {"id": 0, "name": "doggie", "category": {"name": "string"}}

    def test_skip_read_only(self):
        result = sample({"$ref": "#/components/schemas/Pet"}, {"skipReadOnly": True}, ROOT)
        assert "id" not in result

    def test_skip_write_only_through_ref(self):
        schema = {"type": "object", "properties": {"secret": {"$ref": "#/components/schemas/Secret"}}}
        assert sample(schema, {"skipWriteOnly": True}, ROOT) == {}

    def test_skip_non_required(self):
        schema = {"type": "object", "required": ["a"], "properties": {"a": {"type": "string"}, "b": {"type": "string"}}}
        assert sample(schema, {"skipNonRequired": True}) == {"a": "string"}

    def test_recursive_schema_terminates(self):
        result = sample({"$ref": "#/components/schemas/Node"}, {}, ROOT)
        assert result == {"value": 0, "children": [{}]}

    def test_remote_ref_samples_to_none(self):
        assert sample({"$ref": "http://example.com/pet.json"}) is None

    def test_root_is_not_mutated(self):
        before = repr(ROOT)
        sample({"$ref": "#/components/schemas/Pet"}, {"skipReadOnly": True}, ROOT)
        assert repr(ROOT) == before
