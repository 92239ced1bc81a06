"""Tests for specdoc.parser.resolver."""

from __future__ import annotations

from specdoc.parser.resolver import resolve_parameters, resolve_ref


DOC = {
    "components": {
        "schemas": {
            "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
            "a/b": {"type": "string"},
            "m~n": {"type": "integer"},
        },
        "parameters": {
            "Limit": {"name": "limit", "in": "query"},
            "Alias": {"$ref": "#/components/parameters/Limit"},
            "CommonHeaders": [
                {"name": "X-Request-ID", "in": "header"},
                {"name": "X-Client", "in": "header"},
            ],
            "Nested": [
                {"$ref": "#/components/parameters/CommonHeaders"},
                {"name": "page", "in": "query"},
            ],
            "Loop": [
                {"name": "first", "in": "query"},
                {"$ref": "#/components/parameters/Loop"},
            ],
        },
    },
    "servers": [{"url": "https://a.example"}, {"url": "https://b.example"}],
}


# ---------------------------------------------------------------------------
# resolve_ref
# ---------------------------------------------------------------------------


class TestResolveRef:
    """Test single-pointer resolution."""

    def test_resolves_component_schema(self) -> None:
        assert resolve_ref("#/components/schemas/Pet", DOC) == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
        }

    def test_returns_same_object_not_copy(self) -> None:
        assert resolve_ref("#/components/schemas/Pet", DOC) is DOC["components"]["schemas"]["Pet"]

    def test_missing_key_returns_none(self) -> None:
        assert resolve_ref("#/components/schemas/Nope", DOC) is None

    def test_external_ref_returns_none(self) -> None:
        assert resolve_ref("other.yaml#/Pet", DOC) is None

    def test_empty_and_non_string_refs_return_none(self) -> None:
        assert resolve_ref("", DOC) is None
        assert resolve_ref(None, DOC) is None
        assert resolve_ref(42, DOC) is None

    def test_array_index_segment(self) -> None:
        assert resolve_ref("#/servers/1/url", DOC) == "https://b.example"

    def test_bad_array_index_returns_none(self) -> None:
        assert resolve_ref("#/servers/5", DOC) is None
        assert resolve_ref("#/servers/first", DOC) is None

    def test_navigating_into_scalar_returns_none(self) -> None:
        assert resolve_ref("#/servers/0/url/deeper", DOC) is None

    def test_json_pointer_escapes(self) -> None:
        assert resolve_ref("#/components/schemas/a~1b", DOC) == {"type": "string"}
        assert resolve_ref("#/components/schemas/m~0n", DOC) == {"type": "integer"}

    def test_parameter_group_resolves_to_list(self) -> None:
        group = resolve_ref("#/components/parameters/CommonHeaders", DOC)
        assert isinstance(group, list)
        assert len(group) == 2


# ---------------------------------------------------------------------------
# resolve_parameters
# ---------------------------------------------------------------------------


class TestResolveParameters:
    """Test parameter list flattening and group expansion."""

    def test_none_and_empty(self) -> None:
        assert resolve_parameters(None, DOC) == []
        assert resolve_parameters([], DOC) == []

    def test_plain_parameters_kept(self) -> None:
        params = [{"name": "q", "in": "query"}]
        assert resolve_parameters(params, DOC) == params

    def test_single_ref_substituted(self) -> None:
        result = resolve_parameters([{"$ref": "#/components/parameters/Limit"}], DOC)
        assert result == [{"name": "limit", "in": "query"}]

    def test_group_expanded_in_place(self) -> None:
        result = resolve_parameters(
            [
                {"name": "before", "in": "query"},
                {"$ref": "#/components/parameters/CommonHeaders"},
                {"name": "after", "in": "query"},
            ],
            DOC,
        )
        assert [p["name"] for p in result] == ["before", "X-Request-ID", "X-Client", "after"]

    def test_nested_groups_expanded(self) -> None:
        result = resolve_parameters([{"$ref": "#/components/parameters/Nested"}], DOC)
        assert [p["name"] for p in result] == ["X-Request-ID", "X-Client", "page"]

    def test_ref_to_ref_followed(self) -> None:
        result = resolve_parameters([{"$ref": "#/components/parameters/Alias"}], DOC)
        assert result == [{"name": "limit", "in": "query"}]

    def test_unresolvable_ref_kept(self) -> None:
        missing = {"$ref": "#/components/parameters/Missing"}
        assert resolve_parameters([missing], DOC) == [missing]

    def test_self_referencing_group_terminates(self) -> None:
        result = resolve_parameters([{"$ref": "#/components/parameters/Loop"}], DOC)
        assert [p["name"] for p in result] == ["first"]

    def test_does_not_mutate_input(self) -> None:
        params = [{"$ref": "#/components/parameters/CommonHeaders"}]
        resolve_parameters(params, DOC)
        assert params == [{"$ref": "#/components/parameters/CommonHeaders"}]
        assert len(DOC["components"]["parameters"]["CommonHeaders"]) == 2
