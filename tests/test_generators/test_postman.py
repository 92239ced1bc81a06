"""Tests for the Postman collection generator."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specdoc.generators.postman import (
    COLLECTION_SCHEMA,
    DEFAULT_BASE_URL,
    PostmanGenerator,
    base_url,
    build_collection,
    build_environment,
)
from specdoc.models import ProcessorOptions, TemplateData
from specdoc.processor import process


@pytest.fixture
def data(petstore: dict[str, Any], fixed_options: ProcessorOptions) -> TemplateData:
    return process(petstore, fixed_options)


def _request(collection: dict[str, Any], name: str) -> dict[str, Any]:
    for folder in collection["item"]:
        for item in folder["item"]:
            if item["name"] == name:
                return item["request"]
    raise AssertionError(name)


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


class TestBuildCollection:
    """Test the collection built from processed data."""

    def test_info(self, data: TemplateData) -> None:
        info = build_collection(data)["info"]
        assert info["name"] == "Petstore API v1.2.0"
        assert info["description"] == "A sample pet store."
        assert info["schema"] == COLLECTION_SCHEMA

    def test_folders_follow_resources(self, data: TemplateData) -> None:
        collection = build_collection(data)
        assert [f["name"] for f in collection["item"]] == ["Pets", "Store"]
        assert [i["name"] for i in collection["item"][0]["item"]] == [
            "List pets",
            "Create a pet",
            "Get a pet",
            "Delete a pet",
        ]

    def test_query_and_auth(self, data: TemplateData) -> None:
        request = _request(build_collection(data), "List pets")
        assert request["method"] == "GET"
        assert request["url"]["raw"] == "{{BASE_URL}}/pets?limit=20&status=available"
        assert request["url"]["query"] == [
            {"key": "limit", "value": "20"},
            {"key": "status", "value": "available"},
        ]
        assert request["header"] == [
            {"key": "Authorization", "value": "Bearer {{AUTH_TOKEN}}", "type": "text"}
        ]
        assert "body" not in request

    def test_path_params_become_variables(self, data: TemplateData) -> None:
        request = _request(build_collection(data), "Get a pet")
        assert request["url"]["path"] == ["pets", ":petId"]
        assert request["url"]["query"] == []

    def test_json_body(self, data: TemplateData) -> None:
        request = _request(build_collection(data), "Create a pet")
        assert request["body"]["mode"] == "raw"
        assert json.loads(request["body"]["raw"]) == {"name": "string", "tag": "string"}
        assert {"key": "Content-Type", "value": "application/json", "type": "text"} in request[
            "header"
        ]

    def test_no_auth_header_when_opted_out(self, data: TemplateData) -> None:
        assert _request(build_collection(data), "Get inventory")["header"] == []

    def test_api_key_header(self, spec_factory) -> None:
        spec = spec_factory(
            {"/k": {"get": {"tags": ["k"], "summary": "Keyed"}}},
            components={
                "securitySchemes": {"key": {"type": "apiKey", "in": "header", "name": "X-Key"}}
            },
        )
        request = _request(build_collection(process(spec)), "Keyed")
        assert request["header"] == [{"key": "X-Key", "value": "{{AUTH_TOKEN}}", "type": "text"}]

    def test_stable_ids(self, data: TemplateData) -> None:
        assert build_collection(data)["info"]["_postman_id"] == build_collection(data)["info"][
            "_postman_id"
        ]


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class TestBuildEnvironment:
    def test_values(self, data: TemplateData) -> None:
        env = build_environment(data)
        assert env["name"] == "PETSTORE_API_ENVIRONMENT"
        values = {v["key"]: v for v in env["values"]}
        assert values["BASE_URL"]["value"] == "https://api.petstore.example/v1"
        assert values["API_VERSION"]["value"] == "1.2.0"
        assert values["AUTH_TOKEN"]["type"] == "secret"
        assert env["_postman_exported_at"] == "2024-01-01T00:00:00+00:00"

    def test_base_url_fallbacks(self, spec_factory) -> None:
        spec = spec_factory({"/a": {"get": {"tags": ["a"]}}})
        assert base_url(process(spec)) == DEFAULT_BASE_URL
        assert base_url(process(spec, ProcessorOptions(base_url="https://x.example"))) == (
            "https://x.example"
        )


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestPostmanGenerator:
    def test_writes_both_files(
        self, petstore: dict[str, Any], fixed_options: ProcessorOptions, tmp_path: Path
    ) -> None:
        paths = PostmanGenerator().generate(petstore, fixed_options, tmp_path)
        assert [p.name for p in paths] == ["api-postman.json", "api-postman-env.json"]
        collection = json.loads(paths[0].read_text(encoding="utf-8"))
        assert collection["variable"][0]["value"] == "https://api.petstore.example/v1"
        env = json.loads(paths[1].read_text(encoding="utf-8"))
        assert env["_postman_variable_scope"] == "environment"

    def test_byte_identical_runs(
        self, petstore: dict[str, Any], fixed_options: ProcessorOptions, tmp_path: Path
    ) -> None:
        first = PostmanGenerator().generate(petstore, fixed_options, tmp_path / "a")
        second = PostmanGenerator().generate(petstore, fixed_options, tmp_path / "b")
        assert [p.read_bytes() for p in first] == [p.read_bytes() for p in second]
