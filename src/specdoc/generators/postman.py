"""Postman collection (v2.1) and environment generator.

Requests are built from the processed endpoint data rather than the raw
spec, so they carry the same merged parameters, deduplicated headers and
request body examples as the Markdown and HTML references. Two files are
written:

* ``api-postman.json`` -- the collection, one folder per resource.
* ``api-postman-env.json`` -- an environment with ``BASE_URL``,
  ``API_VERSION``, ``AUTH_TOKEN`` and ``CONTENT_TYPE``.

Identifiers are derived from the API title and version with
:func:`uuid.uuid5`, so regenerating an unchanged spec produces identical
files.
"""

from __future__ import annotations

import json
import re
import uuid
from pathlib import Path
from typing import Any

from specdoc.generators.base import Generator, branding_text, write_output
from specdoc.models import EndpointData, ProcessorOptions, ResourceData, TemplateData

COLLECTION_FILE = "api-postman.json"
ENVIRONMENT_FILE = "api-postman-env.json"
COLLECTION_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
DEFAULT_BASE_URL = "http://localhost:3000"

_PATH_PARAM = re.compile(r"^\{(.+)\}$")


class PostmanGenerator(Generator):
    """Writes a Postman collection and a matching environment."""

    @property
    def name(self) -> str:
        return "postman"

    @property
    def description(self) -> str:
        return "Postman collection and environment for API testing"

    @property
    def output_files(self) -> list[str]:
        return [COLLECTION_FILE, ENVIRONMENT_FILE]

    def generate(
        self, spec: dict[str, Any], options: ProcessorOptions, output_dir: str | Path
    ) -> list[Path]:
        data = self.template_data(spec, options)
        output_path = Path(output_dir)
        return [
            write_output(output_path / COLLECTION_FILE, _dump(build_collection(data))),
            write_output(output_path / ENVIRONMENT_FILE, _dump(build_environment(data))),
        ]


def base_url(data: TemplateData) -> str:
    for server in data.servers:
        if server.url:
            return server.url
    for resource in data.resources:
        for endpoint in resource.endpoints:
            if endpoint.base_url:
                return endpoint.base_url
    return DEFAULT_BASE_URL


def build_collection(data: TemplateData) -> dict[str, Any]:
    """Build the Postman v2.1 collection dict for *data*."""
    title = f"{data.info.title} v{data.info.version}"
    return {
        "info": {
            "_postman_id": _stable_id("collection", data),
            "name": title,
            "description": data.info.description or "Generated from OpenAPI specification",
            "schema": COLLECTION_SCHEMA,
        },
        "item": [_folder(resource) for resource in data.resources],
        "variable": [{"key": "baseUrl", "value": base_url(data), "type": "string"}],
    }


def build_environment(data: TemplateData) -> dict[str, Any]:
    """Build the Postman environment dict for *data*."""
    name = re.sub(r"\s+", "_", data.info.title.upper())
    return {
        "id": _stable_id("environment", data),
        "name": f"{name}_ENVIRONMENT",
        "values": [
            _env_value("BASE_URL", base_url(data), "API base URL"),
            _env_value("API_VERSION", data.info.version, "API version"),
            _env_value(
                "AUTH_TOKEN",
                "your_auth_token_here",
                "Authentication token (configure in your environment)",
                kind="secret",
            ),
            _env_value("CONTENT_TYPE", "application/json", "Default content type for requests"),
        ],
        "_postman_variable_scope": "environment",
        "_postman_exported_at": data.timestamp,
        "_postman_exported_using": branding_text(data.exclude_brand, data.version, data.timestamp),
    }


def _folder(resource: ResourceData) -> dict[str, Any]:
    return {
        "name": resource.name,
        "description": resource.description,
        "item": [_request_item(endpoint) for endpoint in resource.endpoints],
    }


def _request_item(endpoint: EndpointData) -> dict[str, Any]:
    headers = [
        {"key": header.name, "value": _postman_header_value(header.example), "type": "text"}
        for header in endpoint.headers
    ]
    if endpoint.request_body is not None and endpoint.request_body.content_type:
        headers.append(
            {"key": "Content-Type", "value": endpoint.request_body.content_type, "type": "text"}
        )

    segments = [s for s in endpoint.path.split("/") if s]
    query = _query_pairs(endpoint.query_string)

    request: dict[str, Any] = {
        "method": endpoint.method,
        "header": headers,
        "url": {
            "raw": "{{BASE_URL}}" + endpoint.path + endpoint.query_string,
            "host": ["{{BASE_URL}}"],
            "path": [_PATH_PARAM.sub(r":\1", s) for s in segments],
            "query": query,
        },
        "description": endpoint.description,
    }
    if endpoint.request_body_example is not None:
        request["body"] = {
            "mode": "raw",
            "raw": endpoint.request_body_example,
            "options": {"raw": {"language": "json"}},
        }

    return {"name": endpoint.summary, "request": request, "response": []}


def _query_pairs(query_string: str) -> list[dict[str, str]]:
    pairs: list[dict[str, str]] = []
    for part in query_string.lstrip("?").split("&"):
        if not part:
            continue
        key, _, value = part.partition("=")
        pairs.append({"key": key, "value": value})
    return pairs


def _postman_header_value(example: str) -> str:
    if example.startswith("Bearer "):
        return "Bearer {{AUTH_TOKEN}}"
    if example.startswith("Basic "):
        return "Basic {{AUTH_TOKEN}}"
    if example == "<your-api-key>":
        return "{{AUTH_TOKEN}}"
    return example


def _env_value(key: str, value: str, description: str, kind: str = "default") -> dict[str, Any]:
    return {
        "key": key,
        "value": value,
        "type": kind,
        "description": description,
        "enabled": True,
    }


def _stable_id(kind: str, data: TemplateData) -> str:
    seed = f"specdoc:{kind}:{data.info.title}:{data.info.version}"
    return str(uuid.uuid5(uuid.NAMESPACE_URL, seed))


def _dump(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
