"""Walk an OpenAPI document and build the template data for renderers.

:class:`OpenApiProcessor` is the entry point of the processing core. It
takes an already-parsed OpenAPI 3.x document and returns a
:class:`~specdoc.models.TemplateData` -- the complete, logic-less structure
that the Markdown, HTML and Postman generators consume.

The walk visits every (path, method) pair once and produces, per operation:

* merged parameters (path-level first, operation-level replacing entries
  with the same case-insensitive ``(name, in)`` key, new ones appended);
* a request body and responses, each with a preferred content type,
  examples serialized for that content type, and property tables;
* code-sample fields: base URL, query string, request headers (with an
  auth header when the operation needs one) and a compact JSON body.

Operations are grouped into resources by their first tag. Resources listed
in :attr:`ProcessorOptions.tag_order` come first, in that order; the rest
follow alphabetically.

Errors:
    An operation without tags raises :class:`~specdoc.exceptions.MissingTagError`.
    A ``None`` document raises :class:`~specdoc.exceptions.ProcessingError`.
    Any other unexpected failure is re-raised as a ``ProcessingError`` naming
    the stage it happened in.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional, TypeVar

from specdoc.exceptions import MissingTagError, ProcessingError, SpecdocError
from specdoc.models import (
    EndpointData,
    EndpointSummary,
    ExampleData,
    HeaderData,
    HTTPMethod,
    InfoData,
    ParameterData,
    ParameterLocation,
    ProcessorOptions,
    PropertyData,
    RequestBodyData,
    ResourceData,
    ResponseData,
    ResponseHeaderData,
    SchemaModelData,
    SchemasData,
    ServerData,
    TemplateData,
)
from specdoc.parser.resolver import resolve_parameters, resolve_ref
from specdoc.processor.anchors import AnchorBuilder
from specdoc.processor.examples import (
    ExampleSynthesizer,
    format_example_value,
    is_json_media,
    media_type,
    syntax_language,
    to_text,
)
from specdoc.processor.schema import SchemaNormalizer

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

REQUEST_CONTENT_PREFERENCE = (
    "application/json",
    "application/xml",
    "text/plain",
    "multipart/form-data",
    "application/x-www-form-urlencoded",
)
RESPONSE_CONTENT_PREFERENCE = (
    "application/json",
    "application/xml",
    "text/plain",
    "text/html",
)

QUICK_REFERENCE_TITLE = "Quick Reference"

_WORD_SEPARATORS = re.compile(r"[-_\s]+")


def to_pascal_case(text: str) -> str:
    """``"user-accounts"`` -> ``"UserAccounts"``, ``"API keys"`` -> ``"ApiKeys"``."""
    words = [w for w in _WORD_SEPARATORS.split(text) if w]
    return "".join(w[:1].upper() + w[1:].lower() for w in words)


def select_content_type(
    available: list[str], preference: tuple[str, ...]
) -> Optional[str]:
    """Pick the first preferred media type present in *available*.

    Keys are compared on their base media type, so
    ``application/json; charset=utf-8`` satisfies ``application/json``.
    Falls back to the first available key, or ``None`` when empty.
    """
    if not available:
        return None
    for wanted in preference:
        for content_type in available:
            if media_type(content_type) == wanted:
                return content_type
    return available[0]


class OpenApiProcessor:
    """Turns an OpenAPI document into :class:`~specdoc.models.TemplateData`.

    Args:
        options: Presentation options. Keyword arguments are accepted as a
            shorthand and override fields of *options*.

    The processor keeps three memo caches (normalized schema types,
    synthesized examples, anchors). They are tied to the document being
    processed and are cleared automatically when a different document is
    passed to :meth:`process`; call :meth:`clear_caches` to drop them
    explicitly.

    Example::

        processor = OpenApiProcessor(tag_order=["Users"], timestamp="2024-01-01T00:00:00Z")
        data = processor.process(spec)
        context = data.as_context()  # camelCase dict for templates
    """

    def __init__(self, options: Optional[ProcessorOptions] = None, **overrides: Any) -> None:
        if options is None:
            options = ProcessorOptions.model_validate(overrides)
        elif overrides:
            options = options.model_copy(update=overrides)
        self.options = options
        self._anchors = AnchorBuilder(url_encode=options.url_encode_anchors)
        self._document: Any = None
        self._normalizer = SchemaNormalizer(None)
        self._synthesizer = ExampleSynthesizer(self._normalizer)

    # --- Public API ---

    def bind(self, document: Any) -> "OpenApiProcessor":
        """Attach *document* for the helper methods; returns ``self``.

        :meth:`process` binds automatically. Binding a different document
        drops the schema caches.
        """
        if document is not self._document:
            self._document = document
            self._normalizer = SchemaNormalizer(document)
            self._synthesizer = ExampleSynthesizer(self._normalizer)
        return self

    def clear_caches(self) -> None:
        self._normalizer.clear_cache()
        self._synthesizer.clear_cache()
        self._anchors.clear_cache()

    def process(self, spec: Any) -> TemplateData:
        """Build the template data for *spec*.

        Args:
            spec: The parsed OpenAPI document.

        Returns:
            The complete :class:`~specdoc.models.TemplateData`.

        Raises:
            ProcessingError: If *spec* is ``None`` or not a mapping, or a
                processing stage fails.
            MissingTagError: If an operation declares no tags.
        """
        if spec is None:
            raise ProcessingError(
                "Cannot process specification: document is None", stage="document"
            )
        if not isinstance(spec, dict):
            raise ProcessingError(
                f"Cannot process specification: expected a mapping, got {type(spec).__name__}",
                stage="document",
            )

        self.bind(spec)

        info = self._with_context("info", lambda: self._process_info(spec.get("info")))
        servers = self._with_context("servers", lambda: self._process_servers(spec.get("servers")))
        has_auth = self._with_context("authentication", self.has_authentication)
        endpoints, resources = self._with_context(
            "endpoints", lambda: self._walk_paths(spec.get("paths"))
        )
        schemas = self._with_context("schemas", self._process_schemas)

        logger.debug(
            "Processed %d operations into %d resources", len(endpoints), len(resources)
        )
        logger.debug(
            "Cache sizes: %d examples, %d types, %d anchors",
            self._synthesizer.cache_size,
            self._normalizer.cache_size,
            self._anchors.cache_size,
        )

        return TemplateData(
            info=info,
            servers=servers,
            has_auth=has_auth,
            endpoints=endpoints,
            resources=resources,
            schemas=schemas,
            exclude_brand=self.options.exclude_brand,
            version=self.options.version,
            timestamp=self.options.timestamp or datetime.now(timezone.utc).isoformat(),
            quick_reference_anchor=self._anchors.build(QUICK_REFERENCE_TITLE),
        )

    def normalize_schema(self, schema: Any) -> Optional[dict[str, Any]]:
        """Normalize *schema* against the bound document."""
        return self._normalizer.normalize(schema)

    def generate_example(self, schema: Any, depth: int = 0) -> Any:
        """Synthesize an example for *schema* against the bound document."""
        return self._synthesizer.synthesize(schema, depth)

    def create_anchor(self, method: str, path: str, summary: str = "") -> str:
        return self._anchors.for_operation(method, path, summary)

    # --- Stage wrapper ---

    @staticmethod
    def _with_context(stage: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except SpecdocError:
            raise
        except Exception as exc:
            raise ProcessingError(f"Processing {stage} failed: {exc}", stage=stage) from exc

    # --- Document-level sections ---

    @staticmethod
    def _process_info(info: Any) -> InfoData:
        if not isinstance(info, dict):
            return InfoData()
        contact = info.get("contact")
        license_info = info.get("license")
        return InfoData(
            title=info.get("title") or "API Documentation",
            version=str(info.get("version") or "1.0.0"),
            description=info.get("description") or "",
            contact=contact if isinstance(contact, dict) else None,
            license=license_info if isinstance(license_info, dict) else None,
        )

    @staticmethod
    def _process_servers(servers: Any) -> list[ServerData]:
        if not isinstance(servers, list):
            return []
        return [
            ServerData(
                url=server.get("url") or "",
                description=server.get("description") or server.get("url") or "Server",
            )
            for server in servers
            if isinstance(server, dict)
        ]

    def _process_schemas(self) -> Optional[SchemasData]:
        components = self._document.get("components")
        schemas = components.get("schemas") if isinstance(components, dict) else None
        if not isinstance(schemas, dict) or not schemas:
            return None

        models: list[SchemaModelData] = []
        for name, raw in schemas.items():
            normalized = self._normalizer.normalize(raw) or {}
            description = ""
            if isinstance(raw, dict):
                description = raw.get("description") or ""
            models.append(
                SchemaModelData(
                    name=str(name),
                    description=description or normalized.get("description") or "",
                    example=self._synthesizer.render_json(normalized),
                    properties=self._property_rows(normalized),
                )
            )
        return SchemasData(models=models)

    # --- Paths and resources ---

    def _walk_paths(self, paths: Any) -> tuple[list[EndpointSummary], list[ResourceData]]:
        endpoints: list[EndpointSummary] = []
        resources: dict[str, ResourceData] = {}

        if not isinstance(paths, dict):
            return endpoints, []

        for path, path_item in paths.items():
            path_item = self._resolve_object(path_item)
            if path_item is None:
                continue

            for method, operation in path_item.items():
                if str(method).lower() not in _HTTP_METHODS or not isinstance(operation, dict):
                    continue
                method = str(method).upper()
                summary = operation.get("summary") or f"{method} {path}"
                anchor = self._anchors.build(summary)
                endpoints.append(
                    EndpointSummary(method=method, path=path, summary=summary, anchor=anchor)
                )

                tag = self._first_tag(method, path, operation)
                resource = resources.get(tag)
                if resource is None:
                    name = to_pascal_case(tag) or tag
                    resource = ResourceData(
                        name=name,
                        tag=tag,
                        description=self._tag_description(tag),
                        anchor=self._anchors.build(name),
                    )
                    resources[tag] = resource

                resource.endpoints.append(
                    self._with_context(
                        f"{method} {path}",
                        lambda: self._process_endpoint(
                            path, path_item, method, operation, summary, anchor, tag
                        ),
                    )
                )

        return endpoints, self._order_resources(list(resources.values()))

    @staticmethod
    def _first_tag(method: str, path: str, operation: dict[str, Any]) -> str:
        tags = operation.get("tags")
        if isinstance(tags, list) and tags and tags[0] not in (None, ""):
            return str(tags[0])
        raise MissingTagError(method, path, operation.get("summary"))

    def _tag_description(self, tag: str) -> str:
        for entry in self._document.get("tags") or []:
            if isinstance(entry, dict) and entry.get("name") == tag:
                return entry.get("description") or ""
        return ""

    def _order_resources(self, resources: list[ResourceData]) -> list[ResourceData]:
        order = [str(t).lower() for t in self.options.tag_order]

        def sort_key(resource: ResourceData) -> tuple[int, int, str, str]:
            for candidate in (resource.tag.lower(), resource.name.lower()):
                if candidate in order:
                    return (0, order.index(candidate), "", "")
            return (1, 0, resource.name.lower(), resource.tag)

        return sorted(resources, key=sort_key)

    # --- Operations ---

    def _process_endpoint(
        self,
        path: str,
        path_item: dict[str, Any],
        method: str,
        operation: dict[str, Any],
        summary: str,
        anchor: str,
        tag: str,
    ) -> EndpointData:
        label = f"{method} {path}"
        merged = self.merge_parameters(path_item.get("parameters"), operation.get("parameters"))
        request_body = self._resolve_object(operation.get("requestBody"))

        return EndpointData(
            method=method,
            path=path,
            summary=summary,
            anchor=anchor,
            description=operation.get("description") or "",
            tag=tag,
            operation_id=operation.get("operationId"),
            deprecated=bool(operation.get("deprecated", False)),
            parameters=self._with_context(
                f"parameters for {label}", lambda: self._process_parameters(merged)
            ),
            request_body=self._with_context(
                f"request body for {label}", lambda: self._process_request_body(request_body)
            ),
            responses=self._with_context(
                f"responses for {label}",
                lambda: self._process_responses(operation.get("responses")),
            ),
            base_url=self.operation_base_url(operation, path_item),
            query_string=self.build_query_string(merged),
            has_content_type=request_body is not None,
            headers=self.build_headers(merged, operation),
            request_body_example=self._with_context(
                f"request body example for {label}",
                lambda: self.request_body_example(request_body),
            ),
            requires_auth=self.operation_requires_auth(operation),
        )

    def operation_base_url(
        self, operation: dict[str, Any], path_item: Optional[dict[str, Any]] = None
    ) -> str:
        """First server URL of the operation, path item, then document.

        Falls back to :attr:`ProcessorOptions.base_url`.
        """
        sources = [operation, path_item or {}, self._document or {}]
        for source in sources:
            servers = source.get("servers")
            if isinstance(servers, list) and servers and isinstance(servers[0], dict):
                url = servers[0].get("url")
                if url:
                    return url
        return self.options.base_url

    def _resolve_object(self, value: Any) -> Optional[dict[str, Any]]:
        """Follow a ``$ref`` chain to a mapping; ``None`` if it ends elsewhere."""
        seen: set[str] = set()
        while isinstance(value, dict) and "$ref" in value:
            ref = value["$ref"]
            if ref in seen:
                return None
            seen.add(ref)
            value = resolve_ref(ref, self._document)
        return value if isinstance(value, dict) else None

    # --- Parameters ---

    def merge_parameters(self, path_params: Any, op_params: Any) -> list[dict[str, Any]]:
        """Resolve and merge path-level and operation-level parameters.

        Both lists are resolved first, expanding parameter groups. Entries
        are then keyed on ``(name, in)``, compared case-insensitively: a
        later entry with an existing key replaces the earlier one in place,
        a new key is appended. The result lists path-level parameters in
        declaration order, followed by operation-level additions.

        An operation-level parameter replaces the path-level one wholesale;
        nothing (not even ``examples``) is carried over from the replaced
        entry.
        """
        merged: list[dict[str, Any]] = []
        positions: dict[tuple[str, str], int] = {}

        for params in (path_params, op_params):
            if not isinstance(params, list):
                continue
            for param in resolve_parameters(params, self._document):
                if not isinstance(param, dict):
                    continue
                key = _parameter_key(param)
                if key in positions:
                    merged[positions[key]] = param
                else:
                    positions[key] = len(merged)
                    merged.append(param)

        return merged

    def _process_parameters(self, params: list[dict[str, Any]]) -> list[ParameterData]:
        result: list[ParameterData] = []
        for param in params:
            if "$ref" in param:
                logger.debug("Skipping unresolvable parameter reference %s", param["$ref"])
                continue

            schema = self._normalizer.normalize(param.get("schema")) or {}
            location = str(param.get("in") or "")
            examples = self._parameter_examples(param, schema)
            result.append(
                ParameterData(
                    name=str(param.get("name") or ""),
                    location=location,
                    type=self._normalizer.describe_type(schema),
                    required=bool(param.get("required", False))
                    or location == ParameterLocation.PATH.value,
                    description=self._parameter_description(param, schema),
                    examples=examples,
                    has_examples=bool(examples),
                )
            )
        return result

    @staticmethod
    def _parameter_description(param: dict[str, Any], schema: dict[str, Any]) -> str:
        parts: list[str] = []
        if param.get("description"):
            parts.append(str(param["description"]))

        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values:
            allowed = ", ".join(f'`"{to_text(v)}"`' for v in enum_values)
            parts.append(f"Allowed values: {allowed}")
        if "default" in schema:
            parts.append(f'Default: `"{to_text(schema["default"])}"`')

        return ". ".join(parts)

    def _parameter_examples(
        self, param: dict[str, Any], schema: dict[str, Any]
    ) -> list[ExampleData]:
        examples: list[ExampleData] = []

        named = param.get("examples")
        if isinstance(named, dict):
            for key, example in named.items():
                example = self._resolve_example(example)
                if example is _UNRESOLVED:
                    continue
                if isinstance(example, dict):
                    value = example.get("value", example)
                    summary = example.get("summary") or key
                    description = example.get("description") or ""
                else:
                    value, summary, description = example, key, ""
                examples.append(
                    ExampleData(
                        name=str(key),
                        summary=str(summary),
                        description=str(description),
                        value=_display_value(value),
                    )
                )

        if "example" in param:
            examples.append(
                ExampleData(
                    name="example",
                    summary="Example",
                    description="Parameter example",
                    value=_display_value(param["example"]),
                )
            )

        if "example" in schema:
            examples.append(
                ExampleData(
                    name="schema_example",
                    summary="Schema Example",
                    description="Example from parameter schema",
                    value=_display_value(schema["example"]),
                )
            )

        return examples

    def _resolve_example(self, example: Any) -> Any:
        if isinstance(example, dict) and "$ref" in example:
            resolved = self._resolve_object(example)
            return resolved if resolved is not None else _UNRESOLVED
        return example

    def parameter_example_value(self, param: dict[str, Any]) -> Any:
        """Example for code samples: example, schema example, enum, default, ``"value"``."""
        if param.get("example") is not None:
            return param["example"]
        schema = self._normalizer.normalize(param.get("schema")) or {}
        if schema.get("example") is not None:
            return schema["example"]
        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values:
            return enum_values[0]
        if schema.get("default") is not None:
            return schema["default"]
        return "value"

    def build_query_string(self, params: list[dict[str, Any]]) -> str:
        """``?name=value&...`` for the query parameters of *params*, or ``""``."""
        pairs = [
            f"{param.get('name', '')}={to_text(self.parameter_example_value(param))}"
            for param in params
            if str(param.get("in", "")).lower() == ParameterLocation.QUERY.value
        ]
        return "?" + "&".join(pairs) if pairs else ""

    # --- Request body and responses ---

    def _process_request_body(self, body: Optional[dict[str, Any]]) -> Optional[RequestBodyData]:
        if body is None:
            return None
        content = body.get("content")
        if not isinstance(content, dict) or not content:
            return None

        available = list(content.keys())
        content_type = select_content_type(available, REQUEST_CONTENT_PREFERENCE)
        media = content.get(content_type)
        media = media if isinstance(media, dict) else {}

        examples = self._media_examples(media, content_type, generate=True)
        schema = self._normalizer.normalize(media.get("schema"))
        properties = self._property_rows(schema)

        return RequestBodyData(
            description=body.get("description") or "",
            content_type=content_type,
            examples=examples,
            has_examples=bool(examples),
            properties=properties,
            has_properties=bool(properties),
            available_content_types=available if len(available) > 1 else None,
        )

    def _process_responses(self, responses: Any) -> list[ResponseData]:
        if not isinstance(responses, dict):
            return []

        result: list[ResponseData] = []
        for code, response in responses.items():
            response = self._resolve_object(response) or {}
            content = response.get("content")
            content = content if isinstance(content, dict) else {}

            available = list(content.keys())
            content_type = select_content_type(available, RESPONSE_CONTENT_PREFERENCE)
            media = content.get(content_type) if content_type else None
            media = media if isinstance(media, dict) else {}

            examples = self._media_examples(media, content_type, generate=False)

            schema_json: Optional[str] = None
            properties: Optional[list[PropertyData]] = None
            if media.get("schema") is not None:
                schema = self._normalizer.normalize(media["schema"])
                if schema is not None:
                    schema_json = self._synthesizer.render_json(schema)
                    properties = self._property_rows(schema) or None

            headers = self._response_headers(response.get("headers"))

            result.append(
                ResponseData(
                    code=str(code),
                    description=response.get("description") or "",
                    content_type=content_type,
                    examples=examples,
                    has_examples=bool(examples),
                    schema_=schema_json,
                    has_schema=schema_json is not None,
                    properties=properties,
                    has_properties=bool(properties),
                    headers=headers,
                    has_headers=bool(headers),
                    available_content_types=available if len(available) > 1 else None,
                )
            )
        return result

    def _response_headers(self, headers: Any) -> list[ResponseHeaderData]:
        if not isinstance(headers, dict):
            return []
        result: list[ResponseHeaderData] = []
        for name, header in headers.items():
            header = self._resolve_object(header) or {}
            schema = self._normalizer.normalize(header.get("schema"))
            example = header.get("example")
            if example is None and schema is not None:
                example = schema.get("example")
            result.append(
                ResponseHeaderData(
                    name=str(name),
                    description=header.get("description") or "",
                    schema_=schema,
                    example=example if example is not None else "value",
                )
            )
        return result

    def _media_examples(
        self, media: dict[str, Any], content_type: Optional[str], generate: bool
    ) -> list[ExampleData]:
        language = syntax_language(content_type)
        examples: list[ExampleData] = []

        named = media.get("examples")
        if isinstance(named, dict):
            for key, example in named.items():
                example = self._resolve_example(example)
                if example is _UNRESOLVED:
                    continue
                if isinstance(example, dict):
                    value = example.get("value")
                    summary = example.get("summary") or key
                    description = example.get("description") or ""
                else:
                    value, summary, description = example, key, ""
                examples.append(
                    ExampleData(
                        name=str(key),
                        summary=str(summary),
                        description=str(description),
                        value=format_example_value(value, content_type),
                        syntax_language=language,
                    )
                )

        if "example" in media:
            examples.append(
                ExampleData(
                    name="Example",
                    summary="Example",
                    value=format_example_value(media["example"], content_type),
                    syntax_language=language,
                )
            )

        if not examples and generate and media.get("schema") is not None:
            generated = self._synthesizer.synthesize(media["schema"], 0)
            if generated is not None:
                examples.append(
                    ExampleData(
                        name="Generated Example",
                        summary="Auto-generated from schema",
                        value=format_example_value(generated, content_type),
                        syntax_language=language,
                    )
                )

        return examples

    def _property_rows(self, schema: Optional[dict[str, Any]]) -> list[PropertyData]:
        if not isinstance(schema, dict):
            return []
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return []

        required = schema.get("required")
        required = set(required) if isinstance(required, list) else set()

        rows: list[PropertyData] = []
        for name, prop in properties.items():
            normalized = self._normalizer.normalize(prop) or {}
            description = ""
            if isinstance(prop, dict):
                description = prop.get("description") or ""
            rows.append(
                PropertyData(
                    name=str(name),
                    type=self._normalizer.describe_type(normalized, default="object"),
                    required=name in required,
                    description=description or normalized.get("description") or "",
                )
            )
        return rows

    def request_body_example(self, body: Optional[dict[str, Any]]) -> Optional[str]:
        """Compact JSON body for code samples, or ``None`` for non-JSON bodies."""
        if body is None:
            return None
        content = body.get("content")
        if not isinstance(content, dict):
            return None

        media = None
        for content_type, candidate in content.items():
            if is_json_media(content_type) and isinstance(candidate, dict):
                media = candidate
                break
        if media is None:
            return None

        if media.get("example") is not None:
            value = media["example"]
        elif isinstance(media.get("examples"), dict) and media["examples"]:
            first = self._resolve_example(next(iter(media["examples"].values())))
            if first is _UNRESOLVED:
                return None
            value = first.get("value") if isinstance(first, dict) else first
        elif media.get("schema") is not None:
            value = self._synthesizer.synthesize(media["schema"], 0)
        else:
            return None

        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)

    # --- Authentication ---

    def _security_schemes(self) -> dict[str, Any]:
        components = self._document.get("components") if self._document else None
        schemes = components.get("securitySchemes") if isinstance(components, dict) else None
        return schemes if isinstance(schemes, dict) else {}

    def has_authentication(self) -> bool:
        """Whether any operation of the bound document is authenticated.

        Requires declared security schemes, plus either an operation with a
        non-empty ``security`` list or an operation without ``security``
        under non-empty global security.
        """
        if not self._security_schemes():
            return False

        global_security = self._document.get("security")
        paths = self._document.get("paths")
        if not isinstance(paths, dict):
            return False

        for path_item in paths.values():
            path_item = self._resolve_object(path_item)
            if path_item is None:
                continue
            for method, operation in path_item.items():
                if str(method).lower() not in _HTTP_METHODS or not isinstance(operation, dict):
                    continue
                if "security" in operation:
                    if operation["security"]:
                        return True
                elif global_security:
                    return True
        return False

    def operation_requires_auth(self, operation: dict[str, Any]) -> bool:
        """Whether code samples for *operation* need an auth header.

        An explicit ``security`` field decides on its own (``[]`` opts out).
        Otherwise non-empty global security, or failing that any declared
        security scheme, means auth is required.
        """
        if "security" in operation:
            return bool(operation["security"])
        if self._document.get("security"):
            return True
        return bool(self._security_schemes())

    def authorization_header(self, operation: dict[str, Any]) -> Optional[HeaderData]:
        """Example auth header for *operation*, or ``None``.

        Uses the schemes named by the operation's (else the document's)
        security requirements, falling back to every declared scheme. The
        first scheme that authenticates through a header wins. When none
        does, a Bearer ``Authorization`` header is assumed unless every
        candidate is an API key sent outside headers.
        """
        schemes = self._security_schemes()
        if not schemes:
            return None

        requirements = operation.get("security")
        if requirements is None:
            requirements = self._document.get("security")
        names = [
            name
            for requirement in requirements or []
            if isinstance(requirement, dict)
            for name in requirement
        ]
        candidates = [schemes[name] for name in names if name in schemes]
        if not candidates:
            candidates = list(schemes.values())

        for scheme in candidates:
            header = _scheme_header(scheme)
            if header is not None:
                return header

        if all(_is_non_header_api_key(scheme) for scheme in candidates):
            return None
        return HeaderData(name="Authorization", example="Bearer <your-token>")

    def build_headers(
        self, params: list[dict[str, Any]], operation: dict[str, Any]
    ) -> list[HeaderData]:
        """Request headers for code samples.

        Header parameters come first, deduplicated by case-insensitive name.
        When the operation requires auth, the auth header is appended unless
        a header with that name is already present.
        """
        headers: list[HeaderData] = []
        seen: set[str] = set()

        for param in params:
            if str(param.get("in", "")).lower() != ParameterLocation.HEADER.value:
                continue
            name = str(param.get("name") or "")
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            headers.append(HeaderData(name=name, example=to_text(self.parameter_example_value(param))))

        if self.operation_requires_auth(operation):
            auth = self.authorization_header(operation)
            if auth is not None and auth.name.lower() not in seen:
                headers.append(auth)

        return headers


_UNRESOLVED = object()


def _parameter_key(param: dict[str, Any]) -> tuple[str, str]:
    if "$ref" in param:
        return ("$ref", str(param["$ref"]))
    return (str(param.get("name", "")).lower(), str(param.get("in", "")).lower())


def _display_value(value: Any) -> Any:
    if value is None or isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return value


def _scheme_header(scheme: Any) -> Optional[HeaderData]:
    if not isinstance(scheme, dict):
        return None
    kind = str(scheme.get("type", "")).lower()

    if kind == "http":
        http_scheme = str(scheme.get("scheme", "")).lower()
        if http_scheme == "basic":
            return HeaderData(name="Authorization", example="Basic <base64-credentials>")
        if http_scheme == "bearer":
            return HeaderData(name="Authorization", example="Bearer <your-token>")
        return None
    if kind in ("oauth2", "openidconnect"):
        return HeaderData(name="Authorization", example="Bearer <your-token>")
    if kind == "apikey" and str(scheme.get("in", "")).lower() == "header":
        return HeaderData(name=scheme.get("name") or "Authorization", example="<your-api-key>")
    return None


def _is_non_header_api_key(scheme: Any) -> bool:
    return (
        isinstance(scheme, dict)
        and str(scheme.get("type", "")).lower() == "apikey"
        and str(scheme.get("in", "")).lower() != "header"
    )
