"""Canonical Pydantic models shared across all specdoc modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- the typed form of processor options and the
project configuration file:
    :class:`ProcessorOptions` and :class:`ProjectConfig`.

**Template data models** -- the output contract produced by
:class:`~specdoc.processor.OpenApiProcessor` and consumed by the generators'
templates:
    :class:`InfoData`, :class:`ServerData`, :class:`ExampleData`,
    :class:`ParameterData`, :class:`PropertyData`, :class:`RequestBodyData`,
    :class:`ResponseHeaderData`, :class:`ResponseData`, :class:`HeaderData`,
    :class:`EndpointSummary`, :class:`EndpointData`, :class:`ResourceData`,
    :class:`SchemaModelData`, :class:`SchemasData`, and :class:`TemplateData`.

Templates are logic-less and expect camelCase keys (``hasAuth``,
``requestBodyExample``), so every template data field that differs from its
Python name declares a camelCase alias. Call :meth:`TemplateData.as_context`
to get the plain dict a template renderer consumes.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from specdoc import __version__


# --- Configuration ---


class ProcessorOptions(BaseModel):
    """Presentation options recognised by the document walker.

    None of these change structural correctness of the output; they only
    affect presentation fields (anchors, resource order, fallback base URL,
    branding pass-through values).

    Both snake_case names and the camelCase aliases used in project config
    files are accepted::

        ProcessorOptions(tag_order=["Users"])
        ProcessorOptions.model_validate({"tagOrder": ["Users"], "excludeBrand": True})
    """

    model_config = ConfigDict(populate_by_name=True)

    exclude_brand: bool = Field(
        default=False, alias="excludeBrand", description="Omit generator branding"
    )
    version: str = Field(
        default=__version__, description="Generator version passed through to templates"
    )
    base_url: str = Field(
        default="",
        alias="baseUrl",
        description="Fallback base URL when neither the operation nor the spec declares servers",
    )
    tag_order: list[str] = Field(
        default_factory=list,
        alias="tagOrder",
        description="Tags listed first, in this order (case-insensitive)",
    )
    url_encode_anchors: bool = Field(
        default=True,
        alias="urlEncodeAnchors",
        description="Preserve case in anchors; False lowercases them",
    )
    timestamp: Optional[str] = Field(
        default=None,
        description="Fixed generation timestamp; current UTC time when unset",
    )


class ProjectConfig(ProcessorOptions):
    """Project configuration stored in ``specdoc.json``.

    Extends :class:`ProcessorOptions` with the inputs and outputs of a
    ``specdoc generate`` run. Loaded by
    :func:`~specdoc.config.load_project_config` and merged with environment
    variables and CLI flags by :func:`~specdoc.config.resolve_config`.
    """

    spec: Optional[str] = Field(
        default=None, description="Path or URL of the OpenAPI spec"
    )
    output_dir: str = Field(
        default="./docs", alias="outputDir", description="Directory for generated files"
    )
    generators: list[str] = Field(
        default_factory=list,
        description="Generators to run; empty means every registered generator",
    )

    def processor_options(self) -> ProcessorOptions:
        """Return only the :class:`ProcessorOptions` part of this config."""
        fields = ProcessorOptions.model_fields.keys()
        return ProcessorOptions(**{name: getattr(self, name) for name in fields})


# --- OpenAPI enumerations ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


# --- Template data ---


class _TemplateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InfoData(_TemplateModel):
    """The spec's *Info Object* with documented defaults filled in."""

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = ""
    contact: Optional[dict[str, Any]] = None
    license: Optional[dict[str, Any]] = None


class ServerData(_TemplateModel):
    """One entry of the spec's ``servers`` array."""

    url: str = ""
    description: str = "Server"


class ExampleData(_TemplateModel):
    """A named example, already serialized for display."""

    name: str
    summary: str = ""
    description: str = ""
    value: Any = None
    syntax_language: Optional[str] = Field(default=None, alias="syntaxLanguage")


class ParameterData(_TemplateModel):
    """A merged, resolved operation parameter ready for a parameters table."""

    name: str = ""
    location: str = Field(default="", alias="in")
    type: str = "string"
    required: bool = False
    description: str = ""
    examples: list[ExampleData] = Field(default_factory=list)
    has_examples: bool = Field(default=False, alias="hasExamples")


class PropertyData(_TemplateModel):
    """A single schema property row."""

    name: str
    type: str = "object"
    required: bool = False
    description: str = ""


class RequestBodyData(_TemplateModel):
    """Documentation view of an operation's ``requestBody``."""

    description: str = ""
    content_type: Optional[str] = Field(default=None, alias="contentType")
    examples: list[ExampleData] = Field(default_factory=list)
    has_examples: bool = Field(default=False, alias="hasExamples")
    properties: list[PropertyData] = Field(default_factory=list)
    has_properties: bool = Field(default=False, alias="hasProperties")
    available_content_types: Optional[list[str]] = Field(
        default=None, alias="availableContentTypes"
    )


class ResponseHeaderData(_TemplateModel):
    """A header declared on a response object."""

    name: str
    description: str = ""
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    example: Any = "value"


class ResponseData(_TemplateModel):
    """Documentation view of one status code entry in ``responses``."""

    code: str
    description: str = ""
    content_type: Optional[str] = Field(default=None, alias="contentType")
    examples: list[ExampleData] = Field(default_factory=list)
    has_examples: bool = Field(default=False, alias="hasExamples")
    schema_: Optional[str] = Field(
        default=None, alias="schema", description="Pretty-printed JSON example of the schema"
    )
    has_schema: bool = Field(default=False, alias="hasSchema")
    properties: Optional[list[PropertyData]] = None
    has_properties: bool = Field(default=False, alias="hasProperties")
    headers: list[ResponseHeaderData] = Field(default_factory=list)
    has_headers: bool = Field(default=False, alias="hasHeaders")
    available_content_types: Optional[list[str]] = Field(
        default=None, alias="availableContentTypes"
    )


class HeaderData(_TemplateModel):
    """A request header line for code samples (``-H "name: example"``)."""

    name: str
    example: str = "value"


class EndpointSummary(_TemplateModel):
    """One row of the quick-reference endpoint list."""

    method: str
    path: str
    summary: str
    anchor: str


class EndpointData(EndpointSummary):
    """A fully processed (method, path) operation inside a resource."""

    description: str = ""
    tag: str = ""
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    deprecated: bool = False
    parameters: list[ParameterData] = Field(default_factory=list)
    request_body: Optional[RequestBodyData] = Field(default=None, alias="requestBody")
    responses: list[ResponseData] = Field(default_factory=list)
    base_url: str = Field(default="", alias="baseUrl")
    query_string: str = Field(default="", alias="queryString")
    has_content_type: bool = Field(default=False, alias="hasContentType")
    headers: list[HeaderData] = Field(default_factory=list)
    request_body_example: Optional[str] = Field(default=None, alias="requestBodyExample")
    requires_auth: bool = Field(default=False, alias="requiresAuth")


class ResourceData(_TemplateModel):
    """Endpoints grouped under their first declared tag."""

    name: str
    tag: str
    description: str = ""
    anchor: str = ""
    endpoints: list[EndpointData] = Field(default_factory=list)


class SchemaModelData(_TemplateModel):
    """A named component schema with a generated example."""

    name: str
    description: str = ""
    example: str = ""
    properties: list[PropertyData] = Field(default_factory=list)


class SchemasData(_TemplateModel):
    """Container for component schema models."""

    models: list[SchemaModelData] = Field(default_factory=list)


class TemplateData(_TemplateModel):
    """The complete output contract handed to a template renderer.

    Produced by :meth:`specdoc.processor.OpenApiProcessor.process`. The
    renderer never sees the original spec document, only this structure.

    See Also:
        :class:`ResourceData`: the grouped, ordered main body.
        :class:`EndpointSummary`: the flat quick-reference list.
    """

    info: InfoData
    servers: list[ServerData] = Field(default_factory=list)
    has_auth: bool = Field(default=False, alias="hasAuth")
    endpoints: list[EndpointSummary] = Field(default_factory=list)
    resources: list[ResourceData] = Field(default_factory=list)
    schemas: Optional[SchemasData] = None
    exclude_brand: bool = Field(default=False, alias="excludeBrand")
    version: str
    timestamp: str
    quick_reference_anchor: str = Field(default="", alias="quickReferenceAnchor")

    def as_context(self) -> dict[str, Any]:
        """Return the camelCase dict a logic-less template consumes."""
        return self.model_dump(by_alias=True, mode="json")
