"""specdoc -- Generate API documentation from OpenAPI 3.0/3.1 specs.

This package turns an OpenAPI specification into documentation artifacts
(Markdown, HTML, Postman collections). The heart of the package is the
:class:`~specdoc.processor.OpenApiProcessor`, which walks a parsed spec and
produces a flat, example-populated, resource-grouped structure that the
generators hand to their templates.

Typical workflow::

    specdoc generate --spec openapi.yaml --output ./docs
    specdoc generate markdown postman --spec openapi.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for options, config, and the template data.
    config: Project configuration file and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
