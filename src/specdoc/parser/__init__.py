"""OpenAPI spec parser -- load documents and resolve ``$ref`` pointers.

Typical usage::

    from specdoc.parser import load_document, resolve_ref

    document, version = load_document("openapi.yaml")
    pet = resolve_ref("#/components/schemas/Pet", document)

Sub-modules:

* :mod:`~specdoc.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specdoc.parser.resolver` -- On-demand, never-raising ``$ref``
  resolution and parameter-group expansion.
"""

from specdoc.parser.loader import load_document, load_spec, validate_openapi_version
from specdoc.parser.resolver import resolve_parameters, resolve_ref

__all__ = [
    "load_document",
    "load_spec",
    "validate_openapi_version",
    "resolve_parameters",
    "resolve_ref",
]
