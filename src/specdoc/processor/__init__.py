"""OpenAPI processing core: schema normalization, example synthesis, and the document walker."""

from __future__ import annotations

from typing import Any, Optional

from specdoc.models import ProcessorOptions, TemplateData
from specdoc.processor.anchors import AnchorBuilder
from specdoc.processor.examples import (
    MAX_DEPTH,
    MAX_DEPTH_SENTINEL,
    ExampleSynthesizer,
    format_example_value,
    object_to_form_data,
    object_to_xml,
    syntax_language,
)
from specdoc.processor.schema import SchemaNormalizer, SchemaType, classify
from specdoc.processor.walker import OpenApiProcessor


def process(spec: Any, options: Optional[ProcessorOptions] = None) -> TemplateData:
    """Process *spec* with a fresh :class:`OpenApiProcessor`."""
    return OpenApiProcessor(options).process(spec)


__all__ = [
    "MAX_DEPTH",
    "MAX_DEPTH_SENTINEL",
    "AnchorBuilder",
    "ExampleSynthesizer",
    "OpenApiProcessor",
    "SchemaNormalizer",
    "SchemaType",
    "classify",
    "format_example_value",
    "object_to_form_data",
    "object_to_xml",
    "process",
    "syntax_language",
]
