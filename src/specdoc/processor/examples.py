"""Synthesize example values from schemas and serialize them for display.

:class:`ExampleSynthesizer` turns a schema node into a representative value:
an explicit ``example`` wins, then the first ``enum`` value, then a
placeholder chosen by type (``"string"``, ``0``, ``True``, a one-element
list, or an object built property by property). Recursion is bounded by
:data:`MAX_DEPTH`; past it the synthesizer returns :data:`MAX_DEPTH_SENTINEL`
in place of a value, which is how self-referential schemas terminate.

The module-level functions render values for a given media type:

* :func:`format_example_value` -- JSON, XML, plain text, or form encoding.
* :func:`syntax_language` -- the highlighter language for a content type.
* :func:`object_to_xml` / :func:`object_to_form_data` -- the two
  non-JSON serializations.
* :func:`to_text` -- the scalar rendering used in query strings and
  header examples (``true``/``false``/``null`` rather than Python's).
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Optional
from urllib.parse import quote
from xml.sax.saxutils import escape

from specdoc.processor.schema import SchemaNormalizer, SchemaType, classify

logger = logging.getLogger(__name__)

MAX_DEPTH = 10
"""Deepest nesting level the synthesizer and XML serializer descend to."""

MAX_DEPTH_SENTINEL = "[Max depth exceeded]"
"""Value substituted for anything nested deeper than :data:`MAX_DEPTH`."""

_DEFAULT_ITEMS = {"type": "string"}

# encodeURIComponent leaves these unescaped
_FORM_SAFE = "-_.!~*'()"


class ExampleSynthesizer:
    """Generates example values for the schemas of one document.

    Every schema node is normalized before it is inspected, so ``$ref``,
    ``allOf`` and ``anyOf``/``oneOf`` anywhere in the tree are followed.
    Results are memoized on the normalized schema's full structure and the
    depth it was requested at; cache hits return a deep copy.

    Args:
        normalizer: The :class:`SchemaNormalizer` bound to the document.
    """

    def __init__(self, normalizer: SchemaNormalizer) -> None:
        self._normalizer = normalizer
        self._cache: dict[tuple[str, int], Any] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def synthesize(self, schema: Any, depth: int = 0) -> Any:
        """Return an example value for *schema*.

        Args:
            schema: A schema node (may be a ``$ref`` or composition).
            depth: Current nesting level; callers start at 0.

        Returns:
            The example value, ``None`` for an unresolvable or untyped schema,
            or :data:`MAX_DEPTH_SENTINEL` when *depth* exceeds
            :data:`MAX_DEPTH`.
        """
        if depth > MAX_DEPTH:
            return MAX_DEPTH_SENTINEL

        normalized = self._normalizer.normalize(schema)
        if normalized is None:
            return None

        key = (_shape_key(normalized), depth)
        if key in self._cache:
            return copy.deepcopy(self._cache[key])

        value = self._build(normalized, depth)
        self._cache[key] = value
        return copy.deepcopy(value)

    def _build(self, schema: dict[str, Any], depth: int) -> Any:
        if "example" in schema:
            return schema["example"]
        if "const" in schema:
            return schema["const"]

        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values:
            return enum_values[0]

        kind = classify(schema)
        if kind is SchemaType.OBJECT:
            properties = schema.get("properties")
            if not isinstance(properties, dict):
                return {}
            return {
                name: self.synthesize(prop, depth + 1)
                for name, prop in properties.items()
            }
        if kind is SchemaType.ARRAY:
            items = schema.get("items") or _DEFAULT_ITEMS
            return [self.synthesize(items, depth + 1)]
        if kind is SchemaType.STRING:
            return "string"
        if kind in (SchemaType.NUMBER, SchemaType.INTEGER):
            return 0
        if kind is SchemaType.BOOLEAN:
            return True
        return None

    def render_json(self, schema: Any) -> str:
        """Return a pretty-printed JSON example for *schema*.

        An explicit ``example`` on the schema is used verbatim; otherwise
        one is synthesized.
        """
        if isinstance(schema, dict) and "example" in schema:
            value = schema["example"]
        else:
            value = self.synthesize(schema, 0)
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _shape_key(schema: dict[str, Any]) -> str:
    """Return a canonical string for a schema, usable as a memo key.

    YAML documents can produce mappings with mixed ``int`` and ``str`` keys
    (``example: {200: ok, x: 1}``), which ``sort_keys`` cannot order. Such
    mappings are keyed with their keys stringified.
    """
    try:
        return json.dumps(schema, sort_keys=True, default=str)
    except TypeError:
        return json.dumps(_stringify_keys(schema), sort_keys=True, default=str)


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(v) for v in value]
    return value


def media_type(content_type: Optional[str]) -> str:
    """Return the lowercased base media type, without parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_media(content_type: Optional[str]) -> bool:
    base = media_type(content_type)
    return base == "application/json" or base.endswith("+json")


def is_xml_media(content_type: Optional[str]) -> bool:
    base = media_type(content_type)
    return base in ("application/xml", "text/xml") or base.endswith("+xml")


def is_form_media(content_type: Optional[str]) -> bool:
    return media_type(content_type) in (
        "multipart/form-data",
        "application/x-www-form-urlencoded",
    )


def syntax_language(content_type: Optional[str]) -> str:
    """Map a content type to a syntax-highlighting language name.

    >>> syntax_language("application/vnd.api+json")
    'json'
    >>> syntax_language("text/plain")
    'text'
    """
    if is_json_media(content_type):
        return "json"
    if is_xml_media(content_type):
        return "xml"
    base = media_type(content_type)
    if base == "text/html":
        return "html"
    if base == "text/plain" or is_form_media(content_type):
        return "text"
    return "json"


def format_example_value(value: Any, content_type: Optional[str]) -> str:
    """Serialize an example value for display under *content_type*.

    * JSON (and unknown types): strings as-is, anything else pretty-printed.
    * XML: strings as-is, structures via :func:`object_to_xml`.
    * ``text/plain``: the string form of the value.
    * Form encodings: ``key=value`` pairs via :func:`object_to_form_data`.

    ``None`` always serializes to an empty string.
    """
    if value is None:
        return ""

    if is_xml_media(content_type):
        return value if isinstance(value, str) else object_to_xml(value)
    if media_type(content_type) == "text/plain":
        return to_text(value)
    if is_form_media(content_type):
        return object_to_form_data(value)

    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def object_to_xml(value: Any, depth: int = 0) -> str:
    """Render a value as simple XML elements.

    Mapping keys become element names. A list under a key repeats that
    key's element once per item; a top-level list uses ``<item>``. Nesting
    deeper than :data:`MAX_DEPTH` is replaced by :data:`MAX_DEPTH_SENTINEL`.
    """
    if depth > MAX_DEPTH:
        return MAX_DEPTH_SENTINEL

    if isinstance(value, dict):
        return "".join(_xml_element(str(key), item, depth) for key, item in value.items())
    if isinstance(value, list):
        return "".join(_xml_element("item", item, depth) for item in value)
    return escape(to_text(value))


def _xml_element(tag: str, value: Any, depth: int) -> str:
    if isinstance(value, list):
        return "".join(_xml_element(tag, item, depth) for item in value)
    if isinstance(value, dict):
        return f"<{tag}>\n{object_to_xml(value, depth + 1)}</{tag}>\n"
    return f"<{tag}>{escape(to_text(value))}</{tag}>\n"


def object_to_form_data(value: Any) -> str:
    """Encode a mapping as ``key=value&...`` with percent-encoded values.

    Nested structures are JSON-encoded before percent-encoding. A non-mapping
    value is rendered with :func:`to_text`.
    """
    if not isinstance(value, dict):
        return to_text(value)
    return "&".join(
        f"{key}={quote(to_text(item), safe=_FORM_SAFE)}" for key, item in value.items()
    )


def to_text(value: Any) -> str:
    """Render a value the way it should appear inside a URL or header line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)
