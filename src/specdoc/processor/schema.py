"""Normalize schema nodes by removing ``$ref`` indirection and composition.

A *normalized* schema is the concrete shape a schema node stands for:

* ``{"$ref": "#/components/schemas/Pet"}`` becomes the ``Pet`` schema (ref
  chains of any length are followed);
* ``allOf`` members are merged into one object schema, later members
  overwriting earlier ones on property-name collisions;
* ``anyOf`` / ``oneOf`` collapse to their first alternative.

Normalization is **shallow**: only the node being normalized loses its
indirection. Property and item schemas keep their own ``$ref`` pointers, so
a self-referential schema (``Node.children -> Node``) normalizes in one step
and the recursion is left to the example synthesizer's depth ceiling.

The module also classifies schema types into the closed
:class:`SchemaType` enumeration and renders the ``type (`"a"`, `"b"`)``
strings used in parameter and property tables.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional

from specdoc.parser.resolver import resolve_ref

_NUMERIC_ALIASES = frozenset(
    {"decimal", "float", "double", "int", "int32", "int64", "long", "short"}
)


class SchemaType(str, enum.Enum):
    """Closed set of schema kinds the example synthesizer dispatches on.

    ``UNKNOWN`` is an explicit variant for an absent or unrecognised
    ``type`` so that callers have to handle it rather than fall through.
    """

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    UNKNOWN = "unknown"


def classify(schema: Any) -> SchemaType:
    """Return the :class:`SchemaType` of a (normalized) schema node.

    OpenAPI 3.1 type arrays such as ``["string", "null"]`` classify as their
    first non-null member. A node without ``type`` is
    :attr:`SchemaType.UNKNOWN` even when it carries ``properties`` or
    ``items``. Non-standard numeric type names (``decimal``, ``int64``, ...)
    classify as :attr:`SchemaType.NUMBER`.
    """
    if not isinstance(schema, dict):
        return SchemaType.UNKNOWN

    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        if non_null:
            type_value = non_null[0]
        elif type_value:
            return SchemaType.NULL
        else:
            type_value = None

    if type_value is None:
        return SchemaType.UNKNOWN

    name = str(type_value).lower()
    try:
        return SchemaType(name)
    except ValueError:
        pass
    if name in _NUMERIC_ALIASES:
        return SchemaType.NUMBER
    return SchemaType.UNKNOWN


class SchemaNormalizer:
    """Normalizes schema nodes of one OpenAPI document.

    Holds the document used to resolve references and a memo of rendered
    type descriptions. Instances are cheap; create one per document.

    Args:
        document: The root OpenAPI document. It is read, never modified.

    Example::

        normalizer = SchemaNormalizer(spec)
        normalizer.normalize({"$ref": "#/components/schemas/Pet"})
        normalizer.normalize({"allOf": []})  # {"type": "object", "properties": {}}
    """

    def __init__(self, document: Any) -> None:
        self._document = document
        self._type_cache: dict[str, str] = {}

    @property
    def document(self) -> Any:
        return self._document

    @property
    def cache_size(self) -> int:
        return len(self._type_cache)

    def clear_cache(self) -> None:
        self._type_cache.clear()

    def normalize(
        self, schema: Any, _seen: Optional[frozenset[str]] = None
    ) -> Optional[dict[str, Any]]:
        """Return the concrete shape of *schema*.

        Args:
            schema: A schema node, possibly a ``$ref`` or a composition.

        Returns:
            The normalized schema, or ``None`` when *schema* is not a mapping
            or its ``$ref`` cannot be resolved. Empty ``anyOf`` / ``oneOf``
            arrays are returned unchanged. A ``$ref`` that loops back to a
            pointer already followed in this chain is returned as-is.
        """
        if not isinstance(schema, dict):
            return None

        seen = _seen or frozenset()

        ref = schema.get("$ref")
        if ref is not None:
            if ref in seen:
                return schema
            resolved = resolve_ref(ref, self._document)
            if not isinstance(resolved, dict):
                return None
            return self.normalize(resolved, seen | {ref})

        all_of = schema.get("allOf")
        if isinstance(all_of, list):
            return self._merge_all_of(schema, all_of, seen)

        for keyword in ("anyOf", "oneOf"):
            alternatives = schema.get(keyword)
            if isinstance(alternatives, list) and alternatives:
                return self.normalize(alternatives[0], seen)

        return schema

    def _merge_all_of(
        self, schema: dict[str, Any], members: list[Any], seen: frozenset[str]
    ) -> dict[str, Any]:
        merged_type: Any = None
        properties: dict[str, Any] = {}
        required: list[str] = []

        for member in members:
            resolved = self.normalize(member, seen)
            if not resolved:
                continue
            if isinstance(resolved.get("properties"), dict):
                properties.update(resolved["properties"])
            if merged_type is None and resolved.get("type"):
                merged_type = resolved["type"]
            for name in resolved.get("required") or []:
                if name not in required:
                    required.append(name)

        # Properties declared next to allOf apply on top of the members.
        if isinstance(schema.get("properties"), dict):
            properties.update(schema["properties"])

        merged: dict[str, Any] = {"type": merged_type or "object", "properties": properties}
        if required:
            merged["required"] = required
        for key in ("description", "example"):
            if key in schema:
                merged[key] = schema[key]
        return merged

    def describe_type(self, schema: Any, default: str = "string") -> str:
        """Render a schema's type for documentation tables.

        Enum values are appended in backticks, e.g. ``string (`"asc"`, `"desc"`)``.
        Type arrays render as ``string | null``. Results are memoized on the
        (type, enum) pair.

        Args:
            schema: A normalized schema node, or ``None``.
            default: The type name used when the schema declares none.
        """
        if not isinstance(schema, dict):
            return default

        type_value = schema.get("type")
        enum_values = schema.get("enum")
        cache_key = json.dumps([type_value, enum_values, default], default=str)
        cached = self._type_cache.get(cache_key)
        if cached is not None:
            return cached

        if isinstance(type_value, list):
            text = " | ".join(str(t) for t in type_value) or default
        else:
            text = str(type_value) if type_value else default

        if isinstance(enum_values, list) and enum_values:
            text += " (" + ", ".join(f'`"{_enum_text(v)}"`' for v in enum_values) + ")"

        self._type_cache[cache_key] = text
        return text


def _enum_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)
