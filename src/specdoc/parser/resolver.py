"""Resolve ``$ref`` JSON Reference pointers against an OpenAPI document.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. Unlike a
resolve-everything-up-front pass, this module resolves **one pointer at a
time**, on demand, and never copies or mutates the document it reads.

Only **internal** references (those starting with ``#/``) are supported.
Anything else -- an empty string, a relative file, a URL -- resolves to
``None``, as does a pointer whose path does not exist. The resolver never
raises: callers decide how to degrade when a reference is missing.

A pointer may resolve to an array. In ``parameters`` lists this is a
*parameter group*: a single ``$ref`` standing for several parameter objects
at once. :func:`resolve_parameters` expands such groups in place.

Public functions:

* :func:`resolve_ref` -- resolve a single pointer.
* :func:`resolve_parameters` -- flatten a parameter list, expanding refs
  and parameter groups.
"""

from __future__ import annotations

from typing import Any, Optional


def resolve_ref(ref: Any, document: Any) -> Any:
    """Resolve a single ``$ref`` string against the root document.

    Parses JSON Pointer references like ``#/components/schemas/Pet`` and
    navigates *document* to locate the referenced value. Handles RFC 6901
    JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``) and numeric
    segments into arrays.

    Args:
        ref: The ``$ref`` value (e.g., ``"#/components/schemas/Pet"``).
            Non-string values are treated as malformed.
        document: The root spec to resolve against.

    Returns:
        The value found at the referenced path -- a dict, a list (for
        parameter groups), or any JSON-compatible scalar. ``None`` when the
        reference is malformed, external, or points to a missing location.

    Example::

        spec = {"components": {"schemas": {"Pet": {"type": "object"}}}}
        resolve_ref("#/components/schemas/Pet", spec)   # {"type": "object"}
        resolve_ref("#/components/schemas/Nope", spec)  # None
        resolve_ref("other.yaml#/Pet", spec)            # None
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        return None

    current: Any = document
    for segment in ref[2:].split("/"):
        # Handle JSON Pointer escaping (RFC 6901)
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None

    return current


def resolve_parameters(
    params: Optional[list[Any]],
    document: Any,
    _seen: Optional[frozenset[str]] = None,
) -> list[Any]:
    """Flatten a ``parameters`` list, replacing every ``$ref`` with its target.

    Entries that are plain parameter objects are kept as-is. An entry that is
    a ``$ref`` is replaced by what it points to:

    * a single parameter object is substituted in place;
    * an array (a *parameter group*) is expanded in place, order-preserving,
      and its own entries are resolved recursively, so groups may nest;
    * an unresolvable reference leaves the original ``$ref`` entry in the
      list so the caller can still render something for it.

    A group that (directly or transitively) contains a reference to itself
    is expanded once; the repeated reference is dropped.

    Args:
        params: The raw ``parameters`` array, or ``None``.
        document: The root spec used to resolve references.

    Returns:
        A new list of parameter entries with no group references left.
    """
    if not params:
        return []

    seen = _seen or frozenset()
    result: list[Any] = []

    for param in params:
        ref = param.get("$ref") if isinstance(param, dict) else None
        if ref is None:
            result.append(param)
            continue

        if ref in seen:
            continue

        resolved = resolve_ref(ref, document)
        if isinstance(resolved, list):
            result.extend(resolve_parameters(resolved, document, seen | {ref}))
        elif isinstance(resolved, dict) and "$ref" in resolved:
            # A ref to a ref: resolve the chain through the same machinery.
            result.extend(resolve_parameters([resolved], document, seen | {ref}))
        elif resolved is not None:
            result.append(resolved)
        else:
            result.append(param)

    return result
