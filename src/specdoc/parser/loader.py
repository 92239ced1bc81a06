"""Load OpenAPI specifications from a URL, local file, or stdin.

This module is the only part of :mod:`specdoc.parser` that performs I/O. It
fetches a raw OpenAPI document, parses it as JSON or YAML with automatic
format detection, and checks that the document declares a supported OpenAPI
version (3.0.x or 3.1.x). The processor never calls it: it receives the
already-parsed dict.

Public functions:

* :func:`load_spec` -- Load and parse a spec from any supported source.
* :func:`validate_openapi_version` -- Check and return the ``openapi`` version
  string, rejecting Swagger 2.x and unsupported versions.
* :func:`load_document` -- Both of the above in one call.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specdoc.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 30.0


def load_document(source: str) -> tuple[dict[str, Any], str]:
    """Load a spec and validate its OpenAPI version.

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.

    Returns:
        A ``(document, openapi_version)`` tuple.

    Raises:
        SpecParseError: If the source cannot be loaded, parsed, or declares
            an unsupported version.
    """
    document = load_spec(source)
    version = validate_openapi_version(document)
    logger.debug("Loaded OpenAPI %s document from %s", version, source)
    return document, version


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI spec from URL, file path, or stdin ('-').

    Supports JSON and YAML formats and auto-detects the format from the
    content type, file extension, or content itself.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed spec as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a spec from stdin and parse it as JSON, then YAML."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a spec over HTTP(S).

    The response ``content-type`` is used as a format hint.

    Raises:
        SpecParseError: On HTTP errors, network failures, or unparseable content.
    """
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a spec from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Unknown extensions fall back to content-based detection.

    Raises:
        SpecParseError: If the file is missing, empty, unreadable, or
            cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless *hint* is ``'yaml'``), then falls back to YAML.
    A ``'json'`` hint disables the YAML fallback.

    Args:
        content: The raw string content.
        hint: Optional format hint (``'json'`` or ``'yaml'``).

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format, or
            parses to something other than an object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        msg = "Failed to parse spec as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecParseError(msg) from exc


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        got = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {got})")
    return result


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Accepts any 3.x version (3.0.x and 3.1.x are the tested ones). Raises
    for Swagger 2.x, a missing ``openapi`` field, or other major versions.

    Args:
        spec: The parsed spec dictionary.

    Returns:
        The OpenAPI version string (e.g., ``'3.0.3'``, ``'3.1.0'``).

    Raises:
        SpecParseError: If the version is missing, unsupported, or indicates
            Swagger 2.x.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.0.x and 3.1.x are supported. "
            "Consider converting with https://converter.swagger.io"
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if version_str.startswith("3."):
        return version_str

    raise SpecParseError(
        f"Unsupported OpenAPI version: {version_str}. "
        "Only OpenAPI 3.0.x and 3.1.x are supported."
    )
