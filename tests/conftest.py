"""Shared test fixtures for specdoc.

Provides reusable fixtures for loading spec fixtures, building small
in-memory documents, creating isolated config environments, managing output
state, and running CLI commands.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from specdoc.models import ProcessorOptions
from specdoc.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

FIXED_TIMESTAMP = "2024-01-01T00:00:00+00:00"


def make_spec(
    paths: dict[str, Any] | None = None,
    components: dict[str, Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a minimal OpenAPI 3.0 document around *paths* and *components*."""
    spec: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "Test API", "version": "1.0.0"},
        "paths": paths or {},
    }
    if components is not None:
        spec["components"] = components
    spec.update(extra)
    return spec


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def _petstore_cached() -> dict[str, Any]:
    with open(FIXTURES_DIR / "petstore.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore(_petstore_cached: dict[str, Any]) -> dict[str, Any]:
    """A fresh copy of the petstore fixture spec."""
    return copy.deepcopy(_petstore_cached)


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def fixed_options() -> ProcessorOptions:
    """Options with a pinned timestamp, for byte-identical output."""
    return ProcessorOptions(timestamp=FIXED_TIMESTAMP)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all SPECDOC_* environment
    variables and changes the working directory to tmp_path.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "SPECDOC_SPEC",
        "SPECDOC_OUTPUT_DIR",
        "SPECDOC_BASE_URL",
        "SPECDOC_EXCLUDE_BRAND",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def spec_factory():
    """Return :func:`make_spec` for building small in-memory documents."""
    return make_spec
