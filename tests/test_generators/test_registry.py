"""Tests for specdoc.generators.registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from specdoc.exceptions import GeneratorError
from specdoc.generators.base import Generator, write_output
from specdoc.generators.registry import ENTRY_POINT_GROUP, GeneratorRegistry, default_registry
from specdoc.models import ProcessorOptions


class TitleGenerator(Generator):
    """Writes the API title to a text file."""

    def __init__(self, name: str = "title") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "API title only"

    @property
    def output_files(self) -> list[str]:
        return ["TITLE.txt"]

    def generate(
        self, spec: dict[str, Any], options: ProcessorOptions, output_dir: str | Path
    ) -> list[Path]:
        data = self.template_data(spec, options)
        return [write_output(Path(output_dir) / "TITLE.txt", data.info.title)]


def _entry_point(name: str, loaded: Any) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = loaded
    return ep


# ---------------------------------------------------------------------------
# Registration and lookup
# ---------------------------------------------------------------------------


class TestGeneratorRegistry:
    """Test registering and looking up generators."""

    def test_register_and_get(self) -> None:
        registry = GeneratorRegistry()
        generator = TitleGenerator()
        registry.register(generator)
        assert registry.get("title") is generator
        assert "title" in registry
        assert len(registry) == 1
        assert list(registry) == [generator]

    def test_duplicate_rejected(self) -> None:
        registry = GeneratorRegistry([TitleGenerator()])
        with pytest.raises(GeneratorError, match="already registered"):
            registry.register(TitleGenerator())

    def test_unknown_lists_available(self) -> None:
        registry = GeneratorRegistry([TitleGenerator("a"), TitleGenerator("b")])
        with pytest.raises(GeneratorError, match="Unknown generator 'pdf'. Available: a, b") as exc_info:
            registry.get("pdf")
        assert exc_info.value.exit_code == 10

    def test_unknown_on_empty_registry(self) -> None:
        with pytest.raises(GeneratorError, match="Available: none"):
            GeneratorRegistry().get("markdown")

    def test_describe(self) -> None:
        registry = GeneratorRegistry([TitleGenerator()])
        assert registry.describe() == [
            {"name": "title", "description": "API title only", "outputs": "TITLE.txt"}
        ]

    def test_registries_are_independent(self) -> None:
        first = default_registry()
        first.register(TitleGenerator())
        assert "title" not in default_registry()

    def test_default_registry(self) -> None:
        assert default_registry().names() == ["markdown", "html", "postman"]

    def test_custom_generator_runs(self, petstore: dict[str, Any], tmp_path: Path) -> None:
        [path] = TitleGenerator().generate(petstore, ProcessorOptions(), tmp_path)
        assert path.read_text(encoding="utf-8") == "Petstore API"


# ---------------------------------------------------------------------------
# Entry-point discovery
# ---------------------------------------------------------------------------


class TestDiscover:
    """Test loading third-party generators from entry points."""

    def test_adds_generators(self) -> None:
        registry = GeneratorRegistry()
        with patch(
            "specdoc.generators.registry.importlib.metadata.entry_points",
            return_value=[_entry_point("title", TitleGenerator)],
        ) as mock_eps:
            added = registry.discover()
        mock_eps.assert_called_once_with(group=ENTRY_POINT_GROUP)
        assert added == ["title"]
        assert "title" in registry

    def test_existing_name_skipped(self) -> None:
        registry = default_registry()
        ep = _entry_point("markdown", TitleGenerator)
        with patch(
            "specdoc.generators.registry.importlib.metadata.entry_points", return_value=[ep]
        ):
            assert registry.discover() == []
        ep.load.assert_not_called()

    def test_broken_entry_point_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ep = MagicMock()
        ep.name = "broken"
        ep.load.side_effect = ImportError("no module named broken")
        registry = GeneratorRegistry()
        with caplog.at_level(logging.WARNING, logger="specdoc.generators.registry"):
            with patch(
                "specdoc.generators.registry.importlib.metadata.entry_points", return_value=[ep]
            ):
                assert registry.discover() == []
        assert "Failed to load generator 'broken'" in caplog.text
        assert len(registry) == 0

    def test_non_generator_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = GeneratorRegistry()
        with caplog.at_level(logging.WARNING, logger="specdoc.generators.registry"):
            with patch(
                "specdoc.generators.registry.importlib.metadata.entry_points",
                return_value=[_entry_point("dict", dict)],
            ):
                assert registry.discover() == []
        assert "did not produce a Generator" in caplog.text
