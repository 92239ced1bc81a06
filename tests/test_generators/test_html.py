"""Tests for the HTML generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from specdoc.generators.base import BRAND_URL
from specdoc.generators.html import HtmlGenerator
from specdoc.models import ProcessorOptions


def _render(spec: dict[str, Any], options: ProcessorOptions, out: Path) -> str:
    [path] = HtmlGenerator().generate(spec, options, out)
    assert path.name == "api-docs.html"
    return path.read_text(encoding="utf-8")


@pytest.fixture
def html(petstore: dict[str, Any], fixed_options: ProcessorOptions, tmp_path: Path) -> str:
    return _render(petstore, fixed_options, tmp_path)


class TestHtmlGenerator:
    """Test the rendered api-docs.html."""

    def test_document_shell(self, html: str) -> None:
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Petstore API - 1.2.0</title>" in html
        assert html.rstrip().endswith("</html>")

    def test_anchors(self, html: str) -> None:
        assert '<h2 id="Quick-Reference">Quick Reference</h2>' in html
        assert '<a href="#List-pets">List pets</a>' in html
        assert '<h2 id="Pets">Pets</h2>' in html

    def test_values_are_escaped(self, html: str) -> None:
        assert "Bearer &lt;your-token&gt;" in html
        assert "<your-token>" not in html
        assert "?limit=20&amp;status=available" in html

    def test_untrusted_description_escaped(self, spec_factory, tmp_path: Path) -> None:
        spec = spec_factory(
            {
                "/x": {
                    "get": {
                        "tags": ["x"],
                        "summary": "Evil",
                        "description": "<script>alert(1)</script>",
                    }
                }
            }
        )
        text = _render(spec, ProcessorOptions(), tmp_path)
        assert "<script>" not in text
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in text

    def test_brand_link(self, html: str) -> None:
        assert f'<a href="{BRAND_URL}">specdoc</a>' in html

    def test_exclude_brand(self, petstore: dict[str, Any], tmp_path: Path) -> None:
        text = _render(petstore, ProcessorOptions(exclude_brand=True, timestamp="T"), tmp_path)
        assert BRAND_URL not in text
        assert "Generated T" in text

    def test_metadata(self) -> None:
        generator = HtmlGenerator()
        assert generator.name == "html"
        assert generator.output_files == ["api-docs.html"]
