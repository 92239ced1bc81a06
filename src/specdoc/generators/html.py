"""Standalone HTML API reference generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from specdoc.generators.base import (
    BRAND_NAME,
    BRAND_URL,
    Generator,
    branding_text,
    create_template_environment,
    render_template,
)
from specdoc.models import ProcessorOptions

OUTPUT_FILE = "api-docs.html"


class HtmlGenerator(Generator):
    """Renders a single self-contained ``api-docs.html`` page.

    The template is autoescaped, so descriptions and examples taken from the
    spec are shown as text and never interpreted as markup.
    """

    template_name = "api-docs.html.j2"

    @property
    def name(self) -> str:
        return "html"

    @property
    def description(self) -> str:
        return "Single-page HTML API reference"

    @property
    def output_files(self) -> list[str]:
        return [OUTPUT_FILE]

    def generate(
        self, spec: dict[str, Any], options: ProcessorOptions, output_dir: str | Path
    ) -> list[Path]:
        data = self.template_data(spec, options)
        context = data.as_context()
        context["branding"] = branding_text(data.exclude_brand, data.version, data.timestamp)
        context["brand"] = {"name": BRAND_NAME, "url": BRAND_URL}

        env = create_template_environment()
        path = render_template(env, self.template_name, Path(output_dir) / OUTPUT_FILE, context)
        return [path]
