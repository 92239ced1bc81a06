"""Markdown API reference generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from specdoc.generators.base import (
    Generator,
    branding_text,
    create_template_environment,
    render_template,
)
from specdoc.models import ProcessorOptions

OUTPUT_FILE = "api-docs.md"


class MarkdownGenerator(Generator):
    """Renders ``api-docs.md``: quick reference, resources, and schema models."""

    template_name = "api-docs.md.j2"

    @property
    def name(self) -> str:
        return "markdown"

    @property
    def description(self) -> str:
        return "Markdown API reference with curl examples"

    @property
    def output_files(self) -> list[str]:
        return [OUTPUT_FILE]

    def generate(
        self, spec: dict[str, Any], options: ProcessorOptions, output_dir: str | Path
    ) -> list[Path]:
        data = self.template_data(spec, options)
        context = data.as_context()
        context["branding"] = branding_text(data.exclude_brand, data.version, data.timestamp)

        env = create_template_environment()
        path = render_template(env, self.template_name, Path(output_dir) / OUTPUT_FILE, context)
        return [path]
