"""Abstract base class for specdoc output generators.

Every generator subclasses :class:`Generator` and implements :attr:`name`
and :meth:`generate`. A generator receives the parsed OpenAPI document and
the :class:`~specdoc.models.ProcessorOptions`, turns the document into
:class:`~specdoc.models.TemplateData` with :meth:`Generator.template_data`,
and writes one or more files into the output directory.

Generators are collected in a :class:`~specdoc.generators.registry.GeneratorRegistry`.
Third-party packages add their own through the ``specdoc.generators``
entry-point group.

Example:
    Minimal generator::

        class TitleGenerator(Generator):
            @property
            def name(self) -> str:
                return "title"

            def generate(self, spec, options, output_dir):
                data = self.template_data(spec, options)
                path = Path(output_dir) / "TITLE.txt"
                write_output(path, data.info.title)
                return [path]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from specdoc.exceptions import GeneratorError
from specdoc.models import ProcessorOptions, TemplateData
from specdoc.processor import OpenApiProcessor

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generators/templates/``)."""

BRAND_NAME = "specdoc"
BRAND_URL = "https://pypi.org/project/specdoc/"


class Generator(ABC):
    """Base class for all specdoc generators.

    Subclasses must implement :attr:`name` and :meth:`generate`.
    :attr:`description` and :attr:`output_files` are informational and
    shown by ``specdoc generators``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique generator name used on the command line (e.g. ``"markdown"``)."""
        ...

    @property
    def description(self) -> str:
        return ""

    @property
    def output_files(self) -> list[str]:
        """File names this generator writes, relative to the output directory."""
        return []

    @abstractmethod
    def generate(
        self, spec: dict[str, Any], options: ProcessorOptions, output_dir: str | Path
    ) -> list[Path]:
        """Write this generator's files for *spec* into *output_dir*.

        Args:
            spec: The parsed OpenAPI document.
            options: Presentation options forwarded to the processor.
            output_dir: Target directory. Created if it does not exist.

        Returns:
            The paths of every file written.

        Raises:
            GeneratorError: If rendering or writing fails.
            ProcessingError: If the document cannot be processed.
        """
        ...

    @staticmethod
    def template_data(spec: dict[str, Any], options: ProcessorOptions) -> TemplateData:
        return OpenApiProcessor(options).process(spec)


def create_template_environment() -> Environment:
    """Create the Jinja2 environment for the bundled templates.

    ``.html.j2`` templates are autoescaped; ``.md.j2`` templates are not.
    Block trimming and lstrip are enabled for cleaner template authoring.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(
            enabled_extensions=("html.j2", "html"),
            disabled_extensions=("md.j2",),
        ),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["md_cell"] = markdown_cell
    return env


def render_template(
    env: Environment, template_name: str, output_path: Path, context: dict[str, Any]
) -> Path:
    """Render *template_name* with *context* and write it to *output_path*."""
    try:
        rendered = env.get_template(template_name).render(**context)
    except TemplateError as exc:
        raise GeneratorError(f"Failed to render template {template_name}: {exc}") from exc
    return write_output(output_path, rendered)


def write_output(path: Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise GeneratorError(f"Failed to write {path}: {exc}") from exc
    return path


def branding_text(exclude_brand: bool, version: str, timestamp: str) -> str:
    """Footer line for generated documents.

    >>> branding_text(False, "0.3.0", "2024-01-01T00:00:00+00:00")
    'Generated 2024-01-01T00:00:00+00:00 by specdoc v0.3.0'
    >>> branding_text(True, "0.3.0", "2024-01-01T00:00:00+00:00")
    'Generated 2024-01-01T00:00:00+00:00'
    """
    if exclude_brand:
        return f"Generated {timestamp}"
    return f"Generated {timestamp} by {BRAND_NAME} v{version}"


def markdown_cell(value: Any) -> str:
    """Make *value* safe for a Markdown table cell."""
    if value is None:
        return ""
    return str(value).replace("|", "\\|").replace("\r\n", " ").replace("\n", " ")
