"""Generator registry -- registration, lookup, and entry-point discovery.

:class:`GeneratorRegistry` is a plain value object: the CLI builds one with
:func:`default_registry` and passes it where generators are selected. There
is no module-level singleton.

Third-party packages register generators by declaring an entry point under
the ``specdoc.generators`` group in their ``pyproject.toml``::

    [project.entry-points."specdoc.generators"]
    asciidoc = "my_package.asciidoc:AsciiDocGenerator"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Iterator, Optional

from specdoc.exceptions import GeneratorError
from specdoc.generators.base import Generator

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "specdoc.generators"
"""The entry-point group name used for generator discovery."""


class GeneratorRegistry:
    """Holds generators by name.

    Example::

        registry = default_registry()
        registry.discover()
        for name in registry.names():
            print(name, registry.get(name).description)
    """

    def __init__(self, generators: Optional[list[Generator]] = None) -> None:
        self._generators: dict[str, Generator] = {}
        for generator in generators or []:
            self.register(generator)

    def register(self, generator: Generator) -> None:
        """Add *generator* to the registry.

        Raises:
            GeneratorError: If a generator with the same name is registered.
        """
        if generator.name in self._generators:
            raise GeneratorError(f"Generator '{generator.name}' is already registered")
        self._generators[generator.name] = generator
        logger.debug("Registered generator '%s'", generator.name)

    def get(self, name: str) -> Generator:
        """Return the generator registered as *name*.

        Raises:
            GeneratorError: If no such generator exists. The message lists
                the available names.
        """
        try:
            return self._generators[name]
        except KeyError:
            available = ", ".join(self.names()) or "none"
            raise GeneratorError(
                f"Unknown generator '{name}'. Available: {available}"
            ) from None

    def names(self) -> list[str]:
        return list(self._generators)

    def describe(self) -> list[dict[str, str]]:
        """Name, description and output files of every generator, for display."""
        return [
            {
                "name": generator.name,
                "description": generator.description,
                "outputs": ", ".join(generator.output_files),
            }
            for generator in self._generators.values()
        ]

    def discover(self) -> list[str]:
        """Load generators from the ``specdoc.generators`` entry-point group.

        Entry points whose name is already registered are skipped. Entry
        points that fail to load, or that do not produce a
        :class:`~specdoc.generators.base.Generator`, are logged as warnings
        and skipped.

        Returns:
            Names of the generators that were added.
        """
        added: list[str] = []
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._generators:
                logger.debug("Generator '%s' already registered, skipping", ep.name)
                continue
            try:
                generator = ep.load()()
            except Exception as exc:
                logger.warning("Failed to load generator '%s': %s", ep.name, exc)
                continue
            if not isinstance(generator, Generator):
                logger.warning(
                    "Entry point '%s' did not produce a Generator (got %s)",
                    ep.name,
                    type(generator).__name__,
                )
                continue
            self.register(generator)
            added.append(generator.name)
        return added

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __iter__(self) -> Iterator[Generator]:
        return iter(list(self._generators.values()))

    def __len__(self) -> int:
        return len(self._generators)


def default_registry() -> GeneratorRegistry:
    """A registry holding the built-in Markdown, HTML and Postman generators."""
    from specdoc.generators.html import HtmlGenerator
    from specdoc.generators.markdown import MarkdownGenerator
    from specdoc.generators.postman import PostmanGenerator

    return GeneratorRegistry([MarkdownGenerator(), HtmlGenerator(), PostmanGenerator()])
