"""Output generators that render processed OpenAPI data to files.

Built-in generators:

* ``markdown`` -- :class:`~specdoc.generators.markdown.MarkdownGenerator`
* ``html`` -- :class:`~specdoc.generators.html.HtmlGenerator`
* ``postman`` -- :class:`~specdoc.generators.postman.PostmanGenerator`
"""

from specdoc.generators.base import Generator
from specdoc.generators.registry import GeneratorRegistry, default_registry

__all__ = ["Generator", "GeneratorRegistry", "default_registry"]
