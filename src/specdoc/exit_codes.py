"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specdoc.exceptions.SpecdocError` subclass.
CI scripts can inspect the exit code to tell a broken spec from a broken
template without parsing stderr.

Example::

    $ specdoc generate --spec broken.yaml
    $ echo $?
    8   # EXIT_PROCESSING_ERROR -- an operation has no tags
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be loaded, parsed, or version-checked."""

EXIT_PROCESSING_ERROR = 8
"""The specification parsed but violates a structural rule (e.g. a missing tag)."""

EXIT_GENERATOR_ERROR = 10
"""A generator failed to load, render its templates, or write its output."""
