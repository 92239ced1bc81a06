"""Exception hierarchy for specdoc.

All exceptions inherit from :class:`SpecdocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdoc.exit_codes`.
The top-level error handler in :func:`specdoc.app.main` catches
``SpecdocError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SpecdocError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- ProcessingError     (exit 8)
    |   +-- MissingTagError (exit 8)
    +-- GeneratorError      (exit 10)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from typing import Optional

from specdoc.exit_codes import (
    EXIT_GENERATOR_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PROCESSING_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecdocError(Exception):
    """Base exception for all specdoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specdoc.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecdocError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecdocError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or fails version validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ProcessingError(SpecdocError):
    """Raised when the document walker hits a fatal structural violation.

    Args:
        message: Human-readable error description.
        stage: Name of the processing stage that failed (``"endpoints"``,
            ``"request body for POST /pets"``, ...). ``None`` when the
            failure is not tied to a single stage.
    """

    exit_code = EXIT_PROCESSING_ERROR

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class MissingTagError(ProcessingError):
    """Raised when an operation declares no tags.

    Resources are built from each operation's first tag, so an untagged
    operation has no bucket to land in. The message names the operation by
    its summary when it has one and by ``METHOD path`` otherwise.
    """

    def __init__(self, method: str, path: str, summary: Optional[str] = None):
        self.method = method.upper()
        self.path = path
        self.summary = summary
        label = summary or f"{self.method} {path}"
        super().__init__(
            f"Operation '{label}' ({self.method} {path}) must have at least one tag defined",
            stage=f"{self.method} {path}",
        )


class GeneratorError(SpecdocError):
    """Raised when a generator is unknown, fails to load, or fails to render."""

    exit_code = EXIT_GENERATOR_ERROR


class ConfigError(SpecdocError):
    """Raised for configuration problems (invalid project file, bad option values)."""

    exit_code = EXIT_GENERIC_FAILURE
