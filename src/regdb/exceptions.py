"""regdb exception hierarchy.

Validation problems are returned as diagnostics, not raised. These
exceptions cover the conditions that stop a document (or the whole run)
before diagnostics can be produced.

Usage:
    from regdb.exceptions import DocumentLoadError, RegDBError

    try:
        data = load_document(path)
    except DocumentLoadError as e:
        console.print(f"[red]{e}[/red] ({e.source})")
"""

from typing import Any


class RegDBError(Exception):
    """Base exception for all regdb errors.

    Carries the identifier of the document (usually a relative path)
    the error relates to, when there is one.
    """

    def __init__(self, message: str, *, source: str | None = None):
        self.source = source
        super().__init__(message)


class SourceDirectoryError(RegDBError):
    """The register source directory does not exist or is not a directory."""

    pass


class DocumentLoadError(RegDBError):
    """A register document could not be read or is not valid JSON."""

    pass


class DocumentDecodeError(RegDBError):
    """A document passed validation but could not be decoded into typed models.

    Raised with the underlying pydantic error as ``__cause__``; the
    flattened pydantic error list is kept in ``details``.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        self.details = details or []
        super().__init__(message, source=source)


class ConfigurationError(RegDBError):
    """Errors from application configuration."""

    pass
