from __future__ import annotations

"""Exception classes for mapping document access.

The reader and catalog never raise these for read/parse problems; they hand
back a :class:`~edifact_mapping.core.models.LoadFailure` instead. Callers that
prefer exceptions convert a failure with ``LoadFailure.raise_for_failure()``.
"""

from typing import Optional


class MappingError(Exception):
    """Base exception for all mapping-document errors."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path:
            return f"[{self.path}] {super().__str__()}"
        return super().__str__()


class DocumentReadError(MappingError):
    """Raised when the bytes of a mapping document cannot be obtained."""
    pass


class DocumentParseError(MappingError):
    """Raised when a mapping document is not well-formed XML."""
    pass
