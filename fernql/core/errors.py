"""Error taxonomy shared by every stage of the pipeline.

Each error carries a ``field_path`` (list of field names from the root operation
down to the point of failure, or ``None`` while it is still unknown) and an
HTTP-style ``status_code`` used by the transport layer.
"""
from __future__ import annotations
from typing import List, Optional

__all__ = [
    'BaseError',
    'ArgsError',
    'QueryError',
    'ResultError',
    'InitializationError',
    'UnresolvedTypeError',
]


class BaseError(Exception):
    """Catch-all error. Anything that is not already a taxonomy error is coerced
    into one of these before it reaches the response envelope."""

    status_code: int = 500

    def __init__(
        self,
        message: str = '',
        *,
        field_path: Optional[List[str]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.field_path: Optional[List[str]] = list(field_path) if field_path is not None else None
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    @property
    def error_name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.error_name}: {self.message}"


class ArgsError(BaseError):
    """Client-supplied arguments are invalid."""

    status_code = 400


class QueryError(BaseError):
    """The query document is structurally invalid."""

    status_code = 400


class ResultError(BaseError):
    """A resolver produced output that does not match the schema."""

    status_code = 400


class InitializationError(BaseError):
    """Registry or setup misconfiguration."""

    status_code = 400


class UnresolvedTypeError(InitializationError):
    """A lookup names a type that was never registered."""
