"""Error codes, structured error model and exceptions for statflat.

``ErrorCode`` lists every error/warning code the pipeline emits.
``StatsError`` is the structured, serialisable description of one problem;
``StatflatError`` and its subclasses carry a ``StatsError`` when a failure
has to propagate to the caller.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for statistics collection.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Fetch
    E_FETCH_STATUS = "E_FETCH_STATUS"
    E_FETCH_TIMEOUT = "E_FETCH_TIMEOUT"
    E_FETCH_CONNECT = "E_FETCH_CONNECT"

    # Security
    E_SECURITY_TOO_LARGE = "E_SECURITY_TOO_LARGE"
    E_SECURITY_ENTITY_DECLARATION = "E_SECURITY_ENTITY_DECLARATION"
    E_SECURITY_DEPTH_BOMB = "E_SECURITY_DEPTH_BOMB"

    # Parse
    E_PARSE_EMPTY = "E_PARSE_EMPTY"
    E_PARSE_CORRUPT = "E_PARSE_CORRUPT"

    # Warnings (non-fatal)
    W_LARGE_BODY = "W_LARGE_BODY"
    W_UNEXPECTED_ROOT = "W_UNEXPECTED_ROOT"


class StatsError(BaseModel):
    """Structured error with code, message, and context.

    The ``code`` field is typed as ``str`` so it accepts any ``ErrorCode``
    member.  ``path`` holds the URL or dotted field path the problem
    relates to, when there is one.
    """

    code: str
    message: str
    stage: str | None = None
    recoverable: bool = False
    path: str | None = None


class StatflatError(Exception):
    """Base exception raised when a pipeline stage cannot continue."""

    def __init__(self, error: StatsError) -> None:
        super().__init__(f"{error.code}: {error.message}")
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code


class FetchError(StatflatError):
    """The statistics endpoint could not be read."""


class DocumentParseError(StatflatError):
    """The response body is not an acceptable XML document."""
