"""
Typed failures raised by the persistence core.

The HTTP layer decides status codes; the kind of failure is decided here.
Store-level SQLAlchemy errors are translated with ``translate_store_error`` so
callers only ever see these four kinds.
"""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class StoreError(Exception):
    """Base class for every failure surfaced by the core."""

    kind = "store_error"


class InvalidInput(StoreError, ValueError):
    """A required key, entity or id is missing or malformed."""

    kind = "invalid_input"


class NotFound(StoreError, LookupError):
    """A lookup by key matched no document."""

    kind = "not_found"


class WriteFailed(StoreError):
    """The store did not acknowledge a create/update/delete."""

    kind = "write_failed"


class StoreUnavailable(StoreError):
    """Infrastructure failure not attributable to the caller's input."""

    kind = "store_unavailable"


def translate_store_error(exc: BaseException) -> BaseException:
    """Map an exception raised inside a session to the core taxonomy.

    Already-typed failures pass through unchanged, integrity violations become
    ``WriteFailed`` and any other SQLAlchemy error becomes ``StoreUnavailable``.
    Anything else (programming errors) is returned as-is.
    """
    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, IntegrityError):
        err = WriteFailed(f"Write rejected by store: {exc.orig}")
        err.__cause__ = exc
        return err
    if isinstance(exc, SQLAlchemyError):
        err = StoreUnavailable(f"Store error: {exc}")
        err.__cause__ = exc
        return err
    return exc
