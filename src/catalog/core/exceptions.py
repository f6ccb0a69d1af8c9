"""Typed failures raised by the persistence and file storage layers."""

from __future__ import annotations


class DataAccessError(Exception):
    """A unit of work against the relational store failed.

    The original driver or ORM exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def most_specific_cause(self) -> BaseException:
        """Return the deepest exception in the cause chain.

        SQLAlchemy wraps DBAPI errors and keeps the driver exception in
        ``orig``; that one is preferred when present.
        """
        current: BaseException = self
        seen: set[int] = set()
        while id(current) not in seen:
            seen.add(id(current))
            nested = current.__cause__ or getattr(current, "orig", None)
            if not isinstance(nested, BaseException):
                break
            current = nested
        return current


class FileStoreError(OSError):
    """Reading or writing a blob in the file store failed."""


class StoredFileNotFoundError(FileStoreError, FileNotFoundError):
    """No blob matches the requested file code."""
