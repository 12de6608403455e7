"""Exception hierarchy for generation, mirrors and persistence."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "VerseImagesError",
    "InvalidPromptError",
    "AdapterFailure",
    "AdapterError",
    "ResponseParseFailedError",
    "AdapterNetworkError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "SnapshotDecodeError",
    "CommandNotFoundError",
    "CommandAlreadyRegisteredError",
    "handle_storage_errors",
]


class VerseImagesError(Exception):
    """Base class for application specific errors."""


class InvalidPromptError(VerseImagesError, ValueError):
    """Raised when a generation request carries no usable prompt."""


class AdapterFailure(str, Enum):
    """Reason tags attached to :class:`AdapterError`."""

    RESPONSE_PARSE_FAILED = "ResponseParseFailed"
    NETWORK_FAILURE = "NetworkFailure"


class AdapterError(VerseImagesError):
    """A mirror could not turn a prompt into images."""

    def __init__(self, mirror: str, reason: AdapterFailure, cause: object) -> None:
        self.mirror = mirror
        self.reason = reason
        self.cause = cause
        super().__init__(f"{mirror}: {reason.value}: {cause}")


class ResponseParseFailedError(AdapterError):
    """The mirror answered with a body that does not match its schema."""

    def __init__(self, mirror: str, cause: object) -> None:
        super().__init__(mirror, AdapterFailure.RESPONSE_PARSE_FAILED, cause)


class AdapterNetworkError(AdapterError):
    """Connection failure, timeout or non-2xx status from a mirror."""

    def __init__(self, mirror: str, cause: object) -> None:
        super().__init__(mirror, AdapterFailure.NETWORK_FAILURE, cause)


class PersistenceError(VerseImagesError):
    """Base class for user-data storage failures."""


class PersistenceReadError(PersistenceError):
    """Raised when a stored snapshot cannot be read."""


class PersistenceWriteError(PersistenceError):
    """Raised when a snapshot cannot be written."""


class SnapshotDecodeError(PersistenceReadError):
    """Raised when a stored snapshot is not a prompt -> URI list mapping."""


class CommandNotFoundError(VerseImagesError, LookupError):
    """Raised when invoking a command nobody registered."""


class CommandAlreadyRegisteredError(VerseImagesError):
    """Raised when a command name is registered twice."""


@contextmanager
def handle_storage_errors(*, operation: str) -> Iterator[None]:
    """Translate SQLAlchemy and driver encoding errors into persistence errors."""

    try:
        yield
    except (sa_exc.SQLAlchemyError, UnicodeError) as exc:
        if operation == "read":
            raise PersistenceReadError(f"user data read failed: {exc}") from exc
        raise PersistenceWriteError(f"user data write failed: {exc}") from exc
