"""Abstract key/value store scoped by an execution token."""

from abc import ABC, abstractmethod


class UserDataStore(ABC):
    """Base interface for user-data persistence."""

    @abstractmethod
    async def read_user_data(self, token: str, key: str) -> str | None:
        """Return the blob stored under ``key`` or ``None`` if nothing was written.

        Raises :class:`PersistenceReadError` when the backend fails.
        """

    @abstractmethod
    async def write_user_data(self, token: str, key: str, blob: str) -> None:
        """Replace the blob stored under ``key``.

        Raises :class:`PersistenceWriteError` when the backend fails.
        """
