"""
Redirect storage strategies using Strategy Pattern.

Handlers only talk to RedirectStorageStrategy, so a persistent
backend can be dropped in later without touching the routes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import (
    RedirectAlreadyExistsError,
    RedirectNotFoundError,
    StorageInternalError,
)
from .locks import LockTimeoutError, ReadWriteLock


@dataclass(frozen=True)
class RedirectRecord:
    """A stored redirect. The owner is recorded but never checked."""
    identifier: str
    target_url: str
    owner: str


class RedirectStorageStrategy(ABC):
    """
    Abstract base class for redirect storage.

    Methods are async for interface consistency with I/O-bound
    backends, even when the implementation never awaits.
    """

    @abstractmethod
    async def lookup(self, identifier: str) -> str:
        """
        Resolve an identifier to its target URL.

        Args:
            identifier: Exact identifier (no prefix matching)

        Returns:
            The stored target URL

        Raises:
            RedirectNotFoundError: Nothing is stored under the identifier
            StorageInternalError: The backend is unusable
        """
        pass

    @abstractmethod
    async def store(self, identifier: str, target_url: str, owner: str) -> None:
        """
        Create a new redirect. Never overwrites an existing one.

        Args:
            identifier: Identifier chosen by the creator
            target_url: Destination, stored verbatim
            owner: Free-text owner

        Raises:
            RedirectAlreadyExistsError: The identifier is taken
            StorageInternalError: The backend is unusable
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        """
        Number of stored redirects.

        Raises:
            StorageInternalError: The backend is unusable
        """
        pass


class InMemoryRedirectStorage(RedirectStorageStrategy):
    """
    In-memory redirect storage using a Python dict.

    One reader/writer lock covers the whole mapping. Lookups share it;
    a store holds it exclusively across the existence check and the
    insert, so only one of several racing creations can win.

    Lost on restart and local to the process.
    """

    def __init__(self, lock_timeout: Optional[float] = None):
        """
        Initialize in-memory storage.

        Args:
            lock_timeout: Seconds to wait for the lock (None waits forever)
        """
        self._records: Dict[str, RedirectRecord] = {}
        self._lock = ReadWriteLock()
        self.lock_timeout = lock_timeout

    async def lookup(self, identifier: str) -> str:
        try:
            with self._lock.read_locked(self.lock_timeout):
                record = self._records.get(identifier)
        except LockTimeoutError as e:
            raise StorageInternalError(str(e)) from e

        if record is None:
            raise RedirectNotFoundError(identifier)
        return record.target_url

    async def store(self, identifier: str, target_url: str, owner: str) -> None:
        record = RedirectRecord(identifier=identifier, target_url=target_url, owner=owner)
        try:
            with self._lock.write_locked(self.lock_timeout):
                if identifier in self._records:
                    raise RedirectAlreadyExistsError(identifier)
                self._records[identifier] = record
        except LockTimeoutError as e:
            raise StorageInternalError(str(e)) from e

    def __len__(self) -> int:
        try:
            with self._lock.read_locked(self.lock_timeout):
                return len(self._records)
        except LockTimeoutError as e:
            raise StorageInternalError(str(e)) from e
