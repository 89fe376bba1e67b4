"""
Factory for creating redirect storage instances.
"""

from enum import Enum
from .strategies import RedirectStorageStrategy, InMemoryRedirectStorage
from shortener_app.config import settings
from shortener_app.logging_config import get_logger

logger = get_logger(__name__)


class StorageBackend(Enum):
    """Available redirect storage backends"""
    MEMORY = "memory"


class StorageFactory:
    """
    Simple factory for creating redirect storage instances.

    Gets configuration from settings (not passed as parameters).
    Every call builds a fresh instance; the application keeps the one
    it was created with.
    """

    @classmethod
    def create(cls, backend: StorageBackend) -> RedirectStorageStrategy:
        """
        Create a storage instance.

        Args:
            backend: Type of storage backend (from enum)

        Returns:
            New storage instance
        """
        if backend == StorageBackend.MEMORY:
            storage = InMemoryRedirectStorage(lock_timeout=settings.storage_lock_timeout)
            logger.info("In-memory redirect storage initialized")
            return storage

        raise ValueError(f"Unknown storage backend: {backend}")
