"""
Redirect storage module.
Implements Strategy Pattern for pluggable storage backends.
"""

from .exceptions import (
    StorageError,
    RedirectNotFoundError,
    RedirectAlreadyExistsError,
    StorageInternalError,
)
from .strategies import RedirectRecord, RedirectStorageStrategy, InMemoryRedirectStorage
from .factory import StorageFactory, StorageBackend

__all__ = [
    "StorageError",
    "RedirectNotFoundError",
    "RedirectAlreadyExistsError",
    "StorageInternalError",
    "RedirectRecord",
    "RedirectStorageStrategy",
    "InMemoryRedirectStorage",
    "StorageFactory",
    "StorageBackend",
]
