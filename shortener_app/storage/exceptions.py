"""
Errors raised by redirect storage backends.

Handlers convert these into user-facing messages or redirects,
so none of them should ever escape a request.
"""


class StorageError(Exception):
    """Base class for all storage failures"""


class RedirectNotFoundError(StorageError):
    """No redirect is stored under the requested identifier"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Redirect not found: {identifier}")


class RedirectAlreadyExistsError(StorageError):
    """A redirect is already stored under the identifier"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Redirect already exists: {identifier}")


class StorageInternalError(StorageError):
    """
    The storage mechanism itself is unusable.

    This is the only storage error that is not caused by caller input.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
