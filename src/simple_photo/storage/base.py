from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class StorageError(RuntimeError):
    """Base class for errors raised by photo storages."""


class PhotoNotFoundError(StorageError, FileNotFoundError):
    """Raised when a source or stored photo does not exist."""


class DirectoryNotFoundError(StorageError, FileNotFoundError):
    """Raised when a required directory is missing and may not be created."""


class BaseUrlNotConfiguredError(StorageError):
    """Raised when a public URL is requested but no base URL provider was injected."""


class StorageInterface(ABC):
    @abstractmethod
    def upload(
        self,
        file: str,
        destination: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Copy `file` into the store and return its reference, or None on failure."""
        pass

    @abstractmethod
    def delete_photo(self, file: str) -> bool:
        """Delete the photo at `file`. Missing photos count as deleted."""
        pass

    @abstractmethod
    def get_photo_path(self, file: str) -> str:
        """Return the absolute location of `file`."""
        pass

    @abstractmethod
    def get_photo_url(self, file: str) -> str:
        """Return the public URL of `file`."""
        pass

    @abstractmethod
    def get_photo_resource(self, file: str) -> Optional[str]:
        """Return a local temporary copy of `file` (None if the copy fails); the caller removes it."""
        pass

    @abstractmethod
    def exists(self, file: str) -> bool:
        """Return True if `file` is stored."""
        pass
