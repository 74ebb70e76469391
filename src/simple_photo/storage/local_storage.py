"""Photo storage backed by a directory on the local filesystem."""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional

from ..toolbox.base_url import BaseUrlInterface
from ..utils.paths import (
    ends_with_separator,
    is_absolute,
    join_path,
    normalize_path,
    strip_prefix,
)
from .base import (
    BaseUrlNotConfiguredError,
    DirectoryNotFoundError,
    PhotoNotFoundError,
    StorageError,
    StorageInterface,
)

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Stores photos under ``<project_root>/<save_path>``.

    References handed back to callers are relative to the save path and use
    ``/`` separators. Instances are not thread-safe: ``set_save_path`` is
    meant to be called once while configuring the store.
    """

    def __init__(
        self,
        project_root: Path | str,
        save_path: Optional[str] = None,
        base_url: Optional[BaseUrlInterface] = None,
    ) -> None:
        root = normalize_path(os.fspath(project_root))
        if not is_absolute(root):
            raise ValueError(f"Project root '{project_root}' must be an absolute path")
        self._project_root = root
        self._save_path = save_path
        self._base_url = base_url

    @property
    def project_root(self) -> str:
        return self._project_root

    @property
    def base_url(self) -> Optional[BaseUrlInterface]:
        return self._base_url

    def upload(
        self,
        file: Path | str,
        destination: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        file = os.fspath(file)
        if not os.path.isfile(file):
            raise PhotoNotFoundError(f"Unable to upload; file [{file}] does not exist")

        options = options or {}
        file_name = os.path.basename(file)
        if destination:
            if ends_with_separator(destination):
                destination = destination + file_name
        else:
            destination = file_name

        save_path = self.normalize_path(destination, True)
        self.verify_path_exists(posixpath.dirname(save_path), True)

        if not options.get("overwrite", True) and os.path.exists(save_path):
            logger.warning("Refusing to overwrite existing photo at %s", save_path)
            return None

        try:
            shutil.copyfile(file, save_path)
        except OSError as exc:
            logger.warning("Failed to copy %s to %s: %s", file, save_path, exc)
            return None

        logger.debug("Uploaded %s to %s", file, save_path)
        return self.normalize_path(destination, False, False)

    def delete_photo(self, file: str) -> bool:
        if not self.exists(file):
            # missing photos are already deleted
            return True

        target = self.normalize_path(file, True, True)
        try:
            os.remove(target)
        except OSError as exc:
            logger.warning("Failed to delete %s: %s", target, exc)
            return False

        logger.debug("Deleted %s", target)
        return True

    def get_photo_path(self, file: str) -> str:
        return self.normalize_path(file, True, True)

    def get_photo_url(self, file: str) -> str:
        if self._base_url is None:
            raise BaseUrlNotConfiguredError(
                "No base URL provider configured; pass one to LocalStorage or get_storage()"
            )

        base_path = join_path(self._project_root, self._save_path)
        file_path = strip_prefix(file, self._project_root)
        if file_path is None:
            file_path = normalize_path(file).lstrip("/")
        path = join_path(base_path, file_path)

        relative = strip_prefix(path, self._project_root)
        if relative is None:
            raise StorageError(f"Photo [{file}] resolves outside the project root")

        url = self._base_url.get_base_url().rstrip("/")
        if relative:
            url = f"{url}/{relative}"
        return url.rstrip("/")

    def get_photo_resource(self, file: str) -> Optional[str]:
        source = self.normalize_path(file, True)
        if not os.path.isfile(source):
            raise PhotoNotFoundError(f"Photo [{file}] does not exist")

        fd, tmp_name = tempfile.mkstemp(prefix="temp")
        os.close(fd)
        try:
            shutil.copyfile(source, tmp_name)
        except OSError as exc:
            logger.warning("Failed to copy %s to %s: %s", source, tmp_name, exc)
            os.remove(tmp_name)
            return None
        return tmp_name

    def exists(self, file: str) -> bool:
        return os.path.isfile(self.normalize_path(file, True, True))

    def get_save_path(self) -> Optional[str]:
        return self._save_path

    def set_save_path(self, save_path: Optional[str]) -> None:
        self._save_path = save_path

    def get_path(self) -> str:
        """Full path of the directory photos are saved into."""
        return self.normalize_path(None, True, True)

    def directory_exists(self, directory: str) -> bool:
        return os.path.isdir(self.normalize_path(directory, True))

    def create_directory(self, directory: str, recursive: bool = True, mode: int = 0o777) -> bool:
        if self.directory_exists(directory):
            return True

        target = self.normalize_path(directory, True)
        try:
            if recursive:
                self._make_parents(target, mode)
            else:
                os.mkdir(target, mode)
        except OSError as exc:
            logger.warning("Failed to create directory %s: %s", target, exc)
            return False
        return True

    def verify_path_exists(self, path: str, create_if_not_exists: bool = False) -> str:
        if not self.directory_exists(path) and not create_if_not_exists:
            raise DirectoryNotFoundError(f"Directory: {path} not found")

        if create_if_not_exists:
            self.create_directory(path)

        return path

    @staticmethod
    def _make_parents(target: str, mode: int) -> None:
        """Create `target` and its missing ancestors, each with `mode`."""
        missing: list[str] = []
        current = target
        while current and not os.path.isdir(current):
            missing.append(current)
            parent = posixpath.dirname(current)
            if parent == current:
                break
            current = parent

        for path in reversed(missing):
            try:
                os.mkdir(path, mode)
            except FileExistsError:
                if not os.path.isdir(path):
                    raise

    def normalize_path(
        self,
        path: Optional[str],
        with_root: bool = False,
        with_base_path: bool = True,
    ) -> str:
        """
        Resolve ``path`` against the store.

        Absolute paths are only normalized. Relative ones are prefixed with the
        project root (``with_root``) and the save path (``with_base_path``).
        """
        if is_absolute(path):
            return normalize_path(path)

        return join_path(
            self._project_root if with_root else None,
            self._save_path if with_base_path else None,
            path,
        )


__all__ = ["LocalStorage"]
