import os
import sys
from typing import NoReturn, Optional

from rich.console import Console

from ..config.settings import StoreConfig
from ..storage.base import StorageError
from ..storage.factory import get_storage
from ..storage.local_storage import LocalStorage

console = Console()


def _emit(value: str) -> None:
    # plain output so paths stay on one line and are never styled
    console.print(value, soft_wrap=True, markup=False, highlight=False)


def _fail(message: str) -> NoReturn:
    print(f"[ERROR] {message}", file=sys.stderr)
    sys.exit(1)


def build_storage(
    root: Optional[str] = None,
    save_path: Optional[str] = None,
    base_url: Optional[str] = None,
) -> LocalStorage:
    """
    Build a storage from the environment, with command-line overrides applied.
    """
    config = StoreConfig.from_env()
    if root:
        config.project_root = os.path.abspath(root)
    if save_path is not None:
        config.save_path = save_path or None
    if base_url:
        config.base_url = base_url
    return get_storage(config)


def upload_from_cli(storage: LocalStorage, file: str, destination: Optional[str]) -> str:
    """
    Upload a file and print the reference it was stored under.
    """
    try:
        reference = storage.upload(file, destination)
    except (StorageError, ValueError) as e:
        _fail(f"Failed to upload photo: {e}")

    if reference is None:
        _fail(f"Failed to upload photo: could not copy {file}")

    _emit(reference)
    return reference


def delete_from_cli(storage: LocalStorage, reference: str) -> None:
    if not storage.delete_photo(reference):
        _fail(f"Failed to delete photo: {reference}")
    _emit(f"Deleted {reference}")


def exists_from_cli(storage: LocalStorage, reference: str) -> bool:
    found = storage.exists(reference)
    _emit("yes" if found else "no")
    if not found:
        sys.exit(1)
    return found


def path_from_cli(storage: LocalStorage, reference: Optional[str]) -> str:
    path = storage.get_photo_path(reference) if reference else storage.get_path()
    _emit(path)
    return path


def url_from_cli(storage: LocalStorage, reference: str) -> str:
    try:
        url = storage.get_photo_url(reference)
    except (StorageError, ValueError) as e:
        _fail(f"Failed to build URL: {e}")
    _emit(url)
    return url


def resource_from_cli(storage: LocalStorage, reference: str) -> str:
    """
    Copy a stored photo to a temporary file and print its location.

    The temporary file is left in place for the caller.
    """
    try:
        tmp_name = storage.get_photo_resource(reference)
    except (StorageError, OSError) as e:
        _fail(f"Failed to fetch photo: {e}")

    if tmp_name is None:
        _fail(f"Failed to fetch photo: could not copy {reference}")

    _emit(tmp_name)
    return tmp_name


def mkdir_from_cli(storage: LocalStorage, directory: str) -> str:
    if not storage.create_directory(directory):
        _fail(f"Failed to create directory: {directory}")
    path = storage.normalize_path(directory, True)
    _emit(path)
    return path
