from typing import Optional

from ..config.settings import StoreConfig
from ..toolbox.base_url import BaseUrlInterface, StaticBaseUrl
from .local_storage import LocalStorage


def get_storage(
    config: Optional[StoreConfig] = None,
    base_url: Optional[BaseUrlInterface] = None,
) -> LocalStorage:
    """
    Returns a LocalStorage built from `config` (or the environment).

    An explicit `base_url` provider wins over `config.base_url`; with neither,
    the storage has no provider and cannot build public URLs.
    """
    if config is None:
        config = StoreConfig.from_env()
    if base_url is None and config.base_url:
        base_url = StaticBaseUrl(config.base_url)
    return LocalStorage(config.project_root, config.save_path, base_url)
