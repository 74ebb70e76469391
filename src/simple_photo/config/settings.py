from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .env import get_env

logger = logging.getLogger(__name__)

ROOT_VAR = "SIMPLE_PHOTO_PROJECT_ROOT"
SAVE_PATH_VAR = "SIMPLE_PHOTO_SAVE_PATH"
BASE_URL_VAR = "SIMPLE_PHOTO_BASE_URL"


@dataclass(slots=True)
class StoreConfig:
    project_root: str
    save_path: Optional[str] = None
    base_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StoreConfig":
        root = get_env(ROOT_VAR) or os.getcwd()
        if not Path(root).is_absolute():
            resolved = str(Path(root).resolve())
            logger.warning(
                "Relative value '%s' for %s; resolving against the working directory as %s",
                root,
                ROOT_VAR,
                resolved,
            )
            root = resolved

        return cls(
            project_root=root,
            save_path=get_env(SAVE_PATH_VAR),
            base_url=get_env(BASE_URL_VAR),
        )


__all__ = ["StoreConfig", "ROOT_VAR", "SAVE_PATH_VAR", "BASE_URL_VAR"]
