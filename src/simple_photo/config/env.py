from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


def load_env() -> bool:
    found = find_dotenv(usecwd=True)
    if not found:
        here = Path(__file__).resolve()
        for p in (
            here.parents[3] / ".env",
            here.parents[2] / ".env",
            here.parents[1] / ".env",
            here.parent / ".env",
        ):
            if p.exists():
                found = str(p)
                break

    if found:
        load_dotenv(found, override=False)
        return True
    return False


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()
