"""Pure path helpers shared by the storage backends.

Nothing in here touches the filesystem: paths are treated as strings with
``/`` separators (backslashes are folded into ``/``).
"""

from __future__ import annotations

import re
from typing import Optional

_DRIVE_RE = re.compile(r"^[A-Za-z]:(?=/|$)")


def _split_prefix(path: str) -> tuple[str, str]:
    """Split a slash-normalized path into (absolute prefix, remainder)."""
    if path.startswith("//") and not path.startswith("///"):
        # UNC: //host/share/...
        host, _, rest = path[2:].partition("/")
        if host:
            return "//" + host, rest
    match = _DRIVE_RE.match(path)
    if match:
        rest = path[match.end():]
        if rest.startswith("/"):
            return match.group(0) + "/", rest
        return match.group(0), rest
    if path.startswith("/"):
        return "/", path
    return "", path


def is_absolute(path: Optional[str]) -> bool:
    if not path:
        return False
    if path[0] in ("/", "\\"):
        return True
    return bool(re.match(r"^[A-Za-z]:[\\/]", path))


def ends_with_separator(path: Optional[str]) -> bool:
    return bool(path) and path[-1] in ("/", "\\")


def normalize_path(path: Optional[str]) -> str:
    """
    Collapse ``.``/``..`` segments and repeated separators.

    The result never carries a trailing separator, except for a bare root
    such as ``/`` or ``C:/``.
    """
    if not path:
        return ""

    prefix, rest = _split_prefix(path.replace("\\", "/"))
    rooted = prefix.endswith("/") or prefix.startswith("//")

    segments: list[str] = []
    for segment in rest.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments and segments[-1] != "..":
                segments.pop()
            elif not rooted:
                segments.append(segment)
            continue
        segments.append(segment)

    if prefix.startswith("//"):
        return "/".join([prefix] + segments)
    return prefix + "/".join(segments)


def join_path(*parts: Optional[str]) -> str:
    """
    Join the non-empty parts with ``/`` and normalize the result.

    Later parts are appended even when absolute, so ``join_path("/srv",
    "/photos")`` is ``/srv/photos``.
    """
    joined = ""
    for part in parts:
        if not part:
            continue
        if joined:
            part = part.lstrip("/\\")
            if not ends_with_separator(joined):
                joined += "/"
        joined += part
    return normalize_path(joined)


def strip_prefix(path: str, prefix: str) -> Optional[str]:
    """
    Remove ``prefix`` from ``path`` on a segment boundary.

    Both arguments are normalized first. Returns the remainder without a
    leading separator, or ``None`` if ``prefix`` is not a path-prefix of
    ``path``.
    """
    path = normalize_path(path)
    prefix = normalize_path(prefix)
    if not prefix:
        return path.lstrip("/")
    if path == prefix:
        return ""
    head = prefix if prefix.endswith("/") else prefix + "/"
    if path.startswith(head):
        return path[len(head):]
    return None


__all__ = [
    "ends_with_separator",
    "is_absolute",
    "join_path",
    "normalize_path",
    "strip_prefix",
]
