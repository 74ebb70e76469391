"""Providers for the public base URL that maps onto the project root."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

_DEFAULT_PORTS = {"http": "80", "https": "443"}


class BaseUrlInterface(ABC):
    @abstractmethod
    def get_base_url(self) -> str:
        """Return the externally reachable URL of the project root."""
        pass


class StaticBaseUrl(BaseUrlInterface):
    """A base URL fixed at configuration time, e.g. ``https://cdn.example.com``."""

    def __init__(self, url: str) -> None:
        if not url:
            raise ValueError("Base URL must not be empty")
        self._url = url.rstrip("/")

    def get_base_url(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"StaticBaseUrl({self._url!r})"


class HttpBaseUrl(BaseUrlInterface):
    """
    Derive the base URL from the current HTTP request.

    ``environ`` is a WSGI-style mapping (``HTTP_HOST``, ``wsgi.url_scheme``,
    ``SCRIPT_NAME``...). The URL is recomputed on every call so a provider can
    wrap a mapping that is updated per request.
    """

    def __init__(self, environ: Mapping[str, Any]) -> None:
        self._environ = environ

    def _scheme(self) -> str:
        env = self._environ
        forwarded = env.get("HTTP_X_FORWARDED_PROTO")
        if forwarded:
            # first hop wins when proxies append
            return forwarded.split(",")[0].strip().lower()
        if env.get("wsgi.url_scheme"):
            return str(env["wsgi.url_scheme"]).lower()
        if str(env.get("HTTPS", "off")).lower() in ("on", "1"):
            return "https"
        return "http"

    def _host(self, scheme: str) -> str:
        env = self._environ
        host = env.get("HTTP_HOST")
        if host:
            return host
        name = env.get("SERVER_NAME")
        if not name:
            raise ValueError("Unable to determine host: neither HTTP_HOST nor SERVER_NAME is set")
        port = str(env.get("SERVER_PORT") or "")
        if port and port != _DEFAULT_PORTS.get(scheme):
            return f"{name}:{port}"
        return name

    def get_base_url(self) -> str:
        scheme = self._scheme()
        host = self._host(scheme)
        script = (self._environ.get("SCRIPT_NAME") or "").rstrip("/")
        return f"{scheme}://{host}{script}"


__all__ = ["BaseUrlInterface", "HttpBaseUrl", "StaticBaseUrl"]
