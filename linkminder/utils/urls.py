"""URL helpers shared by the classifier and the link store."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote, urlsplit, urlunsplit

from linkminder.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}
_SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

# Printable ASCII the browser leaves alone; "%" is kept so escapes are not doubled.
_PATH_SAFE = "!$%&'()*+,/:;=@[\\]^|~"
_QUERY_SAFE = "!$%&()*+,/:;=?@[\\]^`{|}~"


def normalize_url(url: str) -> str:
    """Drop the fragment and an explicit default port.

    Unparseable input is returned unchanged so it can still act as a
    dedup key.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        logger.warning("normalize_url failed for %s: %s", url, exc)
        return url
    if not parts.scheme:
        return url
    scheme = parts.scheme.lower()
    netloc = parts.netloc
    if parts.hostname is not None:
        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        userinfo = netloc.rpartition("@")[0]
        netloc = f"{userinfo}@{host}" if userinfo else host
        if port is not None and DEFAULT_PORTS.get(scheme) != port:
            netloc = f"{netloc}:{port}"
    path = quote(parts.path, safe=_PATH_SAFE)
    if not path and scheme in _SPECIAL_SCHEMES:
        path = "/"
    query = quote(parts.query, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, ""))


def get_hostname(url: str) -> str:
    """Lower-cased hostname without a leading ``www.``; empty when unparseable."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if not parts.scheme:
        return ""
    host = parts.hostname or ""
    return host[4:] if host.startswith("www.") else host


# kept as an alias; the popup calls it "domain"
get_domain = get_hostname


def get_path(url: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if not parts.scheme:
        return ""
    if not parts.path and parts.scheme.lower() in _SPECIAL_SCHEMES:
        return "/"
    return parts.path


def is_internal_url(url: str, prefixes: Sequence[str]) -> bool:
    lowered = url.lower()
    return any(lowered.startswith(prefix.lower()) for prefix in prefixes)


__all__ = ["normalize_url", "get_hostname", "get_domain", "get_path", "is_internal_url"]
