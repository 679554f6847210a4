# File: web_scout/utils.py
"""web_scout.utils: URL canonicalization and domain scoping."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from web_scout.errors import InvalidURL
from web_scout.logger import logger

__all__: Sequence[str] = (
    "ALLOWED_SCHEMES",
    "canonicalize_url",
    "try_canonicalize",
    "extract_host",
    "in_scope",
)

ALLOWED_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def canonicalize_url(url: str, base: Optional[str] = None) -> str:
    """Return the canonical key for *url*, optionally resolved against *base*.

    The key is absolute, has no fragment, a lower-case scheme and host, no
    default port and at least ``/`` as path. Query strings are kept as-is.
    Raises :class:`InvalidURL` when *url* (or *base*) is not a usable
    http(s) URL.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURL(str(url), "empty URL")

    target = url.strip()
    if base is not None:
        canonical_base = canonicalize_url(base)
        try:
            target = urljoin(canonical_base, target)
        except ValueError as exc:
            raise InvalidURL(url, str(exc)) from exc

    try:
        parts = urlsplit(target)
        port = parts.port
    except ValueError as exc:
        raise InvalidURL(url, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidURL(url, f"unsupported scheme {scheme or '(none)'}")
    host = (parts.hostname or "").lower()
    if not host:
        raise InvalidURL(url, "missing host")
    if ":" not in host:
        try:
            host.encode("idna")
        except UnicodeError as exc:
            raise InvalidURL(url, f"invalid host {host!r}") from exc

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))


def try_canonicalize(url: str, base: Optional[str] = None) -> Optional[str]:
    """Like :func:`canonicalize_url` but returns ``None`` for invalid input."""
    try:
        return canonicalize_url(url, base)
    except InvalidURL as exc:
        logger.debug("Skipping URL: %s", exc)
        return None


def extract_host(url: str) -> str:
    """Host name of *url* as the URL parser reports it (``""`` if none)."""
    return urlsplit(url).hostname or ""


def in_scope(url: str, reference_host: str, same_domain: bool = True) -> bool:
    """Whether *url* may be crawled from a seed on *reference_host*.

    Comparison is exact host equality; subdomains are different hosts.
    """
    if not same_domain:
        return True
    try:
        return extract_host(url) == reference_host
    except ValueError:
        return False
