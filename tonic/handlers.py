"""Handler chains, route descriptions and the helpers behind redirects."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

HandlerFunc = Callable[[Any], None]

DEFAULT_ADDRESS = ":8080"

_UNSAFE_PREFIX_CHARS = re.compile(r"[^a-zA-Z0-9/-]+")
_REPEATED_SLASHES = re.compile(r"/{2,}")


class HandlersChain(list):
    """An ordered list of handlers; the last one is the main handler."""

    def last(self) -> Optional[HandlerFunc]:
        """Return the last handler, or None when the chain is empty."""
        return self[-1] if self else None


@dataclass(frozen=True)
class RouteInfo:
    """A registered route: its method, path, handler name and handler."""

    method: str
    path: str
    handler: str
    handler_func: Optional[HandlerFunc] = None


def _clean(p: str) -> str:
    """Lexically clean a slash-separated path, keeping it relative if it was."""
    if not p:
        return "."
    rooted = p.startswith("/")
    stack: list[str] = []
    for segment in p.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if stack and stack[-1] != "..":
                stack.pop()
            elif not rooted:
                stack.append("..")
            continue
        stack.append(segment)
    joined = "/".join(stack)
    if rooted:
        return "/" + joined
    return joined or "."


def sanitize_prefix(prefix: str) -> Optional[str]:
    """Clean an X-Forwarded-Prefix value for use in a redirect.

    Returns None when the header carries no prefix. Otherwise the path is
    cleaned, every character other than letters, digits, ``/`` and ``-`` is
    dropped, and runs of slashes collapse to one.
    """
    cleaned = _clean(prefix or "")
    if cleaned == ".":
        return None
    cleaned = _UNSAFE_PREFIX_CHARS.sub("", cleaned)
    return _REPEATED_SLASHES.sub("/", cleaned)


def trailing_slash_redirect_path(path: str, forwarded_prefix: str = "") -> str:
    """Return the path to redirect to when only the other trailing-slash form exists.

    A trailing slash is removed if present and added otherwise; a forwarded
    prefix, when given, is put in front of the path.
    """
    p = path
    prefix = sanitize_prefix(forwarded_prefix)
    if prefix is not None:
        p = prefix + "/" + path
    if len(p) > 1 and p.endswith("/"):
        return p[:-1]
    return p + "/"


def redirect_status(method: str) -> int:
    """Return 301 for GET and 307 for every other method."""
    return 301 if method == "GET" else 307


def resolve_address(addr: Sequence[str] = ()) -> str:
    """Return the address to listen on.

    With no address the PORT environment variable is used, falling back to
    ``:8080``. More than one address raises ValueError.
    """
    addresses = list(addr)
    if not addresses:
        port = os.environ.get("PORT")
        if port:
            return ":" + port
        return DEFAULT_ADDRESS
    if len(addresses) == 1:
        return addresses[0]
    raise ValueError("too many parameters")