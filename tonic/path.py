"""Canonical cleaning of URL paths."""

from __future__ import annotations


def clean_path(p: str) -> str:
    """Return the canonical form of the URL path ``p``.

    Repeated slashes collapse, ``.`` elements vanish, and each ``..`` removes
    the element before it (never climbing above the root). The result always
    starts with ``/``; a trailing slash is kept, and a trailing ``.`` element
    leaves one behind. An empty result becomes ``/``.
    """
    if not p:
        return "/"

    segments = p.split("/")
    trailing = (len(p) > 1 and p.endswith("/")) or segments[-1] == "."

    stack: list[str] = []
    for segment in segments:
        if segment in ("", "."):
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)

    if not stack:
        return "/"
    cleaned = "/" + "/".join(stack)
    return cleaned + "/" if trailing else cleaned