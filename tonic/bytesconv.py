"""Conversion between text and raw bytes.

Arbitrary byte sequences survive a round trip: bytes that are not valid
UTF-8 are carried through the text form as lone surrogates.
"""

from __future__ import annotations

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def string_to_bytes(s: str) -> bytes:
    """Return the bytes that ``s`` stands for."""
    return s.encode(_ENCODING, _ERRORS)


def bytes_to_string(b: bytes | bytearray | memoryview) -> str:
    """Return ``b`` as text; bytes that are not UTF-8 are preserved."""
    return bytes(b).decode(_ENCODING, _ERRORS)