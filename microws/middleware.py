"""Helpers that fill in response headers for served files."""

from __future__ import annotations

_CONTENT_TYPES = {
    ".svg": "image/svg+xml",
}


def has_ext(file: str, ext: str) -> bool:
    """True if ``file`` ends with ``ext``."""
    if len(ext) > len(file):
        return False
    return file.endswith(ext)


def content_type_headers(url: str) -> list[tuple[str, str]]:
    """Headers to write along a 200 OK response for the file at ``url``."""
    return [
        ("Content-Type", content_type)
        for ext, content_type in _CONTENT_TYPES.items()
        if has_ext(url, ext)
    ]