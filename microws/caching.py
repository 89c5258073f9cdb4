"""Caching of whole HTTP response bodies by URL."""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol


class _Response(Protocol):
    def end(self, data: bytes = ..., close_connection: bool = ...) -> Any: ...


def _clock() -> int:
    return int(time.time())


def _to_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class CachingResponse:
    """Collects a response body, then sends it and keeps it for reuse.

    ``now`` is the clock that stamps the body when it is ended.
    """

    def __init__(self, response: _Response, now: Callable[[], int] = _clock) -> None:
        self.response = response
        self._now = now
        self.buffer = b""
        self.created: int | None = None

    def write(self, data: bytes | str) -> None:
        """Append a piece of the body."""
        self.buffer += _to_bytes(data)

    def end(self, data: bytes | str = b"", close_connection: bool = False) -> None:
        """Append the last piece, send the whole body and stamp the time."""
        self.buffer += _to_bytes(data)
        self.response.end(self.buffer)
        self.created = self._now()

    @property
    def completed(self) -> bool:
        return self.created is not None


class ResponseCache:
    """Serves bodies from cache while younger than ``seconds_to_expiry``."""

    def __init__(self, seconds_to_expiry: int) -> None:
        self.seconds_to_expiry = seconds_to_expiry
        self.clock: Callable[[], int] = _clock
        self._entries: dict[str, CachingResponse] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self._entries

    def serve(
        self,
        cache_key: str,
        response: _Response,
        request: Any,
        handler: Callable[[CachingResponse, Any], Any],
        now: int | None = None,
    ) -> bool:
        """Answer from cache or run ``handler`` to fill a new entry.

        Returns True if the response came from the cache.
        """
        if now is None:
            now = self.clock()
        entry = self._entries.get(cache_key)
        if entry is not None:
            if entry.completed and entry.created + self.seconds_to_expiry > now:
                response.end(entry.buffer)
                return True
            del self._entries[cache_key]

        caching_response = CachingResponse(response, self.clock)
        self._entries[cache_key] = caching_response
        handler(caching_response, request)
        return False