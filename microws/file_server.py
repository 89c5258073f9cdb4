"""Serving a directory from memory, gzip-compressed where that pays off."""

from __future__ import annotations

import logging
import os
import threading
import zlib
from pathlib import Path

logger = logging.getLogger(__name__)

_GZIP_WINDOW_BITS = 15 + 16
_MEM_LEVEL = 8

NOT_FOUND_STATUS = "404 Not Found"
NOT_FOUND_BODY = b"Not Found"
OK_STATUS = "200 OK"
INDEX_URL = "/index.html"


def load_file_content(path: str | os.PathLike[str]) -> tuple[bytes, bool]:
    """Read a file and gzip it at best compression if that makes it smaller.

    Returns (content, compressed). Raises OSError if the file cannot be read.
    """
    content = Path(path).read_bytes()
    compressor = zlib.compressobj(
        zlib.Z_BEST_COMPRESSION,
        zlib.DEFLATED,
        _GZIP_WINDOW_BITS,
        _MEM_LEVEL,
        zlib.Z_DEFAULT_STRATEGY,
    )
    compressed = compressor.compress(content) + compressor.flush()
    if len(compressed) < len(content):
        return compressed, True
    return content, False


class FileStore:
    """All regular, non-hidden files below a root, held in memory by URL path."""

    def __init__(self, root: str | os.PathLike[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._files: dict[str, tuple[bytes, bool]] = {}
        self.loaded_bytes = 0
        if root is not None:
            self.load(root)

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._files

    def load(self, root: str | os.PathLike[str]) -> int:
        """Load every file below ``root``, replacing what was held before.

        Files whose name starts with a dot are skipped. Returns the number of
        files loaded.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise FileNotFoundError(f"not a directory: {root_path}")

        new_files: dict[str, tuple[bytes, bool]] = {}
        total = 0
        for dirpath, _dirnames, filenames in os.walk(root_path):
            for name in filenames:
                if name.startswith("."):
                    continue
                path = Path(dirpath) / name
                if not path.is_file():
                    continue
                url = "/" + path.relative_to(root_path).as_posix()
                try:
                    content, compressed = load_file_content(path)
                except OSError as error:
                    logger.error("Failed to open file: %s (%s)", path, error)
                    content, compressed = b"", False
                new_files[url] = (content, compressed)
                total += len(content)

        with self._lock:
            self._files = new_files
            self.loaded_bytes = total
        logger.info("Loaded %d MB of files into RAM", total // 1024 // 1024)
        return len(new_files)

    def lookup(self, url: str) -> tuple[bytes, bool] | None:
        """Return (content, gzip-compressed) for a URL path, or None."""
        with self._lock:
            return self._files.get(url)

    def respond(self, url: str) -> tuple[str, list[tuple[str, str]], bytes]:
        """Build (status, headers, body) for a GET of ``url``.

        The root URL serves ``/index.html``.
        """
        entry = self.lookup(INDEX_URL if url == "/" else url)
        if entry is None:
            return NOT_FOUND_STATUS, [], NOT_FOUND_BODY
        content, compressed = entry
        headers = [("Content-Encoding", "gzip")] if compressed else []
        return OK_STATUS, headers, content