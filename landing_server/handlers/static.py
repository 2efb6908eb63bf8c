"""Static file serving from a single root directory.

Implements:
- URL path -> file path resolution with one traversal policy
- 403 for anything that would leave the root, 404 for missing files
- streamed 200 responses with a content type from a fixed table

No byte ranges and no caching headers: this only backs local development.
"""

from __future__ import annotations

import logging
import os
import posixpath
import stat
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import unquote

import anyio
import anyio.to_thread
from starlette.responses import Response, StreamingResponse

from ..errors import NotFound, PathTraversalViolation
from ..responses import plain_text


log = logging.getLogger("landing_server.handlers.static")

INDEX_FILE = "index.html"
CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml; charset=utf-8",
}

# Enough for any realistic nesting of %25 escapes.
_MAX_DECODE_PASSES = 8


def content_type_for(path: Path) -> str:
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def _fully_unquote(value: str) -> str:
    for _ in range(_MAX_DECODE_PASSES):
        decoded = unquote(value)
        if decoded == value:
            return decoded
        value = decoded
    return value


def normalize_url_path(url_path: str) -> str:
    """Reduce a URL path to a normalized path relative to the root.

    Raises ``PathTraversalViolation`` when the path climbs above the root.
    """

    if url_path in ("", "/"):
        return INDEX_FILE

    decoded = _fully_unquote(url_path)
    if "\x00" in decoded:
        raise PathTraversalViolation()

    relative = decoded.replace("\\", "/").lstrip("/")
    if not relative:
        return INDEX_FILE

    normalized = posixpath.normpath(relative)
    if normalized == ".." or normalized.startswith("../"):
        raise PathTraversalViolation()
    return normalized


def resolve_static_path(root: Path, url_path: str) -> Path:
    """Map a URL path to an absolute path strictly inside ``root``.

    Symlinks are resolved before the containment check, so a link pointing
    outside the root is refused as well.
    """

    root = root.resolve()
    relative = normalize_url_path(url_path)
    try:
        candidate = (root / relative).resolve()
    except (OSError, RuntimeError):
        # Symlink loops and similar; nothing servable there.
        raise NotFound() from None
    if candidate == root or root not in candidate.parents:
        raise PathTraversalViolation()
    return candidate


def _locate_file(root: Path, url_path: str) -> Path:
    """Resolve ``url_path`` and require a regular file; blocking, run off the loop."""

    path = resolve_static_path(root, url_path)
    try:
        st = os.stat(path)
    except OSError:
        raise NotFound() from None
    if not stat.S_ISREG(st.st_mode):
        raise NotFound()
    return path


async def iter_file(path: Path, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the file's bytes; the handle closes on exhaustion or cancellation."""

    try:
        async with await anyio.open_file(path, mode="rb") as handle:
            while True:
                chunk = await handle.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    except OSError:
        # Headers are already out; dropping the connection is all that is left.
        log.exception("Failed while streaming %s", path)
        raise


async def serve_static(root: Path, url_path: str) -> Response:
    try:
        path = await anyio.to_thread.run_sync(_locate_file, root, url_path)
    except PathTraversalViolation as exc:
        log.info("Refused path outside static root: %r", url_path)
        return plain_text(exc.status_code, exc.message)
    except NotFound as exc:
        log.debug("Static file not found: %r", url_path)
        return plain_text(exc.status_code, exc.message)

    return StreamingResponse(iter_file(path), status_code=200, media_type=content_type_for(path))
