"""
Resolution of image references to image bytes.

Renderers ask for an image each time they draw it.  The first request for an
`image://` filename starts a single background fetch and reports the image as
loading; once the fetch finishes the bytes are cached, listeners are told, and
later requests are answered from the cache.  `cache://` references are only
ever answered from the cache.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
import logging
import time
from typing import Callable, Dict, List
import uuid

from memomark.image_store import ImageStorage
from memomark.markdown_error import ImageResolutionError
from memomark.markdown_inline_match import InlineKind, InlineMatch


DURABLE_SCHEME = "image"
EPHEMERAL_SCHEME = "cache"


class ImageCache:
    """
    Append-only map from filename (or paste key) to image bytes.

    Entries are never replaced or removed, so readers never see a value change.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, bytes] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> bytes | None:
        return self._entries.get(key)

    def put(self, key: str, data: bytes) -> bool:
        """
        Add an entry unless the key is already present.

        Args:
            key: Filename or paste key
            data: Image bytes

        Returns:
            True if the entry was added
        """
        if key in self._entries:
            return False

        self._entries[key] = data
        return True

    def add_pasted(self, data: bytes) -> str:
        """
        Cache bytes that have not been persisted yet.

        Args:
            data: Image bytes

        Returns:
            A `cache://` reference to the new entry
        """
        key = f"image_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        self.put(key, data)
        return f"{EPHEMERAL_SCHEME}://{key}"


class ImageStatus(Enum):
    """Resolution status of an image reference."""
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageState:
    """What a renderer should show for an image reference."""
    status: ImageStatus
    alt_text: str
    data: bytes | None = None
    error: str | None = None


class ImageResolver:
    """Resolves image matches through an image cache and a storage collaborator."""

    def __init__(self, storage: ImageStorage, cache: ImageCache | None = None) -> None:
        """
        Initialize the resolver.

        Args:
            storage: Collaborator that fetches `image://` filenames
            cache: Cache to share with other resolvers; a new one is used when None
        """
        self._storage = storage
        self._cache = cache if cache is not None else ImageCache()
        self._pending: Dict[str, asyncio.Task] = {}
        self._failures: Dict[str, str] = {}
        self._listeners: List[Callable[[str], None]] = []
        self._logger = logging.getLogger("ImageResolver")

    @property
    def cache(self) -> ImageCache:
        return self._cache

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """
        Register a callback run with the filename whenever a fetch finishes.

        Args:
            listener: Callback, typically one that schedules a re-render
        """
        self._listeners.append(listener)

    def _failed(self, match: InlineMatch, error: str) -> ImageState:
        return ImageState(status=ImageStatus.FAILED, alt_text=match.text, error=error)

    def lookup(self, match: InlineMatch) -> ImageState:
        """
        Get the current state of an image without waiting.

        Must be called with a running event loop, which the first lookup of an
        uncached `image://` filename uses to start the fetch.

        Args:
            match: An image match

        Returns:
            The image state; LOADING while a fetch is in flight
        """
        if match.kind != InlineKind.IMAGE or match.target is None:
            return self._failed(match, "Not an image reference")

        key = match.target
        data = self._cache.get(key)
        if data is not None:
            return ImageState(status=ImageStatus.READY, alt_text=match.text, data=data)

        if match.scheme == EPHEMERAL_SCHEME:
            self._logger.warning("Cached image not found: %s", key)
            return self._failed(match, f"Cached image not found: {key}")

        if match.scheme != DURABLE_SCHEME:
            return self._failed(match, f"Unsupported image scheme: {match.scheme}")

        if key in self._failures:
            return self._failed(match, self._failures[key])

        self._start_fetch(key)
        return ImageState(status=ImageStatus.LOADING, alt_text=match.text)

    async def resolve(self, match: InlineMatch) -> bytes:
        """
        Get the bytes of an image, fetching them if needed.

        Concurrent callers for the same filename share one fetch.

        Args:
            match: An image match

        Returns:
            The image bytes

        Raises:
            ImageResolutionError: If the image cannot be resolved
        """
        state = self.lookup(match)
        if state.status == ImageStatus.READY:
            assert state.data is not None
            return state.data

        if state.status == ImageStatus.FAILED:
            raise ImageResolutionError(state.error or "Image not found", {"url": match.url})

        assert match.target is not None
        return await asyncio.shield(self._pending[match.target])

    def _start_fetch(self, filename: str) -> None:
        if filename in self._pending:
            return

        task = asyncio.create_task(self._fetch(filename))
        self._pending[filename] = task
        task.add_done_callback(self._fetch_done)

    def _fetch_done(self, task: asyncio.Task) -> None:
        # Failures are recorded in _fetch; this only marks the exception as retrieved
        if not task.cancelled():
            task.exception()

    async def _fetch(self, filename: str) -> bytes:
        try:
            data = await self._storage.get(filename)

        except Exception as e:
            self._logger.warning("Failed to load image %s: %s", filename, e)
            self._failures[filename] = f"Failed to load image: {filename}"
            self._notify(filename)
            raise ImageResolutionError(f"Failed to load image: {filename}", {"filename": filename}) from e

        finally:
            self._pending.pop(filename, None)

        self._cache.put(filename, data)
        self._notify(filename)
        return data

    def _notify(self, filename: str) -> None:
        for listener in self._listeners:
            try:
                listener(filename)

            except Exception:
                self._logger.exception("Image listener failed for %s", filename)
