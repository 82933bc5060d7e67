import asyncio
import logging
from typing import Any, Dict, Optional

from strata.spec import LoaderProtocol, RawContent

log = logging.getLogger(__name__)


def _is_valid_path(path: Any) -> bool:
    return isinstance(path, str) and bool(path)


class FileCache:
    """
    Caches the raw result of loading each path, so that a path is read at
    most once until the cache is cleared.

    A path that does not exist is remembered as None, which counts as a
    completed attempt. Loader errors are never remembered: they go to the
    caller and the next request tries again.

    In async mode the first request for a path starts a single task that
    every concurrent request for that path awaits.
    """

    def __init__(self, loader: LoaderProtocol):
        self.loader = loader
        self._entries: Dict[str, Optional[RawContent]] = {}
        self._in_flight: Dict[str, "asyncio.Task[Optional[RawContent]]"] = {}
        self._attempts = 0

    def load_file_sync(self, path: str) -> Optional[RawContent]:
        if not _is_valid_path(path):
            return None
        if path in self._entries:
            log.debug(f"File cache hit: {path}")
            return self._entries[path]

        self._attempts += 1
        content = self.loader.load_sync(path)
        self._entries[path] = content
        return content

    async def load_file(self, path: str) -> Optional[RawContent]:
        if not _is_valid_path(path):
            return None
        if path in self._entries:
            log.debug(f"File cache hit: {path}")
            return self._entries[path]

        task = self._in_flight.get(path)
        if task is None:
            self._attempts += 1
            task = asyncio.ensure_future(self._load(path))
            self._in_flight[path] = task
        else:
            log.debug(f"Joining in-flight load: {path}")
        # One caller being cancelled must not cancel the load for the others.
        return await asyncio.shield(task)

    async def _load(self, path: str) -> Optional[RawContent]:
        me = asyncio.current_task()
        try:
            content = await self.loader.load_async(path)
        except BaseException:
            if self._in_flight.get(path) is me:
                del self._in_flight[path]
            raise

        # If the cache was cleared or the path removed while we were loading,
        # our slot is gone and the result must not land in the new generation.
        if self._in_flight.get(path) is me:
            del self._in_flight[path]
            self._entries[path] = content
        return content

    def is_loaded(self, path: str) -> bool:
        """True when an attempt to load the path has completed."""
        return path in self._entries

    def remove_file(self, path: str) -> None:
        self._entries.pop(path, None)
        self._in_flight.pop(path, None)

    def clear(self) -> None:
        log.debug("File cache cleared")
        self._entries = {}
        self._in_flight = {}
        self._attempts = 0

    def size(self) -> int:
        return len(self._entries.keys() | self._in_flight.keys())

    def attempt_count(self) -> int:
        return self._attempts
