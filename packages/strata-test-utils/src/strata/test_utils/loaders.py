import asyncio
from collections import Counter
from typing import Any, Dict, List, Optional

from strata.loaders import MemoryLoader
from strata.spec import LoaderError, RawContent


class CountingLoader(MemoryLoader):
    """
    A MemoryLoader that records every path it is asked for.

    Paths listed in `failing` raise LoaderError instead of answering, which
    lets tests check that errors reach the caller and are not cached.
    """

    def __init__(
        self,
        files: Optional[Dict[str, Any]] = None,
        sync: bool = True,
        failing: Optional[List[str]] = None,
    ):
        super().__init__(files, sync=sync)
        self.calls: List[str] = []
        self.failing = set(failing or [])

    @property
    def counts(self) -> Counter:
        return Counter(self.calls)

    def _record(self, path: str) -> None:
        self.calls.append(path)
        if path in self.failing:
            raise LoaderError(f"Simulated failure for {path}", path=path)

    def load_sync(self, path: str) -> Optional[RawContent]:
        self._record(path)
        return super().load_sync(path)

    async def load_async(self, path: str) -> Optional[RawContent]:
        self._record(path)
        return await super().load_async(path)


class GatedLoader(CountingLoader):
    """
    An async-only CountingLoader whose loads wait until `release()` is called.

    Holding loads open is how tests observe concurrent requests joining one
    in-flight load, or a cache clear landing in the middle of a load.
    """

    def __init__(self, files: Optional[Dict[str, Any]] = None, **kwargs: Any):
        kwargs.setdefault("sync", False)
        super().__init__(files, **kwargs)
        self._gate = asyncio.Event()
        self.started = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def load_async(self, path: str) -> Optional[RawContent]:
        self.started.set()
        await self._gate.wait()
        return await super().load_async(path)
