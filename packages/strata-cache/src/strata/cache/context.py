import logging
from typing import Any, Dict, List, Optional, Sequence

from strata.loaders import JsonHandler
from strata.spec import ConfigurationError, FileHandlerProtocol, LoaderProtocol
from .file_cache import FileCache
from .merged_cache import MergedDataCache
from .parsed_cache import ParsedDataCache

log = logging.getLogger(__name__)


class CacheContext:
    """
    Owns one loader and the three cache layers built on top of it:
    raw files, decoded fragments, and merged records.

    Contexts are independent of each other, so tests and separate
    applications in one process can each hold their own. `clear()` resets
    all three layers together and starts a new generation; loads that were
    in flight at that moment still answer their callers but are not stored.
    """

    def __init__(
        self,
        loader: LoaderProtocol,
        handlers: Optional[Sequence[FileHandlerProtocol]] = None,
    ):
        if loader is None:
            raise ConfigurationError("A CacheContext needs a loader")
        self.loader = loader
        self.handlers: List[FileHandlerProtocol] = list(handlers or [JsonHandler()])
        self.file_cache = FileCache(loader)
        self.parsed_cache = ParsedDataCache(self.file_cache, self.handlers)
        self.merged_cache = MergedDataCache(self.parsed_cache)
        # Data roots shared by every handle of this context, highest priority first.
        self.roots: List[str] = []
        self.handles: Dict[Any, Any] = {}
        self.generation = 0
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def ensure_usable(self) -> None:
        if self._disposed:
            raise ConfigurationError("This CacheContext has been disposed")

    def clear(self) -> None:
        self.generation += 1
        self.file_cache.clear()
        self.parsed_cache.clear()
        self.merged_cache.clear()
        log.debug(f"Locale data caches cleared (generation {self.generation})")

    def dispose(self) -> None:
        self.clear()
        self.handles.clear()
        self.roots = []
        self._disposed = True
