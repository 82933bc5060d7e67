from typing import Any, Dict, Optional

from strata.spec import LoaderProtocol, RawContent, SyncNotSupportedError


class MemoryLoader(LoaderProtocol):
    """
    Serves locale data from an in-memory mapping of path -> content.

    Content may be bytes, text, or an already-decoded mapping, which is how
    data embedded in an application bundle is usually handed over.
    """

    def __init__(self, files: Optional[Dict[str, Any]] = None, sync: bool = True):
        self._files: Dict[str, RawContent] = dict(files or {})
        self._sync = sync

    def supports_sync(self) -> bool:
        return self._sync

    def add_file(self, path: str, content: RawContent) -> None:
        self._files[path] = content

    def remove_file(self, path: str) -> None:
        self._files.pop(path, None)

    def load_sync(self, path: str) -> Optional[RawContent]:
        if not self._sync:
            raise SyncNotSupportedError(
                f"{type(self).__name__} is async-only and cannot load {path} synchronously"
            )
        return self._files.get(path)

    async def load_async(self, path: str) -> Optional[RawContent]:
        return self._files.get(path)
