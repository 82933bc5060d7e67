import asyncio
import logging
from pathlib import Path
from typing import Optional

from strata.spec import LoaderError, LoaderProtocol, SyncNotSupportedError

log = logging.getLogger(__name__)


class FileSystemLoader(LoaderProtocol):
    """
    Reads locale data files from the local file system.

    Missing files are reported as None. Any other I/O failure, such as a
    permission problem, raises LoaderError because it usually points at a
    broken installation rather than at data that is simply not there.
    """

    def __init__(self, sync: bool = True):
        self._sync = sync

    def supports_sync(self) -> bool:
        return self._sync

    def _read(self, path: str) -> Optional[bytes]:
        try:
            data = Path(path).read_bytes()
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            log.debug(f"Not found: {path}")
            return None
        except OSError as e:
            raise LoaderError(f"Could not read {path}: {e}", path=path) from e
        log.debug(f"Loaded {path} ({len(data)} bytes)")
        return data

    def load_sync(self, path: str) -> Optional[bytes]:
        if not self._sync:
            raise SyncNotSupportedError(
                f"{type(self).__name__} was created without synchronous support"
            )
        return self._read(path)

    async def load_async(self, path: str) -> Optional[bytes]:
        return await asyncio.to_thread(self._read, path)
