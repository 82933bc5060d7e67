from pathlib import Path
from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

# What a loader may hand back for a path: raw bytes or text from disk,
# an already-decoded mapping for bundled data, or None when nothing is there.
RawContent = Union[bytes, str, Mapping[str, Any]]


@runtime_checkable
class LoaderProtocol(Protocol):
    """
    Defines the contract for any component that can fetch raw locale data.

    `None` means "not found" and is a normal outcome. Transport failures
    must raise `LoaderError` instead.
    """

    def supports_sync(self) -> bool: ...

    def load_sync(self, path: str) -> Optional[RawContent]: ...

    def load_async(self, path: str) -> Awaitable[Optional[RawContent]]: ...


@runtime_checkable
class FileHandlerProtocol(Protocol):
    """Decodes the raw content of one fragment file into a mapping."""

    extension: str

    def match(self, path: Union[str, Path]) -> bool: ...

    def decode(self, content: Union[bytes, str], path: str) -> Dict[str, Any]: ...


class LocaleDataProtocol(Protocol):
    """
    A handle bound to a data root and an execution mode.
    `get` returns a dict in sync mode and an awaitable in async mode.
    """

    def is_sync(self) -> bool: ...

    def get_path(self) -> str: ...

    def get(self, basename: str, locale: Optional[str] = None, **options: Any) -> Any: ...
