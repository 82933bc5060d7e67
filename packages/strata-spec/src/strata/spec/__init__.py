from .protocols import (
    RawContent,
    LoaderProtocol,
    FileHandlerProtocol,
    LocaleDataProtocol,
)
from .exceptions import (
    LocaleDataError,
    ConfigurationError,
    SyncNotSupportedError,
    LoaderError,
    DecodeError,
)

__all__ = [
    "RawContent",
    "LoaderProtocol",
    "FileHandlerProtocol",
    "LocaleDataProtocol",
    "LocaleDataError",
    "ConfigurationError",
    "SyncNotSupportedError",
    "LoaderError",
    "DecodeError",
]
