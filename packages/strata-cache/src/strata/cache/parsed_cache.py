import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from strata.locale import Locale, ROOT, sublocale_dir
from strata.spec import DecodeError, FileHandlerProtocol, RawContent
from .file_cache import FileCache

log = logging.getLogger(__name__)

ParsedKey = Tuple[str, str, str]


def join_path(root: str, *parts: str) -> str:
    """Joins path parts with "/", skipping empty ones."""
    pieces = [str(root).rstrip("/")] + [p.strip("/") for p in parts if p]
    return "/".join(pieces)


def normalize_sublocale(sublocale: Optional[str]) -> str:
    if not sublocale:
        return ROOT
    return Locale.parse(sublocale).spec


class ParsedDataCache:
    """
    Caches decoded fragments per (root, sublocale, basename).

    A fragment is looked up at `<root>/<basename><ext>` for the root locale
    and `<root>/<sub>/<locale>/<basename><ext>` for any other sublocale, trying
    each handler's extension in order. Fragments that do not exist, or that
    fail to decode, are cached as None.
    """

    def __init__(self, file_cache: FileCache, handlers: Sequence[FileHandlerProtocol]):
        self.file_cache = file_cache
        self.handlers = list(handlers)
        self._data: Dict[ParsedKey, Optional[Dict[str, Any]]] = {}
        self._generation = 0

    def _key(self, root: str, sublocale: str, basename: str) -> ParsedKey:
        return (str(root), normalize_sublocale(sublocale), basename)

    def candidate_paths(
        self, root: str, sublocale: str, basename: str
    ) -> List[Tuple[str, FileHandlerProtocol]]:
        directory = sublocale_dir(normalize_sublocale(sublocale))
        return [
            (join_path(root, directory, f"{basename}{handler.extension}"), handler)
            for handler in self.handlers
        ]

    def decode(
        self, raw: RawContent, path: str, handler: Optional[FileHandlerProtocol] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Turns raw loader output into a fragment this cache owns.
        Returns None, after logging a warning, when the content is unusable.
        """
        if isinstance(raw, Mapping):
            return copy.deepcopy(dict(raw))
        if handler is None:
            handler = next((h for h in self.handlers if h.match(path)), None)
        if handler is None or not isinstance(raw, (bytes, str)):
            log.warning(f"Ignoring locale data in {path}: unsupported content")
            return None
        try:
            return handler.decode(raw, path)
        except DecodeError as e:
            log.warning(f"Ignoring malformed locale data: {e}")
            return None

    def get_fragment_sync(
        self, root: str, sublocale: str, basename: str
    ) -> Optional[Dict[str, Any]]:
        key = self._key(root, sublocale, basename)
        if key in self._data:
            return self._data[key]

        fragment = None
        for path, handler in self.candidate_paths(root, sublocale, basename):
            raw = self.file_cache.load_file_sync(path)
            if raw is not None:
                fragment = self.decode(raw, path, handler)
                break

        self._data[key] = fragment
        return fragment

    async def get_fragment(
        self, root: str, sublocale: str, basename: str
    ) -> Optional[Dict[str, Any]]:
        key = self._key(root, sublocale, basename)
        if key in self._data:
            return self._data[key]

        generation = self._generation
        fragment = None
        for path, handler in self.candidate_paths(root, sublocale, basename):
            raw = await self.file_cache.load_file(path)
            if raw is not None:
                fragment = self.decode(raw, path, handler)
                break

        if generation == self._generation:
            self._data[key] = fragment
        return fragment

    def store_data(
        self, root: str, sublocale: str, basename: str, data: Optional[Mapping[str, Any]]
    ) -> None:
        if not basename:
            log.info("Attempt to store locale data with no basename")
            return
        self._data[self._key(root, sublocale, basename)] = (
            copy.deepcopy(dict(data)) if data is not None else None
        )

    def store_bundle(self, bundle: Mapping[str, Any], root: str) -> int:
        """
        Stores a whole-locale bundle of the form {sublocale: {basename: data}}.
        Returns how many fragments were stored.
        """
        stored = 0
        for sublocale, basenames in bundle.items():
            if not isinstance(basenames, Mapping):
                continue
            for basename, data in basenames.items():
                if isinstance(data, Mapping):
                    self.store_data(root, sublocale, basename, data)
                    stored += 1
        return stored

    def get_cached_data(
        self, root: str, sublocale: str, basename: str
    ) -> Optional[Dict[str, Any]]:
        return self._data.get(self._key(root, sublocale, basename))

    def has_parsed_data(self, root: str, sublocale: str, basename: str) -> bool:
        return self.get_cached_data(root, sublocale, basename) is not None

    def is_known(self, root: str, sublocale: str, basename: Optional[str] = None) -> bool:
        """
        True when the cache knows about the fragment, either because it
        holds data or because loading it already found nothing. Without a
        basename, any basename for the sublocale counts.
        """
        if basename:
            return self._key(root, sublocale, basename) in self._data
        prefix = (str(root), normalize_sublocale(sublocale))
        return any(key[:2] == prefix for key in self._data)

    def has_any_data(self, root: str, sublocale: str) -> bool:
        prefix = (str(root), normalize_sublocale(sublocale))
        return any(key[:2] == prefix and value for key, value in self._data.items())

    def remove_parsed_data(self, root: str, sublocale: str, basename: str) -> None:
        self._data.pop(self._key(root, sublocale, basename), None)

    def clear(self) -> None:
        log.debug("Parsed data cache cleared")
        self._generation += 1
        self._data = {}

    def size(self) -> int:
        return len(self._data)
