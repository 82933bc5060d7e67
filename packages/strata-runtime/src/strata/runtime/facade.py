import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Sequence, Union

from strata.cache import CacheContext, MergeOptions, join_path
from strata.loaders import FileSystemLoader
from strata.locale import Locale, get_sublocales
from strata.spec import ConfigurationError, LocaleDataProtocol
from .config import resolve_locale

log = logging.getLogger(__name__)

# Used by the bundle helpers when no global root has been registered.
FALLBACK_ROOT = "./locale"

_default_context: Optional[CacheContext] = None


def get_default_context() -> CacheContext:
    """Returns the process-wide context, creating it on first use."""
    global _default_context
    if _default_context is None or _default_context.disposed:
        _default_context = CacheContext(FileSystemLoader())
    return _default_context


def set_default_context(context: CacheContext) -> None:
    global _default_context
    _default_context = context


def _ctx(context: Optional[CacheContext]) -> CacheContext:
    context = context or get_default_context()
    context.ensure_usable()
    return context


class LocaleData(LocaleDataProtocol):
    """
    A handle that loads merged locale data for one data path.

    The handle's roots are the context's global roots followed by its own
    path, so global roots override the data shipped with a package. A handle
    is either sync, in which case `load_data` returns a dict, or async, in
    which case it returns a coroutine; the two cannot be mixed.

    A sync handle over an async-only loader can only serve data that is
    already cached, for example after `ensure_locale` or `cache_data`.
    """

    def __init__(
        self,
        path: Union[str, Path],
        sync: bool = False,
        locale: Optional[str] = None,
        context: Optional[CacheContext] = None,
    ):
        if not path:
            raise ConfigurationError("LocaleData requires a data path")
        self.context = _ctx(context)
        self.path = str(path)
        self.sync = sync
        self.locale = locale

    def is_sync(self) -> bool:
        return self.sync

    def get_path(self) -> str:
        return self.path

    def get_roots(self) -> List[str]:
        return list(self.context.roots) + [self.path]

    def _target_locale(self, locale: Optional[str]) -> str:
        return Locale.parse(resolve_locale(locale or self.locale)).spec

    def load_data(
        self,
        basename: str,
        locale: Optional[str] = None,
        sync: Optional[bool] = None,
        most_specific: bool = False,
        return_one: bool = False,
        cross_roots: bool = False,
    ) -> Union[Dict[str, Any], Awaitable[Dict[str, Any]]]:
        if sync is not None and sync != self.sync:
            mode = "sync" if self.sync else "async"
            raise ConfigurationError(
                f"This LocaleData handle is {mode}; it cannot load "
                f"{'synchronously' if sync else 'asynchronously'}"
            )
        if not basename or not isinstance(basename, str):
            raise ConfigurationError("load_data requires a basename")

        self.context.ensure_usable()
        target = self._target_locale(locale)
        roots = self.get_roots()
        options = MergeOptions(
            most_specific=most_specific, return_one=return_one, cross_roots=cross_roots
        )
        log.debug(f"Loading {basename} for {target} from {roots}")
        merged_cache = self.context.merged_cache
        if self.sync:
            if not self.context.loader.supports_sync() and not check_cache(
                target, basename, roots=[self.path], context=self.context
            ):
                raise ConfigurationError(
                    f"Synchronous load of {basename} for {target} was requested, but "
                    f"{type(self.context.loader).__name__} only loads asynchronously "
                    "and the data is not cached"
                )
            # Fragments still missing from the cache make the loader raise
            # SyncNotSupportedError, which is a ConfigurationError too.
            return merged_cache.get_merged_sync(target, roots, basename, options)
        return merged_cache.get_merged(target, roots, basename, options)

    def get(self, basename: str, locale: Optional[str] = None, **options: Any) -> Any:
        return self.load_data(basename, locale=locale, **options)

    def __repr__(self) -> str:
        mode = "sync" if self.sync else "async"
        return f"<LocaleData path={self.path!r} {mode}>"


def get_locale_data(
    path: Union[str, Path],
    locale: Optional[str] = None,
    sync: bool = False,
    *,
    context: Optional[CacheContext] = None,
) -> LocaleData:
    """
    Returns the handle for (path, locale, sync), creating it the first time.
    Handles are remembered per context until the context is disposed.
    """
    if not path:
        raise ConfigurationError("get_locale_data requires a data path")
    context = _ctx(context)
    key = (str(path), locale, sync)
    handle = context.handles.get(key)
    if handle is None:
        handle = LocaleData(path, sync=sync, locale=locale, context=context)
        context.handles[key] = handle
    return handle


def clear_locale_data(context: Optional[CacheContext] = None) -> None:
    """Empties every cache layer. Handles and global roots are kept."""
    _ctx(context).clear()


# --- Global roots ---


def get_global_roots(context: Optional[CacheContext] = None) -> List[str]:
    return list(_ctx(context).roots)


def add_global_root(path: Any, context: Optional[CacheContext] = None) -> None:
    """Puts `path` in front of the global roots, giving it the highest priority."""
    if not isinstance(path, (str, Path)):
        return
    context = _ctx(context)
    path = str(path)
    if path in context.roots:
        return
    context.roots.insert(0, path)


def remove_global_root(path: Any, context: Optional[CacheContext] = None) -> None:
    if not isinstance(path, (str, Path)):
        return
    context = _ctx(context)
    if str(path) in context.roots:
        context.roots.remove(str(path))


def clear_global_roots(context: Optional[CacheContext] = None) -> None:
    _ctx(context).roots = []


# --- Whole-locale bundles ---


def _bundle_roots(context: CacheContext, extra: Optional[Sequence[Any]] = None) -> List[str]:
    roots = list(context.roots) + [str(r) for r in (extra or [])]
    return roots or [FALLBACK_ROOT]


def _bundle_path(root: str, sublocale: str) -> str:
    return join_path(root, f"{sublocale}.json")


def cache_data(
    bundle: Mapping[str, Any], root: Union[str, Path], context: Optional[CacheContext] = None
) -> int:
    """
    Stores a whole-locale bundle of the form {sublocale: {basename: data}}
    so it can be used without going through the loader. Returns the number
    of fragments stored.
    """
    if not isinstance(bundle, Mapping) or not root:
        return 0
    return _ctx(context).parsed_cache.store_bundle(bundle, str(root))


async def ensure_locale(
    locale: Union[str, Locale],
    roots: Optional[Sequence[Union[str, Path]]] = None,
    context: Optional[CacheContext] = None,
) -> bool:
    """
    Loads the bundle files `<root>/<sublocale>.json` for every sublocale of
    `locale` and stores their contents in the cache, so that later requests
    for that locale need no further loading.

    Returns True when data for the locale was loaded now or is already
    cached, False when no bundle exists for it.
    """
    if not isinstance(locale, (str, Locale)):
        raise ConfigurationError(f"Invalid locale for ensure_locale: {locale!r}")
    context = _ctx(context)
    chain = get_sublocales(locale)
    search_roots = _bundle_roots(context, roots)

    pending = [
        (root, _bundle_path(root, sublocale))
        for sublocale in chain
        for root in search_roots
        if not context.file_cache.is_loaded(_bundle_path(root, sublocale))
    ]

    loaded = False
    if pending:
        generation = context.generation
        results = await asyncio.gather(
            *(context.file_cache.load_file(path) for _, path in pending)
        )
        if generation != context.generation:
            log.debug(f"Cache cleared while ensuring {locale}; bundles not stored")
            return any(raw is not None for raw in results)
        for (root, path), raw in zip(pending, results):
            if raw is None:
                continue
            bundle = context.parsed_cache.decode(raw, path)
            if bundle and context.parsed_cache.store_bundle(bundle, root):
                loaded = True
    if loaded:
        return True

    return any(
        context.parsed_cache.has_any_data(root, sublocale)
        for sublocale in chain
        for root in search_roots
    )


def check_cache(
    locale: Any,
    basename: Optional[str] = None,
    roots: Optional[Sequence[Union[str, Path]]] = None,
    context: Optional[CacheContext] = None,
) -> bool:
    """
    True when data for a non-root sublocale of `locale` was already loaded,
    or is already known not to exist, so that a request will not need to go
    to the loader for it. Without a basename, any basename counts.
    """
    if not isinstance(locale, str) or (basename is not None and not isinstance(basename, str)):
        return False
    context = _ctx(context)
    search_roots = _bundle_roots(context, roots)
    parsed = context.parsed_cache
    return any(
        parsed.is_known(root, sublocale, basename)
        or context.file_cache.is_loaded(_bundle_path(root, sublocale))
        for sublocale in get_sublocales(locale)[1:]
        for root in search_roots
    )
