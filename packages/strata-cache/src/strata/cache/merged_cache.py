import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from strata.locale import Locale, get_sublocales
from .merge import MergeOptions, merge_fragments
from .parsed_cache import ParsedDataCache

log = logging.getLogger(__name__)

MergedKey = Tuple[Tuple[str, ...], str, str, MergeOptions]


class MergedDataCache:
    """
    Caches the fully merged data per (roots, locale, basename, options).

    Fragments for every sublocale of the chain are collected from every root
    and then merged by `merge_fragments`, which is the same pure function in
    both modes. Only the collection step differs between sync and async.

    A hit returns the same dict that was handed out before, so callers must
    treat results as read-only. Cached fragments are never shared with a
    result, so a mutated result cannot leak into other merges.
    """

    def __init__(self, parsed_cache: ParsedDataCache):
        self.parsed_cache = parsed_cache
        self._merged: Dict[MergedKey, Dict[str, Any]] = {}
        self._generation = 0

    def _key(
        self,
        locale: Union[str, Locale, None],
        roots: Sequence[str],
        basename: str,
        options: MergeOptions,
    ) -> MergedKey:
        return (tuple(str(r) for r in roots), Locale.parse(locale).spec, basename, options)

    def get_merged_sync(
        self,
        locale: Union[str, Locale, None],
        roots: Sequence[str],
        basename: str,
        options: MergeOptions = MergeOptions(),
    ) -> Dict[str, Any]:
        key = self._key(locale, roots, basename, options)
        cached = self._merged.get(key)
        if cached is not None:
            log.debug(f"Merged cache hit: {basename} for {key[1]}")
            return cached

        layers = [
            [self.parsed_cache.get_fragment_sync(root, sublocale, basename) for root in roots]
            for sublocale in get_sublocales(locale)
        ]
        merged = merge_fragments(layers, options)
        self._merged[key] = merged
        return merged

    async def get_merged(
        self,
        locale: Union[str, Locale, None],
        roots: Sequence[str],
        basename: str,
        options: MergeOptions = MergeOptions(),
    ) -> Dict[str, Any]:
        key = self._key(locale, roots, basename, options)
        cached = self._merged.get(key)
        if cached is not None:
            log.debug(f"Merged cache hit: {basename} for {key[1]}")
            return cached

        generation = self._generation
        chain = get_sublocales(locale)
        results: List[Optional[Dict[str, Any]]] = await asyncio.gather(
            *(
                self.parsed_cache.get_fragment(root, sublocale, basename)
                for sublocale in chain
                for root in roots
            )
        )
        width = len(roots)
        layers = [results[i * width : (i + 1) * width] for i in range(len(chain))]
        merged = merge_fragments(layers, options)

        if generation != self._generation:
            log.debug(f"Cache cleared while merging {basename}; result not cached")
            return merged
        # Another coroutine may have finished the same key first; keep the
        # object already handed out so repeated reads stay identical.
        return self._merged.setdefault(key, merged)

    def has_merged_data(
        self,
        locale: Union[str, Locale, None],
        roots: Sequence[str],
        basename: str,
        options: MergeOptions = MergeOptions(),
    ) -> bool:
        return self._key(locale, roots, basename, options) in self._merged

    def clear(self) -> None:
        log.debug("Merged data cache cleared")
        self._generation += 1
        self._merged = {}

    def size(self) -> int:
        return len(self._merged)
