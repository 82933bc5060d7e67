from .merge import MergeOptions, merge, merge_fragments, select_fragments
from .file_cache import FileCache
from .parsed_cache import ParsedDataCache, join_path
from .merged_cache import MergedDataCache
from .context import CacheContext

__all__ = [
    "MergeOptions",
    "merge",
    "merge_fragments",
    "select_fragments",
    "FileCache",
    "ParsedDataCache",
    "join_path",
    "MergedDataCache",
    "CacheContext",
]
