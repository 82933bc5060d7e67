from .config import StrataConfig, find_project_root, load_config_from_path, resolve_locale
from .facade import (
    LocaleData,
    add_global_root,
    cache_data,
    check_cache,
    clear_global_roots,
    clear_locale_data,
    ensure_locale,
    get_default_context,
    get_global_roots,
    get_locale_data,
    remove_global_root,
    set_default_context,
)

__all__ = [
    "StrataConfig",
    "find_project_root",
    "load_config_from_path",
    "resolve_locale",
    "LocaleData",
    "add_global_root",
    "cache_data",
    "check_cache",
    "clear_global_roots",
    "clear_locale_data",
    "ensure_locale",
    "get_default_context",
    "get_global_roots",
    "get_locale_data",
    "remove_global_root",
    "set_default_context",
]
