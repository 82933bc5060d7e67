from .locale import Locale, ROOT, UNDETERMINED
from .sublocales import get_sublocales, resolve_chain, get_loc_files, sublocale_dir

__all__ = [
    "Locale",
    "ROOT",
    "UNDETERMINED",
    "get_sublocales",
    "resolve_chain",
    "get_loc_files",
    "sublocale_dir",
]
