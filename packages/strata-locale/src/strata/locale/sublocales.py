from typing import List, Optional, Union

from .locale import Locale, ROOT, UNDETERMINED


def _join(*parts: Optional[str]) -> Optional[str]:
    if not all(parts):
        return None
    return "-".join(parts)  # type: ignore[arg-type]


def get_sublocales(locale: Union[str, Locale, None]) -> List[str]:
    """
    Expands a locale into its chain of sublocales, least specific first.

    The chain always starts with "root". Region data is reachable through
    "und-<REGION>", meaning "any language in this region", so that data for
    a region can be shared by every language spoken there:

        >>> get_sublocales("en-US")
        ['root', 'en', 'und-US', 'en-US']

    Malformed input yields ["root"].
    """
    loc = Locale.parse(locale)
    lang = loc.language if loc.has_language() else None
    script, region, variant = loc.script, loc.region, loc.variant

    candidates = [
        lang,
        _join(UNDETERMINED, region),
        _join(lang, script),
        _join(lang, region),
        _join(lang, variant),
        _join(UNDETERMINED, region, variant),
        _join(lang, script, region),
        _join(lang, script, variant),
        _join(lang, region, variant),
        _join(lang, script, region, variant),
    ]

    chain = [ROOT]
    for candidate in candidates:
        if candidate and candidate not in chain:
            chain.append(candidate)
    return chain


resolve_chain = get_sublocales


def sublocale_dir(sublocale: str) -> str:
    """Maps a sublocale to its relative directory: "en-US" -> "en/US", "root" -> ""."""
    if sublocale == ROOT:
        return ""
    return sublocale.replace("-", "/")


def get_loc_files(locale: Union[str, Locale, None], filename: str) -> List[str]:
    """
    Lists the relative paths of a fragment file for every sublocale of a locale,
    in chain order: "info.json", "en/info.json", "und/US/info.json", ...
    """
    paths = []
    for sublocale in get_sublocales(locale):
        directory = sublocale_dir(sublocale)
        paths.append(f"{directory}/{filename}" if directory else filename)
    return paths
