import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from strata.spec import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"


@dataclass
class StrataConfig:
    roots: List[Path] = field(default_factory=list)
    locale: Optional[str] = None
    sync: bool = True


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    """
    Finds the project root by searching upwards for common markers.
    Search priority: pyproject.toml -> .git
    """
    current_dir = (start_dir or Path.cwd()).resolve()
    while current_dir.parent != current_dir:
        if (current_dir / "pyproject.toml").is_file():
            return current_dir
        if (current_dir / ".git").is_dir():
            return current_dir
        current_dir = current_dir.parent
    return start_dir or Path.cwd()


def _read_tool_section(pyproject: Path) -> Dict[str, Any]:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject}: {e}") from e
    return data.get("tool", {}).get("strata", {})


def load_config_from_path(root: Path) -> StrataConfig:
    """
    Reads `[tool.strata]` from `<root>/pyproject.toml`.

    Relative roots are resolved against `root`. A missing file or section
    gives the default configuration.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return StrataConfig()

    section = _read_tool_section(pyproject)
    raw_roots = section.get("roots", [])
    if isinstance(raw_roots, str):
        raw_roots = [raw_roots]
    if not isinstance(raw_roots, list):
        raise ConfigurationError(f"tool.strata.roots in {pyproject} must be a list")

    roots = []
    for entry in raw_roots:
        path = Path(entry)
        roots.append(path if path.is_absolute() else root / path)

    locale = section.get("locale")
    sync = section.get("sync", True)
    if not isinstance(sync, bool):
        raise ConfigurationError(f"tool.strata.sync in {pyproject} must be a boolean")

    log.debug(f"Loaded configuration from {pyproject}: roots={roots}, locale={locale}")
    return StrataConfig(roots=roots, locale=locale, sync=sync)


def _normalize_env_locale(value: str) -> Optional[str]:
    # de_DE.UTF-8@euro -> de-DE
    value = value.split(".")[0].split("@")[0]
    if not value or value in ("C", "POSIX"):
        return None
    return value.replace("_", "-")


def resolve_locale(explicit: Optional[str] = None, default: str = DEFAULT_LOCALE) -> str:
    if explicit:
        return explicit

    # Priority 1: STRATA_LOCALE
    strata_locale = os.getenv("STRATA_LOCALE")
    if strata_locale:
        return strata_locale

    # Priority 2: System LANG
    system_lang = os.getenv("LANG")
    if system_lang:
        normalized = _normalize_env_locale(system_lang)
        if normalized:
            return normalized

    return default
