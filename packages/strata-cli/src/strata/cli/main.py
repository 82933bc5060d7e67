import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from strata.cache import CacheContext
from strata.loaders import FileSystemLoader, JsonHandler, YamlHandler
from strata.locale import get_sublocales
from strata.runtime import (
    add_global_root,
    find_project_root,
    get_locale_data,
    load_config_from_path,
    resolve_locale,
)
from strata.spec import LocaleDataError
from .rendering import install_cli_logging

app = typer.Typer(
    name="strata",
    help="Inspect locale fallback chains and merged locale data.",
    no_args_is_help=True,
)


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@app.callback()
def main(
    loglevel: LogLevel = typer.Option(
        LogLevel.WARNING,
        "--loglevel",
        case_sensitive=False,
        help="Minimum level of log messages to show.",
    ),
):
    install_cli_logging(getattr(logging, loglevel.value.upper()))


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command()
def chain(locale: str = typer.Argument(..., help="Locale spec, e.g. en-US.")):
    """Print the sublocale chain for LOCALE, least specific first."""
    for sublocale in get_sublocales(locale):
        typer.echo(sublocale)


@app.command()
def show(
    basename: str = typer.Argument(..., help="Data category to load, e.g. 'info'."),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Target locale."),
    paths: Optional[List[Path]] = typer.Option(
        None,
        "--path",
        "-p",
        help="Data root. Repeatable; earlier roots override later ones.",
    ),
    use_async: bool = typer.Option(False, "--async", help="Load through the async path."),
    most_specific: bool = typer.Option(
        False, "--most-specific", help="Only return the most specific fragment."
    ),
    return_one: bool = typer.Option(
        False, "--return-one", help="Only return the least specific fragment."
    ),
    cross_roots: bool = typer.Option(
        False, "--cross-roots", help="Merge fragments from every root."
    ),
):
    """Print the merged data for BASENAME as JSON."""
    try:
        config = load_config_from_path(find_project_root())
    except LocaleDataError as e:
        _fail(f"Error: {e}")

    roots = [str(p) for p in (paths or config.roots)]
    if not roots:
        _fail("No data roots given. Use --path or set tool.strata.roots in pyproject.toml.")

    context = CacheContext(
        FileSystemLoader(sync=not use_async), handlers=[JsonHandler(), YamlHandler()]
    )
    # The last root is the handle's own path; the others override it in order.
    for root in reversed(roots[:-1]):
        add_global_root(root, context=context)

    options = dict(most_specific=most_specific, return_one=return_one, cross_roots=cross_roots)
    try:
        target = resolve_locale(locale or config.locale)
        handle = get_locale_data(roots[-1], locale=target, sync=not use_async, context=context)
        if use_async:
            data = asyncio.run(handle.load_data(basename, **options))
        else:
            data = handle.load_data(basename, **options)
    except LocaleDataError as e:
        _fail(f"Error: {e}")
    finally:
        context.dispose()

    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
