import logging

import typer

LEVEL_COLORS = {
    logging.WARNING: typer.colors.YELLOW,
    logging.ERROR: typer.colors.RED,
    logging.CRITICAL: typer.colors.RED,
}


class CliLogHandler(logging.Handler):
    """
    Renders log records to the command line using Typer for colored output.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        typer.secho(message, fg=LEVEL_COLORS.get(record.levelno))


def install_cli_logging(level: int) -> CliLogHandler:
    """Routes `strata.*` log records to the terminal at the given level."""
    logger = logging.getLogger("strata")
    for existing in [h for h in logger.handlers if isinstance(h, CliLogHandler)]:
        logger.removeHandler(existing)

    handler = CliLogHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
