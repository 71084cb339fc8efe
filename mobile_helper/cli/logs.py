"""
Logging output for the mobile-helper CLI.
"""

import logging

from rich.markup import escape

from mobile_helper.console import console

LEVEL_STYLES = {
    logging.DEBUG: "grey50",
    logging.INFO: "default",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}


class LogHandler(logging.Handler):
    """Writes log records to the shared rich console."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            style = LEVEL_STYLES.get(record.levelno, "default")
            console.print(f"[{style}]{escape(message)}[/]")
        except Exception:
            self.handleError(record)


def configure_logging(debug: bool) -> LogHandler:
    logger = logging.getLogger("mobile_helper")
    logger.handlers = []

    handler = LogHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s %(name)s: %(message)s")
        if debug
        else logging.Formatter("%(message)s")
    )
    logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    return handler
