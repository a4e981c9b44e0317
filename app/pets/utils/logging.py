"""Logging setup for the pets CLI.

Library modules only create loggers; the CLI decides where records go.
"""

import logging

from rich.logging import RichHandler

from pets.utils.formatting import err_console


def get_log_level(debug: bool) -> int:
    """Return DEBUG when debugging, INFO otherwise."""
    return logging.DEBUG if debug else logging.INFO


def setup_logging(debug: bool = False) -> None:
    """Route all log records to stderr through Rich.

    Calling it again replaces the previous handler.

    Args:
        debug: Log at DEBUG level instead of INFO.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_path=debug,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(get_log_level(debug))
