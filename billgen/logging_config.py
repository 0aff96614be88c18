"""Logging setup shared by every billgen module.

Modules call ``get_logger(__name__)``; the CLI calls ``configure_logging``
once to attach a rich handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "billgen"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``billgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured logger instance.
    """
    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Configure the ``billgen`` logger hierarchy.

    Args:
        level: Logging level name or number.
        use_rich: Use ``RichHandler`` instead of a plain stream handler.
    """
    global _configured

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    if _configured:
        return

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.propagate = False
    _configured = True
