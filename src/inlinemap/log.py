"""Logging helper module."""

from logging import (
    DEBUG,
    WARNING,
    Logger,
    basicConfig,
    getLogger,
)
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inlinemap.args import Args


def init_logging(args: "Args") -> None:
    """Initialize logging for the CLI.

    Should be called once when the application starts. Logs go to stderr so
    that stdout stays reserved for the transformed code or extracted map.
    """
    basicConfig(
        level=WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.verbose:
        root_logger = getLogger()
        root_logger.setLevel(DEBUG)
        root_logger.debug("Debug logging enabled.")


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)
