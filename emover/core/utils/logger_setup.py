"""
Logging setup for emover.

Modules log event names (``FILE_SKIPPED_BINARY``) with structured fields
passed through ``extra``. The formatter below renders those fields as
``key=value`` pairs after the event name so they are visible on the console.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "emover"

# Attributes every LogRecord carries; anything else came from ``extra``
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Formatter appending ``extra`` fields to the event message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if not fields:
            return base
        rendered = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{base} {rendered}"


def verbosity_to_level(verbosity: int) -> int:
    """Map the CLI ``-v`` count to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def setup_logger(verbosity: int = 0, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the ``emover`` logger hierarchy.

    Installs a single stream handler (stderr by default) so repeated calls,
    e.g. from several CLI invocations in one test process, do not stack
    handlers.

    Args:
        verbosity: Number of ``-v`` flags given on the command line
        stream: Target stream, defaults to ``sys.stderr``

    Returns:
        The configured ``emover`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(verbosity_to_level(verbosity))
    logger.propagate = False
    return logger
