"""Root logger setup for the CLI.

Logs go to stderr so they never mix with the selected PR on stdout.
WARNING is the default: skipped search items and errors only. INFO
(or --verbose) adds the login and result count, DEBUG adds requests,
commands and temporary files.
"""

import logging
import sys
from typing import TextIO

from prpicker.config import LoggingConfig

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(name: str, verbose: bool = False) -> int:
    """Level number for a configured name; unknown names mean WARNING.

    verbose lowers the result to INFO but never raises a DEBUG setting.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbose:
        level = min(level, logging.INFO)
    return level


def setup_logging(config: LoggingConfig, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Configure root logger."""
    logging.basicConfig(
        level=resolve_level(config.level, verbose),
        format=config.format or DEFAULT_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
