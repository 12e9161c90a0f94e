"""
Logging setup for the wiki_racer command line.
Search progress goes to stderr so that stdout only carries the result.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

# Loggers of HTTP libraries that log every request
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO") -> None:
    """Send wiki_racer logs at ``level`` and above to stderr through Rich."""
    handler = RichHandler(console=Console(file=sys.stderr), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    # force=True replaces handlers left by an earlier call or by test runners
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
