"""Simple logging setup - logs go to stderr so stdout stays clean for JSON output."""

import logging
import sys


def setup_logging(verbose: bool = False):
    """Setup logging to stderr. Use INFO when verbose, ERROR otherwise."""
    level = logging.INFO if verbose else logging.ERROR
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
