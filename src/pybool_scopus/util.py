"""
Utility functions for pybool_scopus.
"""

import logging

#: Format of log lines written by the command line interface.
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%m-%d %H:%M:%S"


def configure_logging(level: str = "WARNING") -> None:
    """
    Send pybool_scopus log records at or above `level` (e.g., INFO, DEBUG) to stderr.
    """
    resolved_level = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger("pybool_scopus").setLevel(resolved_level)
