"""
Structured logging for mayan-utils.

Use get_logger() in every module; logs go to stderr.
"""

from mayan_cli.mayan_logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
