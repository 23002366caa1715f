"""
Configuration management for mayan-utils.

Loads settings from environment variables and optional .env files.
"""

from mayan_cli.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
