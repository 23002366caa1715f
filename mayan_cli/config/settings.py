"""
Application settings resolved from environment variables and .env files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from mayan_cli.config.env import get_mayan_api_url, get_solana_rpc_url, load_mayan_env


@dataclass(frozen=True)
class Settings:
    """Configuration for one CLI invocation."""

    solana_rpc_url: str
    mayan_api_url: str
    log_level: str
    log_format: str


def get_settings() -> Settings:
    """
    Return the current application settings.

    Returns:
        Settings with the RPC endpoint, explorer API base URL and log options.
    """
    load_mayan_env()
    return Settings(
        solana_rpc_url=get_solana_rpc_url(),
        mayan_api_url=get_mayan_api_url(),
        log_level=(os.getenv("LOG_LEVEL") or "WARNING").strip().upper(),
        log_format=(os.getenv("LOG_FORMAT") or "console").strip().lower(),
    )
