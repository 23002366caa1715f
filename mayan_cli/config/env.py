"""
Environment variable loading for mayan-utils.

- SOLANA_RPC_URL: RPC endpoint (default: public mainnet-beta endpoint)
- MAYAN_API_URL: explorer REST API base URL
- LOG_LEVEL / LOG_FORMAT: log level and rendering, applied by the CLI at startup
- Loads .env from the working directory and the project root when available.
  Real environment variables always win over .env values.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is mayan_cli/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_MAYAN_API_URL = "https://explorer-api.mayan.finance"


def load_mayan_env() -> None:
    """Load .env files. Safe to call multiple times."""
    load_dotenv(Path.cwd() / ".env")
    load_dotenv(_ENV_PATH)


def get_solana_rpc_url() -> str:
    """
    Resolve Solana RPC URL from env.
    Order: SOLANA_RPC_URL > mainnet-beta default.
    """
    load_mayan_env()
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    return url or MAINNET_RPC_URL


def get_mayan_api_url() -> str:
    """Return MAYAN_API_URL without a trailing slash, or the public explorer API."""
    load_mayan_env()
    url = (os.getenv("MAYAN_API_URL") or "").strip()
    return (url or DEFAULT_MAYAN_API_URL).rstrip("/")
