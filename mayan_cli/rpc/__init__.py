"""
Solana RPC access.
"""

from mayan_cli.rpc.client import SolanaRpc
from mayan_cli.rpc.models import SignatureInfo

__all__ = ["SignatureInfo", "SolanaRpc"]
