"""
Solana RPC access through solana-py.

A fresh Client per command invocation; calls are issued one at a time.
Transport and RPC failures surface as RpcError with the failing step in
the message. Transactions are returned as plain dicts in the JSON-RPC wire
shape so the bid parser does not depend on solders class layout.
"""

from __future__ import annotations

import json
from typing import Any

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey
from solders.signature import Signature

from mayan_cli.core.exceptions import RpcError
from mayan_cli.mayan_logging import get_logger
from mayan_cli.rpc.models import SignatureInfo

logger = get_logger(__name__)

_RPC_ERRORS = (SolanaRpcException, RPCException)


def _describe_rpc_error(e: Exception) -> str:
    """solana-py's SolanaRpcException has an empty str(); use error_msg and the cause."""
    msg = getattr(e, "error_msg", None) or str(e) or type(e).__name__
    cause = e.__cause__
    if cause is not None and str(cause) not in msg:
        msg = f"{msg}: {cause}"
    return msg


def _get_resp_value(resp: Any, step: str) -> Any:
    """Return resp.value; raise RpcError when resp is a JSON-RPC error object."""
    if resp is None:
        return None
    if not hasattr(resp, "value") and hasattr(resp, "message"):
        raise RpcError(
            f"{step}: Solana RPC error: {resp.message} (code={getattr(resp, 'code', None)})"
        )
    v = getattr(resp, "value", None)
    if v is not None:
        return v
    if hasattr(resp, "result"):
        return getattr(resp.result, "value", None)
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    """Turn a solders response value into its JSON-RPC dict form."""
    if isinstance(value, dict):
        return value
    return json.loads(value.to_json())


class SolanaRpc:
    """Thin wrapper around solana.rpc.api.Client for the three reads the CLI needs."""

    def __init__(self, rpc_url: str, client: Client | None = None) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self.rpc_url = rpc_url
        self._client = client or Client(rpc_url)

    def get_account_data(self, address: Pubkey) -> bytes:
        """Raw account data bytes for address."""
        try:
            resp = self._client.get_account_info(address)
        except _RPC_ERRORS as e:
            raise RpcError(f"Failed to fetch account data from Solana: {_describe_rpc_error(e)}") from e
        account = _get_resp_value(resp, "Failed to fetch account data from Solana")
        if account is None:
            raise RpcError(f"Failed to fetch account data from Solana: account {address} not found")
        data = bytes(account.data)
        logger.info("account_data_fetched", address=str(address), size=len(data))
        return data

    def get_signatures(self, address: Pubkey, limit: int) -> list[SignatureInfo]:
        """Most-recent-first signatures for address, at most limit of them."""
        try:
            resp = self._client.get_signatures_for_address(address, limit=limit)
        except _RPC_ERRORS as e:
            raise RpcError(f"Failed to get signatures for auction state address: {_describe_rpc_error(e)}") from e
        items = _get_resp_value(resp, "Failed to get signatures for auction state address") or []
        infos = [SignatureInfo.from_rpc_item(item) for item in items]
        return infos[:limit]

    def get_parsed_transaction(self, signature: str) -> dict[str, Any]:
        """
        getTransaction with jsonParsed encoding, max supported version 0,
        confirmed commitment. Raises RpcError if the transaction is unknown.
        """
        try:
            sig = Signature.from_string(signature)
        except ValueError as e:
            raise RpcError(f"Invalid transaction signature {signature!r}") from e
        try:
            resp = self._client.get_transaction(
                sig,
                encoding="jsonParsed",
                commitment=Confirmed,
                max_supported_transaction_version=0,
            )
        except _RPC_ERRORS as e:
            raise RpcError(f"Failed to fetch transaction {signature}: {_describe_rpc_error(e)}") from e
        value = _get_resp_value(resp, f"Failed to fetch transaction {signature}")
        if value is None:
            raise RpcError(f"Failed to fetch transaction {signature}: not found")
        return _as_dict(value)
