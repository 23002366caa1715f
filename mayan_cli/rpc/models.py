"""Data models for Solana RPC results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SignatureInfo:
    """
    Normalized transaction signature info from getSignaturesForAddress.
    """

    signature: str
    slot: int
    err: Any  # None if success
    block_time: int | None
    memo: str | None = None
    confirmation_status: str | None = None

    @classmethod
    def from_rpc_item(cls, item: Any) -> "SignatureInfo":
        """Build from a solders RpcConfirmedTransactionStatusWithSignature or a JSON dict."""
        if isinstance(item, dict):
            return cls(
                signature=str(item["signature"]),
                slot=int(item["slot"]),
                err=item.get("err"),
                block_time=item.get("blockTime"),
                memo=item.get("memo"),
                confirmation_status=item.get("confirmationStatus"),
            )
        status = getattr(item, "confirmation_status", None)
        return cls(
            signature=str(item.signature),
            slot=int(item.slot),
            err=getattr(item, "err", None),
            block_time=getattr(item, "block_time", None),
            memo=getattr(item, "memo", None),
            confirmation_status=str(status) if status is not None else None,
        )
