"""Explorer API response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mayan_cli.core.exceptions import ApiDecodeError


@dataclass(frozen=True)
class OrderResponse:
    """Subset of GET /v3/swap/order-id/{orderId} used by the CLI."""

    auction_state_addr: str
    id: str | None = None
    status: str | None = None

    @classmethod
    def from_json(cls, body: Any) -> "OrderResponse":
        if not isinstance(body, dict):
            raise ApiDecodeError("Failed to parse JSON response: expected an object")
        addr = body.get("auctionStateAddr")
        if not isinstance(addr, str):
            raise ApiDecodeError("Failed to parse JSON response: missing auctionStateAddr")
        order_id = body.get("id")
        status = body.get("status")
        return cls(
            auction_state_addr=addr,
            id=str(order_id) if order_id is not None else None,
            status=str(status) if status is not None else None,
        )
