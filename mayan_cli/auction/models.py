"""
Data models for auction queries.

AuctionState mirrors the on-chain account layout; BidEntry is one bid
recovered from the auction's transaction history. Signature listing items
are modeled in mayan_cli.rpc.models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AuctionState:
    """Decoded auction state account. Pubkeys are base58 strings."""

    bump: int
    hash: bytes
    initializer: str
    close_epoch: int
    amount_out_min: int
    winner: str
    amount_promised: int
    valid_from: int
    seq_msg: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "bump": self.bump,
            "hash": self.hash.hex(),
            "initializer": self.initializer,
            "close_epoch": self.close_epoch,
            "amount_out_min": self.amount_out_min,
            "winner": self.winner,
            "amount_promised": self.amount_promised,
            "valid_from": self.valid_from,
            "seq_msg": self.seq_msg,
        }


@dataclass(frozen=True)
class BidEntry:
    """One bid transaction against an auction state account."""

    signature: str
    bidder: str
    bid_amount: int
    """Trailing u64 of the bid instruction data; 0 when it could not be read."""
    slot: int
    timestamp: int | None
    """Block time (unix seconds) from the signature listing; None if unknown."""
    failed: bool
