"""
Auction queries: state account decoding and bid history reconstruction.
"""

from mayan_cli.auction.bids import get_bid_history, parse_bid_transaction
from mayan_cli.auction.models import AuctionState, BidEntry
from mayan_cli.auction.resolver import resolve_auction_state_address
from mayan_cli.auction.state import decode_auction_state, get_and_parse_auction_state

__all__ = [
    "AuctionState",
    "BidEntry",
    "decode_auction_state",
    "get_and_parse_auction_state",
    "get_bid_history",
    "parse_bid_transaction",
    "resolve_auction_state_address",
]
