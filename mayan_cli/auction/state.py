"""
Auction state account decoding.

Layout (little-endian, no padding, 137 bytes):
  bump u8 | hash [u8; 32] | initializer pubkey | close_epoch u64 |
  amount_out_min u64 | winner pubkey | amount_promised u64 |
  valid_from u64 | seq_msg u64

Some encodings prepend an 8-byte discriminator that the layout does not
define. Neither the account nor the program exposes a schema version, so a
layout change upstream would misparse silently; the constants below are the
only place that knows the shape.
"""

from __future__ import annotations

import struct

from solders.pubkey import Pubkey

from mayan_cli.auction.models import AuctionState
from mayan_cli.auction.resolver import resolve_auction_state_address
from mayan_cli.core.exceptions import AccountDecodeError
from mayan_cli.mayan_logging import get_logger
from mayan_cli.rpc.client import SolanaRpc
from mayan_cli.utils.wallet_utils import parse_address

logger = get_logger(__name__)

DISCRIMINATOR_LEN = 8
AUCTION_STATE_STRUCT = struct.Struct("<B32s32sQQ32sQQQ")
AUCTION_STATE_LEN = AUCTION_STATE_STRUCT.size  # 137


def _unpack_auction_state(data: bytes) -> AuctionState:
    """Decode exactly one AuctionState; any length other than 137 is an error."""
    if len(data) != AUCTION_STATE_LEN:
        raise ValueError(
            f"expected {AUCTION_STATE_LEN} bytes, got {len(data)}"
        )
    (
        bump,
        hash_,
        initializer,
        close_epoch,
        amount_out_min,
        winner,
        amount_promised,
        valid_from,
        seq_msg,
    ) = AUCTION_STATE_STRUCT.unpack(data)
    return AuctionState(
        bump=bump,
        hash=hash_,
        initializer=str(Pubkey(initializer)),
        close_epoch=close_epoch,
        amount_out_min=amount_out_min,
        winner=str(Pubkey(winner)),
        amount_promised=amount_promised,
        valid_from=valid_from,
        seq_msg=seq_msg,
    )


def decode_auction_state(data: bytes) -> AuctionState:
    """
    Decode account bytes, first skipping a discriminator, then from byte 0.
    """
    if len(data) >= DISCRIMINATOR_LEN:
        try:
            return _unpack_auction_state(data[DISCRIMINATOR_LEN:])
        except ValueError:
            logger.debug("auction_state_discriminator_skip_failed", size=len(data))
        try:
            return _unpack_auction_state(data)
        except ValueError as e:
            raise AccountDecodeError(
                "Failed to deserialize auction state data "
                f"(tried both with and without discriminator): {e}"
            ) from e
    try:
        return _unpack_auction_state(data)
    except ValueError as e:
        raise AccountDecodeError(f"Failed to deserialize auction state data: {e}") from e


def get_and_parse_auction_state(
    value: str,
    rpc_url: str,
    *,
    api_url: str | None = None,
    rpc: SolanaRpc | None = None,
) -> AuctionState:
    """Resolve value (address or order id), fetch the account and decode it."""
    address = resolve_auction_state_address(value, api_url=api_url)
    pubkey = parse_address(address)
    rpc = rpc or SolanaRpc(rpc_url)
    data = rpc.get_account_data(pubkey)
    state = decode_auction_state(data)
    logger.info("auction_state_decoded", address=address, seq_msg=state.seq_msg)
    return state
