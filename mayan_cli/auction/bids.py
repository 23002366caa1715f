"""
Bid history reconstruction from an auction state account's transactions.

A transaction counts as a bid when one of its log messages contains
BID_LOG_MARKER. The bid instruction is assumed to sit at a fixed position
in the top-level instruction list with the bid amount as the trailing u64
of its data; nothing on chain negotiates that shape.

Transactions are fetched one by one. Any RPC failure aborts the whole
reconstruction; shape mismatches in a single transaction only skip it.
"""

from __future__ import annotations

from typing import Any

from mayan_cli.auction.models import BidEntry
from mayan_cli.codec.conversions import base58_decode
from mayan_cli.core.exceptions import InputFormatError, RpcError
from mayan_cli.mayan_logging import get_logger
from mayan_cli.rpc.client import SolanaRpc
from mayan_cli.rpc.models import SignatureInfo
from mayan_cli.utils.wallet_utils import parse_address

logger = get_logger(__name__)

SIGNATURES_LIMIT = 100
BID_LOG_MARKER = "Program log: Instruction: Bid"
BID_INSTRUCTION_INDEX = 2
BID_AMOUNT_LEN = 8


def _split_transaction(raw: dict[str, Any]) -> tuple[Any, dict[str, Any] | None]:
    """
    Return (encoded transaction, meta) from a getTransaction result.

    Accepts the flat wire shape ({"transaction", "meta", ...}) and the nested
    shape some serializers emit ({"transaction": {"transaction", "meta"}}).
    """
    if "meta" in raw:
        meta = raw.get("meta")
        return raw.get("transaction"), meta if isinstance(meta, dict) else None
    inner = raw.get("transaction")
    if isinstance(inner, dict) and "meta" in inner:
        meta = inner.get("meta")
        return inner.get("transaction"), meta if isinstance(meta, dict) else None
    return inner, None


def has_bid_log(meta: dict[str, Any]) -> bool:
    logs = meta.get("logMessages") or []
    return any(BID_LOG_MARKER in log for log in logs)


def _parsed_message(tx: Any) -> dict[str, Any] | None:
    """The jsonParsed message of tx, or None for binary / raw encodings."""
    if not isinstance(tx, dict):
        return None
    message = tx.get("message")
    if not isinstance(message, dict):
        return None
    keys = message.get("accountKeys")
    if not keys or not all(isinstance(k, dict) and "pubkey" in k for k in keys):
        return None
    return message


def _is_partially_decoded(ix: Any) -> bool:
    return (
        isinstance(ix, dict)
        and "parsed" not in ix
        and isinstance(ix.get("data"), str)
        and "programId" in ix
    )


def decode_bid_amount(data_b58: str) -> int:
    """Trailing little-endian u64 of base58 instruction data; 0 if unreadable."""
    try:
        data = base58_decode(data_b58)
    except InputFormatError:
        logger.warning("bid_amount_undecodable", reason="invalid base58")
        return 0
    if len(data) < BID_AMOUNT_LEN:
        logger.warning("bid_amount_undecodable", reason="data too short", size=len(data))
        return 0
    return int.from_bytes(data[-BID_AMOUNT_LEN:], "little")


def parse_bid_transaction(sig_info: SignatureInfo, raw: dict[str, Any]) -> BidEntry | None:
    """
    Build a BidEntry from one getTransaction result, or None if the
    transaction is not a bid in the expected shape.
    """
    tx, meta = _split_transaction(raw)
    if meta is None:
        raise RpcError(f"Failed to get transaction meta for {sig_info.signature}")

    if not has_bid_log(meta):
        return None

    failed = meta.get("err") is not None

    message = _parsed_message(tx)
    if message is None:
        logger.debug("bid_transaction_skipped", signature=sig_info.signature, reason="unparsed encoding")
        return None

    bidder = str(message["accountKeys"][0]["pubkey"])

    instructions = message.get("instructions") or []
    ix = instructions[BID_INSTRUCTION_INDEX] if len(instructions) > BID_INSTRUCTION_INDEX else None
    if not _is_partially_decoded(ix):
        logger.warning(
            "bid_transaction_skipped",
            signature=sig_info.signature,
            reason="Not a parsed instruction",
        )
        return None

    return BidEntry(
        signature=sig_info.signature,
        bidder=bidder,
        bid_amount=decode_bid_amount(ix["data"]),
        slot=sig_info.slot,
        timestamp=sig_info.block_time,
        failed=failed,
    )


def sort_bids(bids: list[BidEntry]) -> list[BidEntry]:
    """Chronological order; bids in the same slot keep discovery order."""
    return sorted(bids, key=lambda b: b.slot)


def get_bid_history(
    address: str,
    rpc_url: str,
    *,
    rpc: SolanaRpc | None = None,
    limit: int = SIGNATURES_LIMIT,
) -> list[BidEntry]:
    """Reconstruct the bids placed against an auction state address."""
    pubkey = parse_address(address)
    rpc = rpc or SolanaRpc(rpc_url)

    signatures = rpc.get_signatures(pubkey, limit)
    logger.info("bid_signatures_listed", address=address, signature_count=len(signatures))

    bids: list[BidEntry] = []
    for sig_info in signatures[:limit]:
        raw = rpc.get_parsed_transaction(sig_info.signature)
        entry = parse_bid_transaction(sig_info, raw)
        if entry is not None:
            bids.append(entry)

    bids = sort_bids(bids)
    logger.info("bid_history_built", address=address, bid_count=len(bids))
    return bids
