"""
Console rendering for auction state and bid history.

Labels are coloured with ANSI escapes when the target stream is a terminal
and NO_COLOR is unset.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

from mayan_cli.auction.models import AuctionState, BidEntry

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"


class Palette:
    """Wraps text in ANSI colours, or returns it unchanged when disabled."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    @classmethod
    def for_stream(cls, stream: TextIO | None = None) -> "Palette":
        stream = stream or sys.stdout
        if os.getenv("NO_COLOR"):
            return cls(False)
        isatty = getattr(stream, "isatty", None)
        return cls(bool(isatty and isatty()))

    def _wrap(self, code: str, text: object) -> str:
        if not self.enabled:
            return str(text)
        return f"{code}{text}{RESET}"

    def red(self, text: object) -> str:
        return self._wrap(RED, text)

    def green(self, text: object) -> str:
        return self._wrap(GREEN, text)

    def yellow(self, text: object) -> str:
        return self._wrap(YELLOW, text)

    def blue(self, text: object) -> str:
        return self._wrap(BLUE, text)

    def cyan(self, text: object) -> str:
        return self._wrap(CYAN, text)


PLAIN = Palette(False)


def label(name: str, value: object, palette: Palette = PLAIN) -> str:
    return f"{palette.green(name)}: {value}"


def format_auction_state(state: AuctionState, palette: Palette = PLAIN) -> str:
    rows = [
        ("Bump", state.bump),
        ("Hash", state.hash.hex()),
        ("Initializer", state.initializer),
        ("Close Epoch", state.close_epoch),
        ("Amount Out Min", state.amount_out_min),
        ("Winner", state.winner),
        ("Amount Promised", state.amount_promised),
        ("Valid From", state.valid_from),
        ("Sequence Message", state.seq_msg),
    ]
    lines = ["Auction State Details:"]
    lines.extend("  " + label(name, value, palette) for name, value in rows)
    return "\n".join(lines)


def _diff_and_status(bids: list[BidEntry], i: int, palette: Palette) -> tuple[str, str | None]:
    """Diff against the previous bid and the status line; both need two known amounts."""
    bid = bids[i]
    if i == 0 or bid.bid_amount <= 0 or bids[i - 1].bid_amount <= 0:
        return "-", None
    diff = bid.bid_amount - bids[i - 1].bid_amount
    status = palette.red("Failed") if bid.failed else palette.green("Success")
    if diff >= 0:
        return palette.blue(f"+{diff}"), status
    return palette.red(str(diff)), status


def format_bid_history(bids: list[BidEntry], palette: Palette = PLAIN) -> str:
    if not bids:
        return f"{palette.yellow('Bid History')}: No bids found"

    out = [f"{palette.green('Bid History')}: {len(bids)} bids found"]
    for i, bid in enumerate(bids):
        diff, status = _diff_and_status(bids, i, palette)
        amount = palette.yellow(bid.bid_amount) if bid.bid_amount > 0 else "Unknown"
        block = [
            "",
            f"{palette.cyan('Bid')} {i + 1}:",
            "  " + label("Signature", bid.signature, palette),
            "  " + label("Bidder", bid.bidder, palette),
            "  " + label("Amount", amount, palette),
            "  " + label("Diff", diff, palette),
            "  " + label("Slot", bid.slot, palette),
            "  " + label("Timestamp", bid.timestamp if bid.timestamp is not None else 0, palette),
        ]
        if status is not None:
            block.append("  " + label("Status", status, palette))
        out.append("\n".join(block))
    return "\n".join(out)
