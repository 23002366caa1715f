"""
Pytest fixtures for mayan-utils tests.

RPC and HTTP are always mocked; builders produce account bytes and
jsonParsed getTransaction payloads in the shapes Solana RPC returns.
"""

from __future__ import annotations

import struct
from types import SimpleNamespace

import base58
import pytest
from solders.pubkey import Pubkey
from solders.signature import Signature

from mayan_cli.auction.bids import BID_LOG_MARKER
from mayan_cli.auction.state import AUCTION_STATE_STRUCT
from mayan_cli.mayan_logging import configure_logging

PROGRAM_ID = str(Pubkey(bytes([9]) * 32))
COMPUTE_BUDGET_ID = "ComputeBudget111111111111111111111111111111"


def pubkey_str(n: int) -> str:
    return str(Pubkey(bytes([n]) * 32))


def signature_str(n: int) -> str:
    return str(Signature(bytes([n]) * 64))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No real .env or endpoint variables leak into tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SOLANA_RPC_URL", raising=False)
    monkeypatch.delenv("MAYAN_API_URL", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.setattr("mayan_cli.config.env._ENV_PATH", tmp_path / "missing.env")
    yield
    # main() points structlog at the captured stderr; reset to the live one
    configure_logging("WARNING", "console")


@pytest.fixture
def auction_state_bytes():
    """Pack an AuctionState; discriminator=True prepends 8 tag bytes."""

    def _build(
        *,
        bump: int = 254,
        hash_: bytes = bytes(range(32)),
        initializer: int = 1,
        close_epoch: int = 1_700_000_100,
        amount_out_min: int = 990_000,
        winner: int = 2,
        amount_promised: int = 1_000_000,
        valid_from: int = 1_700_000_000,
        seq_msg: int = 42,
        discriminator: bool = False,
    ) -> bytes:
        body = AUCTION_STATE_STRUCT.pack(
            bump,
            hash_,
            bytes([initializer]) * 32,
            close_epoch,
            amount_out_min,
            bytes([winner]) * 32,
            amount_promised,
            valid_from,
            seq_msg,
        )
        if discriminator:
            return b"\xaa\xbb\xcc\xdd\x01\x02\x03\x04" + body
        return body

    return _build


def bid_instruction_data(amount: int, prefix: bytes = b"\x17" * 9) -> str:
    return base58.b58encode(prefix + struct.pack("<Q", amount)).decode("ascii")


@pytest.fixture
def make_bid_tx():
    """Build a jsonParsed getTransaction result for a bid."""

    def _build(
        bidder: str,
        amount: int = 1_000,
        *,
        logs: list[str] | None = None,
        err: object = None,
        bid_instruction: dict | None = None,
        instruction_count: int = 3,
    ) -> dict:
        if logs is None:
            logs = [
                f"Program {PROGRAM_ID} invoke [1]",
                BID_LOG_MARKER,
                f"Program {PROGRAM_ID} success",
            ]
        instructions: list[dict] = [
            {
                "programId": COMPUTE_BUDGET_ID,
                "program": "compute-budget",
                "parsed": {"type": "setComputeUnitLimit", "info": {"units": 200000}},
                "stackHeight": None,
            },
            {
                "programId": COMPUTE_BUDGET_ID,
                "program": "compute-budget",
                "parsed": {"type": "setComputeUnitPrice", "info": {"microLamports": 1}},
                "stackHeight": None,
            },
            bid_instruction
            if bid_instruction is not None
            else {
                "programId": PROGRAM_ID,
                "accounts": [bidder, pubkey_str(3)],
                "data": bid_instruction_data(amount),
                "stackHeight": None,
            },
        ][:instruction_count]
        return {
            "slot": 1,
            "blockTime": 1_700_000_000,
            "version": 0,
            "transaction": {
                "signatures": [signature_str(200)],
                "message": {
                    "accountKeys": [
                        {"pubkey": bidder, "signer": True, "writable": True, "source": "transaction"},
                        {"pubkey": pubkey_str(3), "signer": False, "writable": True, "source": "transaction"},
                    ],
                    "instructions": instructions,
                    "recentBlockhash": pubkey_str(4),
                },
            },
            "meta": {"err": err, "fee": 5000, "logMessages": logs},
        }

    return _build


def signature_item(signature: str, slot: int, block_time: int | None = 1_700_000_000) -> dict:
    return {
        "signature": signature,
        "slot": slot,
        "err": None,
        "blockTime": block_time,
        "memo": None,
        "confirmationStatus": "finalized",
    }


def rpc_value(value):
    """Mimic a solana-py response object carrying .value."""
    return SimpleNamespace(value=value)
