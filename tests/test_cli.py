"""
End-to-end CLI tests: argument parsing, output and exit codes.
"""

from __future__ import annotations

import json
import os
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from conftest import pubkey_str, rpc_value, signature_item, signature_str
from mayan_cli import __version__
from mayan_cli.cli import main
from mayan_cli.core.exceptions import Bytes32LengthError

AUCTION_ADDR = pubkey_str(5)


def _response(status_code: int, body=None, reason: str = "OK") -> MagicMock:
    r = MagicMock()
    r.status_code = status_code
    r.ok = 200 <= status_code < 400
    r.reason = reason
    r.json.return_value = body
    return r


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_get_auction_state_address(capsys):
    with patch("mayan_cli.api.client.requests.get", return_value=_response(200, {"auctionStateAddr": AUCTION_ADDR})):
        assert main(["get-auction-state-address", "abc123"]) == 0
    assert capsys.readouterr().out.strip() == f"Auction State Address: {AUCTION_ADDR}"


def test_alias_gasa(capsys):
    with patch("mayan_cli.api.client.requests.get", return_value=_response(200, {"auctionStateAddr": AUCTION_ADDR})):
        assert main(["gasa", "abc123"]) == 0
    assert AUCTION_ADDR in capsys.readouterr().out


def test_get_auction_state_order_id_404_exits_1(capsys):
    """Order id path hits the API first; a 404 stops before any RPC access."""
    with patch("mayan_cli.api.client.requests.get", return_value=_response(404, None, "Not Found")) as mock_get, patch(
        "mayan_cli.rpc.client.Client"
    ) as mock_client_cls:
        code = main(["get-auction-state", "abc123"])
    assert code == 1
    mock_get.assert_called_once()
    mock_client_cls.assert_not_called()
    err = capsys.readouterr().err
    assert "Error: API request failed with status: 404" in err


def test_get_auction_state_prints_nine_fields(capsys, auction_state_bytes):
    with patch("mayan_cli.rpc.client.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.get_account_info.return_value = rpc_value(
            SimpleNamespace(data=auction_state_bytes(discriminator=True))
        )
        assert main(["gas", AUCTION_ADDR, "--rpc-url", "http://rpc.local"]) == 0
    mock_client_cls.assert_called_once_with("http://rpc.local")
    out = capsys.readouterr().out
    assert out.startswith("Auction State Details:")
    for name in (
        "Bump: 254",
        "Hash: " + bytes(range(32)).hex(),
        f"Initializer: {pubkey_str(1)}",
        "Close Epoch: 1700000100",
        "Amount Out Min: 990000",
        f"Winner: {pubkey_str(2)}",
        "Amount Promised: 1000000",
        "Valid From: 1700000000",
        "Sequence Message: 42",
    ):
        assert name in out


def test_rpc_url_from_env(monkeypatch, auction_state_bytes):
    monkeypatch.setenv("SOLANA_RPC_URL", "http://env-rpc.local")
    with patch("mayan_cli.rpc.client.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.get_account_info.return_value = rpc_value(SimpleNamespace(data=auction_state_bytes()))
        assert main(["get-auction-state", AUCTION_ADDR]) == 0
    mock_client_cls.assert_called_once_with("http://env-rpc.local")


def test_rpc_url_default_mainnet(auction_state_bytes):
    with patch("mayan_cli.rpc.client.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.get_account_info.return_value = rpc_value(SimpleNamespace(data=auction_state_bytes()))
        assert main(["get-auction-state", AUCTION_ADDR]) == 0
    mock_client_cls.assert_called_once_with("https://api.mainnet-beta.solana.com")


def test_get_bids_lists_bids(capsys, make_bid_tx):
    s1, s2 = signature_str(1), signature_str(2)
    txs = {s1: make_bid_tx(pubkey_str(11), 150), s2: make_bid_tx(pubkey_str(12), 100)}
    with patch("mayan_cli.rpc.client.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.get_signatures_for_address.return_value = rpc_value(
            [signature_item(s1, 20), signature_item(s2, 10)]
        )
        mock_client.get_transaction.side_effect = lambda sig, **kwargs: rpc_value(txs[str(sig)])
        assert main(["gb", AUCTION_ADDR]) == 0
    out = capsys.readouterr().out
    assert "Bid History: 2 bids found" in out
    assert out.index(s2) < out.index(s1)
    assert "Diff: +50" in out
    assert "Status: Success" in out


def test_get_bids_resolver_error(capsys):
    with patch("mayan_cli.api.client.requests.get", return_value=_response(500, None, "Internal Server Error")):
        assert main(["get-bids", "abc123"]) == 1
    assert "Error getting auction state address: API request failed with status: 500" in capsys.readouterr().err


def test_base58_decode_hex(capsys):
    assert main(["base58-decode", "11111111111111111111111111111111"]) == 0
    assert capsys.readouterr().out.strip() == "Hex: " + "00" * 32


def test_base58_decode_bytes(capsys):
    assert main(["b58d", "5Q", "--format", "bytes"]) == 0
    assert capsys.readouterr().out.strip() == "Bytes: [255]"


def test_base58_decode_utf8(capsys):
    assert main(["base58-decode", "Cn8eVZg", "--format", "utf8"]) == 0
    assert capsys.readouterr().out.strip() == "UTF-8: hello"


def test_base58_decode_invalid_utf8_falls_back_to_hex(capsys):
    assert main(["base58-decode", "5Q", "--format", "utf8"]) == 0
    out = capsys.readouterr().out
    assert "Error: Invalid UTF-8 sequence" in out
    assert "Raw bytes: ff" in out


def test_base58_decode_invalid_format(capsys):
    assert main(["base58-decode", "5Q", "--format", "base64"]) == 1
    assert "Invalid format 'base64'" in capsys.readouterr().err


def test_base58_decode_invalid_input(capsys):
    assert main(["base58-decode", "0OIl"]) == 1
    assert "Failed to decode base58 string" in capsys.readouterr().err


def test_base58_encode_formats(capsys):
    assert main(["base58-encode", "0xff"]) == 0
    assert main(["b58e", "255", "--format", "bytes"]) == 0
    assert main(["b58e", "hello", "--format", "utf8"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["Base58: 5Q", "Base58: 5Q", "Base58: Cn8eVZg"]


def test_base58_encode_bad_byte(capsys):
    assert main(["base58-encode", "1,300", "--format", "bytes"]) == 1
    assert "Failed to parse byte value" in capsys.readouterr().err


def test_to_bytes32(capsys):
    assert main(["to-bytes32", "00" * 32]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Bytes32 Array: [" + ", ".join(["0"] * 32) + "]"
    assert out[1] == "Hex: " + "00" * 32


def test_to_bytes32_wrong_length_aborts():
    with pytest.raises(Bytes32LengthError):
        main(["b32d", "0x0102"])


def test_from_bytes32_hex(capsys):
    assert main(["from-bytes32", "01"]) == 0
    assert capsys.readouterr().out.strip() == "Hex: 0x" + "00" * 31 + "01"


def test_from_bytes32_bytes_output(capsys):
    assert main(["b32e", "1,2", "--input-format", "bytes", "--output-format", "bytes"]) == 0
    assert capsys.readouterr().out.strip() == "Bytes: [" + ", ".join(["0"] * 30 + ["1", "2"]) + "]"


def test_from_bytes32_invalid_output_format(capsys):
    assert main(["from-bytes32", "01", "--output-format", "utf8"]) == 1
    assert "Invalid output format 'utf8'" in capsys.readouterr().err


def test_from_bytes32_too_long_aborts():
    with pytest.raises(Bytes32LengthError):
        main(["from-bytes32", "00" * 33])


def test_missing_subcommand():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def _run_get_auction_state(auction_state_bytes, *extra: str) -> int:
    with patch("mayan_cli.rpc.client.Client") as mock_client_cls:
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.get_account_info.return_value = rpc_value(SimpleNamespace(data=auction_state_bytes()))
        return main([*extra, "get-auction-state", AUCTION_ADDR])


def test_quiet_by_default(capsys, auction_state_bytes):
    assert _run_get_auction_state(auction_state_bytes) == 0
    assert "input_is_address" not in capsys.readouterr().err


def test_log_level_from_dotenv(tmp_path, capsys, auction_state_bytes):
    (tmp_path / ".env").write_text("LOG_LEVEL=DEBUG\n")
    try:
        assert _run_get_auction_state(auction_state_bytes) == 0
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("LOG_LEVEL", None)
    captured = capsys.readouterr()
    assert "input_is_address" in captured.err
    assert "input_is_address" not in captured.out


def test_log_format_json_from_dotenv(tmp_path, capsys, auction_state_bytes):
    (tmp_path / ".env").write_text("LOG_LEVEL=INFO\nLOG_FORMAT=json\n")
    try:
        assert _run_get_auction_state(auction_state_bytes) == 0
    finally:
        os.environ.pop("LOG_LEVEL", None)
        os.environ.pop("LOG_FORMAT", None)
    events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.strip()]
    assert {"account_data_fetched", "auction_state_decoded"} <= {e["event_type"] for e in events}


def test_verbose_flag_overrides_dotenv(tmp_path, capsys, auction_state_bytes):
    (tmp_path / ".env").write_text("LOG_LEVEL=ERROR\n")
    try:
        assert _run_get_auction_state(auction_state_bytes, "-vv") == 0
    finally:
        os.environ.pop("LOG_LEVEL", None)
    assert "input_is_address" in capsys.readouterr().err


def test_single_verbose_logs_info_only(capsys, auction_state_bytes):
    assert _run_get_auction_state(auction_state_bytes, "-v") == 0
    err = capsys.readouterr().err
    assert "account_data_fetched" in err
    assert "input_is_address" not in err
