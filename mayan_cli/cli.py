"""
mayan-utils command line.

Usage:
  mayan-utils get-auction-state-address <ORDER_ID>          (alias: gasa)
  mayan-utils get-auction-state <ORDER_ID|ADDRESS>          (alias: gas)
  mayan-utils get-bids <ORDER_ID|ADDRESS>                   (alias: gb)
  mayan-utils base58-decode <INPUT> [--format hex|bytes|utf8]   (alias: b58d)
  mayan-utils base58-encode <INPUT> [--format hex|bytes|utf8]   (alias: b58e)
  mayan-utils to-bytes32 <INPUT> [--format hex|bytes]           (alias: b32d)
  mayan-utils from-bytes32 <INPUT> [--input-format ...] [--output-format ...]  (alias: b32e)

Exit status is 0 on success and 1 on any reported error. Length mismatches
in to-bytes32 / from-bytes32 are not reported errors: they abort.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable

from mayan_cli import __version__
from mayan_cli.api.client import get_auction_state_addr
from mayan_cli.auction.bids import get_bid_history
from mayan_cli.auction.resolver import resolve_auction_state_address
from mayan_cli.auction.state import get_and_parse_auction_state
from mayan_cli.codec import conversions
from mayan_cli.config import Settings, get_settings
from mayan_cli.core.exceptions import MayanCliError
from mayan_cli.mayan_logging import configure_logging, get_logger
from mayan_cli.utils.formatting import Palette, format_auction_state, format_bid_history, label

logger = get_logger(__name__)

PROG = "mayan-utils"


def _out(line: str) -> None:
    print(line)


def cmd_get_auction_state_address(args: argparse.Namespace, palette: Palette) -> int:
    addr = get_auction_state_addr(args.order_id, api_url=args.api_url)
    _out(label("Auction State Address", addr, palette))
    return 0


def cmd_get_auction_state(args: argparse.Namespace, palette: Palette) -> int:
    state = get_and_parse_auction_state(args.input, args.rpc_url, api_url=args.api_url)
    _out(format_auction_state(state, palette))
    return 0


def cmd_get_bids(args: argparse.Namespace, palette: Palette) -> int:
    try:
        address = resolve_auction_state_address(args.input, api_url=args.api_url)
    except MayanCliError as e:
        print(f"Error getting auction state address: {e}", file=sys.stderr)
        return 1
    bids = get_bid_history(address, args.rpc_url)
    _out(format_bid_history(bids, palette))
    return 0


def cmd_base58_decode(args: argparse.Namespace, palette: Palette) -> int:
    fmt = conversions.check_format(args.format, conversions.ALL_FORMATS)
    decoded = conversions.base58_decode(args.input)
    if fmt == conversions.FORMAT_HEX:
        _out(label("Hex", decoded.hex(), palette))
    elif fmt == conversions.FORMAT_BYTES:
        _out(label("Bytes", conversions.format_byte_list(decoded), palette))
    else:
        try:
            _out(label("UTF-8", decoded.decode("utf-8"), palette))
        except UnicodeDecodeError:
            _out(f"{palette.red('Error')}: Invalid UTF-8 sequence")
            _out(f"{palette.yellow('Raw bytes')}: {decoded.hex()}")
    return 0


def cmd_base58_encode(args: argparse.Namespace, palette: Palette) -> int:
    data = conversions.parse_input(args.input, args.format, conversions.ALL_FORMATS)
    _out(label("Base58", conversions.base58_encode(data), palette))
    return 0


def cmd_to_bytes32(args: argparse.Namespace, palette: Palette) -> int:
    data = conversions.to_bytes32(args.input, args.format)
    _out(label("Bytes32 Array", conversions.format_byte_list(data), palette))
    _out(label("Hex", data.hex(), palette))
    return 0


def cmd_from_bytes32(args: argparse.Namespace, palette: Palette) -> int:
    output_format = conversions.check_format(
        args.output_format, conversions.BINARY_FORMATS, label="output format"
    )
    data = conversions.from_bytes32(args.input, args.input_format)
    if output_format == conversions.FORMAT_HEX:
        _out(label("Hex", "0x" + data.hex(), palette))
    else:
        _out(label("Bytes", conversions.format_byte_list(data), palette))
    return 0


def _add_rpc_url(p: argparse.ArgumentParser, default: str) -> None:
    p.add_argument(
        "--rpc-url",
        default=default,
        help="Solana RPC endpoint (default: SOLANA_RPC_URL or mainnet-beta)",
    )


def build_parser(settings: Settings | None = None) -> argparse.ArgumentParser:
    settings = settings or get_settings()
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="A CLI utility for Mayan Finance operations",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v info, -vv debug)",
    )
    parser.add_argument(
        "--api-url",
        default=settings.mayan_api_url,
        help="Mayan explorer API base URL (default: MAYAN_API_URL or public explorer)",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p = sub.add_parser(
        "get-auction-state-address",
        aliases=["gasa"],
        help="Get auction state address from order ID",
    )
    p.add_argument("order_id", help="The order ID to query")
    p.set_defaults(handler=cmd_get_auction_state_address)

    p = sub.add_parser(
        "get-auction-state",
        aliases=["gas"],
        help="Get and parse auction state data from order ID or auction state address",
    )
    p.add_argument("input", help="The order ID or auction state address to query")
    _add_rpc_url(p, settings.solana_rpc_url)
    p.set_defaults(handler=cmd_get_auction_state)

    p = sub.add_parser(
        "get-bids",
        aliases=["gb"],
        help="Get bid information from auction state address or order ID",
    )
    p.add_argument("input", help="The order ID or auction state address to query")
    _add_rpc_url(p, settings.solana_rpc_url)
    p.set_defaults(handler=cmd_get_bids)

    p = sub.add_parser("base58-decode", aliases=["b58d"], help="Decode a base58 encoded string")
    p.add_argument("input", help="The base58 encoded string to decode")
    p.add_argument("--format", default="hex", help="Output format: hex, bytes, or utf8")
    p.set_defaults(handler=cmd_base58_decode)

    p = sub.add_parser("base58-encode", aliases=["b58e"], help="Encode data to base58")
    p.add_argument("input", help="The input data to encode")
    p.add_argument("--format", default="hex", help="Input format: hex, bytes, or utf8")
    p.set_defaults(handler=cmd_base58_encode)

    p = sub.add_parser(
        "to-bytes32",
        aliases=["b32d"],
        help="Convert hex string or bytes array to exactly 32 bytes (aborts if not 32 bytes)",
    )
    p.add_argument("input", help="Hex string (with or without 0x prefix) or comma-separated bytes")
    p.add_argument("--format", default="hex", help="Input format: hex or bytes")
    p.set_defaults(handler=cmd_to_bytes32)

    p = sub.add_parser(
        "from-bytes32",
        aliases=["b32e"],
        help="Convert data to a 32-byte array (pads if shorter, aborts if longer)",
    )
    p.add_argument("input", help="Hex string (with or without 0x prefix) or comma-separated bytes")
    p.add_argument("--input-format", default="hex", help="Input format: hex or bytes")
    p.add_argument("--output-format", default="hex", help="Output format: hex or bytes")
    p.set_defaults(handler=cmd_from_bytes32)

    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    # .env is loaded by now; -v / -vv override its LOG_LEVEL
    level: int | str = settings.log_level
    if args.verbose:
        level = logging.DEBUG if args.verbose > 1 else logging.INFO
    configure_logging(level, settings.log_format)

    handler: Callable[[argparse.Namespace, Palette], int] = args.handler
    palette = Palette.for_stream(sys.stdout)
    try:
        return handler(args, palette)
    except MayanCliError as e:
        logger.debug("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
