"""Input disambiguation: an auction state address, or an order id to look up."""

from __future__ import annotations

from mayan_cli.api.client import get_auction_state_addr
from mayan_cli.mayan_logging import get_logger
from mayan_cli.utils.wallet_utils import is_valid_address

logger = get_logger(__name__)


def resolve_auction_state_address(value: str, *, api_url: str | None = None) -> str:
    """
    Return value itself when it parses as an address; otherwise treat it as
    an order id and ask the explorer API.
    """
    if is_valid_address(value):
        logger.debug("input_is_address", address=value)
        return value
    logger.debug("input_is_order_id", order_id=value)
    return get_auction_state_addr(value, api_url=api_url)
