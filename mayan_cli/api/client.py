"""
Mayan explorer API client: order id -> auction state address.

One GET per call, no retry and no explicit timeout. Failures map onto
ApiRequestError (transport), ApiStatusError (non-2xx) and ApiDecodeError
(body is not the expected JSON).
"""

from __future__ import annotations

from urllib.parse import quote

import requests

from mayan_cli.api.models import OrderResponse
from mayan_cli.config.env import get_mayan_api_url
from mayan_cli.core.exceptions import ApiDecodeError, ApiRequestError, ApiStatusError
from mayan_cli.mayan_logging import get_logger

logger = get_logger(__name__)

ORDER_PATH_TEMPLATE = "/v3/swap/order-id/{order_id}"


def order_url(order_id: str, api_url: str | None = None) -> str:
    base = (api_url or get_mayan_api_url()).rstrip("/")
    return base + ORDER_PATH_TEMPLATE.format(order_id=quote(order_id, safe=""))


def get_order(
    order_id: str,
    *,
    api_url: str | None = None,
    session: requests.Session | None = None,
) -> OrderResponse:
    """Fetch an order from the explorer API."""
    url = order_url(order_id, api_url)
    http = session or requests
    logger.debug("mayan_api_request", url=url)
    try:
        r = http.get(url)
    except requests.RequestException as e:
        raise ApiRequestError(f"Failed to send request to Mayan API: {e}") from e
    if not 200 <= r.status_code < 300:
        logger.info("mayan_api_status_error", url=url, status_code=r.status_code)
        raise ApiStatusError(r.status_code, r.reason)
    try:
        body = r.json()
    except ValueError as e:
        raise ApiDecodeError(f"Failed to parse JSON response: {e}") from e
    return OrderResponse.from_json(body)


def get_auction_state_addr(
    order_id: str,
    *,
    api_url: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """Resolve an order id to its auction state address."""
    order = get_order(order_id, api_url=api_url, session=session)
    logger.info(
        "auction_state_address_resolved",
        order_id=order_id,
        auction_state_addr=order.auction_state_addr,
        status=order.status,
    )
    return order.auction_state_addr
