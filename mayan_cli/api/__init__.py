"""
Mayan explorer REST API access.
"""

from mayan_cli.api.client import get_auction_state_addr, get_order
from mayan_cli.api.models import OrderResponse

__all__ = ["OrderResponse", "get_auction_state_addr", "get_order"]
