"""Address validation utilities."""

from solders.pubkey import Pubkey

from mayan_cli.core.exceptions import AddressParseError


def is_valid_address(value: str) -> bool:
    """Return True if value parses as a Solana address (Pubkey)."""
    try:
        Pubkey.from_string(value)
        return True
    except ValueError:
        return False


def parse_address(value: str) -> Pubkey:
    """Parse value as a Pubkey; raise AddressParseError when it is not one."""
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise AddressParseError(
            f"Failed to parse auction state address as Pubkey: {value!r}"
        ) from e
