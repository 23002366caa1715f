"""
Application-level exceptions.

Every failure the CLI reports as "Error: ..." derives from MayanCliError.
Bytes32LengthError is the exception: length mismatches in the fixed-width
conversions abort the program instead of returning a structured error.
"""

from __future__ import annotations


class MayanCliError(Exception):
    """Base class for errors surfaced to the user with exit code 1."""


class ApiRequestError(MayanCliError):
    """The explorer API request could not be sent (network / transport)."""


class ApiStatusError(MayanCliError):
    """The explorer API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str | None = None) -> None:
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}" if reason else str(status_code)
        super().__init__(f"API request failed with status: {status}")


class ApiDecodeError(MayanCliError):
    """The explorer API body did not parse as the expected JSON."""


class AddressParseError(MayanCliError):
    """A string could not be parsed as a Solana address."""


class AccountDecodeError(MayanCliError):
    """Account bytes did not match the AuctionState layout."""


class RpcError(MayanCliError):
    """A Solana RPC call failed or returned an unusable result."""


class InputFormatError(MayanCliError):
    """Invalid format selector or malformed hex / byte-list input."""


class Bytes32LengthError(RuntimeError):
    """Input does not fit the fixed 32-byte width. Not meant to be caught."""
