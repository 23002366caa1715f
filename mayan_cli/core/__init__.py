"""
Core building blocks shared by every command: the error taxonomy.
"""

from mayan_cli.core.exceptions import (
    AccountDecodeError,
    AddressParseError,
    ApiDecodeError,
    ApiRequestError,
    ApiStatusError,
    Bytes32LengthError,
    InputFormatError,
    MayanCliError,
    RpcError,
)

__all__ = [
    "AccountDecodeError",
    "AddressParseError",
    "ApiDecodeError",
    "ApiRequestError",
    "ApiStatusError",
    "Bytes32LengthError",
    "InputFormatError",
    "MayanCliError",
    "RpcError",
]
