"""Base58, hex and fixed-width byte conversions."""
