"""
mayan-utils: command-line helpers for Mayan Finance auctions on Solana.

Resolves swap order ids to auction state accounts, decodes those accounts,
rebuilds bid history from transaction logs, and converts between base58,
hex and fixed-width byte representations.
"""

__version__ = "0.1.0"
