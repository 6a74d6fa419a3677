"""Shared type definitions for token addresses and amounts."""

import re
from typing import Annotated

from pydantic import Field

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"

# Ethereum-style address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize a token address to lowercase.

    Token identifiers are compared case-insensitively everywhere in the
    engine, so every address is lowercased on the way in. Identifiers are
    expected to be hex addresses: a missing ``0x`` prefix is added, so
    ``"a"`` and ``"0xa"`` name the same token.

    Args:
        address: A token address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid address
    """
    addr = address.strip().lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None
