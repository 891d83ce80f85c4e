"""Validation helpers for addresses and the lexical address pattern used on post text."""

from __future__ import annotations

import re
from typing import Any

# 0x-prefixed 20-byte hex value; case-insensitive, so checksummed and lowercase both match.
ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is a 0x address (42 chars, hex body)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    return len(s) == 42 and ADDRESS_PATTERN.fullmatch(s) is not None


def normalize_address(addr: str) -> str:
    """Return the lowercase, stripped form used for keys and comparisons."""
    return addr.strip().lower()


def extract_addresses(text: str | None) -> list[str]:
    """Return every address-looking match in text, lowercased, in order of appearance.

    Duplicates within the same text are kept; the dedup ledger collapses them.
    """
    if not text:
        return []
    return [m.group(0).lower() for m in ADDRESS_PATTERN.finditer(text)]


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
