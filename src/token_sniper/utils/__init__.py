# -*- coding: utf-8 -*-
"""Utility modules."""

from token_sniper.utils.dedupe import dedup_key
from token_sniper.utils.validation import (
    ADDRESS_PATTERN,
    extract_addresses,
    is_hex_address,
    mask_address,
    normalize_address,
)

__all__ = [
    "ADDRESS_PATTERN",
    "dedup_key",
    "extract_addresses",
    "is_hex_address",
    "mask_address",
    "normalize_address",
]
