# -*- coding: utf-8 -*-
"""Unit tests for address validation and extraction."""

from __future__ import annotations

from token_sniper.utils.validation import (
    extract_addresses,
    is_hex_address,
    mask_address,
    normalize_address,
)

ADDR = "0x1234567890abcdef1234567890ABCDEF12345678"


def test_is_hex_address_accepts_mixed_case_address() -> None:
    assert is_hex_address(ADDR) is True


def test_is_hex_address_rejects_short_or_non_hex_values() -> None:
    assert is_hex_address("0x1234") is False
    assert is_hex_address("0x" + "g" * 40) is False
    assert is_hex_address(ADDR[2:]) is False
    assert is_hex_address(None) is False
    assert is_hex_address(123) is False


def test_normalize_address_lowercases_and_strips() -> None:
    assert normalize_address(f"  {ADDR} ") == ADDR.lower()


def test_extract_addresses_returns_matches_in_order() -> None:
    other = "0x" + "ab" * 20
    text = f"new coin {ADDR} and also {other}!"
    assert extract_addresses(text) == [ADDR.lower(), other]


def test_extract_addresses_keeps_duplicates() -> None:
    text = f"{ADDR} again {ADDR.lower()}"
    assert extract_addresses(text) == [ADDR.lower(), ADDR.lower()]


def test_extract_addresses_handles_empty_text() -> None:
    assert extract_addresses("") == []
    assert extract_addresses(None) == []
    assert extract_addresses("gm, no contracts today") == []


def test_mask_address_keeps_prefix_and_suffix() -> None:
    assert mask_address(ADDR) == "0x1234...5678"
    assert mask_address(None) == "***"
    assert mask_address("0x12") == "***"
