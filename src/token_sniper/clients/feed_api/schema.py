"""Neynar v2 response types (only the keys the sniper reads)."""

from __future__ import annotations

from typing import TypedDict


class UserSchema(TypedDict, total=False):
    """User object (bulk lookup and search)."""

    fid: int
    username: str
    display_name: str
    custody_address: str


class UserSearchResultSchema(TypedDict, total=False):
    users: list[UserSchema]


class UserSearchResponseSchema(TypedDict, total=False):
    """GET /v2/farcaster/user/search"""

    result: UserSearchResultSchema


class BulkUsersResponseSchema(TypedDict, total=False):
    """GET /v2/farcaster/user/bulk"""

    users: list[UserSchema]


class CastSchema(TypedDict, total=False):
    """Cast object; timestamp is ISO-8601."""

    hash: str
    text: str
    timestamp: str
    author: UserSchema


class UserCastsResponseSchema(TypedDict, total=False):
    """GET /v2/farcaster/feed/user/casts (newest first)."""

    casts: list[CastSchema]
