"""Boundary types for the feed capability."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from token_sniper.clients.feed_api.schema import CastSchema, UserSchema
from token_sniper.exceptions import FeedDecodeError


def _parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 (with or without Z) or epoch seconds into an aware UTC datetime."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value), tz=UTC)
    if isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    raise ValueError(f"unsupported timestamp: {value!r}")


@dataclass(frozen=True, slots=True)
class FeedIdentity:
    """Resolved feed account."""

    fid: int
    username: str

    @classmethod
    def from_response(cls, user: UserSchema) -> FeedIdentity:
        try:
            fid = int(user["fid"])
        except (KeyError, TypeError, ValueError) as e:
            raise FeedDecodeError(f"user without numeric fid: {user!r}") from e
        username = user.get("username") or user.get("display_name") or str(fid)
        return cls(fid=fid, username=str(username))


@dataclass(frozen=True, slots=True)
class FeedPost:
    """One post (cast) from a user's feed."""

    text: str
    timestamp: datetime
    hash: str

    @classmethod
    def from_response(cls, cast: CastSchema) -> FeedPost:
        post_hash = cast.get("hash")
        if not isinstance(post_hash, str) or not post_hash:
            raise FeedDecodeError(f"cast without hash: {cast!r}")
        try:
            timestamp = _parse_timestamp(cast.get("timestamp"))
        except ValueError as e:
            raise FeedDecodeError(f"cast {post_hash} has invalid timestamp") from e
        text = cast.get("text")
        return cls(text=text if isinstance(text, str) else "", timestamp=timestamp, hash=post_hash)
