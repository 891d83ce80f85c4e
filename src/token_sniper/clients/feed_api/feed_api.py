# -*- coding: utf-8 -*-
"""Farcaster feed client (Neynar v2 HTTP API)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from structlog.contextvars import bound_contextvars

from token_sniper.clients.feed_api.dto import FeedIdentity, FeedPost
from token_sniper.clients.feed_api.schema import (
    BulkUsersResponseSchema,
    CastSchema,
    UserCastsResponseSchema,
    UserSchema,
    UserSearchResponseSchema,
)
from token_sniper.config import Settings
from token_sniper.exceptions import FeedApiError, FeedDecodeError

if TYPE_CHECKING:
    from token_sniper.clients.http import AsyncHttpClient


def _as_fid(identifier: str | int) -> Optional[int]:
    """Return identifier as an int fid if it is numeric, else None."""
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return identifier
    s = str(identifier).strip()
    return int(s) if s.isdigit() else None


class FeedApiClient:
    """Client for the feed capability: identity resolution and recent posts."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client carrying the api key header.
            settings: Application settings (uses settings.api.feed_api_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.feed_api_host.rstrip("/")

    async def resolve_identity(self, identifier: str | int) -> Optional[FeedIdentity]:
        """Resolve a numeric id or a username to a FeedIdentity.

        Returns None when nothing matches. Transport failures propagate as FeedApiError.
        """
        fid = _as_fid(identifier)
        try:
            if fid is not None:
                return await self._get_user_by_fid(fid)
            return await self._search_user(str(identifier).strip().lstrip("@"))
        except FeedApiError as e:
            if e.status_code == 404:
                return None
            raise

    async def _get_user_by_fid(self, fid: int) -> Optional[FeedIdentity]:
        url = f"{self._base_url()}/v2/farcaster/user/bulk"
        data = await self._http.get(url, params={"fids": str(fid)})
        if not isinstance(data, dict):
            return None
        users = cast(BulkUsersResponseSchema, data).get("users")
        if not users:
            return None
        return FeedIdentity.from_response(cast(UserSchema, users[0]))

    async def _search_user(self, username: str) -> Optional[FeedIdentity]:
        if not username:
            return None
        url = f"{self._base_url()}/v2/farcaster/user/search"
        data = await self._http.get(url, params={"q": username, "limit": 1})
        if not isinstance(data, dict):
            return None
        result = cast(UserSearchResponseSchema, data).get("result")
        users = result.get("users") if isinstance(result, dict) else None
        if not users:
            return None
        return FeedIdentity.from_response(cast(UserSchema, users[0]))

    async def fetch_recent_posts(self, fid: int, *, limit: int = 50) -> List[FeedPost]:
        """Fetch an identity's most recent posts, newest first.

        Raises:
            FeedApiError: Request failed after retries.
            FeedDecodeError: Response or one of its posts could not be decoded.
        """
        with bound_contextvars(feed_fid=fid, feed_limit=limit):
            url = f"{self._base_url()}/v2/farcaster/feed/user/casts"
            params: Dict[str, Any] = {"fid": fid, "limit": limit, "include_replies": "true"}
            data = await self._http.get(url, params=params)
            if not isinstance(data, dict):
                raise FeedDecodeError(f"unexpected casts response type: {type(data).__name__}")
            casts = cast(UserCastsResponseSchema, data).get("casts")
            if casts is None:
                return []
            if not isinstance(casts, list):
                raise FeedDecodeError("casts is not a list")
            posts = [FeedPost.from_response(cast(CastSchema, c)) for c in casts if isinstance(c, dict)]
            self._logger.debug("feed_posts_fetched", feed_posts_count=len(posts))
            return posts
