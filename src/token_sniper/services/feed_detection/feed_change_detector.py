# -*- coding: utf-8 -*-
"""Feed change-detector: address-looking substrings in posts newer than the watermark."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from token_sniper.exceptions import FetchFailureError
from token_sniper.models.candidate import Candidate
from token_sniper.utils.validation import extract_addresses

if TYPE_CHECKING:
    from token_sniper.clients.feed_api import FeedApiClient
    from token_sniper.config import Settings
    from token_sniper.models.watched_identity import WatchedIdentity
    from token_sniper.persistence.repositories.interfaces import IWatermarkRepository


class FeedChangeDetector:
    """Scans one watched identity's recent posts for contract addresses."""

    def __init__(
        self,
        feed_client: "FeedApiClient",
        watermark_repository: "IWatermarkRepository",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._feed = feed_client
        self._watermarks = watermark_repository
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def scan(self, identity: "WatchedIdentity") -> list[Candidate]:
        """Return one Candidate per address match in posts newer than the watermark.

        The watermark advances to the newest fetched post whenever posts were
        fetched, even if no address was found. A fetch failure returns [] and
        leaves the watermark unchanged, so the same window is retried next cycle.
        """
        with bound_contextvars(identity_fid=identity.fid, identity_name=identity.display_name):
            watermark = await self._watermarks.get(identity.fid)
            try:
                posts = await self._feed.fetch_recent_posts(
                    identity.fid, limit=self._settings.sniper.recent_posts_limit
                )
            except FetchFailureError as e:
                self._logger.warning(
                    "feed_scan_fetch_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return []

            candidates: list[Candidate] = []
            for post in posts:
                if watermark is not None and post.timestamp <= watermark:
                    continue
                for address in extract_addresses(post.text):
                    candidates.append(
                        Candidate.from_post(
                            address,
                            post_hash=post.hash,
                            fid=identity.fid,
                            posted_at=post.timestamp,
                        )
                    )

            if posts:
                newest = max(post.timestamp for post in posts)
                await self._watermarks.advance(identity.fid, newest)

            if candidates:
                self._logger.info(
                    "feed_scan_candidates_found",
                    feed_posts_count=len(posts),
                    candidates_count=len(candidates),
                )
            else:
                self._logger.debug("feed_scan_no_candidates", feed_posts_count=len(posts))
            return candidates
