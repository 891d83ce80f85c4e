"""Feed capability client."""

from token_sniper.clients.feed_api.dto import FeedIdentity, FeedPost
from token_sniper.clients.feed_api.feed_api import FeedApiClient

__all__ = ["FeedApiClient", "FeedIdentity", "FeedPost"]
