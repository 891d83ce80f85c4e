"""Capability clients (HTTP, feed API, chain RPC)."""

from token_sniper.clients.chain_client import ChainClient
from token_sniper.clients.feed_api import FeedApiClient, FeedIdentity, FeedPost
from token_sniper.clients.http import AsyncHttpClient

__all__ = ["AsyncHttpClient", "ChainClient", "FeedApiClient", "FeedIdentity", "FeedPost"]
