"""Token sniper: feed and deployer-wallet monitoring with slippage-protected buys on Base."""

from token_sniper.clients import AsyncHttpClient, ChainClient, FeedApiClient
from token_sniper.config import get_settings
from token_sniper.DI import Container
from token_sniper.services import MonitoringScheduler

__version__ = "0.0.1"
__all__ = [
    "AsyncHttpClient",
    "ChainClient",
    "Container",
    "FeedApiClient",
    "MonitoringScheduler",
    "get_settings",
]
