"""Feed change detection."""

from token_sniper.services.feed_detection.feed_change_detector import FeedChangeDetector

__all__ = ["FeedChangeDetector"]
