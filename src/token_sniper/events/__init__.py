# -*- coding: utf-8 -*-
"""Event bus and event types."""

from token_sniper.events.bus import get_event_bus, set_event_bus
from token_sniper.events.buy_events import BuyAttemptedEvent

__all__ = ["BuyAttemptedEvent", "get_event_bus", "set_event_bus"]
