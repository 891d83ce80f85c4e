"""Scheduling: periodic timers and the feed monitoring scheduler."""

from token_sniper.services.scheduler.periodic_task import PeriodicTask
from token_sniper.services.scheduler.scheduler import MonitoringScheduler, SchedulerStatus

__all__ = ["MonitoringScheduler", "PeriodicTask", "SchedulerStatus"]
