from glowtrack.tasks.scheduler import (
    scheduler,
    countdowns,
    start_scheduler,
    stop_scheduler,
    get_scheduler_status,
)
from glowtrack.tasks.countdown_scheduler import CountdownScheduler
from glowtrack.tasks.freshness_sweep import count_tiers, sweep_freshness

__all__ = [
    "scheduler",
    "countdowns",
    "start_scheduler",
    "stop_scheduler",
    "get_scheduler_status",
    "CountdownScheduler",
    "count_tiers",
    "sweep_freshness",
]
