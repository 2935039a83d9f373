"""
Source de temps injectable

Toutes les valeurs retournées sont des datetimes UTC naïfs, comme celles
stockées en base.
"""

from datetime import datetime, timedelta, timezone


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock(Clock):
    """Horloge figée, utilisée par les tests"""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> datetime:
        self.instant = self.instant + timedelta(**kwargs)
        return self.instant


system_clock = SystemClock()


def get_clock() -> Clock:
    return system_clock
