from glowtrack.core.config import settings
from glowtrack.core.database import Base, engine, SessionLocal, get_db
from glowtrack.core.clock import Clock, SystemClock, FixedClock, get_clock

__all__ = [
    "settings",
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "Clock",
    "SystemClock",
    "FixedClock",
    "get_clock",
]
