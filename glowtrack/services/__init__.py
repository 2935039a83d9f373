"""
Business logic services
"""

from glowtrack.services.product_store import ProductStore
from glowtrack.services import expiration
from glowtrack.services.countdown import Countdown, CountdownBreakdown, project

__all__ = [
    "ProductStore",
    "expiration",
    "Countdown",
    "CountdownBreakdown",
    "project",
]
