from datetime import datetime
from typing import Dict, Iterable, Optional
import logging

from glowtrack.core.clock import Clock, system_clock
from glowtrack.core.database import SessionLocal
from glowtrack.models.product import Product
from glowtrack.services.expiration import FreshnessTier, freshness_tier, governing_expiration
from glowtrack.services.product_store import ProductStore

logger = logging.getLogger(__name__)


def count_tiers(
    products: Iterable[Product], now: datetime, warning_days: Optional[int] = None
) -> Dict[str, int]:
    stats = {tier.value: 0 for tier in FreshnessTier}
    stats["UNTRACKED"] = 0
    stats["total"] = 0

    for product in products:
        stats[freshness_tier(product, now, warning_days).value] += 1
        if governing_expiration(product) is None:
            stats["UNTRACKED"] += 1
        stats["total"] += 1

    return stats


def sweep_freshness(clock: Clock = system_clock):
    logger.info("Starting freshness sweep...")

    db = SessionLocal()
    try:
        products = ProductStore(db).list()
        stats = count_tiers(products, clock.now())

        logger.info(
            f"Freshness sweep completed. Stats: "
            f"FRESH={stats['FRESH']}, "
            f"EXPIRY_SOON={stats['EXPIRY_SOON']}, "
            f"EXPIRED={stats['EXPIRED']}, "
            f"UNTRACKED={stats['UNTRACKED']}, "
            f"Total={stats['total']}"
        )

        return stats

    except Exception as e:
        logger.error(f"Error during freshness sweep: {e}", exc_info=True)
        raise
    finally:
        db.close()
