"""
Calcul de la date d'expiration d'un produit cosmétique

Deux signaux indépendants :
- une date d'expiration fixe (expiry_date)
- une période après ouverture (PAO) en mois, comptée depuis date_added

La date qui gouverne est la plus proche des deux. Les fonctions de ce module
sont pures : elles lisent un instantané du produit et ne le modifient jamais.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from glowtrack.core.config import settings
from glowtrack.utils.date_helpers import (
    to_utc_naive,
    add_months,
    calendar_days_between,
    format_short_date,
)


class ProductSnapshot(Protocol):
    date_added: datetime
    pao_months: Optional[int]
    expiry_date: Optional[datetime]


class FreshnessTier(str, enum.Enum):
    FRESH = "FRESH"
    EXPIRY_SOON = "EXPIRY_SOON"
    EXPIRED = "EXPIRED"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class ExpirationStatus:
    governing_expiration: Optional[datetime]
    freshness_tier: FreshnessTier
    days_remaining: Optional[int]
    tracking_method: str
    formatted_expiry_date: Optional[str]

    @property
    def label(self) -> str:
        return self.freshness_tier.label


def pao_limit(product: ProductSnapshot) -> Optional[datetime]:
    if not product.pao_months:
        return None

    return add_months(to_utc_naive(product.date_added), product.pao_months)


def governing_expiration(product: ProductSnapshot) -> Optional[datetime]:
    candidate = to_utc_naive(product.expiry_date)

    limit = pao_limit(product)
    if limit is not None and (candidate is None or limit < candidate):
        candidate = limit

    return candidate


def is_expired(product: ProductSnapshot, now: datetime) -> bool:
    governing = governing_expiration(product)
    if governing is None:
        return False

    return governing < to_utc_naive(now)


def days_until_expiration(product: ProductSnapshot, now: datetime) -> Optional[int]:
    """Nombre de jours calendaires entre minuit de now et minuit de l'expiration"""
    governing = governing_expiration(product)
    if governing is None:
        return None

    return calendar_days_between(to_utc_naive(now), governing)


def freshness_tier(
    product: ProductSnapshot,
    now: datetime,
    warning_days: Optional[int] = None,
) -> FreshnessTier:
    if warning_days is None:
        warning_days = settings.EXPIRY_SOON_DAYS

    if is_expired(product, now):
        return FreshnessTier.EXPIRED

    days_remaining = days_until_expiration(product, now)
    if days_remaining is not None and days_remaining <= warning_days:
        return FreshnessTier.EXPIRY_SOON

    return FreshnessTier.FRESH


def tracking_method_description(product: ProductSnapshot) -> str:
    if product.pao_months and product.expiry_date:
        return f"Tracking by PAO ({product.pao_months} months) & Expiry Date"
    if product.pao_months:
        return f"Tracking by PAO ({product.pao_months} months)"
    if product.expiry_date:
        return "Tracking by Fixed Expiry Date"
    return "No Tracking Method Set"


def format_expiry_date(product: ProductSnapshot) -> Optional[str]:
    return format_short_date(to_utc_naive(product.expiry_date))


def evaluate(
    product: ProductSnapshot,
    now: datetime,
    warning_days: Optional[int] = None,
) -> ExpirationStatus:
    return ExpirationStatus(
        governing_expiration=governing_expiration(product),
        freshness_tier=freshness_tier(product, now, warning_days),
        days_remaining=days_until_expiration(product, now),
        tracking_method=tracking_method_description(product),
        formatted_expiry_date=format_expiry_date(product),
    )
