"""
Décompte mois / semaines / jours jusqu'à l'expiration qui gouverne
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from glowtrack.core.clock import Clock, system_clock
from glowtrack.utils.date_helpers import to_utc_naive, add_months, whole_months_between


@dataclass(frozen=True)
class CountdownBreakdown:
    months: int
    weeks: int
    days: int
    expired: bool


EXPIRED_BREAKDOWN = CountdownBreakdown(months=0, weeks=0, days=0, expired=True)


def project(governing: Optional[datetime], now: datetime) -> CountdownBreakdown:
    governing = to_utc_naive(governing)
    now = to_utc_naive(now)

    if governing is None or governing <= now:
        return EXPIRED_BREAKDOWN

    # mois calendaires, pas des blocs de 30 jours
    months = whole_months_between(now, governing)
    anchor = add_months(now, months)
    remaining_days = (governing - anchor).days

    return CountdownBreakdown(
        months=months,
        weeks=max(0, remaining_days // 7),
        days=max(0, remaining_days % 7),
        expired=False,
    )


class Countdown:
    """
    Décompte d'un produit affiché

    Une fois expiré, le résultat reste figé à zéro : plus aucun calcul.
    """

    def __init__(
        self,
        product_id: str,
        governing: Optional[datetime],
        clock: Clock = system_clock,
    ):
        self.product_id = product_id
        self.governing = to_utc_naive(governing)
        self.clock = clock
        self.breakdown: Optional[CountdownBreakdown] = None

    @property
    def expired(self) -> bool:
        return self.breakdown is not None and self.breakdown.expired

    def tick(self) -> CountdownBreakdown:
        if self.expired:
            return self.breakdown

        self.breakdown = project(self.governing, self.clock.now())
        return self.breakdown

    def __repr__(self):
        return f"<Countdown(product_id={self.product_id}, breakdown={self.breakdown})>"
