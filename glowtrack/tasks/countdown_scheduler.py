"""
Décomptes en direct, une tâche planifiée par produit affiché

Chaque produit suivi possède un job APScheduler d'id "countdown:<product_id>".
Le job est retiré quand l'affichage est fermé (cancel) ou dès que le décompte
atteint l'état expiré.

watch / cancel sont appelés depuis les requêtes API, tick depuis le worker du
scheduler : le registre et les jobs ne sont modifiés que sous self._lock.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional
import logging
import threading

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from glowtrack.core.clock import Clock, system_clock
from glowtrack.core.config import settings
from glowtrack.services.countdown import Countdown, CountdownBreakdown

logger = logging.getLogger(__name__)


class CountdownScheduler:
    def __init__(
        self,
        scheduler: BaseScheduler,
        clock: Clock = system_clock,
        interval_seconds: Optional[int] = None,
    ):
        self.scheduler = scheduler
        self.clock = clock
        self.interval_seconds = interval_seconds or settings.COUNTDOWN_TICK_SECONDS
        self._countdowns: Dict[str, Countdown] = {}
        self._lock = threading.RLock()

    @staticmethod
    def job_id(product_id: str) -> str:
        return f"countdown:{product_id}"

    def watch(
        self, product_id: str, governing: Optional[datetime]
    ) -> CountdownBreakdown:
        """
        Démarre (ou redémarre) le décompte d'un produit

        Le premier calcul est immédiat. Aucun job n'est créé si le produit
        est déjà expiré.
        """
        with self._lock:
            self._remove_job(product_id)

            countdown = Countdown(product_id, governing, self.clock)
            self._countdowns[product_id] = countdown
            breakdown = countdown.tick()

            if breakdown.expired:
                logger.info(f"Product {product_id} already expired, no countdown job")
                return breakdown

            self.scheduler.add_job(
                self.tick,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                args=[product_id],
                id=self.job_id(product_id),
                name=f"Countdown for product {product_id}",
                replace_existing=True,
                coalesce=True,
                max_instances=1,
            )

        logger.info(
            f"Watching product {product_id} (every {self.interval_seconds}s)"
        )
        return breakdown

    def tick(self, product_id: str) -> Optional[CountdownBreakdown]:
        with self._lock:
            countdown = self._countdowns.get(product_id)
            if countdown is None:
                logger.debug(f"Tick for unwatched product {product_id}")
                self._remove_job(product_id)
                return None

            breakdown = countdown.tick()

            # un watch a pu remplacer le décompte : son job ne doit pas être retiré
            if breakdown.expired and self._countdowns.get(product_id) is countdown:
                logger.info(f"Product {product_id} expired, stopping countdown")
                self._remove_job(product_id)

            return breakdown

    def snapshot(self, product_id: str) -> Optional[CountdownBreakdown]:
        countdown = self._countdowns.get(product_id)
        if countdown is None:
            return None
        return countdown.breakdown

    def is_watching(self, product_id: str) -> bool:
        return product_id in self._countdowns

    def has_job(self, product_id: str) -> bool:
        return self.scheduler.get_job(self.job_id(product_id)) is not None

    def watched(self) -> List[str]:
        with self._lock:
            return list(self._countdowns)

    def cancel(self, product_id: str) -> bool:
        with self._lock:
            self._remove_job(product_id)
            countdown = self._countdowns.pop(product_id, None)

        if countdown is None:
            return False

        logger.info(f"Stopped watching product {product_id}")
        return True

    @contextmanager
    def tracking(
        self, product_id: str, governing: Optional[datetime]
    ) -> Iterator[CountdownBreakdown]:
        """Suivi limité à la durée d'un bloc with, libéré même en cas d'erreur"""
        breakdown = self.watch(product_id, governing)
        try:
            yield breakdown
        finally:
            self.cancel(product_id)

    def shutdown(self):
        for product_id in self.watched():
            self.cancel(product_id)

    def _remove_job(self, product_id: str):
        try:
            self.scheduler.remove_job(self.job_id(product_id))
        except JobLookupError:
            return
        logger.debug(f"Removed job {self.job_id(product_id)}")
