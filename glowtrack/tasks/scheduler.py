"""
Scheduler de l'application

Un seul BackgroundScheduler, avec un seul worker : les décomptes et le
balayage de fraîcheur ne s'exécutent jamais en parallèle.
"""

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from glowtrack.tasks.countdown_scheduler import CountdownScheduler
from glowtrack.tasks.freshness_sweep import sweep_freshness
from glowtrack.core.config import settings
import logging

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(
    executors={"default": ThreadPoolExecutor(max_workers=1)},
    job_defaults={"coalesce": True, "max_instances": 1},
)
countdowns = CountdownScheduler(scheduler)


def start_scheduler():
    """
    Démarre le scheduler

    Tâches planifiées:
    1. Balayage de fraîcheur du catalogue (toutes les 24 heures par défaut)
    2. Décomptes des produits affichés (ajoutés à la demande, toutes les 10 s)
    """

    if not settings.SCHEDULER_ENABLED:
        logger.warning("Scheduler is disabled in settings")
        return

    logger.info("Starting scheduler...")

    scheduler.add_job(
        sweep_freshness,
        trigger=IntervalTrigger(hours=settings.FRESHNESS_SWEEP_INTERVAL_HOURS),
        id="freshness_sweep",
        name="Classify catalogue freshness",
        replace_existing=True,
        misfire_grace_time=300,
    )
    logger.info(
        f"✓ Scheduled: Freshness sweep "
        f"(every {settings.FRESHNESS_SWEEP_INTERVAL_HOURS} hours)"
    )

    scheduler.start()
    logger.info("Scheduler started successfully")


def stop_scheduler():
    """Arrête les décomptes puis le scheduler"""
    logger.info("Stopping scheduler...")
    countdowns.shutdown()
    if scheduler.running:
        scheduler.shutdown(wait=True)
    logger.info("Scheduler stopped")


def get_scheduler_status():
    if not scheduler.running:
        return {"running": False, "jobs": []}

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append(
            {
                "id": job.id,
                "name": job.name,
                "next_run": (
                    job.next_run_time.isoformat() if job.next_run_time else None
                ),
                "trigger": str(job.trigger),
            }
        )

    return {"running": True, "jobs": jobs}
