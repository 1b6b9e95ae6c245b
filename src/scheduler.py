"""
Synchronisation planifiee du catalogue.

Un AsyncIOScheduler (APScheduler) declenche SyncCoordinator.run() selon
une expression cron (quotidienne a minuit par defaut). Le job ne fait
rien de plus qu'un declenchement manuel : il distingue seulement, dans
les logs, un conflit (synchronisation deja en cours) d'un vrai echec.
"""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from src.core.errors import SyncConflictError, SyncInternalError

SYNC_JOB_ID = "catalog_sync"

_scheduler: Optional[AsyncIOScheduler] = None


async def scheduled_sync_job(container) -> None:
    """Job planifie : lance une synchronisation et journalise son issue."""
    logger.info("Synchronisation planifiee demarree")
    coordinator = container.sync_coordinator()
    try:
        report = await coordinator.run()
    except SyncConflictError:
        logger.warning("Synchronisation planifiee ignoree: une synchronisation est deja en cours")
        return
    except SyncInternalError as e:
        logger.error(f"Synchronisation planifiee en echec: {e}")
        return
    logger.info(
        f"Synchronisation planifiee terminee: {report.movies_created} film(s), "
        f"{report.characters_created} personnage(s)"
    )


def init_scheduler(container) -> Optional[AsyncIOScheduler]:
    """
    Cree et demarre le scheduler si la planification est activee.

    Doit etre appele depuis une boucle asyncio en cours (lifespan FastAPI).

    Returns:
        Le scheduler demarre, ou None si HOLOCRON_SYNC_SCHEDULE_ENABLED=false
    """
    global _scheduler
    settings = container.config()
    if not settings.sync_schedule_enabled:
        logger.info("Synchronisation planifiee desactivee")
        return None

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        scheduled_sync_job,
        trigger=CronTrigger(hour=settings.sync_cron_hour, minute=settings.sync_cron_minute),
        args=[container],
        id=SYNC_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    _scheduler = scheduler
    logger.info(
        f"Synchronisation planifiee chaque jour a "
        f"{settings.sync_cron_hour:02d}:{settings.sync_cron_minute:02d}"
    )
    return scheduler


def shutdown_scheduler() -> None:
    """Arrete le scheduler s'il a ete demarre."""
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
