import asyncio
import logging
from functools import wraps

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def transactional(func):
    """
    Décorateur de transaction pour les méthodes de store / service

    La méthode décorée travaille sur self.db : commit si elle retourne,
    rollback puis propagation de l'erreur sinon.
    """

    def _rollback(db: Session, exc: Exception):
        db.rollback()
        logger.error(
            f"Transaction rolled back in {func.__qualname__}: {exc}", exc_info=True
        )

    @wraps(func)
    async def async_wrapper(self, *args, **kwargs):
        db: Session = self.db
        try:
            result = await func(self, *args, **kwargs)
            db.commit()
        except Exception as e:
            _rollback(db, e)
            raise
        logger.debug(f"Transaction committed in {func.__qualname__}")
        return result

    @wraps(func)
    def sync_wrapper(self, *args, **kwargs):
        db: Session = self.db
        try:
            result = func(self, *args, **kwargs)
            db.commit()
        except Exception as e:
            _rollback(db, e)
            raise
        logger.debug(f"Transaction committed in {func.__qualname__}")
        return result

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper
