from fastapi import Depends
from sqlalchemy.orm import Session

from glowtrack.core.database import get_db
from glowtrack.models.product import Product
from glowtrack.services.product_store import ProductStore
from glowtrack.tasks.countdown_scheduler import CountdownScheduler
from glowtrack.tasks.scheduler import countdowns
from glowtrack.utils.exceptions import ProductNotFoundException


def get_product_store(db: Session = Depends(get_db)) -> ProductStore:
    return ProductStore(db)


def get_countdown_scheduler() -> CountdownScheduler:
    return countdowns


def get_product_or_404(
    product_id: str, store: ProductStore = Depends(get_product_store)
) -> Product:
    product = store.get(product_id)

    if not product:
        raise ProductNotFoundException()
    return product
