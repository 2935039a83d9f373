from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional
from datetime import datetime

from glowtrack.core.clock import Clock, get_clock
from glowtrack.core.dependencies import (
    get_product_store,
    get_countdown_scheduler,
    get_product_or_404,
)
from glowtrack.models.product import Product, ProductCategory
from glowtrack.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ExpirationStatusResponse,
)
from glowtrack.schemas.countdown import (
    CountdownResponse,
    ProductStatusResponse,
    FreshnessSummaryResponse,
)
from glowtrack.services import expiration
from glowtrack.services.countdown import project
from glowtrack.services.product_store import ProductStore
from glowtrack.tasks.countdown_scheduler import CountdownScheduler
from glowtrack.tasks.freshness_sweep import count_tiers
from glowtrack.utils.exceptions import ProductNotFoundException

router = APIRouter(prefix="/products", tags=["Products"])


def build_status(product: Product, now: datetime) -> ExpirationStatusResponse:
    status = expiration.evaluate(product, now)
    return ExpirationStatusResponse(
        governing_expiration=status.governing_expiration,
        freshness_tier=status.freshness_tier,
        label=status.label,
        days_remaining=status.days_remaining,
        tracking_method=status.tracking_method,
        formatted_expiry_date=status.formatted_expiry_date,
    )


def build_product_response(product: Product, now: datetime) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    response.status = build_status(product, now)
    return response


def refresh_countdown(product: Product, countdowns: CountdownScheduler):
    """Les dates ont pu changer : un décompte en cours repart sur la nouvelle échéance"""
    if countdowns.is_watching(product.id):
        countdowns.watch(product.id, expiration.governing_expiration(product))


@router.get("", response_model=List[ProductResponse])
def list_products(
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[ProductCategory] = None,
    store: ProductStore = Depends(get_product_store),
    clock: Clock = Depends(get_clock),
):
    """Liste du plus récent au plus ancien"""
    now = clock.now()
    return [
        build_product_response(product, now)
        for product in store.list(search=search, category=category)
    ]


@router.get("/summary", response_model=FreshnessSummaryResponse)
def freshness_summary(
    store: ProductStore = Depends(get_product_store),
    clock: Clock = Depends(get_clock),
):
    return count_tiers(store.list(), clock.now())


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    request: ProductCreate,
    store: ProductStore = Depends(get_product_store),
    clock: Clock = Depends(get_clock),
):
    now = clock.now()
    product = Product(**request.model_dump(), date_added=now)
    product = store.add(product)
    return build_product_response(product, now)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product: Product = Depends(get_product_or_404),
    clock: Clock = Depends(get_clock),
):
    return build_product_response(product, clock.now())


@router.put("/{product_id}", response_model=ProductResponse)
def save_product(
    product_id: str,
    request: ProductCreate,
    response: Response,
    store: ProductStore = Depends(get_product_store),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
    clock: Clock = Depends(get_clock),
):
    """Upsert : met à jour le produit s'il existe, le crée avec cet id sinon"""
    now = clock.now()
    created = store.get(product_id) is None

    product = store.save(Product(id=product_id, **request.model_dump(), date_added=now))

    if created:
        response.status_code = 201
    else:
        refresh_countdown(product, countdowns)

    return build_product_response(product, now)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    request: ProductUpdate,
    store: ProductStore = Depends(get_product_store),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
    clock: Clock = Depends(get_clock),
):
    """Modifier un produit"""
    product = store.update(product_id, **request.model_dump(exclude_unset=True))
    refresh_countdown(product, countdowns)
    return build_product_response(product, clock.now())


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
):
    if not store.delete(product_id):
        raise ProductNotFoundException()

    countdowns.cancel(product_id)
    return None


@router.get("/{product_id}/status", response_model=ProductStatusResponse)
def get_product_status(
    product: Product = Depends(get_product_or_404),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
    clock: Clock = Depends(get_clock),
):
    now = clock.now()
    status = build_status(product, now)

    breakdown = countdowns.snapshot(product.id)
    if breakdown is None:
        breakdown = project(status.governing_expiration, now)

    return ProductStatusResponse(
        **status.model_dump(),
        product_id=product.id,
        countdown=CountdownResponse.model_validate(breakdown),
    )
