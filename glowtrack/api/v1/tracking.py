from fastapi import APIRouter, Depends

from glowtrack.core.dependencies import get_countdown_scheduler, get_product_or_404
from glowtrack.models.product import Product
from glowtrack.schemas.countdown import CountdownResponse, TrackingResponse
from glowtrack.services.expiration import governing_expiration
from glowtrack.tasks.countdown_scheduler import CountdownScheduler
from glowtrack.utils.exceptions import TrackingNotFoundException

router = APIRouter(prefix="/products/{product_id}/tracking", tags=["Tracking"])


@router.post("", response_model=TrackingResponse)
def start_tracking(
    product: Product = Depends(get_product_or_404),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
):
    """Ouverture de l'écran de suivi : décompte rafraîchi périodiquement"""
    governing = governing_expiration(product)
    breakdown = countdowns.watch(product.id, governing)

    return TrackingResponse(
        product_id=product.id,
        governing_expiration=governing,
        countdown=CountdownResponse.model_validate(breakdown),
    )


@router.get("", response_model=TrackingResponse)
def get_tracking(
    product: Product = Depends(get_product_or_404),
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
):
    breakdown = countdowns.snapshot(product.id)
    if breakdown is None:
        raise TrackingNotFoundException()

    return TrackingResponse(
        product_id=product.id,
        governing_expiration=governing_expiration(product),
        countdown=CountdownResponse.model_validate(breakdown),
    )


@router.delete("", status_code=204)
def stop_tracking(
    product_id: str,
    countdowns: CountdownScheduler = Depends(get_countdown_scheduler),
):
    """Fermeture de l'écran de suivi"""
    if not countdowns.cancel(product_id):
        raise TrackingNotFoundException()
    return None
