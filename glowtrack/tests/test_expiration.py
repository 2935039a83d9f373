"""Tests du calcul d'expiration"""

import pytest
from datetime import datetime, timedelta, timezone

from glowtrack.models.product import Product
from glowtrack.services import expiration
from glowtrack.services.expiration import FreshnessTier


def snapshot(date_added=datetime(2024, 1, 1), pao_months=None, expiry_date=None):
    return Product(date_added=date_added, pao_months=pao_months, expiry_date=expiry_date)


def test_expiry_date_only_governs():
    product = snapshot(expiry_date=datetime(2024, 6, 15))
    assert expiration.governing_expiration(product) == datetime(2024, 6, 15)


def test_pao_only_uses_calendar_months():
    product = snapshot(date_added=datetime(2024, 1, 1), pao_months=12)
    assert expiration.governing_expiration(product) == datetime(2025, 1, 1)


def test_earliest_signal_wins_expiry_first():
    """Scénario : PAO au 01/07/2024, date fixe au 15/06/2024"""
    product = snapshot(
        date_added=datetime(2024, 5, 1),
        pao_months=2,
        expiry_date=datetime(2024, 6, 15),
    )
    assert expiration.pao_limit(product) == datetime(2024, 7, 1)
    assert expiration.governing_expiration(product) == datetime(2024, 6, 15)


def test_earliest_signal_wins_pao_first():
    product = snapshot(
        date_added=datetime(2024, 1, 1),
        pao_months=2,
        expiry_date=datetime(2024, 12, 31),
    )
    assert expiration.governing_expiration(product) == datetime(2024, 3, 1)


def test_untracked_product():
    product = snapshot()
    now = datetime(2030, 1, 1)

    assert expiration.governing_expiration(product) is None
    assert expiration.days_until_expiration(product, now) is None
    assert expiration.is_expired(product, now) is False
    assert expiration.freshness_tier(product, now) == FreshnessTier.FRESH


@pytest.mark.parametrize(
    "date_added, expected",
    [
        (datetime(2024, 1, 31), datetime(2024, 2, 29)),
        (datetime(2023, 1, 31), datetime(2023, 2, 28)),
        (datetime(2024, 3, 31), datetime(2024, 4, 30)),
    ],
)
def test_pao_clamps_to_end_of_month(date_added, expected):
    product = snapshot(date_added=date_added, pao_months=1)
    assert expiration.governing_expiration(product) == expected


def test_aware_datetimes_are_normalized_to_utc():
    paris_summer = timezone(timedelta(hours=2))
    product = snapshot(expiry_date=datetime(2024, 6, 15, 2, 0, tzinfo=paris_summer))

    assert expiration.governing_expiration(product) == datetime(2024, 6, 15, 0, 0)


def test_is_expired_is_strict():
    product = snapshot(expiry_date=datetime(2024, 6, 15, 12, 0))

    assert not expiration.is_expired(product, datetime(2024, 6, 15, 12, 0))
    assert expiration.is_expired(product, datetime(2024, 6, 15, 12, 0, 1))


def test_expired_one_day_ago():
    now = datetime(2024, 6, 15, 10, 0)
    product = snapshot(expiry_date=now - timedelta(days=1))

    assert expiration.freshness_tier(product, now) == FreshnessTier.EXPIRED


def test_expiry_soon_within_45_days():
    now = datetime(2024, 6, 15, 10, 0)
    product = snapshot(expiry_date=now + timedelta(days=45))

    assert expiration.days_until_expiration(product, now) == 45
    assert expiration.freshness_tier(product, now) == FreshnessTier.EXPIRY_SOON


@pytest.mark.parametrize(
    "expiry_date, expected",
    [
        (datetime(2024, 3, 31, 12, 0), FreshnessTier.EXPIRY_SOON),
        (datetime(2024, 4, 1, 0, 30), FreshnessTier.FRESH),
    ],
)
@pytest.mark.parametrize(
    "now", [datetime(2024, 1, 1, 0, 1), datetime(2024, 1, 1, 23, 59)]
)
def test_threshold_is_stable_across_time_of_day(now, expiry_date, expected):
    """90 jours calendaires : le résultat ne dépend pas de l'heure"""
    product = snapshot(expiry_date=expiry_date)
    assert expiration.freshness_tier(product, now) == expected


def test_custom_warning_days():
    now = datetime(2024, 1, 1)
    product = snapshot(expiry_date=datetime(2024, 1, 20))

    assert expiration.freshness_tier(product, now, warning_days=7) == FreshnessTier.FRESH
    assert (
        expiration.freshness_tier(product, now, warning_days=30)
        == FreshnessTier.EXPIRY_SOON
    )


def test_tier_becomes_expired_once_and_never_reverts():
    product = snapshot(date_added=datetime(2024, 1, 1), pao_months=6)
    start = datetime(2024, 1, 1)

    tiers = [
        expiration.freshness_tier(product, start + timedelta(days=offset))
        for offset in range(0, 400, 3)
    ]

    first_expired = tiers.index(FreshnessTier.EXPIRED)
    assert all(tier != FreshnessTier.EXPIRED for tier in tiers[:first_expired])
    assert all(tier == FreshnessTier.EXPIRED for tier in tiers[first_expired:])


def test_tracking_method_description():
    assert (
        expiration.tracking_method_description(
            snapshot(pao_months=12, expiry_date=datetime(2025, 1, 1))
        )
        == "Tracking by PAO (12 months) & Expiry Date"
    )
    assert (
        expiration.tracking_method_description(snapshot(pao_months=6))
        == "Tracking by PAO (6 months)"
    )
    assert (
        expiration.tracking_method_description(
            snapshot(expiry_date=datetime(2025, 1, 1))
        )
        == "Tracking by Fixed Expiry Date"
    )
    assert expiration.tracking_method_description(snapshot()) == "No Tracking Method Set"


def test_format_expiry_date():
    assert expiration.format_expiry_date(snapshot(expiry_date=datetime(2024, 6, 15))) == "06/15/24"
    assert expiration.format_expiry_date(snapshot(pao_months=6)) is None


def test_evaluate_bundles_status():
    now = datetime(2024, 5, 1)
    product = snapshot(
        date_added=datetime(2024, 5, 1),
        pao_months=2,
        expiry_date=datetime(2024, 6, 15),
    )

    status = expiration.evaluate(product, now)

    assert status.governing_expiration == datetime(2024, 6, 15)
    assert status.freshness_tier == FreshnessTier.EXPIRY_SOON
    assert status.label == "EXPIRY SOON"
    assert status.days_remaining == 45
    assert status.formatted_expiry_date == "06/15/24"


def test_tier_labels():
    assert FreshnessTier.FRESH.label == "FRESH"
    assert FreshnessTier.EXPIRY_SOON.label == "EXPIRY SOON"
    assert FreshnessTier.EXPIRED.label == "EXPIRED"


def test_product_is_not_mutated():
    product = snapshot(date_added=datetime(2024, 1, 1), pao_months=3)
    expiration.evaluate(product, datetime(2024, 2, 1))

    assert product.date_added == datetime(2024, 1, 1)
    assert product.pao_months == 3
    assert product.expiry_date is None
