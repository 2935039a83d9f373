"""Tests des décomptes planifiés par produit"""

import pytest
from datetime import datetime, timedelta

from glowtrack.services.countdown import EXPIRED_BREAKDOWN


def test_watch_registers_interval_job(countdowns, paused_scheduler):
    breakdown = countdowns.watch("p-1", datetime(2025, 1, 1, 9, 30))

    assert breakdown.months == 12
    assert not breakdown.expired
    assert countdowns.is_watching("p-1")
    assert countdowns.snapshot("p-1") == breakdown

    job = paused_scheduler.get_job("countdown:p-1")
    assert job is not None
    assert job.trigger.interval == timedelta(seconds=10)


def test_tick_stops_job_when_expired(countdowns, clock):
    countdowns.watch("p-1", datetime(2024, 1, 2))
    assert countdowns.has_job("p-1")

    clock.advance(days=2)
    breakdown = countdowns.tick("p-1")

    assert breakdown == EXPIRED_BREAKDOWN
    assert not countdowns.has_job("p-1")
    # le résultat expiré reste consultable
    assert countdowns.snapshot("p-1") == EXPIRED_BREAKDOWN


def test_tick_keeps_job_of_countdown_replaced_mid_tick(countdowns, clock, monkeypatch):
    countdowns.watch("p-1", datetime(2024, 1, 2))
    stale = countdowns._countdowns["p-1"]

    def tick_while_rewatched():
        # l'utilisateur change les dates pendant le calcul du tick
        countdowns.watch("p-1", datetime(2025, 1, 1, 9, 30))
        return EXPIRED_BREAKDOWN

    monkeypatch.setattr(stale, "tick", tick_while_rewatched)
    clock.advance(days=2)

    assert countdowns.tick("p-1") == EXPIRED_BREAKDOWN
    assert countdowns.has_job("p-1")
    snapshot = countdowns.snapshot("p-1")
    assert not snapshot.expired
    assert snapshot.months == 11


def test_tick_recomputes_while_in_future(countdowns, clock):
    countdowns.watch("p-1", datetime(2024, 1, 20, 9, 30))
    assert countdowns.snapshot("p-1").weeks == 2

    clock.advance(days=7)
    breakdown = countdowns.tick("p-1")

    assert breakdown.weeks == 1
    assert breakdown.days == 5
    assert countdowns.has_job("p-1")


def test_watch_expired_product_creates_no_job(countdowns, clock):
    breakdown = countdowns.watch("p-1", clock.now() - timedelta(days=1))

    assert breakdown == EXPIRED_BREAKDOWN
    assert not countdowns.has_job("p-1")
    assert countdowns.snapshot("p-1") == EXPIRED_BREAKDOWN


def test_watch_untracked_product_creates_no_job(countdowns):
    assert countdowns.watch("p-1", None) == EXPIRED_BREAKDOWN
    assert not countdowns.has_job("p-1")


def test_watch_twice_replaces_job(countdowns, paused_scheduler):
    countdowns.watch("p-1", datetime(2025, 1, 1))
    countdowns.watch("p-1", datetime(2024, 6, 1))

    assert len(paused_scheduler.get_jobs()) == 1
    assert countdowns.snapshot("p-1").months == 4


def test_cancel_releases_job(countdowns):
    countdowns.watch("p-1", datetime(2025, 1, 1))

    assert countdowns.cancel("p-1") is True
    assert not countdowns.has_job("p-1")
    assert not countdowns.is_watching("p-1")
    assert countdowns.snapshot("p-1") is None
    assert countdowns.cancel("p-1") is False


def test_tracking_context_releases_job(countdowns):
    with countdowns.tracking("p-1", datetime(2025, 1, 1)) as breakdown:
        assert breakdown.months == 12
        assert countdowns.has_job("p-1")

    assert not countdowns.has_job("p-1")
    assert not countdowns.is_watching("p-1")


def test_tracking_context_releases_job_on_error(countdowns):
    with pytest.raises(RuntimeError):
        with countdowns.tracking("p-1", datetime(2025, 1, 1)):
            raise RuntimeError("view crashed")

    assert not countdowns.has_job("p-1")


def test_tick_unknown_product(countdowns):
    assert countdowns.tick("missing") is None


def test_countdowns_are_independent(countdowns, clock):
    countdowns.watch("p-1", datetime(2024, 1, 2))
    countdowns.watch("p-2", datetime(2025, 1, 1))

    clock.advance(days=2)
    countdowns.tick("p-1")
    countdowns.tick("p-2")

    assert not countdowns.has_job("p-1")
    assert countdowns.has_job("p-2")


def test_shutdown_cancels_everything(countdowns, paused_scheduler):
    countdowns.watch("p-1", datetime(2025, 1, 1))
    countdowns.watch("p-2", datetime(2025, 6, 1))

    countdowns.shutdown()

    assert countdowns.watched() == []
    assert paused_scheduler.get_jobs() == []
