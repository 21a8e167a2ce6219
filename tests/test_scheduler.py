"""Tests for the periodic catch-up scheduler."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from wealthtrack.config import TestingConfig
from wealthtrack.scheduler import CATCH_UP_JOB_ID, CatchUpScheduler, create_scheduler


class _Store:
    """In-memory stand-in for the host application's persistence."""

    def __init__(self, portfolio):
        self.portfolio = portfolio
        self.saved = []

    def load(self):
        return self.portfolio

    def save(self, result):
        self.saved.append(result)
        self.portfolio = result.portfolio


@pytest.fixture
def config(monkeypatch):
    monkeypatch.setenv("WEALTHTRACK_CATCH_UP_INTERVAL_MINUTES", "15")
    return TestingConfig()


def test_run_once_persists_applied_occurrences(sample_portfolio, config):
    store = _Store(sample_portfolio)
    scheduler = CatchUpScheduler(store.load, store.save, config=config, clock=lambda: date(2025, 1, 20))

    result = scheduler.run_once()

    assert result is not None
    assert len(store.saved) == 1
    assert store.portfolio.debts[0].paid_to_date == 200.0


def test_run_once_without_due_items_skips_sink(sample_portfolio, config):
    store = _Store(sample_portfolio)
    scheduler = CatchUpScheduler(store.load, store.save, config=config, clock=lambda: date(2025, 1, 20))

    scheduler.run_once()
    assert scheduler.run_once() is None
    assert len(store.saved) == 1


def test_clock_advancing_applies_only_new_occurrences(sample_portfolio, config):
    store = _Store(sample_portfolio)
    today = {"value": date(2025, 1, 6)}
    scheduler = CatchUpScheduler(store.load, store.save, config=config, clock=lambda: today["value"])

    scheduler.run_once()
    today["value"] += timedelta(days=7)
    second = scheduler.run_once()

    assert [(o.account_id, o.due_on) for o in second.occurrences] == [
        ("emergency", date(2025, 1, 13)),
    ]


def test_provider_failure_propagates_when_not_running(config):
    def broken():
        raise RuntimeError("storage unavailable")

    scheduler = CatchUpScheduler(broken, lambda result: None, config=config)

    with pytest.raises(RuntimeError):
        scheduler.run_once()


def test_start_registers_interval_job_and_stop_shuts_down(sample_portfolio, config):
    store = _Store(sample_portfolio)
    scheduler = create_scheduler(store.load, store.save, config=config)
    scheduler.clock = lambda: date(2025, 1, 1)

    scheduler.start()
    try:
        assert scheduler.running
        job = scheduler.scheduler.get_job(CATCH_UP_JOB_ID)
        assert job is not None
        assert job.trigger.interval == timedelta(minutes=15)
        # start() performs an immediate pass
        assert len(store.saved) == 1
    finally:
        scheduler.stop()

    assert not scheduler.running


def test_start_twice_is_harmless(sample_portfolio, config):
    store = _Store(sample_portfolio)
    scheduler = CatchUpScheduler(store.load, store.save, config=config, clock=lambda: date(2024, 1, 1))

    scheduler.start()
    try:
        first = scheduler.scheduler
        scheduler.start()
        assert scheduler.scheduler is first
    finally:
        scheduler.stop()
