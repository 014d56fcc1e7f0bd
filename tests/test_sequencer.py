"""
Queue number sequencer tests

Tests:
  1. First number on an empty database is 1 and creates the counter row
  2. Sequential calls strictly increase by one
  3. 50 concurrent callers get 50 distinct, gap-free numbers
  4. Conflicts that exhaust the retry budget never duplicate or skip numbers
  5. Database failures surface as SequencerError
"""
import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import get_settings
from app.core.errors import SequencerError
from app.core.optimistic_lock import StaleDataError, with_optimistic_retry
from app.db import sequencer
from app.db.database import SessionLocal
from app.db.sequencer import next_queue_number

from conftest import counter_value


async def _next() -> int:
    async with SessionLocal() as session:
        return await next_queue_number(session)


# ─── Test 1: Bootstrap ─────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_first_queue_number_is_one(database):
    assert await counter_value() is None
    assert await _next() == 1
    assert await counter_value() == 1


# ─── Test 2: Monotonicity ──────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_sequential_numbers_strictly_increase(database):
    numbers = [await _next() for _ in range(10)]
    assert numbers == list(range(1, 11))
    assert await counter_value() == 10


@pytest.mark.asyncio
async def test_named_counters_are_independent(database):
    async with SessionLocal() as session:
        assert await next_queue_number(session, "queue") == 1
        assert await next_queue_number(session, "queue") == 2
        assert await next_queue_number(session, "pickup") == 1
    assert await counter_value("queue") == 2
    assert await counter_value("pickup") == 1


# ─── Test 3: Uniqueness under contention ───────────────────────────────────────
@pytest.mark.asyncio
async def test_concurrent_callers_get_distinct_gap_free_numbers(database):
    """
    Fire 50 concurrent callers against an empty counter. Every caller must
    succeed, no number may repeat, and the numbers must be exactly 1..50.
    """
    n = 50
    numbers = await asyncio.gather(*[_next() for _ in range(n)])

    assert len(set(numbers)) == n, f"Duplicate queue numbers handed out: {sorted(numbers)}"
    assert sorted(numbers) == list(range(1, n + 1))
    assert await counter_value() == n


# ─── Test 4: Exhausted retries ─────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_exhausted_retries_fail_without_consuming_numbers(database, monkeypatch):
    """
    With a single attempt allowed, losers of a race fail with SequencerError.
    Whatever succeeded must still be distinct and contiguous from 1, and the
    counter must equal the number of successes.
    """
    monkeypatch.setattr(get_settings(), "OPT_LOCK_MAX_RETRIES", 1)

    results = await asyncio.gather(*[_next() for _ in range(20)], return_exceptions=True)

    successes = [r for r in results if isinstance(r, int)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert all(isinstance(f, SequencerError) for f in failures), failures
    assert sorted(successes) == list(range(1, len(successes) + 1))
    assert await counter_value() == len(successes)


@pytest.mark.asyncio
async def test_persistent_conflict_raises_sequencer_error(database, monkeypatch):
    monkeypatch.setattr(get_settings(), "OPT_LOCK_MAX_RETRIES", 3)
    calls = 0

    async def always_stale(db, name):
        nonlocal calls
        calls += 1
        raise StaleDataError("lost the race")

    # Re-wrap so the retry decorator sees the conflicting body
    monkeypatch.setattr(sequencer, "_advance_counter", with_optimistic_retry()(always_stale))

    with pytest.raises(SequencerError):
        await _next()
    assert calls == 3


# ─── Test 5: Database failure ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_database_error_raises_sequencer_error(database, monkeypatch):
    async def broken(db, name):
        raise OperationalError("UPDATE counters", {}, Exception("disk I/O error"))

    monkeypatch.setattr(sequencer, "_advance_counter", broken)

    with pytest.raises(SequencerError):
        await _next()
    assert await counter_value() is None
