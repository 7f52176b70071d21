"""Unit tests for the in-memory fortune store."""

import threading
from datetime import timedelta
from unittest.mock import Mock

import pytest

from app.adapters.fortune_store.in_memory import InMemoryFortuneStore

HOUR = 3600.0


def test_unknown_user_can_get_fortune() -> None:
    store = InMemoryFortuneStore()

    assert store.can_user_get_fortune("never-seen") is True
    assert store.get_user("never-seen") is None
    assert store.get_user_fortune("never-seen") is None
    assert store.next_fortune_at("never-seen") is None


def test_blocked_until_cooldown_elapses() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(cooldown_hours=24, clock=clock)

    store.create_user_fortune("u1", "x")
    assert store.can_user_get_fortune("u1") is False

    clock.return_value = 1000.0 + 24 * HOUR - 1
    assert store.can_user_get_fortune("u1") is False

    clock.return_value = 1000.0 + 24 * HOUR
    assert store.can_user_get_fortune("u1") is True


def test_cooldown_is_real_valued_hours() -> None:
    clock = Mock(return_value=0.0)
    store = InMemoryFortuneStore(cooldown_hours=1.5, clock=clock)
    store.create_user_fortune("u1", "x")

    clock.return_value = 1.4 * HOUR
    assert store.can_user_get_fortune("u1") is False

    clock.return_value = 1.5 * HOUR
    assert store.can_user_get_fortune("u1") is True


def test_second_grant_replaces_first() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(clock=clock)

    first = store.create_user_fortune("u1", "first")
    clock.return_value = 2000.0
    second = store.create_user_fortune("u1", "second")

    latest = store.get_user_fortune("u1")
    assert latest == second
    assert latest.fortune_text == "second"
    assert second.id == first.id + 1


def test_create_refreshes_user_timestamp_and_keeps_identity() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(clock=clock)

    store.create_user_fortune("u1", "first")
    user_before = store.get_user("u1")

    clock.return_value = 5000.0
    fortune = store.create_user_fortune("u1", "second")
    user_after = store.get_user("u1")

    assert user_after.id == user_before.id
    assert user_after.last_fortune_at > user_before.last_fortune_at
    assert user_after.last_fortune_at >= fortune.created_at


def test_users_get_sequential_ids() -> None:
    store = InMemoryFortuneStore()

    store.create_user_fortune("a", "x")
    store.create_user_fortune("b", "y")

    assert store.get_user("a").id == 1
    assert store.get_user("b").id == 2


def test_create_ignores_cooldown() -> None:
    store = InMemoryFortuneStore(clock=Mock(return_value=1000.0))

    store.create_user_fortune("u1", "first")
    store.create_user_fortune("u1", "second")

    assert store.get_user_fortune("u1").fortune_text == "second"


def test_grant_respects_cooldown() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(cooldown_hours=24, clock=clock)

    granted = store.grant_fortune("u1", "first")
    assert granted is not None

    assert store.grant_fortune("u1", "second") is None
    assert store.get_user_fortune("u1").fortune_text == "first"

    clock.return_value = 1000.0 + 24 * HOUR
    assert store.grant_fortune("u1", "third").fortune_text == "third"


def test_next_fortune_at_reports_end_of_cooldown() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(cooldown_hours=24, clock=clock)

    fortune = store.create_user_fortune("u1", "x")

    assert store.next_fortune_at("u1") == fortune.created_at + timedelta(hours=24)


def test_zero_cooldown_never_blocks() -> None:
    store = InMemoryFortuneStore(cooldown_hours=0, clock=Mock(return_value=1000.0))

    store.create_user_fortune("u1", "x")

    assert store.can_user_get_fortune("u1") is True


def test_invalid_constructor_args() -> None:
    with pytest.raises(ValueError):
        InMemoryFortuneStore(cooldown_hours=-1)


def test_invalid_user_id() -> None:
    store = InMemoryFortuneStore()

    with pytest.raises(ValueError):
        store.create_user_fortune("", "x")

    with pytest.raises(ValueError):
        store.grant_fortune("", "x")


def test_cooldown_remaining_uses_store_clock() -> None:
    clock = Mock(return_value=1000.0)
    store = InMemoryFortuneStore(cooldown_hours=24, clock=clock)

    assert store.cooldown_remaining("u1") is None
    store.create_user_fortune("u1", "x")
    assert store.cooldown_remaining("u1") == timedelta(hours=24)

    clock.return_value = 1000.0 + 20 * HOUR
    assert store.cooldown_remaining("u1") == timedelta(hours=4)

    clock.return_value = 1000.0 + 24 * HOUR
    assert store.cooldown_remaining("u1") is None
    assert store.next_fortune_at("u1") is None


def test_concurrent_grants_admit_exactly_one() -> None:
    store = InMemoryFortuneStore(cooldown_hours=24, clock=Mock(return_value=1000.0))
    total_threads = 32
    barrier = threading.Barrier(total_threads)
    results: list = []
    results_lock = threading.Lock()

    def _grant(idx: int) -> None:
        barrier.wait()
        fortune = store.grant_fortune("u", f"fortune-{idx}")
        with results_lock:
            results.append(fortune)

    threads = [threading.Thread(target=_grant, args=(i,)) for i in range(total_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    granted = [r for r in results if r is not None]
    assert len(results) == total_threads
    assert len(granted) == 1
    assert store.get_user_fortune("u") == granted[0]
