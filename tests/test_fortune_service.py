"""Unit tests for FortuneService flows."""

import re

import pytest

from app.core.errors import FortuneCooldownError
from app.services.fortune_service import FortuneService, to_epoch_ms


def test_status_for_new_user(service: FortuneService) -> None:
    status = service.get_status("new-user")

    assert status.can_get_fortune is True
    assert status.current_fortune is None
    assert status.last_fortune_at is None


def test_status_shows_current_fortune_during_cooldown(service: FortuneService) -> None:
    service.grant_web_fortune("u1")

    status = service.get_status("u1")

    assert status.can_get_fortune is False
    assert status.current_fortune == "A test fortune."
    assert status.last_fortune_at is not None


def test_status_hides_fortune_once_cooldown_elapsed(service: FortuneService, fake_time) -> None:
    service.grant_web_fortune("u1")
    fake_time.advance_hours(24.1)

    status = service.get_status("u1")

    assert status.can_get_fortune is True
    assert status.current_fortune is None
    assert status.last_fortune_at is not None


def test_grant_web_fortune_raises_during_cooldown(service: FortuneService, fake_time) -> None:
    service.grant_web_fortune("u1")
    fake_time.advance_hours(1)

    with pytest.raises(FortuneCooldownError) as exc_info:
        service.grant_web_fortune("u1")

    assert exc_info.value.user_id == "u1"
    assert exc_info.value.retry_after_seconds == 23 * 3600
    assert exc_info.value.next_fortune_at is not None


def test_grant_frame_fortune_is_never_limited(service: FortuneService) -> None:
    first = service.grant_frame_fortune()
    second = service.grant_frame_fortune()

    assert first.fortune_text == "A test fortune."
    assert second.fortune_text == "A test fortune."
    assert first.user_id != second.user_id


def test_frame_user_ids_are_anonymous_one_shot_ids(service: FortuneService, fake_time) -> None:
    user_id = service.new_frame_user_id()

    millis = int(fake_time.time() * 1000)
    assert re.fullmatch(rf"farcaster_{millis}_[0-9a-z]{{7}}", user_id)


def test_frame_grant_is_recorded(service: FortuneService) -> None:
    fortune = service.grant_frame_fortune()

    assert service.store.get_user_fortune(fortune.user_id) == fortune


def test_to_epoch_ms(service: FortuneService, fake_time) -> None:
    fortune = service.grant_web_fortune("u1")

    assert to_epoch_ms(fortune.created_at) == int(fake_time.time() * 1000)
    assert to_epoch_ms(None) is None


def test_retry_after_follows_store_clock_not_service_clock(store, picker, fake_time) -> None:
    # Service clock far in the future; the store's clock decides the cooldown
    service = FortuneService(store, picker, clock=lambda: fake_time.time() + 10 * 24 * 3600)
    service.grant_web_fortune("u1")
    fake_time.advance_hours(4)

    with pytest.raises(FortuneCooldownError) as exc_info:
        service.grant_web_fortune("u1")

    assert exc_info.value.retry_after_seconds == 20 * 3600
