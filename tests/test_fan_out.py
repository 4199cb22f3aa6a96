"""Tests for audience resolution and notification fan-out."""

from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from campus_feed.application.use_cases.notifications import (
    create_notification,
    fan_out,
    redeliver,
    resolve_audience,
)
from campus_feed.config import get_settings
from campus_feed.domain.entities import TargetingSpec
from campus_feed.domain.exceptions import InvalidSpec, NotFound
from campus_feed.infrastructure.repositories import NotificationRepository


def _announce(session, targeting: TargetingSpec, **overrides):
    values = {"title": "Timetable", "body": "The timetable changed", "targeting": targeting}
    values.update(overrides)
    return create_notification(session, **values)


def test_all_users_selects_every_account(session, make_user) -> None:
    users = [make_user() for _ in range(3)]

    assert resolve_audience(session, TargetingSpec.everyone()) == {user.id for user in users}


def test_filters_are_combined_with_and(session, make_user, branch) -> None:
    match = make_user(branch_id=branch.id, year=2, semester=3)
    make_user(branch_id=branch.id, year=3, semester=5)
    make_user(year=2, semester=3)

    spec = TargetingSpec.matching(branch_id=branch.id, year=2)

    assert resolve_audience(session, spec) == {match.id}


def test_explicit_ids_drop_unknown_users(session, make_user) -> None:
    user = make_user()
    spec = TargetingSpec.recipients([str(user.id), str(uuid4())])

    assert resolve_audience(session, spec) == {user.id}


@pytest.mark.parametrize(
    "spec",
    [
        TargetingSpec(),
        TargetingSpec(all_users=True, year=1),
        TargetingSpec(semester=2, user_ids=("x",)),
        TargetingSpec(year=5),
        TargetingSpec(semester=9),
        TargetingSpec(user_ids=("not-a-uuid",)),
    ],
)
def test_invalid_specs_are_rejected(session, spec) -> None:
    with pytest.raises(InvalidSpec):
        resolve_audience(session, spec)


def test_invalid_spec_writes_nothing(session, make_user) -> None:
    make_user()

    with pytest.raises(InvalidSpec):
        _announce(session, TargetingSpec(all_users=True, year=2))

    assert NotificationRepository(session).list_all() == []


def test_deliver_creates_one_record_per_recipient(session, make_user) -> None:
    users = [make_user() for _ in range(3)]

    result = _announce(session, TargetingSpec.everyone())

    repository = NotificationRepository(session)
    assert result.delivered_count == 3
    assert repository.count_deliveries(result.notification_id) == 3
    for user in users:
        delivery = repository.get_delivery(result.notification_id, user.id)
        assert delivery is not None
        assert delivery.is_read is False
    notification = repository.get(result.notification_id)
    assert notification.send_count == 3
    assert notification.targeting == {"mode": "all_users"}


def test_empty_audience_still_stores_notification(session, make_user, branch) -> None:
    make_user()

    result = _announce(session, TargetingSpec.matching(branch_id=branch.id))

    assert result.delivered_count == 0
    assert NotificationRepository(session).get(result.notification_id) is not None


def test_redeliver_is_idempotent(session, make_user) -> None:
    for _ in range(2):
        make_user()
    result = _announce(session, TargetingSpec.everyone())

    again = redeliver(session, result.notification_id, TargetingSpec.everyone())

    repository = NotificationRepository(session)
    assert again.delivered_count == 2
    assert repository.get(result.notification_id).send_count == 2

    newcomer = make_user()
    third = redeliver(session, result.notification_id, TargetingSpec.everyone())

    assert third.delivered_count == 3
    assert repository.get_delivery(result.notification_id, newcomer.id) is not None
    assert repository.get(result.notification_id).send_count == 3


def test_redeliver_unknown_notification(session, make_user) -> None:
    make_user()

    with pytest.raises(NotFound):
        redeliver(session, uuid4(), TargetingSpec.everyone())


def test_fan_out_uses_batches(session, make_user, monkeypatch) -> None:
    for _ in range(5):
        make_user()
    monkeypatch.setattr(get_settings(), "fanout_batch_size", 2)

    batches: list[int] = []
    original = NotificationRepository.insert_deliveries

    def recording_insert(self, notification_id, recipient_ids):
        recipient_ids = list(recipient_ids)
        batches.append(len(recipient_ids))
        return original(self, notification_id, recipient_ids)

    monkeypatch.setattr(NotificationRepository, "insert_deliveries", recording_insert)

    result = _announce(session, TargetingSpec.everyone())

    assert batches == [2, 2, 1]
    assert result.delivered_count == 5


def test_failed_batch_is_retried_per_recipient(session, make_user, monkeypatch) -> None:
    users = [make_user() for _ in range(3)]
    broken = users[1].id
    original = NotificationRepository.insert_deliveries

    def flaky_insert(self, notification_id, recipient_ids):
        recipient_ids = list(recipient_ids)
        if len(recipient_ids) > 1 or broken in recipient_ids:
            raise SQLAlchemyError("simulated store failure")
        return original(self, notification_id, recipient_ids)

    monkeypatch.setattr(NotificationRepository, "insert_deliveries", flaky_insert)

    result = _announce(session, TargetingSpec.everyone())

    repository = NotificationRepository(session)
    assert result.delivered_count == 2
    assert repository.get_delivery(result.notification_id, broken) is None
    assert repository.get(result.notification_id).send_count == 2


def test_create_notification_validates_fields(session, make_user) -> None:
    make_user()

    with pytest.raises(ValueError):
        _announce(session, TargetingSpec.everyone(), title="  ")
    with pytest.raises(ValueError):
        _announce(session, TargetingSpec.everyone(), category="gossip")
    with pytest.raises(ValueError):
        _announce(session, TargetingSpec.everyone(), priority="whenever")


def test_redeliver_pushes_only_to_new_recipients(session, make_user, monkeypatch) -> None:
    first = make_user()
    pushed: list[list] = []

    def recording_dispatch(notification, recipients):
        pushed.append(sorted(recipients, key=str))
        return len(pushed[-1])

    monkeypatch.setattr(fan_out, "dispatch_notification", recording_dispatch)

    created = _announce(session, TargetingSpec.everyone())
    second = make_user()
    redeliver(session, created.notification_id, TargetingSpec.everyone())
    redeliver(session, created.notification_id, TargetingSpec.everyone())

    assert pushed == [[first.id], [second.id]]
