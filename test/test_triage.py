from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from correspondence_tracker.correspondence.schemas import (
    BadgeUrgency, CorrespondenceStatus, DueBucket,
)
from correspondence_tracker.correspondence.triage import (
    BUCKET_ORDER, classify, days_until_due, due_badge, group_by_due_bucket,
)

NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


def item(days: int, status: CorrespondenceStatus = CorrespondenceStatus.PENDING, **extra):
    return SimpleNamespace(status=status, due_date=NOW + timedelta(days=days), **extra)


@pytest.mark.parametrize("days, bucket", [
    (-1, DueBucket.OVERDUE),
    (0, DueBucket.THIS_WEEK),
    (7, DueBucket.THIS_WEEK),
    (8, DueBucket.THIS_MONTH),
    (30, DueBucket.THIS_MONTH),
    (31, DueBucket.BEYOND),
])
def test_classify_by_days_remaining(days, bucket):
    assert classify(item(days), NOW) == bucket


def test_completed_is_never_overdue():
    assert classify(item(-40, CorrespondenceStatus.COMPLETED), NOW) == DueBucket.COMPLETED
    assert due_badge(item(-40, CorrespondenceStatus.COMPLETED), NOW) is None


def test_overdue_status_still_classified_by_date():
    assert classify(item(3, CorrespondenceStatus.OVERDUE), NOW) == DueBucket.THIS_WEEK


def test_days_use_calendar_dates_not_elapsed_hours():
    late_evening = datetime(2024, 6, 15, 23, 59, tzinfo=timezone.utc)
    early_next_day = datetime(2024, 6, 16, 0, 1, tzinfo=timezone.utc)
    assert days_until_due(early_next_day, late_evening) == 1
    assert days_until_due(late_evening, early_next_day) == -1


def test_days_until_due_accepts_naive_strings_and_dates():
    assert days_until_due(datetime(2024, 6, 20, 1, 0), NOW) == 5
    assert days_until_due("2024-06-14T23:00:00Z", NOW) == -1
    assert days_until_due(date(2024, 7, 15), NOW) == 30


def test_offset_due_dates_are_compared_in_utc():
    # 01:00 on the 16th at +05:00 is still the 15th in UTC
    due = datetime(2024, 6, 16, 1, 0, tzinfo=timezone(timedelta(hours=5)))
    assert days_until_due(due, NOW) == 0


@pytest.mark.parametrize("days, label, urgency", [
    (-2, "Overdue", BadgeUrgency.CRITICAL),
    (0, "Due today", BadgeUrgency.CRITICAL),
    (1, "1d left", BadgeUrgency.HIGH),
    (3, "3d left", BadgeUrgency.HIGH),
    (4, "4d left", BadgeUrgency.MEDIUM),
    (7, "7d left", BadgeUrgency.MEDIUM),
])
def test_due_badge(days, label, urgency):
    badge = due_badge(item(days), NOW)
    assert badge.label == label
    assert badge.urgency == urgency


def test_no_badge_beyond_a_week():
    assert due_badge(item(8), NOW) is None


def test_classification_moves_with_the_clock():
    entry = item(5)
    assert classify(entry, NOW) == DueBucket.THIS_WEEK
    assert classify(entry, NOW + timedelta(days=6)) == DueBucket.OVERDUE


def test_group_by_due_bucket_orders_buckets_and_items():
    items = [
        item(20, name="month-late"),
        item(-3, name="overdue"),
        item(2, name="week-late"),
        item(1, name="week-early"),
        item(10, name="month-early"),
        item(90, name="beyond"),
        item(-10, CorrespondenceStatus.COMPLETED, name="done"),
    ]

    groups = group_by_due_bucket(items, NOW)

    assert list(groups) == BUCKET_ORDER
    assert [i.name for i in groups[DueBucket.OVERDUE]] == ["overdue"]
    assert [i.name for i in groups[DueBucket.THIS_WEEK]] == ["week-early", "week-late"]
    assert [i.name for i in groups[DueBucket.THIS_MONTH]] == ["month-early", "month-late"]
    assert [i.name for i in groups[DueBucket.BEYOND]] == ["beyond"]
    assert [i.name for i in groups[DueBucket.COMPLETED]] == ["done"]


def test_group_by_due_bucket_keeps_order_of_equal_due_dates():
    items = [item(4, name=name) for name in ("b", "a", "c")]
    groups = group_by_due_bucket(items, NOW)
    assert [i.name for i in groups[DueBucket.THIS_WEEK]] == ["b", "a", "c"]


def test_group_by_due_bucket_returns_every_bucket_when_empty():
    groups = group_by_due_bucket([], NOW)
    assert list(groups) == BUCKET_ORDER
    assert all(not members for members in groups.values())
