## correspondence_tracker/correspondence/triage.py

"""
Due-date triage for correspondence.

Pure functions over an item snapshot and a reference instant. Items only need
``status`` and ``due_date`` attributes, so ORM rows and response schemas can
both be classified. Nothing here is cached: every call recomputes the
calendar-day difference against ``now``.
"""

# Standard library imports
from datetime import date, datetime
from typing import Dict, Iterable, List, NamedTuple, Optional, TypeVar, Union

# Local imports
from correspondence_tracker.correspondence.schemas import (
    BadgeUrgency, CorrespondenceStatus, DueBucket,
)
from correspondence_tracker.utils.general import as_utc, utcnow

T = TypeVar("T")

# Display order of the triage view
BUCKET_ORDER: List[DueBucket] = [
    DueBucket.OVERDUE,
    DueBucket.THIS_WEEK,
    DueBucket.THIS_MONTH,
    DueBucket.BEYOND,
    DueBucket.COMPLETED,
]

BUCKET_LABELS: Dict[DueBucket, str] = {
    DueBucket.OVERDUE: "Overdue",
    DueBucket.THIS_WEEK: "Due Within 1 Week",
    DueBucket.THIS_MONTH: "Due Within 1 Month",
    DueBucket.BEYOND: "Due Beyond 1 Month",
    DueBucket.COMPLETED: "Completed",
}

THIS_WEEK_DAYS = 7
THIS_MONTH_DAYS = 30
HIGH_URGENCY_DAYS = 3


class DueBadge(NamedTuple):
    """Urgency badge for an open item"""
    label: str
    urgency: BadgeUrgency


def days_until_due(due_date: Union[datetime, date, str], now: Optional[datetime] = None) -> int:
    """
    Whole calendar days from ``now`` to ``due_date``, both taken in UTC.
    Negative when the due date has passed, zero on the due day itself.
    """
    now = as_utc(now) if now is not None else utcnow()
    return (as_utc(due_date).date() - now.date()).days


def _is_completed(item) -> bool:
    return item.status == CorrespondenceStatus.COMPLETED


def classify(item, now: Optional[datetime] = None) -> DueBucket:
    """Triage bucket for one item. Completed items are never overdue."""
    if _is_completed(item):
        return DueBucket.COMPLETED

    days = days_until_due(item.due_date, now)
    if days < 0:
        return DueBucket.OVERDUE
    if days <= THIS_WEEK_DAYS:
        return DueBucket.THIS_WEEK
    if days <= THIS_MONTH_DAYS:
        return DueBucket.THIS_MONTH
    return DueBucket.BEYOND


def due_badge(item, now: Optional[datetime] = None) -> Optional[DueBadge]:
    """Badge for open items due within a week, or None."""
    if _is_completed(item):
        return None

    days = days_until_due(item.due_date, now)
    if days < 0:
        return DueBadge("Overdue", BadgeUrgency.CRITICAL)
    if days == 0:
        return DueBadge("Due today", BadgeUrgency.CRITICAL)
    if days <= HIGH_URGENCY_DAYS:
        return DueBadge(f"{days}d left", BadgeUrgency.HIGH)
    if days <= THIS_WEEK_DAYS:
        return DueBadge(f"{days}d left", BadgeUrgency.MEDIUM)
    return None


def group_by_due_bucket(items: Iterable[T], now: Optional[datetime] = None) -> Dict[DueBucket, List[T]]:
    """
    Split items into triage buckets, in display order.

    Every bucket is present, possibly empty. Within a bucket items are ordered
    by due date; ties keep their incoming relative order.
    """
    now = as_utc(now) if now is not None else utcnow()
    groups: Dict[DueBucket, List[T]] = {bucket: [] for bucket in BUCKET_ORDER}

    for item in items:
        groups[classify(item, now)].append(item)

    for bucket in BUCKET_ORDER:
        groups[bucket].sort(key=lambda item: as_utc(item.due_date))

    return groups
