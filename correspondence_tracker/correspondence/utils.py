## correspondence_tracker/correspondence/utils.py

# Standard library imports
import random
from datetime import datetime
from typing import Dict, List

# Local imports
from correspondence_tracker.correspondence.models import Correspondence
from correspondence_tracker.correspondence.schemas import (
    CorrespondenceListItem, CorrespondenceResponse, DueBadgeResponse,
    DueBucket, TriageGroupResponse,
)
from correspondence_tracker.correspondence.triage import (
    BUCKET_LABELS, classify, days_until_due, due_badge,
)

REFERENCE_PREFIX = "COR"


def generate_reference_number(year: int) -> str:
    """Reference number in the form COR-<year>-<4 random digits>"""
    return f"{REFERENCE_PREFIX}-{year}-{random.randint(0, 9999):04d}"


def build_list_item(correspondence: Correspondence, now: datetime) -> CorrespondenceListItem:
    """Serialise a row together with its due-date fields as of ``now``"""
    badge = due_badge(correspondence, now)
    return CorrespondenceListItem(
        **CorrespondenceResponse.model_validate(correspondence).model_dump(),
        days_until_due=days_until_due(correspondence.due_date, now),
        due_bucket=classify(correspondence, now),
        due_badge=DueBadgeResponse(label=badge.label, urgency=badge.urgency) if badge else None,
    )


def build_triage_groups(
    groups: Dict[DueBucket, List[Correspondence]], now: datetime,
) -> List[TriageGroupResponse]:
    """Triage response groups in display order"""
    result = []
    for bucket, items in groups.items():
        result.append(
            TriageGroupResponse(
                bucket=bucket,
                label=BUCKET_LABELS[bucket],
                total_items=len(items),
                items=[build_list_item(item, now) for item in items],
            )
        )
    return result
