## correspondence_tracker/correspondence/services.py

# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

# Third party imports
from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

# Local imports
from correspondence_tracker.activity_log.models import ActivityLog
from correspondence_tracker.activity_log.schemas import ActivityAction
from correspondence_tracker.activity_log.services import activity_log_service
from correspondence_tracker.core.config import settings
from correspondence_tracker.core.db import get_db
from correspondence_tracker.correspondence.exceptions import (
    CorrespondenceDuplicateException, CorrespondenceNotFoundException,
    CorrespondenceStoreException, CorrespondenceValidationException,
)
from correspondence_tracker.correspondence.models import Correspondence
from correspondence_tracker.correspondence.repository import CorrespondenceRepository
from correspondence_tracker.correspondence.schemas import (
    CorrespondenceCreate, CorrespondenceFilters, CorrespondenceStats,
    CorrespondenceStatus, CorrespondenceUpdate, TriageResponse,
)
from correspondence_tracker.correspondence.triage import classify, group_by_due_bucket
from correspondence_tracker.correspondence.utils import (
    build_triage_groups, generate_reference_number,
)
from correspondence_tracker.users.schemas import ActingUser
from correspondence_tracker.utils.general import as_utc, utcnow
from correspondence_tracker.utils.logger import get_logger

logger = get_logger(__name__)

# Columns where an explicit null in a patch clears the stored value
NULLABLE_FIELDS = frozenset({
    "assigned_to_id", "department_id", "notes",
    "sender_email", "sender_phone", "sender_organization", "sender_address",
})

# Reference columns where a falsy id means "unassigned"
REFERENCE_FIELDS = ("assigned_to_id", "department_id")

# Tracked fields in the order their activity entries are written
TRACKED_FIELDS = (
    ("status", ActivityAction.STATUS_CHANGE),
    ("priority", ActivityAction.PRIORITY_CHANGE),
)


def get_correspondence_repository(db: Session = Depends(get_db)) -> CorrespondenceRepository:
    """Dependency to get CorrespondenceRepository instance."""
    return CorrespondenceRepository(db)


@dataclass
class CorrespondenceUpdateResult:
    """Outcome of an update: the stored item and the audit entries written for it."""
    correspondence: Correspondence
    activity: List[ActivityLog] = field(default_factory=list)
    audit_complete: bool = True


def _value(member) -> Optional[str]:
    return getattr(member, "value", member)


def _parse(schema, data):
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise CorrespondenceValidationException(
            "Invalid correspondence payload", {"errors": e.errors(include_url=False)}
        ) from e


def build_update_values(patch: CorrespondenceUpdate) -> Dict[str, Any]:
    """
    Column values for a merge patch.

    Only fields present in the patch are returned. Explicit nulls survive for
    nullable columns and are dropped for required ones.
    """
    values = {}
    for key, value in patch.model_dump(exclude_unset=True).items():
        if key in REFERENCE_FIELDS and not value:
            value = None
        if value is None and key not in NULLABLE_FIELDS:
            continue
        values[key] = value
    return values


class CorrespondenceService:
    """
    Business logic layer for correspondence.
    Depends on the CorrespondenceRepository for data access.
    """

    def __init__(self, repo: CorrespondenceRepository = Depends(get_correspondence_repository)):
        self.repo = repo

    def get_correspondence(self, correspondence_id: int) -> Correspondence:
        """Get a correspondence by ID or raise not found."""
        correspondence = self.repo.get_by_id(correspondence_id)
        if correspondence is None:
            raise CorrespondenceNotFoundException(correspondence_id)
        return correspondence

    def create_correspondence(
        self, data: Union[CorrespondenceCreate, Dict[str, Any]], created_by: int
    ) -> Correspondence:
        """
        Create a correspondence.

        A reference number is generated when none is supplied. Generation is
        retried while the candidate is taken; a supplied number that is already
        in use is rejected as a duplicate.
        """
        data = _parse(CorrespondenceCreate, data)
        now = utcnow()
        values = data.model_dump()

        for key in REFERENCE_FIELDS:
            values[key] = values[key] or None
        self._check_references(values)

        if values["received_date"] is None:
            values["received_date"] = now
        if values["status"] == CorrespondenceStatus.COMPLETED and values["completed_date"] is None:
            values["completed_date"] = now

        reference_number = values.pop("reference_number")
        if reference_number:
            if self.repo.reference_number_exists(reference_number):
                raise CorrespondenceDuplicateException(reference_number)
        else:
            reference_number = self._allocate_reference_number(now.year)

        values.update(
            reference_number=reference_number,
            created_by=created_by,
            modified_by=created_by,
            created_on=now,
            updated_on=now,
        )

        try:
            correspondence = self.repo.create(values)
        except IntegrityError as e:
            self.repo.rollback()
            logger.warning("Correspondence insert conflicted", reference_number=reference_number, error=str(e))
            raise CorrespondenceDuplicateException(reference_number) from e
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error("Error creating correspondence", reference_number=reference_number, error=str(e), exc_info=True)
            raise CorrespondenceStoreException("Failed to create correspondence", {"error": str(e)}) from e

        logger.info(
            "Correspondence created",
            correspondence_id=correspondence.id, reference_number=reference_number, created_by=created_by,
        )
        return correspondence

    def _check_references(self, values: Dict[str, Any]) -> None:
        missing = self.repo.missing_references(values)
        if missing:
            raise CorrespondenceValidationException(
                "Assigned user or department does not exist",
                {field: values[field] for field in missing},
            )

    def _allocate_reference_number(self, year: int) -> str:
        for _ in range(settings.reference_number_attempts):
            candidate = generate_reference_number(year)
            if not self.repo.reference_number_exists(candidate):
                return candidate
            logger.debug("Reference number taken, retrying", reference_number=candidate)
        raise CorrespondenceDuplicateException()

    def update_correspondence(
        self,
        correspondence_id: int,
        patch: Union[CorrespondenceUpdate, Dict[str, Any]],
        acting_user: ActingUser,
    ) -> CorrespondenceUpdateResult:
        """
        Apply a merge patch and record status and priority transitions.

        The item update is committed first as one statement. Activity entries
        are written afterwards, one commit each; if any of them fails the update
        still stands and the result is flagged with ``audit_complete=False``.
        """
        patch = _parse(CorrespondenceUpdate, patch)

        current = self.repo.get_tracked_values(correspondence_id)
        if current is None:
            raise CorrespondenceNotFoundException(correspondence_id)
        previous = dict(zip(("status", "priority"), current))

        now = utcnow()
        values = build_update_values(patch)
        self._check_references(values)
        values["updated_on"] = now
        values["modified_by"] = acting_user.id
        if values.get("status") == CorrespondenceStatus.COMPLETED:
            values["completed_date"] = now

        try:
            self.repo.apply_update(correspondence_id, values)
        except IntegrityError as e:
            self.repo.rollback()
            logger.warning(
                "Correspondence update rejected by constraint",
                correspondence_id=correspondence_id, error=str(e),
            )
            raise CorrespondenceValidationException(
                "Update violates a reference or uniqueness constraint",
                {"correspondence_id": correspondence_id},
            ) from e
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(
                "Error updating correspondence",
                correspondence_id=correspondence_id, error=str(e), exc_info=True,
            )
            raise CorrespondenceStoreException(
                "Failed to update correspondence", {"correspondence_id": correspondence_id}
            ) from e

        logger.info(
            "Correspondence updated",
            correspondence_id=correspondence_id, user_id=acting_user.id,
            fields=sorted(key for key in values if key not in ("updated_on", "modified_by")),
        )

        activity: List[ActivityLog] = []
        audit_complete = True
        for field_name, action in TRACKED_FIELDS:
            if field_name not in values or values[field_name] == previous[field_name]:
                continue
            try:
                entry = activity_log_service.record_change(
                    self.repo.db,
                    correspondence_id=correspondence_id,
                    user_id=acting_user.id,
                    action=action,
                    previous_value=_value(previous[field_name]),
                    new_value=_value(values[field_name]),
                    created_on=now,
                )
                activity.append(entry)
            except Exception as e:
                audit_complete = False
                logger.error(
                    "activity_log_write_failed",
                    correspondence_id=correspondence_id, action=action.value, error=str(e),
                )

        return CorrespondenceUpdateResult(
            correspondence=self.get_correspondence(correspondence_id),
            activity=activity,
            audit_complete=audit_complete,
        )

    def list_correspondence(
        self, filters: Optional[CorrespondenceFilters] = None, now: Optional[datetime] = None
    ) -> List[Correspondence]:
        """Correspondence matching the filters, newest first."""
        filters = filters or CorrespondenceFilters()
        items = self.repo.search(filters)
        if filters.due_group is not None:
            now = as_utc(now) if now is not None else utcnow()
            items = [item for item in items if classify(item, now) == filters.due_group]
        return items

    def get_triage(
        self, filters: Optional[CorrespondenceFilters] = None, now: Optional[datetime] = None
    ) -> TriageResponse:
        """Matching correspondence grouped into due buckets as of ``now``."""
        now = as_utc(now) if now is not None else utcnow()
        items = self.list_correspondence(filters, now)
        groups = group_by_due_bucket(items, now)
        return TriageResponse(
            generated_at=now,
            total_items=len(items),
            groups=build_triage_groups(groups, now),
        )

    def get_stats(self) -> CorrespondenceStats:
        """Counts by status and priority; absent values count as zero."""
        by_status = self.repo.count_by_status()
        by_priority = self.repo.count_by_priority()

        counts: Dict[str, int] = {"total": sum(by_status.values())}
        counts.update({_value(status): count for status, count in by_status.items()})
        counts.update({_value(priority): count for priority, count in by_priority.items()})
        return CorrespondenceStats(**counts)
