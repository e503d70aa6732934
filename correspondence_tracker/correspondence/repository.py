# correspondence_tracker/correspondence/repository.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, or_, select, update
from sqlalchemy.orm import Session

from correspondence_tracker.correspondence.models import Correspondence
from correspondence_tracker.departments.models import Department
from correspondence_tracker.users.models import User
from correspondence_tracker.correspondence.schemas import (
    CorrespondenceFilters, CorrespondencePriority, CorrespondenceStatus,
)


class CorrespondenceRepository:
    """
    Data Access Layer for the Correspondence model.
    Handles all database interactions.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, correspondence_id: int) -> Optional[Correspondence]:
        """Fetch a correspondence by ID, refreshing any copy already in the session."""
        stmt = (
            select(Correspondence)
            .where(Correspondence.id == correspondence_id)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_tracked_values(
        self, correspondence_id: int
    ) -> Optional[Tuple[CorrespondenceStatus, CorrespondencePriority]]:
        """Current status and priority only, or None when the row is missing."""
        stmt = select(Correspondence.status, Correspondence.priority).where(
            Correspondence.id == correspondence_id
        )
        row = self.db.execute(stmt).first()
        if row is None:
            return None
        return row.status, row.priority

    def exists(self, correspondence_id: int) -> bool:
        stmt = select(Correspondence.id).where(Correspondence.id == correspondence_id)
        return self.db.execute(stmt).first() is not None

    def missing_references(self, values: Dict[str, Any]) -> List[str]:
        """Names of assignee or department fields in ``values`` that point at no row."""
        missing = []
        for key, model in (("assigned_to_id", User), ("department_id", Department)):
            ref_id = values.get(key)
            if ref_id is None:
                continue
            if self.db.execute(select(model.id).where(model.id == ref_id)).first() is None:
                missing.append(key)
        return missing

    def reference_number_exists(self, reference_number: str) -> bool:
        stmt = select(Correspondence.id).where(Correspondence.reference_number == reference_number)
        return self.db.execute(stmt).first() is not None

    def create(self, values: Dict[str, Any]) -> Correspondence:
        """Insert a new correspondence and commit."""
        correspondence = Correspondence(**values)
        self.db.add(correspondence)
        self.db.commit()
        self.db.refresh(correspondence)
        return correspondence

    def apply_update(self, correspondence_id: int, values: Dict[str, Any]) -> None:
        """Write all changed columns in one UPDATE statement and commit."""
        stmt = (
            update(Correspondence)
            .where(Correspondence.id == correspondence_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.commit()

    def search(self, filters: CorrespondenceFilters) -> List[Correspondence]:
        """Correspondence matching the stored-column filters, newest first."""
        stmt = select(Correspondence)

        if filters.search:
            term = f"%{filters.search.strip()}%"
            stmt = stmt.where(or_(
                Correspondence.subject.ilike(term),
                Correspondence.sender_name.ilike(term),
                Correspondence.reference_number.ilike(term),
            ))
        if filters.status:
            stmt = stmt.where(Correspondence.status == filters.status)
        if filters.priority:
            stmt = stmt.where(Correspondence.priority == filters.priority)
        if filters.type:
            stmt = stmt.where(Correspondence.type == filters.type)

        stmt = stmt.order_by(desc(Correspondence.created_on), desc(Correspondence.id))
        return list(self.db.execute(stmt).scalars().all())

    def count_by_status(self) -> Dict[CorrespondenceStatus, int]:
        stmt = select(Correspondence.status, func.count(Correspondence.id)).group_by(Correspondence.status)
        return {status: count for status, count in self.db.execute(stmt).all()}

    def count_by_priority(self) -> Dict[CorrespondencePriority, int]:
        stmt = select(Correspondence.priority, func.count(Correspondence.id)).group_by(Correspondence.priority)
        return {priority: count for priority, count in self.db.execute(stmt).all()}

    def rollback(self) -> None:
        self.db.rollback()
