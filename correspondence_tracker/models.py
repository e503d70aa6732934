## correspondence_tracker/models.py

"""
Imports every model so that they register on ``Base.metadata``.
Used by ``init_db``, alembic and the test fixtures.
"""

# Local imports
from correspondence_tracker.core.db import Base
from correspondence_tracker.users.models import User
from correspondence_tracker.departments.models import Department
from correspondence_tracker.correspondence.models import Correspondence
from correspondence_tracker.comments.models import Comment
from correspondence_tracker.activity_log.models import ActivityLog

__all__ = ["Base", "User", "Department", "Correspondence", "Comment", "ActivityLog"]
