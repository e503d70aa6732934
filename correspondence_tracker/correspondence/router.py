## correspondence_tracker/correspondence/router.py

# Third party imports
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

# Local imports
from correspondence_tracker.utils.general import utcnow
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.activity_log.schemas import ActivityLogResponse
from correspondence_tracker.correspondence.exceptions import (
    CorrespondenceDuplicateException, CorrespondenceNotFoundException,
    CorrespondenceStoreException, CorrespondenceValidationException,
)
from correspondence_tracker.correspondence.schemas import (
    CorrespondenceCreate, CorrespondenceFilters, CorrespondenceListResponse,
    CorrespondenceResponse, CorrespondenceStats, CorrespondenceUpdate,
    CorrespondenceUpdateResponse, TriageResponse,
)
from correspondence_tracker.correspondence.services import CorrespondenceService
from correspondence_tracker.correspondence.utils import build_list_item
from correspondence_tracker.users.models import User
from correspondence_tracker.users.schemas import ActingUser
from correspondence_tracker.users.utils import get_current_user, require_mutation_rights

logger = get_logger(__name__)
router = APIRouter(tags=["Correspondence"], prefix="/correspondence")

DB_UNAVAILABLE = "Database unavailable"


@router.get("/list", response_model=CorrespondenceListResponse)
def list_correspondence(
    filters: CorrespondenceFilters = Depends(),
    correspondence_service: CorrespondenceService = Depends(),
    logged_in_user: User = Depends(get_current_user),
):
    """List correspondence, newest first, with derived due fields"""
    try:
        now = utcnow()
        items = correspondence_service.list_correspondence(filters, now)
        return {
            "items": [build_list_item(item, now) for item in items],
            "total_items": len(items),
        }
    except SQLAlchemyError as e:
        logger.error("Error listing correspondence", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e


@router.get("/triage", response_model=TriageResponse)
def get_triage(
    filters: CorrespondenceFilters = Depends(),
    correspondence_service: CorrespondenceService = Depends(),
    logged_in_user: User = Depends(get_current_user),
):
    """Correspondence grouped into due buckets"""
    try:
        return correspondence_service.get_triage(filters)
    except SQLAlchemyError as e:
        logger.error("Error building triage view", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e


@router.get("/stats", response_model=CorrespondenceStats)
def get_stats(
    correspondence_service: CorrespondenceService = Depends(),
    logged_in_user: User = Depends(get_current_user),
):
    """Counts by status and priority"""
    try:
        return correspondence_service.get_stats()
    except SQLAlchemyError as e:
        logger.error("Error computing correspondence stats", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e


@router.get("/{correspondence_id}", response_model=CorrespondenceResponse)
def get_correspondence(
    correspondence_id: int,
    correspondence_service: CorrespondenceService = Depends(),
    logged_in_user: User = Depends(get_current_user),
):
    """Get a single correspondence"""
    try:
        return correspondence_service.get_correspondence(correspondence_id)
    except CorrespondenceNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.error("Error getting correspondence", correspondence_id=correspondence_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e


@router.post("/", response_model=CorrespondenceResponse, status_code=status.HTTP_201_CREATED)
def create_correspondence(
    correspondence: CorrespondenceCreate,
    correspondence_service: CorrespondenceService = Depends(),
    acting_user: ActingUser = Depends(require_mutation_rights),
):
    """Create a correspondence. Admins and managers only."""
    try:
        return correspondence_service.create_correspondence(correspondence, created_by=acting_user.id)
    except CorrespondenceValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CorrespondenceDuplicateException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except CorrespondenceStoreException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.error("Database error writing correspondence", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e


@router.patch("/{correspondence_id}", response_model=CorrespondenceUpdateResponse)
def update_correspondence(
    correspondence_id: int,
    patch: CorrespondenceUpdate,
    correspondence_service: CorrespondenceService = Depends(),
    acting_user: ActingUser = Depends(require_mutation_rights),
):
    """
    Partially update a correspondence. Admins and managers only.

    ``audit_complete`` is false when the update was stored but one or more
    activity entries could not be written.
    """
    try:
        result = correspondence_service.update_correspondence(correspondence_id, patch, acting_user)
    except CorrespondenceNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except CorrespondenceValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CorrespondenceStoreException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e
    except SQLAlchemyError as e:
        logger.error("Database error writing correspondence", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DB_UNAVAILABLE) from e

    return CorrespondenceUpdateResponse(
        **CorrespondenceResponse.model_validate(result.correspondence).model_dump(),
        audit_complete=result.audit_complete,
        activity=[ActivityLogResponse.model_validate(entry) for entry in result.activity],
    )
