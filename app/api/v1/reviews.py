"""
Review queue endpoints (admin only)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.context import OperationContext
from app.core.deps import get_db, get_operation_context, require_admin
from app.models.user import User
from app.schemas.submission import PendingSubmissionsResponse, ReviewRequest
from app.schemas.user import UserRef
from app.services.review_service import (
    TITLE_FIELDS,
    list_pending_submissions,
    resolve_submission_type,
    transition_review,
)
from app.utils.datetime_utils import iso_8601_utc

router = APIRouter()


@router.get("/pending", response_model=PendingSubmissionsResponse)
async def pending_submissions_endpoint(
    type: Optional[str] = Query(None, description="Submission type slug, e.g. tech-transfer"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Pending, non-archived submissions across all types, newest first"""
    items, counts = list_pending_submissions(db, current_user, type)
    return {
        "items": [
            {
                "type": entity_type.value,
                "id": entity.id,
                "owner": UserRef.model_validate(entity.owner) if entity.owner else None,
                "title": getattr(entity, TITLE_FIELDS[entity_type], None),
                "created_at": iso_8601_utc(entity.created_at),
            }
            for entity_type, entity in items
        ],
        "counts": counts,
        "total": len(items),
    }


@router.post("/{submission_type}/{entity_id}")
async def review_endpoint(
    submission_type: str,
    entity_id: int,
    payload: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    """Approve or reject one pending submission"""
    entity_type = resolve_submission_type(submission_type)
    submission = transition_review(
        db, entity_type, entity_id, current_user, payload.status, payload.remarks, ctx
    )
    return {
        "type": entity_type.value,
        "id": submission.id,
        "status": submission.status,
        "remarks": submission.remarks,
    }
