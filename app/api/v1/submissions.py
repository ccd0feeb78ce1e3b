"""
Submission endpoints, one router per submission type

Every router exposes the same surface: shared listing, personal listing,
detail, create, update, archive, admin delete and the admin review action.
"""
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, create_model
from sqlalchemy.orm import Session

from app.core.context import OperationContext
from app.core.deps import get_current_user, get_db, get_operation_context
from app.models.audit_log import EntityType
from app.models.user import User
from app.schemas.common import MessageResponse, PasswordConfirmation
from app.schemas.submission import (
    AwardCreate,
    AwardOut,
    AwardUpdate,
    EngagementCreate,
    EngagementOut,
    EngagementUpdate,
    ImpactAssessmentCreate,
    ImpactAssessmentOut,
    ImpactAssessmentUpdate,
    ModalityCreate,
    ModalityOut,
    ModalityUpdate,
    ReviewRequest,
    SubmissionStats,
    TechTransferCreate,
    TechTransferOut,
    TechTransferUpdate,
)
from app.services.review_service import transition_review
from app.services.submission_service import (
    archive_record,
    create_submission,
    delete_record,
    get_submission,
    my_submissions,
    update_submission,
)
from app.services.visibility_service import ViewKind, visible_submissions


def build_submission_router(
    entity_type: EntityType,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter()
    label = entity_type.value
    personal_schema = create_model(
        f"My{label}Response",
        items=(List[out_schema], ...),
        stats=(SubmissionStats, ...),
    )

    @router.get("", response_model=List[out_schema])
    async def list_submissions_endpoint(
        college_id: Optional[int] = Query(None),
        campus_id: Optional[int] = Query(None),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user)
    ):
        """Approved records (admins: everyone's, users: their own)"""
        return visible_submissions(
            db, entity_type, current_user, ViewKind.SHARED,
            college_id=college_id, campus_id=campus_id
        )

    @router.get("/my", response_model=personal_schema)
    async def my_submissions_endpoint(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user)
    ):
        """The caller's own records in any review status, with counts"""
        items, stats = my_submissions(db, entity_type, current_user)
        return {"items": items, "stats": stats}

    @router.get("/{entity_id}", response_model=out_schema)
    async def get_submission_endpoint(
        entity_id: int,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user)
    ):
        return get_submission(db, entity_type, entity_id, current_user)

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    async def create_submission_endpoint(
        payload: create_schema,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        ctx: OperationContext = Depends(get_operation_context)
    ):
        return create_submission(db, entity_type, payload.model_dump(), current_user, ctx)

    @router.put("/{entity_id}", response_model=out_schema)
    async def update_submission_endpoint(
        entity_id: int,
        payload: update_schema,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        ctx: OperationContext = Depends(get_operation_context)
    ):
        """Edit as owner or admin; an owner's edit resubmits a rejected record"""
        changes = payload.model_dump(exclude_unset=True)
        return update_submission(db, entity_type, entity_id, changes, current_user, ctx)

    @router.post("/{entity_id}/archive", response_model=out_schema)
    async def archive_submission_endpoint(
        entity_id: int,
        payload: PasswordConfirmation,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        ctx: OperationContext = Depends(get_operation_context)
    ):
        return archive_record(db, entity_type, entity_id, current_user, payload.password, ctx)

    @router.delete("/{entity_id}", response_model=MessageResponse)
    async def delete_submission_endpoint(
        entity_id: int,
        payload: PasswordConfirmation,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        ctx: OperationContext = Depends(get_operation_context)
    ):
        """Permanently delete (admin only)"""
        delete_record(db, entity_type, entity_id, current_user, payload.password, ctx)
        return {"message": f"{label} deleted"}

    @router.post("/{entity_id}/review", response_model=out_schema)
    async def review_submission_endpoint(
        entity_id: int,
        payload: ReviewRequest,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
        ctx: OperationContext = Depends(get_operation_context)
    ):
        """Approve or reject a pending record (admin only)"""
        return transition_review(
            db, entity_type, entity_id, current_user, payload.status, payload.remarks, ctx
        )

    return router


tech_transfers = build_submission_router(
    EntityType.TECH_TRANSFER, TechTransferCreate, TechTransferUpdate, TechTransferOut
)
awards = build_submission_router(EntityType.AWARD, AwardCreate, AwardUpdate, AwardOut)
engagements = build_submission_router(
    EntityType.ENGAGEMENT, EngagementCreate, EngagementUpdate, EngagementOut
)
modalities = build_submission_router(
    EntityType.MODALITY, ModalityCreate, ModalityUpdate, ModalityOut
)
impact_assessments = build_submission_router(
    EntityType.IMPACT_ASSESSMENT, ImpactAssessmentCreate, ImpactAssessmentUpdate, ImpactAssessmentOut
)
