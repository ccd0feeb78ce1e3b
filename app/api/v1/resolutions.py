"""
Resolution endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.core.context import OperationContext
from app.core.deps import get_current_user, get_db, get_operation_context
from app.models.user import User
from app.schemas.common import PasswordConfirmation
from app.schemas.resolution import ResolutionCreate, ResolutionOut, ResolutionUpdate
from app.services.resolution_service import (
    archive_resolution,
    create_resolution,
    get_resolution,
    list_resolutions,
    update_resolution,
)

router = APIRouter()


@router.get("", response_model=List[ResolutionOut])
async def list_resolutions_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List non-archived resolutions (admin only)"""
    return list_resolutions(db, current_user)


@router.post("", response_model=ResolutionOut, status_code=status.HTTP_201_CREATED)
async def create_resolution_endpoint(
    payload: ResolutionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    return create_resolution(db, payload.model_dump(), current_user, ctx)


@router.get("/{resolution_id}", response_model=ResolutionOut)
async def get_resolution_endpoint(
    resolution_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_resolution(db, resolution_id, current_user)


@router.put("/{resolution_id}", response_model=ResolutionOut)
async def update_resolution_endpoint(
    resolution_id: int,
    payload: ResolutionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    return update_resolution(db, resolution_id, payload.model_dump(exclude_unset=True), current_user, ctx)


@router.post("/{resolution_id}/archive", response_model=ResolutionOut)
async def archive_resolution_endpoint(
    resolution_id: int,
    payload: PasswordConfirmation,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    """Archive (admin who owns the resolution, password-confirmed)"""
    return archive_resolution(db, resolution_id, current_user, payload.password, ctx)
