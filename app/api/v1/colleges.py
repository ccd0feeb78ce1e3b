"""
College endpoints (reads for any user, writes admin-only)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.context import OperationContext
from app.core.deps import get_current_user, get_db, get_operation_context, require_admin
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.organization import CollegeCreate, CollegeOut, CollegeUpdate
from app.services.organization_service import (
    create_college,
    delete_college,
    get_college,
    list_colleges,
    update_college,
)

router = APIRouter()


@router.get("", response_model=List[CollegeOut])
async def list_colleges_endpoint(
    campus_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_colleges(db, campus_id)


@router.post("", response_model=CollegeOut, status_code=201)
async def create_college_endpoint(
    college_data: CollegeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return create_college(db, college_data.model_dump(), ctx)


@router.get("/{college_id}", response_model=CollegeOut)
async def get_college_endpoint(
    college_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_college(db, college_id)


@router.put("/{college_id}", response_model=CollegeOut)
async def update_college_endpoint(
    college_id: int,
    college_data: CollegeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return update_college(db, college_id, college_data.model_dump(exclude_unset=True), ctx)


@router.delete("/{college_id}", response_model=MessageResponse)
async def delete_college_endpoint(
    college_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    delete_college(db, college_id, ctx)
    return {"message": "College deleted"}
