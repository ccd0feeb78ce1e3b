"""
Campus endpoints (reads for any user, writes admin-only)
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.context import OperationContext
from app.core.deps import get_current_user, get_db, get_operation_context, require_admin
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.organization import CampusCreate, CampusDetailOut, CampusOut, CampusUpdate, CollegeOut
from app.services.organization_service import (
    create_campus,
    delete_campus,
    get_campus,
    list_campuses,
    list_colleges,
    update_campus,
)

router = APIRouter()


@router.get("", response_model=List[CampusOut])
async def list_campuses_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_campuses(db)


@router.post("", response_model=CampusOut, status_code=201)
async def create_campus_endpoint(
    campus_data: CampusCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return create_campus(db, campus_data.model_dump(), ctx)


@router.get("/{campus_id}", response_model=CampusDetailOut)
async def get_campus_endpoint(
    campus_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_campus(db, campus_id)


@router.get("/{campus_id}/colleges", response_model=List[CollegeOut])
async def campus_colleges_endpoint(
    campus_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    get_campus(db, campus_id)
    return list_colleges(db, campus_id)


@router.put("/{campus_id}", response_model=CampusOut)
async def update_campus_endpoint(
    campus_id: int,
    campus_data: CampusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return update_campus(db, campus_id, campus_data.model_dump(exclude_unset=True), ctx)


@router.delete("/{campus_id}", response_model=MessageResponse)
async def delete_campus_endpoint(
    campus_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    delete_campus(db, campus_id, ctx)
    return {"message": "Campus deleted"}
