"""
User management endpoints (admin only)
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.context import OperationContext
from app.core.deps import get_db, get_operation_context, require_admin
from app.models.user import Role, User
from app.schemas.common import MessageResponse
from app.schemas.user import UserCreate, UserListResponse, UserOut, UserUpdate
from app.services.user_service import (
    create_user,
    delete_user,
    get_user,
    list_users,
    toggle_admin,
    update_user,
)

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users_endpoint(
    search: Optional[str] = Query(None),
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List users with search/role/active filters and per-role counts"""
    users, total, role_counts = list_users(db, search, role, is_active, skip, limit)
    return {"items": users, "total": total, "role_counts": role_counts}


@router.post("", response_model=UserOut, status_code=201)
async def create_user_endpoint(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return create_user(db, user_data.model_dump(), ctx)


@router.get("/{user_id}", response_model=UserOut)
async def get_user_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return get_user(db, user_id)


@router.put("/{user_id}", response_model=UserOut)
async def update_user_endpoint(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return update_user(db, user_id, user_data.model_dump(exclude_unset=True), ctx)


@router.post("/{user_id}/toggle-admin", response_model=UserOut)
async def toggle_admin_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    return toggle_admin(db, user_id, current_user, ctx)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    ctx: OperationContext = Depends(get_operation_context)
):
    delete_user(db, user_id, current_user, ctx)
    return {"message": "User deleted"}
