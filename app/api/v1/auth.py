"""
Authentication endpoints
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from app.core.context import OperationContext
from app.core.deps import get_db, get_current_user, get_operation_context, request_context
from app.models.user import User
from app.schemas.auth import LoginRequest, PasswordUpdate, ProfileUpdate, TokenResponse
from app.schemas.common import MessageResponse
from app.schemas.user import UserOut
from app.services.auth_service import authenticate, logout
from app.services.user_service import change_password, update_profile

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token

    Validates email and password, rejects inactive accounts and records a
    login event.
    """
    user, access_token = authenticate(
        db, login_data.email, login_data.password, request_context(request)
    )
    return TokenResponse(access_token=access_token, token_type="bearer", user=UserOut.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    logout(db, current_user, ctx)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserOut)
async def current_user_endpoint(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/password", response_model=MessageResponse)
async def update_password_endpoint(
    payload: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    change_password(db, current_user, payload.current_password, payload.password, ctx)
    return {"message": "Password updated"}


@router.put("/profile", response_model=UserOut)
async def update_profile_endpoint(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    ctx: OperationContext = Depends(get_operation_context)
):
    return update_profile(db, current_user, payload.model_dump(exclude_unset=True, exclude_none=True), ctx)
