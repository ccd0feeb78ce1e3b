"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.context import OperationContext
from app.core.errors import AuthorizationError
from app.core.security import decode_token
from app.models.user import User


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token
    """
    token = credentials.credentials

    try:
        payload = decode_token(token)
        sub_value = payload.get("sub")
        if sub_value is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        # JWT sub is a string
        user_id: int = int(sub_value)
    except (ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """
    Gate admin-only routes

    Usage:
        @router.get("/admin-only")
        async def endpoint(user: User = Depends(require_admin)):
            ...
    """
    if not current_user.is_admin:
        raise AuthorizationError("Access denied. Admin role required.")
    return current_user


def request_context(request: Request, actor_id=None) -> OperationContext:
    """Provenance for the current request, optionally attributed to actor_id."""
    return OperationContext(
        actor_id=actor_id,
        origin_address=request.client.host if request.client else None,
        client_agent=request.headers.get("user-agent"),
    )


def get_operation_context(
    request: Request,
    current_user: User = Depends(get_current_user)
) -> OperationContext:
    """Actor and request provenance for audit entries"""
    return request_context(request, current_user.id)
