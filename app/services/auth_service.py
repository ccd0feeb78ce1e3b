"""
Authentication service - login/logout with their audit events
"""
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.context import OperationContext
from app.core.security import create_access_token, verify_password
from app.models.audit_log import AuditAction, EntityType
from app.models.user import User
from app.services.audit_service import record_change
from app.services.user_service import get_user_by_email


def authenticate(db: Session, email: str, password: str, ctx: OperationContext) -> tuple:
    """
    Verify credentials and issue a token

    Returns:
        (user, access_token)

    Raises:
        HTTPException: 401 on bad credentials, 403 for inactive accounts
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    # JWT 'sub' claim must be a string
    token = create_access_token(data={"sub": str(user.id), "role": user.role})

    record_change(
        db,
        AuditAction.LOGIN,
        EntityType.USER,
        user.id,
        after={"email": user.email},
        context=OperationContext(user.id, ctx.origin_address, ctx.client_agent),
    )
    return user, token


def logout(db: Session, user: User, ctx: OperationContext) -> None:
    """Tokens are stateless; logging out only records the event"""
    record_change(db, AuditAction.LOGOUT, EntityType.USER, user.id, context=ctx)
