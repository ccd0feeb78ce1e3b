"""
User service - account management and self-service profile changes
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.context import OperationContext, bind_operation_context
from app.core.errors import AuthorizationError, NotFoundError
from app.core.security import hash_password, validate_password, verify_password
from app.db.audit_hooks import suppress_lifecycle_audit
from app.models.audit_log import AuditAction, EntityType
from app.models.campus import College
from app.models.mixins import AUDITABLE_MODELS, OwnedRecord
from app.models.user import Role, User
from app.services.audit_service import record_change
from app.services.change_detector import detect_changes
from app.services.submission_service import reject_required_nulls

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def _check_email(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    existing = get_user_by_email(db, email)
    if existing and existing.id != exclude_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Email '{email}' is already registered"
        )


def _check_college(db: Session, college_id: Optional[int]) -> None:
    if college_id is not None and not db.query(College).filter(College.id == college_id).first():
        raise NotFoundError(f"College with id {college_id} not found")


def _hash_or_422(password: str) -> str:
    try:
        return hash_password(validate_password(password))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


def list_users(
    db: Session,
    search: Optional[str] = None,
    role: Optional[Role] = None,
    is_active: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100
) -> Tuple[List[User], int, Dict[str, int]]:
    """
    List users with optional filtering

    Returns:
        (page of users, total matching, user count per role)
    """
    query = db.query(User)
    if search:
        term = f"%{search.strip().lower()}%"
        query = query.filter(or_(
            func.lower(User.first_name).like(term),
            func.lower(User.last_name).like(term),
            func.lower(User.email).like(term),
        ))
    if role is not None:
        query = query.filter(User.role == Role(role).value)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)

    total = query.count()
    users = query.order_by(User.id).offset(skip).limit(limit).all()

    role_counts = {r.value: 0 for r in Role}
    for role_value, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        role_counts[role_value] = count
    return users, total, role_counts


def create_user(db: Session, data: Dict[str, Any], ctx: Optional[OperationContext] = None) -> User:
    data = dict(data)
    _check_email(db, data["email"])
    _check_college(db, data.get("college_id"))
    password = data.pop("password")

    bind_operation_context(db, ctx)
    user = User(**data, password_hash=_hash_or_422(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.role)
    return user


def update_user(
    db: Session,
    user_id: int,
    changes: Dict[str, Any],
    ctx: Optional[OperationContext] = None
) -> User:
    user = get_user(db, user_id)
    changes = dict(changes)
    reject_required_nulls(User, changes)
    if changes.get("email"):
        _check_email(db, changes["email"], exclude_id=user_id)
    if "college_id" in changes:
        _check_college(db, changes["college_id"])
    password = changes.pop("password", None)
    if password:
        user.password_hash = _hash_or_422(password)

    for field, value in changes.items():
        setattr(user, field, value)

    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(user)
    return user


def toggle_admin(db: Session, user_id: int, actor: User, ctx: Optional[OperationContext] = None) -> User:
    """Flip a user between admin and user roles"""
    if user_id == actor.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot change your own role"
        )
    user = get_user(db, user_id)
    user.role = Role.USER.value if user.is_admin else Role.ADMIN.value

    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(user)
    logger.info("User %s role set to %s by %s", user.id, user.role, actor.id)
    return user


def delete_user(db: Session, user_id: int, actor: User, ctx: Optional[OperationContext] = None) -> None:
    if user_id == actor.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account"
        )
    user = get_user(db, user_id)
    for model in AUDITABLE_MODELS.values():
        if issubclass(model, OwnedRecord) and db.query(model).filter(model.owner_id == user_id).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete a user who still owns records; deactivate the account instead"
            )
    bind_operation_context(db, ctx)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s by %s", user_id, actor.id)


def change_password(
    db: Session,
    user: User,
    current_password: str,
    new_password: str,
    ctx: Optional[OperationContext] = None
) -> None:
    """
    Change the user's own password

    The generic hook sees no auditable change here (password_hash is
    excluded), so the event is recorded explicitly without the secret.
    """
    if not verify_password(current_password, user.password_hash):
        raise AuthorizationError("Current password is incorrect")
    user.password_hash = _hash_or_422(new_password)
    db.commit()

    record_change(
        db,
        AuditAction.UPDATE_PASSWORD,
        EntityType.USER,
        user.id,
        after={"password_changed": True},
        context=ctx,
    )


def update_profile(
    db: Session,
    user: User,
    changes: Dict[str, Any],
    ctx: Optional[OperationContext] = None
) -> User:
    """
    Update the user's own name/email and record a profile event

    The event lists only the profile fields that actually changed; a
    submission that changes nothing records nothing.
    """
    if changes.get("email"):
        _check_email(db, changes["email"], exclude_id=user.id)

    profile_fields = ("first_name", "last_name", "email")
    before = {f: getattr(user, f) for f in profile_fields}
    for field, value in changes.items():
        setattr(user, field, value)

    # recorded below as update_profile instead of a generic update
    suppress_lifecycle_audit(db, user)
    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(user)
    change_set = detect_changes(before, {f: getattr(user, f) for f in profile_fields})
    if change_set.is_empty:
        return user

    record_change(
        db,
        AuditAction.UPDATE_PROFILE,
        EntityType.USER,
        user.id,
        before=change_set.before,
        after=change_set.after,
        context=ctx,
    )
    return user
