"""
Resolution service
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.context import OperationContext, bind_operation_context
from app.core.errors import AuthorizationError
from app.models.audit_log import EntityType
from app.models.resolution import Resolution
from app.models.user import User
from app.services.submission_service import archive_record, check_field_changes, get_submission

logger = logging.getLogger(__name__)


def _check_unique_number(db: Session, number: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Resolution).filter(Resolution.resolution_number == number)
    if exclude_id is not None:
        query = query.filter(Resolution.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Resolution number '{number}' already exists"
        )


def list_resolutions(db: Session, actor: User) -> List[Resolution]:
    """Non-archived resolutions (admin only)"""
    if not actor.is_admin:
        raise AuthorizationError("Only administrators can list resolutions")
    return (
        db.query(Resolution)
        .filter(Resolution.is_archived.is_(False))
        .order_by(Resolution.created_at.desc(), Resolution.id.desc())
        .all()
    )


def create_resolution(
    db: Session,
    data: Dict[str, Any],
    actor: User,
    ctx: Optional[OperationContext] = None
) -> Resolution:
    _check_unique_number(db, data["resolution_number"])

    bind_operation_context(db, ctx)
    resolution = Resolution(**data, owner_id=actor.id, is_archived=False)
    db.add(resolution)
    db.commit()
    db.refresh(resolution)
    return resolution


def get_resolution(db: Session, resolution_id: int, actor: User) -> Resolution:
    return get_submission(db, EntityType.RESOLUTION, resolution_id, actor)


def update_resolution(
    db: Session,
    resolution_id: int,
    changes: Dict[str, Any],
    actor: User,
    ctx: Optional[OperationContext] = None
) -> Resolution:
    resolution = get_resolution(db, resolution_id, actor)
    check_field_changes(db, Resolution, changes, resolution)
    if changes.get("resolution_number"):
        _check_unique_number(db, changes["resolution_number"], exclude_id=resolution_id)

    for field, value in changes.items():
        setattr(resolution, field, value)

    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(resolution)
    return resolution


def archive_resolution(
    db: Session,
    resolution_id: int,
    actor: User,
    password: Optional[str],
    ctx: Optional[OperationContext] = None
) -> Resolution:
    """Only an admin who owns the resolution may archive it"""
    return archive_record(
        db, EntityType.RESOLUTION, resolution_id, actor, password, ctx, admin_owner_only=True
    )
