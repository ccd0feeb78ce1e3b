"""
Submission service - CRUD for owned records (submissions and resolutions)
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.context import OperationContext, bind_operation_context
from app.core.errors import AuthorizationError, NotFoundError, ReviewValidationError
from app.core.security import verify_password
from app.models.audit_log import EntityType
from app.models.campus import College
from app.models.mixins import OwnedRecord, ReviewStatus, model_for
from app.models.tech_transfer import TechTransfer
from app.models.user import User
from app.services.review_service import apply_resubmission
from app.services.visibility_service import ViewKind, ensure_visible, visible_submissions

logger = logging.getLogger(__name__)

# (start, end) column pairs checked against the stored row on partial updates
DATE_RANGES = (("start_date", "end_date"), ("effectivity", "expiration"))


def confirm_password(actor: User, password: Optional[str]) -> None:
    """Re-check the actor's password before a destructive action"""
    if not verify_password(password, actor.password_hash):
        raise AuthorizationError("Invalid password")


def _label(entity_type: EntityType) -> str:
    return EntityType(entity_type).value


def _require_parent_tech_transfer(db: Session, tech_transfer_id: int, actor: User) -> TechTransfer:
    parent = db.query(TechTransfer).filter(TechTransfer.id == tech_transfer_id).first()
    return ensure_visible(parent, actor, "Tech transfer")


def reject_required_nulls(model, changes: Dict[str, Any]) -> None:
    """Explicit null for a NOT NULL column is a validation error, not a 500"""
    columns = model.__table__.columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            raise ReviewValidationError(f"{field} cannot be null")


def check_field_changes(
    db: Session,
    model,
    changes: Dict[str, Any],
    entity: Optional[OwnedRecord] = None
) -> None:
    """
    Validate values about to be written to a model row

    Explicit nulls are rejected for NOT NULL columns, a college_id must name
    an existing college, and date ranges are checked on the merged row so a
    partial update cannot move one end past the stored other end.

    Raises:
        ReviewValidationError: Null for a required column or inverted dates
        NotFoundError: Unknown college
    """
    reject_required_nulls(model, changes)

    if changes.get("college_id") is not None and db.get(College, changes["college_id"]) is None:
        raise NotFoundError("College not found")

    columns = model.__table__.columns
    for start_field, end_field in DATE_RANGES:
        if start_field not in columns:
            continue
        start = changes.get(start_field, getattr(entity, start_field, None))
        end = changes.get(end_field, getattr(entity, end_field, None))
        if start is not None and end is not None and end < start:
            raise ReviewValidationError(f"{end_field} must not be before {start_field}")


def create_submission(
    db: Session,
    entity_type: EntityType,
    data: Dict[str, Any],
    actor: User,
    ctx: Optional[OperationContext] = None
) -> OwnedRecord:
    """
    Create a submission owned by actor in pending status

    College-scoped types default to the actor's college. Modalities and
    impact assessments must reference a tech transfer visible to the actor.
    """
    model = model_for(entity_type)
    data = dict(data)

    if hasattr(model, "tech_transfer_id"):
        _require_parent_tech_transfer(db, data.get("tech_transfer_id"), actor)
    if hasattr(model, "college_id") and data.get("college_id") is None:
        data["college_id"] = actor.college_id
    check_field_changes(db, model, data)

    bind_operation_context(db, ctx)
    entity = model(**data, owner_id=actor.id, status=ReviewStatus.PENDING, is_archived=False)
    db.add(entity)
    db.commit()
    db.refresh(entity)

    logger.info("Created %s %s for user %s", _label(entity_type), entity.id, actor.id)
    return entity


def get_submission(db: Session, entity_type: EntityType, entity_id: int, actor: User) -> OwnedRecord:
    model = model_for(entity_type)
    entity = db.query(model).filter(model.id == entity_id).first()
    return ensure_visible(entity, actor, _label(entity_type))


def update_submission(
    db: Session,
    entity_type: EntityType,
    entity_id: int,
    changes: Dict[str, Any],
    actor: User,
    ctx: Optional[OperationContext] = None
) -> OwnedRecord:
    """
    Apply field changes as owner or admin

    An owner editing a rejected submission sends it back to pending in the
    same write.
    """
    entity = get_submission(db, entity_type, entity_id, actor)

    check_field_changes(db, type(entity), changes, entity)
    if changes.get("tech_transfer_id") is not None:
        _require_parent_tech_transfer(db, changes["tech_transfer_id"], actor)

    for field, value in changes.items():
        setattr(entity, field, value)
    apply_resubmission(entity, actor)

    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(entity)
    return entity


def archive_record(
    db: Session,
    entity_type: EntityType,
    entity_id: int,
    actor: User,
    password: Optional[str],
    ctx: Optional[OperationContext] = None,
    admin_owner_only: bool = False
) -> OwnedRecord:
    """
    Soft-delete a record after confirming the actor's password

    Args:
        admin_owner_only: Require an admin who also owns the record
            (resolutions) instead of owner-or-admin

    Raises:
        NotFoundError: Record missing or already archived
        AuthorizationError: Actor may not archive it, or wrong password
    """
    model = model_for(entity_type)
    entity = db.query(model).filter(model.id == entity_id).first()
    if entity is None or entity.is_archived:
        raise NotFoundError(f"{_label(entity_type)} not found")

    is_owner = entity.owner_id == actor.id
    allowed = (actor.is_admin and is_owner) if admin_owner_only else (actor.is_admin or is_owner)
    if not allowed:
        raise AuthorizationError(f"You are not allowed to archive this {_label(entity_type)}")
    confirm_password(actor, password)

    bind_operation_context(db, ctx)
    entity.is_archived = True
    db.commit()
    db.refresh(entity)

    logger.info("Archived %s %s by user %s", _label(entity_type), entity_id, actor.id)
    return entity


def delete_record(
    db: Session,
    entity_type: EntityType,
    entity_id: int,
    actor: User,
    password: Optional[str],
    ctx: Optional[OperationContext] = None
) -> None:
    """Hard delete (admin only, password-confirmed)"""
    if not actor.is_admin:
        raise AuthorizationError("Only administrators can delete records")
    confirm_password(actor, password)

    model = model_for(entity_type)
    entity = db.query(model).filter(model.id == entity_id).first()
    if entity is None:
        raise NotFoundError(f"{_label(entity_type)} not found")

    bind_operation_context(db, ctx)
    db.delete(entity)
    db.commit()

    logger.info("Deleted %s %s by user %s", _label(entity_type), entity_id, actor.id)


def my_submissions(
    db: Session,
    entity_type: EntityType,
    actor: User
) -> Tuple[List[OwnedRecord], Dict[str, int]]:
    """The actor's own non-archived submissions with per-status counts"""
    items = visible_submissions(db, entity_type, actor, ViewKind.PERSONAL)
    stats = {"total": len(items)}
    for status in ReviewStatus:
        stats[status.value] = sum(1 for item in items if item.status == status)
    return items, stats
