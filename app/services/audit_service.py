"""
Audit recording service
"""
import logging
from sqlalchemy.orm import Session
from app.core.context import OperationContext, get_bound_context
from app.models.audit_log import AuditLog, AuditAction, EntityType
from app.services.audit_log_service import append_entry
from app.utils.datetime_utils import now_utc
from app.utils.json_serializer import serialize_values
from typing import Optional, Dict, Any, Union

logger = logging.getLogger(__name__)


def build_entry(
    action: Union[AuditAction, str],
    entity_type: EntityType,
    entity_id: Optional[int],
    before: Optional[Dict[str, Any]],
    after: Optional[Dict[str, Any]],
    context: OperationContext,
) -> AuditLog:
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    return AuditLog(
        actor_id=context.actor_id,
        action=action_value,
        entity_type=EntityType(entity_type).value,
        entity_id=entity_id,
        before_values=serialize_values(before),
        after_values=serialize_values(after),
        origin_address=context.origin_address,
        client_agent=context.client_agent,
        occurred_at=now_utc(),
    )


def record_change(
    db: Session,
    action: Union[AuditAction, str],
    entity_type: EntityType,
    entity_id: Optional[int],
    before: Optional[Dict[str, Any]] = None,
    after: Optional[Dict[str, Any]] = None,
    context: Optional[OperationContext] = None,
) -> Optional[AuditLog]:
    """
    Create an audit log entry

    Never raises: a failed write is rolled back, logged and dropped so the
    business operation that triggered it is unaffected.

    Args:
        db: Database session the entry is written through
        action: AuditAction or a free-form verb for domain events
        entity_type: EntityType tag of the affected entity
        entity_id: ID of the affected entity (may no longer exist)
        before: Previous values of changed fields
        after: New values of changed fields
        context: Actor and request provenance; defaults to the context bound to db

    Returns:
        Created AuditLog instance, or None if it could not be persisted
    """
    ctx = context or get_bound_context(db)
    try:
        entry = build_entry(action, entity_type, entity_id, before, after, ctx)
        return append_entry(db, entry)
    except Exception:
        logger.error(
            "Failed to record audit entry action=%s entity_type=%s entity_id=%s",
            action, entity_type, entity_id,
            exc_info=True,
        )
        try:
            db.rollback()
        except Exception:
            logger.error("Rollback after audit failure also failed", exc_info=True)
        return None
