"""
Entity lifecycle hook: turns ORM flushes of Auditable models into audit entries.

Snapshots are taken with plain SELECTs on the flushing connection, so
"previous" is the row as persisted before the flush and "current" is the row
as written by it. Change sets are queued per session and written only after
the business transaction commits, through a separate session; a rollback
discards the queue.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import event, inspect, select
from sqlalchemy.orm import Session

from app.core.constants import AUDIT_WRITER_KEY
from app.core.context import get_bound_context
from app.models.audit_log import AuditAction, AuditLog
from app.models.mixins import Auditable
from app.services.audit_service import record_change
from app.services.change_detector import detect_changes

logger = logging.getLogger(__name__)

_FLUSH_KEY = "_audit_flush"
_PENDING_KEY = "_audit_pending"
_SKIP_KEY = "_audit_skip"


class AuditLogImmutableError(RuntimeError):
    pass


def _is_tracked(obj: Any, skipped=()) -> bool:
    return id(obj) not in skipped and isinstance(obj, Auditable) and type(obj).__audit_type__ is not None


def _primary_key(obj: Any) -> Tuple:
    state = inspect(obj)
    if state.identity is not None:
        return state.identity
    return tuple(state.mapper.primary_key_from_instance(obj))


def _select_row(session: Session, obj: Any, pk: Tuple) -> Dict[str, Any]:
    """Read the stored row for obj, keyed by mapped attribute name."""
    mapper = inspect(obj).mapper
    table = mapper.local_table
    criteria = [col == value for col, value in zip(mapper.primary_key, pk)]
    row = session.connection().execute(select(table).where(*criteria)).mappings().first()
    if row is None:
        return {}
    return {
        attr.key: row[attr.columns[0].key]
        for attr in mapper.column_attrs
        if attr.columns[0].table is table
    }


def suppress_lifecycle_audit(session: Session, obj: Any) -> None:
    """Leave obj out of generic auditing until the session next commits or rolls back."""
    session.info.setdefault(_SKIP_KEY, set()).add(id(obj))


def _before_flush(session: Session, flush_context, instances) -> None:
    if session.info.get(AUDIT_WRITER_KEY):
        return

    skipped = session.info.get(_SKIP_KEY, ())

    snapshots: List[Tuple[Any, AuditAction, Optional[Tuple], Dict[str, Any]]] = []
    for obj in session.new:
        if _is_tracked(obj, skipped):
            snapshots.append((obj, AuditAction.CREATED, None, {}))
    for obj in session.dirty:
        if _is_tracked(obj, skipped) and session.is_modified(obj, include_collections=False):
            pk = _primary_key(obj)
            snapshots.append((obj, AuditAction.UPDATED, pk, _select_row(session, obj, pk)))
    for obj in session.deleted:
        if _is_tracked(obj, skipped):
            pk = _primary_key(obj)
            snapshots.append((obj, AuditAction.DELETED, pk, _select_row(session, obj, pk)))

    session.info[_FLUSH_KEY] = snapshots


def _after_flush(session: Session, flush_context) -> None:
    snapshots = session.info.pop(_FLUSH_KEY, None)
    if not snapshots:
        return

    queue = session.info.setdefault(_PENDING_KEY, [])
    for obj, action, pk, previous in snapshots:
        cls = type(obj)
        if pk is None:
            pk = tuple(inspect(obj).mapper.primary_key_from_instance(obj))
        current = {} if action == AuditAction.DELETED else _select_row(session, obj, pk)
        changes = detect_changes(previous, current, cls.__audit_exclude__)
        if action == AuditAction.UPDATED and changes.is_empty:
            continue
        queue.append({
            "action": action,
            "entity_type": cls.__audit_type__,
            "entity_id": pk[0],
            "before": changes.before,
            "after": changes.after,
        })


def _after_commit(session: Session) -> None:
    session.info.pop(_SKIP_KEY, None)
    pending = session.info.pop(_PENDING_KEY, None)
    if not pending:
        return

    context = get_bound_context(session)
    writer = Session(bind=session.get_bind(), info={AUDIT_WRITER_KEY: True})
    try:
        for item in pending:
            record_change(writer, context=context, **item)
    finally:
        writer.close()


def _after_rollback(session: Session) -> None:
    dropped = session.info.pop(_PENDING_KEY, None)
    session.info.pop(_FLUSH_KEY, None)
    session.info.pop(_SKIP_KEY, None)
    if dropped:
        logger.debug("Discarded %d queued audit entries after rollback", len(dropped))


def _forbid_audit_mutation(mapper, connection, target) -> None:
    raise AuditLogImmutableError(f"Audit log entry {target.id} is immutable")


def register_audit_hooks() -> None:
    """Attach the lifecycle listeners to every Session; safe to call twice."""
    if event.contains(Session, "before_flush", _before_flush):
        return
    event.listen(Session, "before_flush", _before_flush)
    event.listen(Session, "after_flush", _after_flush)
    event.listen(Session, "after_commit", _after_commit)
    event.listen(Session, "after_rollback", _after_rollback)
    event.listen(AuditLog, "before_update", _forbid_audit_mutation)
    event.listen(AuditLog, "before_delete", _forbid_audit_mutation)
