"""
Audit log store - append-only persistence and read-side queries over audit_logs
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import func, desc, asc
from sqlalchemy.orm import Session

from app.core.errors import ReviewValidationError
from app.models.audit_log import AuditLog, EntityType
from app.models.user import User
from app.utils.datetime_utils import (
    now_utc,
    ensure_utc,
    start_of_day,
    start_of_week,
    start_of_month,
    end_of_day,
)

SORTABLE_FIELDS = {
    "occurred_at": AuditLog.occurred_at,
    "action": AuditLog.action,
    "entity_type": AuditLog.entity_type,
    "entity_id": AuditLog.entity_id,
    "actor_id": AuditLog.actor_id,
    "id": AuditLog.id,
}


@dataclass
class AuditLogFilters:
    actor_id: Optional[int] = None
    entity_type: Optional[EntityType] = None
    entity_id: Optional[int] = None
    action: Optional[str] = None
    search: Optional[str] = None
    from_date: Optional[Union[date, datetime]] = None
    to_date: Optional[Union[date, datetime]] = None


def append_entry(db: Session, entry: AuditLog) -> AuditLog:
    """Insert a new audit entry. Existing rows are never touched."""
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def _lower_bound(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return start_of_day(datetime.combine(value, datetime.min.time()))


def _upper_bound(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return end_of_day(value)


def _description_expr():
    return func.lower(AuditLog.action + " " + AuditLog.entity_type)


def _apply_filters(query, filters: AuditLogFilters):
    if filters.actor_id is not None:
        query = query.filter(AuditLog.actor_id == filters.actor_id)
    if filters.entity_type is not None:
        query = query.filter(AuditLog.entity_type == EntityType(filters.entity_type).value)
    if filters.entity_id is not None:
        query = query.filter(AuditLog.entity_id == filters.entity_id)
    if filters.action:
        query = query.filter(AuditLog.action == filters.action)
    if filters.search:
        query = query.filter(_description_expr().contains(filters.search.strip().lower()))
    if filters.from_date is not None:
        query = query.filter(AuditLog.occurred_at >= _lower_bound(filters.from_date))
    if filters.to_date is not None:
        query = query.filter(AuditLog.occurred_at <= _upper_bound(filters.to_date))
    return query


def query_audit_log(
    db: Session,
    filters: Optional[AuditLogFilters] = None,
    page: int = 1,
    per_page: int = 15,
    sort_by: str = "occurred_at",
    sort_dir: str = "desc",
) -> Tuple[List[AuditLog], int]:
    """
    Filter, sort and paginate audit entries

    Args:
        db: Database session
        filters: Optional filter set; empty fields are ignored
        page: 1-based page number
        per_page: Page size
        sort_by: One of SORTABLE_FIELDS
        sort_dir: "asc" or "desc"

    Returns:
        (entries on the requested page, total matching entries)

    Raises:
        ReviewValidationError: If sort or paging parameters are invalid
    """
    if sort_by not in SORTABLE_FIELDS:
        raise ReviewValidationError(
            f"Cannot sort by '{sort_by}'. Allowed: {sorted(SORTABLE_FIELDS)}"
        )
    if sort_dir not in ("asc", "desc"):
        raise ReviewValidationError("sort_dir must be 'asc' or 'desc'")
    if page < 1 or per_page < 1:
        raise ReviewValidationError("page and per_page must be positive")

    query = _apply_filters(db.query(AuditLog), filters or AuditLogFilters())
    total = query.order_by(None).count()

    direction = desc if sort_dir == "desc" else asc
    # id breaks ties so entries sharing a timestamp keep commit order
    query = query.order_by(direction(SORTABLE_FIELDS[sort_by]), direction(AuditLog.id))
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return items, total


def get_audit_entry(db: Session, entry_id: int) -> Optional[AuditLog]:
    return db.query(AuditLog).filter(AuditLog.id == entry_id).first()


def entity_history(db: Session, entity_type: EntityType, entity_id: int) -> List[AuditLog]:
    """All entries for one entity, oldest first."""
    return (
        db.query(AuditLog)
        .filter(
            AuditLog.entity_type == EntityType(entity_type).value,
            AuditLog.entity_id == entity_id,
        )
        .order_by(AuditLog.occurred_at.asc(), AuditLog.id.asc())
        .all()
    )


def _top(db: Session, column, top_n: int) -> List[Tuple[Any, int]]:
    count = func.count(AuditLog.id).label("count")
    return (
        db.query(column, count)
        .group_by(column)
        .order_by(count.desc(), column.asc())
        .limit(top_n)
        .all()
    )


def audit_statistics(
    db: Session,
    top_n: int = 5,
    recent_n: int = 10,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Aggregate counts and rankings over the whole audit trail

    Windows are calendar based in UTC: today, the current ISO week (from
    Monday) and the current month.
    """
    now = ensure_utc(now) if now is not None else now_utc()

    def count_since(start: datetime) -> int:
        return db.query(func.count(AuditLog.id)).filter(AuditLog.occurred_at >= start).scalar() or 0

    top_actor_rows = [row for row in _top(db, AuditLog.actor_id, top_n + 1) if row[0] is not None][:top_n]
    actor_ids = [actor_id for actor_id, _ in top_actor_rows]
    actors = {u.id: u for u in db.query(User).filter(User.id.in_(actor_ids)).all()} if actor_ids else {}

    recent = (
        db.query(AuditLog)
        .order_by(AuditLog.occurred_at.desc(), AuditLog.id.desc())
        .limit(recent_n)
        .all()
    )

    return {
        "total_logs": db.query(func.count(AuditLog.id)).scalar() or 0,
        "logs_today": count_since(start_of_day(now)),
        "logs_this_week": count_since(start_of_week(now)),
        "logs_this_month": count_since(start_of_month(now)),
        "top_actions": [
            {"action": action, "count": count} for action, count in _top(db, AuditLog.action, top_n)
        ],
        "top_entity_types": [
            {"entity_type": entity_type, "count": count}
            for entity_type, count in _top(db, AuditLog.entity_type, top_n)
        ],
        "top_actors": [
            {
                "actor_id": actor_id,
                "name": actors[actor_id].name if actor_id in actors else None,
                "email": actors[actor_id].email if actor_id in actors else None,
                "count": count,
            }
            for actor_id, count in top_actor_rows
        ],
        "recent": recent,
    }
