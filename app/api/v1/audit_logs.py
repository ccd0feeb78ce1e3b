"""
Audit log endpoints (admin only, read-only)
"""
import math
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_db, require_admin
from app.core.errors import NotFoundError
from app.models.audit_log import EntityType
from app.models.user import User
from app.schemas.audit_log import AuditLogOut, AuditLogPage, AuditStatistics
from app.services.audit_log_service import (
    AuditLogFilters,
    audit_statistics,
    entity_history,
    get_audit_entry,
    query_audit_log,
)

router = APIRouter()


@router.get("", response_model=AuditLogPage)
async def list_audit_logs_endpoint(
    actor_id: Optional[int] = Query(None),
    entity_type: Optional[EntityType] = Query(None),
    entity_id: Optional[int] = Query(None),
    action: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches the entry description, e.g. 'updated award'"),
    from_date: Optional[date] = Query(None, description="Inclusive start day (UTC)"),
    to_date: Optional[date] = Query(None, description="Inclusive end day (UTC)"),
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("occurred_at"),
    sort_dir: str = Query("desc"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Filter, sort and paginate the audit trail"""
    per_page = min(per_page or settings.AUDIT_PAGE_SIZE, settings.AUDIT_MAX_PAGE_SIZE)
    filters = AuditLogFilters(
        actor_id=actor_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        search=search,
        from_date=from_date,
        to_date=to_date,
    )
    items, total = query_audit_log(db, filters, page, per_page, sort_by, sort_dir)
    return {
        "items": items,
        "total": total,
        "page": page,
        "per_page": per_page,
        "pages": math.ceil(total / per_page) if total else 0,
    }


@router.get("/statistics", response_model=AuditStatistics)
async def audit_statistics_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return audit_statistics(db, settings.AUDIT_STATS_TOP_N, settings.AUDIT_STATS_RECENT_N)


@router.get("/entity/{entity_type}/{entity_id}", response_model=List[AuditLogOut])
async def entity_history_endpoint(
    entity_type: EntityType,
    entity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Full history of one entity, oldest first"""
    return entity_history(db, entity_type, entity_id)


@router.get("/{entry_id}", response_model=AuditLogOut)
async def get_audit_log_endpoint(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    entry = get_audit_entry(db, entry_id)
    if not entry:
        raise NotFoundError(f"Audit log entry {entry_id} not found")
    return entry
