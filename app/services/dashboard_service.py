"""
Dashboard service - yearly and per-organization submission counts

Admin figures count approved, non-archived records through the shared
visibility view; the user dashboard is built on the personal view.
"""
import calendar
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import extract
from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, NotFoundError
from app.models.audit_log import EntityType
from app.models.campus import Campus
from app.models.mixins import ReviewStatus, model_for
from app.models.user import User
from app.services.review_service import TITLE_FIELDS, list_pending_submissions
from app.services.visibility_service import ViewKind, visible_query
from app.utils.datetime_utils import UTC, now_utc

# College-scoped submission types shown on dashboards
DASHBOARD_TYPES = (EntityType.TECH_TRANSFER, EntityType.AWARD, EntityType.ENGAGEMENT)


def _require_admin(actor: User) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Only administrators can view dashboard statistics")


def _get_campus(db: Session, campus_id: int) -> Campus:
    campus = db.get(Campus, campus_id)
    if campus is None:
        raise NotFoundError(f"Campus with id {campus_id} not found")
    return campus


def _month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    start = datetime(year, month, 1, tzinfo=UTC)
    end = datetime(year + 1, 1, 1, tzinfo=UTC) if month == 12 else datetime(year, month + 1, 1, tzinfo=UTC)
    return start, end


def _year_bounds(year: int) -> Tuple[datetime, datetime]:
    return datetime(year, 1, 1, tzinfo=UTC), datetime(year + 1, 1, 1, tzinfo=UTC)


def _approved_counts(
    db: Session,
    actor: User,
    bounds: Tuple[datetime, datetime],
    college_id: Optional[int] = None,
    campus_id: Optional[int] = None,
) -> Dict[str, int]:
    start, end = bounds
    counts = {}
    for entity_type in DASHBOARD_TYPES:
        model = model_for(entity_type)
        counts[entity_type.value] = (
            visible_query(db, entity_type, actor, ViewKind.SHARED, college_id=college_id, campus_id=campus_id)
            .filter(model.created_at >= start, model.created_at < end)
            .count()
        )
    return counts


def available_years(db: Session, current_year: int) -> List[int]:
    """Years with at least one dashboard record, newest first"""
    years = set()
    for entity_type in DASHBOARD_TYPES:
        model = model_for(entity_type)
        year_col = extract("year", model.created_at)
        years.update(int(y) for (y,) in db.query(year_col).distinct() if y is not None)
    return sorted(years, reverse=True) or [current_year]


def admin_dashboard(
    db: Session,
    actor: User,
    year: Optional[int] = None,
    campus_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Admin overview for one calendar year (UTC)

    Args:
        year: Defaults to the current year
        campus_id: Restrict overall and monthly figures to one campus

    Returns:
        overall_stats, monthly_stats (Jan..Dec), campus_stats for every
        campus, available_years and review_stats (pending per type)
    """
    _require_admin(actor)
    current_year = (now or now_utc()).year
    year = year or current_year
    if campus_id is not None:
        _get_campus(db, campus_id)

    overall = _approved_counts(db, actor, _year_bounds(year), campus_id=campus_id)
    monthly = []
    for month in range(1, 13):
        counts = _approved_counts(db, actor, _month_bounds(year, month), campus_id=campus_id)
        monthly.append({"month": calendar.month_abbr[month], **counts})
    campus_stats = []
    for campus in db.query(Campus).order_by(Campus.name).all():
        counts = _approved_counts(db, actor, _year_bounds(year), campus_id=campus.id)
        campus_stats.append({
            "id": campus.id,
            "name": campus.name,
            "total_colleges": len(campus.colleges),
            "counts": counts,
            "total": sum(counts.values()),
        })

    _, pending = list_pending_submissions(db, actor)
    return {
        "selected_year": year,
        "campus_id": campus_id,
        "overall_stats": {"counts": overall, "total": sum(overall.values())},
        "monthly_stats": monthly,
        "campus_stats": campus_stats,
        "available_years": available_years(db, current_year),
        "review_stats": {"counts": pending, "total": sum(pending.values())},
    }


def college_dashboard(
    db: Session,
    actor: User,
    campus_id: int,
    year: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Approved counts per college of one campus for a year"""
    _require_admin(actor)
    campus = _get_campus(db, campus_id)
    year = year or (now or now_utc()).year

    college_stats = []
    for college in sorted(campus.colleges, key=lambda c: c.name):
        counts = _approved_counts(db, actor, _year_bounds(year), college_id=college.id)
        college_stats.append({
            "id": college.id,
            "code": college.code,
            "name": college.name,
            "counts": counts,
            "total": sum(counts.values()),
        })
    return {"campus_id": campus.id, "campus_name": campus.name, "selected_year": year, "college_stats": college_stats}


def user_dashboard(db: Session, actor: User, recent_n: int = 5) -> Dict[str, Any]:
    """The actor's own non-archived records: per-status counts and latest items"""
    stats = {}
    recent = []
    for entity_type in DASHBOARD_TYPES:
        model = model_for(entity_type)
        rows = (
            visible_query(db, entity_type, actor, ViewKind.PERSONAL)
            .order_by(model.created_at.desc(), model.id.desc())
            .all()
        )
        type_stats = {"total": len(rows)}
        for status in ReviewStatus:
            type_stats[status.value] = sum(1 for row in rows if row.status == status)
        stats[entity_type.value] = type_stats
        recent.extend((entity_type, row) for row in rows[:recent_n])

    recent.sort(key=lambda pair: (pair[1].created_at, pair[1].id), reverse=True)
    return {
        "stats": stats,
        "recent": [
            {
                "type": entity_type.value,
                "id": row.id,
                "title": getattr(row, TITLE_FIELDS[entity_type]),
                "status": row.status.value,
                "created_at": row.created_at,
            }
            for entity_type, row in recent[:recent_n]
        ],
    }
