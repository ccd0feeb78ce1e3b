"""
Dashboard endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db, require_admin
from app.models.user import User
from app.schemas.dashboard import AdminDashboard, CollegeDashboard, UserDashboard
from app.services.dashboard_service import admin_dashboard, college_dashboard, user_dashboard

router = APIRouter()


@router.get("/admin", response_model=AdminDashboard)
async def admin_dashboard_endpoint(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Calendar year, defaults to the current year"),
    campus_id: Optional[int] = Query(None, description="Restrict overall and monthly figures to one campus"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Approved submission counts for a year

    Includes a monthly series, per-campus totals, the years that have data
    and the pending review queue size per type.
    """
    return admin_dashboard(db, current_user, year=year, campus_id=campus_id)


@router.get("/admin/colleges", response_model=CollegeDashboard)
async def college_dashboard_endpoint(
    campus_id: int = Query(..., description="Campus whose colleges are listed"),
    year: Optional[int] = Query(None, ge=1900, le=9999),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return college_dashboard(db, current_user, campus_id, year=year)


@router.get("/me", response_model=UserDashboard)
async def user_dashboard_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """The caller's own records per type and status, plus the latest few"""
    return user_dashboard(db, current_user)
