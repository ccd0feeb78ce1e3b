"""
Report endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.models.mixins import submission_types
from app.models.user import User
from app.services.visibility_service import ViewKind, visible_query

router = APIRouter()


@router.get("/summary")
async def report_summary_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Approved submission counts per type

    Admins count every approved record; other users count their own
    approved records only.
    """
    counts = {
        entity_type.value: visible_query(db, entity_type, current_user, ViewKind.SHARED).count()
        for entity_type in submission_types()
    }
    return {"counts": counts, "total": sum(counts.values())}
