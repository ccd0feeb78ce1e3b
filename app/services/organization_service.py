"""
Organization service - campuses and colleges
"""
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.context import OperationContext, bind_operation_context
from app.core.errors import NotFoundError
from app.models.campus import Campus, College
from app.models.user import User
from app.services.submission_service import reject_required_nulls


def list_campuses(db: Session) -> List[Campus]:
    return db.query(Campus).order_by(Campus.name).all()


def get_campus(db: Session, campus_id: int) -> Campus:
    campus = db.query(Campus).filter(Campus.id == campus_id).first()
    if not campus:
        raise NotFoundError(f"Campus with id {campus_id} not found")
    return campus


def _check_campus_name(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Campus).filter(func.lower(Campus.name) == func.lower(name))
    if exclude_id is not None:
        query = query.filter(Campus.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Campus with name '{name}' already exists"
        )


def create_campus(db: Session, data: Dict[str, Any], ctx: Optional[OperationContext] = None) -> Campus:
    """
    Create a campus

    Raises:
        HTTPException: If campus name already exists (case-insensitive)
    """
    _check_campus_name(db, data["name"])
    bind_operation_context(db, ctx)
    campus = Campus(**data)
    db.add(campus)
    db.commit()
    db.refresh(campus)
    return campus


def update_campus(
    db: Session,
    campus_id: int,
    changes: Dict[str, Any],
    ctx: Optional[OperationContext] = None
) -> Campus:
    campus = get_campus(db, campus_id)
    reject_required_nulls(Campus, changes)
    if changes.get("name"):
        _check_campus_name(db, changes["name"], exclude_id=campus_id)
    for field, value in changes.items():
        setattr(campus, field, value)
    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(campus)
    return campus


def delete_campus(db: Session, campus_id: int, ctx: Optional[OperationContext] = None) -> None:
    campus = get_campus(db, campus_id)
    if campus.colleges:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete a campus that still has colleges"
        )
    bind_operation_context(db, ctx)
    db.delete(campus)
    db.commit()


def list_colleges(db: Session, campus_id: Optional[int] = None) -> List[College]:
    query = db.query(College)
    if campus_id is not None:
        query = query.filter(College.campus_id == campus_id)
    return query.order_by(College.name).all()


def get_college(db: Session, college_id: int) -> College:
    college = db.query(College).filter(College.id == college_id).first()
    if not college:
        raise NotFoundError(f"College with id {college_id} not found")
    return college


def _check_college_code(db: Session, code: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(College).filter(func.lower(College.code) == func.lower(code))
    if exclude_id is not None:
        query = query.filter(College.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"College with code '{code}' already exists"
        )


def create_college(db: Session, data: Dict[str, Any], ctx: Optional[OperationContext] = None) -> College:
    get_campus(db, data["campus_id"])
    _check_college_code(db, data["code"])
    bind_operation_context(db, ctx)
    college = College(**data)
    db.add(college)
    db.commit()
    db.refresh(college)
    return college


def update_college(
    db: Session,
    college_id: int,
    changes: Dict[str, Any],
    ctx: Optional[OperationContext] = None
) -> College:
    college = get_college(db, college_id)
    reject_required_nulls(College, changes)
    if changes.get("campus_id") is not None:
        get_campus(db, changes["campus_id"])
    if changes.get("code"):
        _check_college_code(db, changes["code"], exclude_id=college_id)
    for field, value in changes.items():
        setattr(college, field, value)
    bind_operation_context(db, ctx)
    db.commit()
    db.refresh(college)
    return college


def delete_college(db: Session, college_id: int, ctx: Optional[OperationContext] = None) -> None:
    college = get_college(db, college_id)
    if db.query(User).filter(User.college_id == college_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete a college that still has users"
        )
    bind_operation_context(db, ctx)
    db.delete(college)
    db.commit()
