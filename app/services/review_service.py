"""
Review state machine for submissions

pending -> approved | rejected   (admin only)
rejected -> pending              (automatic when the owner edits the record)
"""
import logging
from typing import Dict, List, Optional, Tuple, Union

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.core.context import OperationContext, bind_operation_context
from app.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ReviewValidationError,
)
from app.models.audit_log import EntityType
from app.models.mixins import Reviewable, ReviewStatus, model_for, submission_types
from app.models.user import User

logger = logging.getLogger(__name__)

# URL slug -> submission type
SUBMISSION_SLUGS: Dict[str, EntityType] = {
    "tech-transfer": EntityType.TECH_TRANSFER,
    "award": EntityType.AWARD,
    "engagement": EntityType.ENGAGEMENT,
    "modality": EntityType.MODALITY,
    "impact-assessment": EntityType.IMPACT_ASSESSMENT,
}

REVIEW_OUTCOMES = (ReviewStatus.APPROVED, ReviewStatus.REJECTED)

# Attribute shown as the headline of a submission in queues and dashboards
TITLE_FIELDS: Dict[EntityType, str] = {
    EntityType.TECH_TRANSFER: "name",
    EntityType.AWARD: "award_name",
    EntityType.ENGAGEMENT: "activity_conducted",
    EntityType.MODALITY: "modality",
    EntityType.IMPACT_ASSESSMENT: "beneficiary",
}

# Fields that belong to the workflow itself, not to the submitted content
_WORKFLOW_FIELDS = frozenset({"status", "remarks", "is_archived", "owner_id", "created_at", "updated_at"})


def resolve_submission_type(value: Union[str, EntityType]) -> EntityType:
    """Accept either a URL slug or an EntityType value."""
    if value in SUBMISSION_SLUGS:
        return SUBMISSION_SLUGS[value]
    try:
        entity_type = EntityType(value)
    except ValueError:
        raise NotFoundError(f"Unknown submission type '{value}'")
    if entity_type not in submission_types():
        raise NotFoundError(f"Unknown submission type '{value}'")
    return entity_type


def _parse_outcome(new_status) -> ReviewStatus:
    try:
        outcome = ReviewStatus(new_status)
    except ValueError:
        outcome = None
    if outcome not in REVIEW_OUTCOMES:
        raise ReviewValidationError(
            f"Invalid review status '{new_status}'. Must be one of: approved, rejected"
        )
    return outcome


def transition_review(
    db: Session,
    entity_type: EntityType,
    entity_id: int,
    actor: User,
    new_status: Union[str, ReviewStatus],
    remarks: Optional[str] = None,
    ctx: Optional[OperationContext] = None,
) -> Reviewable:
    """
    Approve or reject a pending submission

    Args:
        db: Database session
        entity_type: Submission type
        entity_id: ID of the submission
        actor: Reviewing user; must be an admin
        new_status: "approved" or "rejected"
        remarks: Optional reviewer note, stored as given
        ctx: Operation context recorded with the audit entry

    Returns:
        The updated submission

    Raises:
        AuthorizationError: If actor is not an admin
        ReviewValidationError: If new_status is not a review outcome
        NotFoundError: If the submission does not exist or is archived
        InvalidTransitionError: If the submission is not pending
    """
    if not actor.is_admin:
        raise AuthorizationError("Only administrators can review submissions")
    outcome = _parse_outcome(new_status)
    entity_type = resolve_submission_type(entity_type)
    model = model_for(entity_type)

    bind_operation_context(db, ctx)
    submission = (
        db.query(model)
        .filter(model.id == entity_id)
        .with_for_update()
        .first()
    )
    if submission is None or submission.is_archived:
        db.rollback()
        raise NotFoundError(f"{entity_type.value} {entity_id} not found")
    current = ReviewStatus(submission.status)
    if current != ReviewStatus.PENDING:
        db.rollback()
        raise InvalidTransitionError(
            f"{entity_type.value} {entity_id} is already {current.value}"
        )

    submission.status = outcome
    submission.remarks = remarks
    db.commit()
    db.refresh(submission)

    logger.info(
        "Review: %s %s -> %s by user %s",
        entity_type.value, entity_id, outcome.value, actor.id
    )
    return submission


def has_content_changes(submission: Reviewable) -> bool:
    """True if any non-workflow column has a pending change on the instance."""
    state = inspect(submission)
    for attr in state.mapper.column_attrs:
        if attr.key in _WORKFLOW_FIELDS:
            continue
        if state.attrs[attr.key].history.has_changes():
            return True
    return False


def apply_resubmission(submission: Reviewable, actor: User) -> bool:
    """
    Reset a rejected submission to pending when its owner edits it.

    Call after the edits are applied and before commit, so the reset lands in
    the same write. Returns True if the status was reset.
    """
    if submission.status != ReviewStatus.REJECTED:
        return False
    if submission.owner_id != actor.id:
        return False
    if not has_content_changes(submission):
        return False
    submission.status = ReviewStatus.PENDING
    submission.remarks = None
    logger.info(
        "Resubmission: %s %s returned to pending by owner %s",
        type(submission).__audit_type__.value, submission.id, actor.id
    )
    return True


def list_pending_submissions(
    db: Session,
    actor: User,
    submission_type: Optional[Union[str, EntityType]] = None,
) -> Tuple[List[Tuple[EntityType, Reviewable]], Dict[str, int]]:
    """
    Pending, non-archived submissions across types, newest first

    Returns:
        (list of (entity_type, submission), pending count per type value)
    """
    if not actor.is_admin:
        raise AuthorizationError("Only administrators can view pending submissions")

    types = [resolve_submission_type(submission_type)] if submission_type else submission_types()
    items: List[Tuple[EntityType, Reviewable]] = []
    counts: Dict[str, int] = {}
    for entity_type in types:
        model = model_for(entity_type)
        rows = (
            db.query(model)
            .filter(model.status == ReviewStatus.PENDING, model.is_archived.is_(False))
            .all()
        )
        counts[entity_type.value] = len(rows)
        items.extend((entity_type, row) for row in rows)

    items.sort(key=lambda pair: (pair[1].created_at, pair[1].id), reverse=True)
    return items, counts
