"""
Visibility policy - which submissions an actor may see in listings and detail views
"""
import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.audit_log import EntityType
from app.models.campus import College
from app.models.mixins import OwnedRecord, Reviewable, ReviewStatus, model_for
from app.models.tech_transfer import TechTransfer
from app.models.user import User


class ViewKind(str, enum.Enum):
    PERSONAL = "personal"  # an actor's own submissions, e.g. /my
    SHARED = "shared"      # general listings and reports


APPROVED_ONLY = frozenset({ReviewStatus.APPROVED})


@dataclass(frozen=True)
class VisibilityRule:
    """
    Statuses visible per audience. None means any status.

    Personal views and non-admin actors are limited to the actor's own
    records; archived records are never visible.
    """
    admin_statuses: Optional[FrozenSet[ReviewStatus]] = APPROVED_ONLY
    owner_personal_statuses: Optional[FrozenSet[ReviewStatus]] = None
    owner_shared_statuses: Optional[FrozenSet[ReviewStatus]] = APPROVED_ONLY


DEFAULT_RULE = VisibilityRule()

VISIBILITY_RULES: Dict[EntityType, VisibilityRule] = {
    EntityType.TECH_TRANSFER: DEFAULT_RULE,
    EntityType.AWARD: DEFAULT_RULE,
    EntityType.ENGAGEMENT: DEFAULT_RULE,
    EntityType.MODALITY: DEFAULT_RULE,
    EntityType.IMPACT_ASSESSMENT: DEFAULT_RULE,
}


def rule_for(entity_type: EntityType) -> VisibilityRule:
    return VISIBILITY_RULES.get(EntityType(entity_type), DEFAULT_RULE)


def _allowed_statuses(rule: VisibilityRule, actor: User, view_kind: ViewKind):
    if ViewKind(view_kind) == ViewKind.PERSONAL:
        return rule.owner_personal_statuses
    if actor.is_admin:
        return rule.admin_statuses
    return rule.owner_shared_statuses


def visibility_criteria(model, actor: User, view_kind: ViewKind, rule: Optional[VisibilityRule] = None) -> list:
    """SQLAlchemy filter clauses implementing the rule for model."""
    rule = rule or rule_for(model.__audit_type__)
    criteria = [model.is_archived.is_(False)]
    # the personal view is the actor's own records, admins included
    if not actor.is_admin or ViewKind(view_kind) == ViewKind.PERSONAL:
        criteria.append(model.owner_id == actor.id)
    statuses = _allowed_statuses(rule, actor, view_kind)
    if statuses is not None and issubclass(model, Reviewable):
        criteria.append(model.status.in_(sorted(statuses, key=lambda s: s.value)))
    return criteria


def _scope_to_organization(query, model, college_id: Optional[int], campus_id: Optional[int]):
    if college_id is None and campus_id is None:
        return query
    if hasattr(model, "college_id"):
        college_col = model.college_id
    else:
        # modalities and impact assessments hang off a tech transfer
        query = query.join(TechTransfer, model.tech_transfer_id == TechTransfer.id)
        college_col = TechTransfer.college_id
    if college_id is not None:
        query = query.filter(college_col == college_id)
    if campus_id is not None:
        query = query.join(College, college_col == College.id).filter(College.campus_id == campus_id)
    return query


def visible_query(
    db: Session,
    entity_type: EntityType,
    actor: User,
    view_kind: ViewKind = ViewKind.SHARED,
    college_id: Optional[int] = None,
    campus_id: Optional[int] = None,
):
    model = model_for(entity_type)
    query = db.query(model).filter(*visibility_criteria(model, actor, view_kind))
    return _scope_to_organization(query, model, college_id, campus_id)


def visible_submissions(
    db: Session,
    entity_type: EntityType,
    actor: User,
    view_kind: ViewKind = ViewKind.SHARED,
    college_id: Optional[int] = None,
    campus_id: Optional[int] = None,
) -> List[OwnedRecord]:
    """
    Submissions of one type visible to actor, newest first

    Personal view: the actor's own records in any status. Shared view:
    every approved record for admins, the actor's own approved records
    for everyone else.
    """
    model = model_for(entity_type)
    query = visible_query(db, entity_type, actor, view_kind, college_id, campus_id)
    return query.order_by(model.created_at.desc(), model.id.desc()).all()


def ensure_visible(entity: Optional[OwnedRecord], actor: User, label: str = "Record") -> OwnedRecord:
    """
    Detail-view guard. Missing, archived and other users' records all look
    the same to the caller.
    """
    if entity is None or entity.is_archived:
        raise NotFoundError(f"{label} not found")
    if not actor.is_admin and entity.owner_id != actor.id:
        raise NotFoundError(f"{label} not found")
    return entity
