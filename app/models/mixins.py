"""
Capability mixins shared by otherwise unrelated models.

- Auditable: opts a model into the audit trail under a fixed EntityType tag
- OwnedRecord: owner + soft-delete (archive) flag
- Reviewable: OwnedRecord plus the pending/approved/rejected workflow
"""
from typing import ClassVar, Dict, FrozenSet, Optional, Type
import enum

from sqlalchemy import Column, Integer, Boolean, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import declared_attr, relationship

from app.models.audit_log import EntityType
from app.utils.datetime_utils import now_utc

DEFAULT_AUDIT_EXCLUDE: FrozenSet[str] = frozenset({"created_at", "updated_at"})

# EntityType -> mapped class, filled as model modules are imported
AUDITABLE_MODELS: Dict[EntityType, Type["Auditable"]] = {}


class ReviewStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Auditable:
    __audit_type__: ClassVar[Optional[EntityType]] = None
    __audit_exclude__: ClassVar[FrozenSet[str]] = DEFAULT_AUDIT_EXCLUDE

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        audit_type = cls.__dict__.get("__audit_type__")
        if audit_type is None:
            return
        if not isinstance(audit_type, EntityType):
            raise TypeError(
                f"{cls.__name__}.__audit_type__ must be an EntityType member, got {audit_type!r}"
            )
        AUDITABLE_MODELS[audit_type] = cls


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)


class OwnedRecord:
    is_archived = Column(Boolean, nullable=False, default=False)

    @declared_attr
    def owner_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    @declared_attr
    def owner(cls):
        return relationship("User")


class Reviewable(OwnedRecord):
    status = Column(
        SQLEnum(
            ReviewStatus,
            name="review_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ReviewStatus.PENDING,
    )
    remarks = Column(Text, nullable=True)


def model_for(entity_type: EntityType) -> Type[Auditable]:
    """Resolve a type tag to its model class."""
    try:
        return AUDITABLE_MODELS[EntityType(entity_type)]
    except (KeyError, ValueError):
        raise LookupError(f"No audited model registered for {entity_type!r}")


def submission_types() -> list:
    """EntityTypes whose models carry the review workflow, in declaration order."""
    return [t for t in EntityType if issubclass(AUDITABLE_MODELS.get(t, object), Reviewable)]
