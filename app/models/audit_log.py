"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index
from sqlalchemy.orm import relationship
import enum
from app.db.base import Base


class EntityType(str, enum.Enum):
    """Stable type tags for every audited entity kind"""
    TECH_TRANSFER = "TechTransfer"
    AWARD = "Award"
    ENGAGEMENT = "Engagement"
    MODALITY = "Modality"
    IMPACT_ASSESSMENT = "ImpactAssessment"
    RESOLUTION = "Resolution"
    CAMPUS = "Campus"
    COLLEGE = "College"
    USER = "User"


class AuditAction(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    LOGIN = "login"
    LOGOUT = "logout"
    UPDATE_PASSWORD = "update_password"
    UPDATE_PROFILE = "update_profile"


class AuditLog(Base):
    """
    One immutable record of a create/update/delete or a domain event.

    actor_id and entity_id carry no foreign keys: entries outlive the users
    and entities they reference.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(Integer, nullable=True)
    action = Column(String(50), nullable=False)  # AuditAction value or a free-form verb
    entity_type = Column(String(50), nullable=False)  # EntityType value
    entity_id = Column(Integer, nullable=True)
    before_values = Column(JSON, nullable=False, default=dict)
    after_values = Column(JSON, nullable=False, default=dict)
    origin_address = Column(String(45), nullable=True)
    client_agent = Column(Text, nullable=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)

    actor = relationship(
        "User",
        primaryjoin="foreign(AuditLog.actor_id) == User.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
        Index("ix_audit_logs_actor_id", "actor_id"),
        Index("ix_audit_logs_action", "action"),
        Index("ix_audit_logs_occurred_at", "occurred_at"),
    )

    @property
    def description(self) -> str:
        return f"{(self.action or '').capitalize()} {self.entity_type or 'Unknown'}"
