"""
Database models
"""
from app.models.audit_log import AuditLog, AuditAction, EntityType
from app.models.mixins import (
    Auditable,
    OwnedRecord,
    Reviewable,
    ReviewStatus,
    AUDITABLE_MODELS,
    model_for,
    submission_types,
)
from app.models.user import User, Role
from app.models.campus import Campus, College
from app.models.tech_transfer import TechTransfer, Modality, ImpactAssessment, Copyright
from app.models.award import Award
from app.models.engagement import Engagement
from app.models.resolution import Resolution

__all__ = [
    "AuditLog",
    "AuditAction",
    "EntityType",
    "Auditable",
    "OwnedRecord",
    "Reviewable",
    "ReviewStatus",
    "AUDITABLE_MODELS",
    "model_for",
    "submission_types",
    "User",
    "Role",
    "Campus",
    "College",
    "TechTransfer",
    "Modality",
    "ImpactAssessment",
    "Copyright",
    "Award",
    "Engagement",
    "Resolution",
]
