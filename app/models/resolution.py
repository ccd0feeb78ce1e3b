"""
Resolution model (owned and archivable, outside the review workflow)
"""
from sqlalchemy import Column, Integer, String, Date, JSON
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, OwnedRecord, TimestampMixin


class Resolution(Auditable, OwnedRecord, TimestampMixin, Base):
    __tablename__ = "resolutions"
    __audit_type__ = EntityType.RESOLUTION

    id = Column(Integer, primary_key=True, index=True)
    resolution_number = Column(String(255), unique=True, nullable=False)
    effectivity = Column(Date, nullable=False)
    expiration = Column(Date, nullable=False)
    contact_person = Column(String(255), nullable=False)
    contact_number_email = Column(String(255), nullable=False)
    partner_agency = Column(String(255), nullable=False)
    attachment_paths = Column(JSON, nullable=True)
    attachment_link = Column(String(255), nullable=True)
