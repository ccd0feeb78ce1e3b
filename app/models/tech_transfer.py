"""
Tech transfer models: the transfer itself plus its modalities and impact assessments
"""
from sqlalchemy import Column, Integer, String, Text, Date, JSON, ForeignKey
from sqlalchemy.orm import relationship
import enum
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, Reviewable, TimestampMixin


class Copyright(str, enum.Enum):
    YES = "yes"
    NO = "no"
    PENDING = "pending"


class TechTransfer(Auditable, Reviewable, TimestampMixin, Base):
    __tablename__ = "tech_transfers"
    __audit_type__ = EntityType.TECH_TRANSFER

    id = Column(Integer, primary_key=True, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(255), nullable=False)
    purpose = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    tags = Column(String(255), nullable=False)
    leader = Column(String(255), nullable=False)
    deliverables = Column(String(255), nullable=True)
    agency_partner = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(255), nullable=True)
    contact_address = Column(String(255), nullable=True)
    copyright = Column(String(10), nullable=False, default=Copyright.NO.value)
    ip_details = Column(Text, nullable=True)
    attachment_paths = Column(JSON, nullable=True)
    attachment_link = Column(String(255), nullable=True)

    college = relationship("College")
    modalities = relationship("Modality", back_populates="tech_transfer", cascade="all, delete-orphan")
    impact_assessments = relationship(
        "ImpactAssessment", back_populates="tech_transfer", cascade="all, delete-orphan"
    )


class Modality(Auditable, Reviewable, TimestampMixin, Base):
    __tablename__ = "modalities"
    __audit_type__ = EntityType.MODALITY

    id = Column(Integer, primary_key=True, index=True)
    tech_transfer_id = Column(Integer, ForeignKey("tech_transfers.id"), nullable=False, index=True)
    modality = Column(String(255), nullable=False)
    tv_channel = Column(String(255), nullable=True)
    radio = Column(String(255), nullable=True)
    online_link = Column(String(255), nullable=True)
    time_air = Column(String(255), nullable=True)
    period = Column(String(255), nullable=True)
    partner_agency = Column(String(255), nullable=True)
    hosted_by = Column(String(255), nullable=True)

    tech_transfer = relationship("TechTransfer", back_populates="modalities")


class ImpactAssessment(Auditable, Reviewable, TimestampMixin, Base):
    __tablename__ = "impact_assessments"
    __audit_type__ = EntityType.IMPACT_ASSESSMENT

    id = Column(Integer, primary_key=True, index=True)
    tech_transfer_id = Column(Integer, ForeignKey("tech_transfers.id"), nullable=False, index=True)
    beneficiary = Column(String(255), nullable=False)
    geographic_coverage = Column(String(255), nullable=False)
    num_direct_beneficiary = Column(Integer, nullable=False, default=0)
    num_indirect_beneficiary = Column(Integer, nullable=False, default=0)

    tech_transfer = relationship("TechTransfer", back_populates="impact_assessments")
