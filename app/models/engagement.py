"""
Engagement model
"""
from sqlalchemy import Column, Integer, String, Text, Date, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, Reviewable, TimestampMixin


class Engagement(Auditable, Reviewable, TimestampMixin, Base):
    __tablename__ = "engagements"
    __audit_type__ = EntityType.ENGAGEMENT

    id = Column(Integer, primary_key=True, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=True, index=True)
    agency_partner = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    activity_conducted = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    number_of_participants = Column(Integer, nullable=False, default=0)
    faculty_involved = Column(String(255), nullable=False)
    narrative = Column(Text, nullable=False)
    attachment_paths = Column(JSON, nullable=True)
    attachment_link = Column(String(255), nullable=True)

    college = relationship("College")
