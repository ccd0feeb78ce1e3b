"""
Award model
"""
from sqlalchemy import Column, Integer, String, Text, Date, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, Reviewable, TimestampMixin


class Award(Auditable, Reviewable, TimestampMixin, Base):
    __tablename__ = "awards"
    __audit_type__ = EntityType.AWARD

    id = Column(Integer, primary_key=True, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=True, index=True)
    award_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date_received = Column(Date, nullable=False)
    event_details = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    awarding_body = Column(String(255), nullable=False)
    people_involved = Column(String(255), nullable=False)
    attachment_paths = Column(JSON, nullable=True)
    attachment_link = Column(String(255), nullable=True)

    college = relationship("College")
