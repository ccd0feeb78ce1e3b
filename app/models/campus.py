"""
Campus and college models
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.audit_log import EntityType
from app.models.mixins import Auditable, TimestampMixin


class Campus(Auditable, TimestampMixin, Base):
    __tablename__ = "campuses"
    __audit_type__ = EntityType.CAMPUS

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    logo = Column(String, nullable=True)

    colleges = relationship("College", back_populates="campus")


class College(Auditable, TimestampMixin, Base):
    __tablename__ = "colleges"
    __audit_type__ = EntityType.COLLEGE

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    logo = Column(String, nullable=True)
    campus_id = Column(Integer, ForeignKey("campuses.id"), nullable=False, index=True)

    campus = relationship("Campus", back_populates="colleges")
    users = relationship("User", back_populates="college")
