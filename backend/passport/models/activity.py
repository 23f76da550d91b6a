"""
Modèle SQLAlchemy pour les activités professionnelles saisies par les étudiants.
"""

import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func

from passport.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    mentor_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    activity_type = Column(String(30), nullable=False)  # workshop, project, internship, ...
    date_completed = Column(Date, nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    location = Column(String(255), nullable=True)
    reflection = Column(Text, nullable=True)
    learning_outcomes = Column(Text, nullable=True)
    evidence_url = Column(String(500), nullable=True)

    status = Column(String(20), default="pending")  # pending, verified, rejected
    feedback = Column(Text, nullable=True)
    verified_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    verified_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
