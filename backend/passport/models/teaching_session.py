"""
Modèle SQLAlchemy pour les séances d'enseignement réalisées par les étudiants.
Nommé teaching_session pour éviter la confusion avec la Session SQLAlchemy.
"""

import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func

from passport.database import Base


class TeachingSession(Base):
    __tablename__ = "teaching_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    location = Column(String(255), nullable=True)
    session_type = Column(String(20), nullable=False)  # classroom, online, one-on-one, group, other
    learner_age_group = Column(String(50), nullable=True)
    subject = Column(String(255), nullable=True)
    objectives = Column(Text, nullable=True)
    reflection = Column(Text, nullable=True)
    status = Column(String(20), default="planned")  # planned, completed, cancelled

    verification_status = Column(String(20), default="pending")  # pending, verified, rejected
    feedback = Column(Text, nullable=True)
    verified_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    verified_at = Column(DateTime, nullable=True)
    assigned_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
