"""
Modèle SQLAlchemy pour les CV générés par les étudiants.
"""

import uuid
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Uuid, func

from passport.database import Base


class StudentCV(Base):
    __tablename__ = "student_cvs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    content = Column(JSON, nullable=False, default=dict)  # personal, education, experience, skills
    html_content = Column(Text, nullable=True)
    ats_score = Column(Integer, default=0)
    is_draft = Column(Boolean, default=True)
    last_generated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
