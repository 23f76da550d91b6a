"""
Modèle SQLAlchemy pour les qualifications (diplômes, certificats, licences).
"""

import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Uuid, func

from passport.database import Base


class Qualification(Base):
    __tablename__ = "qualifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    issuing_organization = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date_obtained = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=True)
    certificate_url = Column(String(500), nullable=True)
    qualification_type = Column(String(20), nullable=False)  # degree, certificate, license, course, other

    verification_status = Column(String(20), default="pending")  # pending, verified, rejected
    feedback = Column(Text, nullable=True)
    verified_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    verified_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
